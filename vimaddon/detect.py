"""Manifest file detection in a debian directory."""

from pathlib import Path

from .models import ManifestKind


def identify(filename: str) -> tuple[str | None, ManifestKind] | None:
    """Detect package and manifest kind from a manifest filename.

    ``foo.vim-opt-addon`` names package ``foo``; a bare ``vim-addon`` belongs
    to the main package and yields ``None`` as package name.

    Args:
        filename: The manifest file name (directories are ignored)

    Returns:
        ``(package, kind)`` or None if the name is not an addon manifest
    """
    name = Path(filename).name

    # Bare suffix (main package form)
    try:
        return None, ManifestKind.from_suffix(name)
    except ValueError:
        pass

    package, dot, suffix = name.rpartition(".")
    if not dot or not package:
        return None
    try:
        return package, ManifestKind.from_suffix(suffix)
    except ValueError:
        return None


def find_manifests(debian_dir: Path) -> list[tuple[Path, str | None, ManifestKind]]:
    """List addon manifests present in ``debian_dir``, sorted by filename."""
    found = []
    if not debian_dir.is_dir():
        return found
    for path in sorted(debian_dir.iterdir()):
        if not path.is_file():
            continue
        detected = identify(path.name)
        if detected:
            package, kind = detected
            found.append((path, package, kind))
    return found
