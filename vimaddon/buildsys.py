"""Build-system collaborators: package enumeration and build metadata."""

from pathlib import Path
from typing import Protocol

from debian.deb822 import Deb822

from .detect import find_manifests
from .errors import ConfigError, DependencyWriteError, ManifestReadError
from .logging import get_logger
from .models import ManifestKind, ManifestSource, Package

logger = get_logger("buildsys")

TOOL_NAME = "dh_vim-addon"


class BuildSystem(Protocol):
    """What the orchestrator needs from the surrounding build."""

    def get_packages(self) -> list[Package]: ...

    def read_manifest(self, package: Package, kind: ManifestKind) -> ManifestSource | None: ...

    def is_kind_enabled(self, package: Package, kind: ManifestKind) -> bool: ...

    def record_dependency(self, package: Package, constraint: str) -> None: ...

    def mark_processed(self, package: Package) -> None: ...


def read_control_packages(control_file: Path) -> list[str]:
    """Return binary package names from a debian/control file, in order.

    Raises:
        ConfigError: If the file cannot be read
    """
    names = []
    try:
        with control_file.open("rb") as fh:
            for paragraph in Deb822.iter_paragraphs(fh, use_apt_pkg=False):
                # The source stanza carries no Package field.
                if "Package" in paragraph:
                    names.append(paragraph["Package"])
    except OSError as e:
        raise ConfigError(f"Cannot read {control_file}: {e}")
    return names


class DebianBuildSystem:
    """BuildSystem backed by a debhelper-style ``debian/`` directory."""

    def __init__(
        self,
        debian_dir: Path,
        packages: list[str] | None = None,
        excluded_packages: list[str] | None = None,
        skipped_kinds: frozenset[ManifestKind] = frozenset(),
        substvar: str = "vim-addon:Depends",
    ):
        """Initialize Debian build system.

        Args:
            debian_dir: The package's debian directory
            packages: Restrict processing to these packages
            excluded_packages: Packages never to process
            skipped_kinds: Manifest kinds to ignore for every package
            substvar: Substitution variable receiving the dependency
        """
        self.debian_dir = debian_dir.absolute()
        self.selected = list(packages or [])
        self.excluded = set(excluded_packages or [])
        self.skipped_kinds = skipped_kinds
        self.substvar = substvar
        self._all_packages: list[str] | None = None

    @property
    def all_packages(self) -> list[str]:
        if self._all_packages is None:
            self._all_packages = read_control_packages(self.debian_dir / "control")
        return self._all_packages

    @property
    def main_package(self) -> str | None:
        return self.all_packages[0] if self.all_packages else None

    def get_packages(self) -> list[Package]:
        """Packages to process, in debian/control order.

        Raises:
            ConfigError: If a selected package is not in debian/control
        """
        known = self.all_packages
        unknown = [name for name in self.selected if name not in known]
        if unknown:
            raise ConfigError(f"Unknown package(s) requested: {', '.join(unknown)}")

        self._warn_stray_manifests(known)

        names = [
            name
            for name in known
            if (not self.selected or name in self.selected) and name not in self.excluded
        ]
        return [Package(name=name, staged_dir=self.debian_dir / name) for name in names]

    def _warn_stray_manifests(self, known: list[str]) -> None:
        for path, package, _kind in find_manifests(self.debian_dir):
            if package is not None and package not in known:
                logger.warning("%s names package %s, which is not in debian/control", path.name, package)

    def manifest_path(self, package: Package, kind: ManifestKind) -> Path | None:
        """Locate the manifest file, if any, for ``package`` and ``kind``."""
        candidate = self.debian_dir / f"{package.name}.{kind.suffix}"
        if candidate.is_file():
            return candidate
        if package.name == self.main_package:
            candidate = self.debian_dir / kind.suffix
            if candidate.is_file():
                return candidate
        return None

    def read_manifest(self, package: Package, kind: ManifestKind) -> ManifestSource | None:
        path = self.manifest_path(package, kind)
        if path is None:
            return None
        filename = str(path.relative_to(self.debian_dir.parent))
        try:
            content = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise ManifestReadError(filename, f"not valid UTF-8 ({e.reason} at byte {e.start})", package.name)
        except OSError as e:
            raise ManifestReadError(filename, e.strerror or str(e), package.name)
        return ManifestSource(filename=filename, content=content)

    def is_kind_enabled(self, package: Package, kind: ManifestKind) -> bool:
        return kind not in self.skipped_kinds

    def record_dependency(self, package: Package, constraint: str) -> None:
        """Store ``constraint`` in the package's substvars file.

        An earlier value of the same variable is replaced; other
        variables are kept.

        Raises:
            DependencyWriteError: If the file cannot be read or written
        """
        substvars = self.debian_dir / f"{package.name}.substvars"
        prefix = f"{self.substvar}="
        try:
            lines = substvars.read_text(encoding="utf-8").splitlines() if substvars.exists() else []
            lines = [line for line in lines if not line.startswith(prefix)]
            lines.append(f"{prefix}{constraint}")
            substvars.write_text("\n".join(lines) + "\n", encoding="utf-8")
        except OSError as e:
            raise DependencyWriteError(f"Cannot update {substvars}: {e}") from e
        logger.debug("%s: %s%s", package.name, prefix, constraint)

    def mark_processed(self, package: Package) -> None:
        """Note in the package's debhelper log that this tool ran.

        Raises:
            DependencyWriteError: If the log cannot be updated
        """
        log_file = self.debian_dir / f"{package.name}.debhelper.log"
        try:
            entries = log_file.read_text(encoding="utf-8").splitlines() if log_file.exists() else []
            if TOOL_NAME in entries:
                return
            with log_file.open("a", encoding="utf-8") as fh:
                fh.write(f"{TOOL_NAME}\n")
        except OSError as e:
            raise DependencyWriteError(f"Cannot update {log_file}: {e}") from e
