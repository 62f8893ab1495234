"""Resolution of manifest entries against a staged package tree."""

from pathlib import Path, PurePosixPath

from .errors import MissingDirectoryError
from .logging import get_logger
from .models import AddonEntry, Manifest, ResolvedAddon

logger = get_logger("resolve")


class AddonResolver:
    """Resolver for the addons listed in one package's manifests."""

    def __init__(self, staged_dir: Path, package: str | None = None):
        """Initialize addon resolver.

        Args:
            staged_dir: Root of the package's staged build tree
            package: Package name used in error reports
        """
        self.staged_dir = staged_dir
        self.package = package

    def source_dir(self, entry: AddonEntry) -> Path:
        return self.staged_dir / entry.source_relpath

    def resolve(self, manifest: Manifest) -> list[ResolvedAddon]:
        """Validate and resolve every entry of a manifest.

        All entries are checked before anything is reported, so one error
        names every missing directory of the manifest.

        Args:
            manifest: Parsed manifest

        Returns:
            Resolved addons in manifest order

        Raises:
            MissingDirectoryError: If any entry's directory does not exist
        """
        found: list[AddonEntry] = []
        missing: list[str] = []
        for entry in manifest.entries:
            if self.source_dir(entry).is_dir():
                found.append(entry)
            else:
                missing.append(entry.source_relpath)

        if missing:
            raise MissingDirectoryError(manifest.kind, missing, self.package)

        resolved: dict[str, ResolvedAddon] = {}
        for entry in found:
            name = entry.explicit_name or PurePosixPath(entry.source_relpath).name
            if name in resolved:
                logger.warning(
                    "%s: %s addon %r listed more than once, %s replaces %s",
                    self.package or self.staged_dir,
                    manifest.kind.suffix,
                    name,
                    entry.source_relpath,
                    resolved[name].source_relpath,
                )
            resolved[name] = ResolvedAddon(
                kind=manifest.kind,
                source_relpath=entry.source_relpath,
                resolved_name=name,
                destination_path=manifest.kind.destination_root / name,
                source_dir=self.source_dir(entry),
            )

        return list(resolved.values())
