"""Exceptions raised by the vim addon installer."""

from pathlib import Path

from .models import ManifestKind


class VimAddonError(Exception):
    """Base class for all installer errors."""


class ConfigError(VimAddonError):
    """Raised when options or build metadata are unusable."""


class PackageError(VimAddonError):
    """Error that is fatal for a single package only."""

    def __init__(self, message: str, package: str | None = None):
        self.package = package
        super().__init__(message)


class ManifestParseError(PackageError):
    """A manifest line could not be parsed."""

    def __init__(
        self,
        filename: str | None,
        line_number: int,
        line: str,
        reason: str,
        package: str | None = None,
    ):
        self.filename = filename
        self.line_number = line_number
        self.line = line
        self.reason = reason
        location = f"{filename or '<manifest>'}:{line_number}"
        super().__init__(f"{location}: {reason}: {line.strip()!r}", package)


class ManifestReadError(PackageError):
    """A manifest file exists but cannot be read as UTF-8 text."""

    def __init__(self, filename: str, reason: str, package: str | None = None):
        self.filename = filename
        self.reason = reason
        super().__init__(f"Cannot read {filename}: {reason}", package)


class MissingDirectoryError(PackageError):
    """Manifest entries name directories absent from the staged tree."""

    def __init__(self, kind: ManifestKind, missing: list[str], package: str | None = None):
        self.kind = kind
        self.missing = list(missing)
        listing = ", ".join(self.missing)
        super().__init__(
            f"{len(self.missing)} {kind.suffix} director{'y' if len(self.missing) == 1 else 'ies'} "
            f"missing from the package tree: {listing}",
            package,
        )


class InstallConflictError(PackageError):
    """The link location is taken by something else."""

    def __init__(self, link_path: Path, reason: str, package: str | None = None):
        self.link_path = link_path
        super().__init__(f"Cannot install {link_path}: {reason}", package)


class CollaboratorError(VimAddonError):
    """A build-system collaborator failed; fatal for the whole run.

    When raised from a run, ``report`` holds the per-package results
    gathered before the run was aborted.
    """

    report = None


class DependencyWriteError(CollaboratorError):
    """Writing package build metadata failed."""


class TagGenerationError(CollaboratorError):
    """The help-tag generator could not be run or reported failure."""
