"""Relative symlink installation into the editor package hierarchy."""

import os
from pathlib import Path

from .errors import InstallConflictError
from .logging import get_logger
from .models import ResolvedAddon

logger = get_logger("install")


def make_relative_symlink(link_path: Path, target: Path) -> bool:
    """Create ``link_path`` pointing at ``target`` through a relative path.

    Args:
        link_path: Absolute location of the link
        target: Absolute path the link should reach

    Returns:
        True if the link was created, False if it was already in place

    Raises:
        InstallConflictError: If something else occupies ``link_path`` or
            the link cannot be created
    """
    try:
        link_path.parent.mkdir(parents=True, exist_ok=True)
    except (FileExistsError, NotADirectoryError) as e:
        raise InstallConflictError(link_path, "parent is not a directory") from e
    except OSError as e:
        raise InstallConflictError(link_path, f"cannot create parent directory ({e.strerror})") from e

    relative_target = os.path.relpath(target, link_path.parent)

    if link_path.is_symlink():
        current = os.readlink(link_path)
        if current == relative_target:
            return False
        raise InstallConflictError(link_path, f"already a symlink to {current}")
    if link_path.exists():
        raise InstallConflictError(link_path, "already exists and is not a symlink")

    try:
        os.symlink(relative_target, link_path)
    except OSError as e:
        raise InstallConflictError(link_path, f"cannot create symlink ({e.strerror})") from e
    return True


class SymlinkInstaller:
    """Installs resolved addons into one package's staged tree."""

    def __init__(self, staged_dir: Path, package: str | None = None):
        self.staged_dir = staged_dir
        self.package = package

    def link_path(self, addon: ResolvedAddon) -> Path:
        return self.staged_dir / addon.destination_path

    def install(self, addon: ResolvedAddon) -> bool:
        """Link ``addon`` into place; False when nothing had to change."""
        link_path = self.link_path(addon)
        try:
            created = make_relative_symlink(link_path, addon.source_dir)
        except InstallConflictError as e:
            e.package = self.package
            raise

        if created:
            logger.debug("Linked %s -> %s", link_path, addon.source_relpath)
        else:
            logger.debug("Link %s already in place", link_path)
        return created
