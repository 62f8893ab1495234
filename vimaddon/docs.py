"""Collection of addon documentation directories for help-tag generation."""

import threading
from pathlib import Path

from .models import ResolvedAddon


class DocCollector:
    """Set of ``doc`` directories shared by all package workers."""

    def __init__(self):
        self._dirs: set[Path] = set()
        self._lock = threading.Lock()

    def add(self, path: Path) -> None:
        with self._lock:
            self._dirs.add(path)

    def collect(self, addon: ResolvedAddon) -> Path | None:
        """Record the addon's ``doc`` directory if it has one."""
        doc_dir = addon.source_dir / "doc"
        if not doc_dir.is_dir():
            return None
        self.add(doc_dir)
        return doc_dir

    def sorted_dirs(self) -> list[Path]:
        with self._lock:
            return sorted(self._dirs)
