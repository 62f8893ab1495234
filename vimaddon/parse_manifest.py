"""Addon manifest parsing."""

import re
from pathlib import PurePosixPath

from .errors import ManifestParseError
from .models import AddonEntry, Manifest, ManifestKind


class ManifestParser:
    """Parser for ``<package>.<kind>`` addon manifests."""

    def __init__(self, kind: ManifestKind, filename: str | None = None):
        self.kind = kind
        self.filename = filename
        # Patterns for lines to skip
        self.skip_patterns = [
            r"^\s*#",  # Comment lines
            r"^\s*$",  # Empty lines
        ]

    def _should_skip_line(self, line: str) -> bool:
        """Check if a line should be skipped during parsing."""
        return any(re.match(pattern, line) for pattern in self.skip_patterns)

    def _error(self, line_number: int, line: str, reason: str) -> ManifestParseError:
        return ManifestParseError(self.filename, line_number, line, reason)

    def _parse_line(self, line: str, line_number: int) -> AddonEntry:
        """Parse a single ``<path> [<name>]`` line."""
        fields = line.split()
        if len(fields) > 2:
            raise self._error(line_number, line, "expected '<path> [<name>]'")

        # Paths are always relative to the package root
        raw_path = fields[0].lstrip("/")
        if not raw_path:
            raise self._error(line_number, line, "empty source path")

        path = PurePosixPath(raw_path)
        if ".." in path.parts:
            raise self._error(line_number, line, "source path leaves the package tree")
        if not path.name:
            raise self._error(line_number, line, "source path has no directory name")

        name = fields[1] if len(fields) == 2 else None
        if name is not None and ("/" in name or name in (".", "..")):
            raise self._error(line_number, line, f"invalid addon name {name!r}")

        return AddonEntry(source_relpath=str(path), explicit_name=name, line_number=line_number)

    def parse(self, content: str | None) -> Manifest:
        """Parse manifest content; ``None`` means the file does not exist."""
        if content is None:
            return Manifest(kind=self.kind, raw="", entries=[], filename=self.filename)

        entries: list[AddonEntry] = []
        for line_number, line in enumerate(content.splitlines(), start=1):
            if self._should_skip_line(line):
                continue
            entries.append(self._parse_line(line, line_number))

        return Manifest(kind=self.kind, raw=content, entries=entries, filename=self.filename)


def parse_manifest(
    content: str | None, kind: ManifestKind, filename: str | None = None
) -> Manifest:
    """Parse addon manifest content into a Manifest.

    Args:
        content: The manifest file content, or None when there is no file
        kind: Which manifest kind the content belongs to
        filename: Optional filename used in error messages

    Returns:
        Parsed Manifest object

    Raises:
        ManifestParseError: If a line is malformed
    """
    parser = ManifestParser(kind, filename)
    return parser.parse(content)
