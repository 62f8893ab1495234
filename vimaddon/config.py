"""Installer configuration."""

import shlex
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ConfigError
from .models import ManifestKind

DEFAULT_SUBSTVAR = "vim-addon:Depends"
DEFAULT_JOBS = 4


def parse_kinds(suffixes: list[str]) -> frozenset[ManifestKind]:
    """Turn manifest suffixes such as ``vim-opt-addon`` into kinds.

    Raises:
        ConfigError: If a suffix is unknown
    """
    kinds = set()
    for suffix in suffixes:
        try:
            kinds.add(ManifestKind.from_suffix(suffix))
        except ValueError:
            known = ", ".join(k.suffix for k in ManifestKind)
            raise ConfigError(f"Unknown manifest kind {suffix!r} (expected one of: {known})")
    return frozenset(kinds)


@dataclass
class InstallerConfig:
    """Settings for one installer run."""

    debian_dir: Path = Path("debian")
    packages: list[str] = field(default_factory=list)
    excluded_packages: list[str] = field(default_factory=list)
    skipped_kinds: frozenset[ManifestKind] = frozenset()
    helptags: bool = True
    helptags_command: str = "helpztags"
    jobs: int = DEFAULT_JOBS
    substvar: str = DEFAULT_SUBSTVAR

    def helptags_argv(self) -> list[str]:
        return shlex.split(self.helptags_command)

    def validate(self) -> "InstallerConfig":
        """Check option values, returning self.

        Raises:
            ConfigError: On the first invalid setting
        """
        if not self.debian_dir.is_dir():
            raise ConfigError(f"Debian directory {self.debian_dir} not found")
        if self.jobs < 1:
            raise ConfigError("jobs must be at least 1")
        if not self.substvar or "=" in self.substvar:
            raise ConfigError(f"Invalid substitution variable name {self.substvar!r}")
        if self.helptags and not self.helptags_argv():
            raise ConfigError("Empty help-tags command")
        return self
