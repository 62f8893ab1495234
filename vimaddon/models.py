"""Core data models for the vim addon installer."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path, PurePosixPath


class EditorFamily(str, Enum):
    """Editor ecosystem an addon is installed for.

    Member order is the order dependency terms are rendered in.
    """

    VIM = "vim"
    NEOVIM = "neovim"


@dataclass(frozen=True)
class KindConfig:
    """Fixed settings for one manifest kind."""

    suffix: str
    destination_root: PurePosixPath
    family: EditorFamily


class ManifestKind(Enum):
    """The four manifest kinds and where their addons end up."""

    VIM_START = KindConfig(
        "vim-addon",
        PurePosixPath("usr/share/vim/vimfiles/pack/dist-bundle/start"),
        EditorFamily.VIM,
    )
    VIM_OPT = KindConfig(
        "vim-opt-addon",
        PurePosixPath("usr/share/vim/vimfiles/pack/dist-bundle/opt"),
        EditorFamily.VIM,
    )
    NEOVIM_START = KindConfig(
        "neovim-addon",
        PurePosixPath("usr/share/nvim/site/pack/dist-bundle/start"),
        EditorFamily.NEOVIM,
    )
    NEOVIM_OPT = KindConfig(
        "neovim-opt-addon",
        PurePosixPath("usr/share/nvim/site/pack/dist-bundle/opt"),
        EditorFamily.NEOVIM,
    )

    @property
    def suffix(self) -> str:
        return self.value.suffix

    @property
    def destination_root(self) -> PurePosixPath:
        return self.value.destination_root

    @property
    def family(self) -> EditorFamily:
        return self.value.family

    @classmethod
    def from_suffix(cls, suffix: str) -> "ManifestKind":
        """Look up a kind by its manifest filename suffix.

        Raises:
            ValueError: If no kind uses the suffix
        """
        for kind in cls:
            if kind.suffix == suffix:
                return kind
        raise ValueError(f"Unknown manifest kind: {suffix}")


@dataclass
class AddonEntry:
    """A single line of a manifest file."""

    source_relpath: str
    explicit_name: str | None = None
    line_number: int = 0


@dataclass
class Manifest:
    """A parsed addon manifest."""

    kind: ManifestKind
    raw: str
    entries: list[AddonEntry]
    filename: str | None = None


@dataclass
class ManifestSource:
    """Raw manifest file as handed over by the build system."""

    filename: str
    content: str


@dataclass
class ResolvedAddon:
    """An addon whose source directory exists and whose link path is known."""

    kind: ManifestKind
    source_relpath: str
    resolved_name: str
    destination_path: PurePosixPath  # relative to the staged tree
    source_dir: Path


@dataclass(frozen=True)
class Package:
    """A binary package being built and its staged directory."""

    name: str
    staged_dir: Path


@dataclass
class PackageResult:
    """Outcome of processing one package."""

    package: Package
    installed: list[ResolvedAddon] = field(default_factory=list)
    doc_dirs: list[Path] = field(default_factory=list)
    dependency: str | None = None
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors


@dataclass
class RunReport:
    """Summary of a whole installer run."""

    results: list[PackageResult] = field(default_factory=list)
    doc_dirs: list[Path] = field(default_factory=list)
    helptags_generated: bool = False

    @property
    def failed(self) -> list[PackageResult]:
        return [r for r in self.results if not r.success]

    @property
    def success(self) -> bool:
        return not self.failed
