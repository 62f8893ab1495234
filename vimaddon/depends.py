"""Editor dependency computation."""

from .models import EditorFamily

# First editor versions able to load native packages from the dist-bundle paths
MINIMUM_VERSIONS: dict[EditorFamily, str] = {
    EditorFamily.VIM: "2:8.1.0693-2~",
    EditorFamily.NEOVIM: "0.2.2-1~",
}


class DependencyRecord:
    """Editor families one package needs, with their minimum versions."""

    def __init__(self, minimum_versions: dict[EditorFamily, str] | None = None):
        self.minimum_versions = minimum_versions or MINIMUM_VERSIONS
        self._families: dict[EditorFamily, str] = {}

    def record(self, family: EditorFamily) -> None:
        self._families[family] = self.minimum_versions[family]

    def __bool__(self) -> bool:
        return bool(self._families)

    def render(self) -> str | None:
        """Render the alternatives as ``name (>= version)`` joined by ``|``.

        Returns:
            The dependency expression, vim before neovim, or None when no
            family was recorded
        """
        terms = [
            f"{family.value} (>= {self._families[family]})"
            for family in EditorFamily
            if family in self._families
        ]
        return "|".join(terms) if terms else None
