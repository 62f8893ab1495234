"""Pytest configuration and fixtures."""


import pytest


@pytest.fixture
def sample_manifest():
    """Sample vim-addon manifest content for testing."""
    return """# Main plugin
usr/share/vim-foo

usr/share/vim-foo/contrib foo-contrib
"""


@pytest.fixture
def make_addon():
    """Create an addon directory, optionally with a doc/ subdirectory."""

    def _make(staged_dir, relpath, doc=False):
        addon = staged_dir / relpath
        (addon / "plugin").mkdir(parents=True, exist_ok=True)
        (addon / "plugin" / "main.vim").write_text("\" plugin\n")
        if doc:
            (addon / "doc").mkdir(exist_ok=True)
            (addon / "doc" / "main.txt").write_text("*main.txt*\n")
        return addon

    return _make


@pytest.fixture
def debian_tree(tmp_path):
    """Create a debian/ directory whose control file lists the given packages."""

    def _build(*packages):
        debian = tmp_path / "debian"
        debian.mkdir(exist_ok=True)
        stanzas = ["Source: vim-addons\nMaintainer: Test <test@example.org>"]
        stanzas += [f"Package: {name}\nArchitecture: all" for name in packages]
        (debian / "control").write_text("\n\n".join(stanzas) + "\n")
        for name in packages:
            (debian / name).mkdir(exist_ok=True)
        return debian

    return _build
