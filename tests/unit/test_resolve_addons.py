"""Tests for resolving manifest entries against the staged tree."""

import logging
from pathlib import PurePosixPath

import pytest

from vimaddon.errors import MissingDirectoryError
from vimaddon.models import ManifestKind
from vimaddon.parse_manifest import parse_manifest
from vimaddon.resolve_addons import AddonResolver


class TestAddonResolver:
    """Test addon resolution and validation."""

    def test_resolve_infers_name_from_path(self, tmp_path, make_addon):
        """Without an explicit name the last path component is used."""
        make_addon(tmp_path, "usr/share/vim-addons/foo")
        make_addon(tmp_path, "usr/share/vim-bar")
        manifest = parse_manifest("usr/share/vim-addons/foo\nusr/share/vim-bar", ManifestKind.VIM_START)

        addons = AddonResolver(tmp_path).resolve(manifest)

        assert [a.resolved_name for a in addons] == ["foo", "vim-bar"]
        assert addons[0].source_dir == tmp_path / "usr/share/vim-addons/foo"
        assert addons[0].source_relpath == "usr/share/vim-addons/foo"

    def test_resolve_uses_explicit_name(self, tmp_path, make_addon):
        """An explicit name is used verbatim."""
        make_addon(tmp_path, "usr/share/vim-foo/runtime")
        manifest = parse_manifest("usr/share/vim-foo/runtime Foo.vim", ManifestKind.VIM_START)

        addons = AddonResolver(tmp_path).resolve(manifest)

        assert addons[0].resolved_name == "Foo.vim"
        assert addons[0].destination_path == ManifestKind.VIM_START.destination_root / "Foo.vim"

    @pytest.mark.parametrize("kind", list(ManifestKind))
    def test_resolve_destination_per_kind(self, tmp_path, make_addon, kind):
        """Destination is the kind's root joined with the addon name."""
        make_addon(tmp_path, "usr/share/x/y")
        manifest = parse_manifest("usr/share/x/y", kind)

        addon = AddonResolver(tmp_path).resolve(manifest)[0]

        assert addon.kind is kind
        assert addon.destination_path == kind.destination_root / "y"
        assert isinstance(addon.destination_path, PurePosixPath)

    def test_resolve_reports_all_missing(self, tmp_path, make_addon):
        """All missing directories are named in a single error."""
        make_addon(tmp_path, "usr/share/a")
        make_addon(tmp_path, "usr/share/c")
        content = "usr/share/a\nusr/share/b\nusr/share/c\nusr/share/d\nusr/share/e"
        manifest = parse_manifest(content, ManifestKind.NEOVIM_OPT)

        with pytest.raises(MissingDirectoryError) as exc_info:
            AddonResolver(tmp_path, "vim-foo").resolve(manifest)

        error = exc_info.value
        assert error.missing == ["usr/share/b", "usr/share/d", "usr/share/e"]
        assert error.kind is ManifestKind.NEOVIM_OPT
        assert error.package == "vim-foo"
        for path in error.missing:
            assert path in str(error)
        assert "neovim-opt-addon" in str(error)

    def test_resolve_file_is_not_an_addon(self, tmp_path):
        """A regular file where a directory is expected counts as missing."""
        (tmp_path / "usr/share").mkdir(parents=True)
        (tmp_path / "usr/share/plugin.vim").write_text("")
        manifest = parse_manifest("usr/share/plugin.vim", ManifestKind.VIM_START)

        with pytest.raises(MissingDirectoryError) as exc_info:
            AddonResolver(tmp_path).resolve(manifest)

        assert exc_info.value.missing == ["usr/share/plugin.vim"]

    def test_resolve_empty_manifest(self, tmp_path):
        """An empty manifest resolves to nothing."""
        manifest = parse_manifest(None, ManifestKind.VIM_START)

        assert AddonResolver(tmp_path).resolve(manifest) == []

    def test_resolve_duplicate_names_last_wins(self, tmp_path, make_addon, caplog, monkeypatch):
        """Entries sharing a name collapse onto the later one with a warning."""
        monkeypatch.setattr(logging.getLogger("vimaddon"), "propagate", True)
        make_addon(tmp_path, "usr/share/one/foo")
        make_addon(tmp_path, "usr/share/two/foo")
        manifest = parse_manifest("usr/share/one/foo\nusr/share/two/foo", ManifestKind.VIM_START)

        with caplog.at_level(logging.WARNING, logger="vimaddon"):
            addons = AddonResolver(tmp_path, "vim-foo").resolve(manifest)

        assert len(addons) == 1
        assert addons[0].source_relpath == "usr/share/two/foo"
        assert "more than once" in caplog.text
