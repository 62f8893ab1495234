"""Tests for doc directory collection."""

from concurrent.futures import ThreadPoolExecutor

from vimaddon.docs import DocCollector
from vimaddon.models import ManifestKind
from vimaddon.parse_manifest import parse_manifest
from vimaddon.resolve_addons import AddonResolver


class TestDocCollector:
    """Test accumulation of doc directories."""

    def test_collect_addon_with_doc(self, tmp_path, make_addon):
        """Should record the doc directory of an addon that has one."""
        source = make_addon(tmp_path, "usr/share/x/y", doc=True)
        addon = AddonResolver(tmp_path).resolve(parse_manifest("usr/share/x/y", ManifestKind.VIM_START))[0]
        collector = DocCollector()

        assert collector.collect(addon) == source / "doc"
        assert collector.sorted_dirs() == [source / "doc"]

    def test_collect_addon_without_doc(self, tmp_path, make_addon):
        """Should ignore addons without doc directory."""
        make_addon(tmp_path, "usr/share/x/y")
        addon = AddonResolver(tmp_path).resolve(parse_manifest("usr/share/x/y", ManifestKind.VIM_START))[0]
        collector = DocCollector()

        assert collector.collect(addon) is None
        assert collector.sorted_dirs() == []

    def test_collect_deduplicates_across_kinds(self, tmp_path, make_addon):
        """The same addon listed for vim and neovim yields one doc directory."""
        make_addon(tmp_path, "usr/share/x/y", doc=True)
        collector = DocCollector()
        for kind in (ManifestKind.VIM_START, ManifestKind.NEOVIM_START):
            addon = AddonResolver(tmp_path).resolve(parse_manifest("usr/share/x/y", kind))[0]
            collector.collect(addon)

        assert len(collector.sorted_dirs()) == 1

    def test_sorted_dirs(self, tmp_path):
        """Should return directories in ascending order."""
        collector = DocCollector()
        for name in ("c", "a", "b"):
            collector.add(tmp_path / name / "doc")

        assert collector.sorted_dirs() == [tmp_path / n / "doc" for n in ("a", "b", "c")]

    def test_concurrent_adds(self, tmp_path):
        """Should keep every directory when filled from several threads."""
        collector = DocCollector()
        paths = [tmp_path / f"addon{i}" / "doc" for i in range(200)]

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(collector.add, paths + paths))

        assert collector.sorted_dirs() == sorted(paths)
