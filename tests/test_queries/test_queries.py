"""
Tests para las consultas sobre el índice: list_files, analyze_structure
y find_large_files.

Los tests construyen el FileIndex a mano: las consultas nunca tocan disco.
"""

import pytest

from easyview.indexer.errors import PatternError
from easyview.indexer.query import (
    NO_EXTENSION,
    ROOT_DIR,
    analyze_structure,
    directory_depth,
    find_large_files,
    list_files,
)
from easyview.indexer.tree import FileIndex, FileRecord


def _rec(path: str, size: int, lines: int = 0, mtime: float = 0.0) -> FileRecord:
    ext = "." + path.rsplit(".", 1)[1] if "." in path.rsplit("/", 1)[-1] else ""
    return FileRecord(path=path, size=size, line_count=lines, extension=ext, last_modified=mtime)


# -- Fixtures ----------------------------------------------------------------


@pytest.fixture
def index() -> FileIndex:
    records = [
        _rec("README.md", 300, lines=10, mtime=5.0),
        _rec("src/main.py", 2048, lines=80, mtime=9.0),
        _rec("src/utils.py", 512, lines=20, mtime=1.0),
        _rec("src/pkg/deep/inner/mod.py", 4096, lines=150, mtime=3.0),
        _rec("assets/logo.png", 9000, mtime=2.0),
        _rec("LICENSE", 1100, lines=21, mtime=4.0),
    ]
    return FileIndex.from_records({r.path: r for r in records})


# -- Tests: list_files -------------------------------------------------------


class TestListFiles:
    """Tests para list_files."""

    def test_all_sorted_by_name(self, index):
        result = list_files(index)
        assert [r.path for r in result.files] == sorted(r.path for r in index)
        assert result.matched == 6
        assert not result.truncated

    def test_pattern(self, index):
        result = list_files(index, pattern="*.py")
        assert {r.path for r in result.files} == {
            "src/main.py", "src/utils.py", "src/pkg/deep/inner/mod.py",
        }

    def test_pattern_anchored(self, index):
        result = list_files(index, pattern="src/*.py")
        assert result.matched == 3
        assert list_files(index, pattern="main.py").matched == 0

    def test_sort_by_size_descending(self, index):
        sizes = [r.size for r in list_files(index, sort_by="size").files]
        assert sizes == sorted(sizes, reverse=True)

    def test_sort_by_lines(self, index):
        first = list_files(index, sort_by="lines").files[0]
        assert first.path == "src/pkg/deep/inner/mod.py"

    def test_sort_by_modified(self, index):
        first = list_files(index, sort_by="modified").files[0]
        assert first.path == "src/main.py"

    def test_limit_reports_true_total(self, index):
        result = list_files(index, limit=2)
        assert result.shown == 2
        assert result.matched == 6
        assert result.truncated

    def test_limit_capped_at_200(self):
        records = {f"f{i:03}.txt": _rec(f"f{i:03}.txt", i) for i in range(250)}
        result = list_files(FileIndex.from_records(records), limit=1000)
        assert result.shown == 200
        assert result.matched == 250

    def test_size_bounds_inclusive(self, index):
        result = list_files(index, min_size=512, max_size=2048)
        assert {r.path for r in result.files} == {"src/main.py", "src/utils.py", "LICENSE"}

    def test_unknown_sort_key(self, index):
        with pytest.raises(ValueError, match="Unknown sort key"):
            list_files(index, sort_by="color")

    def test_invalid_glob(self, index):
        with pytest.raises(PatternError):
            list_files(index, pattern=3.5)

    def test_empty_index(self):
        result = list_files(FileIndex())
        assert result.files == ()
        assert result.matched == 0


# -- Tests: analyze_structure ------------------------------------------------


class TestAnalyzeStructure:
    """Tests para analyze_structure."""

    def test_directory_depth(self):
        assert directory_depth(ROOT_DIR) == 0
        assert directory_depth("src") == 1
        assert directory_depth("src/pkg/deep") == 3

    def test_directories_counted(self, index):
        summary = analyze_structure(index)
        counts = {d.path: d.file_count for d in summary.directories}
        assert counts[ROOT_DIR] == 2
        assert counts["src"] == 2
        assert counts["assets"] == 1

    def test_depth_limit(self, index):
        summary = analyze_structure(index, depth=3)
        assert "src/pkg/deep/inner" not in {d.path for d in summary.directories}
        summary = analyze_structure(index, depth=4)
        assert "src/pkg/deep/inner" in {d.path for d in summary.directories}

    def test_deep_files_still_count_in_extensions(self, index):
        summary = analyze_structure(index, depth=0)
        py = next(e for e in summary.extensions if e.extension == ".py")
        assert py.file_count == 3
        assert py.total_lines == 250
        assert py.total_size == 2048 + 512 + 4096

    def test_extensions_sorted_by_count(self, index):
        summary = analyze_structure(index)
        assert summary.extensions[0].extension == ".py"
        assert NO_EXTENSION in {e.extension for e in summary.extensions}

    def test_extension_ties_keep_traversal_order(self, index):
        summary = analyze_structure(index)
        singles = [e.extension for e in summary.extensions if e.file_count == 1]
        assert singles == [".md", ".png", NO_EXTENSION]

    def test_show_extensions_false(self, index):
        summary = analyze_structure(index, show_extensions=False)
        assert summary.extensions == ()

    def test_directory_cap(self):
        records = {f"d{i:02}/f.txt": _rec(f"d{i:02}/f.txt", 1) for i in range(60)}
        summary = analyze_structure(FileIndex.from_records(records))
        assert len(summary.directories) == 50
        assert summary.total_directories == 60


# -- Tests: find_large_files -------------------------------------------------


class TestFindLargeFiles:
    """Tests para find_large_files."""

    def test_default_min_size(self, index):
        paths = [r.path for r in find_large_files(index)]
        assert paths == ["assets/logo.png", "src/pkg/deep/inner/mod.py", "src/main.py", "LICENSE"]

    def test_limit(self, index):
        assert len(find_large_files(index, limit=2)) == 2

    def test_limit_capped_at_50(self):
        records = {f"f{i}.bin": _rec(f"f{i}.bin", 2000 + i) for i in range(80)}
        assert len(find_large_files(FileIndex.from_records(records), limit=100)) == 50

    def test_min_size_inclusive(self, index):
        records = find_large_files(index, min_size=9000)
        assert [r.path for r in records] == ["assets/logo.png"]

    def test_none_found(self, index):
        assert find_large_files(index, min_size=10**9) == ()
