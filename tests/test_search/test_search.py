"""
Tests para la búsqueda de contenido (search_files).

Cubre:
- Match con contexto y números de línea 1-based
- Case sensitivity, file_pattern, binarios excluidos
- Cap global de resultados (se corta a mitad de archivo)
- Truncado de líneas largas
- Regex inválida → PatternError
- Archivo borrado entre el scan y la búsqueda
"""

from pathlib import Path

import pytest

from easyview.indexer.errors import PatternError
from easyview.indexer.search import ELLIPSIS, search_files, truncate_line
from easyview.indexer.tree import IndexBuilder


# -- Fixtures ----------------------------------------------------------------


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    (tmp_path / "notes.txt").write_text("x\nTODO y\nz\n")
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "app.py").write_text(
        "import os\n"
        "# todo: refactor\n"
        "def main():\n"
        "    return os.getcwd()  # TODO\n"
    )
    (tmp_path / "data.bin").write_bytes(b"TODO\x00\x01")
    return tmp_path


def _search(root: Path, pattern: str, **kwargs):
    index = IndexBuilder(root).build().index
    return search_files(index, root, pattern, **kwargs)


# -- Tests -------------------------------------------------------------------


class TestSearchFiles:
    """Tests para search_files."""

    def test_context_scenario(self, workspace):
        result = _search(workspace, "TODO", context_lines=1, file_pattern="*.txt")

        assert len(result.matches) == 1
        match = result.matches[0]
        assert match.path == "notes.txt"
        assert match.line_number == 2
        assert match.content == "TODO y"
        assert [c.content for c in match.context] == ["x", "z"]
        assert [c.line_number for c in match.context] == [1, 3]

    def test_case_insensitive_default(self, workspace):
        result = _search(workspace, "todo", file_pattern="src/*")
        assert [m.line_number for m in result.matches] == [2, 4]

    def test_case_sensitive(self, workspace):
        result = _search(workspace, "todo", case_sensitive=True)
        assert [(m.path, m.line_number) for m in result.matches] == [("src/app.py", 2)]

    def test_order_file_then_line(self, workspace):
        result = _search(workspace, "TODO")
        assert [(m.path, m.line_number) for m in result.matches] == [
            ("notes.txt", 2), ("src/app.py", 2), ("src/app.py", 4),
        ]

    def test_binary_files_not_searched(self, workspace):
        result = _search(workspace, "TODO")
        assert all(m.path != "data.bin" for m in result.matches)
        assert result.files_searched == 2

    def test_zero_context(self, workspace):
        result = _search(workspace, "TODO", context_lines=0)
        assert all(m.context == () for m in result.matches)

    def test_context_clipped_at_file_edges(self, workspace):
        result = _search(workspace, "^import", context_lines=3)
        context_numbers = [c.line_number for c in result.matches[0].context]
        assert context_numbers == [2, 3, 4]

    def test_context_capped_at_5(self, tmp_path):
        (tmp_path / "f.txt").write_text("\n".join(f"l{i}" for i in range(20)) + "\n")
        result = _search(tmp_path, "^l10$", context_lines=50)
        assert len(result.matches[0].context) == 10

    def test_no_matches_is_empty_result(self, workspace):
        result = _search(workspace, "nothing-here")
        assert result.matches == ()
        assert not result.truncated

    def test_invalid_regex(self, workspace):
        with pytest.raises(PatternError):
            _search(workspace, "([")

    def test_file_deleted_after_scan(self, workspace):
        index = IndexBuilder(workspace).build().index
        (workspace / "notes.txt").unlink()

        result = search_files(index, workspace, "TODO")
        assert [m.path for m in result.matches] == ["src/app.py", "src/app.py"]


class TestSearchLimits:
    """Tests para los límites de resultados y de longitud de línea."""

    def test_stops_mid_file(self, tmp_path):
        (tmp_path / "a.txt").write_text("hit\n" * 10)
        (tmp_path / "b.txt").write_text("hit\n" * 10)

        result = _search(tmp_path, "hit", max_results=3)
        assert len(result.matches) == 3
        assert {m.path for m in result.matches} == {"a.txt"}
        assert result.truncated
        assert result.files_searched == 1

    def test_max_results_capped_at_500(self, tmp_path):
        (tmp_path / "many.txt").write_text("hit\n" * 600)
        result = _search(tmp_path, "hit", max_results=10_000)
        assert len(result.matches) == 500

    def test_long_lines_truncated(self, tmp_path):
        (tmp_path / "long.txt").write_text("a" * 50 + " match\n" + "b" * 50 + "\n")
        result = _search(tmp_path, "match", max_line_length=10, context_lines=1)

        match = result.matches[0]
        assert match.content == "a" * 10 + ELLIPSIS
        assert match.context[0].content == "b" * 10 + ELLIPSIS

    def test_max_files(self, tmp_path):
        for name in ("a.txt", "b.txt", "c.txt"):
            (tmp_path / name).write_text("hit\n")
        result = _search(tmp_path, "hit", max_files=2)
        assert [m.path for m in result.matches] == ["a.txt", "b.txt"]

    def test_truncate_line(self):
        assert truncate_line("short", 10) == "short"
        assert truncate_line("exactly10!", 10) == "exactly10!"
        assert truncate_line("longer than ten", 10) == "longer tha..."
