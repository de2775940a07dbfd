"""
Path classification for the workspace index.

Decides which files are "text" (eligible for line counting and content
search) and which directories are never descended into.
"""

import fnmatch
import posixpath
from dataclasses import dataclass, field


# --- Text extensions ---

TEXT_EXTENSIONS: frozenset[str] = frozenset({
    # Source
    ".js", ".mjs", ".cjs", ".jsx", ".ts", ".tsx",
    ".py", ".pyi", ".pyw",
    ".java", ".kt", ".scala",
    ".c", ".h", ".cpp", ".cc", ".cxx", ".hpp",
    ".cs", ".php", ".rb", ".go", ".rs", ".swift", ".r",
    ".sql",
    # Markup / styles
    ".html", ".htm", ".css", ".scss", ".sass", ".less", ".xml",
    ".md", ".mdx", ".txt", ".rst",
    # Config / data
    ".json", ".jsonc", ".yaml", ".yml", ".toml", ".ini", ".cfg", ".conf",
    ".tf", ".tfvars",
    # Scripts
    ".sh", ".bash", ".zsh", ".fish", ".ps1", ".bat", ".cmd",
})

# Directories never descended into
DEFAULT_EXCLUDED_DIRS: frozenset[str] = frozenset({
    ".git",
    "node_modules",
    "dist",
    "build",
    "__pycache__",
    ".venv",
    "venv",
    ".tox",
    ".mypy_cache",
    ".pytest_cache",
    ".ruff_cache",
    ".hypothesis",
    ".eggs",
})

# Segment globs excluded wherever they appear (directories or files)
DEFAULT_EXCLUDED_GLOBS: tuple[str, ...] = (
    "*.egg-info",
    "*.min.*",
)


def extension_of(path: str) -> str:
    """Lowercase suffix including the dot, or an empty string."""
    return posixpath.splitext(posixpath.basename(path))[1].lower()


def is_text_file(path: str) -> bool:
    """True for allow-listed extensions and for files without extension.

    Files without extension (Makefile, LICENSE, Dockerfile...) are assumed
    to be text; anything else is binary: indexed, never read.
    """
    ext = extension_of(path)
    return ext in TEXT_EXTENSIONS or not ext


@dataclass(frozen=True)
class PathClassifier:
    """Exclusion rules for one workspace.

    Attributes:
        extra_excluded_dirs: Directory names excluded on top of the defaults
        include_hidden: If True, dotfiles and dot-directories are indexed
            (denylisted names such as ``.git`` stay excluded)
    """

    extra_excluded_dirs: frozenset[str] = field(default_factory=frozenset)
    include_hidden: bool = False

    @property
    def excluded_dirs(self) -> frozenset[str]:
        return DEFAULT_EXCLUDED_DIRS | self.extra_excluded_dirs

    def is_excluded_segment(self, name: str) -> bool:
        """True if a single path component excludes its subtree."""
        if name in self.excluded_dirs:
            return True
        if not self.include_hidden and name.startswith("."):
            return True
        return any(fnmatch.fnmatchcase(name, p) for p in DEFAULT_EXCLUDED_GLOBS)

    def is_excluded_directory(self, path: str) -> bool:
        """True if any segment of ``path`` is excluded.

        Applied to a file path it also catches excluded file names
        (dotfiles, minified assets).
        """
        return any(
            self.is_excluded_segment(part)
            for part in path.replace("\\", "/").split("/")
            if part and part != "."
        )

    def is_text_file(self, path: str) -> bool:
        return is_text_file(path)


# --- Line helpers shared by the builder, search and viewer ---

def count_lines(data: bytes) -> int:
    """Count ``\\n``-delimited segments; a trailing partial line counts."""
    if not data:
        return 0
    count = data.count(b"\n")
    # Si el archivo no termina en newline, la última línea no tiene \n
    if not data.endswith(b"\n"):
        count += 1
    return count


def split_lines(text: str) -> list[str]:
    """Split text into lines consistently with ``count_lines``.

    A trailing newline does not open an extra empty line and a ``\\r``
    left over from CRLF endings is dropped.
    """
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]
