"""
Read-only queries over a File Index snapshot.

- list_files: glob + size filtering, sorting, truncation
- analyze_structure: files per directory and per-extension aggregates
- find_large_files: size ranking

All functions take the snapshot explicitly and never touch the disk.
"""

import posixpath
from dataclasses import dataclass
from typing import Literal

from .patterns import glob_matcher
from .tree import FileIndex, FileRecord

SortKey = Literal["name", "size", "lines", "modified"]

LIST_LIMIT_DEFAULT = 50
LIST_LIMIT_MAX = 200
LARGE_FILES_LIMIT_DEFAULT = 20
LARGE_FILES_LIMIT_MAX = 50
LARGE_FILES_MIN_SIZE_DEFAULT = 1024
STRUCTURE_DEPTH_DEFAULT = 3
STRUCTURE_MAX_DIRS = 50
STRUCTURE_MAX_EXTENSIONS = 15

NO_EXTENSION = "(no extension)"
ROOT_DIR = "."


@dataclass(frozen=True)
class ListResult:
    """Sorted, truncated file list plus the true match count."""

    files: tuple[FileRecord, ...]
    matched: int

    @property
    def shown(self) -> int:
        return len(self.files)

    @property
    def truncated(self) -> bool:
        return self.matched > self.shown


@dataclass(frozen=True)
class DirectoryStat:
    path: str
    file_count: int

    @property
    def depth(self) -> int:
        return directory_depth(self.path)


@dataclass(frozen=True)
class ExtensionStat:
    extension: str
    file_count: int
    total_size: int
    total_lines: int


@dataclass(frozen=True)
class StructureSummary:
    directories: tuple[DirectoryStat, ...]
    extensions: tuple[ExtensionStat, ...]
    total_directories: int
    total_extensions: int


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def directory_depth(directory: str) -> int:
    """Depth of a directory component; the workspace root is depth 0."""
    if directory in ("", ROOT_DIR):
        return 0
    return directory.count("/") + 1


_SORTERS = {
    "name": (lambda r: r.path, False),
    "size": (lambda r: r.size, True),
    "lines": (lambda r: r.line_count, True),
    "modified": (lambda r: r.last_modified, True),
}


def list_files(
    index: FileIndex,
    pattern: str = "*",
    sort_by: SortKey = "name",
    limit: int = LIST_LIMIT_DEFAULT,
    min_size: int = 0,
    max_size: int | None = None,
) -> ListResult:
    """List indexed files matching a glob and size bounds.

    Args:
        index: Snapshot to query
        pattern: Simplified glob anchored to the relative path
        sort_by: "name" (ascending), "size", "lines" or "modified" (descending)
        limit: Maximum files returned (capped at 200)
        min_size: Inclusive lower size bound in bytes
        max_size: Inclusive upper size bound in bytes, None for no bound

    Raises:
        PatternError: Invalid glob
        ValueError: Unknown sort key
    """
    if sort_by not in _SORTERS:
        raise ValueError(
            f"Unknown sort key '{sort_by}'. Valid: {', '.join(_SORTERS)}"
        )
    matches = glob_matcher(pattern)
    limit = _clamp(limit, 0, LIST_LIMIT_MAX)

    matched = [
        record for record in index
        if record.size >= min_size
        and (max_size is None or record.size <= max_size)
        and matches(record.path)
    ]

    key, reverse = _SORTERS[sort_by]
    matched.sort(key=key, reverse=reverse)

    return ListResult(files=tuple(matched[:limit]), matched=len(matched))


def analyze_structure(
    index: FileIndex,
    depth: int = STRUCTURE_DEPTH_DEFAULT,
    show_extensions: bool = True,
) -> StructureSummary:
    """Aggregate the index per directory and per extension.

    Directories deeper than ``depth`` are left out of the directory
    listing but still count towards the extension totals.
    """
    dirs: dict[str, int] = {}
    exts: dict[str, list[int]] = {}

    for record in index:
        directory = posixpath.dirname(record.path) or ROOT_DIR
        if directory_depth(directory) <= depth:
            dirs[directory] = dirs.get(directory, 0) + 1

        if show_extensions:
            stats = exts.setdefault(record.extension or NO_EXTENSION, [0, 0, 0])
            stats[0] += 1
            stats[1] += record.size
            stats[2] += record.line_count

    directories = tuple(
        DirectoryStat(path=d, file_count=n) for d, n in sorted(dirs.items())
    )
    # sorted() is stable: ties on file count keep traversal order
    extensions = tuple(
        ExtensionStat(extension=e, file_count=s[0], total_size=s[1], total_lines=s[2])
        for e, s in sorted(exts.items(), key=lambda item: item[1][0], reverse=True)
    )

    return StructureSummary(
        directories=directories[:STRUCTURE_MAX_DIRS],
        extensions=extensions[:STRUCTURE_MAX_EXTENSIONS],
        total_directories=len(directories),
        total_extensions=len(extensions),
    )


def find_large_files(
    index: FileIndex,
    limit: int = LARGE_FILES_LIMIT_DEFAULT,
    min_size: int = LARGE_FILES_MIN_SIZE_DEFAULT,
) -> tuple[FileRecord, ...]:
    """Records with ``size >= min_size``, largest first, capped at 50."""
    limit = _clamp(limit, 0, LARGE_FILES_LIMIT_MAX)
    large = sorted(
        (record for record in index if record.size >= min_size),
        key=lambda r: r.size,
        reverse=True,
    )
    return tuple(large[:limit])
