"""
Windowed file viewer.

Returns a bounded, line-numbered slice of one file instead of the whole
content. Two modes:

- around mode (``around_line`` set): ``[N - C, N + C]`` with line N marked
- range mode: from ``start_line`` to ``end_line`` (or ``max_lines`` lines)

In both modes the window never exceeds ``max_lines`` lines nor the end
of the file.
"""

from dataclasses import dataclass
from pathlib import Path

from .classify import split_lines
from .errors import TooLargeError
from .validators import validate_file_exists, validate_path

MAX_VIEW_SIZE_DEFAULT = 10 * 1024 * 1024
MAX_LINES_DEFAULT = 500
MAX_LINES_MAX = 2000
CONTEXT_SIZE_DEFAULT = 25
CONTEXT_SIZE_MAX = 100


@dataclass(frozen=True)
class ViewLine:
    number: int
    content: str
    marked: bool = False


@dataclass(frozen=True)
class FileView:
    path: str
    size: int
    total_lines: int
    start_line: int
    end_line: int            # start_line - 1 when the window is empty
    lines: tuple[ViewLine, ...]
    around_line: int | None = None


def compute_window(
    total_lines: int,
    start_line: int = 1,
    end_line: int | None = None,
    max_lines: int = MAX_LINES_DEFAULT,
    around_line: int | None = None,
    context_size: int = CONTEXT_SIZE_DEFAULT,
) -> tuple[int, int]:
    """Compute the 1-based inclusive window ``(start, end)``.

    Arguments are clamped to their caps first. The window is empty when
    ``end < start``.
    """
    max_lines = max(1, min(max_lines, MAX_LINES_MAX))
    context_size = max(0, min(context_size, CONTEXT_SIZE_MAX))

    if around_line is not None:
        start = max(1, around_line - context_size)
        end = min(total_lines, around_line + context_size)
    else:
        start = max(1, start_line)
        end = end_line if end_line is not None else start + max_lines - 1

    end = min(end, start + max_lines - 1, total_lines)
    return start, end


def view_file(
    workspace_root: Path,
    file_path: str,
    start_line: int = 1,
    end_line: int | None = None,
    max_lines: int = MAX_LINES_DEFAULT,
    around_line: int | None = None,
    context_size: int = CONTEXT_SIZE_DEFAULT,
    max_size: int = MAX_VIEW_SIZE_DEFAULT,
) -> FileView:
    """Read one file and return the requested window.

    Raises:
        PathTraversalError: Path outside the workspace
        NotFoundError: Path does not exist
        NotAFileError: Path is a directory
        TooLargeError: File larger than ``max_size`` (10 MiB by default)
    """
    full_path = validate_path(file_path, workspace_root)
    validate_file_exists(full_path, file_path)

    size = full_path.stat().st_size
    if size > max_size:
        raise TooLargeError(file_path, size, max_size)

    lines = split_lines(full_path.read_text(encoding="utf-8", errors="replace"))
    start, end = compute_window(
        len(lines),
        start_line=start_line,
        end_line=end_line,
        max_lines=max_lines,
        around_line=around_line,
        context_size=context_size,
    )

    window = tuple(
        ViewLine(number=n, content=lines[n - 1], marked=(n == around_line))
        for n in range(start, end + 1)
    )

    return FileView(
        path=file_path,
        size=size,
        total_lines=len(lines),
        start_line=start,
        end_line=max(end, start - 1),
        lines=window,
        around_line=around_line,
    )
