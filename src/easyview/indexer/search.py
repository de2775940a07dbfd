"""
Regex content search over indexed text files.

Candidates come from the index snapshot (text files matching the file
glob, in index order, at most ``max_files``); their content is re-read
from disk on every call. Collection stops at the exact ``max_results``-th
match, even in the middle of a file.
"""

from dataclasses import dataclass
from pathlib import Path

import structlog

from .classify import is_text_file, split_lines
from .patterns import compile_regex, glob_matcher
from .tree import FileIndex

logger = structlog.get_logger()

CONTEXT_LINES_DEFAULT = 2
CONTEXT_LINES_MAX = 5
MAX_RESULTS_DEFAULT = 100
MAX_RESULTS_MAX = 500
MAX_LINE_LENGTH_DEFAULT = 200
MAX_LINE_LENGTH_MAX = 1000
MAX_SEARCH_FILES_DEFAULT = 1000

ELLIPSIS = "..."


@dataclass(frozen=True)
class ContextLine:
    line_number: int
    content: str


@dataclass(frozen=True)
class SearchMatch:
    """One matching line with its surrounding context."""

    path: str
    line_number: int         # 1-based
    content: str             # truncated to max_line_length (+ "...")
    context: tuple[ContextLine, ...] = ()


@dataclass(frozen=True)
class SearchResult:
    matches: tuple[SearchMatch, ...]
    files_searched: int
    max_results: int

    @property
    def truncated(self) -> bool:
        """True when the result cap stopped the search."""
        return len(self.matches) >= self.max_results


def truncate_line(line: str, max_length: int) -> str:
    if len(line) > max_length:
        return line[:max_length] + ELLIPSIS
    return line


def search_files(
    index: FileIndex,
    workspace_root: Path,
    pattern: str,
    file_pattern: str = "*",
    case_sensitive: bool = False,
    context_lines: int = CONTEXT_LINES_DEFAULT,
    max_results: int = MAX_RESULTS_DEFAULT,
    max_line_length: int = MAX_LINE_LENGTH_DEFAULT,
    max_files: int = MAX_SEARCH_FILES_DEFAULT,
) -> SearchResult:
    """Search a regex across the indexed text files.

    Args:
        index: Snapshot providing the candidate files
        workspace_root: Root the relative paths are resolved against
        pattern: Regular expression searched in each line
        file_pattern: Simplified glob restricting candidate paths
        case_sensitive: If False, the regex ignores case
        context_lines: Lines of context before/after each match (0-5)
        max_results: Global cap on matches (1-500)
        max_line_length: Truncation length for every returned line (1-1000)
        max_files: Cap on candidate files read per call

    Returns:
        SearchResult; no matches is an empty result, not an error

    Raises:
        PatternError: Invalid regex or glob
    """
    regex = compile_regex(pattern, case_sensitive)
    matches_path = glob_matcher(file_pattern)

    context_lines = max(0, min(context_lines, CONTEXT_LINES_MAX))
    max_results = max(1, min(max_results, MAX_RESULTS_MAX))
    max_line_length = max(1, min(max_line_length, MAX_LINE_LENGTH_MAX))

    candidates: list[str] = []
    for record in index:
        if len(candidates) >= max_files:
            break
        if is_text_file(record.path) and matches_path(record.path):
            candidates.append(record.path)

    root = workspace_root.resolve()
    results: list[SearchMatch] = []
    files_searched = 0

    for rel_path in candidates:
        if len(results) >= max_results:
            break

        try:
            content = (root / rel_path).read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.warning("search.file_error", path=rel_path, error=str(e))
            continue

        files_searched += 1
        lines = split_lines(content)

        for i, line in enumerate(lines):
            if not regex.search(line):
                continue

            context: tuple[ContextLine, ...] = ()
            if context_lines > 0:
                start = max(0, i - context_lines)
                end = min(len(lines), i + context_lines + 1)
                context = tuple(
                    ContextLine(j + 1, truncate_line(lines[j], max_line_length))
                    for j in range(start, end)
                    if j != i
                )

            results.append(SearchMatch(
                path=rel_path,
                line_number=i + 1,
                content=truncate_line(line, max_line_length),
                context=context,
            ))

            if len(results) >= max_results:
                break

    logger.debug(
        "search.complete",
        pattern=pattern,
        files_searched=files_searched,
        matches=len(results),
    )
    return SearchResult(
        matches=tuple(results),
        files_searched=files_searched,
        max_results=max_results,
    )
