"""
WorkspaceExplorer: read-only exploration engine for one workspace.

Owns the File Index and answers every query against it. The index is an
immutable ``FileIndex`` snapshot; builds and single-record updates create
a new snapshot and swap the reference under ``_lock``. Queries read the
current reference once and iterate it without locking, so a concurrent
refresh never disturbs a listing or a search already in progress.

Typical usage:
    explorer = WorkspaceExplorer(Path.cwd())
    explorer.scan()
    result = explorer.list_files(pattern="*.py", sort_by="size")
"""

import threading
from dataclasses import replace
from pathlib import Path

import structlog

from ..config.schema import IndexerConfig
from . import query
from .classify import PathClassifier
from .errors import NotFoundError, UnreadableError
from .refresh import RecordRefresher
from .search import (
    CONTEXT_LINES_DEFAULT,
    MAX_LINE_LENGTH_DEFAULT,
    MAX_RESULTS_DEFAULT,
    SearchResult,
    search_files,
)
from .tree import FileIndex, FileRecord, IndexBuilder, ScanResult
from .validators import index_key, validate_file_exists, validate_path
from .viewer import CONTEXT_SIZE_DEFAULT, MAX_LINES_DEFAULT, FileView, view_file

logger = structlog.get_logger()


class WorkspaceExplorer:
    """In-memory index plus bounded queries over a fixed workspace root."""

    def __init__(self, workspace_root: Path, config: IndexerConfig | None = None) -> None:
        """Initialize the explorer with an empty, unbuilt index.

        Args:
            workspace_root: Root directory; fixed for the explorer's lifetime
            config: Indexer limits and exclusions. Defaults if None.
        """
        self.root = Path(workspace_root).resolve()
        self.config = config or IndexerConfig()
        self.classifier = PathClassifier(
            extra_excluded_dirs=frozenset(self.config.exclude_dirs),
            include_hidden=self.config.include_hidden,
        )
        self._builder = IndexBuilder(
            self.root,
            classifier=self.classifier,
            max_file_size=self.config.max_file_size,
        )
        self._refresher = RecordRefresher(
            exact_count_limit=self.config.exact_count_limit,
            sample_bytes=self.config.sample_bytes,
        )
        self._lock = threading.Lock()
        self._index = FileIndex()
        self._last_scan: ScanResult | None = None
        self._log = logger.bind(component="explorer", root=str(self.root))

    # -- Index lifecycle ------------------------------------------------------

    @property
    def index(self) -> FileIndex:
        """Current snapshot (read-only)."""
        return self._index

    @property
    def is_built(self) -> bool:
        return self._index.built

    def scan(self, refresh: bool = False) -> ScanResult:
        """Build the index if needed, or rebuild it from scratch.

        Args:
            refresh: If True, discard the current index and rebuild

        Returns:
            ScanResult of the build that produced the current index

        Raises:
            ScanError: If the workspace root cannot be enumerated
        """
        with self._lock:
            if refresh or not self._index.built or self._last_scan is None:
                self._rebuild()
            elif self._last_scan.index is not self._index:
                # file_info swapped in newer records since the last build
                self._last_scan = replace(self._last_scan, index=self._index)
            return self._last_scan

    def ensure_index(self) -> FileIndex:
        """Return the current snapshot, building it on first use."""
        snapshot = self._index
        if snapshot.built:
            return snapshot
        with self._lock:
            if not self._index.built:
                self._rebuild()
            return self._index

    def _rebuild(self) -> None:
        # Caller holds self._lock
        result = self._builder.build()
        self._last_scan = result
        self._index = result.index
        if result.skipped:
            self._log.info("explorer.scan.partial", skipped=len(result.skipped))

    # -- Queries --------------------------------------------------------------

    def list_files(
        self,
        pattern: str = "*",
        sort_by: query.SortKey = "name",
        limit: int = query.LIST_LIMIT_DEFAULT,
        min_size: int = 0,
        max_size: int | None = None,
    ) -> query.ListResult:
        return query.list_files(
            self.ensure_index(),
            pattern=pattern,
            sort_by=sort_by,
            limit=limit,
            min_size=min_size,
            max_size=max_size,
        )

    def analyze_structure(
        self,
        depth: int = query.STRUCTURE_DEPTH_DEFAULT,
        show_extensions: bool = True,
    ) -> query.StructureSummary:
        return query.analyze_structure(
            self.ensure_index(), depth=depth, show_extensions=show_extensions
        )

    def find_large_files(
        self,
        limit: int = query.LARGE_FILES_LIMIT_DEFAULT,
        min_size: int = query.LARGE_FILES_MIN_SIZE_DEFAULT,
    ) -> tuple[FileRecord, ...]:
        return query.find_large_files(self.ensure_index(), limit=limit, min_size=min_size)

    def search_files(
        self,
        pattern: str,
        file_pattern: str = "*",
        case_sensitive: bool = False,
        context_lines: int = CONTEXT_LINES_DEFAULT,
        max_results: int = MAX_RESULTS_DEFAULT,
        max_line_length: int = MAX_LINE_LENGTH_DEFAULT,
        max_files: int | None = None,
    ) -> SearchResult:
        """Regex search over indexed text files (see ``search.search_files``).

        ``max_files`` defaults to ``config.max_search_files``.
        """
        return search_files(
            self.ensure_index(),
            self.root,
            pattern,
            file_pattern=file_pattern,
            case_sensitive=case_sensitive,
            context_lines=context_lines,
            max_results=max_results,
            max_line_length=max_line_length,
            max_files=self.config.max_search_files if max_files is None else max_files,
        )

    def view_file(
        self,
        file_path: str,
        start_line: int = 1,
        end_line: int | None = None,
        max_lines: int = MAX_LINES_DEFAULT,
        around_line: int | None = None,
        context_size: int = CONTEXT_SIZE_DEFAULT,
        max_size: int | None = None,
    ) -> FileView:
        """Windowed view of one file (see ``viewer.view_file``).

        Does not need the index: reads straight from disk.
        ``max_size`` defaults to ``config.max_view_size``.
        """
        return view_file(
            self.root,
            file_path,
            start_line=start_line,
            end_line=end_line,
            max_lines=max_lines,
            around_line=around_line,
            context_size=context_size,
            max_size=self.config.max_view_size if max_size is None else max_size,
        )

    def file_info(self, file_path: str) -> FileRecord:
        """Fresh record for one file, reusing the indexed one when not stale.

        If the index is built and the file is indexable, the refreshed
        record replaces the stored one in a new snapshot; other records
        and the ``built`` flag are left alone. A symlink is keyed by its
        own name, like the builder does.

        Raises:
            PathTraversalError: Path (or symlink target) outside the workspace
            NotFoundError: Path does not exist
            NotAFileError: Path is a directory
            UnreadableError: Content could not be read; the index is unchanged
        """
        full_path = validate_path(file_path, self.root)
        validate_file_exists(full_path, file_path)
        rel_path = index_key(file_path, self.root)

        try:
            outcome = self._refresher.refresh(full_path, rel_path, self._index.get(rel_path))
        except FileNotFoundError as e:
            raise NotFoundError(file_path) from e
        except OSError as e:
            self._log.warning("file_info.read_error", path=rel_path, error=str(e))
            raise UnreadableError(file_path, e.strerror or str(e)) from e

        if outcome.refreshed and self._is_indexable(outcome.record):
            with self._lock:
                if self._index.built:
                    self._index = self._index.with_record(outcome.record)

        return outcome.record

    def _is_indexable(self, record: FileRecord) -> bool:
        return (
            record.size <= self.config.max_file_size
            and not self.classifier.is_excluded_directory(record.path)
        )
