"""
Staleness-aware recomputation of a single FileRecord.

A cached record is reused while its ``last_modified`` equals the file's
current mtime. Otherwise the record is rebuilt from disk:

- text files up to ``exact_count_limit`` (5 MiB) are read in full and
  their lines counted exactly;
- larger text files only have a prefix of ``sample_bytes`` (64 KiB)
  read, and the line count is extrapolated from the sample density.
  Such records carry ``estimated=True``: the number is approximate.
"""

from dataclasses import dataclass
from pathlib import Path

import structlog

from .classify import count_lines, extension_of, is_text_file
from .tree import FileRecord

logger = structlog.get_logger()

EXACT_COUNT_LIMIT_DEFAULT = 5 * 1024 * 1024
SAMPLE_BYTES_DEFAULT = 64 * 1024


@dataclass(frozen=True)
class RefreshOutcome:
    record: FileRecord
    refreshed: bool   # False when the cached record was reused


class RecordRefresher:
    """Recomputes one record, sampling very large text files."""

    def __init__(
        self,
        exact_count_limit: int = EXACT_COUNT_LIMIT_DEFAULT,
        sample_bytes: int = SAMPLE_BYTES_DEFAULT,
    ) -> None:
        self.exact_count_limit = exact_count_limit
        self.sample_bytes = sample_bytes

    def refresh(
        self,
        full_path: Path,
        rel_path: str,
        cached: FileRecord | None = None,
    ) -> RefreshOutcome:
        """Return a fresh record for ``full_path`` or the cached one if still valid.

        Raises:
            OSError: If the file cannot be stat-ed or its content read
        """
        stat = full_path.stat()
        if cached is not None and cached.last_modified == stat.st_mtime:
            return RefreshOutcome(record=cached, refreshed=False)

        lines, estimated = 0, False
        if is_text_file(rel_path):
            lines, estimated = self._count(full_path, stat.st_size)

        record = FileRecord(
            path=rel_path,
            size=stat.st_size,
            line_count=lines,
            extension=extension_of(rel_path),
            last_modified=stat.st_mtime,
            estimated=estimated,
        )
        logger.debug(
            "file_info.refreshed",
            path=rel_path,
            lines=lines,
            estimated=estimated,
        )
        return RefreshOutcome(record=record, refreshed=True)

    def _count(self, path: Path, size: int) -> tuple[int, bool]:
        if size <= self.exact_count_limit:
            return count_lines(path.read_bytes()), False

        with open(path, "rb") as f:
            sample = f.read(min(self.sample_bytes, size))
        if not sample:
            return 0, True
        return round(count_lines(sample) * size / len(sample)), True
