"""
Indexador del workspace, construcción del File Index.

Recorre la raíz del workspace y produce un índice en memoria con
metadatos de cada archivo (tamaño, líneas, extensión, mtime). El
contenido nunca se guarda: búsqueda y visor releen del disco.

Reglas:
- Los directorios excluidos (.git, node_modules, dist, build...) y los
  dotfiles no se recorren.
- Los archivos de más de 50 MiB no se indexan.
- Un symlink se indexa con su propio nombre solo si su destino está dentro
  del workspace; si no, va a ``ScanResult.skipped``.
- Un archivo ilegible no aborta el build: se registra en
  ``ScanResult.skipped`` y se continúa (índice parcial válido).
"""

import os
import time
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Iterator, Mapping

import structlog

from .classify import PathClassifier, count_lines, extension_of
from .errors import ScanError

logger = structlog.get_logger()

# Límite de tamaño para indexar un archivo (50 MiB)
MAX_FILE_SIZE_DEFAULT = 50 * 1024 * 1024


# --- Estructuras de datos ---

@dataclass(frozen=True)
class FileRecord:
    """Metadatos de un archivo indexado."""

    path: str               # Relativo al workspace, separadores POSIX
    size: int
    line_count: int         # 0 para binarios
    extension: str          # ".py", "" si no tiene
    last_modified: float    # st_mtime, para detectar staleness
    estimated: bool = False  # True si line_count es una estimación por muestreo


@dataclass(frozen=True)
class FileIndex:
    """Snapshot inmutable del índice.

    ``records`` conserva el orden de recorrido. Las modificaciones
    producen un snapshot nuevo; nunca se muta uno existente.
    """

    records: Mapping[str, FileRecord] = field(
        default_factory=lambda: MappingProxyType({})
    )
    built: bool = False

    @classmethod
    def from_records(cls, records: dict[str, FileRecord], built: bool = True) -> "FileIndex":
        return cls(records=MappingProxyType(dict(records)), built=built)

    def __len__(self) -> int:
        return len(self.records)

    def __contains__(self, path: object) -> bool:
        return path in self.records

    def __iter__(self) -> Iterator[FileRecord]:
        return iter(self.records.values())

    def get(self, path: str) -> FileRecord | None:
        return self.records.get(path)

    def with_record(self, record: FileRecord) -> "FileIndex":
        """Nuevo snapshot con ``record`` añadido o reemplazado."""
        records = dict(self.records)
        records[record.path] = record
        return FileIndex.from_records(records, built=self.built)

    @property
    def total_size(self) -> int:
        return sum(r.size for r in self.records.values())

    @property
    def total_lines(self) -> int:
        return sum(r.line_count for r in self.records.values())


@dataclass(frozen=True)
class SkippedPath:
    """Archivo que el build no indexó, con el motivo."""

    path: str
    reason: str


@dataclass(frozen=True)
class ScanResult:
    """Resultado de un build completo."""

    index: FileIndex
    skipped: tuple[SkippedPath, ...] = ()
    build_time_ms: float = 0.0


# --- Builder ---

class IndexBuilder:
    """Construye el File Index de un workspace.

    Recorre el workspace con os.walk en orden determinista (directorios
    y archivos ordenados) cortando los subárboles excluidos in-place.
    """

    def __init__(
        self,
        workspace_root: Path,
        classifier: PathClassifier | None = None,
        max_file_size: int = MAX_FILE_SIZE_DEFAULT,
    ) -> None:
        """Inicializa el builder.

        Args:
            workspace_root: Directorio raíz del workspace
            classifier: Reglas de exclusión (defaults si None)
            max_file_size: Tamaño máximo de archivo a indexar (bytes)
        """
        self.root = workspace_root.resolve()
        self.classifier = classifier or PathClassifier()
        self.max_file_size = max_file_size

    def build(self) -> ScanResult:
        """Construye el índice completo del workspace.

        Returns:
            ScanResult con el índice y los archivos omitidos

        Raises:
            ScanError: Si la raíz no existe o no se puede enumerar
        """
        self._check_root()
        start_ms = time.monotonic() * 1000
        logger.info("index.build.start", root=str(self.root))

        records: dict[str, FileRecord] = {}
        skipped: list[SkippedPath] = []

        for file_path in self._walk(skipped):
            rel_path = file_path.relative_to(self.root).as_posix()
            try:
                record = self._analyze_file(file_path, rel_path)
            except OSError as e:
                logger.warning("index.file_skipped", path=rel_path, error=str(e))
                skipped.append(SkippedPath(rel_path, f"unreadable: {e.strerror or e}"))
                continue

            if record is None:
                skipped.append(SkippedPath(rel_path, "too_large"))
                continue

            records[rel_path] = record

        build_time_ms = round(time.monotonic() * 1000 - start_ms, 1)
        logger.info(
            "index.build.complete",
            files=len(records),
            skipped=len(skipped),
            build_time_ms=build_time_ms,
        )

        return ScanResult(
            index=FileIndex.from_records(records, built=True),
            skipped=tuple(skipped),
            build_time_ms=build_time_ms,
        )

    def _check_root(self) -> None:
        if not self.root.exists():
            raise ScanError(str(self.root), "directory does not exist")
        if not self.root.is_dir():
            raise ScanError(str(self.root), "not a directory")

    def _walk(self, skipped: list[SkippedPath]) -> Iterator[Path]:
        """Recorre el workspace respetando exclusiones."""

        def on_error(error: OSError) -> None:
            failed = Path(error.filename) if error.filename else self.root
            if failed == self.root:
                raise ScanError(str(self.root), error.strerror or str(error))
            rel = failed.relative_to(self.root).as_posix()
            logger.warning("index.dir_skipped", path=rel, error=str(error))
            skipped.append(SkippedPath(rel, f"unreadable directory: {error.strerror or error}"))

        for dirpath, dirnames, filenames in os.walk(self.root, onerror=on_error):
            # Excluir directorios ignorados (in-place para cortar el árbol)
            dirnames[:] = sorted(
                d for d in dirnames if not self.classifier.is_excluded_segment(d)
            )

            for filename in sorted(filenames):
                if self.classifier.is_excluded_segment(filename):
                    continue
                path = Path(dirpath) / filename
                if path.is_symlink() and self._link_escapes(path):
                    rel = path.relative_to(self.root).as_posix()
                    logger.info("index.symlink_skipped", path=rel)
                    skipped.append(SkippedPath(rel, "symlink outside workspace"))
                    continue
                yield path

    def _link_escapes(self, path: Path) -> bool:
        """True si el destino del symlink queda fuera del workspace (o no se resuelve)."""
        try:
            target = path.resolve()
        except (OSError, RuntimeError):
            # Ciclo de symlinks
            return True
        return not target.is_relative_to(self.root)

    def _analyze_file(self, path: Path, rel_path: str) -> FileRecord | None:
        """Analiza un archivo; None si supera el tamaño máximo.

        Raises:
            OSError: Si el archivo no se puede stat-ear o leer
        """
        stat = path.stat()
        if stat.st_size > self.max_file_size:
            logger.debug("index.file_too_large", path=rel_path, size=stat.st_size)
            return None

        lines = 0
        if self.classifier.is_text_file(rel_path) and stat.st_size > 0:
            lines = count_lines(path.read_bytes())

        return FileRecord(
            path=rel_path,
            size=stat.st_size,
            line_count=lines,
            extension=extension_of(rel_path),
            last_modified=stat.st_mtime,
        )
