"""
Módulo indexer: índice en memoria del workspace y consultas acotadas.

Proporciona el File Index (metadatos de cada archivo) y las operaciones
de solo lectura sobre él: listado, estructura, búsqueda de contenido,
visor por ventanas y refresco de un único registro.
"""

from .classify import PathClassifier, is_text_file
from .engine import WorkspaceExplorer
from .errors import (
    ExplorerError,
    NotAFileError,
    NotFoundError,
    PathTraversalError,
    PatternError,
    ScanError,
    TooLargeError,
    UnreadableError,
)
from .patterns import compile_glob
from .query import DirectoryStat, ExtensionStat, ListResult, StructureSummary
from .search import ContextLine, SearchMatch, SearchResult
from .tree import FileIndex, FileRecord, IndexBuilder, ScanResult, SkippedPath
from .viewer import FileView, ViewLine

__all__ = [
    "WorkspaceExplorer",
    # Index
    "FileIndex",
    "FileRecord",
    "IndexBuilder",
    "ScanResult",
    "SkippedPath",
    "PathClassifier",
    "is_text_file",
    "compile_glob",
    # Results
    "ListResult",
    "StructureSummary",
    "DirectoryStat",
    "ExtensionStat",
    "SearchResult",
    "SearchMatch",
    "ContextLine",
    "FileView",
    "ViewLine",
    # Errors
    "ExplorerError",
    "NotFoundError",
    "NotAFileError",
    "TooLargeError",
    "PatternError",
    "ScanError",
    "PathTraversalError",
    "UnreadableError",
]
