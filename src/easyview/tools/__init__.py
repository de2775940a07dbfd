"""
Módulo de tools - Herramientas de exploración del workspace.

Exporta todas las tools, el registry y los componentes base.
"""

from .base import BaseTool, ToolResult
from .explorer import (
    AnalyzeStructureTool,
    ExplorerTool,
    FileInfoTool,
    FindLargeFilesTool,
    ListFilesTool,
    ScanDirectoryTool,
    SearchFilesTool,
    ViewFileTool,
    format_bytes,
)
from .registry import DuplicateToolError, ToolNotFoundError, ToolRegistry
from .schemas import (
    AnalyzeStructureArgs,
    FileInfoArgs,
    FindLargeFilesArgs,
    ListFilesArgs,
    ScanDirectoryArgs,
    SearchFilesArgs,
    ViewFileArgs,
)
from .setup import create_registry, register_explorer_tools

__all__ = [
    # Base
    "BaseTool",
    "ToolResult",
    "ExplorerTool",
    # Registry
    "ToolRegistry",
    "ToolNotFoundError",
    "DuplicateToolError",
    # Explorer tools
    "ScanDirectoryTool",
    "ListFilesTool",
    "SearchFilesTool",
    "ViewFileTool",
    "AnalyzeStructureTool",
    "FindLargeFilesTool",
    "FileInfoTool",
    "format_bytes",
    # Schemas
    "ScanDirectoryArgs",
    "ListFilesArgs",
    "SearchFilesArgs",
    "ViewFileArgs",
    "AnalyzeStructureArgs",
    "FindLargeFilesArgs",
    "FileInfoArgs",
    # Setup
    "register_explorer_tools",
    "create_registry",
]
