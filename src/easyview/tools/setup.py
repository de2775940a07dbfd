"""
Setup helpers for initializing tools.

Convenience functions for registering the explorer tools.
"""

from pathlib import Path

from ..config.schema import AppConfig
from ..indexer import WorkspaceExplorer
from .explorer import EXPLORER_TOOLS
from .registry import ToolRegistry


def register_explorer_tools(registry: ToolRegistry, explorer: WorkspaceExplorer) -> None:
    """Register the seven read-only explorer tools around one explorer.

    Registers:
    - scan_directory
    - list_files
    - search_files
    - view_file
    - analyze_structure
    - find_large_files
    - file_info

    All tools share the explorer, and so its index.
    """
    for tool_class in EXPLORER_TOOLS:
        registry.register(tool_class(explorer))


def create_registry(config: AppConfig) -> ToolRegistry:
    """Build an explorer for ``config.workspace.root`` and a registry around it."""
    explorer = WorkspaceExplorer(Path(config.workspace.root), config.indexer)
    registry = ToolRegistry()
    register_explorer_tools(registry, explorer)
    return registry
