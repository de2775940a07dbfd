"""
Configuration module for easyview.

Exports the main components for convenient imports.
"""

from .loader import load_config
from .schema import AppConfig, IndexerConfig, LoggingConfig, WorkspaceConfig

__all__ = [
    "load_config",
    "AppConfig",
    "IndexerConfig",
    "LoggingConfig",
    "WorkspaceConfig",
]
