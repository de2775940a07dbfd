"""
Pydantic models for easyview configuration.

Three sections: the workspace root, the indexer limits and logging.
Unknown keys are rejected so typos in the YAML file fail loudly.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

MIB = 1024 * 1024


class LoggingConfig(BaseModel):
    """Logging system configuration."""

    level: Literal["debug", "info", "warn", "error"] = "warn"
    file: Path | None = None
    verbose: int = 0

    model_config = {"extra": "forbid"}


class WorkspaceConfig(BaseModel):
    """Workspace (explored directory) configuration."""

    root: Path = Path(".")

    model_config = {"extra": "forbid"}


class IndexerConfig(BaseModel):
    """File index and query limits.

    The index is built on first use and kept in memory for the process
    lifetime. These limits bound the cost of a scan, a search and a view
    on large workspaces.
    """

    max_file_size: int = Field(
        default=50 * MIB,
        ge=0,
        description="Files larger than this (bytes) are left out of the index (default: 50 MiB)",
    )

    max_view_size: int = Field(
        default=10 * MIB,
        ge=0,
        description="Largest file view_file will read (default: 10 MiB)",
    )

    exact_count_limit: int = Field(
        default=5 * MIB,
        ge=0,
        description=(
            "file_info counts lines exactly up to this size; larger text "
            "files get an estimate from a prefix sample (default: 5 MiB)"
        ),
    )

    sample_bytes: int = Field(
        default=64 * 1024,
        ge=1,
        description="Prefix size read to estimate line counts of large files (default: 64 KiB)",
    )

    max_search_files: int = Field(
        default=1000,
        ge=1,
        description="Maximum candidate files read by one search_files call",
    )

    exclude_dirs: list[str] = Field(
        default_factory=list,
        description=(
            "Additional directories to exclude (besides defaults: "
            ".git, node_modules, dist, build, __pycache__, .venv, etc.)"
        ),
    )

    include_hidden: bool = Field(
        default=False,
        description="If True, dotfiles and dot-directories are indexed (.git stays excluded)",
    )

    model_config = {"extra": "forbid"}


class AppConfig(BaseModel):
    """Root model; ``load_config()`` validates the merged sources against it."""

    workspace: WorkspaceConfig = Field(default_factory=WorkspaceConfig)
    indexer: IndexerConfig = Field(default_factory=IndexerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"extra": "forbid"}
