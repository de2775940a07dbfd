"""
Argument models of the explorer tools.

The same models validate incoming calls and produce the inputSchema
exported by the registry.

Values above a documented maximum are clamped to it rather than
rejected, so an oversized ``limit`` still returns a bounded result.
"""

from typing import Literal

from pydantic import BaseModel, Field, field_validator


def _clamp(value: object, maximum: int) -> object:
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value > maximum:
        return maximum
    return value


class ScanDirectoryArgs(BaseModel):
    """Arguments for the scan_directory tool."""

    refresh: bool = Field(
        default=False,
        description="Force a full rebuild of the file index",
    )

    model_config = {"extra": "forbid"}


class ListFilesArgs(BaseModel):
    """Arguments for the list_files tool."""

    pattern: str = Field(
        default="*",
        description=(
            "Glob over the relative path: '*' matches any characters (including '/'), "
            "'?' exactly one"
        ),
        examples=["*.py", "src/*.ts", "*test*"],
    )
    sort_by: Literal["name", "size", "lines", "modified"] = Field(
        default="name",
        description="Sort by name (ascending) or size/lines/modified (descending)",
    )
    limit: int = Field(
        default=50,
        ge=1,
        description="Maximum number of files to return (max 200)",
    )
    min_size: int = Field(
        default=0,
        ge=0,
        description="Minimum file size in bytes",
    )
    max_size: int | None = Field(
        default=None,
        ge=0,
        description="Maximum file size in bytes",
    )

    @field_validator("limit", mode="before")
    @classmethod
    def _cap_limit(cls, v: object) -> object:
        return _clamp(v, 200)

    model_config = {"extra": "forbid"}


class SearchFilesArgs(BaseModel):
    """Arguments for the search_files tool."""

    pattern: str = Field(
        description="Regex searched in every line",
        examples=["TODO", "def \\w+_handler", "import (os|sys)"],
    )
    file_pattern: str = Field(
        default="*",
        description="Limit the search to files whose relative path matches this glob",
        examples=["*.py", "src/*"],
    )
    case_sensitive: bool = Field(
        default=False,
        description="If False, the search ignores case",
    )
    context_lines: int = Field(
        default=2,
        ge=0,
        description="Context lines before and after each match (max 5)",
    )
    max_results: int = Field(
        default=100,
        ge=1,
        description="Maximum number of matches to return (max 500)",
    )
    max_line_length: int = Field(
        default=200,
        ge=1,
        description="Truncate lines longer than this (max 1000)",
    )

    @field_validator("context_lines", mode="before")
    @classmethod
    def _cap_context(cls, v: object) -> object:
        return _clamp(v, 5)

    @field_validator("max_results", mode="before")
    @classmethod
    def _cap_results(cls, v: object) -> object:
        return _clamp(v, 500)

    @field_validator("max_line_length", mode="before")
    @classmethod
    def _cap_line_length(cls, v: object) -> object:
        return _clamp(v, 1000)

    model_config = {"extra": "forbid"}


class ViewFileArgs(BaseModel):
    """Arguments for the view_file tool."""

    file_path: str = Field(
        description="Path relative to the workspace of the file to view",
        examples=["README.md", "src/main.py"],
    )
    start_line: int = Field(
        default=1,
        ge=1,
        description="Starting line number (1-based)",
    )
    end_line: int | None = Field(
        default=None,
        ge=1,
        description="Ending line number (inclusive)",
    )
    max_lines: int = Field(
        default=500,
        ge=1,
        description="Maximum lines to display (max 2000)",
    )
    around_line: int | None = Field(
        default=None,
        ge=1,
        description="Show lines around this line number (takes precedence over start/end)",
    )
    context_size: int = Field(
        default=25,
        ge=0,
        description="Lines shown on each side of around_line (max 100)",
    )

    @field_validator("max_lines", mode="before")
    @classmethod
    def _cap_max_lines(cls, v: object) -> object:
        return _clamp(v, 2000)

    @field_validator("context_size", mode="before")
    @classmethod
    def _cap_context_size(cls, v: object) -> object:
        return _clamp(v, 100)

    model_config = {"extra": "forbid"}


class AnalyzeStructureArgs(BaseModel):
    """Arguments for the analyze_structure tool."""

    depth: int = Field(
        default=3,
        ge=0,
        description="Maximum directory depth listed (root = 0)",
    )
    show_extensions: bool = Field(
        default=True,
        description="Include per-extension statistics",
    )

    model_config = {"extra": "forbid"}


class FindLargeFilesArgs(BaseModel):
    """Arguments for the find_large_files tool."""

    limit: int = Field(
        default=20,
        ge=1,
        description="Number of largest files to show (max 50)",
    )
    min_size: int = Field(
        default=1024,
        ge=0,
        description="Minimum size in bytes",
    )

    @field_validator("limit", mode="before")
    @classmethod
    def _cap_limit(cls, v: object) -> object:
        return _clamp(v, 50)

    model_config = {"extra": "forbid"}


class FileInfoArgs(BaseModel):
    """Arguments for the file_info tool."""

    file_path: str = Field(
        description="Path relative to the workspace of the file",
        examples=["package.json", "data/dump.sql"],
    )

    model_config = {"extra": "forbid"}
