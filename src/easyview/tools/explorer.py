"""
Read-only exploration tools.

Seven tools share one WorkspaceExplorer and render its structured
results as text:

- scan_directory: build or rebuild the index, print statistics
- list_files: filter/sort indexed files
- search_files: regex search with context
- view_file: windowed view of one file
- analyze_structure: directory and extension summary
- find_large_files: largest files first
- file_info: metadata of one file without loading its content
"""

from abc import abstractmethod
from datetime import datetime, timezone
from typing import Any

import structlog
from pydantic import ValidationError

from ..indexer import ExplorerError, WorkspaceExplorer, is_text_file
from ..indexer.query import NO_EXTENSION, ROOT_DIR
from .base import BaseTool, ToolResult
from .schemas import (
    AnalyzeStructureArgs,
    FileInfoArgs,
    FindLargeFilesArgs,
    ListFilesArgs,
    ScanDirectoryArgs,
    SearchFilesArgs,
    ViewFileArgs,
)

logger = structlog.get_logger()

_SIZE_UNITS = ("B", "KB", "MB", "GB")


def format_bytes(size: int) -> str:
    """Human-readable size with one decimal at most: 0 B, 512 B, 1.5 KB, 2 MB."""
    if size <= 0:
        return "0 B"
    exponent = 0
    while exponent < len(_SIZE_UNITS) - 1 and size >= 1024 ** (exponent + 1):
        exponent += 1
    value = round(size / 1024 ** exponent, 1)
    number = str(int(value)) if value.is_integer() else str(value)
    return f"{number} {_SIZE_UNITS[exponent]}"


def _format_lines(count: int, estimated: bool = False) -> str:
    prefix = "~" if estimated else ""
    return f"{prefix}{count:,} lines"


class ExplorerTool(BaseTool):
    """Base for tools backed by a WorkspaceExplorer.

    Subclasses implement ``run(args)`` and return the output text;
    validation and explorer errors are turned into failed ToolResults.
    """

    def __init__(self, explorer: WorkspaceExplorer) -> None:
        self.explorer = explorer

    @abstractmethod
    def run(self, args: Any) -> str:
        """Render the tool output for validated ``args``."""

    def execute(self, **kwargs: Any) -> ToolResult:
        try:
            args = self.validate_args(kwargs)
        except ValidationError as e:
            return ToolResult(success=False, output="", error=f"Invalid arguments: {e}")

        try:
            output = self.run(args)
        except ExplorerError as e:
            logger.info("tool.error", tool=self.name, error=str(e))
            return ToolResult(success=False, output="", error=str(e))
        except ValueError as e:
            return ToolResult(success=False, output="", error=str(e))
        except Exception as e:
            logger.error("tool.unexpected_error", tool=self.name, error=str(e), exc_info=True)
            return ToolResult(
                success=False,
                output="",
                error=f"Unexpected error in {self.name}: {e}",
            )

        return ToolResult(success=True, output=output)


class ScanDirectoryTool(ExplorerTool):
    """Builds (or rebuilds) the file index and summarizes it."""

    name = "scan_directory"
    description = "Scan and index all files in the current working directory"
    args_model = ScanDirectoryArgs

    def run(self, args: ScanDirectoryArgs) -> str:
        result = self.explorer.scan(refresh=args.refresh)
        index = result.index

        extensions: dict[str, int] = {}
        for record in index:
            ext = record.extension or NO_EXTENSION
            extensions[ext] = extensions.get(ext, 0) + 1
        top = sorted(extensions.items(), key=lambda item: item[1], reverse=True)[:10]
        top_text = ", ".join(f"{ext}: {count}" for ext, count in top) or "(none)"

        parts = [
            "✅ **Directory Scanned**",
            f"📍 Location: {self.explorer.root}",
            "",
            "📊 **Statistics:**",
            f"• Files: {len(index)}",
            f"• Total Size: {format_bytes(index.total_size)}",
            f"• Total Lines: {index.total_lines:,}",
        ]
        if result.skipped:
            parts.append(f"• Skipped: {len(result.skipped)}")
        parts += ["", f"🗂️ **Top Extensions:** {top_text}"]
        return "\n".join(parts)


class ListFilesTool(ExplorerTool):
    """Lists indexed files with filtering and sorting."""

    name = "list_files"
    description = (
        "List files with smart filtering and sorting options. "
        "pattern is a glob over the relative path ('*.py', 'src/*'); "
        "sort_by: name, size, lines or modified."
    )
    args_model = ListFilesArgs

    def run(self, args: ListFilesArgs) -> str:
        result = self.explorer.list_files(
            pattern=args.pattern,
            sort_by=args.sort_by,
            limit=args.limit,
            min_size=args.min_size,
            max_size=args.max_size,
        )

        summary = f"Found {result.matched} files"
        if result.truncated:
            summary += f", showing first {result.shown}"

        lines = []
        for record in result.files:
            lines_text = (
                f" ({_format_lines(record.line_count, record.estimated)})"
                if record.line_count > 0 else ""
            )
            lines.append(f"📄 **{record.path}** - {format_bytes(record.size)}{lines_text}")

        return f"📁 **Files in Working Directory**\n{summary}\n\n" + "\n".join(lines)


class SearchFilesTool(ExplorerTool):
    """Regex search across indexed text files."""

    name = "search_files"
    description = (
        "Search for patterns across all files with smart result limiting. "
        "pattern is a regex; file_pattern limits the files searched. "
        "Results come in file order, then line order."
    )
    args_model = SearchFilesArgs

    def run(self, args: SearchFilesArgs) -> str:
        result = self.explorer.search_files(
            args.pattern,
            file_pattern=args.file_pattern,
            case_sensitive=args.case_sensitive,
            context_lines=args.context_lines,
            max_results=args.max_results,
            max_line_length=args.max_line_length,
        )

        if not result.matches:
            return f"🔍 **No matches found** for pattern: `{args.pattern}`"

        blocks = []
        for match in result.matches:
            text = f"📄 **{match.path}:{match.line_number}**\n```\n{match.content}\n```"
            if match.context:
                context = "\n".join(f"{c.line_number}: {c.content}" for c in match.context)
                text += f"\n*Context:*\n{context}"
            blocks.append(text)

        summary = f"Found {len(result.matches)} matches"
        if result.truncated:
            summary += " (limited)"

        return (
            f"🔍 **Search Results for:** `{args.pattern}`\n{summary}\n\n"
            + "\n\n".join(blocks)
        )


class ViewFileTool(ExplorerTool):
    """Windowed view of a single file."""

    name = "view_file"
    description = (
        "View file contents with smart chunking for large files. "
        "Use around_line to center the view on a line (e.g. a search match)."
    )
    args_model = ViewFileArgs

    def run(self, args: ViewFileArgs) -> str:
        view = self.explorer.view_file(
            args.file_path,
            start_line=args.start_line,
            end_line=args.end_line,
            max_lines=args.max_lines,
            around_line=args.around_line,
            context_size=args.context_size,
        )

        header = (
            f"📄 **{view.path}** ({view.total_lines} lines, {format_bytes(view.size)})"
        )
        if not view.lines:
            return f"{header}\nNo lines to show from line {view.start_line}"

        body = "\n".join(
            f"{'→' if line.marked else ' '}{line.number:>4}: {line.content}"
            for line in view.lines
        )
        return (
            f"{header}\nShowing lines {view.start_line}-{view.end_line}\n\n"
            f"```\n{body}\n```"
        )


class AnalyzeStructureTool(ExplorerTool):
    """Directory and extension summary of the workspace."""

    name = "analyze_structure"
    description = "Analyze project structure and provide summary statistics"
    args_model = AnalyzeStructureArgs

    def run(self, args: AnalyzeStructureArgs) -> str:
        summary = self.explorer.analyze_structure(
            depth=args.depth, show_extensions=args.show_extensions
        )

        lines = ["📁 **Directory Structure:**"]
        for directory in summary.directories:
            name = "(root)" if directory.path == ROOT_DIR else directory.path
            indent = "  " * min(max(directory.depth, 1), 5)
            lines.append(f"{indent}• {name} ({directory.file_count} files)")
        if summary.total_directories > len(summary.directories):
            hidden = summary.total_directories - len(summary.directories)
            lines.append(f"  ... {hidden} more directories")

        if args.show_extensions:
            lines += ["", "🗂️ **File Extensions:**"]
            for ext in summary.extensions:
                lines_text = f", {ext.total_lines:,} lines" if ext.total_lines > 0 else ""
                lines.append(
                    f"• **{ext.extension}**: {ext.file_count} files, "
                    f"{format_bytes(ext.total_size)}{lines_text}"
                )

        return "\n".join(lines)


class FindLargeFilesTool(ExplorerTool):
    """Largest indexed files first."""

    name = "find_large_files"
    description = "Find the largest files in the working directory"
    args_model = FindLargeFilesArgs

    def run(self, args: FindLargeFilesArgs) -> str:
        records = self.explorer.find_large_files(limit=args.limit, min_size=args.min_size)
        if not records:
            return f"📊 No files found larger than {format_bytes(args.min_size)}"

        lines = []
        for position, record in enumerate(records, start=1):
            lines_text = (
                f" ({_format_lines(record.line_count, record.estimated)})"
                if record.line_count > 0 else ""
            )
            lines.append(
                f"{position}. **{record.path}** - {format_bytes(record.size)}{lines_text}"
            )
        return "📊 **Largest Files:**\n\n" + "\n".join(lines)


class FileInfoTool(ExplorerTool):
    """Metadata of one file, refreshed if stale."""

    name = "file_info"
    description = (
        "Get detailed information about a specific file (size, lines, type) "
        "without loading content. Line counts of very large files are estimated."
    )
    args_model = FileInfoArgs

    def run(self, args: FileInfoArgs) -> str:
        record = self.explorer.file_info(args.file_path)

        file_type = "Text" if is_text_file(record.path) else "Binary"
        extension = record.extension or NO_EXTENSION
        modified = datetime.fromtimestamp(record.last_modified, tz=timezone.utc)

        parts = [
            f"📄 **File Information:** {args.file_path}",
            "",
            f"📊 **Size:** {format_bytes(record.size)}",
            f"🗂️ **Type:** {file_type} ({extension})",
        ]
        if record.line_count > 0:
            if record.estimated:
                parts.append(f"📏 **Lines:** ~{record.line_count:,} (estimated)")
            else:
                parts.append(f"📏 **Lines:** {record.line_count:,}")
        parts += [
            f"📅 **Modified:** {modified.date().isoformat()}",
            f"📍 **Full Path:** {self.explorer.root / record.path}",
        ]
        return "\n".join(parts)


EXPLORER_TOOLS: tuple[type[ExplorerTool], ...] = (
    ScanDirectoryTool,
    ListFilesTool,
    SearchFilesTool,
    ViewFileTool,
    AnalyzeStructureTool,
    FindLargeFilesTool,
    FileInfoTool,
)
