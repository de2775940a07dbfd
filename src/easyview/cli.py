"""
Main CLI for easyview using Click.

Every command runs the matching explorer tool against the workspace
(current directory by default) and prints its output. The index lives
only for the duration of one command.
"""

import json
import sys
from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError

from . import __version__
from .config.loader import load_config
from .logging import configure_logging
from .tools import ToolRegistry, create_registry

# Exit codes
EXIT_SUCCESS = 0
EXIT_FAILED = 1
EXIT_CONFIG_ERROR = 3


@click.group()
@click.version_option(version=__version__, prog_name="easyview")
@click.option(
    "-c", "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML configuration file",
)
@click.option(
    "-w", "--workspace",
    type=click.Path(file_okay=False, path_type=Path),
    help="Workspace root (default: current directory)",
)
@click.option("--include-hidden", is_flag=True, help="Index dotfiles and dot-directories")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warn", "error"]),
    help="Console log level (default: warn)",
)
@click.option("-v", "--verbose", count=True, help="More log output (-v info, -vv debug)")
@click.option("-q", "--quiet", is_flag=True, help="Silence log output on stderr")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also write JSON logs to this file",
)
@click.pass_context
def main(ctx: click.Context, config_path: Path | None, quiet: bool, **cli_args: Any) -> None:
    """easyview: read-only exploration of a workspace.

    Index a directory tree and query it: list, search, view, summarize.
    """
    try:
        config = load_config(config_path=config_path, cli_args=cli_args)
    except (FileNotFoundError, ValueError, ValidationError) as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    configure_logging(config.logging, quiet=quiet)
    ctx.obj = config


def _run_tool(ctx: click.Context, tool_name: str, **kwargs: Any) -> None:
    """Execute a tool, print its output and exit with the right code."""
    registry: ToolRegistry = create_registry(ctx.obj)
    # Omit unset options so the tool's defaults apply
    args = {key: value for key, value in kwargs.items() if value is not None}
    result = registry.call(tool_name, **args)

    if not result.success:
        click.echo(f"❌ Error: {result.error}", err=True)
        sys.exit(EXIT_FAILED)

    click.echo(result.output)


@main.command()
@click.option("--refresh", is_flag=True, help="Force a full rebuild of the index")
@click.pass_context
def scan(ctx: click.Context, refresh: bool) -> None:
    """Scan the workspace and print index statistics."""
    _run_tool(ctx, "scan_directory", refresh=refresh)


@main.command("ls")
@click.argument("pattern", required=False)
@click.option(
    "-s", "--sort-by",
    type=click.Choice(["name", "size", "lines", "modified"]),
    help="Sort criteria (default: name)",
)
@click.option("-n", "--limit", type=int, help="Maximum files to show (max 200)")
@click.option("--min-size", type=int, help="Minimum size in bytes")
@click.option("--max-size", type=int, help="Maximum size in bytes")
@click.pass_context
def list_cmd(ctx: click.Context, pattern: str | None, **kwargs: Any) -> None:
    """List indexed files matching PATTERN (glob over the relative path)."""
    _run_tool(ctx, "list_files", pattern=pattern, **kwargs)


@main.command()
@click.argument("pattern")
@click.option("-f", "--file-pattern", help="Only search files matching this glob")
@click.option("--case-sensitive", is_flag=True, default=None, help="Case sensitive search")
@click.option("-C", "--context-lines", type=int, help="Context lines around each match (max 5)")
@click.option("-m", "--max-results", type=int, help="Maximum matches (max 500)")
@click.option("--max-line-length", type=int, help="Truncate longer lines (max 1000)")
@click.pass_context
def search(ctx: click.Context, pattern: str, **kwargs: Any) -> None:
    """Search PATTERN (regex) across indexed text files."""
    _run_tool(ctx, "search_files", pattern=pattern, **kwargs)


@main.command()
@click.argument("file_path")
@click.option("--start", "start_line", type=int, help="First line (1-based)")
@click.option("--end", "end_line", type=int, help="Last line (inclusive)")
@click.option("--max-lines", type=int, help="Maximum lines to show (max 2000)")
@click.option("-a", "--around", "around_line", type=int, help="Center the view on this line")
@click.option("--context-size", type=int, help="Lines on each side of --around (max 100)")
@click.pass_context
def view(ctx: click.Context, file_path: str, **kwargs: Any) -> None:
    """Show a window of FILE_PATH with line numbers."""
    _run_tool(ctx, "view_file", file_path=file_path, **kwargs)


@main.command()
@click.option("-d", "--depth", type=int, help="Maximum directory depth (default: 3)")
@click.option("--no-extensions", is_flag=True, help="Hide per-extension statistics")
@click.pass_context
def structure(ctx: click.Context, depth: int | None, no_extensions: bool) -> None:
    """Summarize directories and file extensions."""
    _run_tool(ctx, "analyze_structure", depth=depth, show_extensions=not no_extensions)


@main.command()
@click.option("-n", "--limit", type=int, help="Number of files (max 50)")
@click.option("--min-size", type=int, help="Minimum size in bytes (default: 1024)")
@click.pass_context
def large(ctx: click.Context, **kwargs: Any) -> None:
    """List the largest files in the workspace."""
    _run_tool(ctx, "find_large_files", **kwargs)


@main.command()
@click.argument("file_path")
@click.pass_context
def info(ctx: click.Context, file_path: str) -> None:
    """Show size, type, line count and mtime of FILE_PATH."""
    _run_tool(ctx, "file_info", file_path=file_path)


@main.command()
@click.pass_context
def tools(ctx: click.Context) -> None:
    """Print the JSON schemas of all tools."""
    registry = create_registry(ctx.obj)
    click.echo(json.dumps(registry.schemas(), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
