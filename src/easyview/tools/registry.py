"""
Registry of explorer tools, keyed by tool name.

The CLI and any other front end look tools up here, call them by name
and export their JSON schemas.
"""

from typing import Any, Iterator

from .base import BaseTool, ToolResult


class ToolNotFoundError(KeyError):
    """No tool is registered under the requested name."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = available
        super().__init__(name)

    def __str__(self) -> str:
        names = ", ".join(self.available) or "(none)"
        return f"Tool '{self.name}' not found. Available tools: {names}"


class DuplicateToolError(ValueError):
    """A tool with the same name is already registered."""


class ToolRegistry:
    """Name → tool mapping with dispatch and schema export."""

    def __init__(self) -> None:
        self._tools: dict[str, BaseTool] = {}

    def register(self, tool: BaseTool, replace: bool = False) -> None:
        """Add ``tool`` under ``tool.name``.

        Raises:
            DuplicateToolError: If the name is taken and ``replace`` is False
        """
        if tool.name in self._tools and not replace:
            raise DuplicateToolError(f"Tool '{tool.name}' is already registered")
        self._tools[tool.name] = tool

    def get(self, name: str) -> BaseTool:
        try:
            return self._tools[name]
        except KeyError:
            raise ToolNotFoundError(name, self.names()) from None

    def call(self, name: str, **kwargs: Any) -> ToolResult:
        """Execute a tool by name. Tool failures come back in the ToolResult.

        Raises:
            ToolNotFoundError: If no tool has that name
        """
        return self.get(name).execute(**kwargs)

    def names(self) -> list[str]:
        return sorted(self._tools)

    def tools(self) -> list[BaseTool]:
        """Registered tools ordered by name."""
        return [self._tools[name] for name in self.names()]

    def schemas(self, names: list[str] | None = None) -> list[dict[str, Any]]:
        """JSON schemas of all tools, or of ``names`` (unknown names skipped)."""
        if names is None:
            selected = self.tools()
        else:
            selected = [self._tools[n] for n in names if n in self._tools]
        return [tool.get_schema() for tool in selected]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[BaseTool]:
        return iter(self.tools())

    def __len__(self) -> int:
        return len(self._tools)

    def __repr__(self) -> str:
        return f"<ToolRegistry({len(self)} tools)>"
