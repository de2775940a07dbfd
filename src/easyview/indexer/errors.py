"""
Typed errors raised by the workspace explorer.

Every error carries the offending path (or pattern) so the tool layer
can build a readable message without parsing strings.
"""


class ExplorerError(Exception):
    """Base class for all explorer errors."""

    pass


class NotFoundError(ExplorerError):
    """The requested path does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"File not found: {path}")


class NotAFileError(ExplorerError):
    """The requested path is a directory where a file was expected."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Path is a directory, not a file: {path}")


class TooLargeError(ExplorerError):
    """The file exceeds a size cap."""

    def __init__(self, path: str, size: int, limit: int) -> None:
        self.path = path
        self.size = size
        self.limit = limit
        super().__init__(
            f"File too large to display: {path} ({size} bytes, limit {limit} bytes)"
        )


class PatternError(ExplorerError):
    """Invalid glob or regular expression."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid pattern '{pattern}': {reason}")


class ScanError(ExplorerError):
    """The workspace root could not be enumerated."""

    def __init__(self, root: str, reason: str) -> None:
        self.root = root
        self.reason = reason
        super().__init__(f"Cannot scan workspace {root}: {reason}")


class PathTraversalError(ExplorerError):
    """A named path resolves outside the workspace."""

    def __init__(self, path: str, resolved: str, root: str) -> None:
        self.path = path
        super().__init__(
            f"Path '{path}' escapes the workspace. "
            f"Resolved: {resolved}, Workspace: {root}"
        )


class UnreadableError(ExplorerError):
    """The file exists but its content cannot be read."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read file: {path} ({reason})")
