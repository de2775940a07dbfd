"""
Simplified glob patterns for workspace paths.

The grammar has exactly two wildcards:

- ``*`` matches any run of characters, including ``/``
- ``?`` matches exactly one character

Everything else is literal. A compiled pattern is anchored to the whole
workspace-relative path, so ``*.py`` matches ``src/main.py`` but
``src/*.py`` does not match ``lib/src/main.py``.
"""

import re

from .errors import PatternError

MATCH_ALL = "*"


def compile_glob(pattern: str) -> re.Pattern[str]:
    """Compile a simplified glob into an anchored regular expression.

    Raises:
        PatternError: If the pattern is not a string.
    """
    if not isinstance(pattern, str):
        raise PatternError(repr(pattern), "glob pattern must be a string")

    parts: list[str] = []
    for char in pattern:
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))

    return re.compile("".join(parts), re.DOTALL)


def glob_matcher(pattern: str | None):
    """Return a predicate ``path -> bool`` for a glob.

    An empty or missing pattern, and the bare ``*``, match every path
    without compiling anything.
    """
    if not pattern or pattern == MATCH_ALL:
        return lambda path: True

    regex = compile_glob(pattern)
    return lambda path: regex.fullmatch(path) is not None


def compile_regex(pattern: str, case_sensitive: bool = False) -> re.Pattern[str]:
    """Compile a search regex, mapping ``re.error`` to ``PatternError``."""
    flags = 0 if case_sensitive else re.IGNORECASE
    try:
        return re.compile(pattern, flags)
    except re.error as e:
        raise PatternError(pattern, str(e)) from e
