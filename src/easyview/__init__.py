"""
easyview: read-only exploration of a workspace.

In-memory file index with bounded listing, search, structure analysis
and windowed viewing.
"""

__version__ = "1.0.0"
