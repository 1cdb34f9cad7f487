"""Directory to Markdown conversion utilities.

This package renders a directory structure as an ASCII tree and can produce a
Markdown document that pairs the tree with the contents of every included file.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("dir2md")
except PackageNotFoundError:
    __version__ = "unknown"
