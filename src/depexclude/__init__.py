"""Backup exclusion utilities for dependency directories.

This package provides tools for finding reproducible, tool-managed dependency
directories (e.g. ``node_modules`` next to a ``package.json``) and excluding them
from filesystem backups.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("depexclude")
except PackageNotFoundError:
    __version__ = "unknown"
