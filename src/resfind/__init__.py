"""
resfind: find project resources by exact, partial or wildcard name.
"""

from resfind.finder import (
    FilesystemError,
    FinderConfig,
    FinderError,
    InvalidArgument,
    ResourceFinder,
    SearchMethod,
)

__all__ = [
    "FilesystemError",
    "FinderConfig",
    "FinderError",
    "InvalidArgument",
    "ResourceFinder",
    "SearchMethod",
]
