"""
Resource lookup over a project directory tree.

Resources are source files named by their path without the extension.
A file named after its own directory is that directory's idempotent object,
and the files beside it are helpers that are never returned.

Usage, for a tree `project/foo/one/one.R`, `project/foo/one/helper.R`,
`project/foo/two.R`::

    from resfind.finder import FinderConfig, ResourceFinder

    finder = ResourceFinder("project/", FinderConfig(extensions=[".R"]))
    finder.find("fone")                      # ["foo/one"]
    finder.find("wo", method="partial")      # ["foo/two"]
    finder.find("helper", method="partial")  # []
    finder.exists("foo/two")                 # True
"""

from resfind.finder.defaults import DEFAULT_EXCLUDES, DEFAULT_EXTENSIONS
from resfind.finder.errors import FilesystemError, FinderError, InvalidArgument
from resfind.finder.resolver import ResourceFinder
from resfind.finder.types import FinderConfig, SearchMethod, SearchQuery

__all__ = [
    "DEFAULT_EXCLUDES",
    "DEFAULT_EXTENSIONS",
    "FilesystemError",
    "FinderConfig",
    "FinderError",
    "InvalidArgument",
    "ResourceFinder",
    "SearchMethod",
    "SearchQuery",
]
