"""
Conversion between file paths and resource names.

A resource name is the file's path relative to the search base, with `/`
separators and the source extension removed. The empty name is the root
resource: the base directory itself.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from resfind.finder.types import FileEntry

# Owning directory of files that sit directly under the base.
CURRENT_DIRECTORY = "."

_DOUBLE_SLASH = re.compile(r"/{2,}")


def strip_extension(name: str, extensions: Iterable[str]) -> str:
    """Remove one trailing recognized extension, ignoring case."""
    lowered = name.lower()
    for ext in extensions:
        if lowered.endswith(ext):
            return name[: -len(ext)]
    return name


def has_extension(name: str, extensions: Iterable[str]) -> bool:
    lowered = name.lower()
    return any(lowered.endswith(ext) for ext in extensions)


def resource_name(entry: FileEntry, extensions: Iterable[str]) -> str:
    return strip_extension(entry.relpath, extensions)


def owning_directory(entry: FileEntry) -> str:
    """
    Parent directory of an entry relative to the base, or `CURRENT_DIRECTORY`
    when the file sits directly under the base.
    """
    if len(entry.parts) == 1:
        return CURRENT_DIRECTORY
    return "/".join(entry.parts[:-1])


def base_name(base: str) -> str:
    """Final segment of a base prefix such as `models/linear/`."""
    segments = [s for s in normalize_separators(base).split("/") if s]
    return segments[-1] if segments else ""


def normalize_separators(path: str) -> str:
    return path.replace("\\", "/")


def join_resource(base: str, name: str) -> str:
    """
    Join a resource name onto the base it was found under. Empty sides add no
    separator and doubled separators are collapsed.
    """
    joined = "/".join(part for part in (normalize_separators(base), name) if part)
    joined = _DOUBLE_SLASH.sub("/", joined)
    if len(joined) > 1:
        joined = joined.rstrip("/")
    return joined
