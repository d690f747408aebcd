"""
Detection of idempotent objects and their helper files.

An idempotent object is a file named after the directory it lives in, such as
`models/linear/linear.py`. It stands for the whole directory: the resource is
`models/linear`, and every other file directly inside `models/linear/` is a
helper that cannot be looked up on its own.

When the search base itself is such a directory (base `linear`, file
`linear.py` directly under it), the file is the base's idempotent object and
the files next to it are its helpers.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from resfind.finder.naming import (
    CURRENT_DIRECTORY,
    base_name,
    owning_directory,
    strip_extension,
)
from resfind.finder.types import FileEntry

logger = logging.getLogger(__name__)


@dataclass
class Classification:
    """
    Result of classifying the files under a base.

    `idempotent` maps each idempotent directory (relative to the base, or
    `CURRENT_DIRECTORY` for the base itself) to the file that defines it.
    """

    idempotent: dict[str, FileEntry] = field(default_factory=dict)

    def is_idempotent_object(self, entry: FileEntry) -> bool:
        return self.idempotent.get(owning_directory(entry)) == entry

    def is_helper(self, entry: FileEntry) -> bool:
        """True for files sharing an idempotent directory with its defining file."""
        directory = owning_directory(entry)
        return directory in self.idempotent and self.idempotent[directory] != entry


def is_self_named(entry: FileEntry, extensions: Iterable[str]) -> bool:
    """True for `.../name/name.<ext>` entries."""
    if len(entry.parts) < 2:
        return False
    return strip_extension(entry.name, extensions) == entry.parts[-2]


def classify(entries: Iterable[FileEntry], base: str, extensions: Iterable[str]) -> Classification:
    exts = tuple(extensions)
    anchor = base_name(base)
    result = Classification()
    for entry in entries:
        if is_self_named(entry, exts):
            result.idempotent.setdefault(owning_directory(entry), entry)
        elif (
            anchor
            and len(entry.parts) == 1
            and strip_extension(entry.name, exts) == anchor
        ):
            result.idempotent.setdefault(CURRENT_DIRECTORY, entry)
    if result.idempotent:
        logger.debug("Idempotent directories: %s", ", ".join(sorted(result.idempotent)))
    return result


def idempotent_name(directory: str) -> str:
    """Resource name of an idempotent directory, relative to the base."""
    return "" if directory == CURRENT_DIRECTORY else directory
