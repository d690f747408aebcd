"""Exceptions raised by resource lookup."""

from __future__ import annotations


class FinderError(Exception):
    """Base class for all resource lookup errors."""


class InvalidArgument(FinderError, ValueError):
    """A query parameter has the wrong type or an unrecognized value."""


class FilesystemError(FinderError, OSError):
    """
    Listing or stat of the resource tree failed (permission denied, a path vanished
    mid-scan, ...). Carries the `errno` and `filename` of the underlying `OSError`.
    """

    @classmethod
    def wrap(cls, error: OSError, action: str) -> FilesystemError:
        message = f"Could not {action}: {error.strerror or error}"
        return cls(error.errno, message, error.filename)
