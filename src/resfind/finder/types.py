"""Configuration, query and candidate types for resource lookup."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from resfind.finder.defaults import DEFAULT_EXCLUDES, DEFAULT_EXTENSIONS
from resfind.finder.errors import InvalidArgument


@dataclass
class FinderConfig:
    """
    Configuration for resource discovery.

    `tool_name` determines the ignore file name (e.g., `.resfindignore`).
    `exclude=None` means use `DEFAULT_EXCLUDES`; providing a list replaces them entirely.
    """

    tool_name: str = "resfind"
    extensions: list[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    exclude: list[str] | None = None
    extend_exclude: list[str] = field(default_factory=list)
    respect_gitignore: bool = True

    @property
    def effective_exclude(self) -> list[str]:
        """Combined exclude patterns: defaults (or `exclude`) + `extend_exclude`."""
        base = self.exclude if self.exclude is not None else list(DEFAULT_EXCLUDES)
        return base + self.extend_exclude

    @property
    def normalized_extensions(self) -> tuple[str, ...]:
        """Lowercased extensions, each with a leading dot, longest first."""
        exts = {ext.lower() if ext.startswith(".") else "." + ext.lower() for ext in self.extensions}
        return tuple(sorted(exts, key=lambda ext: (-len(ext), ext)))


class SearchMethod(str, Enum):
    """How a search string is matched against resource names."""

    exact = "exact"
    partial = "partial"
    wildcard = "wildcard"


@dataclass(frozen=True)
class FileEntry:
    """
    A source file found under the search base. `parts` are the path segments
    relative to `root/base`; `path` is the location on disk.
    """

    parts: tuple[str, ...]
    path: Path

    @property
    def name(self) -> str:
        return self.parts[-1]

    @property
    def relpath(self) -> str:
        return "/".join(self.parts)


@dataclass(frozen=True)
class PlainCandidate:
    """An ordinary resource, named by its extension-stripped path."""

    name: str
    entry: FileEntry


@dataclass(frozen=True)
class IdempotentCandidate:
    """An idempotent directory, named by the directory path relative to the base."""

    name: str
    entry: FileEntry


Candidate = PlainCandidate | IdempotentCandidate


def _describe(value: Any) -> str:
    if isinstance(value, Sequence):
        return f"a '{type(value).__name__}' of length {len(value)}"
    return f"a '{type(value).__name__}'"


@dataclass(frozen=True)
class SearchQuery:
    """A validated lookup request."""

    search: str = ""
    method: SearchMethod = SearchMethod.wildcard
    base: str = ""
    by_mtime: bool = True

    @classmethod
    def create(
        cls,
        search: Any = "",
        method: Any = SearchMethod.wildcard,
        base: Any = "",
        by_mtime: Any = True,
    ) -> SearchQuery:
        """
        Validate raw arguments and build a query. Raises `InvalidArgument` when
        `search` or `base` is not a single string, or `method` is not one of
        `exact`, `partial` or `wildcard`.
        """
        if not isinstance(base, str):
            raise InvalidArgument(
                f"The base parameter must be a single string. Instead you gave {_describe(base)}"
            )
        if not isinstance(search, str):
            raise InvalidArgument(
                f"The search parameter must be a single string. Instead you gave {_describe(search)}"
            )
        if not isinstance(method, str):
            raise InvalidArgument(
                "The method parameter must be 'wildcard', 'partial', or 'exact'. "
                f"Instead you gave {_describe(method)}"
            )
        try:
            parsed = SearchMethod(method)
        except ValueError:
            raise InvalidArgument(
                "The method parameter must be 'wildcard', 'partial', or 'exact', "
                f"not {method!r}"
            ) from None
        return cls(search=search, method=parsed, base=base, by_mtime=bool(by_mtime))
