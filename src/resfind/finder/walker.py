"""
Recursive enumeration of source files under a search base.

Files are yielded in a stable order (directories and files sorted by name,
each directory's files before its subdirectories) so that lookups over an
unchanged tree always produce the same sequence.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

import pathspec

from resfind.finder.errors import FilesystemError
from resfind.finder.gitignore import load_gitignore, load_tool_ignore
from resfind.finder.naming import has_extension
from resfind.finder.types import FileEntry, FinderConfig

logger = logging.getLogger(__name__)

# A compiled ignore file and the directory its patterns are relative to.
_ScopedSpec = tuple[Path, pathspec.PathSpec]

# The tool ignore spec, with the path from its directory to the walk start.
_PrefixedSpec = tuple[Path, pathspec.PathSpec]


def _raise_walk_error(error: OSError) -> None:
    raise FilesystemError.wrap(error, "list directory") from error


class SourceWalker:
    """
    Lists source files with a recognized extension, pruning excluded
    directories in-place and respecting `.gitignore` and tool ignore files.

    Holds no per-walk state, so one walker can serve any number of lookups.
    """

    def __init__(self, config: FinderConfig) -> None:
        self._config: FinderConfig = config
        self._extensions: tuple[str, ...] = config.normalized_extensions
        self._exclude_spec: pathspec.PathSpec = pathspec.PathSpec.from_lines(
            "gitignore", config.effective_exclude
        )

    def walk(self, start: Path) -> Iterator[FileEntry]:
        """
        Yield an entry for every source file below `start`, with `parts` relative to
        `start`. A missing `start` holds no files. Listing failures raise
        `FilesystemError`.
        """
        if not start.is_dir():
            logger.debug("Search base %s is not a directory; nothing to list", start)
            return

        tool_ignore: _PrefixedSpec | None = None
        found = load_tool_ignore(self._config.tool_name, start)
        if found is not None:
            ignore_dir, ignore_spec = found
            tool_ignore = (start.resolve().relative_to(ignore_dir), ignore_spec)
        # Ignore files found so far, keyed by the directory holding them.
        gitignores: dict[Path, pathspec.PathSpec | None] = {}

        for dirpath, dirnames, filenames in os.walk(start, onerror=_raise_walk_error):
            current = Path(dirpath)
            rel_dir = current.relative_to(start)

            specs: list[_ScopedSpec] = []
            if self._config.respect_gitignore:
                specs = self._gitignore_chain(current, start, gitignores)

            dirnames[:] = sorted(
                d for d in dirnames if not self._is_dir_excluded(current / d, rel_dir / d, specs, tool_ignore)
            )

            for filename in sorted(filenames):
                if not has_extension(filename, self._extensions):
                    continue
                filepath = current / filename
                rel_file = rel_dir / filename
                if self._exclude_spec.match_file(rel_file.as_posix()):
                    continue
                if self._is_ignored(filepath, rel_file, specs, tool_ignore):
                    continue
                yield FileEntry(parts=rel_file.parts, path=filepath)

    def _is_dir_excluded(
        self,
        path: Path,
        rel_path: Path,
        specs: list[_ScopedSpec],
        tool_ignore: _PrefixedSpec | None,
    ) -> bool:
        """Check if a directory should be pruned during traversal."""
        if self._exclude_spec.match_file(path.name + "/"):
            return True
        if self._exclude_spec.match_file(rel_path.as_posix() + "/"):
            return True
        return self._is_ignored(path, rel_path, specs, tool_ignore, is_dir=True)

    def _is_ignored(
        self,
        path: Path,
        rel_path: Path,
        specs: list[_ScopedSpec],
        tool_ignore: _PrefixedSpec | None,
        is_dir: bool = False,
    ) -> bool:
        """Each ignore file's patterns are matched relative to its own directory."""
        suffix = "/" if is_dir else ""
        for spec_dir, spec in specs:
            if spec.match_file(path.relative_to(spec_dir).as_posix() + suffix):
                return True
        if tool_ignore is not None:
            prefix, tool_spec = tool_ignore
            if tool_spec.match_file((prefix / rel_path).as_posix() + suffix):
                return True
        return False

    def _gitignore_chain(
        self,
        directory: Path,
        start: Path,
        cache: dict[Path, pathspec.PathSpec | None],
    ) -> list[_ScopedSpec]:
        """Collect gitignore specs from `start` down to `directory` (inclusive)."""
        chain: list[_ScopedSpec] = []
        current = start
        for part in (None, *directory.relative_to(start).parts):
            if part is not None:
                current = current / part
            if current not in cache:
                cache[current] = load_gitignore(current)
            spec = cache[current]
            if spec is not None:
                chain.append((current, spec))
        return chain
