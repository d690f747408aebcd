"""
ResourceFinder: main entry point for resource lookup.

Resolves a search string into resource paths under a project root. Each call
lists the tree afresh, so files added or edited between calls are always seen.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from resfind.finder.errors import FilesystemError
from resfind.finder.idempotent import classify, idempotent_name
from resfind.finder.naming import (
    base_name,
    join_resource,
    normalize_separators,
    resource_name,
    strip_extension,
)
from resfind.finder.patterns import compile_pattern
from resfind.finder.types import (
    Candidate,
    FinderConfig,
    IdempotentCandidate,
    PlainCandidate,
    SearchMethod,
    SearchQuery,
)
from resfind.finder.walker import SourceWalker

logger = logging.getLogger(__name__)


class ResourceFinder:
    """
    Looks up resources under `root` by exact, partial or wildcard match.

    A resource is a source file named by its extension-stripped path. A file
    named after its own directory (`models/linear/linear.py`) is the directory's
    idempotent object: it is found as `models/linear`, and the other files in
    that directory are helpers that are never returned.
    """

    def __init__(self, root: str | Path, config: FinderConfig | None = None) -> None:
        self._root: Path = Path(root)
        self._config: FinderConfig = config if config is not None else FinderConfig()
        self._extensions: tuple[str, ...] = self._config.normalized_extensions
        self._walker: SourceWalker = SourceWalker(self._config)

    @property
    def root(self) -> Path:
        return self._root

    @property
    def config(self) -> FinderConfig:
        return self._config

    def find(
        self,
        search: Any = "",
        method: Any = SearchMethod.wildcard,
        base: Any = "",
        by_mtime: Any = True,
    ) -> list[str]:
        """
        Find resources matching `search`, as paths joined onto `base`.

        - `wildcard`: characters of `search` appear in order, starting at the first
          character (`smsrc` finds `some_resource`).
        - `partial`: `search` is a substring (`dir/some` finds `dir/some_resource`).
        - `exact`: the name itself; at most one result.

        An empty `search` lists every resource under `base` (except in exact mode,
        where it names the base's own idempotent object, if any). With `by_mtime`,
        the most recently modified resource comes first.

        Raises `InvalidArgument` for a malformed query, before the tree is read, and
        `FilesystemError` when the tree cannot be listed.
        """
        query = SearchQuery.create(search=search, method=method, base=base, by_mtime=by_mtime)
        # Bases are always relative to the root: "/models" means "models".
        base = normalize_separators(query.base).lstrip("/")
        plain, idempotent = self._candidates(base)

        if query.method is SearchMethod.exact:
            return self._find_exact(query.search, base, plain, idempotent)

        if query.search:
            matches = compile_pattern(query.search, query.method, self._extensions)
            plain = [c for c in plain if matches(c.name)]
            idempotent = [c for c in idempotent if matches(c.name)]
            logger.debug(
                "%s search %r: %d plain and %d idempotent matches",
                query.method.value,
                query.search,
                len(plain),
                len(idempotent),
            )

        # Both sets are kept even when they name the same path.
        results: list[Candidate] = [*plain, *idempotent]
        if query.by_mtime and results:
            results = self._sort_by_mtime(results)

        return [join_resource(base, c.name) for c in results]

    def exists(self, name: str, base: str = "") -> bool:
        """Whether a resource with exactly this name exists under `base`."""
        return bool(self.find(name, SearchMethod.exact, base, by_mtime=False))

    def filename(self, name: str, absolute: bool = False) -> Path | None:
        """
        The file defining resource `name`: `name<ext>`, or the idempotent object
        `name/<last segment><ext>`. Returns `None` if there is no such file.
        """
        name = strip_extension(normalize_separators(name).strip("/"), self._extensions)
        stems = [name] if name else []
        last = base_name(name)
        if last:
            stems.append(f"{name}/{last}")

        for stem in stems:
            parent = self._search_start(Path(stem).parent.as_posix())
            if parent is None or not parent.is_dir():
                continue
            stem_name = Path(stem).name
            try:
                children = sorted(parent.iterdir())
            except OSError as e:
                raise FilesystemError.wrap(e, "list directory") from e
            for path in children:
                if not path.is_file():
                    continue
                if strip_extension(path.name, self._extensions) != stem_name:
                    continue
                if path.name == stem_name:
                    continue
                return path if absolute else path.relative_to(self._root)
        return None

    def _search_start(self, base: str) -> Path | None:
        """Directory for `base` under the root, or `None` when `base` leads outside it."""
        start = self._root / base if base else self._root
        try:
            start.resolve().relative_to(self._root.resolve())
        except ValueError:
            logger.debug("Search base %r is outside %s; nothing to list", base, self._root)
            return None
        return start

    def _candidates(self, base: str) -> tuple[list[PlainCandidate], list[IdempotentCandidate]]:
        """
        Enumerate and classify the files under `base`. Helpers are dropped before
        anything is matched against them.
        """
        start = self._search_start(base)
        if start is None:
            return [], []
        entries = list(self._walker.walk(start))
        classification = classify(entries, base, self._extensions)

        plain: list[PlainCandidate] = []
        for entry in entries:
            if classification.is_helper(entry) or classification.is_idempotent_object(entry):
                continue
            plain.append(PlainCandidate(resource_name(entry, self._extensions), entry))

        idempotent = [
            IdempotentCandidate(idempotent_name(directory), entry)
            for directory, entry in classification.idempotent.items()
        ]
        logger.debug(
            "Listed %d files under %s: %d plain resources, %d idempotent directories",
            len(entries),
            start,
            len(plain),
            len(idempotent),
        )
        return plain, idempotent

    def _find_exact(
        self,
        search: str,
        base: str,
        plain: Sequence[PlainCandidate],
        idempotent: Sequence[IdempotentCandidate],
    ) -> list[str]:
        """
        Exact lookup among plain resources, then among idempotent directories, so
        that every resource `find` can list is also found by its exact name.
        """
        matches = compile_pattern(search, SearchMethod.exact, self._extensions)
        for group in (plain, idempotent):
            for candidate in group:
                if matches(candidate.name):
                    return [join_resource(base, candidate.name)]
        return []

    def _sort_by_mtime(self, candidates: list[Candidate]) -> list[Candidate]:
        """Most recently modified first; ties keep their listing order."""
        mtimes: dict[Path, float] = {}
        for candidate in candidates:
            path = candidate.entry.path
            if path not in mtimes:
                try:
                    mtimes[path] = path.stat().st_mtime
                except OSError as e:
                    raise FilesystemError.wrap(e, "read modification time") from e
        return sorted(candidates, key=lambda c: -mtimes[c.entry.path])
