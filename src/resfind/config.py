"""
Project config files for resfind.

The nearest `.resfind.toml`, `resfind.toml` or `pyproject.toml` with a
`[tool.resfind]` table, searching upward from the working directory, supplies
defaults for the CLI. Keys are kebab-case and may be grouped under `[search]`
and `[file-discovery]`:

    [search]
    method = "partial"
    by-mtime = false

    [file-discovery]
    extensions = [".R"]
    extend-exclude = ["scratch/"]

Values are checked when the file is loaded: a bad value raises `InvalidArgument`
naming the file and the key.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from resfind.finder import FilesystemError, InvalidArgument, SearchMethod, SearchQuery

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]

logger = logging.getLogger(__name__)


@dataclass
class ResfindConfig:
    """
    Settings read from a config file. A field is `None` when the file does not set
    it, so the CLI can tell "not configured" apart from a configured default.
    """

    method: SearchMethod | None = None
    by_mtime: bool | None = None
    extensions: list[str] | None = None
    exclude: list[str] | None = None
    extend_exclude: list[str] | None = None
    respect_gitignore: bool | None = None


# Checked in this order within each directory.
_CONFIG_FILENAMES = (".resfind.toml", "resfind.toml", "pyproject.toml")

_SECTIONS = ("search", "file-discovery")


def _read_table(path: Path) -> dict[str, Any] | None:
    """The resfind settings in `path`: `[tool.resfind]` of a pyproject, else the whole file."""
    data = tomllib.loads(path.read_text(encoding="utf-8"))
    if path.name != "pyproject.toml":
        return data
    table = data.get("tool", {}).get("resfind")
    return table if isinstance(table, dict) else None


def find_config_file(start_dir: Path) -> Path | None:
    """
    The first config file found in `start_dir` or its ancestors, or `None`. A
    `pyproject.toml` only counts when it has a `[tool.resfind]` table.
    """
    start = start_dir.resolve()
    for directory in (start, *start.parents):
        for filename in _CONFIG_FILENAMES:
            candidate = directory / filename
            if not candidate.is_file():
                continue
            if filename != "pyproject.toml":
                return candidate
            try:
                if _read_table(candidate) is not None:
                    return candidate
            except (tomllib.TOMLDecodeError, OSError):
                continue
    return None


def _parse_method(value: Any) -> SearchMethod:
    return SearchQuery.create(method=value).method


def _parse_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise InvalidArgument(f"expected true or false, not {value!r}")
    return value


def _parse_patterns(value: Any) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise InvalidArgument(f"expected a list of strings, not {value!r}")
    return list(value)


def _parse_extensions(value: Any) -> list[str]:
    """Each extension gets a leading dot; case-insensitive repeats are dropped."""
    extensions: list[str] = []
    seen: set[str] = set()
    for item in _parse_patterns(value):
        ext = item if item.startswith(".") else "." + item
        if ext == ".":
            raise InvalidArgument(f"empty extension in {value!r}")
        if ext.lower() not in seen:
            seen.add(ext.lower())
            extensions.append(ext)
    return extensions


_PARSERS: dict[str, Callable[[Any], Any]] = {
    "method": _parse_method,
    "by_mtime": _parse_bool,
    "extensions": _parse_extensions,
    "exclude": _parse_patterns,
    "extend_exclude": _parse_patterns,
    "respect_gitignore": _parse_bool,
}


def _flatten(table: dict[str, Any]) -> Iterator[tuple[str, Any]]:
    for key, value in table.items():
        if key in _SECTIONS and isinstance(value, dict):
            yield from value.items()
        else:
            yield key, value


def load_config(config_path: Path) -> ResfindConfig:
    """
    Read and check the settings in `config_path`. A file that is not valid TOML
    is skipped with a warning, as are unknown keys. A known key with a bad value
    raises `InvalidArgument` naming the file and the key.
    """
    try:
        table = _read_table(config_path)
    except OSError as e:
        raise FilesystemError.wrap(e, "read config file") from e
    except tomllib.TOMLDecodeError as e:
        logger.warning("Ignoring malformed config file %s: %s", config_path, e)
        return ResfindConfig()

    config = ResfindConfig()
    for key, value in _flatten(table or {}):
        field_name = key.replace("-", "_")
        parse = _PARSERS.get(field_name)
        if parse is None:
            logger.warning("Ignoring unrecognized config key %r in %s", key, config_path)
            continue
        try:
            setattr(config, field_name, parse(value))
        except InvalidArgument as e:
            raise InvalidArgument(f"{config_path}: invalid value for {key!r}: {e}") from None

    logger.debug("Loaded config from %s: %s", config_path, config)
    return config
