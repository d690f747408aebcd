"""Gitignore and tool-specific ignore file handling using pathspec."""

from __future__ import annotations

from pathlib import Path

import pathspec


def _read_ignore_file(path: Path) -> pathspec.PathSpec | None:
    """
    Compile the patterns in an ignore file, skipping blanks and comments.
    Returns `None` when the file is missing, unreadable, not UTF-8, or has no patterns.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    lines = [line for line in text.splitlines() if line.strip() and not line.strip().startswith("#")]
    if not lines:
        return None
    return pathspec.PathSpec.from_lines("gitignore", lines)


def load_gitignore(directory: Path) -> pathspec.PathSpec | None:
    """Compiled `.gitignore` of `directory`, or `None`."""
    gitignore = directory / ".gitignore"
    if not gitignore.is_file():
        return None
    return _read_ignore_file(gitignore)


def load_tool_ignore(tool_name: str, start_dir: Path) -> tuple[Path, pathspec.PathSpec] | None:
    """
    Walk up from `start_dir` looking for `.{tool_name}ignore` (e.g., `.resfindignore`).
    Returns the directory holding the first one found, whose patterns are relative
    to it, and its compiled `PathSpec`. Returns `None` when there is none.
    """
    ignore_name = f".{tool_name}ignore"
    current = start_dir.resolve()
    while True:
        candidate = current / ignore_name
        if candidate.is_file():
            spec = _read_ignore_file(candidate)
            return (current, spec) if spec is not None else None
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None
