"""
Default source extensions and exclude patterns for resource discovery.

Exclude patterns use gitignore syntax. Directory patterns end with `/`.
"""

from __future__ import annotations

# Recognized source extensions, compared case-insensitively.
DEFAULT_EXTENSIONS: list[str] = [".py"]

# Directories that never hold project resources.
# Pruned during traversal so they are not even entered.
DEFAULT_EXCLUDES: list[str] = [
    # Version control
    ".git/",
    ".hg/",
    ".svn/",
    # Python tooling
    ".venv/",
    "venv/",
    "__pycache__/",
    ".tox/",
    ".nox/",
    ".mypy_cache/",
    ".ruff_cache/",
    ".pytest_cache/",
    ".eggs/",
    "*.egg-info/",
    # Build output
    "build/",
    "dist/",
    # IDE/Editor
    ".idea/",
    ".vscode/",
    # Other
    "node_modules/",
    "htmlcov/",
]
