#!/usr/bin/env python3
"""
resfind: Find project resources by exact, partial or wildcard name

Common usage:
  resfind                      list every resource, newest first
  resfind fone                 wildcard: f, o, n, e in order (finds foo/one)
  resfind -m partial foo/on    substring match
  resfind -m exact foo/one     exact name (at most one result)
  resfind --exists foo/one     exit status 0 if the resource exists

A file named after its own directory (foo/one/one.py) is found as that
directory (foo/one); the other files in foo/one/ are its helpers and are
never listed.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from resfind.config import ResfindConfig, find_config_file, load_config
from resfind.finder import DEFAULT_EXTENSIONS, FinderConfig, FinderError, ResourceFinder, SearchMethod

logger = logging.getLogger(__name__)


@dataclass
class Options:
    """Command-line options for the resfind tool."""

    search: str
    root: str
    method: str
    base: str
    by_mtime: bool
    exists: bool
    paths: bool
    verbose: bool
    version: bool
    # File discovery options
    extensions: list[str]
    exclude: list[str] | None
    extend_exclude: list[str]
    respect_gitignore: bool


def _parse_args(args: list[str] | None = None) -> tuple[Options, set[str]]:
    """
    Parse command-line arguments.

    Returns a tuple of (options, explicit_flags) where `explicit_flags` tracks
    which flags the user explicitly passed (for config merge precedence).
    """
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")
    description = doc_parts[0]
    epilog = "\n\n".join(doc_parts[1:])

    parser = argparse.ArgumentParser(
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "search",
        nargs="?",
        type=str,
        default="",
        help="Resource to search for (default: list all resources)",
    )
    parser.add_argument(
        "-r",
        "--root",
        type=str,
        default=".",
        help="Project root directory (default: %(default)s)",
    )
    parser.add_argument(
        "-m",
        "--method",
        type=str,
        choices=[m.value for m in SearchMethod],
        default=SearchMethod.wildcard.value,
        help="Search method (default: %(default)s)",
    )
    parser.add_argument(
        "-b",
        "--base",
        type=str,
        default="",
        help="Only search below this directory, relative to the root",
    )
    parser.add_argument(
        "--no-mtime",
        action="store_true",
        dest="no_mtime",
        help="Keep listing order instead of sorting by modification time (newest first)",
    )
    parser.add_argument(
        "--exists",
        action="store_true",
        help="Check whether SEARCH names an existing resource; print nothing and "
        "exit with status 0 if so, 1 if not",
    )
    parser.add_argument(
        "--paths",
        action="store_true",
        help="Also print the file defining each resource, tab-separated",
    )
    # File discovery options
    parser.add_argument(
        "--extension",
        action="append",
        default=None,
        dest="extensions",
        metavar="EXT",
        help="Source file extension to recognize (e.g., '.R'). Can be repeated "
        f"(default: {' '.join(DEFAULT_EXTENSIONS)})",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Replace all default exclusion patterns. Can be repeated",
    )
    parser.add_argument(
        "--extend-exclude",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Add to default exclusion patterns (e.g., 'scratch/'). Can be repeated",
    )
    parser.add_argument(
        "--no-respect-gitignore",
        action="store_true",
        dest="no_respect_gitignore",
        help="Disable .gitignore integration",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output to stderr",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information and exit",
    )
    opts = parser.parse_args(args)

    # Re-parse with sentinel defaults to detect which flags were actually supplied,
    # since comparing against defaults fails when the user passes the default.
    # append actions use None as sentinel (argparse creates a list when the flag is used).
    _SENTINEL = object()
    _tracked_flags: dict[str, str] = {
        # argparse dest name -> Options field name
        "method": "method",
        "no_mtime": "by_mtime",
        "extensions": "extensions",
        "exclude": "exclude",
        "extend_exclude": "extend_exclude",
        "no_respect_gitignore": "respect_gitignore",
    }
    sentinel_parser = argparse.ArgumentParser(add_help=False)
    sentinel_parser.add_argument("-m", "--method", default=_SENTINEL)
    sentinel_parser.add_argument("--no-mtime", dest="no_mtime", action="store_true", default=_SENTINEL)
    sentinel_parser.add_argument("--extension", dest="extensions", action="append", default=None)
    sentinel_parser.add_argument("--exclude", action="append", default=None)
    sentinel_parser.add_argument("--extend-exclude", action="append", default=None)
    sentinel_parser.add_argument(
        "--no-respect-gitignore",
        dest="no_respect_gitignore",
        action="store_true",
        default=_SENTINEL,
    )
    sentinel_opts, _ = sentinel_parser.parse_known_args(args if args is not None else sys.argv[1:])

    explicit_flags: set[str] = set()
    for dest_name, field_name in _tracked_flags.items():
        val = getattr(sentinel_opts, dest_name, _SENTINEL)
        if dest_name in ("extensions", "exclude", "extend_exclude"):
            if val is not None:
                explicit_flags.add(field_name)
        elif val is not _SENTINEL:
            explicit_flags.add(field_name)

    return (
        Options(
            search=opts.search,
            root=opts.root,
            method=opts.method,
            base=opts.base,
            by_mtime=not opts.no_mtime,
            exists=opts.exists,
            paths=opts.paths,
            verbose=opts.verbose,
            version=opts.version,
            extensions=opts.extensions if opts.extensions is not None else list(DEFAULT_EXTENSIONS),
            exclude=opts.exclude,
            extend_exclude=opts.extend_exclude,
            respect_gitignore=not opts.no_respect_gitignore,
        ),
        explicit_flags,
    )


def _apply_config(options: Options, config: ResfindConfig, explicit_flags: set[str]) -> None:
    """
    Fill in options from the config file. Precedence: explicit CLI flags >
    config file > built-in defaults.
    """
    if config.method is not None and "method" not in explicit_flags:
        options.method = config.method.value
    if config.by_mtime is not None and "by_mtime" not in explicit_flags:
        options.by_mtime = config.by_mtime
    if config.extensions is not None and "extensions" not in explicit_flags:
        options.extensions = config.extensions
    if config.exclude is not None and "exclude" not in explicit_flags:
        options.exclude = config.exclude
    if config.extend_exclude is not None and "extend_exclude" not in explicit_flags:
        options.extend_exclude = config.extend_exclude
    if config.respect_gitignore is not None and "respect_gitignore" not in explicit_flags:
        options.respect_gitignore = config.respect_gitignore


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _build_finder(options: Options) -> ResourceFinder:
    config = FinderConfig(
        extensions=options.extensions,
        exclude=options.exclude,
        extend_exclude=options.extend_exclude,
        respect_gitignore=options.respect_gitignore,
    )
    return ResourceFinder(Path(options.root), config)


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the resfind CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, 1 for a missing resource, an invalid query or
        a bad config value, 2 for other errors)
    """
    options, explicit_flags = _parse_args(args)
    _configure_logging(options.verbose)

    if options.version:
        try:
            version = importlib.metadata.version("resfind")
            print(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("unknown (package not installed)")
        return 0

    try:
        config_path = find_config_file(Path.cwd())
        if config_path:
            _apply_config(options, load_config(config_path), explicit_flags)

        finder = _build_finder(options)
        if options.exists:
            return 0 if finder.exists(options.search, options.base) else 1

        resources = finder.find(
            search=options.search,
            method=options.method,
            base=options.base,
            by_mtime=options.by_mtime,
        )
        for resource in resources:
            if options.paths:
                print(f"{resource}\t{finder.filename(resource) or ''}")
            else:
                print(resource)
    except FinderError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.debug("Unexpected failure", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
