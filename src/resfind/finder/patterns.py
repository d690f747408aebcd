"""
Compilation of search strings into resource name predicates.

All three methods compare case-insensitively, against the whole resource name
as a single string:

- `exact`: the name equals the search string.
- `partial`: the search string (minus any source extension) is a substring.
- `wildcard`: the characters of the search string (minus any source extension)
  appear in the name in order, with anything in between, starting at the
  name's first character. `smsrc` matches `some_resource`; `ers` does not.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from resfind.finder.naming import strip_extension
from resfind.finder.types import SearchMethod

Predicate = Callable[[str], bool]


def _match_all(_name: str) -> bool:
    return True


def is_anchored_subsequence(needle: str, haystack: str) -> bool:
    """
    Two-pointer scan: every character of `needle` occurs in `haystack` in
    order, and the first one is the first character of `haystack`.
    """
    if not needle:
        return True
    if not haystack or haystack[0] != needle[0]:
        return False
    i = 1
    for char in haystack[1:]:
        if i == len(needle):
            break
        if char == needle[i]:
            i += 1
    return i == len(needle)


def compile_pattern(search: str, method: SearchMethod, extensions: Iterable[str]) -> Predicate:
    if method is SearchMethod.exact:
        target = search.casefold()
        return lambda name: name.casefold() == target

    if not search:
        return _match_all

    needle = strip_extension(search, extensions).casefold()
    if method is SearchMethod.partial:
        return lambda name: needle in name.casefold()
    return lambda name: is_anchored_subsequence(needle, name.casefold())
