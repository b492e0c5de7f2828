"""Matching of query fragments against visited paths."""

from collections.abc import Iterable

from zox.models import MatchMode


_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ",
    "abcdefghijklmnopqrstuvwxyz",
)


def ascii_lower(text: str) -> str:
    """Lowercase ASCII letters only, leaving other characters untouched."""
    return text.translate(_ASCII_LOWER)


def normalize_patterns(args: Iterable[str]) -> list[str]:
    """Turn raw query arguments into lowercase pattern fragments.

    An argument may carry several space-separated fragments when a shell
    wrapper quotes the whole query.

    Args:
        args: Query arguments as given on the command line.

    Returns:
        Lowercase fragments in their original order, empty ones dropped.
    """
    return [ascii_lower(fragment) for arg in args for fragment in arg.split(" ") if fragment]


def matches_ordered(path: str, patterns: list[str]) -> bool:
    """Check that patterns occur in the path in order without overlapping.

    ``["foo", "foo"]`` matches ``/foo/foo`` but not ``/foo/bar``, and
    ``["bar", "foo"]`` does not match ``/foo/bar``.
    """
    haystack = ascii_lower(path)
    cursor = 0
    for pattern in patterns:
        index = haystack.find(pattern, cursor)
        if index < 0:
            return False
        cursor = index + len(pattern)
    return True


def matches_unordered(path: str, patterns: list[str]) -> bool:
    """Check that every pattern occurs somewhere in the path."""
    haystack = ascii_lower(path)
    return all(pattern in haystack for pattern in patterns)


def matches(path: str, patterns: list[str], mode: MatchMode = MatchMode.ORDERED) -> bool:
    """Decide whether a path satisfies a list of lowercase fragments.

    Args:
        path: The visited path.
        patterns: Lowercase fragments; an empty list matches everything.
        mode: Ordered non-overlapping matching or plain containment.

    Returns:
        True if the path matches.
    """
    if mode == MatchMode.UNORDERED:
        return matches_unordered(path, patterns)
    return matches_ordered(path, patterns)
