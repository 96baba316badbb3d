"""Set operations over sorted path lists."""

from bisect import bisect_left
from typing import Iterable, Sequence


def not_in(haystack: Sequence[str], needle: Iterable[str]) -> list[str]:
    """Return the elements of needle that are absent from haystack.

    haystack must be sorted; both inputs must be free of duplicates.
    The result keeps the order of needle.

    Examples:
        >>> not_in(["a", "c"], ["a", "b", "c", "d"])
        ['b', 'd']
    """
    missing = []
    size = len(haystack)
    for item in needle:
        i = bisect_left(haystack, item)
        if i == size or haystack[i] != item:
            missing.append(item)
    return missing


def union_sorted(*lists: Iterable[str]) -> list[str]:
    """Return the sorted, duplicate-free union of the given lists."""
    merged: set[str] = set()
    for paths in lists:
        merged.update(paths)
    return sorted(merged)
