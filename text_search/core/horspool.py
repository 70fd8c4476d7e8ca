"""Boyer-Moore-Horspool exact matching."""

from typing import Dict, Hashable, Iterator, List, Sequence

from .alphabet import Text, check_inputs
from .types import Match


def shift_table(pattern: Sequence) -> Dict[Hashable, int]:
    """
    Build the Horspool shift table.

    Every symbol of ``pattern[:-1]`` maps to its distance from the last
    pattern position; symbols not in the table shift by the full length.
    """
    m = len(pattern)
    return {pattern[i]: m - 1 - i for i in range(m - 1)}


def finditer(text: Text, pattern: Text) -> Iterator[Match]:
    """Lazily yield every occurrence of pattern in text, overlaps included."""
    check_inputs(text, pattern)
    return _scan(text, pattern)


def find_all(text: Text, pattern: Text) -> List[Match]:
    """Find every occurrence of pattern in text using the last-symbol shift."""
    return list(finditer(text, pattern))


def _scan(text: Text, pattern: Text) -> Iterator[Match]:
    n, m = len(text), len(pattern)
    if n < m:
        return

    table = shift_table(pattern)
    s = 0
    while s <= n - m:
        k = 0
        while k < m and text[s + k] == pattern[k]:
            k += 1
        if k == m:
            yield Match(s, s + m)
        s += table.get(text[s + m - 1], m)
