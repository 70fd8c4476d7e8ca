"""Knuth-Morris-Pratt exact matching."""

from typing import Iterator, List, Sequence

from .alphabet import Text, check_inputs
from .types import Match


def prefix_table(pattern: Sequence) -> List[int]:
    """
    Build the KMP failure table.

    ``table[i]`` is the length of the longest proper prefix of the pattern
    that is also a suffix of ``pattern[0..i]``.

    Args:
        pattern: Non-empty pattern

    Returns:
        List of prefix lengths, one per pattern position
    """
    m = len(pattern)
    table = [0] * m
    length = 0
    for i in range(1, m):
        while length and pattern[i] != pattern[length]:
            length = table[length - 1]
        if pattern[i] == pattern[length]:
            length += 1
        table[i] = length
    return table


def finditer(text: Text, pattern: Text) -> Iterator[Match]:
    """Lazily yield every occurrence of pattern in text, overlaps included."""
    check_inputs(text, pattern)
    return _scan(text, pattern)


def find_all(text: Text, pattern: Text) -> List[Match]:
    """
    Find every occurrence of pattern in text in O(n + m) time.

    Args:
        text: Text to search
        pattern: Non-empty pattern of the same kind as text

    Returns:
        Matches ordered by start position

    Raises:
        InvalidArgument: If the pattern is empty or the kinds differ
    """
    return list(finditer(text, pattern))


def _scan(text: Text, pattern: Text) -> Iterator[Match]:
    n, m = len(text), len(pattern)
    if n < m:
        return

    table = prefix_table(pattern)
    j = 0
    for i in range(n):
        symbol = text[i]
        # Fall back through the table instead of re-reading text.
        while j and symbol != pattern[j]:
            j = table[j - 1]
        if symbol == pattern[j]:
            j += 1
        if j == m:
            yield Match(i - m + 1, i + 1)
            j = table[j - 1]
