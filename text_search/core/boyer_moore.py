"""Boyer-Moore exact matching with bad-character and good-suffix rules."""

from typing import Dict, Hashable, Iterator, List, Sequence

from .alphabet import Text, check_inputs
from .types import Match


def bad_character_table(pattern: Sequence) -> Dict[Hashable, int]:
    """Map each symbol of the pattern to the index of its last occurrence."""
    return {symbol: index for index, symbol in enumerate(pattern)}


def good_suffix_table(pattern: Sequence) -> List[int]:
    """
    Build the strong good-suffix shift table.

    ``shift[j + 1]`` is the safe shift after a mismatch at pattern index ``j``
    once ``pattern[j + 1:]`` has matched. ``shift[0]`` is the shift after a
    full match, i.e. the period of the pattern.

    Args:
        pattern: Non-empty pattern

    Returns:
        List of ``len(pattern) + 1`` positive shifts
    """
    m = len(pattern)
    shift = [0] * (m + 1)
    border = [0] * (m + 1)

    # Case 1: the matched suffix reoccurs inside the pattern.
    i, j = m, m + 1
    border[i] = j
    while i > 0:
        while j <= m and pattern[i - 1] != pattern[j - 1]:
            if shift[j] == 0:
                shift[j] = j - i
            j = border[j]
        i -= 1
        j -= 1
        border[i] = j

    # Case 2: only a prefix of the pattern matches part of the suffix.
    j = border[0]
    for i in range(m + 1):
        if shift[i] == 0:
            shift[i] = j
        if i == j:
            j = border[j]
    return shift


def finditer(text: Text, pattern: Text) -> Iterator[Match]:
    """Lazily yield every occurrence of pattern in text, overlaps included."""
    check_inputs(text, pattern)
    return _scan(text, pattern)


def find_all(text: Text, pattern: Text) -> List[Match]:
    """
    Find every occurrence of pattern in text.

    Windows are compared right-to-left and the window advances by the larger
    of the bad-character and good-suffix shifts. Sub-linear on average,
    O(n * m) in the worst case.
    """
    return list(finditer(text, pattern))


def _scan(text: Text, pattern: Text) -> Iterator[Match]:
    n, m = len(text), len(pattern)
    if n < m:
        return

    last = bad_character_table(pattern)
    shift = good_suffix_table(pattern)
    s = 0
    while s <= n - m:
        j = m - 1
        while j >= 0 and pattern[j] == text[s + j]:
            j -= 1
        if j < 0:
            yield Match(s, s + m)
            s += shift[0]
        else:
            s += max(shift[j + 1], j - last.get(text[s + j], -1))
