"""Z-algorithm exact matching."""

from typing import Iterator, List, Sequence

from .alphabet import Text, check_inputs
from .types import Match

# Compares unequal to every str and int symbol.
_SEPARATOR = object()


class _Joined:
    """Read-only view of ``pattern + separator + text`` without copying text."""

    __slots__ = ("_pattern", "_text", "_m")

    def __init__(self, pattern: Sequence, text: Sequence) -> None:
        self._pattern = pattern
        self._text = text
        self._m = len(pattern)

    def __len__(self) -> int:
        return self._m + 1 + len(self._text)

    def __getitem__(self, index: int):
        if index < self._m:
            return self._pattern[index]
        if index == self._m:
            return _SEPARATOR
        return self._text[index - self._m - 1]


def z_array(sequence: Sequence) -> List[int]:
    """
    Compute the Z-array of a sequence.

    ``z[i]`` is the length of the longest substring starting at ``i`` that is
    also a prefix of the sequence; ``z[0]`` is the whole length.
    """
    n = len(sequence)
    z = [0] * n
    if n == 0:
        return z
    z[0] = n
    left = right = 0
    for i in range(1, n):
        if i < right:
            z[i] = min(right - i, z[i - left])
        while i + z[i] < n and sequence[z[i]] == sequence[i + z[i]]:
            z[i] += 1
        if i + z[i] > right:
            left, right = i, i + z[i]
    return z


def finditer(text: Text, pattern: Text) -> Iterator[Match]:
    """Lazily yield every occurrence of pattern in text, overlaps included."""
    check_inputs(text, pattern)
    return _scan(text, pattern)


def find_all(text: Text, pattern: Text) -> List[Match]:
    """Find every occurrence of pattern in text in O(n + m) time and space."""
    return list(finditer(text, pattern))


def _scan(text: Text, pattern: Text) -> Iterator[Match]:
    n, m = len(text), len(pattern)
    if n < m:
        return

    z = z_array(_Joined(pattern, text))
    offset = m + 1
    for i in range(offset, offset + n - m + 1):
        if z[i] == m:
            start = i - offset
            yield Match(start, start + m)
