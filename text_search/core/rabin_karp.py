"""
Rabin-Karp exact matching with a polynomial rolling hash.

Every hash hit is confirmed symbol by symbol before a match is reported, so
collisions cost time but never correctness. Average time is O(n + m); an
adversarial text that collides on every window degrades to O(n * m).
"""

from typing import Iterator, List, Sequence

from .alphabet import Text, check_inputs, symbol_code, window_equals
from .types import InvalidArgument, Match

DEFAULT_BASE = 256
DEFAULT_MODULUS = (1 << 61) - 1  # Mersenne prime


class RollingHash:
    """Hash of a fixed-width window that can slide one symbol at a time."""

    def __init__(self, width: int, base: int = DEFAULT_BASE, modulus: int = DEFAULT_MODULUS) -> None:
        if base < 2 or modulus < 2:
            raise InvalidArgument("Rolling hash base and modulus must both be at least 2")
        self.width = width
        self.base = base
        self.modulus = modulus
        # Weight of the symbol leaving the window.
        self._high = pow(base, width - 1, modulus) if width else 0

    def of(self, sequence: Sequence, start: int = 0) -> int:
        """Hash ``sequence[start:start + width]``."""
        value = 0
        for k in range(start, start + self.width):
            value = (value * self.base + symbol_code(sequence[k])) % self.modulus
        return value

    def roll(self, value: int, outgoing, incoming) -> int:
        """Slide the window: drop ``outgoing`` on the left, add ``incoming`` on the right."""
        value = (value - symbol_code(outgoing) * self._high) % self.modulus
        return (value * self.base + symbol_code(incoming)) % self.modulus


def finditer(
    text: Text,
    pattern: Text,
    base: int = DEFAULT_BASE,
    modulus: int = DEFAULT_MODULUS,
) -> Iterator[Match]:
    """Lazily yield every occurrence of pattern in text, overlaps included."""
    check_inputs(text, pattern)
    hasher = RollingHash(len(pattern), base, modulus)
    return _scan(text, pattern, hasher)


def find_all(
    text: Text,
    pattern: Text,
    base: int = DEFAULT_BASE,
    modulus: int = DEFAULT_MODULUS,
) -> List[Match]:
    """
    Find every occurrence of pattern in text.

    Args:
        text: Text to search
        pattern: Non-empty pattern of the same kind as text
        base: Polynomial base of the rolling hash
        modulus: Modulus of the rolling hash

    Returns:
        Matches ordered by start position
    """
    return list(finditer(text, pattern, base, modulus))


def _scan(text: Text, pattern: Text, hasher: RollingHash) -> Iterator[Match]:
    n, m = len(text), len(pattern)
    if n < m:
        return

    target = hasher.of(pattern)
    window = hasher.of(text)
    for start in range(n - m + 1):
        if start:
            window = hasher.roll(window, text[start - 1], text[start + m - 1])
        if window == target and window_equals(text, start, pattern):
            yield Match(start, start + m)
