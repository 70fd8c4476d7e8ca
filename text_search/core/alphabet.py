"""Indexing helpers shared by the matchers."""

from typing import Sequence, Union

from .types import InvalidArgument

Text = Union[str, bytes, bytearray, memoryview]

_BYTES_TYPES = (bytes, bytearray, memoryview)


def is_bytes_like(value: Text) -> bool:
    """Return True for bytes, bytearray and memoryview."""
    return isinstance(value, _BYTES_TYPES)


def kind_of(value: Text) -> type:
    """
    Classify a sequence as ``str`` or ``bytes``.

    Args:
        value: Text or pattern

    Returns:
        ``str`` for character sequences, ``bytes`` for byte sequences

    Raises:
        InvalidArgument: If the value is neither
    """
    if isinstance(value, str):
        return str
    if is_bytes_like(value):
        return bytes
    raise InvalidArgument(
        f"Expected str or bytes-like sequence, got {type(value).__name__}"
    )


def check_pattern(pattern: Text) -> None:
    """Reject empty patterns."""
    kind_of(pattern)
    if len(pattern) == 0:
        raise InvalidArgument("Pattern must not be empty")


def check_inputs(text: Text, pattern: Text) -> None:
    """
    Validate a text/pattern pair for a single-pattern matcher.

    Both must be of the same kind (str with str, bytes-like with bytes-like)
    and the pattern must be non-empty. Empty text is valid.
    """
    check_pattern(pattern)
    if kind_of(text) is not kind_of(pattern):
        raise InvalidArgument("Text and pattern must both be str or both be bytes")


def symbol_code(symbol: Union[str, int]) -> int:
    """Integer code of a single symbol (bytes already index to ints)."""
    if isinstance(symbol, str):
        return ord(symbol)
    return symbol


def window_equals(text: Sequence, start: int, pattern: Sequence) -> bool:
    """Compare ``text[start:start + len(pattern)]`` with ``pattern`` in place."""
    m = len(pattern)
    if start < 0 or start + m > len(text):
        return False
    for k in range(m):
        if text[start + k] != pattern[k]:
            return False
    return True


def check_bounds(length: int, start: int, end: int) -> None:
    """Assert that ``[start, end)`` lies within a sequence of ``length``."""
    if not 0 <= start <= end <= length:
        raise IndexError(f"Range [{start}, {end}) out of bounds for length {length}")
