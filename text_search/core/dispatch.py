"""Single entry point over the fixed set of single-pattern algorithms."""

from enum import Enum
from typing import Callable, Dict, Iterator, List, Tuple, Union

from . import boyer_moore, horspool, kmp, rabin_karp, z_algorithm
from .alphabet import Text
from .types import InvalidArgument, Match


class Algorithm(str, Enum):
    """Exact single-pattern search algorithms."""

    KMP = "kmp"
    Z = "z"
    RABIN_KARP = "rabin_karp"
    BOYER_MOORE = "boyer_moore"
    HORSPOOL = "horspool"

    @classmethod
    def names(cls) -> Tuple[str, ...]:
        return tuple(member.value for member in cls)


_MATCHERS: Dict[Algorithm, Callable[[Text, Text], Iterator[Match]]] = {
    Algorithm.KMP: kmp.finditer,
    Algorithm.Z: z_algorithm.finditer,
    Algorithm.RABIN_KARP: rabin_karp.finditer,
    Algorithm.BOYER_MOORE: boyer_moore.finditer,
    Algorithm.HORSPOOL: horspool.finditer,
}

DESCRIPTIONS: Dict[Algorithm, str] = {
    Algorithm.KMP: "Knuth-Morris-Pratt: prefix-function fallback, O(n + m) worst case",
    Algorithm.Z: "Z-algorithm over pattern + separator + text, O(n + m)",
    Algorithm.RABIN_KARP: "Rolling hash with verified hits, O(n + m) average, O(n * m) worst case",
    Algorithm.BOYER_MOORE: "Bad-character and good-suffix shifts, sub-linear on average",
    Algorithm.HORSPOOL: "Boyer-Moore-Horspool last-symbol shift, O(n * m) worst case",
}


def resolve_algorithm(algorithm: Union[Algorithm, str]) -> Algorithm:
    """
    Turn an algorithm name into an Algorithm member.

    Raises:
        InvalidArgument: If the name is not one of the supported algorithms
    """
    if isinstance(algorithm, Algorithm):
        return algorithm
    try:
        return Algorithm(str(algorithm).strip().lower())
    except ValueError:
        raise InvalidArgument(
            f"Unknown algorithm {algorithm!r}. Expected one of: {', '.join(Algorithm.names())}"
        ) from None


def finditer(
    text: Text,
    pattern: Text,
    algorithm: Union[Algorithm, str] = Algorithm.KMP,
) -> Iterator[Match]:
    """Lazily yield every occurrence of pattern in text with the chosen algorithm."""
    return _MATCHERS[resolve_algorithm(algorithm)](text, pattern)


def find_all(
    text: Text,
    pattern: Text,
    algorithm: Union[Algorithm, str] = Algorithm.KMP,
) -> List[Match]:
    """
    Find every occurrence of pattern in text.

    All algorithms report the same matches, overlapping ones included, in
    increasing start order; they differ only in running time.

    Args:
        text: Text to search
        pattern: Non-empty pattern of the same kind as text
        algorithm: Algorithm member or name

    Returns:
        Matches ordered by start position

    Raises:
        InvalidArgument: On an empty pattern, mixed str/bytes or unknown algorithm
    """
    return list(finditer(text, pattern, algorithm))
