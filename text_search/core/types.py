"""Shared value types and errors for the search algorithms."""

from dataclasses import dataclass
from typing import Optional


class InvalidArgument(ValueError):
    """Raised when a pattern, pattern set or algorithm name is unusable."""


@dataclass(frozen=True)
class Match:
    """
    A single occurrence of a pattern in a text.

    The range is half-open: ``text[start:end]`` is the matched slice.
    ``pattern_id`` is ``None`` for single-pattern matchers and the
    insertion-order id of the matched pattern for the Aho-Corasick automaton.
    """

    start: int
    end: int
    pattern_id: Optional[int] = None

    @property
    def length(self) -> int:
        return self.end - self.start

    def span(self) -> tuple:
        return self.start, self.end
