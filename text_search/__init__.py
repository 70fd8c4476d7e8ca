"""
Text Search Toolkit - exact-match string search behind a uniform interface.

This package provides five single-pattern exact matchers (Knuth-Morris-Pratt,
Z-algorithm, Rabin-Karp, Boyer-Moore and Boyer-Moore-Horspool) that all report
every occurrence, overlapping ones included, plus an Aho-Corasick automaton
for matching a whole pattern set in one pass.
"""

__version__ = "1.0.0"

from .core import (
    Algorithm,
    Automaton,
    InvalidArgument,
    Match,
    SearchEngine,
    build,
    find_all,
    finditer,
    scan,
)

__all__ = [
    "Algorithm",
    "Automaton",
    "InvalidArgument",
    "Match",
    "SearchEngine",
    "build",
    "find_all",
    "finditer",
    "scan",
]
