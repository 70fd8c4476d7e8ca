"""Core search algorithms."""

from .types import InvalidArgument, Match
from .dispatch import Algorithm, find_all, finditer, resolve_algorithm
from .aho_corasick import Automaton, build, iter_scan, scan
from .engine import SearchEngine
from .text_ops import EncodingError, TextTransformer

__all__ = [
    "Algorithm",
    "Automaton",
    "EncodingError",
    "InvalidArgument",
    "Match",
    "SearchEngine",
    "TextTransformer",
    "build",
    "find_all",
    "finditer",
    "iter_scan",
    "resolve_algorithm",
    "scan",
]
