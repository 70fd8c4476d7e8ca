"""Main search engine implementation."""

import threading
import time
from collections import OrderedDict
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

import structlog

from ..models.response import (
    CompareResponse,
    MatchResult,
    MultiSearchResponse,
    SearchResponse,
)
from . import aho_corasick, rabin_karp
from .alphabet import Text, check_bounds, is_bytes_like, kind_of
from .dispatch import Algorithm, finditer, resolve_algorithm
from .text_ops import from_bytes
from .types import InvalidArgument, Match

logger = structlog.get_logger(__name__)


class SearchEngine:
    """Exact-match search over single patterns and pattern sets."""

    def __init__(
        self,
        default_algorithm: Union[Algorithm, str] = Algorithm.KMP,
        rabin_karp_base: int = rabin_karp.DEFAULT_BASE,
        rabin_karp_modulus: int = rabin_karp.DEFAULT_MODULUS,
        enable_cache: bool = True,
        cache_max_size: int = 128,
        max_matches: Optional[int] = None,
    ) -> None:
        """
        Initialize the search engine.

        Args:
            default_algorithm: Algorithm used when a search names none
            rabin_karp_base: Rolling hash base for Rabin-Karp
            rabin_karp_modulus: Rolling hash modulus for Rabin-Karp
            enable_cache: Whether to keep built automata for reuse
            cache_max_size: Maximum number of cached automata
            max_matches: Default cap on matches returned per response
        """
        self.default_algorithm = resolve_algorithm(default_algorithm)
        self.rabin_karp_base = rabin_karp_base
        self.rabin_karp_modulus = rabin_karp_modulus
        self.enable_cache = enable_cache
        self.cache_max_size = cache_max_size
        self.max_matches = max_matches

        self._automata: "OrderedDict[tuple, aho_corasick.Automaton]" = OrderedDict()
        self._lock = threading.Lock()
        self._stats = self._empty_stats()

    @staticmethod
    def _empty_stats() -> Dict[str, any]:
        return {
            "total_queries": 0,
            "single_pattern_queries": 0,
            "multi_pattern_queries": 0,
            "compare_queries": 0,
            "total_matches": 0,
            "no_matches": 0,
            "errors": 0,
            "total_execution_time": 0.0,
            "cache_hits": 0,
            "cache_misses": 0,
            "algorithm_usage": {name: 0 for name in Algorithm.names()},
        }

    def iter_matches(
        self,
        text: Text,
        pattern: Text,
        algorithm: Union[Algorithm, str, None] = None,
    ) -> Iterator[Match]:
        """
        Lazily yield matches, honouring the engine's Rabin-Karp parameters.

        Does not touch statistics; callers that stop early pay only for the
        matches they pull.
        """
        algorithm = resolve_algorithm(algorithm or self.default_algorithm)
        if algorithm is Algorithm.RABIN_KARP:
            return rabin_karp.finditer(
                text, pattern, self.rabin_karp_base, self.rabin_karp_modulus
            )
        return finditer(text, pattern, algorithm)

    def search(
        self,
        text: Text,
        pattern: Text,
        algorithm: Union[Algorithm, str, None] = None,
        max_matches: Optional[int] = None,
        include_text: bool = True,
    ) -> SearchResponse:
        """
        Search text for every occurrence of a single pattern.

        Args:
            text: Text to search
            pattern: Non-empty pattern of the same kind as text
            algorithm: Algorithm to use (engine default if None)
            max_matches: Cap on returned matches; the total is still counted
            include_text: Whether to include the matched slice in each result

        Returns:
            SearchResponse with matches and metadata

        Raises:
            InvalidArgument: On an empty pattern, mixed kinds or unknown algorithm
        """
        start_time = time.time()

        try:
            algorithm = resolve_algorithm(algorithm or self.default_algorithm)
            matches = self.iter_matches(text, pattern, algorithm)
        except InvalidArgument as e:
            self._record_error("search", e)
            raise

        results, total, truncated = self._collect(
            text, matches, max_matches, include_text
        )
        execution_time = (time.time() - start_time) * 1000

        with self._lock:
            self._stats["total_queries"] += 1
            self._stats["single_pattern_queries"] += 1
            self._stats["algorithm_usage"][algorithm.value] += 1
            self._record_outcome(total, execution_time)

        logger.debug(
            "Single-pattern search completed",
            algorithm=algorithm.value,
            text_length=len(text),
            pattern_length=len(pattern),
            total_matches=total,
            execution_time_ms=round(execution_time, 3),
        )

        return SearchResponse(
            algorithm=algorithm.value,
            pattern_length=len(pattern),
            text_length=len(text),
            total_matches=total,
            truncated=truncated,
            matches=results,
            execution_time_ms=execution_time,
        )

    def search_many(
        self,
        text: Text,
        patterns: Sequence[Text],
        max_matches: Optional[int] = None,
        include_text: bool = True,
    ) -> MultiSearchResponse:
        """
        Search text for every pattern of a set using an Aho-Corasick automaton.

        Args:
            text: Text to search
            patterns: Non-empty patterns; ids follow sequence order
            max_matches: Cap on returned matches; the total is still counted
            include_text: Whether to include the matched slice in each result

        Returns:
            MultiSearchResponse ordered by start, ties by pattern id
        """
        start_time = time.time()

        try:
            automaton, cache_hit = self.get_automaton(patterns)
            matches = aho_corasick.scan(automaton, text)
        except InvalidArgument as e:
            self._record_error("search_many", e)
            raise

        counts = [0] * len(automaton.patterns)
        for match in matches:
            counts[match.pattern_id] += 1

        results, total, truncated = self._collect(
            text, iter(matches), max_matches, include_text
        )
        execution_time = (time.time() - start_time) * 1000

        with self._lock:
            self._stats["total_queries"] += 1
            self._stats["multi_pattern_queries"] += 1
            self._record_outcome(total, execution_time)

        logger.debug(
            "Multi-pattern search completed",
            total_patterns=len(automaton.patterns),
            text_length=len(text),
            total_matches=total,
            cache_hit=cache_hit,
            execution_time_ms=round(execution_time, 3),
        )

        return MultiSearchResponse(
            total_patterns=len(automaton.patterns),
            text_length=len(text),
            total_matches=total,
            truncated=truncated,
            matches=results,
            counts=counts,
            automaton_states=len(automaton),
            cache_hit=cache_hit,
            execution_time_ms=execution_time,
        )

    def compare(self, text: Text, pattern: Text) -> CompareResponse:
        """
        Run every single-pattern algorithm on the same input.

        Useful as a consensus check: all algorithms must agree on the spans.

        Returns:
            CompareResponse with per-algorithm counts and timings
        """
        spans: Dict[str, List[Tuple[int, int]]] = {}
        timings: Dict[str, float] = {}

        try:
            for algorithm in Algorithm:
                start_time = time.time()
                spans[algorithm.value] = [
                    m.span() for m in self.iter_matches(text, pattern, algorithm)
                ]
                timings[algorithm.value] = (time.time() - start_time) * 1000
        except InvalidArgument as e:
            self._record_error("compare", e)
            raise

        reference_name = Algorithm.KMP.value
        reference = spans[reference_name]
        disagreeing = [name for name, found in spans.items() if found != reference]

        if disagreeing:
            logger.warning(
                "Algorithms disagree",
                reference=reference_name,
                disagreeing=disagreeing,
                text_length=len(text),
                pattern_length=len(pattern),
            )

        with self._lock:
            self._stats["total_queries"] += 1
            self._stats["compare_queries"] += 1
            self._record_outcome(len(reference), sum(timings.values()))

        return CompareResponse(
            consensus=not disagreeing,
            starts=[start for start, _ in reference],
            counts={name: len(found) for name, found in spans.items()},
            timings_ms=timings,
            disagreeing=disagreeing,
        )

    def count(
        self,
        text: Text,
        pattern: Text,
        algorithm: Union[Algorithm, str, None] = None,
    ) -> int:
        """Count occurrences without materializing matches."""
        return sum(1 for _ in self.iter_matches(text, pattern, algorithm))

    def get_automaton(self, patterns: Iterable[Text]) -> Tuple[aho_corasick.Automaton, bool]:
        """
        Return an automaton for a pattern set, building it on a cache miss.

        Args:
            patterns: Pattern set

        Returns:
            Tuple of (automaton, cache_hit)
        """
        patterns = list(patterns)
        if not self.enable_cache:
            return self._build(patterns), False

        key = self._cache_key(patterns)
        with self._lock:
            automaton = self._automata.get(key)
            if automaton is not None:
                self._automata.move_to_end(key)
                self._stats["cache_hits"] += 1
                return automaton, True
            self._stats["cache_misses"] += 1

        automaton = self._build(patterns)

        with self._lock:
            self._automata[key] = automaton
            self._automata.move_to_end(key)
            while len(self._automata) > self.cache_max_size:
                self._automata.popitem(last=False)
        return automaton, False

    def _build(self, patterns: List[Text]) -> aho_corasick.Automaton:
        start_time = time.time()
        automaton = aho_corasick.build(patterns)
        logger.info(
            "Automaton built",
            total_patterns=len(patterns),
            states=len(automaton),
            build_time_ms=round((time.time() - start_time) * 1000, 3),
        )
        return automaton

    @staticmethod
    def _cache_key(patterns: List[Text]) -> tuple:
        """Hashable key; raises InvalidArgument for unsupported pattern types."""
        key = []
        for pattern in patterns:
            kind = kind_of(pattern)
            key.append((kind.__name__, bytes(pattern) if is_bytes_like(pattern) else pattern))
        return tuple(key)

    def _collect(
        self,
        text: Text,
        matches: Iterator[Match],
        max_matches: Optional[int],
        include_text: bool,
    ) -> Tuple[List[MatchResult], int, bool]:
        limit = max_matches if max_matches is not None else self.max_matches
        results: List[MatchResult] = []
        total = 0
        for match in matches:
            total += 1
            if limit is None or len(results) < limit:
                results.append(self._to_result(text, match, include_text))
        return results, total, len(results) < total

    @staticmethod
    def _to_result(text: Text, match: Match, include_text: bool) -> MatchResult:
        matched = None
        if include_text:
            check_bounds(len(text), match.start, match.end)
            piece = text[match.start:match.end]
            matched = piece if isinstance(piece, str) else from_bytes(bytes(piece))
        return MatchResult(
            start=match.start,
            end=match.end,
            pattern_id=match.pattern_id,
            matched=matched,
        )

    def _record_outcome(self, total: int, execution_time: float) -> None:
        """Update match statistics; caller holds the lock."""
        self._stats["total_matches"] += total
        self._stats["total_execution_time"] += execution_time
        if total == 0:
            self._stats["no_matches"] += 1

    def _record_error(self, operation: str, error: Exception) -> None:
        with self._lock:
            self._stats["errors"] += 1
        logger.warning("Search rejected", operation=operation, error=str(error))

    def get_stats(self) -> Dict[str, any]:
        """Get engine statistics."""
        with self._lock:
            stats = self._stats.copy()
            stats["algorithm_usage"] = dict(self._stats["algorithm_usage"])
            stats["cached_automata"] = len(self._automata)

        # Calculate averages
        if stats["total_queries"] > 0:
            stats["average_execution_time_ms"] = (
                stats["total_execution_time"] / stats["total_queries"]
            )
            stats["no_match_rate"] = stats["no_matches"] / stats["total_queries"]
        else:
            stats["average_execution_time_ms"] = 0.0
            stats["no_match_rate"] = 0.0

        lookups = stats["cache_hits"] + stats["cache_misses"]
        stats["cache_hit_rate"] = stats["cache_hits"] / lookups if lookups else 0.0

        attempts = stats["total_queries"] + stats["errors"]
        stats["error_rate"] = stats["errors"] / attempts if attempts else 0.0

        return stats

    def clear(self) -> None:
        """Drop cached automata and reset statistics."""
        with self._lock:
            self._automata.clear()
            self._stats = self._empty_stats()
