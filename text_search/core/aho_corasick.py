"""
Aho-Corasick multi-pattern matching.

The automaton is an arena of states addressed by integer id: state ``s`` owns
``goto[s]`` (symbol -> state id), ``fail[s]`` (state id) and ``output[s]``
(pattern ids ending at ``s``, including those reached through failure links,
in ascending id order). State 0 is the root.

Once built the automaton is never mutated, so one instance may be scanned
from many threads at once.
"""

from collections import deque
from typing import Dict, Hashable, Iterable, Iterator, List, Optional, Sequence, Tuple

from .alphabet import Text, check_pattern, kind_of
from .types import InvalidArgument, Match

ROOT = 0


class Automaton:
    """Immutable Aho-Corasick automaton. Create it with :func:`build`."""

    __slots__ = ("_goto", "_fail", "_output", "_patterns", "_lengths", "_kind")

    def __init__(
        self,
        goto: Sequence[Dict[Hashable, int]],
        fail: Sequence[int],
        output: Sequence[Tuple[int, ...]],
        patterns: Sequence[Text],
        kind: type,
    ) -> None:
        self._goto = tuple(goto)
        self._fail = tuple(fail)
        self._output = tuple(output)
        self._patterns = tuple(patterns)
        self._lengths = tuple(len(p) for p in patterns)
        self._kind = kind

    def __len__(self) -> int:
        return len(self._goto)

    def __repr__(self) -> str:
        return f"Automaton(patterns={len(self._patterns)}, states={len(self._goto)})"

    @property
    def patterns(self) -> Tuple[Text, ...]:
        """Patterns in insertion order; the index is the pattern id."""
        return self._patterns

    @property
    def kind(self) -> type:
        """``str`` or ``bytes``: the kind of text this automaton scans."""
        return self._kind

    def pattern_length(self, pattern_id: int) -> int:
        return self._lengths[pattern_id]

    def transition(self, state: int, symbol: Hashable) -> Optional[int]:
        """Return the goto target for ``symbol`` or None when there is none."""
        return self._goto[state].get(symbol)

    def failure(self, state: int) -> int:
        return self._fail[state]

    def output(self, state: int) -> Tuple[int, ...]:
        """Effective output set of a state, ascending pattern ids."""
        return self._output[state]

    def step(self, state: int, symbol: Hashable) -> int:
        """Advance one symbol, following failure links on a miss."""
        goto = self._goto
        fail = self._fail
        while state and symbol not in goto[state]:
            state = fail[state]
        # Root loops to itself on unmatched symbols.
        return goto[state].get(symbol, ROOT)

    def iter_scan(self, text: Text) -> Iterator[Match]:
        return iter_scan(self, text)

    def scan(self, text: Text) -> List[Match]:
        return scan(self, text)


def build(patterns: Iterable[Text]) -> Automaton:
    """
    Build an automaton over a pattern set.

    Args:
        patterns: Non-empty patterns, all str or all bytes-like. Pattern ids
            are assigned in iteration order; duplicates get their own id.

    Returns:
        Immutable automaton

    Raises:
        InvalidArgument: If the set is empty, contains an empty pattern or
            mixes str and bytes
    """
    patterns = list(patterns)
    if not patterns:
        raise InvalidArgument("Pattern set must not be empty")

    kind = None
    for index, pattern in enumerate(patterns):
        try:
            check_pattern(pattern)
        except InvalidArgument as e:
            raise InvalidArgument(f"Invalid pattern at index {index}: {e}") from e
        if kind is None:
            kind = kind_of(pattern)
        elif kind_of(pattern) is not kind:
            raise InvalidArgument("Patterns must all be str or all be bytes")

    goto: List[Dict[Hashable, int]] = [{}]
    own: List[List[int]] = [[]]

    for pattern_id, pattern in enumerate(patterns):
        state = ROOT
        for symbol in pattern:
            nxt = goto[state].get(symbol)
            if nxt is None:
                nxt = len(goto)
                goto[state][symbol] = nxt
                goto.append({})
                own.append([])
            state = nxt
        own[state].append(pattern_id)

    fail = _link_failures(goto)
    output = _propagate_outputs(goto, fail, own)
    return Automaton(goto, fail, output, patterns, kind)


def _link_failures(goto: List[Dict[Hashable, int]]) -> List[int]:
    # Depth-1 states fail to the root.
    fail = [ROOT] * len(goto)
    queue = deque(goto[ROOT].values())
    while queue:
        state = queue.popleft()
        for symbol, child in goto[state].items():
            queue.append(child)
            f = fail[state]
            while f and symbol not in goto[f]:
                f = fail[f]
            fail[child] = goto[f].get(symbol, ROOT)
    return fail


def _propagate_outputs(
    goto: List[Dict[Hashable, int]],
    fail: List[int],
    own: List[List[int]],
) -> List[Tuple[int, ...]]:
    output: List[Tuple[int, ...]] = [tuple(ids) for ids in own]
    # BFS order guarantees fail[state] is final before state is visited.
    queue = deque(goto[ROOT].values())
    while queue:
        state = queue.popleft()
        inherited = output[fail[state]]
        if inherited:
            output[state] = tuple(sorted(set(output[state]).union(inherited)))
        queue.extend(goto[state].values())
    return output


def _check_text(automaton: Automaton, text: Text) -> None:
    if kind_of(text) is not automaton.kind:
        raise InvalidArgument("Text and automaton patterns must both be str or both be bytes")


def iter_scan(automaton: Automaton, text: Text) -> Iterator[Match]:
    """
    Lazily scan text, yielding matches by end position.

    Matches ending at the same position come out in pattern-id order.
    """
    _check_text(automaton, text)
    return _drive(automaton, text)


def scan(automaton: Automaton, text: Text) -> List[Match]:
    """
    Scan text and return every match of every pattern.

    Args:
        automaton: Automaton from :func:`build`
        text: Text of the same kind as the patterns

    Returns:
        Matches ordered by start position, ties broken by pattern id
    """
    matches = list(iter_scan(automaton, text))
    matches.sort(key=lambda match: (match.start, match.pattern_id))
    return matches


def _drive(automaton: Automaton, text: Text) -> Iterator[Match]:
    state = ROOT
    for i, symbol in enumerate(text):
        state = automaton.step(state, symbol)
        end = i + 1
        for pattern_id in automaton.output(state):
            yield Match(end - automaton.pattern_length(pattern_id), end, pattern_id)
