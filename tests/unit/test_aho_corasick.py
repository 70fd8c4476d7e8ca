"""Unit tests for the Aho-Corasick automaton."""

import random
from concurrent.futures import ThreadPoolExecutor

import pytest
from text_search.core import aho_corasick
from text_search.core.aho_corasick import ROOT, build, iter_scan, scan
from text_search.core.types import InvalidArgument, Match


def naive_scan(text, patterns):
    """Reference answer ordered by (start, pattern id)."""
    found = []
    for pattern_id, pattern in enumerate(patterns):
        m = len(pattern)
        for i in range(len(text) - m + 1):
            if text[i:i + m] == pattern:
                found.append(Match(i, i + m, pattern_id))
    found.sort(key=lambda match: (match.start, match.pattern_id))
    return found


class TestBuild:
    """Test cases for automaton construction."""

    @pytest.fixture
    def automaton(self):
        """Automaton over the classic he/she/his/hers set."""
        return build(["he", "she", "his", "hers"])

    def test_state_count(self, automaton):
        """Test that shared prefixes share states."""
        # root, h, he, her, hers, hi, his, s, sh, she
        assert len(automaton) == 10

    def test_patterns_keep_insertion_order(self, automaton):
        """Test that pattern ids follow insertion order."""
        assert automaton.patterns == ("he", "she", "his", "hers")
        assert automaton.pattern_length(3) == 4
        assert automaton.kind is str

    def test_goto_and_failure(self, automaton):
        """Test transitions and the failure link of 'sh' to 'h'."""
        s = automaton.transition(ROOT, "s")
        sh = automaton.transition(s, "h")
        h = automaton.transition(ROOT, "h")
        assert automaton.failure(sh) == h
        assert automaton.failure(h) == ROOT
        assert automaton.transition(ROOT, "x") is None

    def test_output_propagated_through_failure(self, automaton):
        """Test that 'she' also reports 'he'."""
        she = automaton.transition(
            automaton.transition(automaton.transition(ROOT, "s"), "h"), "e"
        )
        assert automaton.output(she) == (0, 1)

    def test_root_loops_on_unknown_symbol(self, automaton):
        """Test that stepping the root on an unknown symbol stays at the root."""
        assert automaton.step(ROOT, "z") == ROOT

    def test_empty_set_rejected(self):
        """Test that an empty pattern set raises InvalidArgument."""
        with pytest.raises(InvalidArgument):
            build([])

    def test_empty_pattern_rejected(self):
        """Test that an empty pattern inside the set raises InvalidArgument."""
        with pytest.raises(InvalidArgument, match="index 1"):
            build(["a", "", "b"])

    def test_mixed_kinds_rejected(self):
        """Test that str and bytes patterns cannot be mixed."""
        with pytest.raises(InvalidArgument):
            build(["abc", b"abc"])

    def test_unsupported_type_rejected(self):
        """Test that non-sequence patterns are rejected."""
        with pytest.raises(InvalidArgument):
            build([123])

    def test_build_from_generator(self):
        """Test that any iterable of patterns is accepted."""
        automaton = build(p for p in ("x", "y"))
        assert automaton.patterns == ("x", "y")

    def test_repr(self, automaton):
        """Test the automaton repr."""
        assert repr(automaton) == "Automaton(patterns=4, states=10)"

    def test_immutable(self, automaton):
        """Test that automaton attributes cannot be replaced."""
        with pytest.raises(AttributeError):
            automaton.extra = 1


class TestScan:
    """Test cases for scanning text with a built automaton."""

    def test_ushers(self):
        """Test the textbook 'ushers' example over he/she/his/hers."""
        automaton = build(["he", "she", "his", "hers"])
        assert scan(automaton, "ushers") == [
            Match(1, 4, 1),
            Match(2, 4, 0),
            Match(2, 6, 3),
        ]

    def test_iter_scan_orders_by_end(self):
        """Test that the lazy scan yields matches as their end is reached."""
        automaton = build(["he", "she", "his", "hers"])
        assert list(iter_scan(automaton, "ushers")) == [
            Match(2, 4, 0),
            Match(1, 4, 1),
            Match(2, 6, 3),
        ]

    def test_method_forms(self):
        """Test Automaton.scan and Automaton.iter_scan."""
        automaton = build(["ab"])
        assert automaton.scan("abab") == [Match(0, 2, 0), Match(2, 4, 0)]
        assert list(automaton.iter_scan("abab")) == automaton.scan("abab")

    def test_overlapping_and_nested(self):
        """Test patterns that overlap and nest inside one another."""
        automaton = build(["a", "aa", "aaa"])
        assert scan(automaton, "aaa") == [
            Match(0, 1, 0),
            Match(0, 2, 1),
            Match(0, 3, 2),
            Match(1, 2, 0),
            Match(1, 3, 1),
            Match(2, 3, 0),
        ]

    def test_duplicate_patterns_reported_per_id(self):
        """Test that duplicate patterns each get their own matches."""
        automaton = build(["ab", "ab"])
        assert scan(automaton, "xab") == [Match(1, 3, 0), Match(1, 3, 1)]

    def test_no_matches(self):
        """Test a text with none of the patterns."""
        assert scan(build(["foo", "bar"]), "bazqux") == []

    def test_empty_text(self):
        """Test that an empty text is valid and yields nothing."""
        assert scan(build(["a"]), "") == []

    def test_bytes(self):
        """Test byte patterns over bytes-like text."""
        automaton = build([b"\x00\x01", b"\x01"])
        assert automaton.kind is bytes
        expected = [Match(0, 2, 0), Match(1, 2, 1)]
        assert scan(automaton, b"\x00\x01") == expected
        assert scan(automaton, bytearray(b"\x00\x01")) == expected
        assert scan(automaton, memoryview(b"\x00\x01")) == expected

    def test_text_kind_mismatch(self):
        """Test that str patterns cannot scan bytes text."""
        with pytest.raises(InvalidArgument):
            scan(build(["a"]), b"a")

    def test_iter_scan_validates_eagerly(self):
        """Test that iter_scan rejects a mismatched text before iteration."""
        with pytest.raises(InvalidArgument):
            iter_scan(build([b"a"]), "a")

    def test_reuse(self):
        """Test that one automaton scans several texts independently."""
        automaton = build(["cat", "dog"])
        assert scan(automaton, "cat") == [Match(0, 3, 0)]
        assert scan(automaton, "hotdog") == [Match(3, 6, 1)]
        assert scan(automaton, "cat") == [Match(0, 3, 0)]

    def test_concurrent_scans(self):
        """Test that concurrent scans over a shared automaton agree."""
        automaton = build(["ab", "ba", "aba"])
        text = "abababbaba" * 50
        expected = scan(automaton, text)
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(lambda _: scan(automaton, text), range(8)))
        assert all(result == expected for result in results)

    @pytest.mark.parametrize("seed", range(3))
    def test_against_naive(self, seed):
        """Test random pattern sets against a brute-force scan."""
        rng = random.Random(seed)
        for _ in range(40):
            patterns = [
                "".join(rng.choice("abc") for _ in range(rng.randint(1, 4)))
                for _ in range(rng.randint(1, 6))
            ]
            text = "".join(rng.choice("abc") for _ in range(rng.randint(0, 50)))
            assert aho_corasick.scan(build(patterns), text) == naive_scan(text, patterns)

    def test_match_spans_slice_to_pattern(self):
        """Test that text[start:end] equals the pattern of each match."""
        patterns = ["an", "nan", "ana"]
        text = "bananarama"
        for match in scan(build(patterns), text):
            assert text[match.start:match.end] == patterns[match.pattern_id]
