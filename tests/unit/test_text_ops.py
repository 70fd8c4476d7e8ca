"""Unit tests for regex helpers, string transforms and encodings."""

import pytest
from text_search.core.text_ops import (
    EncodingError,
    TextTransformer,
    base64_to_bytes,
    count_pattern,
    decode_base64,
    decode_hex,
    decode_payload,
    encode_base64,
    encode_hex,
    find_pattern,
    from_bytes,
    hex_to_bytes,
    replace_pattern,
    to_bytes,
)
from text_search.core.types import InvalidArgument


class TestRegexHelpers:
    """Test cases for the regex helpers."""

    def test_find_pattern_returns_first_group(self):
        """Test capturing the first group of the first match."""
        assert find_pattern("order 42 and 43", r"order (\d+)") == "42"

    def test_find_pattern_no_match(self):
        """Test that a missing match returns None."""
        assert find_pattern("no digits", r"(\d+)") is None

    def test_find_pattern_without_group(self):
        """Test that an expression without groups returns None."""
        assert find_pattern("abc", r"b") is None

    def test_find_pattern_invalid_regex(self):
        """Test that an invalid expression returns None instead of raising."""
        assert find_pattern("abc", r"(") is None

    def test_replace_pattern(self):
        """Test replacing every match."""
        assert replace_pattern("a1b22c333", r"\d+", "#") == "a#b#c#"

    def test_replace_pattern_with_backreference(self):
        """Test group references in the replacement."""
        assert replace_pattern("john smith", r"(\w+) (\w+)", r"\2 \1") == "smith john"

    def test_replace_pattern_invalid_regex(self):
        """Test that an invalid expression raises InvalidArgument."""
        with pytest.raises(InvalidArgument):
            replace_pattern("abc", r"[", "x")

    def test_replace_pattern_missing_group_reference(self):
        """Test that a replacement naming an absent group raises InvalidArgument."""
        with pytest.raises(InvalidArgument, match="replacement"):
            replace_pattern("abc", r"b", r"\1")

    def test_replace_pattern_unknown_named_group(self):
        """Test that a replacement naming an unknown group raises InvalidArgument."""
        with pytest.raises(InvalidArgument):
            replace_pattern("abc", r"(?P<x>b)", r"\g<y>")

    def test_replace_pattern_dollar_syntax_is_literal(self):
        """Test that dollar group references are copied, not expanded."""
        assert replace_pattern("abc", r"(b)", "[$1]") == "a[$1]c"
        assert replace_pattern("abc", r"(b)", r"[\1]") == "a[b]c"

    def test_count_pattern_ignores_case(self):
        """Test that counting is case-insensitive."""
        assert count_pattern("The the THE", r"the") == 3

    def test_count_pattern_invalid_regex(self):
        """Test that an invalid expression raises InvalidArgument."""
        with pytest.raises(InvalidArgument):
            count_pattern("abc", r"(?P<")


class TestTextTransformer:
    """Test cases for the TextTransformer class."""

    @pytest.fixture
    def transformer(self):
        """Create a transformer instance for testing."""
        return TextTransformer()

    def test_split_and_join(self, transformer):
        """Test splitting and joining on a delimiter."""
        parts = transformer.split_text("a,b,,c", ",")
        assert parts == ["a", "b", "", "c"]
        assert transformer.join_text(parts, ",") == "a,b,,c"

    def test_split_empty_delimiter(self, transformer):
        """Test that an empty delimiter is rejected."""
        with pytest.raises(InvalidArgument):
            transformer.split_text("abc", "")

    def test_case_and_whitespace(self, transformer):
        """Test case conversion and trimming."""
        assert transformer.to_uppercase("MiXed") == "MIXED"
        assert transformer.to_lowercase("MiXed") == "mixed"
        assert transformer.trim_whitespace("  padded \n") == "padded"

    def test_is_empty_or_whitespace(self, transformer):
        """Test blank detection."""
        assert transformer.is_empty_or_whitespace("") is True
        assert transformer.is_empty_or_whitespace(" \t\n") is True
        assert transformer.is_empty_or_whitespace(" x ") is False

    def test_reverse_string(self, transformer):
        """Test reversal by character."""
        assert transformer.reverse_string("héllo") == "olléh"

    def test_is_palindrome(self, transformer):
        """Test palindromes ignoring case and punctuation."""
        assert transformer.is_palindrome("A man, a plan, a canal: Panama") is True
        assert transformer.is_palindrome("racecar") is True
        assert transformer.is_palindrome("hello") is False
        assert transformer.is_palindrome("") is True

    def test_remove_punctuation(self, transformer):
        """Test punctuation removal."""
        assert transformer.remove_punctuation("Hello, world! (ok?)") == "Hello world ok"

    def test_extract_numbers(self, transformer):
        """Test extracting digit runs."""
        assert transformer.extract_numbers("a1b22c333") == ["1", "22", "333"]
        assert transformer.extract_numbers("none") == []

    def test_capitalize_words(self, transformer):
        """Test word capitalization."""
        assert transformer.capitalize_words("hello   big wORLD") == "Hello Big WORLD"

    def test_apply(self, transformer):
        """Test dispatch by operation name."""
        assert transformer.apply("to_uppercase", "abc") == "ABC"
        assert transformer.apply("reverse_string", "abc") == "cba"

    def test_apply_unknown(self, transformer):
        """Test that unknown operations are rejected."""
        with pytest.raises(InvalidArgument):
            transformer.apply("split_text", "abc")


class TestEncodings:
    """Test cases for Base64 and hex helpers."""

    def test_base64(self):
        """Test Base64 encoding and decoding of UTF-8 text."""
        assert encode_base64("hello") == "aGVsbG8="
        assert decode_base64("aGVsbG8=") == "hello"

    def test_base64_missing_padding(self):
        """Test that missing padding is tolerated."""
        assert decode_base64("aGVsbG8") == "hello"

    def test_base64_trailing_garbage_after_padding(self):
        """Test that text after the first '=' is ignored."""
        assert base64_to_bytes("aGk=junk") == b"hi"

    def test_base64_invalid(self):
        """Test that characters outside the alphabet raise EncodingError."""
        with pytest.raises(EncodingError):
            base64_to_bytes("a$b!")

    def test_base64_lone_trailing_symbol_dropped(self):
        """Test that a final symbol carrying under eight bits is ignored."""
        assert base64_to_bytes("a") == b""
        assert base64_to_bytes("aGVsbG8xa") == b"hello1"

    def test_base64_lone_trailing_symbol_still_validated(self):
        """Test that a dropped trailing symbol must still be in the alphabet."""
        with pytest.raises(EncodingError):
            base64_to_bytes("aGVs$")

    def test_hex(self):
        """Test hex encoding and decoding."""
        assert encode_hex("hi") == "6869"
        assert decode_hex("6869") == "hi"
        assert hex_to_bytes("00ff") == b"\x00\xff"

    def test_hex_odd_length(self):
        """Test that odd-length hex raises EncodingError."""
        with pytest.raises(EncodingError, match="length"):
            hex_to_bytes("abc")

    def test_hex_invalid_characters(self):
        """Test that non-hex characters raise EncodingError."""
        with pytest.raises(EncodingError):
            hex_to_bytes("zz")

    def test_decode_requires_utf8(self):
        """Test that decoding to text rejects invalid UTF-8."""
        with pytest.raises(EncodingError):
            decode_hex("ff")

    def test_from_bytes_lossy(self):
        """Test that lossy decoding replaces invalid sequences."""
        assert from_bytes(b"a\xffb") == "a\ufffdb"
        assert from_bytes(to_bytes("héllo")) == "héllo"

    def test_encoding_error_is_value_error(self):
        """Test that EncodingError can be handled as ValueError."""
        assert issubclass(EncodingError, ValueError)


class TestDecodePayload:
    """Test cases for request payload decoding."""

    def test_text(self):
        """Test that plain text passes through."""
        assert decode_payload("abc") == "abc"

    def test_hex(self):
        """Test that hex payloads become bytes."""
        assert decode_payload("00ff", "hex") == b"\x00\xff"

    def test_base64(self):
        """Test that Base64 payloads become bytes."""
        assert decode_payload("AP8=", "base64") == b"\x00\xff"

    def test_unknown_encoding(self):
        """Test that unknown encodings are rejected."""
        with pytest.raises(InvalidArgument):
            decode_payload("abc", "rot13")
