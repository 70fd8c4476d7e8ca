"""Regex delegation, string transforms and text encodings."""

import base64
import binascii
import re
import string
from typing import List, Optional

from .types import InvalidArgument

_BASE64_ALPHABET = frozenset(string.ascii_letters + string.digits + "+/")


class EncodingError(ValueError):
    """Raised when Base64 or hex input cannot be decoded."""


def _compile(pattern: str, flags: int = 0) -> "re.Pattern":
    try:
        return re.compile(pattern, flags)
    except re.error as e:
        raise InvalidArgument(f"Invalid regular expression {pattern!r}: {e}") from e


def find_pattern(text: str, pattern: str) -> Optional[str]:
    """
    Return the first capture group of the first regex match.

    Args:
        text: Text to search
        pattern: Regular expression with at least one group

    Returns:
        Captured text, or None when nothing matches, the group did not
        participate, or the expression is invalid
    """
    try:
        regex = re.compile(pattern)
    except re.error:
        return None
    match = regex.search(text)
    if match is None or regex.groups < 1:
        return None
    return match.group(1)


def replace_pattern(text: str, pattern: str, replacement: str) -> str:
    """
    Replace every regex match in text with the replacement.

    The replacement uses Python template syntax: groups are referenced as
    ``\\1`` or ``\\g<name>``. ``$1`` and ``${name}`` are copied literally.

    Raises:
        InvalidArgument: If the expression or the replacement template is
            invalid, e.g. a reference to a group the expression lacks
    """
    regex = _compile(pattern)
    try:
        return regex.sub(replacement, text)
    except (re.error, IndexError) as e:
        raise InvalidArgument(f"Invalid replacement {replacement!r}: {e}") from e


def count_pattern(text: str, pattern: str) -> int:
    """Count case-insensitive regex matches in text."""
    return sum(1 for _ in _compile(pattern, re.IGNORECASE).finditer(text))


class TextTransformer:
    """Single-pass string transforms."""

    OPERATIONS = (
        "to_uppercase",
        "to_lowercase",
        "trim_whitespace",
        "reverse_string",
        "remove_punctuation",
        "capitalize_words",
    )

    def __init__(self) -> None:
        """Initialize the transformer."""
        self.number_regex = re.compile(r"\d+")
        self.punctuation_table = str.maketrans("", "", string.punctuation)

    def split_text(self, text: str, delimiter: str) -> List[str]:
        if not delimiter:
            raise InvalidArgument("Delimiter must not be empty")
        return text.split(delimiter)

    def join_text(self, parts: List[str], delimiter: str) -> str:
        return delimiter.join(parts)

    def to_uppercase(self, text: str) -> str:
        return text.upper()

    def to_lowercase(self, text: str) -> str:
        return text.lower()

    def trim_whitespace(self, text: str) -> str:
        return text.strip()

    def is_empty_or_whitespace(self, text: str) -> bool:
        return not text.strip()

    def reverse_string(self, text: str) -> str:
        return text[::-1]

    def is_palindrome(self, text: str) -> bool:
        """
        Check whether text reads the same backwards.

        Only alphanumeric characters count and case is ignored, so
        "A man, a plan, a canal: Panama" is a palindrome.
        """
        cleaned = [ch.lower() for ch in text if ch.isalnum()]
        return cleaned == cleaned[::-1]

    def remove_punctuation(self, text: str) -> str:
        """Drop ASCII punctuation characters."""
        return text.translate(self.punctuation_table)

    def extract_numbers(self, text: str) -> List[str]:
        """Return every run of decimal digits, in order."""
        return self.number_regex.findall(text)

    def capitalize_words(self, text: str) -> str:
        """
        Upper-case the first letter of each whitespace-separated word.

        Words are re-joined with single spaces; the rest of each word is
        left untouched.
        """
        return " ".join(word[:1].upper() + word[1:] for word in text.split())

    def apply(self, operation: str, text: str) -> str:
        """
        Apply a named single-argument transform.

        Args:
            operation: One of ``TextTransformer.OPERATIONS``
            text: Input text

        Returns:
            Transformed text
        """
        if operation not in self.OPERATIONS:
            raise InvalidArgument(
                f"Unknown transform {operation!r}. Expected one of: {', '.join(self.OPERATIONS)}"
            )
        return getattr(self, operation)(text)


def encode_base64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def base64_to_bytes(encoded: str) -> bytes:
    """
    Decode Base64, tolerating missing padding.

    Anything after the first ``=`` is ignored. A lone trailing symbol
    carries fewer than eight bits and is dropped, so ``"a"`` decodes to
    ``b""``.

    Raises:
        EncodingError: On characters outside the Base64 alphabet
    """
    body = encoded.split("=", 1)[0]
    if len(body) % 4 == 1:
        if body[-1] not in _BASE64_ALPHABET:
            raise EncodingError(f"Invalid Base64 character: {body[-1]!r}")
        body = body[:-1]
    body += "=" * (-len(body) % 4)
    try:
        return base64.b64decode(body, validate=True)
    except (binascii.Error, ValueError) as e:
        raise EncodingError(f"Invalid Base64 input: {e}") from e


def decode_base64(encoded: str) -> str:
    return from_bytes(base64_to_bytes(encoded), strict=True)


def encode_hex(text: str) -> str:
    return text.encode("utf-8").hex()


def hex_to_bytes(encoded: str) -> bytes:
    """
    Decode a hex string.

    Raises:
        EncodingError: On odd length or non-hex characters
    """
    if len(encoded) % 2:
        raise EncodingError("Invalid hex string length")
    try:
        return bytes.fromhex(encoded)
    except ValueError as e:
        raise EncodingError(f"Invalid hex input: {e}") from e


def decode_hex(encoded: str) -> str:
    return from_bytes(hex_to_bytes(encoded), strict=True)


def to_bytes(text: str) -> bytes:
    return text.encode("utf-8")


def from_bytes(data: bytes, strict: bool = False) -> str:
    """
    Decode UTF-8 bytes.

    Invalid sequences are replaced unless ``strict`` is set, in which case
    they raise EncodingError.
    """
    if not strict:
        return data.decode("utf-8", errors="replace")
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise EncodingError("Decoded bytes are not valid UTF-8") from e


def decode_payload(value: str, encoding: str = "text"):
    """
    Turn a request payload into searchable text.

    Args:
        value: Raw payload
        encoding: ``text`` (returned as-is), ``hex`` or ``base64`` (decoded
            to bytes)

    Returns:
        str for ``text``, bytes otherwise
    """
    if encoding == "text":
        return value
    if encoding == "hex":
        return hex_to_bytes(value)
    if encoding == "base64":
        return base64_to_bytes(value)
    raise InvalidArgument(f"Unknown encoding {encoding!r}")
