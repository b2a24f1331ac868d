"""Byte pattern primitives: hex decoding and occurrence counting.

Both functions are pure and cheap to import so they can run inside worker
processes without pulling the rest of the package.
"""

from __future__ import annotations
import binascii

from ..errors import PatternDecodeError


def decode_pattern(hex_text: str) -> bytes:
    """Decode a hexadecimal pattern string to raw bytes.

    Only a strict run of hex digit pairs is accepted; whitespace, separators,
    ``0x`` prefixes and odd lengths are rejected.

    Raises:
        PatternDecodeError: If ``hex_text`` is not valid hexadecimal.
    """
    if len(hex_text) % 2:
        raise PatternDecodeError(hex_text, "odd number of hex digits")
    try:
        return binascii.unhexlify(hex_text)
    except (binascii.Error, ValueError) as exc:
        raise PatternDecodeError(hex_text, "non-hex character") from exc


def count_occurrences(pattern: bytes, buffer: bytes) -> int:
    """Count non-overlapping, left-to-right exact matches of pattern in buffer.

    A match consumes its bytes before the scan resumes, so ``b"aa"`` occurs
    once in ``b"aaa"``. An empty pattern never matches.

    Examples:
        >>> count_occurrences(b"ab", b"abcabc")
        2
        >>> count_occurrences(b"aa", b"aaa")
        1
        >>> count_occurrences(b"", b"abc")
        0
    """
    if not pattern or len(pattern) > len(buffer):
        return 0
    # bytes.count is the same greedy scan; it only differs for the empty pattern
    return buffer.count(pattern)


__all__ = ["decode_pattern", "count_occurrences"]
