"""
Byte Buffer Utilities

Small helpers used by tree construction, proof generation and verification:
- Hex string detection
- Byte order reversal (big-endian <-> little-endian display order)
- Buffer concatenation
- Lexicographic byte comparison
"""
from __future__ import annotations

import re

_HEX_STR_RE = re.compile(r"(0x)?[0-9A-Fa-f]*")


def is_hex_str(value: str) -> bool:
    """
    Check whether a string looks like hex, with an optional 0x prefix.

    The empty string (and a bare "0x") count as hex.

    Example:
        >>> is_hex_str("0xdeadBEEF")
        True
        >>> is_hex_str("xyz")
        False
    """
    return isinstance(value, str) and _HEX_STR_RE.fullmatch(value) is not None


def buffer_reverse(data: bytes) -> bytes:
    """Return a copy of ``data`` with its byte order inverted."""
    return bytes(data[::-1])


def buffer_concat(*buffers: bytes) -> bytes:
    """Concatenate byte sequences in argument order."""
    return b"".join(bytes(b) for b in buffers)


def buffer_compare(a: bytes, b: bytes) -> int:
    """
    Compare two byte sequences lexicographically.

    Only the common prefix is compared, so two buffers of different
    length whose shorter one is a prefix of the longer compare equal.

    Returns:
        -1 if a < b, 1 if a > b, 0 otherwise
    """
    for x, y in zip(a, b):
        if x < y:
            return -1
        if x > y:
            return 1
    return 0


__all__ = [
    "is_hex_str",
    "buffer_reverse",
    "buffer_concat",
    "buffer_compare",
]
