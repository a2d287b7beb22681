"""Helper functions for hex id formatting and parsing."""

from __future__ import annotations

from typing import Union

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

TRACE_ID_MAX = (1 << 128) - 1
SPAN_ID_MAX = (1 << 64) - 1


def format_trace_id(trace_id: int) -> str:
    """
    Format a 128-bit trace id as a hex string.

    Args:
        trace_id: trace id as int

    Returns:
        32-character lowercase hex string
    """
    return format(trace_id, '032x')


def format_span_id(span_id: int) -> str:
    """
    Format a 64-bit span id as a hex string.

    Args:
        span_id: span id as int

    Returns:
        16-character lowercase hex string
    """
    return format(span_id, '016x')


def is_hex(value: str) -> bool:
    """
    Return True if value is non-empty and made only of hex digits.

    ``int(value, 16)`` alone is too lenient: it accepts a ``0x`` prefix,
    underscores and surrounding whitespace.
    """
    return bool(value) and all(ch in _HEX_DIGITS for ch in value)


def to_header_str(value: Union[str, bytes]) -> str:
    """Decode a raw header value; bytes map one-to-one onto characters."""
    if isinstance(value, bytes):
        return value.decode("latin-1")
    return value
