"""Utility functions for tracecontext."""

from tracecontext.utils.helpers import (
    SPAN_ID_MAX,
    TRACE_ID_MAX,
    format_trace_id,
    format_span_id,
    is_hex,
    to_header_str,
)

__all__ = [
    "SPAN_ID_MAX",
    "TRACE_ID_MAX",
    "format_trace_id",
    "format_span_id",
    "is_hex",
    "to_header_str",
]
