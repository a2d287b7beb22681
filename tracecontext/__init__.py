"""
Parse, validate and propagate W3C Trace Context headers.

Example::

    from tracecontext import TraceContext, inject

    parent = TraceContext.extract(request.headers)
    child = parent.derive_child(new_span_id)
    inject(outbound_headers, child)
"""

from tracecontext.context import (
    EMPTY_TRACESTATE,
    TRACEPARENT_HEADER,
    TRACESTATE_HEADER,
    IdGenerator,
    TraceContext,
    TraceParent,
    TraceState,
    TraceStateEntry,
    extract,
    extract_trace_context,
    format_traceparent,
    format_tracestate,
    inject,
    inject_traceparent,
    inject_tracestate,
    parse_traceparent,
    parse_tracestate,
    prepend_tracestate,
    truncate_tracestate,
)
from tracecontext.errors import (
    ConfigError,
    DuplicateKeyError,
    ExtractError,
    InvalidEntryError,
    InvalidFormatError,
    InvalidHexError,
    InvalidLengthError,
    InvalidParentIdError,
    InvalidTraceIdError,
    InvalidTraceParentError,
    InvalidVersionError,
    MalformedEntryError,
    MissingTraceParentError,
    ParentParseError,
    StateParseError,
    TraceContextError,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "TraceContext",
    "TraceParent",
    "TraceState",
    "TraceStateEntry",
    "IdGenerator",
    "EMPTY_TRACESTATE",
    "TRACEPARENT_HEADER",
    "TRACESTATE_HEADER",
    "parse_traceparent",
    "format_traceparent",
    "parse_tracestate",
    "format_tracestate",
    "prepend_tracestate",
    "truncate_tracestate",
    "inject",
    "inject_traceparent",
    "inject_tracestate",
    "extract",
    "extract_trace_context",
    "TraceContextError",
    "ConfigError",
    "ValidationError",
    "ParentParseError",
    "InvalidLengthError",
    "InvalidFormatError",
    "InvalidHexError",
    "InvalidVersionError",
    "InvalidTraceIdError",
    "InvalidParentIdError",
    "StateParseError",
    "MalformedEntryError",
    "InvalidEntryError",
    "DuplicateKeyError",
    "ExtractError",
    "MissingTraceParentError",
    "InvalidTraceParentError",
]
