"""Trace context values, codecs and header propagation."""

from tracecontext.context.carrier import HeaderGetter, HeaderSetter
from tracecontext.context.context import IdGenerator, TraceContext
from tracecontext.context.propagators import (
    extract,
    extract_trace_context,
    inject,
    inject_traceparent,
    inject_tracestate,
)
from tracecontext.context.traceparent import (
    TRACEPARENT_HEADER,
    TraceParent,
    format_traceparent,
    parse_traceparent,
)
from tracecontext.context.tracestate import (
    EMPTY_TRACESTATE,
    MAX_ENTRIES,
    MAX_LENGTH,
    TRACESTATE_HEADER,
    TraceState,
    TraceStateEntry,
    format_tracestate,
    parse_tracestate,
    prepend_tracestate,
    truncate_tracestate,
)

__all__ = [
    "HeaderGetter",
    "HeaderSetter",
    "IdGenerator",
    "TraceContext",
    "TraceParent",
    "TraceState",
    "TraceStateEntry",
    "EMPTY_TRACESTATE",
    "MAX_ENTRIES",
    "MAX_LENGTH",
    "TRACEPARENT_HEADER",
    "TRACESTATE_HEADER",
    "format_traceparent",
    "parse_traceparent",
    "format_tracestate",
    "parse_tracestate",
    "prepend_tracestate",
    "truncate_tracestate",
    "inject_traceparent",
    "inject_tracestate",
    "inject",
    "extract_trace_context",
    "extract",
]
