"""Adapter layer converting between tracecontext values and OpenTelemetry."""

from __future__ import annotations

from typing import Optional

from opentelemetry import context as context_api
from opentelemetry.trace import NonRecordingSpan
from opentelemetry.trace import SpanContext as OTelSpanContext
from opentelemetry.trace import TraceFlags
from opentelemetry.trace import TraceState as OTelTraceState
from opentelemetry.trace import get_current_span, set_span_in_context

from tracecontext.context.context import TraceContext
from tracecontext.context.traceparent import SUPPORTED_VERSION, TraceParent
from tracecontext.context.tracestate import TraceState, TraceStateEntry
from tracecontext.errors import ValidationError


def to_otel_trace_state(state: TraceState) -> OTelTraceState:
    """Convert a TraceState to an OpenTelemetry TraceState, keeping order."""
    return OTelTraceState([(entry.key, entry.value) for entry in state])


def from_otel_trace_state(trace_state: Optional[OTelTraceState]) -> TraceState:
    if not trace_state:
        return TraceState()
    return TraceState(tuple(TraceStateEntry(key, value) for key, value in trace_state.items()))


def to_otel_span_context(context: TraceContext, is_remote: bool = True) -> OTelSpanContext:
    """
    Convert a TraceContext to an OpenTelemetry SpanContext.

    The parent id becomes the span id; an extracted context describes the
    remote caller's span, hence ``is_remote`` defaults to True.
    """
    return OTelSpanContext(
        trace_id=context.trace_id,
        span_id=context.parent_id,
        is_remote=is_remote,
        trace_flags=TraceFlags(context.flags),
        trace_state=to_otel_trace_state(context.tracestate),
    )


def from_otel_span_context(span_context: OTelSpanContext) -> TraceContext:
    """
    Convert an OpenTelemetry SpanContext to a TraceContext.

    Raises:
        ValidationError: the span context is not valid
    """
    if not span_context.is_valid:
        raise ValidationError(
            "OpenTelemetry span context is not valid",
            {"trace_id": span_context.trace_id, "span_id": span_context.span_id},
        )
    traceparent = TraceParent(
        version=SUPPORTED_VERSION,
        trace_id=span_context.trace_id,
        parent_id=span_context.span_id,
        flags=TraceFlags(span_context.trace_flags),
    )
    return TraceContext(traceparent, from_otel_trace_state(span_context.trace_state))


def to_otel_context(
    context: TraceContext, parent: Optional[context_api.Context] = None
) -> context_api.Context:
    """
    Return an OpenTelemetry Context whose current span is ``context``.

    Pass the result as ``context=`` when starting a span so it becomes a child
    of the remote caller.
    """
    span = NonRecordingSpan(to_otel_span_context(context))
    return set_span_in_context(span, parent)


def from_otel_context(ctx: Optional[context_api.Context] = None) -> Optional[TraceContext]:
    """Return the current span of an OpenTelemetry Context as a TraceContext, if valid."""
    span_context = get_current_span(ctx).get_span_context()
    if not span_context.is_valid:
        return None
    return from_otel_span_context(span_context)
