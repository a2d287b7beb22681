"""W3C trace context propagation over header carriers."""

from __future__ import annotations

import logging
from typing import Optional

from tracecontext import runtime_config
from tracecontext.context.carrier import HeaderGetter, HeaderSetter, remove_header, set_header
from tracecontext.context.context import TraceContext
from tracecontext.context.traceparent import TRACEPARENT_HEADER, format_traceparent
from tracecontext.context.tracestate import (
    TRACESTATE_HEADER,
    TraceState,
    format_tracestate,
    truncate_tracestate,
)
from tracecontext.errors import ExtractError

logger = logging.getLogger(__name__)


def inject_traceparent(headers: HeaderSetter, context: TraceContext) -> None:
    """Write the traceparent header, replacing any existing one."""
    set_header(headers, TRACEPARENT_HEADER, format_traceparent(context.traceparent))


def inject_tracestate(headers: HeaderSetter, context: TraceContext) -> None:
    """
    Write the tracestate header if the context has any entries.

    The state is truncated to the configured maximum length first. A stale
    tracestate header is removed when there is nothing to send.
    """
    state = _limit(context.tracestate)
    if not state:
        remove_header(headers, TRACESTATE_HEADER)
        return
    set_header(headers, TRACESTATE_HEADER, format_tracestate(state))


def inject(headers: HeaderSetter, context: TraceContext) -> HeaderSetter:
    """
    Inject traceparent and tracestate into the provided headers.

    Returns the same headers mapping for convenience.
    """
    inject_traceparent(headers, context)
    inject_tracestate(headers, context)
    return headers


def extract_trace_context(headers: HeaderGetter) -> Optional[TraceContext]:
    """
    Extract a TraceContext from headers, or None if there is no valid one.

    Use ``TraceContext.extract`` to find out why extraction failed.
    """
    try:
        return TraceContext.extract(headers)
    except ExtractError as exc:
        logger.debug(f"No trace context extracted: {exc}")
        return None


def extract(headers: HeaderGetter) -> TraceContext:
    """Alias of ``TraceContext.extract``."""
    return TraceContext.extract(headers)


def _limit(state: TraceState) -> TraceState:
    max_length = runtime_config.get_max_tracestate_length()
    if max_length is None:
        return state
    return truncate_tracestate(state, max_length)
