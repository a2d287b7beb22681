"""TraceContext: a traceparent and its tracestate as one immutable value."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Callable, Optional, Protocol

from opentelemetry.trace import TraceFlags

from tracecontext import runtime_config
from tracecontext.context.carrier import HeaderGetter, get_header_values
from tracecontext.context.traceparent import (
    SUPPORTED_VERSION,
    TRACEPARENT_HEADER,
    TraceParent,
    parse_traceparent,
)
from tracecontext.context.tracestate import (
    EMPTY_TRACESTATE,
    TRACESTATE_HEADER,
    TraceState,
    TraceStateEntry,
    parse_tracestate,
    prepend_tracestate,
)
from tracecontext.errors import (
    InvalidFormatError,
    InvalidTraceParentError,
    MissingTraceParentError,
    ParentParseError,
    StateParseError,
)

logger = logging.getLogger(__name__)


class IdGenerator(Protocol):
    """Source of fresh ids, e.g. ``opentelemetry.sdk.trace.id_generator.RandomIdGenerator``."""

    def generate_span_id(self) -> int:
        ...

    def generate_trace_id(self) -> int:
        ...


@dataclass(frozen=True)
class TraceContext:
    traceparent: TraceParent
    tracestate: TraceState = field(default=EMPTY_TRACESTATE)

    @property
    def version(self) -> int:
        return self.traceparent.version

    @property
    def trace_id(self) -> int:
        return self.traceparent.trace_id

    @property
    def parent_id(self) -> int:
        return self.traceparent.parent_id

    @property
    def flags(self) -> TraceFlags:
        return self.traceparent.flags

    @property
    def sampled(self) -> bool:
        return self.traceparent.sampled

    @classmethod
    def new_root(cls, trace_id: int, span_id: int, sampled: bool = True) -> "TraceContext":
        """Start a new trace from caller-supplied ids."""
        flags = TraceFlags(TraceFlags.SAMPLED if sampled else TraceFlags.DEFAULT)
        return cls(TraceParent(SUPPORTED_VERSION, trace_id, span_id, flags))

    @classmethod
    def new_root_from(cls, id_generator: IdGenerator, sampled: bool = True) -> "TraceContext":
        return cls.new_root(
            id_generator.generate_trace_id(), id_generator.generate_span_id(), sampled
        )

    @classmethod
    def extract(
        cls,
        headers: HeaderGetter,
        on_tracestate_error: Optional[Callable[[StateParseError], None]] = None,
    ) -> "TraceContext":
        """
        Build a TraceContext from inbound request headers.

        A bad tracestate never fails extraction: it is replaced by an empty
        state, logged, and passed to ``on_tracestate_error`` when given.

        Raises:
            MissingTraceParentError: no traceparent header
            InvalidTraceParentError: traceparent was rejected; the parse error
                is on ``.error``
        """
        values = get_header_values(headers, TRACEPARENT_HEADER)
        if not values:
            raise MissingTraceParentError()
        try:
            if len(values) > 1:
                raise InvalidFormatError(
                    "traceparent header sent more than once", {"count": len(values)}
                )
            traceparent = parse_traceparent(values[0])
        except ParentParseError as exc:
            raise InvalidTraceParentError(exc) from exc

        tracestate = EMPTY_TRACESTATE
        state_values = get_header_values(headers, TRACESTATE_HEADER)
        if state_values:
            try:
                tracestate = parse_tracestate(",".join(state_values))
            except StateParseError as exc:
                level = logging.WARNING if runtime_config.get_warn_on_invalid_tracestate() else logging.DEBUG
                logger.log(level, f"Ignoring malformed tracestate header: {exc}")
                if on_tracestate_error is not None:
                    on_tracestate_error(exc)

        return cls(traceparent, tracestate)

    def derive_child(self, new_span_id: int, sampled: Optional[bool] = None) -> "TraceContext":
        """
        Derive the context to send downstream.

        Keeps the version and trace id, makes ``new_span_id`` the parent id,
        and overrides the sampled bit only when ``sampled`` is given. The
        tracestate is carried over unchanged.
        """
        traceparent = replace(self.traceparent, parent_id=new_span_id)
        if sampled is not None:
            traceparent = traceparent.with_sampled(sampled)
        return TraceContext(traceparent, self.tracestate)

    def child(self, id_generator: IdGenerator, sampled: Optional[bool] = None) -> "TraceContext":
        return self.derive_child(id_generator.generate_span_id(), sampled)

    def with_sampled(self, sampled: bool) -> "TraceContext":
        return replace(self, traceparent=self.traceparent.with_sampled(sampled))

    def with_tracestate_entry(self, key: str, value: str) -> "TraceContext":
        """Record this vendor's entry at the front of the tracestate."""
        return replace(self, tracestate=prepend_tracestate(self.tracestate, TraceStateEntry(key, value)))
