"""The traceparent header: value type plus strict parser and formatter."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Union

from opentelemetry.trace import TraceFlags

from tracecontext.errors import (
    InvalidFormatError,
    InvalidHexError,
    InvalidLengthError,
    InvalidParentIdError,
    InvalidTraceIdError,
    InvalidVersionError,
    ValidationError,
)
from tracecontext.utils.helpers import (
    SPAN_ID_MAX,
    TRACE_ID_MAX,
    format_span_id,
    format_trace_id,
    is_hex,
    to_header_str,
)

TRACEPARENT_HEADER = "traceparent"
TRACEPARENT_LENGTH = 55
SUPPORTED_VERSION = 0x00
INVALID_VERSION = 0xFF

# (name, start, end) of each hex field; separators sit between them
_FIELDS = (
    ("version", 0, 2),
    ("trace_id", 3, 35),
    ("parent_id", 36, 52),
    ("flags", 53, 55),
)
_SEPARATORS = (2, 35, 52)


@dataclass(frozen=True)
class TraceParent:
    """
    Decoded traceparent header.

    Unknown flag bits are kept as-is. Only version 00 is ever written out;
    other parsed versions are kept so callers can inspect them.
    """

    version: int
    trace_id: int
    parent_id: int
    flags: TraceFlags = TraceFlags(TraceFlags.SAMPLED)

    def __post_init__(self) -> None:
        if not 0 <= self.version < INVALID_VERSION:
            raise InvalidVersionError(self.version)
        if not 0 < self.trace_id <= TRACE_ID_MAX:
            raise InvalidTraceIdError(
                "trace id must be a non-zero 128-bit integer", {"trace_id": self.trace_id}
            )
        if not 0 < self.parent_id <= SPAN_ID_MAX:
            raise InvalidParentIdError(
                "parent id must be a non-zero 64-bit integer", {"parent_id": self.parent_id}
            )
        if not 0 <= self.flags <= 0xFF:
            raise ValidationError("trace flags must fit in 8 bits", {"flags": self.flags})
        if not isinstance(self.flags, TraceFlags):
            object.__setattr__(self, "flags", TraceFlags(self.flags))

    @property
    def sampled(self) -> bool:
        return self.flags.sampled

    def with_sampled(self, sampled: bool) -> "TraceParent":
        """Return a copy with bit 0 of the flags set or cleared."""
        if sampled:
            flags = self.flags | TraceFlags.SAMPLED
        else:
            flags = self.flags & ~TraceFlags.SAMPLED
        return replace(self, flags=TraceFlags(flags))

    def __str__(self) -> str:
        return format_traceparent(self)


def parse_traceparent(header_value: Union[str, bytes]) -> TraceParent:
    """
    Parse a traceparent header value.

    Checks run in a fixed order and the first failure is raised: length,
    separators, hex digits per field, version, trace id, parent id.

    Raises:
        ParentParseError: one of its subclasses naming the first violation
    """
    value = to_header_str(header_value)

    if len(value) != TRACEPARENT_LENGTH:
        raise InvalidLengthError(len(value))

    for position in _SEPARATORS:
        if value[position] != "-":
            raise InvalidFormatError(details={"position": position})

    fields = {}
    for name, start, end in _FIELDS:
        field = value[start:end]
        if not is_hex(field):
            raise InvalidHexError(name)
        fields[name] = int(field, 16)

    if fields["version"] == INVALID_VERSION:
        raise InvalidVersionError(fields["version"])
    if fields["trace_id"] == 0:
        raise InvalidTraceIdError()
    if fields["parent_id"] == 0:
        raise InvalidParentIdError()

    return TraceParent(
        version=fields["version"],
        trace_id=fields["trace_id"],
        parent_id=fields["parent_id"],
        flags=TraceFlags(fields["flags"]),
    )


def format_traceparent(traceparent: TraceParent) -> str:
    """
    Format a traceparent header value (W3C Trace Context, version 00).

    Always 55 lowercase characters.
    """
    return "{:02x}-{}-{}-{:02x}".format(
        SUPPORTED_VERSION,
        format_trace_id(traceparent.trace_id),
        format_span_id(traceparent.parent_id),
        traceparent.flags,
    )
