"""The tracestate header: ordered vendor entries plus parser and formatter."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, Union

from tracecontext.errors import (
    DuplicateKeyError,
    InvalidEntryError,
    MalformedEntryError,
    ValidationError,
)
from tracecontext.utils.helpers import to_header_str

logger = logging.getLogger(__name__)

TRACESTATE_HEADER = "tracestate"
MAX_ENTRIES = 32
MAX_LENGTH = 512
# Entries above this size are the first to go when truncating to MAX_LENGTH
LARGE_ENTRY_LENGTH = 128

_KEY_CHARS = r"[a-z0-9_\-*/]"
_KEY_RE = re.compile(
    rf"[a-z]{_KEY_CHARS}{{0,255}}"
    rf"|[a-z0-9]{_KEY_CHARS}{{0,240}}@[a-z]{_KEY_CHARS}{{0,13}}"
)
_VALUE_RE = re.compile(r"[\x20-\x2b\x2d-\x3c\x3e-\x7e]{0,255}[\x21-\x2b\x2d-\x3c\x3e-\x7e]")
_OWS = " \t"


def is_valid_key(key: str) -> bool:
    return _KEY_RE.fullmatch(key) is not None


def is_valid_value(value: str) -> bool:
    return _VALUE_RE.fullmatch(value) is not None


@dataclass(frozen=True)
class TraceStateEntry:
    """One opaque vendor ``key=value`` member."""

    key: str
    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.key, str) or not is_valid_key(self.key):
            raise ValidationError("invalid tracestate key", {"key": self.key})
        if not isinstance(self.value, str) or not is_valid_value(self.value):
            raise ValidationError("invalid tracestate value", {"key": self.key, "value": self.value})

    def __str__(self) -> str:
        return f"{self.key}={self.value}"


@dataclass(frozen=True)
class TraceState:
    """
    Ordered tracestate entries, most recent writer first.

    Keys are unique and there are never more than ``MAX_ENTRIES`` entries.
    Lookups by key are supported, but iteration yields entries, not keys.
    """

    entries: Tuple[TraceStateEntry, ...] = ()

    def __post_init__(self) -> None:
        entries = tuple(self.entries)
        if len(entries) > MAX_ENTRIES:
            raise ValidationError(
                "tracestate holds too many entries", {"count": len(entries), "max": MAX_ENTRIES}
            )
        seen = set()
        for entry in entries:
            if not isinstance(entry, TraceStateEntry):
                raise ValidationError("tracestate entries must be TraceStateEntry", {"entry": entry})
            if entry.key in seen:
                raise ValidationError("tracestate key appears more than once", {"key": entry.key})
            seen.add(entry.key)
        object.__setattr__(self, "entries", entries)

    @classmethod
    def from_pairs(cls, pairs) -> "TraceState":
        """Build a TraceState from ``(key, value)`` pairs, in order."""
        return cls(tuple(TraceStateEntry(key, value) for key, value in pairs))

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        for entry in self.entries:
            if entry.key == key:
                return entry.value
        return default

    def keys(self) -> Tuple[str, ...]:
        return tuple(entry.key for entry in self.entries)

    def __contains__(self, key: object) -> bool:
        return any(entry.key == key for entry in self.entries)

    def __iter__(self) -> Iterator[TraceStateEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __bool__(self) -> bool:
        return bool(self.entries)

    def __str__(self) -> str:
        return format_tracestate(self)


EMPTY_TRACESTATE = TraceState()


def parse_tracestate(header_value: Union[str, bytes]) -> TraceState:
    """
    Parse a tracestate header into a TraceState.

    Members are separated by ``,`` with optional spaces or tabs around them;
    empty members are ignored. Every member is validated, then anything past
    the 32nd entry is dropped.

    Raises:
        MalformedEntryError: a member has no ``=``
        InvalidEntryError: a key or value does not match the grammar
        DuplicateKeyError: the same key appears twice
    """
    value = to_header_str(header_value)
    if not value.strip(_OWS):
        return EMPTY_TRACESTATE

    entries = []
    seen = set()
    for index, member in enumerate(value.split(",")):
        member = member.strip(_OWS)
        if not member:
            continue
        if "=" not in member:
            raise MalformedEntryError(index)
        key, entry_value = member.split("=", 1)
        if not is_valid_key(key) or not is_valid_value(entry_value):
            raise InvalidEntryError(index)
        if key in seen:
            raise DuplicateKeyError(key)
        seen.add(key)
        entries.append(TraceStateEntry(key, entry_value))

    if len(entries) > MAX_ENTRIES:
        logger.debug(f"Dropping {len(entries) - MAX_ENTRIES} tracestate entries past the {MAX_ENTRIES} limit")
        entries = entries[:MAX_ENTRIES]
    return TraceState(tuple(entries))


def format_tracestate(state: TraceState) -> str:
    """
    Format a tracestate header value.

    An empty state formats to ``""``, which must not be sent as a header.
    """
    return ",".join(str(entry) for entry in state.entries)


def prepend_tracestate(state: TraceState, entry: TraceStateEntry) -> TraceState:
    """
    Return a new TraceState with ``entry`` first.

    Any existing entry with the same key is removed and the result is capped
    at 32 entries by dropping from the tail.
    """
    rest = [existing for existing in state.entries if existing.key != entry.key]
    return TraceState(tuple([entry] + rest[: MAX_ENTRIES - 1]))


def truncate_tracestate(state: TraceState, max_length: int = MAX_LENGTH) -> TraceState:
    """
    Shrink a TraceState until its formatted value fits in ``max_length``.

    Entries longer than 128 characters are removed first, starting from the
    tail; after that, entries are dropped from the tail.
    """
    entries = list(state.entries)

    def length() -> int:
        # members plus the commas between them
        return sum(len(str(e)) for e in entries) + max(len(entries) - 1, 0)

    if length() <= max_length:
        return state

    for entry in reversed(list(entries)):
        if length() <= max_length:
            break
        if len(str(entry)) > LARGE_ENTRY_LENGTH:
            entries.remove(entry)

    while entries and length() > max_length:
        entries.pop()

    logger.debug(
        f"Truncated tracestate from {len(state)} to {len(entries)} entries to fit {max_length} characters"
    )
    return TraceState(tuple(entries))
