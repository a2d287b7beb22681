"""tracecontext error hierarchy and exceptions."""

from __future__ import annotations


class TraceContextError(Exception):
    """Base exception for all tracecontext errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ConfigError(TraceContextError):
    """Raised when configuration is invalid or conflicting."""
    pass


class ValidationError(TraceContextError):
    """Raised when a value violates the W3C Trace Context rules."""
    pass


# traceparent

class ParentParseError(ValidationError):
    """Raised when a traceparent value is rejected."""
    pass


class InvalidLengthError(ParentParseError):
    def __init__(self, length: int):
        super().__init__("traceparent must be 55 characters", {"length": length})
        self.length = length


class InvalidFormatError(ParentParseError):
    def __init__(self, message: str = "traceparent fields must be separated by '-'", details: dict = None):
        super().__init__(message, details)


class InvalidHexError(ParentParseError):
    def __init__(self, field: str):
        super().__init__("traceparent field contains a non-hex character", {"field": field})
        self.field = field


class InvalidVersionError(ParentParseError):
    def __init__(self, version: int):
        super().__init__("traceparent version is invalid", {"version": f"{version:02x}"})
        self.version = version


class InvalidTraceIdError(ParentParseError):
    def __init__(self, message: str = "trace id must not be all zeros", details: dict = None):
        super().__init__(message, details)


class InvalidParentIdError(ParentParseError):
    def __init__(self, message: str = "parent id must not be all zeros", details: dict = None):
        super().__init__(message, details)


# tracestate

class StateParseError(ValidationError):
    """Raised when a tracestate value is rejected."""
    pass


class MalformedEntryError(StateParseError):
    def __init__(self, index: int):
        super().__init__("tracestate member has no '='", {"index": index})
        self.index = index


class InvalidEntryError(StateParseError):
    def __init__(self, index: int):
        super().__init__("tracestate member has an invalid key or value", {"index": index})
        self.index = index


class DuplicateKeyError(StateParseError):
    def __init__(self, key: str):
        super().__init__("tracestate key appears more than once", {"key": key})
        self.key = key


# extraction

class ExtractError(TraceContextError):
    """Raised when no trace context can be extracted from headers."""
    pass


class MissingTraceParentError(ExtractError):
    def __init__(self):
        super().__init__("traceparent header is missing")


class InvalidTraceParentError(ExtractError):
    def __init__(self, error: ParentParseError):
        super().__init__("traceparent header is invalid", {"reason": error})
        self.error = error
