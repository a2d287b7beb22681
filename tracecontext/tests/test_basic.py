"""Basic smoke tests for tracecontext.

Quick sanity checks of the public API. Detailed behavior is covered by the
per-module tests.
"""

import pytest

import tracecontext


def test_version_exposed():
    """Smoke test: version is accessible."""
    assert hasattr(tracecontext, '__version__')
    assert isinstance(tracecontext.__version__, str)
    assert len(tracecontext.__version__) > 0


def test_extract_derive_inject():
    """Smoke test: the documented request-to-request flow works."""
    inbound = {"traceparent": "00-0af7651916cd43dd8448eb211c80319c-00f067aa0ba902b7-01"}

    parent = tracecontext.TraceContext.extract(inbound)
    child = parent.derive_child(0x1111111111111111)
    outbound = tracecontext.inject({}, child)

    assert outbound == {"traceparent": "00-0af7651916cd43dd8448eb211c80319c-1111111111111111-01"}


def test_error_hierarchy():
    assert issubclass(tracecontext.InvalidHexError, tracecontext.ParentParseError)
    assert issubclass(tracecontext.DuplicateKeyError, tracecontext.StateParseError)
    assert issubclass(tracecontext.ParentParseError, tracecontext.ValidationError)
    assert issubclass(tracecontext.InvalidTraceParentError, tracecontext.ExtractError)
    assert issubclass(tracecontext.ExtractError, tracecontext.TraceContextError)


def test_error_str_includes_details():
    error = tracecontext.InvalidHexError("trace_id")
    assert str(error) == "traceparent field contains a non-hex character (field=trace_id)"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
