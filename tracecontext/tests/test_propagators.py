"""Tests for header injection and extraction."""

import pytest

from tracecontext import (
    InvalidTraceParentError,
    MissingTraceParentError,
    TraceContext,
    extract,
    extract_trace_context,
    inject,
    inject_traceparent,
    inject_tracestate,
    parse_tracestate,
    runtime_config,
)

TRACEPARENT = "00-0af7651916cd43dd8448eb211c80319c-00f067aa0ba902b7-01"


@pytest.fixture(autouse=True)
def _reset_config():
    yield
    runtime_config.reset()


@pytest.fixture
def context():
    return TraceContext.extract({"traceparent": TRACEPARENT, "tracestate": "rojo=00f067aa0ba902b7"})


def test_inject_round_trip(context):
    child = context.derive_child(0xB7AD6B7169203331)

    headers = inject({}, child)

    assert headers == {
        "traceparent": "00-0af7651916cd43dd8448eb211c80319c-b7ad6b7169203331-01",
        "tracestate": "rojo=00f067aa0ba902b7",
    }
    assert extract(headers) == child


def test_inject_returns_same_mapping(context):
    headers = {"x-other": "1"}
    assert inject(headers, context) is headers
    assert headers["x-other"] == "1"


def test_inject_replaces_headers_regardless_of_case(context):
    headers = {"TraceParent": "stale", "TRACESTATE": "stale=1"}

    inject(headers, context)

    assert set(headers) == {"traceparent", "tracestate"}
    assert headers["traceparent"] == TRACEPARENT


def test_inject_omits_empty_tracestate():
    context = TraceContext.new_root(1, 2)
    headers = {"tracestate": "stale=1"}

    inject(headers, context)

    assert "tracestate" not in headers
    assert headers["traceparent"] == "00-00000000000000000000000000000001-0000000000000002-01"


def test_inject_traceparent_only(context):
    headers = {}
    inject_traceparent(headers, context)
    assert list(headers) == ["traceparent"]


def test_inject_tracestate_truncates_to_configured_length():
    state = ",".join(f"key{i}=" + "v" * 60 for i in range(10))
    context = TraceContext.extract({"traceparent": TRACEPARENT, "tracestate": state})
    headers = {}

    inject_tracestate(headers, context)

    assert len(headers["tracestate"]) <= 512
    assert parse_tracestate(headers["tracestate"]).keys() == tuple(f"key{i}" for i in range(7))


def test_inject_tracestate_custom_limit():
    runtime_config.set_max_tracestate_length(10)
    context = TraceContext.extract({"traceparent": TRACEPARENT, "tracestate": "a=1,b=2,c=3"})
    headers = {}

    inject_tracestate(headers, context)

    assert headers["tracestate"] == "a=1,b=2"


def test_inject_tracestate_without_limit():
    runtime_config.set_max_tracestate_length(None)
    state = ",".join(f"key{i}=" + "v" * 60 for i in range(10))
    context = TraceContext.extract({"traceparent": TRACEPARENT, "tracestate": state})
    headers = {}

    inject_tracestate(headers, context)

    assert headers["tracestate"] == state


def test_extract_trace_context_returns_none_on_failure():
    assert extract_trace_context({}) is None
    assert extract_trace_context({"traceparent": "00-bad"}) is None


def test_extract_trace_context_success():
    context = extract_trace_context({"traceparent": TRACEPARENT})
    assert context is not None
    assert context.parent_id == 0x00f067aa0ba902b7


def test_extract_raises():
    with pytest.raises(MissingTraceParentError):
        extract({})
    with pytest.raises(InvalidTraceParentError):
        extract({"traceparent": "ff-0af7651916cd43dd8448eb211c80319c-00f067aa0ba902b7-01"})
