"""Tests for the observability module."""

import pytest
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import StatusCode

from src.infrastructure.observability import add_trace_context, get_tracer, traced
from src.modules.auth import CredentialRejectedError

# Module-level setup: configure TracerProvider once before any tests run
_exporter = InMemorySpanExporter()
_provider = TracerProvider()
_provider.add_span_processor(SimpleSpanProcessor(_exporter))
trace.set_tracer_provider(_provider)


@pytest.fixture(autouse=True)
def clear_spans():
    """Clear spans before each test."""
    _exporter.clear()
    yield
    _exporter.clear()


class TestTracedDecorator:
    """Tests for @traced decorator."""

    def test_sync_function_creates_span(self):
        """Should wrap a sync call in a named span."""

        @traced(span_name="test.sync")
        def add(a: int, b: int) -> int:
            return a + b

        assert add(2, 3) == 5

        spans = _exporter.get_finished_spans()
        assert [s.name for s in spans] == ["test.sync"]
        assert spans[0].status.status_code == StatusCode.OK

    @pytest.mark.asyncio
    async def test_async_function_creates_span(self):
        """Should wrap a coroutine in a span named after the function."""

        @traced()
        async def fetch() -> str:
            return "done"

        assert await fetch() == "done"

        spans = _exporter.get_finished_spans()
        assert len(spans) == 1
        assert spans[0].name.endswith("fetch")

    @pytest.mark.asyncio
    async def test_exception_recorded_and_reraised(self):
        """Should mark the span as failed without changing the exception."""

        @traced(span_name="test.login")
        async def login() -> None:
            raise CredentialRejectedError()

        with pytest.raises(CredentialRejectedError):
            await login()

        span = _exporter.get_finished_spans()[0]
        assert span.status.status_code == StatusCode.ERROR
        assert span.status.description == "CredentialRejectedError"
        assert any(event.name == "exception" for event in span.events)

    def test_exception_not_recorded_when_disabled(self):
        """Should skip the exception event when asked to."""

        @traced(span_name="test.quiet", record_exception=False)
        def fail() -> None:
            raise ValueError("boom")

        with pytest.raises(ValueError):
            fail()

        span = _exporter.get_finished_spans()[0]
        assert span.status.status_code == StatusCode.ERROR
        assert not span.events


class TestAddTraceContext:
    """Tests for the structlog trace context processor."""

    def test_adds_ids_inside_span(self):
        """Should add trace_id and span_id while a span is active."""
        with get_tracer("test").start_as_current_span("outer") as span:
            event = add_trace_context(None, "info", {"event": "user_authenticated"})
            context = span.get_span_context()

        assert event["trace_id"] == format(context.trace_id, "032x")
        assert event["span_id"] == format(context.span_id, "016x")

    def test_no_ids_outside_span(self):
        """Should leave events untouched with no active span."""
        event = add_trace_context(None, "info", {"event": "user_authenticated"})

        assert event == {"event": "user_authenticated"}
