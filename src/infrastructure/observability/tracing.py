"""Span helpers for instrumenting service operations."""

import inspect
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from functools import wraps
from typing import Any, ParamSpec, TypeVar

from opentelemetry import trace
from opentelemetry.trace import Span, Status, StatusCode, Tracer

P = ParamSpec("P")
R = TypeVar("R")


def get_tracer(name: str) -> Tracer:
    """Get a tracer for the given module name."""
    return trace.get_tracer(name)


@contextmanager
def _span(tracer: Tracer, name: str, record_exception: bool) -> Iterator[Span]:
    # Exceptions propagate unchanged; only the span status is touched.
    with tracer.start_as_current_span(
        name, record_exception=False, set_status_on_exception=False
    ) as span:
        try:
            yield span
        except Exception as e:
            if record_exception:
                span.record_exception(e)
            span.set_status(Status(StatusCode.ERROR, type(e).__name__))
            raise
        span.set_status(Status(StatusCode.OK))


def traced(
    *,
    span_name: str | None = None,
    record_exception: bool = True,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Decorator that runs a sync or async function inside a span.

    The tracer is looked up on each call, so a provider installed after
    import (at startup or in tests) is picked up.

    Args:
        span_name: Name for the span (defaults to the qualified name).
        record_exception: Whether to record exceptions on the span.

    Example:
        @traced(span_name="auth.login")
        async def login(...): ...
    """

    def decorator(fn: Callable[P, R]) -> Callable[P, R]:
        name = span_name or fn.__qualname__

        if inspect.iscoroutinefunction(fn):

            @wraps(fn)
            async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> Any:
                with _span(get_tracer(fn.__module__), name, record_exception):
                    return await fn(*args, **kwargs)

            return async_wrapper  # type: ignore[return-value]

        @wraps(fn)
        def sync_wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            with _span(get_tracer(fn.__module__), name, record_exception):
                return fn(*args, **kwargs)

        return sync_wrapper

    return decorator
