"""Observability: OpenTelemetry tracing and structlog configuration."""

from src.infrastructure.observability.setup import (
    add_trace_context,
    configure_logging,
    init_observability,
    shutdown_observability,
)
from src.infrastructure.observability.tracing import get_tracer, traced

__all__ = [
    "add_trace_context",
    "configure_logging",
    "get_tracer",
    "init_observability",
    "shutdown_observability",
    "traced",
]
