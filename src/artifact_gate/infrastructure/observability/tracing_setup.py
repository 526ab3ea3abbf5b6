"""OpenTelemetry tracing configuration for the artifact gate.

Provides:
- configure_tracing(): one-shot TracerProvider setup with BatchSpanProcessor
- get_tracer(): returns a named Tracer instance
- traced_call(): async context manager that opens a span for one remote call
"""

from __future__ import annotations

import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.trace import Span

_CONFIGURED = False


def configure_tracing(export_to_console: bool = False) -> None:
    """One-shot OTel TracerProvider setup. Safe to call multiple times."""
    global _CONFIGURED  # noqa: PLW0603
    if _CONFIGURED:
        return
    _CONFIGURED = True

    resource = Resource.create(
        {
            "service.name": os.environ.get("SERVICE_NAME", "artifact-gate"),
            "deployment.environment": os.environ.get("APP_ENV", "local"),
        }
    )
    provider = TracerProvider(resource=resource)
    if export_to_console:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
    trace.set_tracer_provider(provider)


def get_tracer(name: str = "artifact_gate") -> trace.Tracer:
    """Return a named OTel Tracer."""
    return trace.get_tracer(name)


@asynccontextmanager
async def traced_call(
    span_name: str, attributes: dict[str, str] | None = None
) -> AsyncIterator[Span]:
    """Wrap one remote call in a span; an escaping exception is recorded on it.

    Usage:
        async with traced_call("rally.query", {"rally.type": "defect"}):
            ...
    """
    with get_tracer().start_as_current_span(span_name, attributes=attributes) as span:
        yield span
