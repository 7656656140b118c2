"""OpenTelemetry tracing configuration.

Every statement sqlitepp runs is wrapped in a span named after the wrapper
call (``sqlitepp.database.exec``, ``sqlitepp.query.store``, ...) and tagged
with the database semantic-convention attributes.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Generator

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from sqlitepp.infrastructure.logging import shorten_sql

_tracer: trace.Tracer | None = None


def setup_tracing(
    service_name: str = "sqlitepp",
    otlp_endpoint: str | None = None,
) -> trace.Tracer:
    """
    Set up OpenTelemetry tracing.

    Spans are only exported when an OTLP endpoint is configured.

    Args:
        service_name: Name of the service for tracing
        otlp_endpoint: OTLP collector endpoint (e.g., "http://localhost:4317")

    Returns:
        Configured tracer instance
    """
    global _tracer

    import sqlite3

    from sqlitepp import __version__

    resource = Resource.create(
        {
            "service.name": service_name,
            "service.version": __version__,
            "db.system": "sqlite",
            "db.engine.version": sqlite3.sqlite_version,
        }
    )
    provider = TracerProvider(resource=resource)
    if otlp_endpoint:
        provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True))
        )
    trace.set_tracer_provider(provider)

    _tracer = trace.get_tracer(service_name)
    return _tracer


def get_tracer() -> trace.Tracer:
    """Get the global tracer instance."""
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer("sqlitepp")
    return _tracer


@contextmanager
def trace_span(
    name: str,
    statement: str | None = None,
    attributes: dict[str, Any] | None = None,
) -> Generator[trace.Span, None, None]:
    """
    Open a span around one database call.

    Args:
        name: Name of the span
        statement: SQL text, recorded shortened as ``db.statement``
        attributes: Extra attributes such as ``db.statement_type``

    Yields:
        The created span
    """
    with get_tracer().start_as_current_span(name) as span:
        span.set_attribute("db.system", "sqlite")
        if statement is not None:
            span.set_attribute("db.statement", shorten_sql(statement))
        for key, value in (attributes or {}).items():
            span.set_attribute(key, value)
        yield span
