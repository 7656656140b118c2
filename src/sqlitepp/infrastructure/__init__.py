"""Infrastructure layer - cross-cutting concerns."""

from sqlitepp.infrastructure.config import Config, get_config
from sqlitepp.infrastructure.logging import setup_logging, get_logger, shorten_sql
from sqlitepp.infrastructure.metrics import setup_metrics, get_metrics, MetricsRegistry
from sqlitepp.infrastructure.tracing import setup_tracing, get_tracer, trace_span

__all__ = [
    "Config",
    "get_config",
    "setup_logging",
    "get_logger",
    "shorten_sql",
    "setup_metrics",
    "get_metrics",
    "MetricsRegistry",
    "setup_tracing",
    "get_tracer",
    "trace_span",
]
