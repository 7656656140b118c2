"""Prometheus metrics for sqlitepp."""

from __future__ import annotations

from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
    Info,
    start_http_server,
    REGISTRY,
    CollectorRegistry,
)


class MetricsRegistry:
    """Registry of all sqlitepp metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics registry."""
        self._registry = registry or REGISTRY

        # Statement metrics
        self.queries_total = Counter(
            "sqlitepp_queries_total",
            "Total number of statements executed",
            ["statement_type", "status"],  # status: ok, error
            registry=self._registry,
        )

        self.query_latency_seconds = Histogram(
            "sqlitepp_query_latency_seconds",
            "Statement latency in seconds",
            ["statement_type"],
            buckets=(0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0),
            registry=self._registry,
        )

        self.rows_fetched_total = Counter(
            "sqlitepp_rows_fetched_total",
            "Total rows fetched from result sets",
            ["mode"],  # store, use
            registry=self._registry,
        )

        # Transaction metrics
        self.transactions_total = Counter(
            "sqlitepp_transactions_total",
            "Total number of finished transactions",
            ["outcome"],  # commit, rollback, auto_rollback
            registry=self._registry,
        )

        self.transactions_active = Gauge(
            "sqlitepp_transactions_active",
            "Number of active transactions",
            registry=self._registry,
        )

        # Resource metrics
        self.open_connections = Gauge(
            "sqlitepp_open_connections",
            "Number of open database connections",
            registry=self._registry,
        )

        self.open_streams = Gauge(
            "sqlitepp_open_streams",
            "Number of streaming cursors not yet exhausted or aborted",
            registry=self._registry,
        )

        self.info = Info(
            "sqlitepp",
            "sqlitepp library information",
            registry=self._registry,
        )


# Global metrics registry
_metrics: MetricsRegistry | None = None


def setup_metrics(port: int = 8001, registry: CollectorRegistry | None = None) -> MetricsRegistry:
    """
    Set up Prometheus metrics server.

    Args:
        port: Port for the metrics HTTP server
        registry: Optional custom registry

    Returns:
        The metrics registry
    """
    global _metrics
    # Collectors can only be registered once per registry
    if _metrics is None or registry is not None:
        _metrics = MetricsRegistry(registry)

    import sqlite3

    from sqlitepp import __version__
    _metrics.info.info({
        "version": __version__,
        "engine_version": sqlite3.sqlite_version,
    })

    start_http_server(port, registry=registry or REGISTRY)

    return _metrics


def get_metrics() -> MetricsRegistry:
    """Get the global metrics registry."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsRegistry()
    return _metrics
