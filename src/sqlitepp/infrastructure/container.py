"""Dependency injection container for sqlitepp."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

import structlog
from opentelemetry import trace

from sqlitepp.infrastructure.config import Config, get_config
from sqlitepp.infrastructure.logging import get_logger, setup_logging
from sqlitepp.infrastructure.metrics import MetricsRegistry, get_metrics, setup_metrics
from sqlitepp.infrastructure.tracing import setup_tracing


@dataclass
class Container:
    """Process-wide wiring of configuration and observability."""

    config: Config
    logger: structlog.BoundLogger
    tracer: trace.Tracer
    metrics: MetricsRegistry

    _instance: ClassVar["Container | None"] = None

    @classmethod
    def create(cls, config: Config | None = None) -> "Container":
        """Create and initialize the container with all dependencies."""
        if cls._instance is not None:
            return cls._instance

        config = config or get_config()
        observability = config.observability

        setup_logging(observability.log_level, observability.log_format)
        logger = get_logger("sqlitepp")
        tracer = setup_tracing(
            service_name=observability.otel_service_name,
            otlp_endpoint=observability.otel_endpoint,
        )
        if observability.metrics_enabled:
            metrics = setup_metrics(observability.metrics_port)
        else:
            metrics = get_metrics()

        cls._instance = cls(
            config=config,
            logger=logger,
            tracer=tracer,
            metrics=metrics,
        )

        logger.debug(
            "sqlitepp_container_initialized",
            database=config.database.path,
            metrics_enabled=observability.metrics_enabled,
        )

        return cls._instance

    @classmethod
    def get(cls) -> "Container":
        """Get the singleton container instance."""
        if cls._instance is None:
            return cls.create()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the container (useful for testing)."""
        cls._instance = None


def get_container() -> Container:
    """Get the dependency injection container."""
    return Container.get()
