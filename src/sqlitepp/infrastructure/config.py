"""Configuration management for sqlitepp."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

MEMORY_DATABASE = ":memory:"


class DatabaseConfig(BaseModel):
    """Database connection configuration."""

    path: str = Field(default=MEMORY_DATABASE, description="Database file path or ':memory:'")
    timeout_seconds: float = Field(
        default=5.0, ge=0.0, description="Busy timeout handed to the driver"
    )
    vacuum_on_close: bool = Field(
        default=False, description="Run VACUUM before the connection is closed"
    )


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(default="console", description="Log format")
    otel_endpoint: str | None = Field(
        default=None, description="OpenTelemetry collector endpoint"
    )
    otel_service_name: str = Field(default="sqlitepp", description="Service name for tracing")
    metrics_enabled: bool = Field(default=False, description="Expose Prometheus metrics")
    metrics_port: int = Field(default=8001, ge=1, le=65535, description="Prometheus metrics port")


class Config(BaseSettings):
    """Main configuration for sqlitepp."""

    model_config = SettingsConfigDict(
        env_prefix="SQLITEPP_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    @property
    def is_memory(self) -> bool:
        """True when the configured database lives in memory."""
        return self.database.path == MEMORY_DATABASE


@lru_cache
def get_config() -> Config:
    """Get the global configuration instance."""
    return Config()
