"""Database - connection handle to one embedded database.

Usage:
    from sqlitepp import Database

    with Database(":memory:") as db:
        print(db.version())
        db.exec("CREATE TABLE test (id INTEGER PRIMARY KEY, name TEXT)")
"""

from __future__ import annotations

import time
from types import TracebackType

from sqlitepp.adapters.inbound.sql_classifier import StatementType, classify_statement
from sqlitepp.adapters.outbound.sqlite3_engine import Sqlite3Engine
from sqlitepp.domain.errors import ExecutionError
from sqlitepp.domain.value_objects import ResultCode
from sqlitepp.infrastructure.config import MEMORY_DATABASE, Config
from sqlitepp.infrastructure.logging import get_logger
from sqlitepp.infrastructure.metrics import MetricsRegistry, get_metrics
from sqlitepp.infrastructure.tracing import trace_span
from sqlitepp.ports.outbound.engine import Engine

logger = get_logger(__name__)


class Database:
    """Owns one open engine connection.

    The connection is opened by the constructor when a path is given and is
    closed by close() or on leaving a ``with`` block. A Database must only be
    used from the thread that opened it.
    """

    def __init__(
        self,
        path: str | None = MEMORY_DATABASE,
        *,
        engine: Engine | None = None,
        metrics: MetricsRegistry | None = None,
        vacuum_on_close: bool = False,
    ) -> None:
        """Initialize and, if ``path`` is given, open the database.

        Args:
            path: Database file path or ":memory:". None defers opening to
                an explicit open() call.
            engine: Engine adapter to use. Defaults to the sqlite3 driver.
            metrics: Metrics registry. Defaults to the process registry.
            vacuum_on_close: Run VACUUM before closing.

        Raises:
            DatabaseConnectionError: If the database cannot be opened.
        """
        self._engine: Engine = engine if engine is not None else Sqlite3Engine()
        self._metrics = metrics or get_metrics()
        self._vacuum_on_close = vacuum_on_close
        self._path: str | None = None
        self._last_error = ""

        if path is not None:
            self.open(path)

    @classmethod
    def from_config(cls, config: Config, metrics: MetricsRegistry | None = None) -> Database:
        """Open the database described by a configuration."""
        return cls(
            config.database.path,
            engine=Sqlite3Engine(timeout=config.database.timeout_seconds),
            metrics=metrics,
            vacuum_on_close=config.database.vacuum_on_close,
        )

    @property
    def engine(self) -> Engine:
        """The engine connection queries execute on."""
        return self._engine

    @property
    def metrics(self) -> MetricsRegistry:
        return self._metrics

    @property
    def path(self) -> str | None:
        """Path of the open database, None when closed."""
        return self._path

    def open(self, path: str) -> None:
        """Open a database, closing any database opened before.

        Raises:
            DatabaseConnectionError: If the database cannot be opened.
        """
        if self.is_open():
            self.close()
        self._engine.open(path)
        self._path = path
        self._metrics.open_connections.inc()
        logger.debug("database_opened", path=path, engine_version=self._engine.version)

    def is_open(self) -> bool:
        return self._engine.is_open

    def version(self) -> str:
        """Return the engine library version, e.g. "3.45.1"."""
        return self._engine.version

    def exec(self, sql: str) -> ResultCode:
        """Execute a parameterless statement to completion.

        Failures are reported through the returned code and last_error(),
        never raised.
        """
        statement_type = classify_statement(sql)
        start = time.perf_counter()
        with trace_span(
            "sqlitepp.database.exec", sql, {"db.statement_type": statement_type.value}
        ):
            try:
                self._engine.execute(sql)
            except ExecutionError as e:
                return self.record_failure(e, statement_type, start)
        self.record_success(statement_type, start)
        return ResultCode.OK

    def vacuum(self) -> ResultCode:
        """Defragment the database file.

        Returns:
            OK, or the engine code if VACUUM could not complete (for example
            inside an open transaction).
        """
        code = self.exec("VACUUM")
        if code.ok:
            logger.debug("database_vacuumed", path=self._path)
        return code

    def last_error(self) -> str:
        """Engine message of the most recent failed statement on this handle."""
        return self._last_error

    def close(self) -> None:
        """Close the database. Calling close() on a closed database is a no-op.

        Raises:
            DatabaseConnectionError: If the engine refuses to close.
        """
        if not self.is_open():
            return
        if self._vacuum_on_close:
            self.vacuum()
        path, self._path = self._path, None
        try:
            self._engine.close()
        finally:
            self._metrics.open_connections.dec()
        logger.debug("database_closed", path=path)

    def record_success(self, statement_type: StatementType, started: float) -> None:
        """Account for a statement that completed on this handle.

        Args:
            statement_type: Classified type of the statement.
            started: ``time.perf_counter()`` value taken before executing.
        """
        self._observe(statement_type, started, "ok")
        self._last_error = ""

    def record_failure(
        self, error: ExecutionError, statement_type: StatementType, started: float
    ) -> ResultCode:
        """Account for a statement the engine rejected on this handle.

        Returns:
            The engine result code of the failure.
        """
        self._observe(statement_type, started, "error")
        self._last_error = error.message
        logger.info(
            "statement_failed",
            code=error.code.name,
            error=error.message,
            statement_type=statement_type.value,
        )
        return error.code

    def _observe(self, statement_type: StatementType, started: float, status: str) -> None:
        self._metrics.query_latency_seconds.labels(
            statement_type=statement_type.value
        ).observe(time.perf_counter() - started)
        self._metrics.queries_total.labels(
            statement_type=statement_type.value, status=status
        ).inc()

    def __enter__(self) -> Database:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "open" if self.is_open() else "closed"
        return f"Database(path={self._path!r}, {state})"
