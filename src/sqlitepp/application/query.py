"""Query - SQL text, bound parameters and result access on one connection.

A Query is reusable. Its SQL text can be assigned, replaced by exec(sql), or
assembled with ``<<``:

    q = Query(db)
    q << "UPDATE test SET num=" << 10 << " WHERE id=2"
    q.exec()

    q << "INSERT INTO test (data) VALUES (?)" << b"\\x00\\x01"   # bytes bind
    q.exec()

The first ``<<`` after an execution starts a new statement, so each block
above builds its own SQL text. Bound parameters are cleared by every
execution.

Results come either materialized (store()) or streamed (use()/use_next()).
A stream must be driven to its empty terminal row or released with
use_abort(); starting another execution on the same Query releases it too.
"""

from __future__ import annotations

import time
from types import TracebackType
from typing import TYPE_CHECKING, Any, Iterator

from sqlitepp.adapters.inbound.sql_classifier import StatementType, classify_statement
from sqlitepp.domain.entities import Result, Row
from sqlitepp.domain.errors import ExecutionError, TypeMismatchError
from sqlitepp.domain.value_objects import ResultCode
from sqlitepp.infrastructure.logging import get_logger
from sqlitepp.infrastructure.tracing import trace_span
from sqlitepp.ports.outbound.engine import Parameters

if TYPE_CHECKING:
    from sqlitepp.application.database import Database
    from sqlitepp.ports.outbound.engine import Statement

logger = get_logger(__name__)

BindValue = int | float | str | bytes | bytearray | memoryview | None

_NAME_PREFIXES = (":", "@", "$")


def _check_bind_value(value: Any) -> int | float | str | bytes | None:
    if value is None or isinstance(value, (int, float, str)):
        # bool is stored as the integer 0/1
        return int(value) if isinstance(value, bool) else value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise TypeMismatchError(f"Cannot bind value of type {type(value).__name__}")


class Query:
    """SQL statement holder bound to a Database."""

    def __init__(self, db: Database, sql: str = "") -> None:
        """Initialize the query.

        Args:
            db: The database the query executes on.
            sql: Initial SQL text.
        """
        self._db = db
        self._sql = sql
        self._params: dict[int | str, int | float | str | bytes | None] = {}
        self._next_position = 1
        # Set by every execution: the next << starts a new statement
        self._executed = False

        self._stream: Statement | None = None
        self._stream_columns: tuple[str, ...] = ()

        self._insert_id = 0
        self._affected_rows = 0
        self._last_error = ""

    # -- SQL text --

    @property
    def sql(self) -> str:
        """The pending SQL text."""
        return self._sql

    @sql.setter
    def sql(self, text: str) -> None:
        self.set_sql(text)

    def set_sql(self, text: str) -> Query:
        """Replace the pending SQL text."""
        self._sql = text
        self._executed = False
        return self

    def __lshift__(self, value: Any) -> Query:
        """Append to the pending statement.

        ``str`` and numbers are appended as SQL text (None as NULL).
        Bytes-like values are bound as a blob at the next positional
        parameter.
        """
        if self._executed:
            self._sql = ""
            self._executed = False

        if isinstance(value, (bytes, bytearray, memoryview)):
            self.bind(self._next_position, value)
        elif value is None:
            self._sql += "NULL"
        elif isinstance(value, bool):
            self._sql += str(int(value))
        elif isinstance(value, (str, int, float)):
            self._sql += str(value)
        else:
            raise TypeMismatchError(
                f"Cannot append value of type {type(value).__name__} to a query"
            )
        return self

    # -- Parameters --

    def bind(self, key: int | str, value: BindValue) -> None:
        """Bind a parameter for the next execution.

        Args:
            key: 1-based position, or a parameter name with its prefix as it
                appears in the SQL (":name", "@name" or "$name"). The prefix
                is not significant: the driver matches parameters by bare
                name, so "@com" also fills a ":com" placeholder. Binding the
                same bare name under two prefixes reports MISUSE on execution.
            value: int, float, str, bytes-like or None.

        Raises:
            TypeMismatchError: If the value type cannot be bound.
        """
        checked = _check_bind_value(value)
        if isinstance(key, int) and not isinstance(key, bool):
            self._params[key] = checked
            self._next_position = max(self._next_position, key + 1)
        elif isinstance(key, str):
            self._params[key] = checked
        else:
            raise TypeMismatchError(f"Parameter key must be int or str, not {type(key).__name__}")

    @property
    def params(self) -> dict[int | str, Any]:
        """Copy of the parameters bound for the next execution."""
        return dict(self._params)

    def clear_bindings(self) -> None:
        self._params.clear()
        self._next_position = 1

    def reset(self) -> None:
        """Drop the SQL text, bindings and any open stream."""
        self._release_stream(reason=None)
        self._sql = ""
        self._executed = False
        self.clear_bindings()

    def _take_params(self) -> Parameters:
        """Hand the bound parameters to the engine and clear them."""
        params, self._params = self._params, {}
        self._next_position = 1
        if not params:
            return ()

        positions = [k for k in params if isinstance(k, int)]
        names = [k for k in params if isinstance(k, str)]
        if positions and names:
            raise ExecutionError(
                ResultCode.MISUSE,
                "Cannot mix positional and named parameters in one statement",
                self._sql,
            )
        if names:
            bare = {
                (name[1:] if name.startswith(_NAME_PREFIXES) else name): params[name]
                for name in names
            }
            if len(bare) != len(names):
                raise ExecutionError(
                    ResultCode.MISUSE,
                    "Parameter bound twice under different name prefixes",
                    self._sql,
                )
            return bare
        if min(positions) < 1:
            raise ExecutionError(
                ResultCode.RANGE, f"Parameter index {min(positions)} out of range", self._sql
            )
        # Unbound positions below the highest bound one are NULL
        return [params.get(i) for i in range(1, max(positions) + 1)]

    # -- Execution --

    def exec(self, sql: str | None = None) -> ResultCode:
        """Execute the pending statement.

        Args:
            sql: Replaces the pending SQL text before executing. Parameters
                bound beforehand still apply.

        Returns:
            ResultCode.OK, or the engine code of the failure. Failures are
            never raised; see last_error() for the engine message.
        """
        if sql is not None:
            self._override(sql)

        statement_type = classify_statement(self._sql)
        start = time.perf_counter()
        with trace_span(
            "sqlitepp.query.exec", self._sql, {"db.statement_type": statement_type.value}
        ) as span:
            try:
                statement = self._prepare()
                statement.finalize()
                self._capture_counters(statement_type)
            except ExecutionError as e:
                span.set_attribute("db.result_code", e.code.name)
                self._affected_rows = 0
                return self._failed(e, statement_type, start)
        self._succeeded(statement_type, start)
        return ResultCode.OK

    def insert_id(self) -> int:
        """Connection rowid of the last INSERT, as of this query's last successful run."""
        return self._insert_id

    def affected_rows(self) -> int:
        """Rows changed by this query's last successful run; 0 unless it was DML.

        Every execution path counts: exec(), store() and use().
        """
        return self._affected_rows

    def last_error(self) -> str:
        """Engine message of this query's last failure, empty after success."""
        return self._last_error

    def store(self) -> Result:
        """Execute the pending statement and materialize all of its rows.

        Raises:
            ExecutionError: If the statement fails.
        """
        statement_type = classify_statement(self._sql)
        start = time.perf_counter()
        rows: list[Row] = []
        with trace_span(
            "sqlitepp.query.store", self._sql, {"db.statement_type": statement_type.value}
        ) as span:
            try:
                statement = self._prepare()
                try:
                    columns = statement.columns
                    while True:
                        values = statement.step()
                        if values is None:
                            break
                        rows.append(Row.from_values(columns, values))
                finally:
                    statement.finalize()
                self._capture_counters(statement_type)
            except ExecutionError as e:
                self._failed(e, statement_type, start)
                raise
            span.set_attribute("db.rows", len(rows))

        self._succeeded(statement_type, start)
        self._db.metrics.rows_fetched_total.labels(mode="store").inc(len(rows))
        return Result(columns, rows)

    def use(self) -> Row:
        """Execute the pending statement and return its first row.

        Returns:
            The first row, or an empty row if there are none.

        Raises:
            ExecutionError: If the statement fails.
        """
        statement_type = classify_statement(self._sql)
        start = time.perf_counter()
        with trace_span(
            "sqlitepp.query.use", self._sql, {"db.statement_type": statement_type.value}
        ):
            try:
                statement = self._prepare()
                self._capture_counters(statement_type)
            except ExecutionError as e:
                self._failed(e, statement_type, start)
                raise
        self._succeeded(statement_type, start)

        self._stream = statement
        self._stream_columns = statement.columns
        self._db.metrics.open_streams.inc()
        return self.use_next()

    def use_next(self) -> Row:
        """Advance the stream.

        Returns:
            The next row, or an empty row once the stream is exhausted (the
            statement is released at that point).

        Raises:
            ExecutionError: If the engine fails while stepping.
        """
        if self._stream is None:
            return Row()
        try:
            values = self._stream.step()
        except ExecutionError as e:
            self._close_stream()
            self._last_error = e.message
            raise
        if values is None:
            self._close_stream()
            return Row()
        self._db.metrics.rows_fetched_total.labels(mode="use").inc()
        return Row.from_values(self._stream_columns, values)

    def use_abort(self) -> ResultCode:
        """Release the stream before it is exhausted.

        Must be called when a use() iteration is abandoned early.
        """
        self._release_stream(reason=None)
        return ResultCode.OK

    def iter_rows(self) -> Iterator[Row]:
        """Stream the pending statement's rows, releasing the stream on exit.

        Raises:
            ExecutionError: If the statement fails.
        """
        row = self.use()
        try:
            while not row.empty():
                yield row
                row = self.use_next()
        finally:
            self.use_abort()

    @property
    def streaming(self) -> bool:
        """True while a use() stream is open."""
        return self._stream is not None

    def close(self) -> None:
        """Release any open stream. The Query stays usable."""
        self._release_stream(reason=None)

    # -- Internals --

    def _override(self, sql: str) -> None:
        if self._sql and not self._executed and self._sql != sql:
            logger.debug("pending_sql_replaced", discarded=self._sql, sql=sql)
        self._sql = sql
        self._executed = False

    def _prepare(self) -> Statement:
        self._release_stream(reason="reuse")
        self._executed = True
        params = self._take_params()
        return self._db.engine.prepare(self._sql, params)

    def _capture_counters(self, statement_type: StatementType) -> None:
        engine = self._db.engine
        self._insert_id = engine.last_insert_rowid()
        # changes() keeps the count of the last DML statement on the connection
        self._affected_rows = engine.changes() if statement_type.is_dml else 0

    def _succeeded(self, statement_type: StatementType, started: float) -> None:
        self._last_error = ""
        self._db.record_success(statement_type, started)

    def _failed(
        self, error: ExecutionError, statement_type: StatementType, started: float
    ) -> ResultCode:
        self._last_error = error.message
        return self._db.record_failure(error, statement_type, started)

    def _release_stream(self, reason: str | None) -> None:
        if self._stream is None:
            return
        if reason is not None:
            logger.warning("stream_released", reason=reason, sql=self._sql)
        self._close_stream()

    def _close_stream(self) -> None:
        stream, self._stream = self._stream, None
        self._stream_columns = ()
        if stream is not None:
            stream.finalize()
            self._db.metrics.open_streams.dec()

    def __enter__(self) -> Query:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Query(sql={self._sql!r}, params={len(self._params)})"
