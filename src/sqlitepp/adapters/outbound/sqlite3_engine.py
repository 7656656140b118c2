"""SQLite engine adapter over the stdlib sqlite3 driver.

The driver is opened in autocommit mode (``isolation_level=None``) so that it
never issues an implicit BEGIN: transactions exist only when the caller sends
BEGIN itself, which is what the scoped Transaction object relies on.

Driver exceptions never leave this module. Open/close failures become
DatabaseConnectionError; everything else becomes ExecutionError carrying the
engine's primary result code.
"""

from __future__ import annotations

import sqlite3
from typing import Any

from sqlitepp.domain.errors import DatabaseConnectionError, ExecutionError
from sqlitepp.domain.value_objects import ResultCode
from sqlitepp.ports.outbound.engine import Parameters

# Errors raised by the driver itself (not the engine) carry no result code
_DRIVER_ERRORS = (sqlite3.Error, sqlite3.Warning, OverflowError)


def to_execution_error(exc: BaseException, sql: str | None = None) -> ExecutionError:
    """Translate a driver exception into an ExecutionError.

    Args:
        exc: Exception raised by the sqlite3 driver.
        sql: The statement that failed, if any.

    Returns:
        An ExecutionError with the primary engine result code.
    """
    if isinstance(exc, OverflowError):
        # Python int outside the 64-bit range SQLite can store
        return ExecutionError(ResultCode.TOOBIG, str(exc), sql)
    if isinstance(exc, (sqlite3.ProgrammingError, sqlite3.InterfaceError, sqlite3.Warning)):
        default = ResultCode.MISUSE
    else:
        default = ResultCode.ERROR
    code = ResultCode.from_engine(getattr(exc, "sqlite_errorcode", None), default)
    return ExecutionError(code, str(exc), sql)


class Sqlite3Statement:
    """An executing statement backed by a driver cursor."""

    def __init__(self, cursor: sqlite3.Cursor, sql: str) -> None:
        self._cursor: sqlite3.Cursor | None = cursor
        self._sql = sql
        description = cursor.description or ()
        self._columns = tuple(col[0] for col in description)

    @property
    def columns(self) -> tuple[str, ...]:
        return self._columns

    @property
    def finalized(self) -> bool:
        return self._cursor is None

    def step(self) -> tuple[Any, ...] | None:
        if self._cursor is None:
            return None
        try:
            return self._cursor.fetchone()
        except _DRIVER_ERRORS as e:
            raise to_execution_error(e, self._sql) from e

    def finalize(self) -> None:
        if self._cursor is None:
            return
        cursor, self._cursor = self._cursor, None
        try:
            cursor.close()
        except sqlite3.ProgrammingError:
            # Connection already closed; the cursor is gone with it
            pass


class Sqlite3Engine:
    """Engine implementation using the stdlib sqlite3 driver."""

    def __init__(self, timeout: float = 5.0) -> None:
        """Initialize the adapter.

        Args:
            timeout: Seconds to wait on a locked database before failing
                with BUSY.
        """
        self._timeout = timeout
        self._conn: sqlite3.Connection | None = None

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    @property
    def version(self) -> str:
        return sqlite3.sqlite_version

    def open(self, path: str) -> None:
        if self._conn is not None:
            self.close()
        try:
            self._conn = sqlite3.connect(
                path,
                timeout=self._timeout,
                isolation_level=None,
                check_same_thread=True,
            )
        except sqlite3.Error as e:
            raise DatabaseConnectionError(f"Cannot open database '{path}': {e}") from e

    def close(self) -> None:
        if self._conn is None:
            return
        conn, self._conn = self._conn, None
        try:
            conn.close()
        except sqlite3.Error as e:
            raise DatabaseConnectionError(f"Cannot close database: {e}") from e

    def prepare(self, sql: str, params: Parameters = ()) -> Sqlite3Statement:
        conn = self._connection(sql)
        cursor = conn.cursor()
        try:
            cursor.execute(sql, params)
        except _DRIVER_ERRORS as e:
            cursor.close()
            raise to_execution_error(e, sql) from e
        return Sqlite3Statement(cursor, sql)

    def execute(self, sql: str) -> None:
        conn = self._connection(sql)
        try:
            conn.execute(sql).close()
        except _DRIVER_ERRORS as e:
            raise to_execution_error(e, sql) from e

    def last_insert_rowid(self) -> int:
        return self._scalar("SELECT last_insert_rowid()")

    def changes(self) -> int:
        return self._scalar("SELECT changes()")

    def _scalar(self, sql: str) -> int:
        conn = self._connection(sql)
        try:
            cursor = conn.execute(sql)
            try:
                (value,) = cursor.fetchone()
            finally:
                # An unreset statement would block VACUUM
                cursor.close()
        except _DRIVER_ERRORS as e:
            raise to_execution_error(e, sql) from e
        return value

    def _connection(self, sql: str) -> sqlite3.Connection:
        if self._conn is None:
            raise ExecutionError(ResultCode.MISUSE, "Database is not open", sql)
        return self._conn
