"""Exception hierarchy.

Statement failures are reported as ``ResultCode`` values by the calls that
return a status. The exceptions below are raised where no status can be
returned (opening a database, materializing a result) or where returning
wrong data silently would be worse than failing (field access and
conversion, transaction misuse).
"""

from __future__ import annotations

from sqlitepp.domain.value_objects.result_codes import ResultCode


class SqliteppError(Exception):
    """Base class for all sqlitepp errors."""


class DatabaseConnectionError(SqliteppError, ConnectionError):
    """The engine could not open or close the database."""


class ExecutionError(SqliteppError):
    """A statement failed inside the engine."""

    def __init__(self, code: ResultCode, message: str, sql: str | None = None) -> None:
        super().__init__(f"[{code.name}] {message}")
        self.code = code
        self.message = message
        self.sql = sql


class RowIndexError(SqliteppError, IndexError):
    """Row or column position outside the result bounds."""


class ColumnNotFoundError(SqliteppError, KeyError):
    """Column name not present in the row."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0]) if self.args else ""


class TypeMismatchError(SqliteppError, TypeError):
    """A value cannot be bound or converted without loss."""


class TransactionStateError(SqliteppError, RuntimeError):
    """A transaction operation is not allowed in the current state."""
