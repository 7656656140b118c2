"""Domain layer: field values, rows, results, status codes and errors."""

from sqlitepp.domain.entities import Field, Result, Row
from sqlitepp.domain.errors import (
    ColumnNotFoundError,
    DatabaseConnectionError,
    ExecutionError,
    RowIndexError,
    SqliteppError,
    TransactionStateError,
    TypeMismatchError,
)
from sqlitepp.domain.value_objects import FieldType, ResultCode, TransactionState

__all__ = [
    "Field",
    "Result",
    "Row",
    "FieldType",
    "ResultCode",
    "TransactionState",
    "SqliteppError",
    "DatabaseConnectionError",
    "ExecutionError",
    "RowIndexError",
    "ColumnNotFoundError",
    "TypeMismatchError",
    "TransactionStateError",
]
