"""
sqlitepp - a thin object-oriented wrapper around the SQLite engine

Open a database, execute statements with bound parameters, scope
transactions, and read results either materialized or row by row.
"""

__version__ = "1.0.0"

from sqlitepp.application import Database, Query, Transaction
from sqlitepp.domain import (
    ColumnNotFoundError,
    DatabaseConnectionError,
    ExecutionError,
    Field,
    FieldType,
    Result,
    ResultCode,
    Row,
    RowIndexError,
    SqliteppError,
    TransactionState,
    TransactionStateError,
    TypeMismatchError,
)

__all__ = [
    "__version__",
    "Database",
    "Query",
    "Transaction",
    "Field",
    "FieldType",
    "Result",
    "ResultCode",
    "Row",
    "TransactionState",
    "SqliteppError",
    "DatabaseConnectionError",
    "ExecutionError",
    "RowIndexError",
    "ColumnNotFoundError",
    "TypeMismatchError",
    "TransactionStateError",
]
