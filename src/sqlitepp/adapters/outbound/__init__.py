"""Outbound adapters (driven side).

Exports:
    - Sqlite3Engine: Engine port implementation over the stdlib sqlite3 driver
    - Sqlite3Statement: Executing statement backed by a driver cursor
"""

from sqlitepp.adapters.outbound.sqlite3_engine import (
    Sqlite3Engine,
    Sqlite3Statement,
    to_execution_error,
)

__all__ = ["Sqlite3Engine", "Sqlite3Statement", "to_execution_error"]
