"""Adapters layer for sqlitepp.

Inbound adapters interpret the SQL text handed to the wrapper.
Outbound adapters implement the engine port over a concrete driver.
"""

from sqlitepp.adapters.inbound import StatementType, classify_statement
from sqlitepp.adapters.outbound import Sqlite3Engine, Sqlite3Statement

__all__ = [
    "StatementType",
    "classify_statement",
    "Sqlite3Engine",
    "Sqlite3Statement",
]
