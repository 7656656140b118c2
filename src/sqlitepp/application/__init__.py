"""Application layer for sqlitepp.

Exports:
    - Database: Connection handle to one embedded database
    - Query: SQL text, parameter binding, execution and result access
    - Transaction: Scoped transaction with rollback on scope exit
"""

from sqlitepp.application.database import Database
from sqlitepp.application.query import Query
from sqlitepp.application.transaction import Transaction

__all__ = [
    "Database",
    "Query",
    "Transaction",
]
