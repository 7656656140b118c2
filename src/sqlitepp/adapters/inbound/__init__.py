"""Inbound adapters (driving side).

Exports:
    - classify_statement: sqlglot based SQL statement classifier
    - StatementType: Coarse statement categories
"""

from sqlitepp.adapters.inbound.sql_classifier import StatementType, classify_statement

__all__ = ["StatementType", "classify_statement"]
