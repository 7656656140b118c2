"""Domain entities for sqlitepp.

Exports:
    - Field: Typed value (tagged by storage class) with lossless conversions
    - Row: Ordered fields addressable by position or column name
    - Result: Materialized, randomly accessible set of rows
"""

from sqlitepp.domain.entities.field import Field
from sqlitepp.domain.entities.result import Result
from sqlitepp.domain.entities.row import Row

__all__ = [
    "Field",
    "Result",
    "Row",
]
