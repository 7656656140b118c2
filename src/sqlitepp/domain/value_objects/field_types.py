"""Storage classes of a field value."""

from __future__ import annotations

from enum import Enum
from typing import Any


class FieldType(Enum):
    """SQLite storage classes.

    Every value read from the engine belongs to exactly one of these.
    NULL is a storage class of its own, not a sentinel value of another one.
    """

    INTEGER = "INTEGER"
    FLOAT = "REAL"
    TEXT = "TEXT"
    BLOB = "BLOB"
    NULL = "NULL"

    @classmethod
    def of(cls, value: Any) -> FieldType:
        """Return the storage class of a Python value.

        Args:
            value: A value as produced by the driver or accepted for binding.

        Returns:
            The matching storage class.

        Raises:
            TypeError: If the value has no storage class.
        """
        if value is None:
            return cls.NULL
        # bool is an int subclass and is stored as 0/1
        if isinstance(value, int):
            return cls.INTEGER
        if isinstance(value, float):
            return cls.FLOAT
        if isinstance(value, str):
            return cls.TEXT
        if isinstance(value, (bytes, bytearray, memoryview)):
            return cls.BLOB
        raise TypeError(f"No storage class for {type(value).__name__}")
