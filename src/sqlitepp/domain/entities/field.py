"""Typed field values.

A Field is a tagged value: the storage class reported by the engine plus the
value itself. Conversions to host types are lossless or they fail with
TypeMismatchError; NULL never converts to a "zero" value.

Conversion matrix (rows: stored type, columns: requested type):

                as_int          as_float        as_text      as_blob
    INTEGER     value           if exact        decimal      -
    FLOAT       if integral     value           repr         -
    TEXT        if SQL integer  if finite SQL   value        UTF-8 bytes
                                number
    BLOB        -               -               if UTF-8     value
    NULL        -               -               -            -
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any

from sqlitepp.domain.errors import TypeMismatchError
from sqlitepp.domain.value_objects import FieldType

# SQL numeric text; surrounding whitespace is allowed as in CAST
_INTEGER_TEXT = re.compile(r"\s*[+-]?[0-9]+\s*")
_REAL_TEXT = re.compile(r"\s*[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?\s*")


@dataclass(frozen=True)
class Field:
    """A single typed value of a row."""

    type: FieldType
    value: int | float | str | bytes | None

    @classmethod
    def from_value(cls, value: Any) -> Field:
        """Build a field from a value returned by the driver."""
        field_type = FieldType.of(value)
        if field_type is FieldType.BLOB and not isinstance(value, bytes):
            value = bytes(value)
        return cls(field_type, value)

    def is_null(self) -> bool:
        """True exactly when the stored value is SQL NULL."""
        return self.type is FieldType.NULL

    def as_int(self) -> int:
        if self.type is FieldType.INTEGER:
            return self.value  # type: ignore[return-value]
        if self.type is FieldType.FLOAT:
            if self.value.is_integer():  # type: ignore[union-attr]
                return int(self.value)  # type: ignore[arg-type]
        elif self.type is FieldType.TEXT:
            if _INTEGER_TEXT.fullmatch(self.value):  # type: ignore[arg-type]
                return int(self.value)  # type: ignore[arg-type]
        raise self._mismatch("int")

    def as_float(self) -> float:
        if self.type is FieldType.FLOAT:
            return self.value  # type: ignore[return-value]
        if self.type is FieldType.INTEGER:
            converted = float(self.value)  # type: ignore[arg-type]
            if int(converted) == self.value:
                return converted
        elif self.type is FieldType.TEXT:
            if _REAL_TEXT.fullmatch(self.value):  # type: ignore[arg-type]
                converted = float(self.value)  # type: ignore[arg-type]
                if math.isfinite(converted):
                    return converted
        raise self._mismatch("float")

    def as_text(self) -> str:
        if self.type is FieldType.TEXT:
            return self.value  # type: ignore[return-value]
        if self.type is FieldType.INTEGER:
            return str(self.value)
        if self.type is FieldType.FLOAT:
            return repr(self.value)
        if self.type is FieldType.BLOB:
            try:
                return self.value.decode("utf-8")  # type: ignore[union-attr]
            except UnicodeDecodeError:
                pass
        raise self._mismatch("str")

    def as_blob(self) -> bytes:
        if self.type is FieldType.BLOB:
            return self.value  # type: ignore[return-value]
        if self.type is FieldType.TEXT:
            return self.value.encode("utf-8")  # type: ignore[union-attr]
        raise self._mismatch("bytes")

    def __int__(self) -> int:
        return self.as_int()

    def __float__(self) -> float:
        return self.as_float()

    def __bytes__(self) -> bytes:
        return self.as_blob()

    def __str__(self) -> str:
        """Display form: NULL, hex for blobs, as_text() otherwise. Never raises."""
        if self.type is FieldType.NULL:
            return "NULL"
        if self.type is FieldType.BLOB:
            return self.value.hex()  # type: ignore[union-attr]
        return self.as_text()

    def _mismatch(self, target: str) -> TypeMismatchError:
        return TypeMismatchError(
            f"Cannot convert {self.type.value} value {self.value!r} to {target}"
        )
