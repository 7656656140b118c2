"""A row of fields, addressable by position or column name."""

from __future__ import annotations

from typing import Iterator, Sequence

from sqlitepp.domain.entities.field import Field
from sqlitepp.domain.errors import ColumnNotFoundError, RowIndexError


class Row:
    """An ordered, immutable sequence of fields.

    An empty row (no columns) marks the end of a streamed result set.
    """

    __slots__ = ("_columns", "_fields")

    def __init__(self, columns: Sequence[str] = (), fields: Sequence[Field] = ()) -> None:
        if len(columns) != len(fields):
            raise ValueError(
                f"Row has {len(fields)} fields but {len(columns)} column names"
            )
        self._columns = tuple(columns)
        self._fields = tuple(fields)

    @classmethod
    def from_values(cls, columns: Sequence[str], values: Sequence[object]) -> Row:
        """Build a row from raw driver values."""
        return cls(columns, [Field.from_value(v) for v in values])

    @property
    def columns(self) -> tuple[str, ...]:
        """Column names in field order."""
        return self._columns

    def num_fields(self) -> int:
        return len(self._fields)

    def empty(self) -> bool:
        """True for the terminal row of a stream."""
        return not self._fields

    def values(self) -> tuple[object, ...]:
        """Raw values of all fields."""
        return tuple(f.value for f in self._fields)

    def as_dict(self) -> dict[str, object]:
        return dict(zip(self._columns, self.values()))

    def __getitem__(self, key: int | str) -> Field:
        if isinstance(key, str):
            try:
                return self._fields[self._columns.index(key)]
            except ValueError as e:
                raise ColumnNotFoundError(f"Column '{key}' not found") from e
        if not -len(self._fields) <= key < len(self._fields):
            raise RowIndexError(
                f"Field index {key} out of range for row with {len(self._fields)} fields"
            )
        return self._fields[key]

    def __len__(self) -> int:
        return len(self._fields)

    def __iter__(self) -> Iterator[Field]:
        return iter(self._fields)

    def __bool__(self) -> bool:
        return not self.empty()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Row):
            return NotImplemented
        return self._columns == other._columns and self._fields == other._fields

    def __hash__(self) -> int:
        return hash((self._columns, self._fields))

    def __repr__(self) -> str:
        pairs = ", ".join(f"{c}={f.value!r}" for c, f in zip(self._columns, self._fields))
        return f"Row({pairs})"
