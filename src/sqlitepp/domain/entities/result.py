"""Materialized result sets."""

from __future__ import annotations

from typing import Iterator, Sequence

from sqlitepp.domain.entities.row import Row
from sqlitepp.domain.errors import RowIndexError


class Result:
    """A fully buffered snapshot of a query's rows.

    The row and column counts are fixed at construction; the result holds no
    reference to the statement it came from.
    """

    __slots__ = ("_columns", "_rows")

    def __init__(self, columns: Sequence[str] = (), rows: Sequence[Row] = ()) -> None:
        self._columns = tuple(columns)
        self._rows = tuple(rows)

    @property
    def columns(self) -> tuple[str, ...]:
        """Column names of every row."""
        return self._columns

    def num_rows(self) -> int:
        return len(self._rows)

    def num_fields(self) -> int:
        """Number of columns per row."""
        return len(self._columns)

    def empty(self) -> bool:
        return not self._rows

    def __getitem__(self, index: int) -> Row:
        if not -len(self._rows) <= index < len(self._rows):
            raise RowIndexError(
                f"Row index {index} out of range for result with {len(self._rows)} rows"
            )
        return self._rows[index]

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self._rows)

    def __repr__(self) -> str:
        return f"Result(columns={list(self._columns)}, rows={len(self._rows)})"
