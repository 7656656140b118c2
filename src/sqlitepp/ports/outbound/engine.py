"""Engine port for the embedded SQL engine.

This outbound port defines the small, fixed API surface through which the
wrapper reaches the engine: open/close, prepare (with bound parameters),
step, last-insert-rowid, changes and one-shot execution.

Implementations translate engine failures into ``ExecutionError`` carrying a
``ResultCode`` so that callers never see driver-specific exceptions.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Mapping, Protocol, Sequence

# Parameters as handed to prepare(): positional values in index order, or a
# mapping from parameter name (without its prefix character) to value.
Parameters = Sequence[Any] | Mapping[str, Any]


class Statement(Protocol):
    """A prepared and executing statement.

    The statement is positioned before its first result row. Each call to
    step() yields the next row until the statement is done.
    """

    @property
    @abstractmethod
    def columns(self) -> tuple[str, ...]:
        """Result column names, empty for statements that return no rows."""
        ...

    @abstractmethod
    def step(self) -> tuple[Any, ...] | None:
        """Fetch the next row.

        Returns:
            The row values, or None once the statement is done.

        Raises:
            ExecutionError: If the engine fails while stepping.
        """
        ...

    @abstractmethod
    def finalize(self) -> None:
        """Release the statement. Safe to call more than once."""
        ...


class Engine(Protocol):
    """Protocol for an embedded SQL engine connection.

    Thread Safety:
        None. A connection is owned by a single thread.
    """

    @abstractmethod
    def open(self, path: str) -> None:
        """Open a database file or ":memory:".

        Raises:
            DatabaseConnectionError: If the database cannot be opened.
        """
        ...

    @abstractmethod
    def close(self) -> None:
        """Close the connection. Safe to call when already closed.

        Raises:
            DatabaseConnectionError: If the engine refuses to close.
        """
        ...

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """Return True while a connection is open."""
        ...

    @property
    @abstractmethod
    def version(self) -> str:
        """Return the engine library version string."""
        ...

    @abstractmethod
    def prepare(self, sql: str, params: Parameters = ()) -> Statement:
        """Prepare a statement, bind parameters and start executing it.

        Args:
            sql: A single SQL statement.
            params: Positional or named parameter values.

        Returns:
            The executing statement.

        Raises:
            ExecutionError: If the statement cannot be prepared or bound,
                or fails on its first step.
        """
        ...

    @abstractmethod
    def execute(self, sql: str) -> None:
        """Execute a parameterless statement to completion.

        Raises:
            ExecutionError: If the statement fails.
        """
        ...

    @abstractmethod
    def last_insert_rowid(self) -> int:
        """Return the rowid of the most recent successful INSERT."""
        ...

    @abstractmethod
    def changes(self) -> int:
        """Return rows modified by the most recent INSERT/UPDATE/DELETE."""
        ...
