"""Engine status codes.

Statement execution reports its outcome as a status code rather than an
exception. The values are SQLite's primary result codes so that they can be
compared against the engine documentation directly.
"""

from __future__ import annotations

from enum import IntEnum

# Extended result codes carry the primary code in their low byte
_PRIMARY_MASK = 0xFF


class ResultCode(IntEnum):
    """SQLite primary result codes."""

    OK = 0
    ERROR = 1
    INTERNAL = 2
    PERM = 3
    ABORT = 4
    BUSY = 5
    LOCKED = 6
    NOMEM = 7
    READONLY = 8
    INTERRUPT = 9
    IOERR = 10
    CORRUPT = 11
    NOTFOUND = 12
    FULL = 13
    CANTOPEN = 14
    PROTOCOL = 15
    EMPTY = 16
    SCHEMA = 17
    TOOBIG = 18
    CONSTRAINT = 19
    MISMATCH = 20
    MISUSE = 21
    NOLFS = 22
    AUTH = 23
    FORMAT = 24
    RANGE = 25
    NOTADB = 26
    NOTICE = 27
    WARNING = 28
    ROW = 100
    DONE = 101

    @property
    def ok(self) -> bool:
        """True for codes that denote success."""
        return self in (ResultCode.OK, ResultCode.ROW, ResultCode.DONE)

    @classmethod
    def from_engine(cls, code: int | None, default: ResultCode | None = None) -> ResultCode:
        """Map a (possibly extended) engine code to its primary result code.

        Args:
            code: Code reported by the engine, or None if it reported none.
            default: Code to use when ``code`` is missing or unknown.

        Returns:
            The primary result code.
        """
        fallback = default if default is not None else cls.ERROR
        if code is None:
            return fallback
        try:
            return cls(code & _PRIMARY_MASK)
        except ValueError:
            return fallback
