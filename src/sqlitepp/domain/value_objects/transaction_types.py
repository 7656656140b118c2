"""Transaction-related types and enumerations.

These types define the lifecycle states of a scoped transaction bound to a
single connection.
"""

from __future__ import annotations

from enum import Enum, auto


class TransactionState(Enum):
    """Transaction lifecycle states.

    State machine:

        NOT_STARTED ──begin()──> ACTIVE <──────────────┐
                                   │                   │
                     ┌─────────────┴────────────┐      │
                     │                          │      │
                 commit()                  rollback()  │
                     │                    (or scope    │
                     v                      exit)      │
                 COMMITTED                      │      │
                     │                          v      │
                     │                     ROLLED_BACK │
                     │                          │      │
                     └───────── begin() ────────┴──────┘

    A transaction may be restarted from either terminal state, which is how
    one scope object issues several consecutive transactions.
    """

    NOT_STARTED = auto()
    """Transaction object exists but BEGIN has not been issued."""

    ACTIVE = auto()
    """BEGIN was issued; the connection is inside a transaction."""

    COMMITTED = auto()
    """COMMIT succeeded. All changes are visible."""

    ROLLED_BACK = auto()
    """ROLLBACK succeeded. All changes have been discarded."""

    def is_terminal(self) -> bool:
        """Check if this is a terminal state (COMMITTED or ROLLED_BACK)."""
        return self in (TransactionState.COMMITTED, TransactionState.ROLLED_BACK)

    def is_active(self) -> bool:
        """Check if the transaction is still open on the connection."""
        return self == TransactionState.ACTIVE

    def can_begin(self) -> bool:
        """Check if BEGIN may be issued from this state."""
        return self == TransactionState.NOT_STARTED or self.is_terminal()

    def can_commit(self) -> bool:
        """Check if the transaction can be committed."""
        return self == TransactionState.ACTIVE

    def can_rollback(self) -> bool:
        """Check if the transaction can be rolled back."""
        return self == TransactionState.ACTIVE
