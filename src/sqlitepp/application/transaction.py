"""Transaction - scoped BEGIN/COMMIT/ROLLBACK on one connection.

The scope guarantees that no transaction is left open on the connection:
leaving the ``with`` block (normally or through an exception) while the
transaction is still ACTIVE issues ROLLBACK.

Usage:
    with Transaction(db) as tr:           # implicit BEGIN
        q.exec("INSERT INTO test(name) VALUES ('Marco')")
        tr.commit()

    with Transaction(db):
        q.exec("INSERT INTO test(name) VALUES ('discarded')")
    # rolled back here
"""

from __future__ import annotations

from types import TracebackType
from typing import TYPE_CHECKING

from sqlitepp.domain.errors import TransactionStateError
from sqlitepp.domain.value_objects import ResultCode, TransactionState
from sqlitepp.infrastructure.logging import get_logger

if TYPE_CHECKING:
    from sqlitepp.application.database import Database

logger = get_logger(__name__)


class Transaction:
    """A transaction scope bound to a Database.

    Thread Safety:
        None. Use from the thread that owns the Database.
    """

    def __init__(self, db: Database, begin: bool = True) -> None:
        """Initialize the scope.

        Args:
            db: The database to run the transaction on.
            begin: Issue BEGIN immediately (the default). A failed BEGIN is
                logged as a warning and leaves the state NOT_STARTED; call
                begin() explicitly to get its result code.
        """
        self._db = db
        self._state = TransactionState.NOT_STARTED
        if begin:
            self.begin()

    @property
    def state(self) -> TransactionState:
        return self._state

    def is_active(self) -> bool:
        return self._state.is_active()

    def begin(self) -> ResultCode:
        """Issue BEGIN.

        Returns:
            OK, or the engine code if BEGIN failed (for example when another
            transaction is already open on the connection). The state only
            changes to ACTIVE on success.

        Raises:
            TransactionStateError: If this transaction is already active.
        """
        if not self._state.can_begin():
            raise TransactionStateError(f"Cannot begin transaction in state {self._state.name}")
        code = self._db.exec("BEGIN")
        if code.ok:
            self._state = TransactionState.ACTIVE
            self._db.metrics.transactions_active.inc()
            logger.debug("transaction_begun", path=self._db.path)
        else:
            logger.warning(
                "transaction_begin_failed",
                code=code.name,
                error=self._db.last_error(),
                path=self._db.path,
            )
        return code

    def commit(self) -> ResultCode:
        """Issue COMMIT.

        Returns:
            OK, or the engine code if COMMIT failed; the transaction then
            stays ACTIVE.

        Raises:
            TransactionStateError: If the transaction is not active.
        """
        if not self._state.can_commit():
            raise TransactionStateError(f"Cannot commit transaction in state {self._state.name}")
        code = self._db.exec("COMMIT")
        if code.ok:
            self._finish(TransactionState.COMMITTED, "commit")
        return code

    def rollback(self) -> ResultCode:
        """Issue ROLLBACK.

        Raises:
            TransactionStateError: If the transaction is not active.
        """
        if not self._state.can_rollback():
            raise TransactionStateError(
                f"Cannot roll back transaction in state {self._state.name}"
            )
        return self._rollback("rollback")

    def close(self) -> None:
        """End the scope, rolling back if the transaction is still active."""
        if not self._state.is_active():
            return
        logger.info("transaction_auto_rollback", path=self._db.path)
        self._rollback("auto_rollback")

    def _rollback(self, outcome: str) -> ResultCode:
        if not self._db.is_open():
            # Closing the connection already discarded the transaction
            self._finish(TransactionState.ROLLED_BACK, outcome)
            return ResultCode.OK
        code = self._db.exec("ROLLBACK")
        if code.ok:
            self._finish(TransactionState.ROLLED_BACK, outcome)
        else:
            logger.warning(
                "transaction_rollback_failed",
                code=code.name,
                error=self._db.last_error(),
            )
        return code

    def _finish(self, state: TransactionState, outcome: str) -> None:
        self._state = state
        self._db.metrics.transactions_active.dec()
        self._db.metrics.transactions_total.labels(outcome=outcome).inc()
        logger.debug("transaction_finished", outcome=outcome, path=self._db.path)

    def __enter__(self) -> Transaction:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Transaction(state={self._state.name})"
