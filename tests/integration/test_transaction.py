"""Integration tests for Transaction."""

from __future__ import annotations

import logging
from typing import Callable

import pytest

from sqlitepp import (
    Database,
    Query,
    ResultCode,
    Transaction,
    TransactionState,
    TransactionStateError,
)
from sqlitepp.infrastructure.logging import setup_logging


def names(db: Database) -> list[str]:
    return [row["name"].as_text() for row in Query(db, "SELECT name FROM test ORDER BY id").store()]


@pytest.mark.integration
class TestTransaction:
    """Test cases for Transaction."""

    def test_commit_makes_changes_visible(self, test_table: Database) -> None:
        with Transaction(test_table) as tr:
            assert tr.state is TransactionState.ACTIVE
            test_table.exec("INSERT INTO test (name) VALUES ('Marco')")
            assert tr.commit() == ResultCode.OK
            assert tr.state is TransactionState.COMMITTED

        assert names(test_table) == ["Marco"]

    def test_explicit_rollback(self, test_table: Database) -> None:
        with Transaction(test_table) as tr:
            test_table.exec("INSERT INTO test (name) VALUES ('I''m not stored')")
            assert tr.rollback() == ResultCode.OK
            assert tr.state is TransactionState.ROLLED_BACK

        assert names(test_table) == []

    def test_scope_exit_rolls_back(self, test_table: Database) -> None:
        """Leaving the scope while active rolls back."""
        with Transaction(test_table) as tr:
            test_table.exec("INSERT INTO test (name) VALUES ('discarded')")

        assert tr.state is TransactionState.ROLLED_BACK
        assert names(test_table) == []

    def test_scope_exit_on_exception_rolls_back(self, test_table: Database) -> None:
        with pytest.raises(ValueError):
            with Transaction(test_table):
                test_table.exec("INSERT INTO test (name) VALUES ('discarded')")
                raise ValueError("boom")

        assert names(test_table) == []
        # The connection is usable for a new transaction
        with Transaction(test_table) as tr:
            assert tr.is_active()

    def test_double_begin(self, test_table: Database) -> None:
        with Transaction(test_table) as tr:
            with pytest.raises(TransactionStateError):
                tr.begin()
            assert tr.is_active()

    def test_commit_when_not_active(self, test_table: Database) -> None:
        tr = Transaction(test_table, begin=False)

        assert tr.state is TransactionState.NOT_STARTED
        with pytest.raises(TransactionStateError):
            tr.commit()
        with pytest.raises(TransactionStateError):
            tr.rollback()

    def test_commit_after_commit(self, test_table: Database) -> None:
        tr = Transaction(test_table)
        tr.commit()

        with pytest.raises(TransactionStateError):
            tr.commit()
        with pytest.raises(RuntimeError):
            tr.rollback()

    def test_begin_again_after_terminal_state(self, test_table: Database) -> None:
        """A finished transaction can be started again."""
        with Transaction(test_table) as tr:
            test_table.exec("INSERT INTO test (name) VALUES ('first')")
            tr.commit()

            assert tr.begin() == ResultCode.OK
            test_table.exec("INSERT INTO test (name) VALUES ('second')")

        assert names(test_table) == ["first"]

    def test_deferred_begin(self, test_table: Database) -> None:
        with Transaction(test_table, begin=False) as tr:
            test_table.exec("INSERT INTO test (name) VALUES ('autocommitted')")
            assert tr.begin() == ResultCode.OK
            test_table.exec("INSERT INTO test (name) VALUES ('discarded')")

        assert names(test_table) == ["autocommitted"]

    def test_nested_begin_fails_without_state_change(self, test_table: Database) -> None:
        """A second transaction on the same connection reports the engine error."""
        with Transaction(test_table) as outer:
            inner = Transaction(test_table)

            assert inner.state is TransactionState.NOT_STARTED
            assert "within a transaction" in test_table.last_error()
            assert outer.is_active()

    @pytest.mark.usefixtures("reset_container")
    def test_failed_implicit_begin_is_logged(
        self, test_table: Database, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A BEGIN refused in the constructor leaves a warning behind."""
        setup_logging("INFO", "json")

        with Transaction(test_table):
            with caplog.at_level(logging.WARNING, logger="sqlitepp"):
                inner = Transaction(test_table)

        assert inner.state is TransactionState.NOT_STARTED
        assert "transaction_begin_failed" in caplog.text

    def test_close_after_database_closed(self, test_table: Database) -> None:
        tr = Transaction(test_table)
        test_table.close()

        tr.close()

        assert tr.state is TransactionState.ROLLED_BACK

    def test_metrics(self, test_table: Database, metric_value: Callable[..., float]) -> None:
        with Transaction(test_table) as tr:
            assert metric_value("sqlitepp_transactions_active") == 1
            tr.commit()
        with Transaction(test_table):
            pass

        assert metric_value("sqlitepp_transactions_active") == 0
        assert metric_value("sqlitepp_transactions_total", outcome="commit") == 1
        assert metric_value("sqlitepp_transactions_total", outcome="auto_rollback") == 1
