"""Tests for domain entities."""

import uuid
import pytest
from datetime import datetime, date, UTC
from decimal import Decimal

from pocketledger.domain.entities import (
    Account,
    AccountKind,
    CascadeResult,
    Transaction,
    TransactionType,
)


def _transaction(**overrides):
    values = dict(
        id=uuid.uuid4(),
        account_id=uuid.uuid4(),
        type=TransactionType.EXPENSE,
        amount=Decimal("-5.00"),
        date=date(2024, 1, 1),
        note=None,
        usage=None,
        exclude_from_balance=False,
        category_id=None,
        target_account_id=None,
        sequence=1,
        created_at=datetime.now(UTC),
    )
    values.update(overrides)
    return Transaction(**values)


class TestAccount:
    """Tests for Account entity."""

    def test_account_immutability(self):
        """Test that Account entities are immutable."""
        account = Account(
            id=uuid.uuid4(),
            name="Checking",
            kind=AccountKind.BANK,
            include_in_balance=True,
            order=0,
            group_id=None,
            icon=None,
            icon_color=None,
            created_at=datetime.now(UTC),
        )
        with pytest.raises(Exception):  # dataclass frozen raises FrozenInstanceError
            account.name = "New Name"

    def test_kind_values(self):
        """Test that kinds parse from their string values."""
        assert AccountKind("savings") is AccountKind.SAVINGS
        with pytest.raises(ValueError):
            AccountKind("crypto")


class TestTransaction:
    """Tests for Transaction entity."""

    def test_is_transfer(self):
        """Test the transfer flag."""
        assert not _transaction().is_transfer
        assert _transaction(type=TransactionType.TRANSFER, target_account_id=uuid.uuid4()).is_transfer

    def test_transaction_equality(self):
        """Test that equal field values give equal entities."""
        txn = _transaction()
        assert txn == _transaction(id=txn.id, account_id=txn.account_id, created_at=txn.created_at)


def test_cascade_result_defaults():
    """Test that an empty cascade reports nothing removed."""
    result = CascadeResult()
    assert (result.accounts_deleted, result.transactions_deleted, result.transfers_detached) == (0, 0, 0)
