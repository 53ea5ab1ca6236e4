"""Tests for TransactionService."""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from pocketledger.domain.entities import TransactionType
from pocketledger.domain.errors import IntegrityError, NotFoundError, ValidationError


def test_create_income(transaction_service, bank):
    """Test creating an income posting."""
    txn_id = transaction_service.create_posting(
        bank["checking"],
        Decimal("2500"),
        "income",
        date(2024, 1, 1),
        note="January",
        usage="SALARY 01/24",
    )

    txn = transaction_service.get_transaction(txn_id)
    assert txn.type == TransactionType.INCOME
    assert txn.amount == Decimal("2500.00")
    assert txn.note == "January"
    assert txn.usage == "SALARY 01/24"
    assert txn.target_account_id is None
    assert txn.exclude_from_balance is False


def test_expense_is_stored_negative(transaction_service, bank):
    """Expenses are stored with a negative amount."""
    txn_id = transaction_service.create_posting(bank["checking"], Decimal("12.50"), "expense", date(2024, 1, 1))

    assert transaction_service.get_transaction(txn_id).amount == Decimal("-12.50")


def test_create_transfer_type_rejected(transaction_service, bank):
    """Transfers cannot be created as postings."""
    with pytest.raises(ValidationError):
        transaction_service.create_posting(bank["checking"], Decimal("1"), "transfer", date(2024, 1, 1))


def test_unknown_type_rejected(transaction_service, bank):
    """Only income and expense are accepted."""
    with pytest.raises(ValidationError):
        transaction_service.create_posting(bank["checking"], Decimal("1"), "refund", date(2024, 1, 1))


def test_invalid_amount_rejected(transaction_service, bank):
    """Non-numeric amounts raise ValidationError."""
    with pytest.raises(ValidationError):
        transaction_service.create_posting(bank["checking"], "abc", "income", date(2024, 1, 1))


def test_oversized_amount_rejected(transaction_service, bank):
    """Amounts beyond the storable range raise ValidationError and store nothing."""
    with pytest.raises(ValidationError):
        transaction_service.create_posting(
            bank["checking"], Decimal("12345678901234567.89"), "income", date(2024, 1, 1)
        )
    assert transaction_service.list_transactions() == []


def test_largest_amount_round_trips_exactly(transaction_service, balance_service, bank):
    """The largest accepted amount is read back and summed without loss."""
    txn_id = transaction_service.create_posting(
        bank["checking"], Decimal("999999999999.99"), "income", date(2024, 1, 1)
    )

    assert transaction_service.get_transaction(txn_id).amount == Decimal("999999999999.99")
    assert balance_service.account_balance(bank["checking"]) == Decimal("999999999999.99")


def test_missing_account_rejected(transaction_service):
    """A posting against an unknown account breaks referential integrity."""
    with pytest.raises(IntegrityError):
        transaction_service.create_posting(uuid4(), Decimal("1"), "income", date(2024, 1, 1))


def test_missing_category_rejected(transaction_service, bank):
    """The category of a posting must exist."""
    with pytest.raises(IntegrityError):
        transaction_service.create_posting(
            bank["checking"], Decimal("1"), "income", date(2024, 1, 1), category_id=uuid4()
        )


def test_sequence_follows_creation_order(transaction_service, bank):
    """Each new transaction gets a higher sequence number."""
    first = transaction_service.create_posting(bank["checking"], Decimal("1"), "income", date(2024, 1, 5))
    second = transaction_service.create_posting(bank["checking"], Decimal("1"), "income", date(2024, 1, 1))

    assert transaction_service.get_transaction(second).sequence > transaction_service.get_transaction(first).sequence


class TestListTransactions:
    """Filtering and ordering."""

    def test_newest_first(self, transaction_service, bank):
        """Rows are ordered by date, then by creation order, newest first."""
        a = transaction_service.create_posting(bank["checking"], Decimal("1"), "income", date(2024, 1, 1))
        b = transaction_service.create_posting(bank["checking"], Decimal("2"), "income", date(2024, 1, 2))
        c = transaction_service.create_posting(bank["checking"], Decimal("3"), "income", date(2024, 1, 1))

        assert [t.id for t in transaction_service.list_transactions()] == [b, c, a]

    def test_date_range(self, transaction_service, bank):
        """Start and end dates are inclusive."""
        for day in (1, 2, 3, 4):
            transaction_service.create_posting(bank["checking"], Decimal("1"), "income", date(2024, 1, day))

        listed = transaction_service.list_transactions(start_date=date(2024, 1, 2), end_date=date(2024, 1, 3))

        assert sorted(t.date.day for t in listed) == [2, 3]

    def test_category_filters(self, transaction_service, sample_ledger):
        """Filter by category, or by the absence of one."""
        rent = sample_ledger["categories"]["Rent"]

        by_category = transaction_service.list_transactions(category_id=rent)
        uncategorized = transaction_service.list_transactions(uncategorized=True)

        assert len(by_category) == 1
        assert by_category[0].category_id == rent
        assert len(uncategorized) == 1
        assert uncategorized[0].is_transfer


class TestUpdatePosting:
    """Editing postings."""

    def test_update_amount_keeps_sign_of_type(self, transaction_service, bank):
        """A new expense amount is stored negative."""
        txn_id = transaction_service.create_posting(bank["checking"], Decimal("10"), "expense", date(2024, 1, 1))

        transaction_service.update_posting(txn_id, amount=Decimal("15"))

        assert transaction_service.get_transaction(txn_id).amount == Decimal("-15.00")

    def test_change_type_resigns_amount(self, transaction_service, balance_service, bank):
        """Turning an expense into income flips its effect on the balance."""
        txn_id = transaction_service.create_posting(bank["checking"], Decimal("10"), "expense", date(2024, 1, 1))

        transaction_service.update_posting(txn_id, type="income")

        txn = transaction_service.get_transaction(txn_id)
        assert txn.type == TransactionType.INCOME
        assert txn.amount == Decimal("10.00")
        assert balance_service.account_balance(bank["checking"]) == Decimal("10.00")

    def test_move_to_other_account(self, transaction_service, balance_service, bank):
        """Changing the account moves the posting's effect."""
        txn_id = transaction_service.create_posting(bank["checking"], Decimal("10"), "income", date(2024, 1, 1))

        transaction_service.update_posting(txn_id, account_id=bank["savings"])

        assert balance_service.account_balance(bank["checking"]) == Decimal("0.00")
        assert balance_service.account_balance(bank["savings"]) == Decimal("10.00")

    def test_update_transfer_rejected(self, transaction_service, transfer_service, bank):
        """Transfers are edited through the transfer service only."""
        transfer = transfer_service.create_transfer(bank["checking"], bank["savings"], Decimal("5"), date(2024, 1, 1))

        with pytest.raises(ValidationError):
            transaction_service.update_posting(transfer.id, amount=Decimal("6"))

    def test_update_to_missing_account(self, transaction_service, bank):
        """Moving a posting to an unknown account is refused."""
        txn_id = transaction_service.create_posting(bank["checking"], Decimal("10"), "income", date(2024, 1, 1))

        with pytest.raises(IntegrityError):
            transaction_service.update_posting(txn_id, account_id=uuid4())
        assert transaction_service.get_transaction(txn_id).account_id == bank["checking"]

    def test_clear_note_and_usage(self, transaction_service, bank):
        """Note and usage can be removed, other fields stay."""
        txn_id = transaction_service.create_posting(
            bank["checking"], Decimal("10"), "income", date(2024, 1, 1), note="January", usage="REF 1"
        )

        transaction_service.update_posting(txn_id, clear_note=True)
        txn = transaction_service.get_transaction(txn_id)
        assert txn.note is None
        assert txn.usage == "REF 1"

        transaction_service.update_posting(txn_id, clear_usage=True)
        txn = transaction_service.get_transaction(txn_id)
        assert txn.usage is None
        assert txn.amount == Decimal("10.00")

    def test_set_and_clear_same_field_rejected(self, transaction_service, bank):
        """A value and its clear flag together are refused."""
        txn_id = transaction_service.create_posting(
            bank["checking"], Decimal("10"), "income", date(2024, 1, 1), note="January"
        )

        with pytest.raises(ValidationError, match="Cannot set both"):
            transaction_service.update_posting(txn_id, note="February", clear_note=True)
        with pytest.raises(ValidationError, match="Cannot set both"):
            transaction_service.update_posting(txn_id, usage="REF", clear_usage=True)
        assert transaction_service.get_transaction(txn_id).note == "January"

    def test_update_missing(self, transaction_service):
        """Unknown transaction raises NotFoundError."""
        with pytest.raises(NotFoundError):
            transaction_service.update_posting(uuid4(), note="x")


def test_set_excluded(transaction_service, balance_service, bank):
    """Excluding and re-including a posting toggles its effect."""
    txn_id = transaction_service.create_posting(bank["checking"], Decimal("10"), "income", date(2024, 1, 1))

    transaction_service.set_excluded(txn_id, True)
    assert balance_service.account_balance(bank["checking"]) == Decimal("0.00")

    transaction_service.set_excluded(txn_id, False)
    assert balance_service.account_balance(bank["checking"]) == Decimal("10.00")


def test_delete_transaction(transaction_service, bank):
    """Deleted transactions are gone."""
    txn_id = transaction_service.create_posting(bank["checking"], Decimal("10"), "income", date(2024, 1, 1))

    transaction_service.delete_transaction(txn_id)

    assert transaction_service.get_transaction(txn_id) is None
    with pytest.raises(NotFoundError):
        transaction_service.delete_transaction(txn_id)
