"""Tests for TransferService."""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from pocketledger.domain.entities import TransactionType
from pocketledger.domain.errors import NotFoundError, ValidationError


class TestCreateTransfer:
    """Creating transfers."""

    def test_creates_single_row(self, transfer_service, transaction_service, bank):
        """A transfer is one row owned by the source and pointing at the destination."""
        transfer = transfer_service.create_transfer(
            bank["checking"], bank["savings"], Decimal("100"), date(2024, 1, 1), note="Savings"
        )

        assert transfer.type == TransactionType.TRANSFER
        assert transfer.account_id == bank["checking"]
        assert transfer.target_account_id == bank["savings"]
        assert transfer.amount == Decimal("-100.00")
        assert transfer.note == "Savings"
        assert len(transaction_service.list_transactions()) == 1

    def test_listed_on_both_accounts(self, transfer_service, transaction_service, bank):
        """Listing by account includes transfers targeting the account."""
        transfer = transfer_service.create_transfer(bank["checking"], bank["savings"], Decimal("1"), date(2024, 1, 1))

        assert [t.id for t in transaction_service.list_transactions(account_id=bank["savings"])] == [transfer.id]
        assert transaction_service.list_transactions(account_id=bank["savings"], include_targeted=False) == []

    def test_same_account_rejected(self, transfer_service, transaction_service, bank):
        """Source and destination must differ."""
        with pytest.raises(ValidationError):
            transfer_service.create_transfer(bank["checking"], bank["checking"], Decimal("10"), date(2024, 1, 1))

        assert transaction_service.list_transactions() == []

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-5"), "0.001"])
    def test_non_positive_amount_rejected(self, transfer_service, transaction_service, bank, amount):
        """Amounts that are zero after rounding, or negative, are rejected."""
        with pytest.raises(ValidationError):
            transfer_service.create_transfer(bank["checking"], bank["savings"], amount, date(2024, 1, 1))

        assert transaction_service.list_transactions() == []

    def test_float_amount_rejected(self, transfer_service, bank):
        """Binary floats never enter the ledger."""
        with pytest.raises(ValidationError):
            transfer_service.create_transfer(bank["checking"], bank["savings"], 10.5, date(2024, 1, 1))

    @pytest.mark.parametrize("amount", ["1e27", Decimal("12345678901234567.89")])
    def test_oversized_amount_rejected(self, transfer_service, transaction_service, bank, amount):
        """Amounts the store cannot hold exactly raise ValidationError."""
        with pytest.raises(ValidationError):
            transfer_service.create_transfer(bank["checking"], bank["savings"], amount, date(2024, 1, 1))

        assert transaction_service.list_transactions() == []

    def test_missing_account_rejected(self, transfer_service, bank):
        """Both accounts must exist."""
        with pytest.raises(ValidationError):
            transfer_service.create_transfer(bank["checking"], uuid4(), Decimal("10"), date(2024, 1, 1))
        with pytest.raises(ValidationError):
            transfer_service.create_transfer(uuid4(), bank["checking"], Decimal("10"), date(2024, 1, 1))

    def test_missing_destination_rejected(self, transfer_service, bank):
        """A transfer needs a destination."""
        with pytest.raises(ValidationError):
            transfer_service.create_transfer(bank["checking"], None, Decimal("10"), date(2024, 1, 1))

    def test_amount_is_rounded_to_cents(self, transfer_service, bank):
        """Amounts are stored with two fractional digits."""
        transfer = transfer_service.create_transfer(bank["checking"], bank["savings"], "12.345", date(2024, 1, 1))

        assert transfer.amount == Decimal("-12.35")


class TestEditTransfer:
    """Editing transfers."""

    def test_edit_amount(self, transfer_service, balance_service, bank):
        """Both balances follow the new amount."""
        transfer = transfer_service.create_transfer(bank["checking"], bank["savings"], Decimal("100"), date(2024, 1, 1))

        edited = transfer_service.edit_transfer(transfer.id, amount=Decimal("40"))

        assert edited.amount == Decimal("-40.00")
        assert balance_service.account_balance(bank["checking"]) == Decimal("-40.00")
        assert balance_service.account_balance(bank["savings"]) == Decimal("40.00")

    def test_edit_destination(self, transfer_service, balance_service, bank, wallet):
        """Redirecting a transfer moves the inflow to the new destination."""
        transfer = transfer_service.create_transfer(bank["checking"], bank["savings"], Decimal("20"), date(2024, 1, 1))

        transfer_service.edit_transfer(transfer.id, destination_id=wallet)

        assert balance_service.account_balance(bank["savings"]) == Decimal("0.00")
        assert balance_service.account_balance(wallet) == Decimal("20.00")

    def test_edit_date_and_note(self, transfer_service, bank):
        """Date and note can be changed without touching the amount."""
        transfer = transfer_service.create_transfer(bank["checking"], bank["savings"], Decimal("20"), date(2024, 1, 1))

        edited = transfer_service.edit_transfer(transfer.id, date=date(2024, 3, 1), note="Moved")

        assert edited.date == date(2024, 3, 1)
        assert edited.note == "Moved"
        assert edited.amount == Decimal("-20.00")

    def test_clear_note(self, transfer_service, bank):
        """The note can be removed."""
        transfer = transfer_service.create_transfer(
            bank["checking"], bank["savings"], Decimal("20"), date(2024, 1, 1), note="Savings"
        )

        edited = transfer_service.edit_transfer(transfer.id, clear_note=True)

        assert edited.note is None
        assert edited.target_account_id == bank["savings"]

    def test_note_and_clear_note_rejected(self, transfer_service, bank):
        """Setting and clearing the note at once is refused."""
        transfer = transfer_service.create_transfer(
            bank["checking"], bank["savings"], Decimal("20"), date(2024, 1, 1), note="Savings"
        )

        with pytest.raises(ValidationError, match="Cannot set both"):
            transfer_service.edit_transfer(transfer.id, note="Other", clear_note=True)

    def test_edit_to_same_account_rejected(self, transfer_service, transaction_service, bank):
        """An edit that makes source and destination equal changes nothing."""
        transfer = transfer_service.create_transfer(bank["checking"], bank["savings"], Decimal("20"), date(2024, 1, 1))

        with pytest.raises(ValidationError):
            transfer_service.edit_transfer(transfer.id, destination_id=bank["checking"])

        stored = transaction_service.get_transaction(transfer.id)
        assert stored.target_account_id == bank["savings"]

    def test_edit_to_zero_rejected(self, transfer_service, bank):
        """An edited amount must stay positive."""
        transfer = transfer_service.create_transfer(bank["checking"], bank["savings"], Decimal("20"), date(2024, 1, 1))

        with pytest.raises(ValidationError):
            transfer_service.edit_transfer(transfer.id, amount=Decimal("0"))

    def test_edit_posting_rejected(self, transfer_service, transaction_service, bank):
        """Only transfers can be edited through the transfer service."""
        posting_id = transaction_service.create_posting(bank["checking"], Decimal("5"), "income", date(2024, 1, 1))

        with pytest.raises(ValidationError):
            transfer_service.edit_transfer(posting_id, amount=Decimal("10"))

    def test_edit_missing_transfer(self, transfer_service):
        """Unknown transaction raises NotFoundError."""
        with pytest.raises(NotFoundError):
            transfer_service.edit_transfer(uuid4(), amount=Decimal("10"))

    def test_detached_transfer_needs_new_destination(
        self, transfer_service, account_service, bank, wallet
    ):
        """Once its destination is deleted, a transfer can only be edited by naming a new one."""
        transfer = transfer_service.create_transfer(bank["checking"], bank["savings"], Decimal("20"), date(2024, 1, 1))
        account_service.delete_account(bank["savings"])

        with pytest.raises(ValidationError):
            transfer_service.edit_transfer(transfer.id, amount=Decimal("30"))

        edited = transfer_service.edit_transfer(transfer.id, destination_id=wallet)
        assert edited.target_account_id == wallet


class TestDeleteTransfer:
    """Deleting transfers."""

    def test_create_then_delete_restores_balances(self, transfer_service, balance_service, sample_ledger):
        """Deleting a transfer undoes it on both accounts at once."""
        checking, savings = sample_ledger["checking"], sample_ledger["savings"]
        before = (balance_service.account_balance(checking), balance_service.account_balance(savings))

        transfer = transfer_service.create_transfer(checking, savings, Decimal("75.50"), date(2024, 2, 1))
        transfer_service.delete_transfer(transfer.id)

        after = (balance_service.account_balance(checking), balance_service.account_balance(savings))
        assert after == before

    def test_delete_posting_rejected(self, transfer_service, transaction_service, bank):
        """delete_transfer refuses to delete postings."""
        posting_id = transaction_service.create_posting(bank["checking"], Decimal("5"), "income", date(2024, 1, 1))

        with pytest.raises(ValidationError):
            transfer_service.delete_transfer(posting_id)
        assert transaction_service.get_transaction(posting_id) is not None

    def test_delete_missing_transfer(self, transfer_service):
        """Unknown transaction raises NotFoundError."""
        with pytest.raises(NotFoundError):
            transfer_service.delete_transfer(uuid4())
