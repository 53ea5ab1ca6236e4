"""Transaction domain service for single-account postings."""

from typing import Optional
from datetime import date
from decimal import Decimal
from uuid import UUID

from pocketledger.database.base import Database
from pocketledger.domain import errors
from pocketledger.domain.entities import (
    Transaction as TransactionEntity,
    TransactionType,
)
from pocketledger.utils.amount_parser import to_amount

POSTING_TYPES = (TransactionType.INCOME, TransactionType.EXPENSE)


def normalize_posting_amount(amount: Decimal, type: TransactionType) -> Decimal:
    """Store income positive and expense negative, whatever sign was given."""
    magnitude = abs(amount)
    return magnitude if type == TransactionType.INCOME else -magnitude


class TransactionService:
    """Service for managing postings (income and expense transactions)."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    @staticmethod
    def _parse_posting_type(type: TransactionType | str) -> TransactionType:
        try:
            parsed = TransactionType(type)
        except ValueError:
            raise errors.ValidationError(f"Unknown transaction type '{type}'")
        if parsed not in POSTING_TYPES:
            raise errors.ValidationError(
                "Transfers must be created through the transfer service"
            )
        return parsed

    @staticmethod
    def _parse_amount(amount: Decimal | int | str) -> Decimal:
        try:
            return to_amount(amount)
        except ValueError as e:
            raise errors.ValidationError(str(e))

    def create_posting(
        self,
        account_id: UUID,
        amount: Decimal | int | str,
        type: TransactionType | str,
        date: date,
        category_id: Optional[UUID] = None,
        note: Optional[str] = None,
        usage: Optional[str] = None,
        exclude_from_balance: bool = False,
    ) -> UUID:
        """Create an income or expense posting against one account.

        The stored sign follows ``type``: income is positive, expense is
        negative. A zero amount is accepted and kept for the record.

        Args:
            account_id: Account ID
            amount: Transaction amount
            type: ``income`` or ``expense``
            date: Transaction date
            category_id: Optional category ID
            note: Optional free-text note
            usage: Optional usage / payment reference text
            exclude_from_balance: Keep the posting in history but out of balances

        Returns:
            Transaction ID

        Raises:
            ValidationError: If type or amount is invalid
            IntegrityError: If the account or category does not exist
        """
        posting_type = self._parse_posting_type(type)
        value = normalize_posting_amount(self._parse_amount(amount), posting_type)

        return self.db.create_transaction(
            account_id=account_id,
            type=posting_type,
            amount=value,
            date=date,
            note=note,
            usage=usage,
            exclude_from_balance=exclude_from_balance,
            category_id=category_id,
        )

    def get_transaction(self, transaction_id: UUID) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def require_transaction(self, transaction_id: UUID) -> TransactionEntity:
        """Get transaction by ID or raise NotFoundError."""
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise errors.NotFoundError(errors.transaction_not_found(transaction_id))
        return txn

    def update_posting(
        self,
        transaction_id: UUID,
        account_id: Optional[UUID] = None,
        amount: Optional[Decimal | int | str] = None,
        type: Optional[TransactionType | str] = None,
        date: Optional[date] = None,
        note: Optional[str] = None,
        usage: Optional[str] = None,
        clear_note: bool = False,
        clear_usage: bool = False,
    ) -> None:
        """Update posting fields. ``None`` leaves a field unchanged.

        Changing ``type`` re-signs the stored amount. ``clear_note`` and
        ``clear_usage`` remove the note or usage text.

        Raises:
            NotFoundError: If transaction doesn't exist
            ValidationError: If the transaction is a transfer or values are invalid
            IntegrityError: If the new account doesn't exist
        """
        txn = self.require_transaction(transaction_id)
        if txn.is_transfer:
            raise errors.ValidationError(
                f"Transaction {transaction_id} is a transfer; use the transfer service"
            )
        if clear_note and note is not None:
            raise errors.ValidationError("Cannot set both note and clear_note")
        if clear_usage and usage is not None:
            raise errors.ValidationError("Cannot set both usage and clear_usage")

        new_type = self._parse_posting_type(type) if type is not None else txn.type
        new_amount = None
        if amount is not None or new_type != txn.type:
            base = self._parse_amount(amount) if amount is not None else txn.amount
            new_amount = normalize_posting_amount(base, new_type)

        self.db.update_transaction(
            transaction_id=transaction_id,
            account_id=account_id,
            type=new_type if new_type != txn.type else None,
            amount=new_amount,
            date=date,
            note=note,
            usage=usage,
            clear_note=clear_note,
            clear_usage=clear_usage,
        )

    def set_excluded(self, transaction_id: UUID, excluded: bool) -> None:
        """Include a transaction in, or exclude it from, balance totals.

        Raises:
            NotFoundError: If transaction doesn't exist
        """
        self.require_transaction(transaction_id)
        self.db.update_transaction(transaction_id, exclude_from_balance=excluded)

    def delete_transaction(self, transaction_id: UUID) -> None:
        """Delete a transaction.

        Args:
            transaction_id: Transaction ID to delete

        Raises:
            NotFoundError: If transaction doesn't exist
        """
        self.require_transaction(transaction_id)
        self.db.delete_transaction(transaction_id)

    def list_transactions(
        self,
        account_id: Optional[UUID] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category_id: Optional[UUID] = None,
        uncategorized: bool = False,
        include_targeted: bool = True,
    ) -> list[TransactionEntity]:
        """List transactions with filters, newest first.

        Args:
            account_id: Optional account ID filter
            start_date: Optional start date filter
            end_date: Optional end date filter
            category_id: Optional category ID filter
            uncategorized: Only transactions without a category
            include_targeted: With ``account_id``, include transfers into the account

        Returns:
            List of transaction entities
        """
        return self.db.list_transactions(
            account_id=account_id,
            start_date=start_date,
            end_date=end_date,
            category_id=category_id,
            uncategorized=uncategorized,
            include_targeted=include_targeted,
        )
