"""Transfer domain service.

A transfer is stored as one transaction: ``account_id`` is the source,
``target_account_id`` the destination and ``amount`` the negated transfer
value (an outflow from the source's point of view). Because there is only
one row, every create, edit or delete is a single store write, so no
reader can see one side of a transfer without the other.
"""

import logging
from typing import Optional
from datetime import date
from decimal import Decimal
from uuid import UUID

from pocketledger.database.base import Database
from pocketledger.domain import errors
from pocketledger.domain.entities import Transaction as TransactionEntity, TransactionType
from pocketledger.utils.amount_parser import to_amount

logger = logging.getLogger(__name__)


class TransferService:
    """Service for creating, editing and deleting transfers between accounts."""

    def __init__(self, db: Database):
        """Initialize transfer service.

        Args:
            db: Database instance
        """
        self.db = db

    def _validate(
        self, source_id: Optional[UUID], destination_id: Optional[UUID], amount: Decimal
    ) -> None:
        """Check the rules every stored transfer must satisfy."""
        if destination_id is None:
            raise errors.ValidationError("Transfer needs a destination account")
        if source_id == destination_id:
            raise errors.ValidationError("Source and destination account must differ")
        if amount <= 0:
            raise errors.ValidationError(f"Transfer amount must be positive, got {amount}")
        if self.db.get_account(source_id) is None:
            raise errors.ValidationError(errors.account_not_found(source_id))
        if self.db.get_account(destination_id) is None:
            raise errors.ValidationError(errors.account_not_found(destination_id))

    @staticmethod
    def _parse_amount(amount: Decimal | int | str) -> Decimal:
        try:
            return to_amount(amount)
        except ValueError as e:
            raise errors.ValidationError(str(e))

    def require_transfer(self, transaction_id: UUID) -> TransactionEntity:
        """Get a transfer by ID.

        Raises:
            NotFoundError: If transaction doesn't exist
            ValidationError: If the transaction is not a transfer
        """
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise errors.NotFoundError(errors.transaction_not_found(transaction_id))
        if not txn.is_transfer:
            raise errors.ValidationError(errors.not_a_transfer(transaction_id))
        return txn

    def create_transfer(
        self,
        source_id: UUID,
        destination_id: UUID,
        amount: Decimal | int | str,
        date: date,
        note: Optional[str] = None,
        usage: Optional[str] = None,
        category_id: Optional[UUID] = None,
    ) -> TransactionEntity:
        """Move ``amount`` from one account to another.

        Args:
            source_id: Account the money leaves
            destination_id: Account the money arrives at
            amount: Positive transfer value
            date: Transfer date
            note: Optional free-text note
            usage: Optional usage / payment reference text
            category_id: Optional category ID

        Returns:
            The stored transfer transaction

        Raises:
            ValidationError: If the accounts are equal or missing, or amount <= 0
            IntegrityError: If the category does not exist
        """
        value = self._parse_amount(amount)
        with self.db.exclusive():
            self._validate(source_id, destination_id, value)
            transaction_id = self.db.create_transaction(
                account_id=source_id,
                type=TransactionType.TRANSFER,
                amount=-value,
                date=date,
                note=note,
                usage=usage,
                category_id=category_id,
                target_account_id=destination_id,
            )
            transfer = self.db.get_transaction(transaction_id)
        logger.info(f"Transfer {transaction_id}: {value} from {source_id} to {destination_id}")
        return transfer

    def edit_transfer(
        self,
        transaction_id: UUID,
        amount: Optional[Decimal | int | str] = None,
        source_id: Optional[UUID] = None,
        destination_id: Optional[UUID] = None,
        date: Optional[date] = None,
        note: Optional[str] = None,
        clear_note: bool = False,
    ) -> TransactionEntity:
        """Change a transfer. ``None`` leaves a field unchanged.

        ``clear_note`` removes the note. The merged result is validated with
        the same rules as a new transfer before anything is written.

        Returns:
            The updated transfer transaction

        Raises:
            NotFoundError: If transaction doesn't exist
            ValidationError: If it is not a transfer or the merged result is invalid
        """
        if clear_note and note is not None:
            raise errors.ValidationError("Cannot set both note and clear_note")

        with self.db.exclusive():
            txn = self.require_transfer(transaction_id)

            new_value = self._parse_amount(amount) if amount is not None else -txn.amount
            new_source = source_id if source_id is not None else txn.account_id
            new_destination = (
                destination_id if destination_id is not None else txn.target_account_id
            )
            self._validate(new_source, new_destination, new_value)

            self.db.update_transaction(
                transaction_id=transaction_id,
                account_id=source_id,
                amount=-new_value if amount is not None else None,
                date=date,
                note=note,
                clear_note=clear_note,
                target_account_id=destination_id,
            )
            transfer = self.db.get_transaction(transaction_id)
        logger.info(f"Edited transfer {transaction_id}")
        return transfer

    def delete_transfer(self, transaction_id: UUID) -> None:
        """Delete a transfer; both account balances change together.

        Raises:
            NotFoundError: If transaction doesn't exist
            ValidationError: If the transaction is not a transfer
        """
        with self.db.exclusive():
            self.require_transfer(transaction_id)
            self.db.delete_transaction(transaction_id)
        logger.info(f"Deleted transfer {transaction_id}")
