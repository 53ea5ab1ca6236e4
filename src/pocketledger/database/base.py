"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Iterable, Optional
from datetime import date
from decimal import Decimal
from uuid import UUID

# Import entities directly to avoid circular import through domain/__init__.py
from pocketledger.domain.entities import (
    AccountGroup,
    Account,
    AccountKind,
    CascadeResult,
    Category,
    Transaction,
    TransactionType,
)


class Database(ABC):
    """Abstract ledger store.

    Every mutating method is atomic: it either commits completely or leaves
    the store untouched. Deletion rules (cascade/nullify) are applied by the
    store itself, inside the same commit as the delete.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def read_snapshot(self) -> AbstractContextManager[None]:
        """Hold the read lock so several reads observe one consistent state."""
        pass

    @abstractmethod
    def exclusive(self) -> AbstractContextManager[None]:
        """Hold the write lock across a validate-then-write sequence.

        Store calls made by the holding thread inside the block still work.
        """
        pass

    # Account group operations
    @abstractmethod
    def create_group(
        self, name: str, icon: Optional[str] = None, icon_color: Optional[str] = None
    ) -> UUID:
        """Create an account group. Returns group ID."""
        pass

    @abstractmethod
    def get_group(self, group_id: UUID) -> Optional[AccountGroup]:
        """Get account group by ID."""
        pass

    @abstractmethod
    def list_groups(self) -> list[AccountGroup]:
        """List all account groups."""
        pass

    @abstractmethod
    def update_group(
        self,
        group_id: UUID,
        name: Optional[str] = None,
        icon: Optional[str] = None,
        icon_color: Optional[str] = None,
    ) -> None:
        """Update account group fields."""
        pass

    @abstractmethod
    def delete_group(self, group_id: UUID) -> CascadeResult:
        """Delete a group, its accounts and their transactions.

        Transfers elsewhere that targeted one of the deleted accounts lose
        their target reference instead of being deleted.
        """
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self,
        name: str,
        kind: AccountKind = AccountKind.BANK,
        group_id: Optional[UUID] = None,
        include_in_balance: bool = True,
        order: Optional[int] = None,
        icon: Optional[str] = None,
        icon_color: Optional[str] = None,
    ) -> UUID:
        """Create an account. Returns account ID.

        When ``order`` is None the account is placed after the last account
        of its group.
        """
        pass

    @abstractmethod
    def get_account(self, account_id: UUID) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(
        self, group_id: Optional[UUID] = None, ungrouped: bool = False
    ) -> list[Account]:
        """List accounts ordered by display order.

        Args:
            group_id: Optional group ID filter
            ungrouped: If True, only return accounts without a group
        """
        pass

    @abstractmethod
    def update_account(
        self,
        account_id: UUID,
        name: Optional[str] = None,
        kind: Optional[AccountKind] = None,
        include_in_balance: Optional[bool] = None,
        icon: Optional[str] = None,
        icon_color: Optional[str] = None,
    ) -> None:
        """Update account fields."""
        pass

    @abstractmethod
    def set_account_group(self, account_id: UUID, group_id: Optional[UUID]) -> None:
        """Reparent an account. ``None`` makes it groupless."""
        pass

    @abstractmethod
    def set_account_orders(self, orders: dict[UUID, int]) -> None:
        """Set display order for several accounts in one commit."""
        pass

    @abstractmethod
    def delete_account(self, account_id: UUID) -> CascadeResult:
        """Delete an account and its own transactions.

        Transfers that targeted the account lose their target reference.
        """
        pass

    # Category operations
    @abstractmethod
    def create_category(self, name: str) -> UUID:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: UUID) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def get_category_by_name(self, name: str) -> Optional[Category]:
        """Get category by name."""
        pass

    @abstractmethod
    def list_categories(self) -> list[Category]:
        """List all categories."""
        pass

    @abstractmethod
    def rename_category(self, category_id: UUID, name: str) -> None:
        """Rename a category."""
        pass

    @abstractmethod
    def delete_category(self, category_id: UUID) -> int:
        """Delete a category after clearing it from its transactions.

        Returns the number of transactions whose category was cleared.
        """
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        account_id: UUID,
        type: TransactionType,
        amount: Decimal,
        date: date,
        note: Optional[str] = None,
        usage: Optional[str] = None,
        exclude_from_balance: bool = False,
        category_id: Optional[UUID] = None,
        target_account_id: Optional[UUID] = None,
    ) -> UUID:
        """Create a transaction. Returns transaction ID.

        Raises:
            IntegrityError: If a referenced account or category does not exist
        """
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: UUID) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def update_transaction(
        self,
        transaction_id: UUID,
        account_id: Optional[UUID] = None,
        type: Optional[TransactionType] = None,
        amount: Optional[Decimal] = None,
        date: Optional[date] = None,
        note: Optional[str] = None,
        usage: Optional[str] = None,
        exclude_from_balance: Optional[bool] = None,
        target_account_id: Optional[UUID] = None,
        clear_note: bool = False,
        clear_usage: bool = False,
    ) -> None:
        """Update transaction fields. ``None`` leaves a field unchanged.

        ``clear_note`` and ``clear_usage`` set those fields to None.
        """
        pass

    @abstractmethod
    def transaction_exists(
        self, account_id: UUID, date: date, amount: Decimal, usage: Optional[str]
    ) -> bool:
        """Check if the account already has a transaction with this date, amount and usage.

        A ``None`` usage only matches transactions without usage text.
        """
        pass

    @abstractmethod
    def update_transaction_category(
        self, transaction_id: UUID, category_id: Optional[UUID]
    ) -> None:
        """Set or clear a transaction's category."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: UUID) -> None:
        """Delete a transaction."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        account_id: Optional[UUID] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category_id: Optional[UUID] = None,
        uncategorized: bool = False,
        include_targeted: bool = False,
    ) -> list[Transaction]:
        """List transactions, newest first, with optional filters.

        Args:
            account_id: Optional account ID filter (source side)
            start_date: Optional start date filter
            end_date: Optional end date filter
            category_id: Optional category ID filter
            uncategorized: If True, only return transactions without a category
            include_targeted: With ``account_id``, also return transfers into the account
        """
        pass

    @abstractmethod
    def list_account_activity(
        self, account_ids: Iterable[UUID], end_date: Optional[date] = None
    ) -> list[Transaction]:
        """Transactions posted against or targeting any of the accounts.

        Ordered by date, then by creation sequence.
        """
        pass

    @abstractmethod
    def replace_all(
        self,
        groups: list[AccountGroup],
        accounts: list[Account],
        categories: list[Category],
        transactions: list[Transaction],
    ) -> None:
        """Replace the whole ledger with the given entities in one commit."""
        pass
