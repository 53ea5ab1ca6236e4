"""Account domain service."""

from typing import Optional
from uuid import UUID

from pocketledger.database.base import Database
from pocketledger.domain import errors
from pocketledger.domain.entities import (
    Account as AccountEntity,
    AccountKind,
    CascadeResult,
)


class AccountService:
    """Service for managing accounts and their place in groups."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def _require_group_reference(self, group_id: Optional[UUID]) -> None:
        if group_id is not None and self.db.get_group(group_id) is None:
            raise errors.ValidationError(errors.group_not_found(group_id))

    def create_account(
        self,
        name: str,
        group_id: Optional[UUID] = None,
        kind: AccountKind | str = AccountKind.BANK,
        include_in_balance: bool = True,
        icon: Optional[str] = None,
        icon_color: Optional[str] = None,
    ) -> UUID:
        """Create a new account.

        Args:
            name: Account name
            group_id: Optional owning group
            kind: Account kind
            include_in_balance: Whether the account counts towards totals
            icon: Optional display icon name
            icon_color: Optional display color

        Returns:
            Account ID

        Raises:
            ValidationError: If the name is empty, the kind is unknown or the group does not exist
        """
        if not name or not name.strip():
            raise errors.ValidationError("Account name must not be empty")
        kind = self._parse_kind(kind)
        self._require_group_reference(group_id)

        return self.db.create_account(
            name=name.strip(),
            kind=kind,
            group_id=group_id,
            include_in_balance=include_in_balance,
            icon=icon,
            icon_color=icon_color,
        )

    @staticmethod
    def _parse_kind(kind: AccountKind | str) -> AccountKind:
        try:
            return AccountKind(kind)
        except ValueError:
            allowed = ", ".join(k.value for k in AccountKind)
            raise errors.ValidationError(f"Unknown account kind '{kind}'. Allowed: {allowed}")

    def get_account(self, account_id: UUID) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def require_account(self, account_id: UUID) -> AccountEntity:
        """Get account by ID or raise NotFoundError."""
        account = self.db.get_account(account_id)
        if account is None:
            raise errors.NotFoundError(errors.account_not_found(account_id))
        return account

    def list_accounts(
        self, group_id: Optional[UUID] = None, ungrouped: bool = False
    ) -> list[AccountEntity]:
        """List accounts, optionally restricted to one group or to groupless accounts."""
        return self.db.list_accounts(group_id=group_id, ungrouped=ungrouped)

    def update_account(
        self,
        account_id: UUID,
        name: Optional[str] = None,
        kind: Optional[AccountKind | str] = None,
        include_in_balance: Optional[bool] = None,
        icon: Optional[str] = None,
        icon_color: Optional[str] = None,
    ) -> None:
        """Update account attributes. ``None`` leaves a field unchanged.

        Raises:
            NotFoundError: If account not found
            ValidationError: If the new name is empty or the kind is unknown
        """
        if name is not None and not name.strip():
            raise errors.ValidationError("Account name must not be empty")
        parsed_kind = self._parse_kind(kind) if kind is not None else None
        self.require_account(account_id)

        self.db.update_account(
            account_id,
            name=name.strip() if name is not None else None,
            kind=parsed_kind,
            include_in_balance=include_in_balance,
            icon=icon,
            icon_color=icon_color,
        )

    def move_account(self, account_id: UUID, group_id: Optional[UUID]) -> None:
        """Move an account into another group, or out of any group.

        Transactions stay with the account.

        Raises:
            NotFoundError: If account not found
            ValidationError: If ``group_id`` is given but the group does not exist
        """
        self.require_account(account_id)
        self._require_group_reference(group_id)
        self.db.set_account_group(account_id, group_id)

    def reorder_accounts(self, account_ids: list[UUID]) -> None:
        """Assign display order following the given sequence.

        Raises:
            ValidationError: If an ID appears twice
            NotFoundError: If an account does not exist
        """
        if len(set(account_ids)) != len(account_ids):
            raise errors.ValidationError("Account order contains duplicates")
        self.db.set_account_orders({account_id: index for index, account_id in enumerate(account_ids)})

    def delete_account(self, account_id: UUID) -> CascadeResult:
        """Delete an account.

        The account's own transactions are deleted with it, including
        transfers it sent to other accounts. Transfers other accounts sent
        to it are kept with their target cleared.

        Raises:
            NotFoundError: If account not found
        """
        self.require_account(account_id)
        return self.db.delete_account(account_id)
