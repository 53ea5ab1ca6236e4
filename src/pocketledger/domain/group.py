"""Account group domain service."""

from typing import Optional
from uuid import UUID

from pocketledger.database.base import Database
from pocketledger.domain import errors
from pocketledger.domain.entities import AccountGroup as AccountGroupEntity, CascadeResult


class GroupService:
    """Service for managing account groups."""

    def __init__(self, db: Database):
        """Initialize group service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_group(
        self, name: str, icon: Optional[str] = None, icon_color: Optional[str] = None
    ) -> UUID:
        """Create a new account group.

        Args:
            name: Group name
            icon: Optional display icon name
            icon_color: Optional display color (hex string)

        Returns:
            Group ID

        Raises:
            ValidationError: If the name is empty
        """
        if not name or not name.strip():
            raise errors.ValidationError("Group name must not be empty")
        return self.db.create_group(name=name.strip(), icon=icon, icon_color=icon_color)

    def get_group(self, group_id: UUID) -> Optional[AccountGroupEntity]:
        """Get group by ID, or None if not found."""
        return self.db.get_group(group_id)

    def require_group(self, group_id: UUID) -> AccountGroupEntity:
        """Get group by ID or raise NotFoundError."""
        group = self.db.get_group(group_id)
        if group is None:
            raise errors.NotFoundError(errors.group_not_found(group_id))
        return group

    def get_group_by_name(self, name: str) -> Optional[AccountGroupEntity]:
        """Get the first group with the given name."""
        for group in self.db.list_groups():
            if group.name == name:
                return group
        return None

    def list_groups(self) -> list[AccountGroupEntity]:
        """List all groups."""
        return self.db.list_groups()

    def update_group(
        self,
        group_id: UUID,
        name: Optional[str] = None,
        icon: Optional[str] = None,
        icon_color: Optional[str] = None,
    ) -> None:
        """Update a group's name or display attributes.

        Raises:
            NotFoundError: If group not found
            ValidationError: If the new name is empty
        """
        if name is not None and not name.strip():
            raise errors.ValidationError("Group name must not be empty")
        self.require_group(group_id)
        self.db.update_group(
            group_id,
            name=name.strip() if name is not None else None,
            icon=icon,
            icon_color=icon_color,
        )

    def delete_group(self, group_id: UUID) -> CascadeResult:
        """Delete a group together with its accounts.

        Every account in the group is deleted along with the transactions it
        owns. Transfers from other accounts into a deleted account are kept
        with their target cleared. The whole cascade commits or rolls back
        as one unit.

        Raises:
            NotFoundError: If group not found
        """
        self.require_group(group_id)
        return self.db.delete_group(group_id)
