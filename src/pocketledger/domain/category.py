"""Category domain service."""

from typing import Optional
from uuid import UUID

from pocketledger.database.base import Database
from pocketledger.domain import errors
from pocketledger.domain.entities import Category as CategoryEntity


class CategoryService:
    """Service for managing categories and transaction categorization."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def _clean_name(self, name: str) -> str:
        if not name or not name.strip():
            raise errors.ValidationError("Category name must not be empty")
        return name.strip()

    def create_category(self, name: str) -> UUID:
        """Create a category.

        Args:
            name: Category name

        Returns:
            Category ID

        Raises:
            ValidationError: If the name is empty or already taken
        """
        name = self._clean_name(name)
        if self.db.get_category_by_name(name) is not None:
            raise errors.ValidationError(errors.duplicate_category_name(name))
        return self.db.create_category(name=name)

    def get_category(self, category_id: UUID) -> Optional[CategoryEntity]:
        """Get category by ID, or None if not found."""
        return self.db.get_category(category_id)

    def require_category(self, category_id: UUID) -> CategoryEntity:
        """Get category by ID or raise NotFoundError."""
        category = self.db.get_category(category_id)
        if category is None:
            raise errors.NotFoundError(errors.category_not_found(category_id))
        return category

    def get_category_by_name(self, name: str) -> Optional[CategoryEntity]:
        """Get category by name, or None if not found."""
        return self.db.get_category_by_name(name)

    def require_category_by_name(self, name: str) -> CategoryEntity:
        """Get category by name or raise NotFoundError."""
        category = self.db.get_category_by_name(name)
        if category is None:
            raise errors.NotFoundError(errors.category_name_not_found(name))
        return category

    def list_categories(self) -> list[CategoryEntity]:
        """List all categories."""
        return self.db.list_categories()

    def rename_category(self, category_id: UUID, name: str) -> None:
        """Rename a category.

        Raises:
            NotFoundError: If category not found
            ValidationError: If the name is empty or used by another category
        """
        name = self._clean_name(name)
        self.require_category(category_id)
        self.db.rename_category(category_id, name)

    def reassign_category(self, transaction_id: UUID, category_id: Optional[UUID]) -> None:
        """Set or clear a transaction's category.

        Neither the transaction nor any category is deleted.

        Raises:
            NotFoundError: If the transaction or category does not exist
        """
        if self.db.get_transaction(transaction_id) is None:
            raise errors.NotFoundError(errors.transaction_not_found(transaction_id))
        if category_id is not None:
            self.require_category(category_id)
        self.db.update_transaction_category(transaction_id, category_id)

    def delete_category(self, category_id: UUID) -> int:
        """Delete a category.

        Transactions in the category keep existing without a category.

        Returns:
            Number of transactions whose category was cleared

        Raises:
            NotFoundError: If category not found
        """
        self.require_category(category_id)
        return self.db.delete_category(category_id)
