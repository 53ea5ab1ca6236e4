"""Shared domain error messages and error types."""

from uuid import UUID


class DomainError(ValueError):
    """Base class for ledger errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """A business rule was violated (equal transfer accounts, bad amount, ...)."""


class NotFoundError(DomainError):
    """Requested ledger entity does not exist."""


class IntegrityError(DomainError):
    """A write would break a relationship invariant."""


class StoreError(DomainError):
    """The underlying persistence layer failed. Never retried."""


def group_not_found(group_id: UUID) -> str:
    """Return message for missing account group."""
    return f"Account group {group_id} not found"


def account_not_found(account_id: UUID) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def category_not_found(category_id: UUID) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def category_name_not_found(name: str) -> str:
    """Return message for missing category by name."""
    return f"Category '{name}' not found"


def transaction_not_found(transaction_id: UUID) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def duplicate_category_name(name: str) -> str:
    """Return message for duplicate category name."""
    return f"Category with name '{name}' already exists"


def not_a_transfer(transaction_id: UUID) -> str:
    """Return message when a transfer operation targets a posting."""
    return f"Transaction {transaction_id} is not a transfer"
