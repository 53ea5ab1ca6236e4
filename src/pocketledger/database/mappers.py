"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic so ORM rows never escape the
store and schema changes stay local to the database package.
"""

from pocketledger.domain import entities as domain
from pocketledger.database.models import (
    AccountGroup as ORMAccountGroup,
    Account as ORMAccount,
    Category as ORMCategory,
    Transaction as ORMTransaction,
)


def group_to_domain(orm_group: ORMAccountGroup) -> domain.AccountGroup:
    """Convert SQLAlchemy AccountGroup model to domain AccountGroup entity."""
    return domain.AccountGroup(
        id=orm_group.id,
        name=orm_group.name,
        icon=orm_group.icon,
        icon_color=orm_group.icon_color,
        created_at=orm_group.created_at,
    )


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        kind=domain.AccountKind(orm_account.kind),
        include_in_balance=orm_account.include_in_balance,
        order=orm_account.order,
        group_id=orm_account.group_id,
        icon=orm_account.icon,
        icon_color=orm_account.icon_color,
        created_at=orm_account.created_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        created_at=orm_category.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        account_id=orm_transaction.account_id,
        type=domain.TransactionType(orm_transaction.type),
        amount=orm_transaction.amount,
        date=orm_transaction.date,
        note=orm_transaction.note,
        usage=orm_transaction.usage,
        exclude_from_balance=orm_transaction.exclude_from_balance,
        category_id=orm_transaction.category_id,
        target_account_id=orm_transaction.target_account_id,
        sequence=orm_transaction.sequence,
        created_at=orm_transaction.created_at,
    )
