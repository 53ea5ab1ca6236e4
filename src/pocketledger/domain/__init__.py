"""Domain layer for pocketledger.

Services live in their own modules (``pocketledger.domain.transfer`` and so
on) and are imported from there; this package only re-exports the plain
entity and error types so the database layer can import them without
pulling in the services.
"""

from pocketledger.domain.entities import (
    AccountGroup,
    Account,
    AccountKind,
    BalancePoint,
    CascadeResult,
    Category,
    Transaction,
    TransactionType,
)
from pocketledger.domain.errors import (
    DomainError,
    IntegrityError,
    NotFoundError,
    StoreError,
    ValidationError,
)

__all__ = [
    "AccountGroup",
    "Account",
    "AccountKind",
    "BalancePoint",
    "CascadeResult",
    "Category",
    "Transaction",
    "TransactionType",
    "DomainError",
    "IntegrityError",
    "NotFoundError",
    "StoreError",
    "ValidationError",
]
