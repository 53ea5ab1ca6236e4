"""Domain model entities for pocketledger.

These are pure data classes representing ledger concepts, independent of
the database schema. The store converts its rows into these before
returning them, so nothing outside the database package holds a live
ORM object.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID


class AccountKind(str, Enum):
    """Closed set of account kinds."""

    BANK = "bank"
    OFFLINE = "offline"
    CASH = "cash"
    CREDIT = "credit"
    SAVINGS = "savings"


class TransactionType(str, Enum):
    """Posting types. ``TRANSFER`` rows also carry a target account."""

    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"


@dataclass(frozen=True)
class AccountGroup:
    """Account group domain entity."""

    id: UUID
    name: str
    icon: Optional[str]
    icon_color: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Account:
    """Account domain entity."""

    id: UUID
    name: str
    kind: AccountKind
    include_in_balance: bool
    order: int
    group_id: Optional[UUID]
    icon: Optional[str]
    icon_color: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Category:
    """Category domain entity."""

    id: UUID
    name: str
    created_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity.

    ``amount`` is stored signed: income positive, expense negative, and
    transfers negative (outflow from ``account_id`` into
    ``target_account_id``).
    """

    id: UUID
    account_id: UUID
    type: TransactionType
    amount: Decimal
    date: date
    note: Optional[str]
    usage: Optional[str]
    exclude_from_balance: bool
    category_id: Optional[UUID]
    target_account_id: Optional[UUID]
    sequence: int
    created_at: datetime

    @property
    def is_transfer(self) -> bool:
        return self.type == TransactionType.TRANSFER


@dataclass(frozen=True)
class CascadeResult:
    """What a cascading delete removed or detached."""

    accounts_deleted: int = 0
    transactions_deleted: int = 0
    transfers_detached: int = 0


@dataclass(frozen=True)
class BalancePoint:
    """End-of-day balance for one calendar day."""

    date: date
    balance: Decimal
