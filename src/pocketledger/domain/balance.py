"""Balance computation.

Balances are never stored; they are derived from transaction rows each
time they are asked for. All arithmetic stays in ``Decimal``.
"""

from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Optional
from uuid import UUID

from pocketledger.config import ZERO
from pocketledger.database.base import Database
from pocketledger.domain import errors
from pocketledger.domain.entities import (
    Account,
    BalancePoint,
    Transaction,
    TransactionType,
)


def signed_amount(txn: Transaction, account_id: UUID) -> Decimal:
    """Effect of ``txn`` on the balance of ``account_id``.

    Income adds, expense subtracts. A transfer subtracts at its source
    and adds the same value at its target.
    """
    magnitude = abs(txn.amount)
    if txn.type == TransactionType.TRANSFER:
        if txn.account_id == account_id:
            return -magnitude
        if txn.target_account_id == account_id:
            return magnitude
        return ZERO
    if txn.account_id != account_id:
        return ZERO
    return magnitude if txn.type == TransactionType.INCOME else -magnitude


def sum_balances(
    transactions: Iterable[Transaction], account_ids: Iterable[UUID]
) -> dict[UUID, Decimal]:
    """Balance per account over the given rows, skipping excluded ones."""
    totals: dict[UUID, Decimal] = {account_id: ZERO for account_id in account_ids}
    for txn in transactions:
        if txn.exclude_from_balance:
            continue
        for account_id in (txn.account_id, txn.target_account_id):
            if account_id in totals:
                totals[account_id] += signed_amount(txn, account_id)
    return totals


class BalanceService:
    """Computes account, group and ledger balances on demand."""

    def __init__(self, db: Database):
        """Initialize balance service.

        Args:
            db: Database instance
        """
        self.db = db

    def _require_account(self, account_id: UUID) -> Account:
        account = self.db.get_account(account_id)
        if account is None:
            raise errors.NotFoundError(errors.account_not_found(account_id))
        return account

    def account_balance(self, account_id: UUID) -> Decimal:
        """Current balance of one account.

        Accounts excluded from totals still have a balance of their own.

        Raises:
            NotFoundError: If account not found
        """
        return self.running_balance(account_id, as_of=None)

    def running_balance(self, account_id: UUID, as_of: Optional[date]) -> Decimal:
        """Balance of one account counting only transactions dated up to ``as_of``.

        Raises:
            NotFoundError: If account not found
        """
        with self.db.read_snapshot():
            self._require_account(account_id)
            activity = self.db.list_account_activity([account_id], end_date=as_of)
        return sum_balances(activity, [account_id])[account_id]

    def _included_total(self, accounts: list[Account]) -> Decimal:
        included = [acc.id for acc in accounts if acc.include_in_balance]
        activity = self.db.list_account_activity(included)
        return sum(sum_balances(activity, included).values(), ZERO)

    def group_balance(self, group_id: UUID) -> Decimal:
        """Sum of member account balances, skipping accounts excluded from totals.

        Raises:
            NotFoundError: If group not found
        """
        with self.db.read_snapshot():
            if self.db.get_group(group_id) is None:
                raise errors.NotFoundError(errors.group_not_found(group_id))
            return self._included_total(self.db.list_accounts(group_id=group_id))

    def total_balance(self) -> Decimal:
        """Sum over every account that is included in totals."""
        with self.db.read_snapshot():
            return self._included_total(self.db.list_accounts())

    def all_account_balances(self) -> dict[UUID, Decimal]:
        """Balance of every account, read from one consistent snapshot."""
        with self.db.read_snapshot():
            account_ids = [acc.id for acc in self.db.list_accounts()]
            activity = self.db.list_account_activity(account_ids)
        return sum_balances(activity, account_ids)

    def balance_history(
        self, account_id: UUID, start_date: date, end_date: date
    ) -> list[BalancePoint]:
        """End-of-day balance for every day from ``start_date`` to ``end_date``.

        Transactions before ``start_date`` form the opening balance. Rows on
        the same day are applied in creation order.

        Raises:
            NotFoundError: If account not found
            ValidationError: If the range is reversed
        """
        if start_date > end_date:
            raise errors.ValidationError(
                f"Start date {start_date} is after end date {end_date}"
            )
        with self.db.read_snapshot():
            self._require_account(account_id)
            activity = self.db.list_account_activity([account_id], end_date=end_date)

        daily: dict[date, Decimal] = defaultdict(lambda: ZERO)
        balance = ZERO
        for txn in activity:
            if txn.exclude_from_balance:
                continue
            if txn.date < start_date:
                balance += signed_amount(txn, account_id)
            else:
                daily[txn.date] += signed_amount(txn, account_id)

        points = []
        day = start_date
        while day <= end_date:
            balance += daily.get(day, ZERO)
            points.append(BalancePoint(date=day, balance=balance))
            day += timedelta(days=1)
        return points
