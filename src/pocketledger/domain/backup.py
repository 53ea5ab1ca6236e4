"""Backup and restore of the whole ledger as a JSON document."""

import json
import logging
from datetime import date, datetime, UTC
from pathlib import Path
from typing import Any
from uuid import UUID

from pocketledger import config
from pocketledger.database.base import Database
from pocketledger.domain import errors
from pocketledger.domain.entities import (
    AccountGroup,
    Account,
    AccountKind,
    Category,
    Transaction,
    TransactionType,
)
from pocketledger.utils.amount_parser import to_amount

logger = logging.getLogger(__name__)


def _optional_uuid(value: str | None) -> UUID | None:
    return UUID(value) if value else None


class BackupService:
    """Exports the ledger to, and restores it from, a JSON snapshot."""

    def __init__(self, db: Database):
        """Initialize backup service.

        Args:
            db: Database instance
        """
        self.db = db

    def export_snapshot(self) -> dict[str, Any]:
        """Serialize every group, account, category and transaction.

        Amounts are written as strings so no precision is lost.
        """
        with self.db.read_snapshot():
            groups = self.db.list_groups()
            accounts = self.db.list_accounts()
            categories = self.db.list_categories()
            transactions = self.db.list_transactions()

        return {
            "version": config.BACKUP_FORMAT_VERSION,
            "timestamp": datetime.now(UTC).isoformat(),
            "groups": [
                {
                    "id": str(g.id),
                    "name": g.name,
                    "icon": g.icon,
                    "icon_color": g.icon_color,
                    "created_at": g.created_at.isoformat(),
                }
                for g in groups
            ],
            "accounts": [
                {
                    "id": str(a.id),
                    "name": a.name,
                    "kind": a.kind.value,
                    "include_in_balance": a.include_in_balance,
                    "order": a.order,
                    "group_id": str(a.group_id) if a.group_id else None,
                    "icon": a.icon,
                    "icon_color": a.icon_color,
                    "created_at": a.created_at.isoformat(),
                }
                for a in accounts
            ],
            "categories": [
                {"id": str(c.id), "name": c.name, "created_at": c.created_at.isoformat()}
                for c in categories
            ],
            "transactions": [
                {
                    "id": str(t.id),
                    "account_id": str(t.account_id),
                    "type": t.type.value,
                    "amount": str(t.amount),
                    "date": t.date.isoformat(),
                    "note": t.note,
                    "usage": t.usage,
                    "exclude_from_balance": t.exclude_from_balance,
                    "category_id": str(t.category_id) if t.category_id else None,
                    "target_account_id": (
                        str(t.target_account_id) if t.target_account_id else None
                    ),
                    "sequence": t.sequence,
                    "created_at": t.created_at.isoformat(),
                }
                for t in sorted(transactions, key=lambda t: t.sequence)
            ],
        }

    def write_backup(self, path: str | Path) -> Path:
        """Write a snapshot to ``path`` and return the path."""
        path = Path(path)
        snapshot = self.export_snapshot()
        path.write_text(json.dumps(snapshot, indent=2), encoding="utf-8")
        logger.info(f"Wrote backup with {len(snapshot['transactions'])} transactions to {path}")
        return path

    def restore_snapshot(self, data: dict[str, Any]) -> None:
        """Replace the ledger with the contents of a snapshot.

        The snapshot is fully parsed and checked before anything is written,
        and the replacement is a single commit.

        Raises:
            ValidationError: If the snapshot is malformed or inconsistent
        """
        try:
            groups = [
                AccountGroup(
                    id=UUID(g["id"]),
                    name=g["name"],
                    icon=g.get("icon"),
                    icon_color=g.get("icon_color"),
                    created_at=datetime.fromisoformat(g["created_at"]),
                )
                for g in data["groups"]
            ]
            accounts = [
                Account(
                    id=UUID(a["id"]),
                    name=a["name"],
                    kind=AccountKind(a.get("kind", AccountKind.BANK.value)),
                    include_in_balance=bool(a.get("include_in_balance", True)),
                    order=int(a.get("order", 0)),
                    group_id=_optional_uuid(a.get("group_id")),
                    icon=a.get("icon"),
                    icon_color=a.get("icon_color"),
                    created_at=datetime.fromisoformat(a["created_at"]),
                )
                for a in data["accounts"]
            ]
            categories = [
                Category(
                    id=UUID(c["id"]),
                    name=c["name"],
                    created_at=datetime.fromisoformat(c["created_at"]),
                )
                for c in data["categories"]
            ]
            transactions = [
                Transaction(
                    id=UUID(t["id"]),
                    account_id=UUID(t["account_id"]),
                    type=TransactionType(t["type"]),
                    amount=to_amount(t["amount"]),
                    date=date.fromisoformat(t["date"]),
                    note=t.get("note"),
                    usage=t.get("usage"),
                    exclude_from_balance=bool(t.get("exclude_from_balance", False)),
                    category_id=_optional_uuid(t.get("category_id")),
                    target_account_id=_optional_uuid(t.get("target_account_id")),
                    sequence=int(t["sequence"]),
                    created_at=datetime.fromisoformat(t["created_at"]),
                )
                for t in data["transactions"]
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise errors.ValidationError(f"Malformed backup: {e}")

        self._check_consistency(groups, accounts, categories, transactions)
        self.db.replace_all(groups, accounts, categories, transactions)

    @staticmethod
    def _check_consistency(
        groups: list[AccountGroup],
        accounts: list[Account],
        categories: list[Category],
        transactions: list[Transaction],
    ) -> None:
        group_ids = {g.id for g in groups}
        account_ids = {a.id for a in accounts}
        category_ids = {c.id for c in categories}

        for account in accounts:
            if account.group_id is not None and account.group_id not in group_ids:
                raise errors.ValidationError(
                    f"Malformed backup: account {account.id} references unknown group"
                )
        for txn in transactions:
            if txn.account_id not in account_ids:
                raise errors.ValidationError(
                    f"Malformed backup: transaction {txn.id} references unknown account"
                )
            if txn.target_account_id is not None and txn.target_account_id not in account_ids:
                raise errors.ValidationError(
                    f"Malformed backup: transaction {txn.id} references unknown target account"
                )
            if txn.category_id is not None and txn.category_id not in category_ids:
                raise errors.ValidationError(
                    f"Malformed backup: transaction {txn.id} references unknown category"
                )

    def restore_backup(self, path: str | Path) -> None:
        """Restore the ledger from a backup file.

        Raises:
            ValidationError: If the file is not valid JSON or not a valid snapshot
        """
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise errors.ValidationError(f"Backup file is not valid JSON: {e}")
        if not isinstance(data, dict):
            raise errors.ValidationError("Backup file does not contain a ledger snapshot")
        self.restore_snapshot(data)
        logger.info(f"Restored ledger from {path}")
