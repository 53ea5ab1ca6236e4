"""CSV import domain service."""

import csv
import io
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Optional
from uuid import UUID

from pocketledger.database.base import Database
from pocketledger.domain import errors
from pocketledger.domain.account import AccountService
from pocketledger.domain.category import CategoryService
from pocketledger.domain.transaction import TransactionService
from pocketledger.utils.amount_parser import parse_amount
from pocketledger.utils.date_parser import parse_date
from pocketledger.utils.resolver import resolve_account

logger = logging.getLogger(__name__)

# Accepted header names per field, in order of preference. Bank exports
# commonly use the German names.
COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    "date": ("date", "datum", "buchungsdatum", "valutadatum"),
    "account": ("account", "konto", "accountname"),
    "amount": ("amount", "betrag", "amount_eur"),
    "category": ("category", "hauptkategorie", "kategorie"),
    "name": ("name", "payee"),
    "purpose": ("purpose", "usage", "zweck", "verwendungszweck", "verwendung"),
}

MIN_YEAR = 1970


def _clean_text(value: Optional[str]) -> str:
    return " ".join((value or "").split())


def build_usage(name: Optional[str], purpose: Optional[str]) -> Optional[str]:
    """Join payee name and purpose into one usage text.

    The purpose is left out when it repeats the name. Returns None when both
    are empty.
    """
    parts = []
    cleaned_name = _clean_text(name)
    cleaned_purpose = _clean_text(purpose)
    if cleaned_name:
        parts.append(cleaned_name)
    if cleaned_purpose and cleaned_purpose != cleaned_name:
        parts.append(cleaned_purpose)
    return " ".join(parts) or None


def match_category(
    usage: Optional[str], rules: Sequence[tuple[str, str]]
) -> Optional[str]:
    """Return the category of the first rule whose text occurs in ``usage``.

    Matching ignores case.
    """
    if not usage:
        return None
    lowered = usage.lower()
    for pattern, category in rules:
        if pattern and pattern.lower() in lowered:
            return category
    return None


def detect_delimiter(header_line: str) -> str:
    """Semicolon if the header holds more semicolons than commas, else comma."""
    return ";" if header_line.count(";") > header_line.count(",") else ","


def map_columns(fieldnames: Sequence[str]) -> dict[str, str]:
    """Map each known field to the CSV header that carries it."""
    normalized = {name.strip().lower(): name for name in fieldnames if name}
    columns = {}
    for field, aliases in COLUMN_ALIASES.items():
        for alias in aliases:
            if alias in normalized:
                columns[field] = normalized[alias]
                break
    return columns


class CSVImportService:
    """Service for importing bank CSV exports as postings."""

    def __init__(self, db: Database):
        """Initialize CSV import service.

        Args:
            db: Database instance
        """
        self.db = db
        self.transaction_service = TransactionService(db)
        self.account_service = AccountService(db)
        self.category_service = CategoryService(db)

    def import_csv(
        self,
        csv_file_path: str | Path,
        account_id: Optional[UUID] = None,
        category_rules: Optional[Sequence[tuple[str, str]]] = None,
    ) -> dict[str, Any]:
        """Import postings from a CSV file.

        Each row becomes an income (amount >= 0) or expense posting. The
        account comes from ``account_id`` when given, else from the row's
        account column, resolved by name. The usage text joins the payee
        name and purpose. A category rule whose text occurs in the usage
        overrides the row's category column; categories that do not exist
        yet are created.

        A row is skipped as a duplicate when its account already has a
        transaction on the same day with the same amount and usage. This
        includes rows imported earlier from the same file.

        Args:
            csv_file_path: Path to CSV file
            account_id: Optional account receiving every row
            category_rules: Optional ``(text, category name)`` pairs, first match wins

        Returns:
            Dict with import statistics:
            - imported: number of postings created
            - skipped: number of duplicate rows skipped
            - errors: list of per-row error messages

        Raises:
            FileNotFoundError: If CSV file doesn't exist
            NotFoundError: If ``account_id`` doesn't exist
            ValidationError: If the file is not UTF-8 text, is empty or lacks required columns
        """
        csv_path = Path(csv_file_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_file_path}")
        if account_id is not None:
            self.account_service.require_account(account_id)

        try:
            text = csv_path.read_text(encoding="utf-8-sig")
        except UnicodeDecodeError as e:
            raise errors.ValidationError(f"CSV file is not UTF-8 text: {e}")

        header_line = text.split("\n", 1)[0]
        if not header_line.strip():
            raise errors.ValidationError("CSV file is empty")

        reader = csv.DictReader(
            io.StringIO(text, newline=""), delimiter=detect_delimiter(header_line)
        )
        columns = map_columns(reader.fieldnames or [])
        required = ["date", "amount"] if account_id is not None else ["date", "account", "amount"]
        missing = [field for field in required if field not in columns]
        if missing:
            raise errors.ValidationError(f"CSV file missing required columns: {', '.join(missing)}")

        rules = list(category_rules or [])
        account_ids: dict[str, UUID] = {}
        category_ids: dict[str, UUID] = {}
        imported = 0
        skipped = 0
        row_errors = []

        with self.db.exclusive():
            for row_num, row in enumerate(reader, start=2):
                values = {field: (row.get(header) or "").strip() for field, header in columns.items()}
                try:
                    if not values["date"]:
                        raise errors.ValidationError("Missing date")
                    if not values["amount"]:
                        raise errors.ValidationError("Missing amount")

                    txn_date = parse_date(values["date"])
                    if txn_date.year < MIN_YEAR:
                        raise errors.ValidationError(f"Date {txn_date} is before {MIN_YEAR}")
                    amount = parse_amount(values["amount"])

                    if account_id is not None:
                        row_account_id = account_id
                    else:
                        row_account_id = self._account_id(values["account"], account_ids)

                    usage = build_usage(values.get("name"), values.get("purpose"))
                    if self.db.transaction_exists(row_account_id, txn_date, amount, usage):
                        logger.debug(f"Row {row_num}: duplicate of an existing transaction, skipped")
                        skipped += 1
                        continue

                    category_name = match_category(usage, rules) or values.get("category")
                    category_id = (
                        self._category_id(category_name, category_ids) if category_name else None
                    )

                    self.transaction_service.create_posting(
                        row_account_id,
                        amount,
                        "income" if amount >= 0 else "expense",
                        txn_date,
                        usage=usage,
                        category_id=category_id,
                    )
                    imported += 1
                except errors.StoreError:
                    raise
                except ValueError as e:
                    row_errors.append(f"Row {row_num}: {e}")

        logger.info(
            f"Imported {imported} transactions from {csv_path}, "
            f"skipped {skipped} duplicates, {len(row_errors)} errors"
        )
        return {
            "imported": imported,
            "skipped": skipped,
            "errors": row_errors,
        }

    def _account_id(self, name: str, cache: dict[str, UUID]) -> UUID:
        if not name:
            raise errors.ValidationError("Missing account")
        if name not in cache:
            cache[name] = resolve_account(self.account_service, name)
        return cache[name]

    def _category_id(self, name: str, cache: dict[str, UUID]) -> UUID:
        if name not in cache:
            existing = self.category_service.get_category_by_name(name)
            if existing is not None:
                cache[name] = existing.id
            else:
                cache[name] = self.category_service.create_category(name)
                logger.info(f"Created category '{name}' during import")
        return cache[name]
