"""Tests for BackupService."""

import json
from datetime import date
from decimal import Decimal

import pytest

from pocketledger.domain.errors import ValidationError


def test_export_contents(backup_service, sample_ledger):
    """The snapshot lists every entity with amounts as strings."""
    snapshot = backup_service.export_snapshot()

    assert snapshot["version"] == "1"
    assert len(snapshot["groups"]) == 1
    assert len(snapshot["accounts"]) == 3
    assert len(snapshot["categories"]) == 4
    assert len(snapshot["transactions"]) == 4
    assert {t["amount"] for t in snapshot["transactions"]} == {"2500.00", "-900.00", "-42.10", "-500.00"}
    sequences = [t["sequence"] for t in snapshot["transactions"]]
    assert sequences == sorted(sequences)


def test_snapshot_is_json_serializable(backup_service, sample_ledger):
    """The snapshot survives a JSON dump."""
    json.dumps(backup_service.export_snapshot())


def test_restore_reproduces_balances(backup_service, balance_service, account_service, sample_ledger, tmp_path):
    """Restoring an export gives back identical balances and IDs."""
    path = backup_service.write_backup(tmp_path / "ledger.json")
    before = balance_service.all_account_balances()
    total_before = balance_service.total_balance()

    account_service.delete_account(sample_ledger["wallet"])
    backup_service.restore_backup(path)

    assert balance_service.all_account_balances() == before
    assert balance_service.total_balance() == total_before
    assert account_service.get_account(sample_ledger["wallet"]).name == "Wallet"


def test_restore_replaces_existing_data(backup_service, account_service, category_service, sample_ledger):
    """Anything not in the snapshot is gone after a restore."""
    snapshot = backup_service.export_snapshot()
    extra = account_service.create_account(name="Extra")
    category_service.create_category("Extra")

    backup_service.restore_snapshot(snapshot)

    assert account_service.get_account(extra) is None
    assert category_service.get_category_by_name("Extra") is None


def test_restored_sequence_continues(backup_service, transaction_service, sample_ledger):
    """New transactions after a restore still sort after the restored ones."""
    snapshot = backup_service.export_snapshot()
    backup_service.restore_snapshot(snapshot)

    txn_id = transaction_service.create_posting(sample_ledger["wallet"], Decimal("1"), "income", date(2024, 1, 4))

    highest = max(t["sequence"] for t in snapshot["transactions"])
    assert transaction_service.get_transaction(txn_id).sequence == highest + 1


def test_restore_missing_key(backup_service, sample_ledger, account_service):
    """A snapshot missing a section is rejected before anything is written."""
    snapshot = backup_service.export_snapshot()
    del snapshot["accounts"]

    with pytest.raises(ValidationError):
        backup_service.restore_snapshot(snapshot)
    assert account_service.get_account(sample_ledger["wallet"]) is not None


def test_restore_dangling_reference(backup_service, sample_ledger):
    """Transactions pointing at unknown accounts are rejected."""
    snapshot = backup_service.export_snapshot()
    snapshot["accounts"] = [a for a in snapshot["accounts"] if a["name"] != "Wallet"]

    with pytest.raises(ValidationError, match="unknown account"):
        backup_service.restore_snapshot(snapshot)


def test_restore_bad_amount(backup_service, sample_ledger):
    """Unparseable amounts are rejected."""
    snapshot = backup_service.export_snapshot()
    snapshot["transactions"][0]["amount"] = "lots"

    with pytest.raises(ValidationError):
        backup_service.restore_snapshot(snapshot)


def test_restore_invalid_json(backup_service, tmp_path):
    """A file that is not JSON is rejected."""
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ValidationError):
        backup_service.restore_backup(path)


def test_restore_non_object_json(backup_service, tmp_path):
    """A JSON document that is not an object is rejected."""
    path = tmp_path / "list.json"
    path.write_text("[]", encoding="utf-8")

    with pytest.raises(ValidationError):
        backup_service.restore_backup(path)


def test_restore_binary_file(backup_service, account_service, sample_ledger, tmp_path):
    """A file that is not UTF-8 text is rejected and the ledger is untouched."""
    path = tmp_path / "binary.json"
    path.write_bytes(b"\xff\xfe\x00bad")

    with pytest.raises(ValidationError, match="not valid JSON"):
        backup_service.restore_backup(path)
    assert len(account_service.list_accounts()) == 3


def test_restore_oversized_amount(backup_service, sample_ledger):
    """Amounts the store cannot hold exactly are refused."""
    snapshot = backup_service.export_snapshot()
    snapshot["transactions"][0]["amount"] = "12345678901234567.89"

    with pytest.raises(ValidationError):
        backup_service.restore_snapshot(snapshot)
