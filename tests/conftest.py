"""Shared pytest fixtures for pocketledger tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from pocketledger.database.factories import create_sqlite_database
from pocketledger.domain.account import AccountService
from pocketledger.domain.balance import BalanceService
from pocketledger.domain.backup import BackupService
from pocketledger.domain.category import CategoryService
from pocketledger.domain.group import GroupService
from pocketledger.domain.transaction import TransactionService
from pocketledger.domain.transfer import TransferService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def group_service(temp_db):
    """Create a GroupService with a temporary database."""
    return GroupService(temp_db)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def transfer_service(temp_db):
    """Create a TransferService with a temporary database."""
    return TransferService(temp_db)


@pytest.fixture
def balance_service(temp_db):
    """Create a BalanceService with a temporary database."""
    return BalanceService(temp_db)


@pytest.fixture
def backup_service(temp_db):
    """Create a BackupService with a temporary database."""
    return BackupService(temp_db)


@pytest.fixture
def bank(group_service, account_service):
    """Group "Bank" owning empty "Checking" and "Savings" accounts."""
    group_id = group_service.create_group(name="Bank")
    checking_id = account_service.create_account(name="Checking", group_id=group_id)
    savings_id = account_service.create_account(name="Savings", group_id=group_id)
    return {"group": group_id, "checking": checking_id, "savings": savings_id}


@pytest.fixture
def wallet(account_service):
    """Groupless cash account."""
    return account_service.create_account(name="Wallet", kind="cash")


@pytest.fixture
def sample_categories(category_service):
    """Create a few categories and return their IDs by name."""
    return {
        name: category_service.create_category(name)
        for name in ("Salary", "Groceries", "Rent", "Transfer")
    }


@pytest.fixture
def sample_ledger(bank, wallet, sample_categories, transaction_service, transfer_service):
    """Populate the bank fixture with postings and a transfer."""
    transaction_service.create_posting(
        bank["checking"], Decimal("2500.00"), "income", date(2024, 1, 1),
        category_id=sample_categories["Salary"],
    )
    transaction_service.create_posting(
        bank["checking"], Decimal("900.00"), "expense", date(2024, 1, 3),
        category_id=sample_categories["Rent"],
    )
    transaction_service.create_posting(
        wallet, Decimal("42.10"), "expense", date(2024, 1, 4),
        category_id=sample_categories["Groceries"],
    )
    transfer_service.create_transfer(
        bank["checking"], bank["savings"], Decimal("500.00"), date(2024, 1, 5),
        note="Monthly savings",
    )
    return {**bank, "wallet": wallet, "categories": sample_categories}


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
