"""Shared pytest fixtures for checkbook tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
from pathlib import Path
import pytest

from checkbook.database.factories import create_sqlite_database
from checkbook.domain.account import AccountService
from checkbook.domain.csv_import import CSVImportService
from checkbook.domain.entities import ParsedRecord, Transaction
from checkbook.domain.transaction import TransactionService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def import_service(temp_db):
    """Create a CSVImportService with a temporary database."""
    return CSVImportService(temp_db)


@pytest.fixture
def sample_account(account_service):
    """Create a sample account for testing."""
    account_id = account_service.create_account(name="Test Account")
    return account_service.get_account(account_id)


@pytest.fixture
def sample_transactions(transaction_service, sample_account):
    """Create a few ledger entries in the sample account."""
    ids = [
        transaction_service.create_transaction(
            account_id=sample_account.id,
            date=date(2024, 3, 1),
            description="Paycheck",
            deposit=Decimal("1500.00"),
        ),
        transaction_service.create_transaction(
            account_id=sample_account.id,
            date=date(2024, 3, 11),
            code="1042",
            description="Hardware store",
            withdrawal=Decimal("20.00"),
        ),
        transaction_service.create_transaction(
            account_id=sample_account.id,
            date=date(2024, 3, 15),
            description="Groceries",
            withdrawal=Decimal("64.37"),
            reconciled=True,
        ),
    ]
    return [transaction_service.get_transaction(txn_id) for txn_id in ids]


def make_transaction(
    txn_id: int,
    txn_date: date,
    amount: str,
    reconciled: bool = False,
    account_id: int = 1,
    description: str = "",
) -> Transaction:
    """Build a Transaction entity from a signed amount."""
    value = Decimal(amount)
    return Transaction(
        id=txn_id,
        account_id=account_id,
        date=txn_date,
        code="",
        description=description,
        deposit=value if value > 0 else Decimal("0"),
        withdrawal=-value if value < 0 else Decimal("0"),
        reconciled=reconciled,
    )


def make_record(txn_date: date, amount: str, account_id: int = 1, description: str = "") -> ParsedRecord:
    """Build a ParsedRecord from a signed amount."""
    value = Decimal(amount)
    return ParsedRecord(
        account_id=account_id,
        date=txn_date,
        code="",
        description=description,
        deposit=value if value > 0 else Decimal("0"),
        withdrawal=-value if value < 0 else Decimal("0"),
    )


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
