"""Shared pytest fixtures for contabil tests."""

import tempfile
import os
import pytest

from contabil.database.factories import create_sqlite_database
from contabil.domain.account import AccountService
from contabil.domain.balance import BalanceService
from contabil.domain.invoices import InvoicePostingService
from contabil.domain.journal import JournalService
from contabil.domain.statements import StatementService


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
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def journal_service(temp_db):
    """Create a JournalService with a temporary database."""
    return JournalService(temp_db)


@pytest.fixture
def balance_service(temp_db):
    """Create a BalanceService with a temporary database."""
    return BalanceService(temp_db)


@pytest.fixture
def statement_service(temp_db):
    """Create a StatementService with a temporary database."""
    return StatementService(temp_db)


@pytest.fixture
def invoice_service(temp_db):
    """Create an InvoicePostingService with a temporary database."""
    return InvoicePostingService(temp_db)


@pytest.fixture
def chart(account_service):
    """Create a small chart of accounts and return it keyed by code."""
    definitions = [
        ("1012", "Capital subscris vărsat", "equity"),
        ("401", "Furnizori", "liability"),
        ("411", "Clienți", "asset"),
        ("4426", "TVA deductibilă", "asset"),
        ("4427", "TVA colectată", "liability"),
        ("5121", "Conturi la bănci în lei", "asset"),
        ("5311", "Casa în lei", "asset"),
        ("604", "Cheltuieli privind materialele nestocate", "expense"),
        ("626", "Cheltuieli poștale și taxe de telecomunicații", "expense"),
        ("704", "Venituri din servicii prestate", "revenue"),
    ]
    return {
        code: account_service.create_account(code=code, name=name, account_type=account_type)
        for code, name, account_type in definitions
    }


@pytest.fixture
def default_chart(account_service):
    """Create the default chart of accounts used by init-accounts."""
    from contabil.cli.commands.init_accounts import INITIAL_ACCOUNTS

    ids_by_code = {}
    for code, name, account_type, parent_code in INITIAL_ACCOUNTS:
        account = account_service.create_account(
            code=code,
            name=name,
            account_type=account_type,
            parent_id=ids_by_code.get(parent_code),
        )
        ids_by_code[code] = account.id
    return ids_by_code


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
