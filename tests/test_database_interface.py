"""Tests for Database interface returning domain models."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from contabil.database.factories import create_database, create_sqlite_database
from contabil.domain import entities
from contabil.domain.entities import AccountType, JournalLineDraft
from contabil.domain.errors import (
    AccountNotFoundError,
    DuplicateCodeError,
    EntryAlreadyReversedError,
    InvalidAccountError,
    NonZeroBalanceError,
)


def _lines(debit_id, credit_id, amount):
    return [
        JournalLineDraft(account_id=debit_id, debit_amount=Decimal(amount)),
        JournalLineDraft(account_id=credit_id, credit_amount=Decimal(amount)),
    ]


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_get_account_returns_domain_model(self, temp_db):
        """Test that get_account returns a domain Account entity."""
        account_id = temp_db.create_account(code="411", name="Clienți", account_type=AccountType.ASSET)

        account = temp_db.get_account(account_id)

        assert isinstance(account, entities.Account)
        assert account.id == account_id
        assert account.code == "411"
        assert account.account_type == AccountType.ASSET
        assert isinstance(account.created_at, datetime)

    def test_create_account_duplicate_code(self, temp_db):
        """Test the unique index on code surfaces as DuplicateCodeError."""
        temp_db.create_account(code="411", name="Clienți", account_type=AccountType.ASSET)

        with pytest.raises(DuplicateCodeError):
            temp_db.create_account(code="411", name="Alt", account_type=AccountType.ASSET)

    def test_post_journal_entry_returns_domain_model(self, temp_db):
        """Test that post_journal_entry returns a domain JournalEntry."""
        bank = temp_db.create_account(code="5121", name="Banca", account_type=AccountType.ASSET)
        capital = temp_db.create_account(code="1012", name="Capital", account_type=AccountType.EQUITY)

        entry = temp_db.post_journal_entry(
            entry_date=date(2024, 1, 5),
            description="Aport",
            lines=_lines(bank, capital, "100.00"),
        )

        assert isinstance(entry, entities.JournalEntry)
        assert entry.entry_number == "JE-2024-0001"
        assert all(isinstance(line, entities.JournalEntryLine) for line in entry.lines)
        assert temp_db.get_account_line_count(bank) == 1

    def test_post_journal_entry_rechecks_accounts(self, temp_db):
        """Test an account deactivated after validation cannot be posted to."""
        bank = temp_db.create_account(code="5121", name="Banca", account_type=AccountType.ASSET)
        capital = temp_db.create_account(code="1012", name="Capital", account_type=AccountType.EQUITY)
        temp_db.set_account_active(bank, False)

        with pytest.raises(InvalidAccountError):
            temp_db.post_journal_entry(
                entry_date=date(2024, 1, 5),
                description="Aport",
                lines=_lines(bank, capital, "100.00"),
            )

        # The rolled back posting returned its number
        temp_db.set_account_active(bank, True)
        entry = temp_db.post_journal_entry(
            entry_date=date(2024, 1, 5),
            description="Aport",
            lines=_lines(bank, capital, "100.00"),
        )
        assert entry.entry_number == "JE-2024-0001"

    def test_deactivate_account_rolls_back_when_balance_open(self, temp_db):
        """Test the cleared active flag is rolled back when the account has a balance."""
        bank = temp_db.create_account(code="5121", name="Banca", account_type=AccountType.ASSET)
        capital = temp_db.create_account(code="1012", name="Capital", account_type=AccountType.EQUITY)
        temp_db.post_journal_entry(
            entry_date=date(2024, 1, 5),
            description="Aport",
            lines=_lines(bank, capital, "100.00"),
        )

        with pytest.raises(NonZeroBalanceError) as excinfo:
            temp_db.deactivate_account(capital)

        assert excinfo.value.net_balance == Decimal("100.00")
        assert temp_db.get_account(capital).is_active is True

        with pytest.raises(AccountNotFoundError):
            temp_db.deactivate_account(999)

    def test_second_reversal_rejected_by_storage(self, temp_db):
        """Test the storage layer allows a single reversal per entry."""
        bank = temp_db.create_account(code="5121", name="Banca", account_type=AccountType.ASSET)
        capital = temp_db.create_account(code="1012", name="Capital", account_type=AccountType.EQUITY)
        original = temp_db.post_journal_entry(date(2024, 1, 5), "Aport", _lines(bank, capital, "10"))
        first = temp_db.post_journal_entry(
            date(2024, 1, 6), "Stornare", _lines(capital, bank, "10"), reverses=original.entry_number
        )

        with pytest.raises(EntryAlreadyReversedError) as excinfo:
            temp_db.post_journal_entry(
                date(2024, 1, 7), "Stornare", _lines(capital, bank, "10"), reverses=original.entry_number
            )

        assert excinfo.value.reversed_by == first.entry_number
        assert temp_db.get_reversal_of(original.entry_number) == first.entry_number

    def test_get_account_activity_single_read(self, temp_db):
        """Test activity covers every account, with zeros for unused ones."""
        bank = temp_db.create_account(code="5121", name="Banca", account_type=AccountType.ASSET)
        capital = temp_db.create_account(code="1012", name="Capital", account_type=AccountType.EQUITY)
        temp_db.create_account(code="5311", name="Casa", account_type=AccountType.ASSET)
        temp_db.post_journal_entry(date(2024, 1, 5), "Aport", _lines(bank, capital, "100.00"))
        temp_db.post_journal_entry(date(2024, 2, 5), "Aport", _lines(bank, capital, "50.00"))

        activity = temp_db.get_account_activity(end_date=date(2024, 1, 31))

        assert [a.account.code for a in activity] == ["1012", "5121", "5311"]
        by_code = {a.account.code: a for a in activity}
        assert by_code["5121"].debit_total == Decimal("100.00")
        assert by_code["5121"].line_count == 1
        assert by_code["5311"].line_count == 0


def test_create_database_prefers_url(tmp_path, monkeypatch):
    """Test an explicit URL wins over the SQLite path settings."""
    monkeypatch.delenv("CONTABIL_DATABASE_URL", raising=False)
    db_file = tmp_path / "ledger.db"

    db = create_database(database_url=f"sqlite:///{db_file}")
    try:
        assert db.database_url == f"sqlite:///{db_file}"
    finally:
        db.disconnect()


def test_create_sqlite_database_from_env(tmp_path, monkeypatch):
    """Test CONTABIL_DB_PATH selects the SQLite file."""
    db_file = tmp_path / "env.db"
    monkeypatch.setenv("CONTABIL_DB_PATH", str(db_file))

    db = create_sqlite_database()
    try:
        assert db.database_url == f"sqlite:///{db_file}"
        assert db_file.exists()
    finally:
        db.disconnect()
