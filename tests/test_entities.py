"""Tests for domain entities."""

import pytest
from datetime import datetime, date, UTC
from decimal import Decimal

from contabil.domain.entities import (
    Account,
    AccountType,
    BalanceSheet,
    BalanceSnapshot,
    IncomeStatement,
    JournalEntry,
    JournalEntryLine,
    TrialBalance,
)
from contabil.domain.errors import IntegrityError


def _account(account_type=AccountType.ASSET):
    return Account(
        id=1,
        code="411",
        name="Clienți",
        account_type=account_type,
        parent_id=None,
        description=None,
        is_active=True,
        created_at=datetime.now(UTC),
    )


def _line(code, debit, credit, line_order):
    return JournalEntryLine(
        account_id=line_order,
        account_code=code,
        account_name=code,
        description=None,
        debit_amount=Decimal(debit),
        credit_amount=Decimal(credit),
        line_order=line_order,
    )


class TestAccountType:
    """Tests for AccountType normal balance sides."""

    @pytest.mark.parametrize(
        "account_type,expected",
        [
            (AccountType.ASSET, Decimal("70.00")),
            (AccountType.EXPENSE, Decimal("70.00")),
            (AccountType.LIABILITY, Decimal("-70.00")),
            (AccountType.EQUITY, Decimal("-70.00")),
            (AccountType.REVENUE, Decimal("-70.00")),
        ],
    )
    def test_net(self, account_type, expected):
        """Test the net balance follows the normal side."""
        assert account_type.net(Decimal("100.00"), Decimal("30.00")) == expected

    def test_flow_accounts(self):
        """Test only revenue and expense are flow accounts."""
        assert {t for t in AccountType if t.is_flow} == {AccountType.REVENUE, AccountType.EXPENSE}

    def test_from_value(self):
        """Test types are stored by their lowercase value."""
        assert AccountType("liability") is AccountType.LIABILITY


class TestAccount:
    """Tests for Account entity."""

    def test_account_immutability(self):
        """Test that Account entities are immutable."""
        account = _account()
        with pytest.raises(Exception):  # dataclass frozen raises FrozenInstanceError
            account.name = "New Name"


class TestJournalEntry:
    """Tests for JournalEntry entity."""

    def test_totals(self):
        """Test totals sum the lines."""
        entry = JournalEntry(
            entry_number="JE-2024-0001",
            date=date(2024, 1, 15),
            description="Factură",
            reference_document="F-001",
            lines=(
                _line("411", "3332.00", "0", 1),
                _line("704", "0", "2800.00", 2),
                _line("4427", "0", "532.00", 3),
            ),
            created_at=datetime.now(UTC),
        )

        assert entry.total_debit == Decimal("3332.00")
        assert entry.total_credit == Decimal("3332.00")
        assert entry.is_balanced
        assert entry.reverses is None


class TestBalanceSnapshot:
    """Tests for BalanceSnapshot entity."""

    def test_net_balance_uses_account_type(self):
        """Test the net balance sign depends on the account type."""
        asset = BalanceSnapshot(_account(), date(2024, 1, 31), Decimal("50.00"), Decimal("20.00"))
        revenue = BalanceSnapshot(
            _account(AccountType.REVENUE), date(2024, 1, 31), Decimal("50.00"), Decimal("20.00")
        )

        assert asset.net_balance == Decimal("30.00")
        assert revenue.net_balance == Decimal("-30.00")


class TestReports:
    """Tests for report reconciliation helpers."""

    def test_trial_balance_discrepancy(self):
        """Test an unbalanced trial balance is flagged and raises on demand."""
        trial_balance = TrialBalance(
            as_of_date=date(2024, 1, 31),
            rows=(),
            total_debit=Decimal("100.00"),
            total_credit=Decimal("90.00"),
        )

        assert trial_balance.discrepancy == Decimal("10.00")
        assert not trial_balance.is_balanced
        with pytest.raises(IntegrityError, match="debits=100.00, credits=90.00"):
            trial_balance.ensure_balanced()

    def test_balance_sheet_with_unclosed_earnings(self):
        """Test unclosed earnings count on the equity side."""
        sheet = BalanceSheet(
            as_of_date=date(2024, 12, 31),
            assets=(),
            liabilities=(),
            equity=(),
            total_assets=Decimal("1500.00"),
            total_liabilities=Decimal("200.00"),
            total_equity=Decimal("1000.00"),
            unclosed_earnings=Decimal("300.00"),
        )

        assert sheet.is_balanced
        sheet.ensure_balanced()

    def test_balance_sheet_discrepancy(self):
        """Test an unbalanced sheet raises on demand."""
        sheet = BalanceSheet(
            as_of_date=date(2024, 12, 31),
            assets=(),
            liabilities=(),
            equity=(),
            total_assets=Decimal("1500.00"),
            total_liabilities=Decimal("200.00"),
            total_equity=Decimal("1000.00"),
        )

        assert sheet.discrepancy == Decimal("300.00")
        with pytest.raises(IntegrityError):
            sheet.ensure_balanced()

    def test_net_income(self):
        """Test net income is revenue minus expenses."""
        income = IncomeStatement(
            period_start=date(2024, 1, 1),
            period_end=date(2024, 1, 31),
            revenue_accounts=(),
            expense_accounts=(),
            total_revenue=Decimal("1000.00"),
            total_expenses=Decimal("1250.50"),
        )
        assert income.net_income == Decimal("-250.50")
