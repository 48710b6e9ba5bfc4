"""Tests for balance aggregation."""

from datetime import date
from decimal import Decimal

import pytest
from contabil.domain.errors import AccountNotFoundError, ValidationError


def _post(journal_service, chart, entry_date, debit_code, credit_code, amount):
    return journal_service.post_entry(
        entry_date,
        f"{debit_code} = {credit_code}",
        [
            {"account_id": chart[debit_code].id, "debit": amount},
            {"account_id": chart[credit_code].id, "credit": amount},
        ],
    )


@pytest.fixture
def ledger(journal_service, chart):
    """Post a few entries across two months."""
    _post(journal_service, chart, date(2024, 1, 5), "5121", "1012", "10000.00")
    _post(journal_service, chart, date(2024, 1, 15), "411", "704", "2800.00")
    _post(journal_service, chart, date(2024, 1, 20), "5121", "411", "1000.00")
    _post(journal_service, chart, date(2024, 2, 10), "604", "5121", "250.50")
    return chart


class TestBalanceAsOf:
    """Tests for BalanceService.balance_as_of."""

    def test_debit_normal_account(self, balance_service, ledger):
        """Test an asset balance is debits minus credits."""
        snapshot = balance_service.balance_as_of(ledger["5121"].id, date(2024, 2, 29))

        assert snapshot.debit_total == Decimal("11000.00")
        assert snapshot.credit_total == Decimal("250.50")
        assert snapshot.net_balance == Decimal("10749.50")
        assert snapshot.as_of_date == date(2024, 2, 29)

    def test_credit_normal_account(self, balance_service, ledger):
        """Test a revenue balance is credits minus debits."""
        snapshot = balance_service.balance_as_of(ledger["704"].id, date(2024, 12, 31))
        assert snapshot.net_balance == Decimal("2800.00")

    def test_as_of_date_is_inclusive(self, balance_service, ledger):
        """Test lines dated on the as-of date are included."""
        before = balance_service.balance_as_of(ledger["411"].id, date(2024, 1, 19))
        on = balance_service.balance_as_of(ledger["411"].id, date(2024, 1, 20))

        assert before.net_balance == Decimal("2800.00")
        assert on.net_balance == Decimal("1800.00")

    def test_before_first_posting(self, balance_service, ledger):
        """Test a date before any posting gives a zero balance."""
        snapshot = balance_service.balance_as_of(ledger["5121"].id, date(2023, 12, 31))

        assert snapshot.debit_total == Decimal("0.00")
        assert snapshot.credit_total == Decimal("0.00")
        assert snapshot.net_balance == Decimal("0.00")

    def test_account_without_postings(self, balance_service, ledger):
        """Test an account never posted to has a zero balance."""
        snapshot = balance_service.balance_as_of(ledger["5311"].id, date(2024, 12, 31))
        assert snapshot.net_balance == Decimal("0.00")

    def test_unknown_account(self, balance_service, ledger):
        """Test an unknown account raises."""
        with pytest.raises(AccountNotFoundError):
            balance_service.balance_as_of(999, date(2024, 12, 31))

    def test_repeatable(self, balance_service, ledger):
        """Test two reads of the same ledger state agree."""
        first = balance_service.balance_as_of(ledger["5121"].id, date(2024, 12, 31))
        second = balance_service.balance_as_of(ledger["5121"].id, date(2024, 12, 31))
        assert first == second

    def test_inactive_account_keeps_history(
        self, balance_service, account_service, journal_service, chart
    ):
        """Test deactivating an account leaves past balances unchanged."""
        _post(journal_service, chart, date(2024, 1, 5), "5311", "1012", "300")
        _post(journal_service, chart, date(2024, 1, 6), "5121", "5311", "300")
        history = balance_service.balance_as_of(chart["5311"].id, date(2024, 1, 5))

        account_service.deactivate_account(chart["5311"].id)

        after = balance_service.balance_as_of(chart["5311"].id, date(2024, 1, 5))
        assert after.account.is_active is False
        assert (after.debit_total, after.credit_total) == (history.debit_total, history.credit_total)
        assert after.net_balance == Decimal("300.00")


class TestBalanceAsOfAll:
    """Tests for BalanceService.balance_as_of_all."""

    def test_all_accounts_included(self, balance_service, ledger):
        """Test every account gets a snapshot, ordered by code."""
        snapshots = balance_service.balance_as_of_all(date(2024, 12, 31))

        codes = [snapshot.account.code for snapshot in snapshots.values()]
        assert codes == sorted(codes)
        assert set(snapshots) == {account.id for account in ledger.values()}

    def test_matches_single_account(self, balance_service, ledger):
        """Test the bulk read agrees with the per-account read."""
        snapshots = balance_service.balance_as_of_all(date(2024, 1, 31))
        for account in ledger.values():
            single = balance_service.balance_as_of(account.id, date(2024, 1, 31))
            assert snapshots[account.id].net_balance == single.net_balance


class TestMovementBetween:
    """Tests for BalanceService.movement_between."""

    def test_movement_equals_balance_difference(self, balance_service, ledger):
        """Test period movement equals balance(end) minus balance(start - 1)."""
        movement = balance_service.movement_between(date(2024, 1, 16), date(2024, 2, 29))

        for account in ledger.values():
            end = balance_service.balance_as_of(account.id, date(2024, 2, 29))
            before = balance_service.balance_as_of(account.id, date(2024, 1, 15))
            assert movement[account.id].net_balance == end.net_balance - before.net_balance

    def test_inverted_range(self, balance_service, ledger):
        """Test an inverted period is rejected."""
        with pytest.raises(ValidationError):
            balance_service.movement_between(date(2024, 2, 1), date(2024, 1, 1))
