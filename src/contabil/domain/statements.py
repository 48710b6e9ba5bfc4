"""Financial statement domain service.

Trial balance and balance sheet use cumulative balances since the first
posting (stock view). The income statement uses movement inside the period
only (flow view), so consecutive periods add up to the enclosing one.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable

from contabil.database.base import Database
from contabil.domain.balance import BalanceService
from contabil.domain.entities import (
    AccountType,
    BalanceSheet,
    BalanceSnapshot,
    IncomeStatement,
    TrialBalance,
    TrialBalanceRow,
    ZERO,
)
from contabil.domain.errors import balance_sheet_mismatch, trial_balance_mismatch

logger = logging.getLogger(__name__)


def snapshot_to_row(snapshot: BalanceSnapshot) -> TrialBalanceRow:
    """Present a balance on its natural side.

    The excess of debits over credits goes to ``debit_balance`` and the
    opposite to ``credit_balance``; at most one of them is non-zero.
    """
    difference = snapshot.debit_total - snapshot.credit_total
    account = snapshot.account
    return TrialBalanceRow(
        account_id=account.id,
        code=account.code,
        name=account.name,
        account_type=account.account_type,
        debit_balance=difference if difference > ZERO else ZERO,
        credit_balance=-difference if difference < ZERO else ZERO,
        net_balance=snapshot.net_balance,
    )


def _has_postings(snapshot: BalanceSnapshot) -> bool:
    return snapshot.debit_total != ZERO or snapshot.credit_total != ZERO


def _reportable(snapshots: Iterable[BalanceSnapshot]) -> list[BalanceSnapshot]:
    """Keep active accounts and any account with postings, ordered by code."""
    selected = [s for s in snapshots if s.account.is_active or _has_postings(s)]
    return sorted(selected, key=lambda s: s.account.code)


def _rows_of_type(
    snapshots: Iterable[BalanceSnapshot], account_type: AccountType
) -> tuple[TrialBalanceRow, ...]:
    return tuple(
        snapshot_to_row(s) for s in snapshots if s.account.account_type == account_type
    )


def _total(rows: Iterable[TrialBalanceRow]) -> Decimal:
    return sum((row.net_balance for row in rows), ZERO)


class StatementService:
    """Service for building trial balance, income statement and balance sheet."""

    def __init__(self, db: Database):
        """Initialize statement service.

        Args:
            db: Database instance
        """
        self.db = db
        self.balances = BalanceService(db)

    def trial_balance(self, as_of_date: date) -> TrialBalance:
        """Build the trial balance as of a date.

        One row per account that is active or has postings up to the date,
        ordered by code. An imbalance is reported through ``is_balanced`` and
        ``discrepancy`` and logged, never raised.
        """
        snapshots = _reportable(self.balances.balance_as_of_all(as_of_date).values())
        rows = tuple(snapshot_to_row(s) for s in snapshots)

        trial_balance = TrialBalance(
            as_of_date=as_of_date,
            rows=rows,
            total_debit=sum((row.debit_balance for row in rows), ZERO),
            total_credit=sum((row.credit_balance for row in rows), ZERO),
        )
        if not trial_balance.is_balanced:
            logger.warning(
                trial_balance_mismatch(
                    as_of_date, trial_balance.total_debit, trial_balance.total_credit
                )
            )
        return trial_balance

    def income_statement(self, period_start: date, period_end: date) -> IncomeStatement:
        """Build the income statement for ``period_start``..``period_end`` (inclusive).

        Revenue and expense accounts contribute only their movement inside the
        period, not their lifetime balance.

        Raises:
            ValidationError: If period_start is after period_end
        """
        movement = self.balances.movement_between(period_start, period_end)
        snapshots = _reportable(movement.values())

        revenue_rows = _rows_of_type(snapshots, AccountType.REVENUE)
        expense_rows = _rows_of_type(snapshots, AccountType.EXPENSE)

        return IncomeStatement(
            period_start=period_start,
            period_end=period_end,
            revenue_accounts=revenue_rows,
            expense_accounts=expense_rows,
            total_revenue=_total(revenue_rows),
            total_expenses=_total(expense_rows),
        )

    def balance_sheet(self, as_of_date: date) -> BalanceSheet:
        """Build the balance sheet as of a date.

        Asset, liability and equity accounts contribute their cumulative
        balances. Revenue and expense balances that were never closed into an
        equity account appear as ``unclosed_earnings``; when the sheet still
        does not reconcile, ``is_balanced`` is False and a warning is logged.
        """
        all_snapshots = list(self.balances.balance_as_of_all(as_of_date).values())
        snapshots = _reportable(all_snapshots)

        assets = _rows_of_type(snapshots, AccountType.ASSET)
        liabilities = _rows_of_type(snapshots, AccountType.LIABILITY)
        equity = _rows_of_type(snapshots, AccountType.EQUITY)

        revenue = sum(
            (s.net_balance for s in all_snapshots if s.account.account_type == AccountType.REVENUE),
            ZERO,
        )
        expenses = sum(
            (s.net_balance for s in all_snapshots if s.account.account_type == AccountType.EXPENSE),
            ZERO,
        )

        balance_sheet = BalanceSheet(
            as_of_date=as_of_date,
            assets=assets,
            liabilities=liabilities,
            equity=equity,
            total_assets=_total(assets),
            total_liabilities=_total(liabilities),
            total_equity=_total(equity),
            unclosed_earnings=revenue - expenses,
        )
        if not balance_sheet.is_balanced:
            logger.warning(balance_sheet_mismatch(as_of_date, balance_sheet.discrepancy))
        return balance_sheet
