"""Domain model entities for contabil.

These are pure data classes representing accounting concepts, independent of
the database schema. Monetary values are ``Decimal`` with two places; the
storage layer keeps them as integer minor units (bani).
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional

from contabil.domain.errors import (
    IntegrityError,
    balance_sheet_mismatch,
    trial_balance_mismatch,
)

ZERO = Decimal("0.00")


class AccountType(str, Enum):
    """Chart of accounts account types."""

    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"
    REVENUE = "revenue"
    EXPENSE = "expense"

    @property
    def is_debit_normal(self) -> bool:
        """True if the account customarily accumulates on the debit side."""
        return self in (AccountType.ASSET, AccountType.EXPENSE)

    @property
    def is_flow(self) -> bool:
        """True for revenue and expense accounts (reset each period)."""
        return self in (AccountType.REVENUE, AccountType.EXPENSE)

    def net(self, debit_total: Decimal, credit_total: Decimal) -> Decimal:
        """Apply the normal balance side to a pair of totals."""
        if self.is_debit_normal:
            return debit_total - credit_total
        return credit_total - debit_total


@dataclass(frozen=True)
class Account:
    """Chart of accounts entry."""

    id: int
    code: str
    name: str
    account_type: AccountType
    parent_id: Optional[int]
    description: Optional[str]
    is_active: bool
    created_at: datetime


@dataclass(frozen=True)
class AccountTreeNode:
    """Account with its nested children for hierarchical display."""

    id: int
    code: str
    name: str
    account_type: AccountType
    is_active: bool
    children: tuple["AccountTreeNode", ...] = ()


@dataclass(frozen=True)
class JournalLineDraft:
    """A line submitted for posting, before it belongs to an entry."""

    account_id: int
    debit_amount: Decimal = ZERO
    credit_amount: Decimal = ZERO
    description: Optional[str] = None


@dataclass(frozen=True)
class JournalEntryLine:
    """Posted journal entry line."""

    account_id: int
    account_code: str
    account_name: str
    description: Optional[str]
    debit_amount: Decimal
    credit_amount: Decimal
    line_order: int


@dataclass(frozen=True)
class JournalEntry:
    """Posted journal entry with its lines."""

    entry_number: str
    date: date
    description: str
    reference_document: Optional[str]
    lines: tuple[JournalEntryLine, ...]
    created_at: datetime
    reverses: Optional[str] = None

    @property
    def total_debit(self) -> Decimal:
        return sum((line.debit_amount for line in self.lines), ZERO)

    @property
    def total_credit(self) -> Decimal:
        return sum((line.credit_amount for line in self.lines), ZERO)

    @property
    def is_balanced(self) -> bool:
        return self.total_debit == self.total_credit


@dataclass(frozen=True)
class AccountActivity:
    """Raw debit/credit totals for one account over a date window."""

    account: Account
    debit_total: Decimal
    credit_total: Decimal
    line_count: int


@dataclass(frozen=True)
class BalanceSnapshot:
    """Accumulated balance of an account as of a date."""

    account: Account
    as_of_date: date
    debit_total: Decimal
    credit_total: Decimal

    @property
    def net_balance(self) -> Decimal:
        return self.account.account_type.net(self.debit_total, self.credit_total)


@dataclass(frozen=True)
class TrialBalanceRow:
    """One account's line in a trial balance or statement section."""

    account_id: int
    code: str
    name: str
    account_type: AccountType
    debit_balance: Decimal
    credit_balance: Decimal
    net_balance: Decimal


@dataclass(frozen=True)
class TrialBalance:
    """Trial balance as of a date."""

    as_of_date: date
    rows: tuple[TrialBalanceRow, ...]
    total_debit: Decimal
    total_credit: Decimal

    @property
    def discrepancy(self) -> Decimal:
        return self.total_debit - self.total_credit

    @property
    def is_balanced(self) -> bool:
        return self.discrepancy == ZERO

    def ensure_balanced(self) -> None:
        """Raise IntegrityError if debit and credit balances differ."""
        if not self.is_balanced:
            raise IntegrityError(
                trial_balance_mismatch(self.as_of_date, self.total_debit, self.total_credit)
            )


@dataclass(frozen=True)
class IncomeStatement:
    """Revenue and expense movement within a period."""

    period_start: date
    period_end: date
    revenue_accounts: tuple[TrialBalanceRow, ...]
    expense_accounts: tuple[TrialBalanceRow, ...]
    total_revenue: Decimal
    total_expenses: Decimal

    @property
    def net_income(self) -> Decimal:
        return self.total_revenue - self.total_expenses


@dataclass(frozen=True)
class BalanceSheet:
    """Cumulative asset, liability and equity positions at a date."""

    as_of_date: date
    assets: tuple[TrialBalanceRow, ...]
    liabilities: tuple[TrialBalanceRow, ...]
    equity: tuple[TrialBalanceRow, ...]
    total_assets: Decimal
    total_liabilities: Decimal
    total_equity: Decimal
    unclosed_earnings: Decimal = field(default=ZERO)

    @property
    def discrepancy(self) -> Decimal:
        return self.total_assets - (
            self.total_liabilities + self.total_equity + self.unclosed_earnings
        )

    @property
    def is_balanced(self) -> bool:
        return self.discrepancy == ZERO

    def ensure_balanced(self) -> None:
        """Raise IntegrityError if assets differ from liabilities plus equity."""
        if not self.is_balanced:
            raise IntegrityError(balance_sheet_mismatch(self.as_of_date, self.discrepancy))
