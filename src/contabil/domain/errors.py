"""Shared domain error messages and error types."""

from datetime import date
from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as a second reversal of the same entry."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class IntegrityError(DomainError):
    """Ledger data fails a reconciliation check (reports only)."""


class DuplicateCodeError(ValidationError):
    """Account code already used by another account."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Account with code '{code}' already exists")


class CyclicHierarchyError(ValidationError):
    """Parent reference is missing or would create a cycle."""


class InsufficientLinesError(ValidationError):
    """Journal entry has fewer than two lines."""

    def __init__(self, line_count: int):
        self.line_count = line_count
        super().__init__(
            f"Journal entry needs at least 2 lines, got {line_count}"
        )


class InvalidAccountError(ValidationError):
    """Line references an unknown or inactive account."""

    def __init__(self, account_id: int, reason: str = "does not exist"):
        self.account_id = account_id
        super().__init__(f"Account {account_id} {reason}")


class InvalidLineError(ValidationError):
    """Line amounts are malformed (both sides, no side, negative)."""


class UnbalancedEntryError(ValidationError):
    """Total debits differ from total credits."""

    def __init__(self, debit_total: Decimal, credit_total: Decimal):
        self.debit_total = debit_total
        self.credit_total = credit_total
        super().__init__(
            f"Journal entry is not balanced: debits={debit_total}, credits={credit_total}"
        )


class AccountNotFoundError(NotFoundError):
    """Unknown account id or code."""


class EntryNotFoundError(NotFoundError):
    """Unknown journal entry number."""

    def __init__(self, entry_number: str):
        self.entry_number = entry_number
        super().__init__(f"Journal entry '{entry_number}' not found")


class EntryAlreadyReversedError(ConflictError):
    """Entry has already been reversed by another entry."""

    def __init__(self, entry_number: str, reversed_by: str):
        self.entry_number = entry_number
        self.reversed_by = reversed_by
        super().__init__(
            f"Journal entry '{entry_number}' is already reversed by '{reversed_by}'"
        )


class NonZeroBalanceError(DependencyError):
    """Account cannot be deactivated while it carries a balance."""

    def __init__(self, code: str, net_balance: Decimal):
        self.code = code
        self.net_balance = net_balance
        super().__init__(
            f"Cannot deactivate account {code}: balance is {net_balance}. "
            "Transfer the balance to another account first."
        )


class AccountTypeLockedError(DependencyError):
    """Account type cannot change once postings reference the account."""


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def account_code_not_found(code: str) -> str:
    """Return message for missing account by code."""
    return f"Account with code '{code}' not found"


def parent_not_found(parent_id: int) -> str:
    """Return message for a parent reference that does not resolve."""
    return f"Parent account {parent_id} does not exist"


def parent_cycle(account_id: int, parent_id: int) -> str:
    """Return message for a parent assignment that would loop."""
    return f"Account {parent_id} cannot be the parent of account {account_id}: it would create a cycle"


def account_type_locked(code: str, line_count: int) -> str:
    """Return message when a type change is blocked by existing postings."""
    return (
        f"Cannot change type of account {code}: it is referenced by "
        f"{line_count} journal line{'s' if line_count != 1 else ''}"
    )


def trial_balance_mismatch(as_of_date: date, total_debit: Decimal, total_credit: Decimal) -> str:
    """Return message for a trial balance that does not zero out."""
    return (
        f"Trial balance as of {as_of_date.isoformat()} does not balance: "
        f"debits={total_debit}, credits={total_credit}"
    )


def balance_sheet_mismatch(as_of_date: date, discrepancy: Decimal) -> str:
    """Return message for a balance sheet that does not reconcile."""
    return (
        f"Balance sheet as of {as_of_date.isoformat()} does not balance: "
        f"assets differ from liabilities and equity by {discrepancy}"
    )
