"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, including the switch from the
integer minor units stored in the database to the Decimal amounts used by
the domain.
"""

from contabil.domain import entities as domain
from contabil.database.models import (
    Account as ORMAccount,
    JournalEntry as ORMJournalEntry,
    JournalEntryLine as ORMJournalEntryLine,
)
from contabil.utils.money import from_minor_units


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        code=orm_account.code,
        name=orm_account.name,
        account_type=domain.AccountType(orm_account.account_type),
        parent_id=orm_account.parent_id,
        description=orm_account.description,
        is_active=bool(orm_account.is_active),
        created_at=orm_account.created_at,
    )


def journal_line_to_domain(orm_line: ORMJournalEntryLine) -> domain.JournalEntryLine:
    """Convert SQLAlchemy JournalEntryLine model to domain entity.

    The account relationship must be loaded; code and name are copied onto
    the line for display.
    """
    return domain.JournalEntryLine(
        account_id=orm_line.account_id,
        account_code=orm_line.account.code,
        account_name=orm_line.account.name,
        description=orm_line.description,
        debit_amount=from_minor_units(orm_line.debit_amount),
        credit_amount=from_minor_units(orm_line.credit_amount),
        line_order=orm_line.line_order,
    )


def journal_entry_to_domain(orm_entry: ORMJournalEntry) -> domain.JournalEntry:
    """Convert SQLAlchemy JournalEntry model (with lines) to domain entity."""
    lines = sorted(orm_entry.lines, key=lambda line: line.line_order)
    return domain.JournalEntry(
        entry_number=orm_entry.entry_number,
        date=orm_entry.entry_date,
        description=orm_entry.description,
        reference_document=orm_entry.reference_document,
        lines=tuple(journal_line_to_domain(line) for line in lines),
        created_at=orm_entry.created_at,
        reverses=orm_entry.reverses,
    )


def account_activity_to_domain(
    orm_account: ORMAccount, debit_units: int | None, credit_units: int | None, line_count: int | None
) -> domain.AccountActivity:
    """Build an AccountActivity from an account row and aggregated totals."""
    return domain.AccountActivity(
        account=account_to_domain(orm_account),
        debit_total=from_minor_units(debit_units),
        credit_total=from_minor_units(credit_units),
        line_count=int(line_count or 0),
    )
