"""Journal domain service (double-entry postings)."""

import logging
from datetime import date, datetime
from typing import Any, Mapping, Optional, Sequence

from contabil.database.base import Database
from contabil.domain.entities import JournalEntry, JournalLineDraft, ZERO
from contabil.domain.errors import (
    EntryAlreadyReversedError,
    EntryNotFoundError,
    InsufficientLinesError,
    InvalidAccountError,
    InvalidLineError,
    UnbalancedEntryError,
    ValidationError,
)
from contabil.utils.money import MAX_AMOUNT, to_decimal

logger = logging.getLogger(__name__)

MIN_LINES = 2

LineInput = JournalLineDraft | Mapping[str, Any]


def coerce_entry_date(value: date | str) -> date:
    """Accept a date, a datetime or an ISO date string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        raise ValidationError(f"Invalid entry date '{value}' (expected YYYY-MM-DD)")


def coerce_line(line: LineInput, line_order: int) -> JournalLineDraft:
    """Normalize a line given as a draft or a mapping to a draft with Decimal amounts.

    Raises:
        InvalidLineError: If an amount is malformed or negative, or if the
            line does not have exactly one non-zero side
    """
    if isinstance(line, JournalLineDraft):
        account_id = line.account_id
        raw_debit, raw_credit = line.debit_amount, line.credit_amount
        description = line.description
    else:
        if "account_id" not in line:
            raise InvalidLineError(f"Line {line_order}: account_id is required")
        account_id = line["account_id"]
        raw_debit = line.get("debit_amount", line.get("debit", ZERO))
        raw_credit = line.get("credit_amount", line.get("credit", ZERO))
        description = line.get("description")

    try:
        debit = to_decimal(raw_debit if raw_debit is not None else ZERO)
        credit = to_decimal(raw_credit if raw_credit is not None else ZERO)
    except ValidationError as e:
        raise InvalidLineError(f"Line {line_order}: {e}")

    if debit < ZERO or credit < ZERO:
        raise InvalidLineError(f"Line {line_order}: amounts must not be negative")
    if (debit == ZERO) == (credit == ZERO):
        raise InvalidLineError(
            f"Line {line_order}: exactly one of debit or credit must be non-zero "
            f"(debit={debit}, credit={credit})"
        )

    return JournalLineDraft(
        account_id=account_id,
        debit_amount=debit,
        credit_amount=credit,
        description=description,
    )


class JournalService:
    """Service for posting and reading journal entries.

    Entries are immutable once posted; corrections are new reversing entries.
    """

    def __init__(self, db: Database):
        """Initialize journal service.

        Args:
            db: Database instance
        """
        self.db = db

    def post_entry(
        self,
        entry_date: date | str,
        description: str,
        lines: Sequence[LineInput],
        reference_document: Optional[str] = None,
    ) -> JournalEntry:
        """Post a balanced journal entry.

        Validation runs in order and stops at the first failure; nothing is
        persisted unless every check passes.

        Args:
            entry_date: Accounting date of the entry
            description: Entry description
            lines: Two or more lines, each with an account and one non-zero side
            reference_document: Optional source document (invoice number, receipt, ...)

        Returns:
            The posted entry with its allocated entry number

        Raises:
            InsufficientLinesError: If fewer than two lines are given
            InvalidAccountError: If a line references a missing or inactive account
            InvalidLineError: If a line has no side, both sides or a bad amount
            UnbalancedEntryError: If total debits differ from total credits
        """
        return self._post(entry_date, description, lines, reference_document)

    def _post(
        self,
        entry_date: date | str,
        description: str,
        lines: Sequence[LineInput],
        reference_document: Optional[str],
        reverses: Optional[str] = None,
    ) -> JournalEntry:
        entry_date = coerce_entry_date(entry_date)
        description = (description or "").strip()
        if not description:
            raise ValidationError("Journal entry description must not be empty")

        lines = list(lines)
        if len(lines) < MIN_LINES:
            raise InsufficientLinesError(len(lines))

        self._check_accounts(lines)

        drafts = [coerce_line(line, line_order) for line_order, line in enumerate(lines, start=1)]

        total_debit = sum((draft.debit_amount for draft in drafts), ZERO)
        total_credit = sum((draft.credit_amount for draft in drafts), ZERO)
        if max(total_debit, total_credit) > MAX_AMOUNT:
            raise ValidationError(
                f"Journal entry total {max(total_debit, total_credit)} exceeds the maximum of {MAX_AMOUNT}"
            )
        if total_debit != total_credit:
            raise UnbalancedEntryError(total_debit, total_credit)

        entry = self.db.post_journal_entry(
            entry_date=entry_date,
            description=description,
            lines=drafts,
            reference_document=reference_document or None,
            reverses=reverses,
        )
        logger.info(
            f"Posted journal entry {entry.entry_number} dated {entry.date.isoformat()} "
            f"with {len(entry.lines)} lines, total={entry.total_debit}"
        )
        return entry

    def _check_accounts(self, lines: Sequence[LineInput]) -> None:
        """Fail on the first line whose account is missing or inactive."""
        checked: set[Any] = set()
        for line in lines:
            account_id = (
                line.account_id if isinstance(line, JournalLineDraft) else line.get("account_id")
            )
            if account_id in checked:
                continue
            account = self.db.get_account(account_id) if isinstance(account_id, int) else None
            if account is None:
                raise InvalidAccountError(account_id)
            if not account.is_active:
                raise InvalidAccountError(account_id, f"({account.code}) is inactive")
            checked.add(account_id)

    def get_entry(self, entry_number: str) -> JournalEntry:
        """Get a journal entry by number.

        Raises:
            EntryNotFoundError: If no entry has that number
        """
        entry_number = entry_number.strip().upper()
        entry = self.db.get_journal_entry(entry_number)
        if entry is None:
            raise EntryNotFoundError(entry_number)
        return entry

    def list_entries(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[JournalEntry]:
        """List entries ordered by entry number.

        Args:
            start_date: Optional start date filter (inclusive)
            end_date: Optional end date filter (inclusive)

        Raises:
            ValidationError: If start_date is after end_date
        """
        if start_date is not None and end_date is not None and start_date > end_date:
            raise ValidationError(
                f"Start date {start_date.isoformat()} is after end date {end_date.isoformat()}"
            )
        return self.db.list_journal_entries(start_date=start_date, end_date=end_date)

    def reverse_entry(
        self,
        entry_number: str,
        reversal_date: Optional[date | str] = None,
        description: Optional[str] = None,
    ) -> JournalEntry:
        """Post an entry that cancels another one by swapping its debits and credits.

        Args:
            entry_number: Entry to reverse
            reversal_date: Date of the reversing entry (defaults to the original date)
            description: Optional description (defaults to "Stornare <number>: <original>")

        Returns:
            The reversing entry, whose ``reverses`` field points at the original

        Raises:
            EntryNotFoundError: If the original entry does not exist
            EntryAlreadyReversedError: If the entry was already reversed
            InvalidAccountError: If one of its accounts has since been deactivated
        """
        original = self.get_entry(entry_number)

        reversed_by = self.db.get_reversal_of(original.entry_number)
        if reversed_by is not None:
            raise EntryAlreadyReversedError(original.entry_number, reversed_by)

        lines = [
            JournalLineDraft(
                account_id=line.account_id,
                debit_amount=line.credit_amount,
                credit_amount=line.debit_amount,
                description=line.description,
            )
            for line in original.lines
        ]
        entry = self._post(
            entry_date=reversal_date if reversal_date is not None else original.date,
            description=description or f"Stornare {original.entry_number}: {original.description}",
            lines=lines,
            reference_document=original.reference_document,
            reverses=original.entry_number,
        )
        logger.info(f"Reversed journal entry {original.entry_number} with {entry.entry_number}")
        return entry
