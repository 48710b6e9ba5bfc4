"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence
from datetime import date

# Import entities directly to avoid circular import through domain/__init__.py
from contabil.domain.entities import (
    Account,
    AccountActivity,
    AccountType,
    JournalEntry,
    JournalLineDraft,
)


class Database(ABC):
    """Abstract database interface for the contabil ledger."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self,
        code: str,
        name: str,
        account_type: AccountType,
        parent_id: Optional[int] = None,
        description: Optional[str] = None,
    ) -> int:
        """Create a new account. Returns account ID.

        Raises:
            DuplicateCodeError: If the code is already taken
        """
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def get_account_by_code(self, code: str) -> Optional[Account]:
        """Get account by code, active or not."""
        pass

    @abstractmethod
    def list_accounts(self, include_inactive: bool = False) -> list[Account]:
        """List accounts ordered by code."""
        pass

    @abstractmethod
    def update_account(
        self,
        account_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None,
        account_type: Optional[AccountType] = None,
        parent_id: Optional[int] = None,
        update_parent: bool = False,
    ) -> None:
        """Update account fields.

        Args:
            update_parent: If True, set parent_id even when it is None

        Raises:
            AccountNotFoundError: If the account does not exist
            AccountTypeLockedError: If account_type is given and lines reference the account
            CyclicHierarchyError: If the new parent is missing or would create a cycle
        """
        pass

    @abstractmethod
    def set_account_active(self, account_id: int, is_active: bool) -> None:
        """Activate or deactivate an account."""
        pass

    @abstractmethod
    def deactivate_account(self, account_id: int) -> None:
        """Deactivate an account, checking its balance in the same transaction.

        Raises:
            AccountNotFoundError: If the account does not exist
            NonZeroBalanceError: If the account's lifetime balance is not zero
        """
        pass

    @abstractmethod
    def get_account_line_count(self, account_id: int) -> int:
        """Get count of journal lines that reference an account."""
        pass

    # Journal operations
    @abstractmethod
    def post_journal_entry(
        self,
        entry_date: date,
        description: str,
        lines: Sequence[JournalLineDraft],
        reference_document: Optional[str] = None,
        reverses: Optional[str] = None,
    ) -> JournalEntry:
        """Persist a validated entry and its lines in one transaction.

        The entry number is allocated inside the same transaction; if
        anything fails nothing is written and no number is consumed.

        Raises:
            InvalidAccountError: If a line references a missing or inactive account
            EntryAlreadyReversedError: If ``reverses`` already has a reversal
        """
        pass

    @abstractmethod
    def get_journal_entry(self, entry_number: str) -> Optional[JournalEntry]:
        """Get journal entry (with lines) by entry number."""
        pass

    @abstractmethod
    def list_journal_entries(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[JournalEntry]:
        """List journal entries ordered by entry number.

        Args:
            start_date: Optional start date filter (inclusive)
            end_date: Optional end date filter (inclusive)
        """
        pass

    @abstractmethod
    def get_reversal_of(self, entry_number: str) -> Optional[str]:
        """Return the number of the entry that reverses ``entry_number``, if any."""
        pass

    # Aggregation
    @abstractmethod
    def get_account_activity(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account_id: Optional[int] = None,
    ) -> list[AccountActivity]:
        """Sum debits and credits per account for entries in a date window.

        Every account (active or not, filtered by ``account_id`` if given)
        is returned, with zero totals when it has no lines in the window.
        The result comes from a single statement, so it reflects one
        consistent state of the ledger.
        """
        pass
