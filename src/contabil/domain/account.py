"""Account domain service (chart of accounts)."""

import logging
from typing import Optional

from contabil.database.base import Database
from contabil.domain.balance import BalanceService
from contabil.domain.entities import Account, AccountTreeNode, AccountType
from contabil.domain.errors import (
    AccountNotFoundError,
    CyclicHierarchyError,
    DuplicateCodeError,
    ValidationError,
    account_code_not_found,
    account_not_found,
    parent_not_found,
)

logger = logging.getLogger(__name__)


def parse_account_type(value: AccountType | str) -> AccountType:
    """Parse an account type name ('asset', 'Liability', ...).

    Raises:
        ValidationError: If the value is not a known account type
    """
    if isinstance(value, AccountType):
        return value
    try:
        return AccountType(str(value).strip().lower())
    except ValueError:
        valid = ", ".join(t.value for t in AccountType)
        raise ValidationError(f"Unknown account type '{value}'. Valid types: {valid}")


class AccountService:
    """Service for managing the chart of accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db
        self.balances = BalanceService(db)

    def create_account(
        self,
        code: str,
        name: str,
        account_type: AccountType | str,
        parent_id: Optional[int] = None,
        description: Optional[str] = None,
    ) -> Account:
        """Create a new account.

        Args:
            code: Account code (e.g. "411"), unique across active and inactive accounts
            name: Account name
            account_type: Account type
            parent_id: Optional parent account ID
            description: Optional description

        Returns:
            The created account

        Raises:
            DuplicateCodeError: If the code already exists
            CyclicHierarchyError: If the parent does not exist
            ValidationError: If code, name or type is invalid
        """
        code = (code or "").strip()
        name = (name or "").strip()
        if not code:
            raise ValidationError("Account code must not be empty")
        if not name:
            raise ValidationError("Account name must not be empty")
        account_type = parse_account_type(account_type)

        if self.db.get_account_by_code(code) is not None:
            raise DuplicateCodeError(code)

        if parent_id is not None and self.db.get_account(parent_id) is None:
            raise CyclicHierarchyError(parent_not_found(parent_id))

        account_id = self.db.create_account(
            code=code,
            name=name,
            account_type=account_type,
            parent_id=parent_id,
            description=description,
        )
        logger.info(f"Created account {code} ({account_type.value}) id={account_id}")
        return self.require_account(account_id)

    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID.

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def require_account(self, account_id: int) -> Account:
        """Get account by ID or raise AccountNotFoundError."""
        account = self.db.get_account(account_id)
        if account is None:
            raise AccountNotFoundError(account_not_found(account_id))
        return account

    def get_account_by_code(self, code: str) -> Optional[Account]:
        """Get account by code (active or inactive)."""
        return self.db.get_account_by_code(code.strip())

    def require_account_by_code(self, code: str) -> Account:
        """Get account by code or raise AccountNotFoundError."""
        account = self.get_account_by_code(code)
        if account is None:
            raise AccountNotFoundError(account_code_not_found(code))
        return account

    def list_accounts(self, include_inactive: bool = False) -> list[Account]:
        """List accounts ordered by code.

        Args:
            include_inactive: If True, include deactivated accounts
        """
        return self.db.list_accounts(include_inactive=include_inactive)

    def update_account(
        self,
        account_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None,
        account_type: Optional[AccountType | str] = None,
        parent_id: Optional[int] = None,
        clear_parent: bool = False,
    ) -> Account:
        """Update account fields.

        The code is never changed; it identifies the account in reports.

        Args:
            account_id: Account ID to update
            name: Optional new name
            description: Optional new description
            account_type: Optional new type (only while no lines reference the account)
            parent_id: Optional new parent ID
            clear_parent: If True, detach the account from its parent

        Raises:
            AccountNotFoundError: If the account does not exist
            AccountTypeLockedError: If the type changes after postings
            CyclicHierarchyError: If the new parent is missing or would create a cycle
        """
        account = self.require_account(account_id)

        if clear_parent and parent_id is not None:
            raise ValidationError("Cannot set both parent_id and clear_parent")

        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationError("Account name must not be empty")

        new_type = None
        if account_type is not None:
            new_type = parse_account_type(account_type)
            if new_type == account.account_type:
                new_type = None

        # Type lock and parent chain are checked inside the update transaction
        self.db.update_account(
            account_id=account_id,
            name=name,
            description=description,
            account_type=new_type,
            parent_id=parent_id,
            update_parent=clear_parent,
        )
        return self.require_account(account_id)

    def deactivate_account(self, account_id: int) -> Account:
        """Deactivate an account.

        History stays intact: lines already posted remain in balances and
        reports. The account can no longer receive postings.

        Raises:
            AccountNotFoundError: If the account does not exist
            NonZeroBalanceError: If the account's current balance is not zero
        """
        account = self.require_account(account_id)
        self.db.deactivate_account(account_id)
        logger.info(f"Deactivated account {account.code}")
        return self.require_account(account_id)

    def reactivate_account(self, account_id: int) -> Account:
        """Reactivate a deactivated account."""
        account = self.require_account(account_id)
        self.db.set_account_active(account_id, True)
        logger.info(f"Reactivated account {account.code}")
        return self.require_account(account_id)

    def get_account_tree(self, include_inactive: bool = False) -> list[AccountTreeNode]:
        """Get the chart of accounts as a tree of root nodes ordered by code."""
        accounts = self.list_accounts(include_inactive=include_inactive)
        known_ids = {acc.id for acc in accounts}

        children_map: dict[Optional[int], list[Account]] = {}
        for acc in accounts:
            # An account whose parent is hidden (inactive) is shown as a root
            parent_key = acc.parent_id if acc.parent_id in known_ids else None
            children_map.setdefault(parent_key, []).append(acc)

        def build(parent_id: Optional[int]) -> tuple[AccountTreeNode, ...]:
            return tuple(
                AccountTreeNode(
                    id=acc.id,
                    code=acc.code,
                    name=acc.name,
                    account_type=acc.account_type,
                    is_active=acc.is_active,
                    children=build(acc.id),
                )
                for acc in children_map.get(parent_id, [])
            )

        return list(build(None))

    def format_account_path(self, account_id: int) -> str:
        """Get full path for an account (e.g., "4 > 41 > 411")."""
        account = self.get_account(account_id)
        if account is None:
            return ""

        path_parts = [account.code]
        seen = {account.id}
        current_parent_id = account.parent_id

        while current_parent_id is not None and current_parent_id not in seen:
            parent = self.get_account(current_parent_id)
            if parent is None:
                break
            path_parts.append(parent.code)
            seen.add(parent.id)
            current_parent_id = parent.parent_id

        return " > ".join(reversed(path_parts))
