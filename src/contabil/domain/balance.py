"""Balance domain service.

Balances are never stored. Every figure is summed from journal lines on
demand, so two calls against the same ledger state return the same result.
"""

from datetime import date

from contabil.database.base import Database
from contabil.domain.entities import AccountActivity, BalanceSnapshot
from contabil.domain.errors import AccountNotFoundError, ValidationError, account_not_found


def _snapshot(activity: AccountActivity, as_of_date: date) -> BalanceSnapshot:
    return BalanceSnapshot(
        account=activity.account,
        as_of_date=as_of_date,
        debit_total=activity.debit_total,
        credit_total=activity.credit_total,
    )


class BalanceService:
    """Service for aggregating journal lines into account balances."""

    def __init__(self, db: Database):
        """Initialize balance service.

        Args:
            db: Database instance
        """
        self.db = db

    def balance_as_of(self, account_id: int, as_of_date: date) -> BalanceSnapshot:
        """Get an account's cumulative balance as of a date (inclusive).

        Lines posted while the account was active still count after it is
        deactivated.

        Args:
            account_id: Account ID
            as_of_date: Last entry date to include

        Returns:
            BalanceSnapshot with debit/credit totals and the signed net balance

        Raises:
            AccountNotFoundError: If the account does not exist
        """
        activity = self.db.get_account_activity(end_date=as_of_date, account_id=account_id)
        if not activity:
            raise AccountNotFoundError(account_not_found(account_id))
        return _snapshot(activity[0], as_of_date)

    def balance_as_of_all(self, as_of_date: date) -> dict[int, BalanceSnapshot]:
        """Get cumulative balances of every account as of a date.

        The totals come from one aggregate query, so a posting that commits
        meanwhile is either fully included or not at all.

        Returns:
            Mapping of account ID to BalanceSnapshot, ordered by account code
        """
        return {
            activity.account.id: _snapshot(activity, as_of_date)
            for activity in self.db.get_account_activity(end_date=as_of_date)
        }

    def movement_between(self, start_date: date, end_date: date) -> dict[int, BalanceSnapshot]:
        """Get each account's activity within ``start_date``..``end_date`` (inclusive).

        Equivalent to ``balance_as_of(end_date)`` minus
        ``balance_as_of(start_date - 1 day)`` per account, read in one query.

        Raises:
            ValidationError: If start_date is after end_date
        """
        if start_date > end_date:
            raise ValidationError(
                f"Period start {start_date.isoformat()} is after period end {end_date.isoformat()}"
            )
        return {
            activity.account.id: _snapshot(activity, end_date)
            for activity in self.db.get_account_activity(start_date=start_date, end_date=end_date)
        }

