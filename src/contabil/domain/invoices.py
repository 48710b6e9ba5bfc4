"""Invoice posting domain service.

Turns sales and purchase invoices into journal entries on the standard
Romanian accounts (OMFP 1802): 411 Clienți, 401 Furnizori,
4426 TVA deductibilă, 4427 TVA colectată.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from contabil.database.base import Database
from contabil.domain.account import AccountService
from contabil.domain.entities import JournalEntry, JournalLineDraft, ZERO
from contabil.domain.errors import ValidationError
from contabil.domain.journal import JournalService
from contabil.utils.money import AmountLike, to_decimal

logger = logging.getLogger(__name__)

CUSTOMERS_ACCOUNT = "411"
SUPPLIERS_ACCOUNT = "401"
VAT_DEDUCTIBLE_ACCOUNT = "4426"
VAT_COLLECTED_ACCOUNT = "4427"
DEFAULT_REVENUE_ACCOUNT = "704"


def _amounts(net_amount: AmountLike, vat_amount: AmountLike) -> tuple[Decimal, Decimal, Decimal]:
    net = to_decimal(net_amount)
    vat = to_decimal(vat_amount)
    if net <= ZERO:
        raise ValidationError(f"Net amount must be positive, got {net}")
    if vat < ZERO:
        raise ValidationError(f"VAT amount must not be negative, got {vat}")
    return net, vat, net + vat


class InvoicePostingService:
    """Service for recording sales and purchase invoices in the journal."""

    def __init__(self, db: Database):
        """Initialize invoice posting service.

        Args:
            db: Database instance
        """
        self.db = db
        self.accounts = AccountService(db)
        self.journal = JournalService(db)

    def record_sale(
        self,
        customer: str,
        document_number: str,
        document_date: date,
        net_amount: AmountLike,
        vat_amount: AmountLike = ZERO,
        revenue_account_code: str = DEFAULT_REVENUE_ACCOUNT,
        description: Optional[str] = None,
    ) -> JournalEntry:
        """Record an issued invoice.

        Posts 411 debit (total), revenue account credit (net) and 4427 credit
        (VAT, omitted when zero).

        Raises:
            AccountNotFoundError: If one of the accounts is not in the chart
            ValidationError: If the amounts are invalid
        """
        net, vat, total = _amounts(net_amount, vat_amount)
        customers = self.accounts.require_account_by_code(CUSTOMERS_ACCOUNT)
        revenue = self.accounts.require_account_by_code(revenue_account_code)
        title = f"Factură {document_number} - {customer}"

        lines = [
            JournalLineDraft(account_id=customers.id, debit_amount=total, description=title),
            JournalLineDraft(
                account_id=revenue.id,
                credit_amount=net,
                description=f"{description or revenue.name} - {customer}",
            ),
        ]
        if vat > ZERO:
            vat_collected = self.accounts.require_account_by_code(VAT_COLLECTED_ACCOUNT)
            lines.append(
                JournalLineDraft(
                    account_id=vat_collected.id,
                    credit_amount=vat,
                    description=f"TVA colectată - {customer}",
                )
            )

        entry = self.journal.post_entry(
            entry_date=document_date,
            description=title,
            lines=lines,
            reference_document=document_number,
        )
        logger.info(f"Recorded sale invoice {document_number} as {entry.entry_number}")
        return entry

    def record_purchase(
        self,
        supplier: str,
        document_number: str,
        document_date: date,
        net_amount: AmountLike,
        vat_amount: AmountLike,
        expense_account_code: str,
        description: Optional[str] = None,
    ) -> JournalEntry:
        """Record a received invoice.

        Posts the expense account debit (net), 4426 debit (VAT, omitted when
        zero) and 401 credit (total).

        Raises:
            AccountNotFoundError: If one of the accounts is not in the chart
            ValidationError: If the amounts are invalid
        """
        net, vat, total = _amounts(net_amount, vat_amount)
        expense = self.accounts.require_account_by_code(expense_account_code)
        suppliers = self.accounts.require_account_by_code(SUPPLIERS_ACCOUNT)
        title = f"Factură {document_number} - {supplier}"

        lines = [
            JournalLineDraft(
                account_id=expense.id,
                debit_amount=net,
                description=f"{description or expense.name} - {supplier}",
            ),
        ]
        if vat > ZERO:
            vat_deductible = self.accounts.require_account_by_code(VAT_DEDUCTIBLE_ACCOUNT)
            lines.append(
                JournalLineDraft(
                    account_id=vat_deductible.id,
                    debit_amount=vat,
                    description=f"TVA deductibilă - {supplier}",
                )
            )
        lines.append(
            JournalLineDraft(account_id=suppliers.id, credit_amount=total, description=title)
        )

        entry = self.journal.post_entry(
            entry_date=document_date,
            description=title,
            lines=lines,
            reference_document=document_number,
        )
        logger.info(f"Recorded purchase invoice {document_number} as {entry.entry_number}")
        return entry
