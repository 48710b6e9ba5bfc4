"""Invoice posting commands."""

import click

from contabil.cli.date_filters import parse_date_or_exit
from contabil.cli.error_handling import handle_domain_error
from contabil.domain.errors import DomainError
from contabil.domain.invoices import DEFAULT_REVENUE_ACCOUNT, InvoicePostingService
from contabil.utils.amount_parser import parse_amount
from contabil.utils.money import format_amount


def _parse_amounts(ctx, net: str, vat: str):
    try:
        return parse_amount(net), parse_amount(vat)
    except ValueError as e:
        handle_domain_error(ctx, e)


@click.group()
def invoice_group():
    """Record sales and purchase invoices."""
    pass


@invoice_group.command("sale")
@click.argument("customer", metavar="CUSTOMER")
@click.argument("document_number", metavar="INVOICE_NUMBER")
@click.option("--date", "document_date", required=True, help="Invoice date")
@click.option("--net", required=True, help="Net amount (without VAT)")
@click.option("--vat", default="0", show_default=True, help="VAT amount")
@click.option(
    "--revenue-account",
    default=DEFAULT_REVENUE_ACCOUNT,
    show_default=True,
    help="Revenue account code",
)
@click.option("--description", help="Description for the revenue line")
@click.pass_context
def record_sale(
    ctx,
    customer: str,
    document_number: str,
    document_date: str,
    net: str,
    vat: str,
    revenue_account: str,
    description: str | None,
):
    """Record an issued invoice (411 = 70x + 4427).

    Examples:
        contabil invoice sale "ACME SRL" F-2024-001 --date 2024-01-15 --net 2800 --vat 532
    """
    db = ctx.obj["db"]
    service = InvoicePostingService(db)
    invoice_date = parse_date_or_exit(ctx, document_date, "invoice date")
    net_amount, vat_amount = _parse_amounts(ctx, net, vat)

    try:
        entry = service.record_sale(
            customer=customer,
            document_number=document_number,
            document_date=invoice_date,
            net_amount=net_amount,
            vat_amount=vat_amount,
            revenue_account_code=revenue_account,
            description=description,
        )
        click.echo(
            f"Posted entry {entry.entry_number} for invoice {document_number} "
            f"({format_amount(entry.total_debit)})"
        )
    except DomainError as e:
        handle_domain_error(ctx, e)


@invoice_group.command("purchase")
@click.argument("supplier", metavar="SUPPLIER")
@click.argument("document_number", metavar="INVOICE_NUMBER")
@click.option("--date", "document_date", required=True, help="Invoice date")
@click.option("--net", required=True, help="Net amount (without VAT)")
@click.option("--vat", default="0", show_default=True, help="VAT amount")
@click.option("--expense-account", required=True, help="Expense account code")
@click.option("--description", help="Description for the expense line")
@click.pass_context
def record_purchase(
    ctx,
    supplier: str,
    document_number: str,
    document_date: str,
    net: str,
    vat: str,
    expense_account: str,
    description: str | None,
):
    """Record a received invoice (6xx + 4426 = 401).

    Examples:
        contabil invoice purchase "Orange" 123456 --date 2024-01-20 --net 100 --vat 19 \\
            --expense-account 626
    """
    db = ctx.obj["db"]
    service = InvoicePostingService(db)
    invoice_date = parse_date_or_exit(ctx, document_date, "invoice date")
    net_amount, vat_amount = _parse_amounts(ctx, net, vat)

    try:
        entry = service.record_purchase(
            supplier=supplier,
            document_number=document_number,
            document_date=invoice_date,
            net_amount=net_amount,
            vat_amount=vat_amount,
            expense_account_code=expense_account,
            description=description,
        )
        click.echo(
            f"Posted entry {entry.entry_number} for invoice {document_number} "
            f"({format_amount(entry.total_credit)})"
        )
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register invoice commands with main CLI."""
    cli.add_command(invoice_group, name="invoice")
