"""Financial report commands."""

from datetime import date

import click

from contabil.cli.date_filters import (
    collect_period_flags,
    parse_date_or_exit,
    period_options,
    resolve_cli_date_range,
)
from contabil.cli.error_handling import handle_domain_error
from contabil.domain.errors import DomainError
from contabil.domain.statements import StatementService
from contabil.utils.date_parser import get_period_range, iter_month_ranges
from contabil.utils.money import format_amount

NAME_WIDTH = 44
AMOUNT_WIDTH = 16


def _row(label: str, amount, indent: int = 0) -> str:
    width = NAME_WIDTH - 4 * indent
    return f"{'    ' * indent}{label[:width]:<{width}} {format_amount(amount):>{AMOUNT_WIDTH}}"


def _section(title: str, rows, total) -> None:
    click.echo(f"\n{title}")
    for row in rows:
        click.echo(_row(f"{row.code} {row.name}", row.net_balance, indent=1))
    click.echo(_row(f"Total {title.lower()}", total))


def _as_of_or_today(ctx, as_of: str | None) -> date:
    return parse_date_or_exit(ctx, as_of, "report date") if as_of else date.today()


@click.group()
def report_group():
    """Financial reports."""
    pass


@report_group.command("trial-balance")
@click.option("--as-of", help="Report date (default: today)")
@click.option("--strict", is_flag=True, help="Exit with an error if debits and credits differ")
@click.pass_context
def trial_balance(ctx, as_of: str | None, strict: bool):
    """Show the trial balance (balanța de verificare)."""
    db = ctx.obj["db"]
    service = StatementService(db)
    as_of_date = _as_of_or_today(ctx, as_of)

    report = service.trial_balance(as_of_date)

    click.echo(f"\nTrial balance as of {as_of_date.isoformat()}")
    click.echo("-" * 84)
    click.echo(f"{'Account':<8} {'Name':<40} {'Debit':>{AMOUNT_WIDTH}} {'Credit':>{AMOUNT_WIDTH}}")
    for row in report.rows:
        debit = format_amount(row.debit_balance) if row.debit_balance else ""
        credit = format_amount(row.credit_balance) if row.credit_balance else ""
        click.echo(
            f"{row.code:<8} {row.name[:40]:<40} {debit:>{AMOUNT_WIDTH}} {credit:>{AMOUNT_WIDTH}}"
        )
    click.echo("-" * 84)
    click.echo(
        f"{'Total':<49} {format_amount(report.total_debit):>{AMOUNT_WIDTH}} "
        f"{format_amount(report.total_credit):>{AMOUNT_WIDTH}}"
    )

    if not report.is_balanced:
        click.echo(f"\nWarning: trial balance is off by {format_amount(report.discrepancy)}", err=True)
        if strict:
            try:
                report.ensure_balanced()
            except DomainError as e:
                handle_domain_error(ctx, e)


@report_group.command("income-statement")
@click.option("--start-date", help="Period start (YYYY-MM-DD or relative)")
@click.option("--end-date", help="Period end (YYYY-MM-DD or relative)")
@period_options
@click.option("--monthly", is_flag=True, help="Show net income month by month")
@click.pass_context
def income_statement(ctx, start_date: str | None, end_date: str | None, monthly: bool, **kwargs):
    """Show the income statement (contul de profit și pierdere).

    Defaults to the current year to date.
    """
    db = ctx.obj["db"]
    service = StatementService(db)

    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=collect_period_flags(kwargs),
        default_range=get_period_range("this-year"),
    )
    if start is None:
        start = date(end.year, 1, 1)
    if end is None:
        end = date.today()

    try:
        report = service.income_statement(start, end)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nIncome statement {start.isoformat()} - {end.isoformat()}")
    click.echo("-" * 61)
    _section("Revenue", report.revenue_accounts, report.total_revenue)
    _section("Expenses", report.expense_accounts, report.total_expenses)
    click.echo("-" * 61)
    click.echo(_row("Net income", report.net_income))

    if monthly:
        click.echo("\nBy month:")
        for month_start, month_end in iter_month_ranges(start, end):
            month = service.income_statement(month_start, month_end)
            click.echo(_row(month_start.strftime("%Y-%m"), month.net_income, indent=1))


@report_group.command("balance-sheet")
@click.option("--as-of", help="Report date (default: today)")
@click.option("--strict", is_flag=True, help="Exit with an error if the sheet does not balance")
@click.pass_context
def balance_sheet(ctx, as_of: str | None, strict: bool):
    """Show the balance sheet (bilanțul)."""
    db = ctx.obj["db"]
    service = StatementService(db)
    as_of_date = _as_of_or_today(ctx, as_of)

    report = service.balance_sheet(as_of_date)

    click.echo(f"\nBalance sheet as of {as_of_date.isoformat()}")
    click.echo("-" * 61)
    _section("Assets", report.assets, report.total_assets)
    _section("Liabilities", report.liabilities, report.total_liabilities)
    _section("Equity", report.equity, report.total_equity)
    if report.unclosed_earnings:
        click.echo(_row("Unclosed earnings (current result)", report.unclosed_earnings))
    click.echo("-" * 61)
    click.echo(
        _row(
            "Total liabilities and equity",
            report.total_liabilities + report.total_equity + report.unclosed_earnings,
        )
    )

    if not report.is_balanced:
        click.echo(f"\nWarning: balance sheet is off by {format_amount(report.discrepancy)}", err=True)
        if strict:
            try:
                report.ensure_balanced()
            except DomainError as e:
                handle_domain_error(ctx, e)


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
