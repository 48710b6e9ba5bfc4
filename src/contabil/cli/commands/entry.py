"""Journal entry commands."""

import click

from contabil.cli.account_resolution import resolve_account_or_exit
from contabil.cli.date_filters import (
    collect_period_flags,
    parse_date_or_exit,
    period_options,
    resolve_cli_date_range,
)
from contabil.cli.error_handling import handle_domain_error
from contabil.domain.account import AccountService
from contabil.domain.entities import JournalEntry, JournalLineDraft
from contabil.domain.errors import DomainError
from contabil.domain.journal import JournalService
from contabil.utils.amount_parser import parse_amount
from contabil.utils.money import format_amount


def parse_line_option(option: str) -> tuple[str, str, str, str | None]:
    """Split a ``CODE:D|C:AMOUNT[:DESCRIPTION]`` line option.

    Returns:
        Tuple of (code, side, amount text, description)

    Raises:
        ValueError: If the option is malformed
    """
    parts = option.split(":", 3)
    if len(parts) < 3:
        raise ValueError(f"Invalid line '{option}' (expected CODE:D|C:AMOUNT[:DESCRIPTION])")
    code, side, amount = (part.strip() for part in parts[:3])
    side = side.upper()
    if side not in ("D", "C"):
        raise ValueError(f"Invalid side '{side}' in line '{option}' (expected D or C)")
    description = parts[3].strip() if len(parts) == 4 and parts[3].strip() else None
    return code, side, amount, description


def _display_entry(entry: JournalEntry) -> None:
    click.echo(f"\nEntry {entry.entry_number} - {entry.date.isoformat()}")
    click.echo(f"Description: {entry.description}")
    if entry.reference_document:
        click.echo(f"Document: {entry.reference_document}")
    if entry.reverses:
        click.echo(f"Reverses: {entry.reverses}")
    click.echo("-" * 80)
    click.echo(f"{'Account':<8} {'Name':<36} {'Debit':>16} {'Credit':>16}")
    for line in entry.lines:
        debit = format_amount(line.debit_amount) if line.debit_amount else ""
        credit = format_amount(line.credit_amount) if line.credit_amount else ""
        click.echo(f"{line.account_code:<8} {line.account_name[:36]:<36} {debit:>16} {credit:>16}")
    click.echo("-" * 80)
    click.echo(
        f"{'Total':<45} {format_amount(entry.total_debit):>16} {format_amount(entry.total_credit):>16}"
    )


@click.group()
def entry_group():
    """Post and view journal entries."""
    pass


@entry_group.command("post")
@click.option("--date", "entry_date", required=True, help="Entry date (YYYY-MM-DD, DD.MM.YYYY, 'today')")
@click.option("--description", required=True, help="Entry description")
@click.option(
    "--line",
    "line_options",
    multiple=True,
    required=True,
    help="Line as CODE:D|C:AMOUNT[:DESCRIPTION], repeat for each line",
)
@click.option("--document", help="Reference document (invoice number, receipt, ...)")
@click.pass_context
def post_entry(ctx, entry_date: str, description: str, line_options: tuple[str, ...], document: str | None):
    """Post a balanced journal entry.

    Examples:
        contabil entry post --date 2024-01-15 --description "Încasare client" \\
            --line 5121:D:3332 --line 411:C:3332 --document OP-17
    """
    db = ctx.obj["db"]
    accounts = AccountService(db)
    journal = JournalService(db)
    posting_date = parse_date_or_exit(ctx, entry_date, "entry date")

    lines = []
    for option in line_options:
        try:
            code, side, amount_text, line_description = parse_line_option(option)
            amount = parse_amount(amount_text)
        except ValueError as e:
            handle_domain_error(ctx, e)
        account = resolve_account_or_exit(ctx, accounts, code)
        if side == "D":
            lines.append(
                JournalLineDraft(account_id=account.id, debit_amount=amount, description=line_description)
            )
        else:
            lines.append(
                JournalLineDraft(account_id=account.id, credit_amount=amount, description=line_description)
            )

    try:
        entry = journal.post_entry(
            entry_date=posting_date,
            description=description,
            lines=lines,
            reference_document=document,
        )
        click.echo(f"Posted entry {entry.entry_number} ({format_amount(entry.total_debit)})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@entry_group.command("show")
@click.argument("entry_number", metavar="ENTRY_NUMBER")
@click.pass_context
def show_entry(ctx, entry_number: str):
    """Show a journal entry with its lines."""
    db = ctx.obj["db"]
    journal = JournalService(db)

    try:
        entry = journal.get_entry(entry_number)
    except DomainError as e:
        handle_domain_error(ctx, e)

    _display_entry(entry)


@entry_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'start of month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@period_options
@click.option("--lines", "show_lines", is_flag=True, help="Show lines of each entry")
@click.pass_context
def list_entries(ctx, start_date: str | None, end_date: str | None, show_lines: bool, **kwargs):
    """List journal entries ordered by entry number."""
    db = ctx.obj["db"]
    journal = JournalService(db)

    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=collect_period_flags(kwargs),
    )

    try:
        entries = journal.list_entries(start_date=start, end_date=end)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not entries:
        click.echo("No entries found.")
        return

    if show_lines:
        for entry in entries:
            _display_entry(entry)
        return

    click.echo(f"\n{'Number':<14} {'Date':<10} {'Amount':>16}  Description")
    click.echo("-" * 80)
    for entry in entries:
        marker = f" [storno {entry.reverses}]" if entry.reverses else ""
        click.echo(
            f"{entry.entry_number:<14} {entry.date.isoformat():<10} "
            f"{format_amount(entry.total_debit):>16}  {entry.description}{marker}"
        )


@entry_group.command("reverse")
@click.argument("entry_number", metavar="ENTRY_NUMBER")
@click.option("--date", "reversal_date", help="Date of the reversing entry (default: original date)")
@click.option("--description", help="Description of the reversing entry")
@click.pass_context
def reverse_entry(ctx, entry_number: str, reversal_date: str | None, description: str | None):
    """Reverse a posted entry with a new entry that swaps debits and credits."""
    db = ctx.obj["db"]
    journal = JournalService(db)
    posting_date = parse_date_or_exit(ctx, reversal_date, "reversal date") if reversal_date else None

    try:
        entry = journal.reverse_entry(
            entry_number, reversal_date=posting_date, description=description
        )
        click.echo(f"Posted entry {entry.entry_number} reversing {entry.reverses}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register entry commands with main CLI."""
    cli.add_command(entry_group, name="entry")
