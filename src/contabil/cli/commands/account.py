"""Chart of accounts commands."""

from datetime import date

import click

from contabil.cli.account_resolution import resolve_account_or_exit
from contabil.cli.date_filters import parse_date_or_exit
from contabil.cli.error_handling import handle_domain_error
from contabil.domain.account import AccountService
from contabil.domain.entities import AccountType
from contabil.domain.errors import DomainError
from contabil.utils.money import format_amount

ACCOUNT_TYPES = [account_type.value for account_type in AccountType]


@click.group()
def account_group():
    """Manage the chart of accounts."""
    pass


@account_group.command("create")
@click.argument("code", metavar="CODE")
@click.argument("name", metavar="NAME")
@click.option(
    "--type",
    "account_type",
    required=True,
    type=click.Choice(ACCOUNT_TYPES, case_sensitive=False),
    help="Account type",
)
@click.option("--parent", help="Parent account code")
@click.option("--description", help="Account description")
@click.pass_context
def create_account(
    ctx, code: str, name: str, account_type: str, parent: str | None, description: str | None
):
    """Create a new account.

    Examples:
        contabil account create 5121 "Conturi la bănci în lei" --type asset
        contabil account create 4111 "Clienți interni" --type asset --parent 411
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    parent_id = None
    if parent is not None:
        parent_id = resolve_account_or_exit(ctx, service, parent).id

    try:
        account = service.create_account(
            code=code,
            name=name,
            account_type=account_type,
            parent_id=parent_id,
            description=description,
        )
        click.echo(f"Created account {account.code} '{account.name}' (ID: {account.id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@account_group.command("list")
@click.option("--all", "include_inactive", is_flag=True, help="Include inactive accounts")
@click.pass_context
def list_accounts(ctx, include_inactive: bool):
    """List accounts ordered by code."""
    db = ctx.obj["db"]
    service = AccountService(db)

    accounts = service.list_accounts(include_inactive=include_inactive)
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 72)
    for acc in accounts:
        status = "" if acc.is_active else " (inactive)"
        click.echo(f"{acc.code:<8} | {acc.account_type.value:<9} | {acc.name}{status}")


@account_group.command("show")
@click.argument("code", metavar="CODE")
@click.option("--as-of", help="Balance date (default: today)")
@click.pass_context
def show_account(ctx, code: str, as_of: str | None):
    """Show account details and its balance."""
    db = ctx.obj["db"]
    service = AccountService(db)
    account = resolve_account_or_exit(ctx, service, code)
    as_of_date = parse_date_or_exit(ctx, as_of, "balance date") if as_of else date.today()

    balance = service.balances.balance_as_of(account.id, as_of_date)

    click.echo(f"Account: {account.code} - {account.name}")
    click.echo(f"Path: {service.format_account_path(account.id)}")
    click.echo(f"Type: {account.account_type.value}")
    click.echo(f"Status: {'active' if account.is_active else 'inactive'}")
    if account.description:
        click.echo(f"Description: {account.description}")
    click.echo(f"\nBalance as of {as_of_date.isoformat()}:")
    click.echo(f"  Debits:  {format_amount(balance.debit_total):>15}")
    click.echo(f"  Credits: {format_amount(balance.credit_total):>15}")
    click.echo(f"  Net:     {format_amount(balance.net_balance):>15}")


@account_group.command("update")
@click.argument("code", metavar="CODE")
@click.option("--name", help="New account name")
@click.option("--description", help="New description")
@click.option(
    "--type",
    "account_type",
    type=click.Choice(ACCOUNT_TYPES, case_sensitive=False),
    help="New account type (only before any posting)",
)
@click.option("--parent", help="New parent account code")
@click.option("--no-parent", is_flag=True, help="Detach the account from its parent")
@click.pass_context
def update_account(
    ctx,
    code: str,
    name: str | None,
    description: str | None,
    account_type: str | None,
    parent: str | None,
    no_parent: bool,
) -> None:
    """Update an account. The code itself cannot be changed.

    Examples:
        contabil account update 5121 --name "Cont curent BT"
        contabil account update 4111 --no-parent
    """
    db = ctx.obj["db"]
    service = AccountService(db)
    account = resolve_account_or_exit(ctx, service, code)

    parent_id = None
    if parent is not None:
        parent_id = resolve_account_or_exit(ctx, service, parent).id

    try:
        updated = service.update_account(
            account_id=account.id,
            name=name,
            description=description,
            account_type=account_type,
            parent_id=parent_id,
            clear_parent=no_parent,
        )
        click.echo(f"Updated account {updated.code} '{updated.name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


@account_group.command("deactivate")
@click.argument("code", metavar="CODE")
@click.pass_context
def deactivate_account(ctx, code: str) -> None:
    """Deactivate an account.

    Only accounts with a zero balance can be deactivated. Posted history
    stays in every report.
    """
    db = ctx.obj["db"]
    service = AccountService(db)
    account = resolve_account_or_exit(ctx, service, code)

    try:
        service.deactivate_account(account.id)
        click.echo(f"Deactivated account {account.code}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@account_group.command("reactivate")
@click.argument("code", metavar="CODE")
@click.pass_context
def reactivate_account(ctx, code: str) -> None:
    """Reactivate a deactivated account."""
    db = ctx.obj["db"]
    service = AccountService(db)
    account = resolve_account_or_exit(ctx, service, code)

    service.reactivate_account(account.id)
    click.echo(f"Reactivated account {account.code}")


def _display_tree(nodes, indent=0):
    """Recursively display account tree."""
    for node in nodes:
        status = "" if node.is_active else " (inactive)"
        click.echo(f"{'    ' * indent}{node.code} {node.name}{status}")
        if node.children:
            _display_tree(node.children, indent + 1)


@account_group.command("tree")
@click.option("--all", "include_inactive", is_flag=True, help="Include inactive accounts")
@click.pass_context
def account_tree(ctx, include_inactive: bool):
    """Display the chart of accounts as a tree."""
    db = ctx.obj["db"]
    service = AccountService(db)

    tree = service.get_account_tree(include_inactive=include_inactive)
    if not tree:
        click.echo("No accounts found.")
        return

    _display_tree(tree)


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
