"""Initialize the default Romanian chart of accounts."""

import click

from contabil.domain.account import AccountService
from contabil.domain.errors import DomainError


# Initial chart (OMFP 1802/2014 subset): (code, name, type, parent code)
INITIAL_ACCOUNTS = [
    # Class 1 - Capital
    ("101", "Capital", "equity", None),
    ("1012", "Capital subscris vărsat", "equity", "101"),
    ("117", "Rezultatul reportat", "equity", None),
    ("121", "Profit sau pierdere", "equity", None),
    # Class 2 - Fixed assets
    ("2131", "Echipamente tehnologice", "asset", None),
    # Class 3 - Inventory
    ("371", "Mărfuri", "asset", None),
    # Class 4 - Third parties
    ("401", "Furnizori", "liability", None),
    ("411", "Clienți", "asset", None),
    ("421", "Personal - salarii datorate", "liability", None),
    ("4423", "TVA de plată", "liability", None),
    ("4424", "TVA de recuperat", "asset", None),
    ("4426", "TVA deductibilă", "asset", None),
    ("4427", "TVA colectată", "liability", None),
    # Class 5 - Treasury
    ("512", "Conturi curente la bănci", "asset", None),
    ("5121", "Conturi la bănci în lei", "asset", "512"),
    ("5124", "Conturi la bănci în valută", "asset", "512"),
    ("531", "Casa", "asset", None),
    ("5311", "Casa în lei", "asset", "531"),
    # Class 6 - Expenses
    ("60", "Cheltuieli privind stocurile", "expense", None),
    ("602", "Cheltuieli cu materialele consumabile", "expense", "60"),
    ("604", "Cheltuieli privind materialele nestocate", "expense", "60"),
    ("607", "Cheltuieli privind mărfurile", "expense", "60"),
    ("61", "Cheltuieli cu serviciile executate de terți", "expense", None),
    ("611", "Cheltuieli cu întreținerea și reparațiile", "expense", "61"),
    ("612", "Cheltuieli cu redevențele, locațiile de gestiune și chiriile", "expense", "61"),
    ("62", "Cheltuieli cu alte servicii executate de terți", "expense", None),
    ("623", "Cheltuieli de protocol, reclamă și publicitate", "expense", "62"),
    ("626", "Cheltuieli poștale și taxe de telecomunicații", "expense", "62"),
    ("627", "Cheltuieli cu serviciile bancare și asimilate", "expense", "62"),
    ("628", "Alte cheltuieli cu serviciile executate de terți", "expense", "62"),
    ("64", "Cheltuieli cu personalul", "expense", None),
    ("641", "Cheltuieli cu salariile personalului", "expense", "64"),
    # Class 7 - Revenue
    ("70", "Cifra de afaceri netă", "revenue", None),
    ("704", "Venituri din servicii prestate", "revenue", "70"),
    ("707", "Venituri din vânzarea mărfurilor", "revenue", "70"),
    ("76", "Venituri financiare", "revenue", None),
    ("766", "Venituri din dobânzi", "revenue", "76"),
]


@click.command("init-accounts")
@click.option("--force", is_flag=True, help="Add missing default accounts to an existing chart")
@click.pass_context
def init_accounts(ctx, force: bool):
    """Initialize database with the default chart of accounts."""
    db = ctx.obj["db"]
    service = AccountService(db)

    # Check if accounts already exist
    existing = service.list_accounts(include_inactive=True)
    if existing and not force:
        click.echo("Accounts already exist. Use --force to add missing default accounts.")
        return

    click.echo("Creating default chart of accounts...")

    # Parents are listed before their children, so codes resolve in one pass
    ids_by_code = {acc.code: acc.id for acc in existing}
    created = 0
    errors = 0

    for code, name, account_type, parent_code in INITIAL_ACCOUNTS:
        if code in ids_by_code:
            continue
        try:
            account = service.create_account(
                code=code,
                name=name,
                account_type=account_type,
                parent_id=ids_by_code.get(parent_code) if parent_code else None,
            )
            ids_by_code[code] = account.id
            created += 1
        except DomainError as e:
            click.echo(f"Warning: Could not create account '{code}': {e}", err=True)
            errors += 1

    if errors == 0:
        click.echo(f"Successfully created {created} accounts.")
    else:
        click.echo(f"Created {created} accounts with {errors} errors.")


def register_commands(cli):
    """Register init-accounts command with main CLI."""
    cli.add_command(init_accounts)
