"""Main CLI entry point."""

import click

from contabil.database.factories import create_database
from contabil.logging_config import setup_logging

# Import and register all commands at module level
from contabil.cli.commands import (
    account,
    entry,
    init_accounts,
    invoice,
    report,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to SQLite database file (overrides CONTABIL_DB_PATH environment variable)",
    envvar="CONTABIL_DB_PATH",
)
@click.option(
    "--database-url",
    help="SQLAlchemy database URL (overrides CONTABIL_DATABASE_URL environment variable)",
    envvar="CONTABIL_DATABASE_URL",
)
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def cli(ctx, db_path: str | None, database_url: str | None, verbose: bool):
    """Contabil - Double-entry general ledger.

    Keep a chart of accounts, post balanced journal entries and produce
    trial balance, income statement and balance sheet reports.
    """
    ctx.ensure_object(dict)
    setup_logging("DEBUG" if verbose else None)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_database(database_url=database_url, database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
init_accounts.register_commands(cli)
entry.register_commands(cli)
invoice.register_commands(cli)
report.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
