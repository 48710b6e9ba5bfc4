"""Rendering of ledger errors on the command line."""

import logging

import click

from contabil.domain.errors import DomainError

logger = logging.getLogger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Print ``Error: <message>`` on stderr and exit with status 1.

    The rejecting command and the error class are logged, so ``--verbose``
    shows which ledger rule refused the input.
    """
    logger.info(f"{ctx.command_path or ctx.info_name} refused: {type(error).__name__}: {error}")
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
