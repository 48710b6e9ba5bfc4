"""CLI helpers for account resolution."""

from __future__ import annotations

import click

from contabil.cli.error_handling import handle_domain_error
from contabil.domain.account import AccountService
from contabil.domain.entities import Account
from contabil.domain.errors import AccountNotFoundError


def resolve_account_or_exit(
    ctx: click.Context, account_service: AccountService, code: str
) -> Account:
    """Resolve an account code, or exit with a CLI error."""
    try:
        return account_service.require_account_by_code(code)
    except AccountNotFoundError as exc:
        handle_domain_error(ctx, exc)
