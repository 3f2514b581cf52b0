"""CLI helpers for account resolution and error handling."""

from __future__ import annotations

import click
from bookkeep.domain.account import AccountService
from bookkeep.domain.entities import Account
from bookkeep.utils.account_resolver import resolve_account


def resolve_account_or_exit(
    ctx: click.Context,
    account_service: AccountService,
    account: str,
    active_only: bool = False,
) -> Account:
    """Resolve account name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_account(account_service, account, active_only=active_only)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
