"""CLI helpers for account resolution and error handling."""

from __future__ import annotations

import click
from checkbook.domain.account import AccountService
from checkbook.domain.session import LedgerSession
from checkbook.utils.account_resolver import resolve_account


def resolve_account_or_exit(
    ctx: click.Context, account_service: AccountService, account: str | int
) -> int:
    """Resolve account name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_account(account_service, account)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def current_account_or_exit(ctx: click.Context, account: str | None) -> int:
    """Resolve ``--account`` or fall back to the session's current account.

    Exits with an error when no account is given and none is selected.
    """
    db = ctx.obj["db"]
    if account is not None:
        return resolve_account_or_exit(ctx, AccountService(db), account)

    session = LedgerSession(db).load()
    if session.current_account_id is None:
        click.echo(
            "Error: No account selected. Create one with 'checkbook account create' "
            "or pass --account.",
            err=True,
        )
        ctx.exit(1)
    return session.current_account_id
