"""Account management commands."""

import click
from checkbook.cli.account_resolution import resolve_account_or_exit
from checkbook.cli.error_handling import handle_domain_error
from checkbook.domain.account import AccountService
from checkbook.domain.errors import DomainError
from checkbook.domain.session import LedgerSession


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.pass_context
def create_account(ctx, name: str):
    """Create a new account and make it the current one.

    Examples:
        checkbook account create "Checking"
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    try:
        account_id = service.create_account(name=name)
        LedgerSession(db).select_account(account_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created account '{name.strip()}' (ID: {account_id})")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts. The current account is marked with '*'."""
    db = ctx.obj["db"]
    service = AccountService(db)

    accounts = service.list_accounts()
    if not accounts:
        click.echo("No accounts found.")
        return

    current_id = LedgerSession(db).load().current_account_id
    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for acc in accounts:
        marker = "*" if acc.id == current_id else " "
        count = db.count_transactions(account_id=acc.id)
        click.echo(f"{marker} ID: {acc.id:3d} | {acc.name:20s} | {count} transaction(s)")


@account_group.command("use")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def use_account(ctx, account: str) -> None:
    """Switch the current account.

    ACCOUNT can be an account name or ID.
    """
    db = ctx.obj["db"]
    account_id = resolve_account_or_exit(ctx, AccountService(db), account)
    LedgerSession(db).select_account(account_id)
    click.echo(f"Switched to account '{db.get_account(account_id).name}'")


@account_group.command("rename")
@click.argument("account", metavar="ACCOUNT")
@click.argument("new_name", metavar="NEW_NAME")
@click.pass_context
def rename_account(ctx, account: str, new_name: str) -> None:
    """Rename an account.

    ACCOUNT can be an account name or ID.

    Examples:
        checkbook account rename "Checking" "Joint Checking"
        checkbook account rename 1 "Savings"
    """
    db = ctx.obj["db"]
    service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, service, account)

    try:
        service.rename_account(account_id=account_id, name=new_name)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Renamed account to '{new_name.strip()}'")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def delete_account(ctx, account: str) -> None:
    """Delete an account and all of its transactions.

    ACCOUNT can be an account name or ID. This cannot be undone.
    """
    db = ctx.obj["db"]
    service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, service, account)
    account_obj = service.get_account(account_id)

    if not click.confirm(
        f"Delete account '{account_obj.name}' and all its transactions? This cannot be undone."
    ):
        click.echo("Deletion cancelled.")
        return

    session = LedgerSession(db).load()
    try:
        deleted = service.delete_account(account_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    if session.current_account_id == account_id:
        session.forget_account()
    click.echo(f"Deleted account '{account_obj.name}' and {deleted} transaction(s)")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
