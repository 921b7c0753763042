"""Ledger register command."""

import click
from checkbook.cli.account_resolution import current_account_or_exit
from checkbook.cli.formatting import format_amount_cell, format_currency
from checkbook.domain.entities import TransactionFilters
from checkbook.domain.ledger import build_register
from checkbook.domain.session import LedgerSession
from checkbook.domain.transaction import TransactionService


@click.command("view")
@click.option("--account", help="Account name or ID (defaults to the current account)")
@click.option("--all", "show_all", is_flag=True, help="Ignore saved filters")
@click.pass_context
def view_register(ctx, account: str | None, show_all: bool):
    """Show the account register with a running balance.

    Saved filters (see 'checkbook filter') are applied unless --all is given.
    """
    db = ctx.obj["db"]
    account_id = current_account_or_exit(ctx, account)
    session = LedgerSession(db).load()
    filters = session.filters
    if show_all:
        filters = TransactionFilters()

    account_obj = db.get_account(account_id)
    transactions = TransactionService(db).list_transactions(account_id)
    register = build_register(transactions, filters)

    click.echo(f"\n{account_obj.name}")
    if not filters.is_default():
        click.echo("(filtered)")
    click.echo("-" * 100)
    click.echo(
        f"{'ID':<6} {'Date':<12} {'Code':<8} {'Description':<30} "
        f"{'Withdrawal':>11} {'Deposit':>11} {'R':^3} {'Balance':>13}"
    )
    click.echo("-" * 100)

    for row in register.rows:
        txn = row.transaction
        click.echo(
            f"{txn.id:<6} {str(txn.date):<12} {txn.code[:8]:<8} {txn.description[:30]:<30} "
            f"{format_amount_cell(txn.withdrawal):>11} {format_amount_cell(txn.deposit):>11} "
            f"{'x' if txn.reconciled else '':^3} {format_currency(row.balance):>13}"
        )

    if not register.rows:
        click.echo("No transactions found.")
    click.echo("-" * 100)
    click.echo(f"Balance: {format_currency(register.balance)}")


def register_commands(cli):
    """Register view command with main CLI."""
    cli.add_command(view_register)
