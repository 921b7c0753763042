"""Add transaction command."""

import click
from datetime import date as date_type
from checkbook.cli.account_resolution import current_account_or_exit
from checkbook.cli.error_handling import handle_domain_error
from checkbook.domain.errors import DomainError
from checkbook.domain.transaction import TransactionService
from checkbook.utils.date_parser import parse_date
from checkbook.utils.amount_parser import parse_amount


@click.command("add")
@click.option("--account", help="Account name or ID (defaults to the current account)")
@click.option(
    "--date",
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday'); defaults to today",
)
@click.option("--description", required=True, help="Payee or memo")
@click.option("--code", default="", help="Check number or other short code")
@click.option("--deposit", help="Deposit amount (e.g., 100.00)")
@click.option("--withdrawal", help="Withdrawal amount (e.g., 42.50)")
@click.option("--reconciled", is_flag=True, help="Mark the transaction as already reconciled")
@click.pass_context
def add_transaction(
    ctx,
    account: str | None,
    date: str | None,
    description: str,
    code: str,
    deposit: str | None,
    withdrawal: str | None,
    reconciled: bool,
):
    """Add a transaction manually.

    Examples:
        checkbook add --description "Paycheck" --deposit 1500.00
        checkbook add --date 2024-01-15 --code 1042 --description "Rent" --withdrawal 900
    """
    db = ctx.obj["db"]
    service = TransactionService(db)
    account_id = current_account_or_exit(ctx, account)

    try:
        txn_date = parse_date(date) if date else date_type.today()
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        deposit_amount = parse_amount(deposit) if deposit else parse_amount("0")
        withdrawal_amount = parse_amount(withdrawal) if withdrawal else parse_amount("0")
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        transaction_id = service.create_transaction(
            account_id=account_id,
            date=txn_date,
            description=description,
            code=code,
            deposit=deposit_amount,
            withdrawal=withdrawal_amount,
            reconciled=reconciled,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"  Date: {txn_date}")
    click.echo(f"  Description: {description}")
    if deposit_amount:
        click.echo(f"  Deposit: ${deposit_amount:,.2f}")
    if withdrawal_amount:
        click.echo(f"  Withdrawal: ${withdrawal_amount:,.2f}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
