"""Transaction management commands."""

import click
from checkbook.cli.account_resolution import current_account_or_exit
from checkbook.cli.error_handling import handle_domain_error
from checkbook.cli.formatting import describe_transaction
from checkbook.domain.errors import DomainError
from checkbook.domain.transaction import TransactionService
from checkbook.utils.date_parser import parse_date
from checkbook.utils.amount_parser import parse_amount


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("edit")
@click.argument("transaction_id", type=int)
@click.option("--date", help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')")
@click.option("--code", help="Check number or other short code")
@click.option("--description", help="Payee or memo")
@click.option("--deposit", help="Deposit amount")
@click.option("--withdrawal", help="Withdrawal amount")
@click.pass_context
def edit_transaction(
    ctx,
    transaction_id: int,
    date: str | None,
    code: str | None,
    description: str | None,
    deposit: str | None,
    withdrawal: str | None,
) -> None:
    """Edit a transaction.

    Updates only the fields that are provided.

    Examples:
        checkbook transaction edit 7 --withdrawal 45.10
        checkbook transaction edit 7 --code 1043 --description "Electric bill"
    """
    db = ctx.obj["db"]
    service = TransactionService(db)

    txn_date = None
    if date is not None:
        try:
            txn_date = parse_date(date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    try:
        deposit_amount = parse_amount(deposit) if deposit is not None else None
        withdrawal_amount = parse_amount(withdrawal) if withdrawal is not None else None
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        service.update_transaction(
            transaction_id=transaction_id,
            date=txn_date,
            code=code,
            description=description,
            deposit=deposit_amount,
            withdrawal=withdrawal_amount,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("reconcile")
@click.argument("transaction_id", type=int)
@click.pass_context
def toggle_reconciled(ctx, transaction_id: int) -> None:
    """Toggle the reconciled flag of a transaction."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    try:
        txn = service.toggle_reconciled(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    state = "reconciled" if txn.reconciled else "unreconciled"
    click.echo(f"Transaction {transaction_id} marked {state}")


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.pass_context
def delete_transaction(ctx, transaction_id: int) -> None:
    """Delete a transaction.

    Examples:
        checkbook transaction delete 1
    """
    db = ctx.obj["db"]
    service = TransactionService(db)

    txn = service.get_transaction(transaction_id)
    if txn is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    if not click.confirm(f"Delete transaction {transaction_id} ({describe_transaction(txn)})?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted transaction {transaction_id}")


@transaction_group.command("purge")
@click.option(
    "--before",
    "cutoff",
    default="today",
    show_default=True,
    help="Purge reconciled transactions dated on or before this date",
)
@click.option("--account", help="Account name or ID (defaults to the current account)")
@click.pass_context
def purge_transactions(ctx, cutoff: str, account: str | None) -> None:
    """Permanently delete old reconciled transactions.

    Examples:
        checkbook transaction purge --before 2023-12-31
    """
    db = ctx.obj["db"]
    service = TransactionService(db)
    account_id = current_account_or_exit(ctx, account)

    try:
        cutoff_date = parse_date(cutoff)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    purgeable = service.find_purgeable(account_id, cutoff_date)
    if not purgeable:
        click.echo("No reconciled transactions were found on or before the selected date.")
        return

    if not click.confirm(
        f"This will permanently delete {len(purgeable)} reconciled transaction(s). Continue?"
    ):
        click.echo("Purge cancelled.")
        return

    deleted = service.purge_reconciled(account_id, cutoff_date)
    click.echo(f"Purged {deleted} transaction(s)")


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
