"""CSV import and reconciliation command."""

import click
from checkbook.cli.account_resolution import current_account_or_exit
from checkbook.cli.error_handling import handle_domain_error
from checkbook.cli.formatting import describe_transaction
from checkbook.domain.csv_import import CSVImportService
from checkbook.domain.errors import DomainError


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--account", help="Account name or ID (defaults to the current account)")
@click.option(
    "--reconcile-new",
    is_flag=True,
    help="Mark newly added transactions as reconciled",
)
@click.option(
    "--sync",
    "sync_mode",
    is_flag=True,
    help="Only add new transactions; never change existing ones",
)
@click.option("--yes", "-y", "assume_yes", is_flag=True, help="Apply without asking")
@click.option("--show", is_flag=True, help="List the matched and new transactions")
@click.pass_context
def import_csv(
    ctx,
    csv_file: str,
    account: str | None,
    reconcile_new: bool,
    sync_mode: bool,
    assume_yes: bool,
    show: bool,
):
    """Import a bank CSV export and reconcile it against the ledger.

    Rows that match an existing transaction (same amount, dates at most one
    day apart) mark that transaction reconciled; the rest are added.
    """
    db = ctx.obj["db"]
    service = CSVImportService(db)
    account_id = current_account_or_exit(ctx, account)

    try:
        plan = service.plan_file(csv_file_path=csv_file, account_id=account_id)
    except (DomainError, FileNotFoundError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Format: {plan.format_name}")
    click.echo(plan.summary)
    for warning in plan.skipped:
        click.echo(f"  Skipped {warning}", err=True)

    if show:
        for txn in plan.to_update:
            click.echo(f"  reconcile {describe_transaction(txn)}")
        for record in plan.to_add:
            click.echo(f"  add       {describe_transaction(record)}")

    if sync_mode and plan.to_update:
        click.echo("Sync mode: matched transactions will not be changed.")

    if not assume_yes and not click.confirm("Apply these changes?"):
        click.echo("Import cancelled.")
        return

    try:
        result = service.execute(plan, reconcile_new=reconcile_new, sync_mode=sync_mode)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nReconciliation complete. {result.updated} updated, {result.added} added.")


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_csv)
