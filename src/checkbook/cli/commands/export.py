"""Export, backup and restore commands."""

from datetime import date
from pathlib import Path

import click
from checkbook.cli.account_resolution import current_account_or_exit
from checkbook.cli.error_handling import handle_domain_error
from checkbook.domain.backup import BackupService, backup_filename
from checkbook.domain.csv_export import CSVExportService
from checkbook.domain.errors import DomainError
from checkbook.domain.session import LedgerSession


@click.command("export")
@click.option("--account", help="Account name or ID (defaults to the current account)")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True),
    help="File to write (prints to stdout if omitted)",
)
@click.pass_context
def export_csv(ctx, account: str | None, output: str | None) -> None:
    """Export an account's transactions as CSV.

    The file can be imported again with 'checkbook import'.
    """
    db = ctx.obj["db"]
    account_id = current_account_or_exit(ctx, account)

    try:
        text = CSVExportService(db).export_csv(account_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if output is None:
        click.echo(text, nl=False)
        return
    Path(output).write_text(text, encoding="utf-8")
    click.echo(f"Exported to {output}")


@click.command("backup")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True),
    help="File to write (defaults to checkbook_backup_<date>.json)",
)
@click.pass_context
def backup(ctx, output: str | None) -> None:
    """Save ALL accounts and transactions to a JSON file."""
    db = ctx.obj["db"]
    path = Path(output) if output else Path(backup_filename(date.today()))
    path.write_text(BackupService(db).export_json(), encoding="utf-8")
    click.echo(f"Backup written to {path}")


@click.command("restore")
@click.argument("json_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--yes", "-y", "assume_yes", is_flag=True, help="Restore without asking")
@click.pass_context
def restore(ctx, json_file: str, assume_yes: bool) -> None:
    """Replace ALL data with the contents of a JSON backup."""
    db = ctx.obj["db"]

    if not assume_yes and not click.confirm(
        "WARNING: This will replace ALL current data. This cannot be undone. Are you sure?"
    ):
        click.echo("Restore cancelled.")
        return

    try:
        accounts, transactions = BackupService(db).restore_json(
            Path(json_file).read_text(encoding="utf-8")
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    LedgerSession(db).forget_account()
    click.echo(f"Restored {accounts} account(s) and {transactions} transaction(s)")


def register_commands(cli):
    """Register export commands with main CLI."""
    cli.add_command(export_csv)
    cli.add_command(backup)
    cli.add_command(restore)
