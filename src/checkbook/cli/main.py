"""Main CLI entry point."""

import logging

import click
from checkbook.database.factories import DB_PATH_ENV, create_sqlite_database

# Import and register all commands at module level
from checkbook.cli.commands import (
    account,
    add,
    transaction,
    view,
    filter_cmd,
    import_cmd,
    export,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {DB_PATH_ENV} environment variable)",
    envvar=DB_PATH_ENV,
)
@click.option("--verbose", "-v", is_flag=True, help="Log progress details to stderr")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Checkbook - personal ledger with bank statement reconciliation.

    Record transactions, keep a running balance, and reconcile against CSV
    exports downloaded from your bank.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
add.register_commands(cli)
transaction.register_commands(cli)
view.register_commands(cli)
filter_cmd.register_commands(cli)
import_cmd.register_commands(cli)
export.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
