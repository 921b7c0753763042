"""Register filter commands."""

import click
from checkbook.cli.error_handling import handle_domain_error
from checkbook.domain.entities import TransactionFilters
from checkbook.domain.errors import DomainError
from checkbook.domain.session import LedgerSession, make_filters
from checkbook.utils.amount_parser import parse_amount
from checkbook.utils.date_parser import parse_date


@click.group()
def filter_group():
    """Manage saved register filters."""
    pass


@filter_group.command("set")
@click.option("--start-date", help="Earliest date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="Latest date (YYYY-MM-DD or relative like 'today')")
@click.option("--description", default="", help="Text the description must contain")
@click.option(
    "--reconciled",
    type=click.Choice(TransactionFilters.RECONCILED_CHOICES),
    default="all",
    show_default=True,
)
@click.option("--amount", help="Exact deposit or withdrawal amount")
@click.option(
    "--sort",
    "sort_order",
    type=click.Choice(TransactionFilters.SORT_CHOICES),
    default="oldest",
    show_default=True,
)
@click.pass_context
def set_filters(
    ctx,
    start_date: str | None,
    end_date: str | None,
    description: str,
    reconciled: str,
    amount: str | None,
    sort_order: str,
) -> None:
    """Replace the saved filters used by 'checkbook view'.

    Examples:
        checkbook filter set --reconciled unreconciled
        checkbook filter set --start-date "this month" --sort newest
    """
    try:
        start = parse_date(start_date) if start_date else None
        end = parse_date(end_date) if end_date else None
    except ValueError as e:
        click.echo(f"Error: Invalid date: {e}", err=True)
        ctx.exit(1)

    try:
        amount_value = parse_amount(amount) if amount else None
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        filters = make_filters(
            start_date=start,
            end_date=end,
            description=description,
            reconciled=reconciled,
            amount=amount_value,
            sort_order=sort_order,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    LedgerSession(ctx.obj["db"]).set_filters(filters)
    click.echo("Filters saved.")


@filter_group.command("clear")
@click.pass_context
def clear_filters(ctx) -> None:
    """Remove all saved filters."""
    LedgerSession(ctx.obj["db"]).clear_filters()
    click.echo("Filters cleared.")


@filter_group.command("show")
@click.pass_context
def show_filters(ctx) -> None:
    """Show the saved filters."""
    filters = LedgerSession(ctx.obj["db"]).load().filters
    if filters.is_default():
        click.echo("No filters set.")
        return

    click.echo(f"  Start date:  {filters.start_date or '-'}")
    click.echo(f"  End date:    {filters.end_date or '-'}")
    click.echo(f"  Description: {filters.description or '-'}")
    click.echo(f"  Reconciled:  {filters.reconciled}")
    click.echo(f"  Amount:      {filters.amount if filters.amount is not None else '-'}")
    click.echo(f"  Sort order:  {filters.sort_order}")


def register_commands(cli):
    """Register filter commands with main CLI."""
    cli.add_command(filter_group, name="filter")
