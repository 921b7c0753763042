"""Shared display formatting for CLI output."""

from decimal import Decimal

from checkbook.domain.entities import ParsedRecord, Transaction


def format_currency(amount: Decimal) -> str:
    """Format an amount as US dollars, e.g. -$1,234.50."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def format_amount_cell(amount: Decimal) -> str:
    """Format a deposit or withdrawal cell, blank when zero."""
    return f"{amount:,.2f}" if amount else ""


def describe_transaction(txn: Transaction | ParsedRecord) -> str:
    """One-line summary used in prompts and import previews."""
    return (
        f"{txn.date} {txn.description[:30]!r} "
        f"{format_currency(txn.signed_amount)}"
    )
