"""Date parsing utilities."""

from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

_WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


def parse_statement_date(date_str: str) -> date:
    """Normalize a bank statement date to a calendar date.

    Ambiguous numeric dates are read month first ("03/04/2024" is March 4),
    and any time-of-day component is discarded.

    Args:
        date_str: Date text from a CSV field

    Returns:
        Date object

    Raises:
        ValueError: If the text is not a recognizable date
    """
    if not date_str or not date_str.strip():
        raise ValueError("Empty date string")
    try:
        return date_parser.parse(date_str.strip(), dayfirst=False).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}") from e


def parse_date(date_str: str) -> date:
    """Parse a user-supplied date, including relative forms.

    Supports:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "tomorrow",
      "last/this/next month|year|week", "last monday"

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if text in relative_dates:
        return relative_dates[text]

    prefix, _, period = text.partition(" ")
    if prefix == "last":
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        if period == "year":
            return today.replace(month=1, day=1) - relativedelta(years=1)
        if period == "week":
            return today - timedelta(days=today.weekday() + 7)
        if period in _WEEKDAYS:
            days_ago = (today.weekday() - _WEEKDAYS.index(period)) % 7 or 7
            return today - timedelta(days=days_ago)
    elif prefix == "this":
        if period == "month":
            return today.replace(day=1)
        if period == "year":
            return today.replace(month=1, day=1)
        if period == "week":
            return today - timedelta(days=today.weekday())
    elif prefix == "next":
        if period == "month":
            return (today + relativedelta(months=1)).replace(day=1)
        if period == "year":
            return today.replace(month=1, day=1) + relativedelta(years=1)
        if period == "week":
            return today + timedelta(days=7 - today.weekday())

    return parse_statement_date(text)
