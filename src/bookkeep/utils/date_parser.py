"""Date parsing utilities."""

import re
from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "tomorrow"

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    # Handle relative dates
    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    # Try parsing as absolute date
    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def month_range(year: int, month: int) -> tuple[date, date]:
    """Get the first day of a month and the first day of the following month.

    Args:
        year: Calendar year
        month: Month number, 1-12

    Returns:
        Tuple of (start_date, end_date) where end_date is exclusive

    Raises:
        ValueError: If month is out of range
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")
    start_date = date(year, month, 1)
    return (start_date, start_date + relativedelta(months=1))


def parse_month(month_str: str) -> tuple[int, int]:
    """Parse a month string into (year, month).

    Supports "YYYY-MM", "YYYY/MM", "this month" and "last month".

    Raises:
        ValueError: If month string cannot be parsed
    """
    month_str = month_str.strip().lower()
    today = date.today()

    if month_str == "this month":
        return (today.year, today.month)
    if month_str == "last month":
        previous = today.replace(day=1) - relativedelta(months=1)
        return (previous.year, previous.month)

    match = re.fullmatch(r"(\d{4})[-/](\d{1,2})", month_str)
    if match is None:
        raise ValueError(f"Could not parse month '{month_str}': expected YYYY-MM")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise ValueError(f"Could not parse month '{month_str}': month must be 1-12")
    return (year, month)
