"""Utility functions for bookkeep."""

from bookkeep.utils.date_parser import parse_date, parse_month, month_range
from bookkeep.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_month", "month_range", "parse_amount"]
