"""Utility functions for paytrack."""

from paytrack.utils.date_parser import parse_date, parse_datetime, get_date_range
from paytrack.utils.amount_parser import parse_amount, format_amount

__all__ = ["parse_date", "parse_datetime", "get_date_range", "parse_amount", "format_amount"]
