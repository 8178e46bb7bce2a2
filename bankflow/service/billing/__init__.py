"""Bill scheduling and display helpers."""

from .dates import (
    days_in_month,
    days_until_next_payment,
    format_local_date,
    next_payment_date,
    parse_timestamp,
    subtract_months,
    to_iso_timestamp,
)
from .formatting import format_currency

__all__ = [
    "days_in_month",
    "days_until_next_payment",
    "format_local_date",
    "next_payment_date",
    "parse_timestamp",
    "subtract_months",
    "to_iso_timestamp",
    "format_currency",
]
