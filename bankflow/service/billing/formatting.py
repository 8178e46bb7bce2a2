"""User-facing number formatting."""

from typing import Any

from bankflow.service.underwriting.numbers import as_number


def format_currency(amount: Any) -> str:
    """
    Two fixed decimals with thousands grouping and no currency symbol.

    >>> format_currency(1234567.5)
    '1,234,567.50'

    Non-numeric input renders as 0.00.
    """
    value = as_number(amount)
    if value is None:
        value = 0.0
    return f"{value:,.2f}"
