"""
Loan term selection and amortized payment calculation.
"""

import math
from typing import Any

from .numbers import as_number
from .settings import UnderwritingSettings, underwriting_settings


def get_loan_term(
    amount: Any,
    settings: UnderwritingSettings = underwriting_settings,
) -> int:
    """
    Pick the loan term in months for an amount.

    Steps through the term tiers in ascending order; the first tier whose
    ceiling covers the amount wins. Amounts above every tier get the
    maximum term.

    Args:
        amount: Requested amount in currency units
        settings: Underwriting settings (uses defaults if not provided)

    Returns:
        Term in months. Non-positive or non-numeric amounts get the
        default term.
    """
    value = as_number(amount)
    if value is None or value <= 0:
        return settings.default_term_months

    for max_amount, months in settings.term_tiers:
        if value <= max_amount:
            return months

    return settings.max_term_months


def calculate_monthly_payment(
    amount: Any,
    months: Any,
    settings: UnderwritingSettings = underwriting_settings,
) -> float:
    """
    Standard amortized payment: P * r * (1 + r)^n / ((1 + r)^n - 1).

    Args:
        amount: Principal in currency units
        months: Number of monthly payments
        settings: Underwriting settings (uses defaults if not provided)

    Returns:
        Monthly payment. 0 for non-positive input or whenever the formula
        doesn't produce a finite number.
    """
    principal = as_number(amount)
    periods = as_number(months)
    if principal is None or periods is None or principal <= 0 or periods <= 0:
        return 0.0

    rate = settings.monthly_rate
    try:
        if rate == 0:
            payment = principal / periods
        else:
            factor = (1 + rate) ** periods
            payment = principal * rate * factor / (factor - 1)
    except (OverflowError, ZeroDivisionError):
        return 0.0

    if not math.isfinite(payment):
        return 0.0
    return payment
