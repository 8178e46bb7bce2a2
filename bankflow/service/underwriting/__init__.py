"""
Loan Underwriting Engine

Pure functions, no I/O: term selection, amortized payment and the
approval rule table.
"""

from .models import ApprovalResult, LoanQuote
from .settings import UnderwritingSettings, underwriting_settings
from .numbers import as_number
from .terms import get_loan_term, calculate_monthly_payment
from .approval import (
    check_loan_approval,
    quote_loan,
    REASON_AMOUNT_TOO_HIGH,
    REASON_APPROVED,
    REASON_INSUFFICIENT_SCORE,
    REASON_INVALID_AMOUNT,
    REASON_SMALL_LOAN,
)

__all__ = [
    # Settings
    "UnderwritingSettings",
    "underwriting_settings",
    # Models
    "ApprovalResult",
    "LoanQuote",
    # Terms
    "as_number",
    "get_loan_term",
    "calculate_monthly_payment",
    # Approval
    "check_loan_approval",
    "quote_loan",
    "REASON_AMOUNT_TOO_HIGH",
    "REASON_APPROVED",
    "REASON_INSUFFICIENT_SCORE",
    "REASON_INVALID_AMOUNT",
    "REASON_SMALL_LOAN",
]
