"""
Loan approval rule table.

Rules are evaluated top-down and the first match decides:

1. Non-positive or non-numeric amount: declined, "Invalid amount".
2. Missing score or score below the floor: declined, "Insufficient credit score".
3. Small-loan carve-out: a score under the ceiling with a small enough
   amount is approved even though the general rules would not cover it.
4. General rules, highest score floor first: the first rule whose score
   floor and amount ceiling both admit the request approves it.
5. Nothing matched: declined, "Amount too high for your credit score".

Since the score floor is checked before the carve-out, the carve-out
only applies to scores between the floor and its ceiling.
"""

from typing import Any

from .models import ApprovalResult, LoanQuote
from .numbers import as_number
from .settings import UnderwritingSettings, underwriting_settings
from .terms import calculate_monthly_payment, get_loan_term

REASON_INVALID_AMOUNT = "Invalid amount"
REASON_INSUFFICIENT_SCORE = "Insufficient credit score"
REASON_SMALL_LOAN = "Approved - Small loan available despite low credit score"
REASON_APPROVED = "Approved"
REASON_AMOUNT_TOO_HIGH = "Amount too high for your credit score"


def check_loan_approval(
    amount: Any,
    credit_score: Any,
    settings: UnderwritingSettings = underwriting_settings,
) -> ApprovalResult:
    """
    Decide whether a loan of the given amount is approved for a score.

    Args:
        amount: Requested amount in currency units
        credit_score: Applicant's credit score, may be None
        settings: Underwriting settings (uses defaults if not provided)

    Returns:
        ApprovalResult with the outcome and its reason
    """
    value = as_number(amount)
    if value is None or value <= 0:
        return ApprovalResult(approved=False, reason=REASON_INVALID_AMOUNT)

    score = as_number(credit_score)
    if score is None or score < settings.min_credit_score:
        return ApprovalResult(approved=False, reason=REASON_INSUFFICIENT_SCORE)

    if score < settings.small_loan_score_ceiling and value <= settings.small_loan_max_amount:
        return ApprovalResult(approved=True, reason=REASON_SMALL_LOAN)

    for min_score, max_amount in settings.approval_rules:
        if score >= min_score and value <= max_amount:
            return ApprovalResult(approved=True, reason=REASON_APPROVED)

    return ApprovalResult(approved=False, reason=REASON_AMOUNT_TOO_HIGH)


def quote_loan(
    amount: Any,
    credit_score: Any,
    settings: UnderwritingSettings = underwriting_settings,
) -> LoanQuote:
    """Run term selection, payment calculation and approval together."""
    term = get_loan_term(amount, settings)
    payment = calculate_monthly_payment(amount, term, settings)
    decision = check_loan_approval(amount, credit_score, settings)
    value = as_number(amount)
    score = as_number(credit_score)

    return LoanQuote(
        amount=value if value is not None else 0.0,
        credit_score=int(score) if score is not None else None,
        term_months=term,
        monthly_payment=payment,
        approved=decision.approved,
        reason=decision.reason,
    )
