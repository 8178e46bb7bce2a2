"""
Data models for loan underwriting.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ApprovalResult:
    """
    Outcome of the approval rule table.

    Attributes:
        approved: Whether the loan is approved
        reason: Human-readable reason, also set on approval
    """
    approved: bool
    reason: str


@dataclass(frozen=True)
class LoanQuote:
    """
    Term, payment and decision for an amount and score, without persisting anything.

    Attributes:
        amount: Requested amount in currency units
        credit_score: Score the decision was made against
        term_months: Term picked for the amount
        monthly_payment: Amortized payment, 0 when degenerate
        approved: Approval outcome
        reason: Reason from the rule table
    """
    amount: float
    credit_score: Optional[int]
    term_months: int
    monthly_payment: float
    approved: bool
    reason: str
