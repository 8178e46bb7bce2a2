"""Data transfer objects for loan requests."""

from dataclasses import dataclass
from typing import List, Optional

from bankflow.domain.entities import LoanType

LOAN_TYPES = frozenset(t.value for t in LoanType)


@dataclass(frozen=True)
class LoanRequest:
    """Input data for requesting a loan."""
    user_id: str
    loan_type: str
    amount: float
    description: Optional[str] = None
    customer_id: Optional[str] = None
    credit_score: Optional[int] = None

    def validate(self) -> List[str]:
        errors = []

        if not self.user_id or not self.user_id.strip():
            errors.append("user_id is required")

        if self.loan_type not in LOAN_TYPES:
            errors.append(f"loan_type must be one of: {', '.join(sorted(LOAN_TYPES))}")

        if self.amount is None or self.amount <= 0:
            errors.append("amount must be positive")

        if self.credit_score is None and not self.customer_id:
            errors.append("customer_id or credit_score is required")

        return errors
