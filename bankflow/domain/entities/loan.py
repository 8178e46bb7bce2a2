"""Loan entity representing a single underwriting outcome."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4


class LoanType(str, Enum):
    HOME = "home"
    AUTO = "auto"
    SMALL_BUSINESS = "small business"


class LoanStatus(str, Enum):
    APPROVED = "approved"
    DECLINED = "declined"


@dataclass(frozen=True)
class Loan:
    """
    A loan request and its decision.

    Loans are created once per request and never updated. Amount and
    monthly payment are stored as whole currency units, truncated.
    """

    user_id: str
    type: LoanType
    status: LoanStatus
    credit_score: int
    amount: int
    monthly_payment: int
    term_months: int
    description: str
    declined_reason: Optional[str] = None
    approved_at: Optional[datetime] = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def approved(self) -> bool:
        return self.status == LoanStatus.APPROVED
