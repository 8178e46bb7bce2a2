"""Data transfer objects for recurring payment tracking and migration."""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from bankflow.domain.entities import Payment


@dataclass(frozen=True)
class PaymentRequest:
    """
    A payment to append to a bill's history.

    Month (0-based) and year default to the payment's own date, and so
    does a month outside 0-11 or a year that isn't an int. paid_at
    is left empty for live payments and set when replaying old ones.
    """
    amount: float
    payee: Optional[str] = None
    month: Optional[int] = None
    year: Optional[int] = None
    paid_at: Optional[datetime] = None


@dataclass(frozen=True)
class BillPaymentStatus:
    """Payment summary for a single bill."""

    paid_this_month: bool
    last_payment_date: Optional[datetime]
    total_payments: int
    payment_history: List[Payment]


@dataclass(frozen=True)
class MigrationResult:
    """Outcome of moving legacy local history into recurring payment records."""

    migrated: bool
    migrated_count: int = 0
    total_payments: int = 0
    message: str = ""
    error: Optional[str] = None
