"""Recurring payment record entities."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from .bill import Bill


@dataclass(frozen=True)
class BillSnapshot:
    """
    Denormalized copy of the bill fields kept alongside payment history.

    Only fields with a value are persisted; empty strings and zero
    amounts are dropped rather than stored as placeholders.
    """

    payee: Optional[str] = None
    recurring_date: Optional[int] = None
    payment_amount: Optional[float] = None
    nickname: Optional[str] = None

    @classmethod
    def from_bill(cls, bill: Bill) -> "BillSnapshot":
        return cls(
            payee=bill.payee,
            recurring_date=bill.recurring_date,
            payment_amount=bill.payment_amount,
            nickname=bill.nickname,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.payee:
            data["payee"] = self.payee
        if self.recurring_date is not None:
            data["recurring_date"] = self.recurring_date
        if self.payment_amount:
            data["payment_amount"] = self.payment_amount
        if self.nickname:
            data["nickname"] = self.nickname
        return data


@dataclass(frozen=True)
class Payment:
    """
    A single entry in a bill's payment history.

    Entries are immutable once appended. Month is 0-based.
    """

    id: str
    date: datetime
    amount: float
    month: int
    year: int
    payee: Optional[str] = None


@dataclass
class RecurringPaymentRecord:
    """Per-user, per-bill payment ledger, most recent payment first."""

    user_id: str
    bill_id: str
    bill_data: BillSnapshot
    created_at: datetime
    updated_at: datetime
    payment_history: List[Payment] = field(default_factory=list)
    last_payment_date: Optional[datetime] = None

    @property
    def doc_id(self) -> str:
        return record_key(self.user_id, self.bill_id)

    @property
    def total_payments(self) -> int:
        return len(self.payment_history)


def record_key(user_id: str, bill_id: str) -> str:
    """Deterministic document key for a (user, bill) pair."""
    return f"{user_id}_{bill_id}"
