"""Bill entity as held by the remote account store."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class BillStatus(str, Enum):
    """Lifecycle status of a bill."""

    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    RECURRING = "recurring"


# Statuses from which a bill can still be paid or cancelled
OPEN_STATUSES = frozenset({BillStatus.PENDING, BillStatus.RECURRING})


@dataclass
class Bill:
    """
    A trackable obligation to pay a payee, one-time or recurring.

    Attributes:
        id: Opaque identifier assigned by the account store
        account_id: Account the bill is drawn against
        payee: Who gets paid
        payment_amount: Amount in currency units
        status: Current lifecycle status
        nickname: Optional display name
        payment_date: Optional fixed payment date, YYYY-MM-DD
        recurring_date: Optional day of month the bill recurs on
    """

    id: str
    account_id: str
    payee: str
    payment_amount: float
    status: BillStatus
    nickname: Optional[str] = None
    payment_date: Optional[str] = None
    recurring_date: Optional[int] = None

    @property
    def is_recurring(self) -> bool:
        return self.status == BillStatus.RECURRING or self.recurring_date is not None

    @property
    def is_open(self) -> bool:
        return self.status in OPEN_STATUSES

    @property
    def display_name(self) -> str:
        return self.nickname or self.payee
