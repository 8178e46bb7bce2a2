"""Data transfer objects for bill lifecycle operations."""

from dataclasses import dataclass
from typing import List, Optional, Union

from bankflow.domain.entities import Bill, Payment
from bankflow.service.underwriting import as_number

MIN_RECURRING_DAY = 1
MAX_RECURRING_DAY = 31


@dataclass(frozen=True)
class CreateBillRequest:
    """Input for creating a bill; amount and recurring day arrive as typed by the user."""
    account_id: str
    payee: str
    payment_amount: Union[str, float, int, None]
    nickname: Optional[str] = None
    payment_date: Optional[str] = None
    recurring_date: Union[str, int, None] = None
    is_recurring: bool = False

    def validate(self) -> List[str]:
        errors = []

        if not self.payee or not self.payee.strip():
            errors.append("Please enter a payee")

        if self.payment_amount is None or str(self.payment_amount).strip() == "":
            errors.append("Please enter a payment amount")
        else:
            amount = as_number(self.payment_amount)
            if amount is None or amount <= 0:
                errors.append("Please enter a valid payment amount")

        if not self.account_id or not self.account_id.strip():
            errors.append("No account selected")

        if self.is_recurring and self._has_recurring_day():
            day = self.recurring_day()
            if day is None:
                errors.append("Recurring day must be a whole number")
            elif not MIN_RECURRING_DAY <= day <= MAX_RECURRING_DAY:
                errors.append(
                    f"Recurring day must be between {MIN_RECURRING_DAY} and {MAX_RECURRING_DAY}"
                )

        return errors

    def amount(self) -> float:
        return as_number(self.payment_amount) or 0.0

    def recurring_day(self) -> Optional[int]:
        """The recurring day as an integer, or None if absent or not a whole number."""
        value = self.recurring_date
        if isinstance(value, bool) or value is None:
            return None
        if isinstance(value, int):
            return value
        try:
            return int(str(value).strip())
        except ValueError:
            return None

    def _has_recurring_day(self) -> bool:
        return self.recurring_date is not None and str(self.recurring_date).strip() != ""


@dataclass(frozen=True)
class PaymentResult:
    """Result of paying a bill."""

    bill: Bill
    payment: Payment
    message: str
    days_until_next_payment: Optional[int] = None


@dataclass(frozen=True)
class BillDetails:
    """A bill with its recent payment history."""

    bill: Bill
    recent_payments: List[Payment]
    paid_this_month: bool
    days_until_next_payment: Optional[int] = None


@dataclass(frozen=True)
class DeletionResult:
    """
    Result of permanently deleting a bill.

    history_removed is False when the bill is gone but its payment
    record could not be deleted and is left orphaned.
    """

    bill_id: str
    bill_removed: bool
    history_removed: bool
