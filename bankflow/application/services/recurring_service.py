"""Recurring bill tracker - owns per-user, per-bill payment history."""

from datetime import datetime
from typing import Callable, List
from uuid import uuid1

import structlog
from dateutil import tz

from bankflow.application.dto import BillPaymentStatus, PaymentRequest
from bankflow.core.metrics import record_document_read_failure
from bankflow.domain.entities import BillSnapshot, Payment, RecurringPaymentRecord
from bankflow.domain.interfaces import RecurringPaymentRepository
from bankflow.service.billing import subtract_months

logger = structlog.get_logger(__name__)

Clock = Callable[[], datetime]

DEFAULT_NICKNAME = "Bill Payment"
DAYS_PER_MONTH = 30


def local_now() -> datetime:
    """
    Current time in the process's local timezone.

    The zone carries its DST rules, so converting other moments into it
    uses the offset in force at those moments, not today's.
    """
    return datetime.now(tz.tzlocal())


def _is_whole(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_month_index(value) -> bool:
    # Zero-based, as stored documents require
    return _is_whole(value) and 0 <= value <= 11


class RecurringBillTracker:
    """
    Application service for recurring payment history.

    Reads fail soft: they log and return an empty or negative result, so
    callers can't tell "no history" from "lookup failed". Writes
    (initialize, add payment, delete) raise DocumentStoreException.

    The read-modify-write in add_payment_to_history is not transactional;
    two concurrent payments for the same bill can lose one entry.
    """

    def __init__(
        self,
        repository: RecurringPaymentRepository,
        clock: Clock = local_now,
        retention_months: int = 24,
        recent_window_months: int = 12,
    ):
        self._repo = repository
        self._clock = clock
        self._retention_months = retention_months
        self._recent_window_months = recent_window_months

    def now(self) -> datetime:
        """Current time from the tracker's clock."""
        return self._clock()

    async def initialize_recurring_bill(
        self,
        user_id: str,
        bill_id: str,
        snapshot: BillSnapshot,
    ) -> RecurringPaymentRecord:
        """
        Create an empty payment record for a bill.

        Idempotent: if a record already exists it is returned unchanged
        and the snapshot is ignored.

        Raises:
            DocumentStoreException: If the store read or write fails
        """
        existing = await self._repo.get(user_id, bill_id)
        if existing is not None:
            return existing

        now = self._clock()
        record = RecurringPaymentRecord(
            user_id=user_id,
            bill_id=bill_id,
            bill_data=snapshot,
            created_at=now,
            updated_at=now,
        )
        await self._repo.create(record)

        logger.info("recurring_record_initialized", user_id=user_id, bill_id=bill_id)
        return record

    async def add_payment_to_history(
        self,
        user_id: str,
        bill_id: str,
        request: PaymentRequest,
    ) -> Payment:
        """
        Append a payment to a bill's history.

        A missing record is created first from the payment's payee and
        amount. The history stays ordered newest first.

        Returns:
            The appended Payment

        Raises:
            DocumentStoreException: If the store read or write fails
        """
        record = await self._repo.get(user_id, bill_id)
        if record is None:
            record = await self.initialize_recurring_bill(
                user_id,
                bill_id,
                BillSnapshot(
                    payee=request.payee,
                    payment_amount=request.amount,
                    nickname=request.payee or DEFAULT_NICKNAME,
                ),
            )

        paid_at = request.paid_at or self._clock()
        payment = Payment(
            id=str(uuid1()),
            date=paid_at,
            amount=request.amount,
            month=request.month if _is_month_index(request.month) else paid_at.month - 1,
            year=request.year if _is_whole(request.year) else paid_at.year,
            payee=request.payee,
        )

        # Stable sort: a live payment always lands at index 0
        record.payment_history = sorted(
            [payment, *record.payment_history],
            key=lambda p: p.date,
            reverse=True,
        )
        record.last_payment_date = record.payment_history[0].date
        record.updated_at = self._clock()
        await self._repo.save_history(record)

        logger.info(
            "payment_recorded",
            user_id=user_id,
            bill_id=bill_id,
            payment_id=payment.id,
            amount=payment.amount,
            total_payments=record.total_payments,
        )
        return payment

    async def get_payment_history(self, user_id: str, bill_id: str) -> List[Payment]:
        """Stored history, newest first. Empty when missing or unreadable."""
        try:
            record = await self._repo.get(user_id, bill_id)
        except Exception as e:
            logger.warning(
                "payment_history_read_failed",
                user_id=user_id,
                bill_id=bill_id,
                error=str(e),
            )
            record_document_read_failure("payment_history")
            return []

        return list(record.payment_history) if record else []

    async def is_paid_this_month(self, user_id: str, bill_id: str) -> bool:
        """Whether any payment falls in the current local calendar month."""
        history = await self.get_payment_history(user_id, bill_id)
        return self._paid_in_current_month(history)

    async def get_recent_payments(
        self,
        user_id: str,
        bill_id: str,
        months: int | None = None,
    ) -> List[Payment]:
        """
        Payments whose age in days divided by 30 is within the window.

        Months are approximated as 30 days, so the window edge drifts by
        a day or two against real calendar months.
        """
        window = months if months is not None else self._recent_window_months
        history = await self.get_payment_history(user_id, bill_id)
        now = self._clock()

        return [
            p for p in history
            if (now - p.date).total_seconds() / 86400 / DAYS_PER_MONTH <= window
        ]

    async def get_user_recurring_bills(self, user_id: str) -> List[RecurringPaymentRecord]:
        """All of a user's payment records, in no particular order."""
        try:
            return await self._repo.list_by_user(user_id)
        except Exception as e:
            logger.warning("recurring_bills_read_failed", user_id=user_id, error=str(e))
            record_document_read_failure("user_recurring_bills")
            return []

    async def get_bill_status(self, user_id: str, bill_id: str) -> BillPaymentStatus:
        history = await self.get_payment_history(user_id, bill_id)
        return BillPaymentStatus(
            paid_this_month=self._paid_in_current_month(history),
            last_payment_date=history[0].date if history else None,
            total_payments=len(history),
            payment_history=history,
        )

    async def cleanup_old_payments(self, user_id: str, bill_id: str) -> int:
        """
        Drop payments older than the retention window.

        The cutoff is local midnight, the retention number of calendar
        months before today. Nothing is written unless something was
        dropped. Failures are logged, not raised.

        Returns:
            Number of payments removed
        """
        try:
            record = await self._repo.get(user_id, bill_id)
            if record is None:
                return 0

            now = self._clock()
            cutoff = subtract_months(now, self._retention_months).replace(
                hour=0, minute=0, second=0, microsecond=0
            )
            kept = [p for p in record.payment_history if p.date >= cutoff]
            removed = record.total_payments - len(kept)
            if removed == 0:
                return 0

            record.payment_history = kept
            record.updated_at = now
            await self._repo.save_history(record)
        except Exception as e:
            logger.error(
                "payment_cleanup_failed",
                user_id=user_id,
                bill_id=bill_id,
                error=str(e),
            )
            return 0

        logger.info(
            "old_payments_cleaned",
            user_id=user_id,
            bill_id=bill_id,
            removed=removed,
            cutoff=cutoff.isoformat(),
        )
        return removed

    async def delete_recurring_bill(self, user_id: str, bill_id: str) -> bool:
        """
        Delete a bill's payment record. A missing record counts as success.

        Returns:
            True if a record existed and was removed

        Raises:
            DocumentStoreException: If the delete fails
        """
        existed = await self._repo.delete(user_id, bill_id)
        logger.info(
            "recurring_record_deleted",
            user_id=user_id,
            bill_id=bill_id,
            existed=existed,
        )
        return existed

    def _paid_in_current_month(self, history: List[Payment]) -> bool:
        now = self._clock()
        for payment in history:
            local = payment.date.astimezone(now.tzinfo)
            if local.year == now.year and local.month == now.month:
                return True
        return False
