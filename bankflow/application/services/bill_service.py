"""Bill lifecycle manager - bill CRUD and status transitions."""

from dataclasses import replace
from typing import List, Optional

import structlog

from bankflow.application.dto import (
    BillDetails,
    CreateBillRequest,
    DeletionResult,
    PaymentRequest,
    PaymentResult,
)
from bankflow.core.metrics import record_bill_payment, record_bill_transition
from bankflow.domain.entities import Bill, BillSnapshot, BillStatus
from bankflow.domain.exceptions import (
    BillAlreadyPaidException,
    InvalidBillRequestException,
    InvalidBillTransitionException,
)
from bankflow.domain.interfaces import AccountStoreClient
from bankflow.service.billing import (
    days_until_next_payment,
    format_currency,
    format_local_date,
)
from .migration_service import LegacyMigrationAdapter
from .recurring_service import RecurringBillTracker

logger = structlog.get_logger(__name__)


class BillLifecycleManager:
    """
    Application service for bill use cases.

    Bills live in the remote account store; their payment history lives
    in the recurring bill tracker. Status moves pending -> completed on
    payment and pending/recurring -> cancelled on cancel. Recurring
    bills stay recurring when paid.
    """

    def __init__(
        self,
        account_client: AccountStoreClient,
        tracker: RecurringBillTracker,
        migration: Optional[LegacyMigrationAdapter] = None,
    ):
        self._accounts = account_client
        self._tracker = tracker
        self._migration = migration

    async def list_bills(self, account_id: str) -> List[Bill]:
        """Bills for an account; empty if the account store can't be read."""
        try:
            return await self._accounts.get_account_bills(account_id)
        except Exception as e:
            logger.warning("bills_read_failed", account_id=account_id, error=str(e))
            return []

    async def create_bill(self, user_id: str, request: CreateBillRequest) -> Bill:
        """
        Create a one-time or recurring bill.

        Recurring bills also get an empty payment record. Failing to
        create that record is logged; the bill is still returned.

        Raises:
            InvalidBillRequestException: If request validation fails
            AccountStoreException: If the account store rejects the bill
        """
        errors = request.validate()
        if errors:
            raise InvalidBillRequestException("; ".join(errors))

        status = BillStatus.RECURRING if request.is_recurring else BillStatus.PENDING
        payee = request.payee.strip()
        payload = {
            "status": status.value,
            "payee": payee,
            "nickname": (request.nickname or "").strip() or payee,
            "payment_amount": request.amount(),
            "payment_date": request.payment_date or format_local_date(self._tracker.now()),
        }
        if request.is_recurring and request.recurring_day() is not None:
            payload["recurring_date"] = request.recurring_day()

        log = logger.bind(user_id=user_id, account_id=request.account_id)

        bill = await self._accounts.create_bill(request.account_id, payload)
        log.info("bill_created", bill_id=bill.id, status=bill.status.value)

        if status == BillStatus.RECURRING:
            try:
                await self._tracker.initialize_recurring_bill(
                    user_id, bill.id, BillSnapshot.from_bill(bill)
                )
            except Exception as e:
                log.error("recurring_record_init_failed", bill_id=bill.id, error=str(e))

        return bill

    async def pay_bill(self, user_id: str, bill_id: str) -> PaymentResult:
        """
        Register a payment against a bill.

        Raises:
            BillNotFoundException: If the bill doesn't exist
            InvalidBillTransitionException: If the bill is cancelled or completed
            BillAlreadyPaidException: If the bill was already paid this month
            DocumentStoreException: If the payment can't be recorded
        """
        bill = await self._accounts.get_bill(bill_id)
        if not bill.is_open:
            raise InvalidBillTransitionException(bill_id, bill.status.value, "pay")

        if await self._tracker.is_paid_this_month(user_id, bill_id):
            raise BillAlreadyPaidException(bill_id)

        payment = await self._tracker.add_payment_to_history(
            user_id,
            bill_id,
            PaymentRequest(amount=bill.payment_amount, payee=bill.payee),
        )

        if bill.status == BillStatus.RECURRING:
            record_bill_payment("recurring")
        else:
            await self._accounts.update_bill(bill_id, {"status": BillStatus.COMPLETED.value})
            record_bill_transition(bill.status.value, BillStatus.COMPLETED.value)
            record_bill_payment("one_time")
            bill = replace(bill, status=BillStatus.COMPLETED)

        days_left = self._days_until_next(bill)
        message = f"Payment of ${format_currency(payment.amount)} to {bill.payee} recorded"
        if days_left is not None:
            message += f"; next payment due in {days_left} days"

        logger.info(
            "bill_paid",
            user_id=user_id,
            bill_id=bill_id,
            payment_id=payment.id,
            status=bill.status.value,
        )
        return PaymentResult(
            bill=bill,
            payment=payment,
            message=message,
            days_until_next_payment=days_left,
        )

    async def cancel_bill(self, bill_id: str) -> Bill:
        """
        Cancel a pending or recurring bill.

        Raises:
            BillNotFoundException: If the bill doesn't exist
            InvalidBillTransitionException: If the bill is already closed
        """
        bill = await self._accounts.get_bill(bill_id)
        if not bill.is_open:
            raise InvalidBillTransitionException(bill_id, bill.status.value, "cancel")

        await self._accounts.update_bill(bill_id, {"status": BillStatus.CANCELLED.value})
        record_bill_transition(bill.status.value, BillStatus.CANCELLED.value)
        logger.info("bill_cancelled", bill_id=bill_id, previous_status=bill.status.value)

        return replace(bill, status=BillStatus.CANCELLED)

    async def delete_bill_permanently(self, user_id: str, bill_id: str) -> DeletionResult:
        """
        Delete a bill and then its payment record.

        The two steps are not atomic. If the second fails the bill stays
        deleted and the orphaned record is reported, not raised.

        Raises:
            BillNotFoundException: If the bill doesn't exist
            AccountStoreException: If the bill can't be deleted
        """
        await self._accounts.delete_bill(bill_id)

        try:
            await self._tracker.delete_recurring_bill(user_id, bill_id)
        except Exception as e:
            logger.error(
                "orphaned_payment_record",
                user_id=user_id,
                bill_id=bill_id,
                error=str(e),
            )
            return DeletionResult(bill_id=bill_id, bill_removed=True, history_removed=False)

        logger.info("bill_deleted", user_id=user_id, bill_id=bill_id)
        return DeletionResult(bill_id=bill_id, bill_removed=True, history_removed=True)

    async def get_bill_details(self, user_id: str, bill_id: str) -> BillDetails:
        """
        Load a bill with its recent payments.

        Runs the legacy migration first if the user still needs it and
        makes sure the bill has a payment record.

        Raises:
            BillNotFoundException: If the bill doesn't exist
        """
        bill = await self._accounts.get_bill(bill_id)

        if self._migration is not None and await self._migration.check_migration_needed(user_id):
            await self._migration.migrate(user_id)

        try:
            await self._tracker.initialize_recurring_bill(
                user_id, bill_id, BillSnapshot.from_bill(bill)
            )
        except Exception as e:
            logger.warning("recurring_record_init_failed", bill_id=bill_id, error=str(e))

        recent = await self._tracker.get_recent_payments(user_id, bill_id)
        paid = await self._tracker.is_paid_this_month(user_id, bill_id)

        return BillDetails(
            bill=bill,
            recent_payments=recent,
            paid_this_month=paid,
            days_until_next_payment=self._days_until_next(bill),
        )

    def _days_until_next(self, bill: Bill) -> Optional[int]:
        if bill.status != BillStatus.RECURRING or bill.recurring_date is None:
            return None
        try:
            return days_until_next_payment(bill.recurring_date, self._tracker.now().date())
        except ValueError:
            return None

