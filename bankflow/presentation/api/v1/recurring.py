"""Recurring payment history endpoints."""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, Query

from bankflow.application.services import RecurringBillTracker
from bankflow.core.config import settings
from bankflow.core.dependencies import get_tracker
from bankflow.presentation.schemas import (
    BillPaymentStatusSchema,
    CleanupResponseSchema,
    PaymentListSchema,
    PaymentSchema,
    RecurringRecordListSchema,
    RecurringRecordSchema,
)

recurring_router = APIRouter(prefix="/recurring")

UserIdQuery = Annotated[
    str,
    Query(min_length=1, max_length=255, description="Owner of the payment history"),
]
BillIdPath = Annotated[str, Path(description="Bill ID the history belongs to")]


@recurring_router.get(
    "",
    response_model=RecurringRecordListSchema,
    summary="List Recurring Records",
)
async def list_recurring(
    user_id: UserIdQuery,
    tracker: Annotated[RecurringBillTracker, Depends(get_tracker)],
) -> RecurringRecordListSchema:
    records = await tracker.get_user_recurring_bills(user_id)
    return RecurringRecordListSchema(
        user_id=user_id,
        records=[RecurringRecordSchema.from_entity(r) for r in records],
    )


@recurring_router.get(
    "/{bill_id}/status",
    response_model=BillPaymentStatusSchema,
    summary="Get Bill Payment Status",
    description="""
    Whether the bill was paid this month, plus its full history.

    A bill with no history reports unpaid and zero payments.
    """,
)
async def get_status(
    bill_id: BillIdPath,
    user_id: UserIdQuery,
    tracker: Annotated[RecurringBillTracker, Depends(get_tracker)],
) -> BillPaymentStatusSchema:
    status = await tracker.get_bill_status(user_id, bill_id)
    return BillPaymentStatusSchema(
        bill_id=bill_id,
        paid_this_month=status.paid_this_month,
        last_payment_date=status.last_payment_date,
        total_payments=status.total_payments,
        payment_history=[PaymentSchema.from_entity(p) for p in status.payment_history],
    )


@recurring_router.get(
    "/{bill_id}/payments",
    response_model=PaymentListSchema,
    summary="Get Recent Payments",
)
async def get_recent_payments(
    bill_id: BillIdPath,
    user_id: UserIdQuery,
    tracker: Annotated[RecurringBillTracker, Depends(get_tracker)],
    months: Annotated[
        Optional[int],
        Query(ge=0, le=120, description="Window in 30-day months, defaults to the configured window"),
    ] = None,
) -> PaymentListSchema:
    payments = await tracker.get_recent_payments(user_id, bill_id, months)
    return PaymentListSchema(
        bill_id=bill_id,
        months=months if months is not None else settings.recent_payments_window_months,
        payments=[PaymentSchema.from_entity(p) for p in payments],
    )


@recurring_router.post(
    "/{bill_id}/cleanup",
    response_model=CleanupResponseSchema,
    summary="Clean Up Old Payments",
    description="Drop payments older than the retention window.",
)
async def cleanup_old_payments(
    bill_id: BillIdPath,
    user_id: UserIdQuery,
    tracker: Annotated[RecurringBillTracker, Depends(get_tracker)],
) -> CleanupResponseSchema:
    removed = await tracker.cleanup_old_payments(user_id, bill_id)
    return CleanupResponseSchema(bill_id=bill_id, removed=removed)
