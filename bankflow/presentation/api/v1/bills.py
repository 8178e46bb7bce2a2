"""Bill API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from bankflow.application.dto import CreateBillRequest
from bankflow.application.services import BillLifecycleManager
from bankflow.core.dependencies import get_bill_manager
from bankflow.presentation.schemas import (
    BillDetailsSchema,
    BillListSchema,
    BillSchema,
    CreateBillRequestSchema,
    DeletionResultSchema,
    ErrorResponseSchema,
    PaymentResultSchema,
    PaymentSchema,
    UserScopedRequestSchema,
)

bills_router = APIRouter(
    responses={
        404: {"model": ErrorResponseSchema, "description": "Bill or account not found"},
        503: {"model": ErrorResponseSchema, "description": "Account store unavailable"},
    },
)

UserIdQuery = Annotated[
    str,
    Query(min_length=1, max_length=255, description="Owner of the payment history"),
]
BillIdPath = Annotated[str, Path(description="Bill ID in the account store")]


@bills_router.get(
    "/accounts/{account_id}/bills",
    response_model=BillListSchema,
    summary="List Bills",
    description="""
    List the bills drawn on an account.

    Returns an empty list when the account store can't be read.
    """,
)
async def list_bills(
    account_id: Annotated[str, Path(description="Account ID in the account store")],
    manager: Annotated[BillLifecycleManager, Depends(get_bill_manager)],
) -> BillListSchema:
    bills = await manager.list_bills(account_id)
    return BillListSchema(
        account_id=account_id,
        bills=[BillSchema.from_entity(b) for b in bills],
    )


@bills_router.post(
    "/bills",
    response_model=BillSchema,
    status_code=201,
    summary="Create Bill",
    description="""
    Create a one-time or recurring bill.

    Recurring bills also get an empty payment history record.
    """,
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid bill"},
    },
)
async def create_bill(
    request: CreateBillRequestSchema,
    manager: Annotated[BillLifecycleManager, Depends(get_bill_manager)],
) -> BillSchema:
    dto = CreateBillRequest(
        account_id=request.account_id,
        payee=request.payee,
        payment_amount=request.payment_amount,
        nickname=request.nickname,
        payment_date=request.payment_date,
        recurring_date=request.recurring_date,
        is_recurring=request.is_recurring,
    )
    bill = await manager.create_bill(request.user_id, dto)
    return BillSchema.from_entity(bill)


@bills_router.get(
    "/bills/{bill_id}",
    response_model=BillDetailsSchema,
    summary="Get Bill Details",
    description="""
    Retrieve a bill with its recent payments.

    Migrates the user's legacy payment history first if it is still
    present, and creates the bill's payment record if it is missing.
    """,
)
async def get_bill_details(
    bill_id: BillIdPath,
    user_id: UserIdQuery,
    manager: Annotated[BillLifecycleManager, Depends(get_bill_manager)],
) -> BillDetailsSchema:
    details = await manager.get_bill_details(user_id, bill_id)
    return BillDetailsSchema(
        bill=BillSchema.from_entity(details.bill),
        recent_payments=[PaymentSchema.from_entity(p) for p in details.recent_payments],
        paid_this_month=details.paid_this_month,
        days_until_next_payment=details.days_until_next_payment,
    )


@bills_router.post(
    "/bills/{bill_id}/payments",
    response_model=PaymentResultSchema,
    status_code=201,
    summary="Pay Bill",
    responses={
        409: {"model": ErrorResponseSchema, "description": "Already paid or bill closed"},
    },
)
async def pay_bill(
    bill_id: BillIdPath,
    request: UserScopedRequestSchema,
    manager: Annotated[BillLifecycleManager, Depends(get_bill_manager)],
) -> PaymentResultSchema:
    """Record a payment; one-time bills move to completed."""
    result = await manager.pay_bill(request.user_id, bill_id)
    return PaymentResultSchema(
        bill=BillSchema.from_entity(result.bill),
        payment=PaymentSchema.from_entity(result.payment),
        message=result.message,
        days_until_next_payment=result.days_until_next_payment,
    )


@bills_router.post(
    "/bills/{bill_id}/cancel",
    response_model=BillSchema,
    summary="Cancel Bill",
    responses={
        409: {"model": ErrorResponseSchema, "description": "Bill already closed"},
    },
)
async def cancel_bill(
    bill_id: BillIdPath,
    manager: Annotated[BillLifecycleManager, Depends(get_bill_manager)],
) -> BillSchema:
    bill = await manager.cancel_bill(bill_id)
    return BillSchema.from_entity(bill)


@bills_router.delete(
    "/bills/{bill_id}",
    response_model=DeletionResultSchema,
    summary="Delete Bill Permanently",
    description="""
    Delete a bill and then its payment history.

    The two deletions are not atomic; `history_removed` is false when the
    payment record was left behind.
    """,
)
async def delete_bill(
    bill_id: BillIdPath,
    user_id: UserIdQuery,
    manager: Annotated[BillLifecycleManager, Depends(get_bill_manager)],
) -> DeletionResultSchema:
    result = await manager.delete_bill_permanently(user_id, bill_id)
    return DeletionResultSchema(
        bill_id=result.bill_id,
        bill_removed=result.bill_removed,
        history_removed=result.history_removed,
    )
