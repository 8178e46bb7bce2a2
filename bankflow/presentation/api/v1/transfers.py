"""Transfer API endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends

from bankflow.application.dto import TransferRequest
from bankflow.application.services import TransferService
from bankflow.core.dependencies import get_transfer_service
from bankflow.presentation.schemas import (
    ErrorResponseSchema,
    TransferRequestSchema,
    TransferResultSchema,
    TransferSchema,
)

transfers_router = APIRouter(prefix="/transfers")


@transfers_router.post(
    "",
    response_model=TransferResultSchema,
    status_code=201,
    summary="Create Transfer",
    description="""
    Move money between two accounts.

    Balance transfers wait for the payer's balance to reflect the debit;
    `balance_confirmed` is false if it never did within the poll window.
    """,
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid transfer or insufficient funds"},
        404: {"model": ErrorResponseSchema, "description": "Account not found"},
        503: {"model": ErrorResponseSchema, "description": "Account store unavailable"},
    },
)
async def create_transfer(
    request: TransferRequestSchema,
    transfer_service: Annotated[TransferService, Depends(get_transfer_service)],
) -> TransferResultSchema:
    result = await transfer_service.create_transfer(
        TransferRequest(
            payer_id=request.payer_id,
            payee_id=request.payee_id,
            amount=request.amount,
            medium=request.medium,
            description=request.description,
        )
    )
    transfer = result.transfer
    return TransferResultSchema(
        transfer=TransferSchema(
            id=transfer.id,
            payer_id=transfer.payer_id,
            payee_id=transfer.payee_id,
            amount=transfer.amount,
            medium=transfer.medium.value,
            transaction_date=transfer.transaction_date,
            status=transfer.status,
            description=transfer.description,
        ),
        payer_balance=result.payer_balance,
        balance_confirmed=result.balance_confirmed,
    )
