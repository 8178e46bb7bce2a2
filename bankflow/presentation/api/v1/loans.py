"""Loan API endpoints."""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query

from bankflow.application.dto import LoanRequest
from bankflow.application.services import LoanService
from bankflow.core.dependencies import get_loan_service
from bankflow.presentation.schemas import (
    ErrorResponseSchema,
    LoanListSchema,
    LoanQuoteSchema,
    LoanRequestSchema,
    LoanSchema,
)
from bankflow.service.billing import format_currency
from bankflow.service.underwriting import quote_loan

loans_router = APIRouter(
    prefix="/loans",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
    },
)


@loans_router.get(
    "/quote",
    response_model=LoanQuoteSchema,
    summary="Quote Loan",
    description="""
    Preview the term, monthly payment and decision for an amount and score.

    Nothing is stored.
    """,
)
async def get_quote(
    amount: Annotated[float, Query(description="Requested amount in dollars")],
    credit_score: Annotated[
        Optional[int],
        Query(description="Credit score to decide against"),
    ] = None,
) -> LoanQuoteSchema:
    quote = quote_loan(amount, credit_score)
    return LoanQuoteSchema(
        amount=quote.amount,
        credit_score=quote.credit_score,
        term_months=quote.term_months,
        monthly_payment=round(quote.monthly_payment, 2),
        formatted_payment=format_currency(quote.monthly_payment),
        approved=quote.approved,
        reason=quote.reason,
    )


@loans_router.post(
    "",
    response_model=LoanSchema,
    status_code=201,
    summary="Request Loan",
    description="""
    Submit a loan request.

    The loan is stored whether it is approved or declined.
    """,
)
async def request_loan(
    request: LoanRequestSchema,
    loan_service: Annotated[LoanService, Depends(get_loan_service)],
) -> LoanSchema:
    dto = LoanRequest(
        user_id=request.user_id,
        loan_type=request.loan_type,
        amount=request.amount,
        description=request.description,
        customer_id=request.customer_id,
        credit_score=request.credit_score,
    )
    loan = await loan_service.request_loan(dto)
    return LoanSchema.from_entity(loan)


@loans_router.get(
    "",
    response_model=LoanListSchema,
    summary="List Loans",
)
async def list_loans(
    user_id: Annotated[
        str,
        Query(min_length=1, max_length=255, description="User ID to list loans for"),
    ],
    loan_service: Annotated[LoanService, Depends(get_loan_service)],
) -> LoanListSchema:
    """Loans for a user, newest first."""
    loans = await loan_service.get_loans(user_id)
    return LoanListSchema(
        user_id=user_id,
        loans=[LoanSchema.from_entity(loan) for loan in loans],
    )
