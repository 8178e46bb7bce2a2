"""Loan-related Pydantic schemas."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bankflow.domain.entities import Loan


class LoanRequestSchema(BaseModel):
    """Schema for POST /v1/loans request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "user_id": "user_123",
                    "loan_type": "auto",
                    "amount": 1200,
                    "customer_id": "5f0c9d2a",
                }
            ]
        }
    )

    user_id: str = Field(..., min_length=1, max_length=255)
    loan_type: Literal["home", "auto", "small business"] = Field(
        ...,
        description="Kind of loan",
    )
    amount: float = Field(..., gt=0, description="Requested amount in dollars", examples=[1200])
    description: Optional[str] = Field(None, max_length=500)
    customer_id: Optional[str] = Field(
        None,
        description="Customer to look the credit score up for",
    )
    credit_score: Optional[int] = Field(
        None,
        ge=0,
        le=900,
        description="Score to decide against instead of looking one up",
    )

    @field_validator("user_id")
    @classmethod
    def validate_user_id(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("user_id cannot be empty or whitespace")
        return v.strip()


class LoanSchema(BaseModel):
    """A decided loan."""

    loan_id: str
    user_id: str
    type: str
    status: str
    credit_score: int
    amount: int
    monthly_payment: int
    term_months: int
    description: str
    declined_reason: Optional[str] = None
    approved_at: Optional[datetime] = None
    created_at: datetime

    @classmethod
    def from_entity(cls, loan: Loan) -> "LoanSchema":
        return cls(
            loan_id=str(loan.id),
            user_id=loan.user_id,
            type=loan.type.value,
            status=loan.status.value,
            credit_score=loan.credit_score,
            amount=loan.amount,
            monthly_payment=loan.monthly_payment,
            term_months=loan.term_months,
            description=loan.description,
            declined_reason=loan.declined_reason,
            approved_at=loan.approved_at,
            created_at=loan.created_at,
        )


class LoanListSchema(BaseModel):
    user_id: str
    loans: list[LoanSchema] = Field(..., description="Loans, newest first")


class LoanQuoteSchema(BaseModel):
    """Schema for GET /v1/loans/quote response."""

    amount: float
    credit_score: Optional[int] = None
    term_months: int
    monthly_payment: float = Field(..., description="Amortized monthly payment, rounded to cents")
    formatted_payment: str
    approved: bool
    reason: str
