"""Transfer-related Pydantic schemas."""

from typing import Literal, Optional

from pydantic import BaseModel, Field


class TransferRequestSchema(BaseModel):
    """Schema for POST /v1/transfers request body."""

    payer_id: str = Field(..., min_length=1, max_length=255)
    payee_id: str = Field(..., min_length=1, max_length=255)
    amount: float = Field(..., gt=0)
    medium: Literal["balance", "rewards"] = "balance"
    description: Optional[str] = Field(None, max_length=255)


class TransferSchema(BaseModel):
    id: str
    payer_id: str
    payee_id: str
    amount: float
    medium: str
    transaction_date: str
    status: str
    description: Optional[str] = None


class TransferResultSchema(BaseModel):
    """Schema for POST /v1/transfers response."""

    transfer: TransferSchema
    payer_balance: Optional[float] = None
    balance_confirmed: bool = Field(
        ...,
        description="False when the balance poll ran out before the debit showed up",
    )
