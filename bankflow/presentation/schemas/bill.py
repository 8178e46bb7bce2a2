"""Bill-related Pydantic schemas."""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bankflow.domain.entities import Bill
from .recurring import PaymentSchema


class CreateBillRequestSchema(BaseModel):
    """Schema for POST /v1/bills request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "user_id": "user_123",
                    "account_id": "5f0c9d2e",
                    "payee": "City Power",
                    "payment_amount": "84.50",
                    "is_recurring": True,
                    "recurring_date": "15",
                }
            ]
        }
    )

    user_id: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Owner of the bill's payment history",
    )
    account_id: str = Field("", max_length=255, description="Account the bill is drawn on")
    payee: str = Field("", max_length=255, description="Who gets paid")
    payment_amount: Union[str, float, None] = Field(
        None,
        description="Amount as entered; must parse to a positive number",
    )
    nickname: Optional[str] = Field(None, max_length=255)
    payment_date: Optional[str] = Field(
        None,
        pattern=r"^\d{4}-\d{2}-\d{2}$",
        description="YYYY-MM-DD, defaults to today",
    )
    is_recurring: bool = False
    recurring_date: Union[str, int, None] = Field(
        None,
        description="Day of month (1-31) for recurring bills",
    )

    @field_validator("user_id")
    @classmethod
    def validate_user_id(cls, v: str) -> str:
        """Ensure user_id is not just whitespace."""
        if not v.strip():
            raise ValueError("user_id cannot be empty or whitespace")
        return v.strip()


class UserScopedRequestSchema(BaseModel):
    """Body for bill actions that touch the user's payment history."""

    user_id: str = Field(..., min_length=1, max_length=255)


class BillSchema(BaseModel):
    """A bill as held by the account store."""

    id: str
    account_id: str
    payee: str
    nickname: Optional[str] = None
    payment_amount: float
    formatted_amount: str = Field(..., description="Amount with 2 decimals and grouping")
    status: str
    payment_date: Optional[str] = None
    recurring_date: Optional[int] = None

    @classmethod
    def from_entity(cls, bill: Bill) -> "BillSchema":
        from bankflow.service.billing import format_currency

        return cls(
            id=bill.id,
            account_id=bill.account_id,
            payee=bill.payee,
            nickname=bill.nickname,
            payment_amount=bill.payment_amount,
            formatted_amount=format_currency(bill.payment_amount),
            status=bill.status.value,
            payment_date=bill.payment_date,
            recurring_date=bill.recurring_date,
        )


class BillListSchema(BaseModel):
    account_id: str
    bills: list[BillSchema]


class PaymentResultSchema(BaseModel):
    """Schema for POST /v1/bills/{bill_id}/payments response."""

    bill: BillSchema
    payment: PaymentSchema
    message: str
    days_until_next_payment: Optional[int] = None


class BillDetailsSchema(BaseModel):
    """Schema for GET /v1/bills/{bill_id} response."""

    bill: BillSchema
    recent_payments: list[PaymentSchema]
    paid_this_month: bool
    days_until_next_payment: Optional[int] = None


class DeletionResultSchema(BaseModel):
    bill_id: str
    bill_removed: bool
    history_removed: bool = Field(
        ...,
        description="False when the payment record could not be removed and is orphaned",
    )
