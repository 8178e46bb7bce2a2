"""Recurring payment history schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from bankflow.domain.entities import Payment, RecurringPaymentRecord


class PaymentSchema(BaseModel):
    """A single payment history entry."""

    id: str = Field(..., description="Time-based payment identifier")
    date: datetime = Field(..., description="When the payment was made (UTC)")
    amount: float = Field(..., description="Amount paid")
    month: int = Field(..., ge=0, le=11, description="Calendar month, 0-based")
    year: int = Field(..., description="Calendar year")
    payee: Optional[str] = Field(None, description="Payee at the time of payment")

    @classmethod
    def from_entity(cls, payment: Payment) -> "PaymentSchema":
        return cls(
            id=payment.id,
            date=payment.date,
            amount=payment.amount,
            month=payment.month,
            year=payment.year,
            payee=payment.payee,
        )


class BillSnapshotSchema(BaseModel):
    payee: Optional[str] = None
    recurring_date: Optional[int] = None
    payment_amount: Optional[float] = None
    nickname: Optional[str] = None


class RecurringRecordSchema(BaseModel):
    """A user's payment record for one bill."""

    bill_id: str
    bill_data: BillSnapshotSchema
    total_payments: int = Field(..., ge=0)
    last_payment_date: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, record: RecurringPaymentRecord) -> "RecurringRecordSchema":
        return cls(
            bill_id=record.bill_id,
            bill_data=BillSnapshotSchema(**record.bill_data.to_dict()),
            total_payments=record.total_payments,
            last_payment_date=record.last_payment_date,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


class RecurringRecordListSchema(BaseModel):
    user_id: str
    records: list[RecurringRecordSchema]


class BillPaymentStatusSchema(BaseModel):
    """Schema for GET /v1/recurring/{bill_id}/status."""

    bill_id: str
    paid_this_month: bool
    last_payment_date: Optional[datetime] = None
    total_payments: int = Field(..., ge=0)
    payment_history: list[PaymentSchema]


class PaymentListSchema(BaseModel):
    """Schema for GET /v1/recurring/{bill_id}/payments."""

    bill_id: str
    months: int
    payments: list[PaymentSchema]


class CleanupResponseSchema(BaseModel):
    bill_id: str
    removed: int = Field(..., ge=0, description="Payments dropped by the retention window")


class MigrationResponseSchema(BaseModel):
    """Schema for POST /v1/migrations/{user_id}."""

    migrated: bool
    migrated_count: int = Field(0, ge=0)
    total_payments: int = Field(0, ge=0)
    message: str
    error: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "migrated": True,
                    "migrated_count": 2,
                    "total_payments": 7,
                    "message": "Migrated 2 bills with 7 payments",
                    "error": None,
                }
            ]
        }
    )
