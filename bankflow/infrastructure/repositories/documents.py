"""
Stored document shapes.

Documents are validated with these models when read back from the
document store. Field names match what earlier clients wrote, so
camelCase keys are kept on the wire.
"""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _aware(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class PaymentDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    date: datetime
    amount: float
    month: int = Field(ge=0, le=11)
    year: int
    payee: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        # Older clients used millisecond timestamps as ids
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("date")
    @classmethod
    def ensure_aware(cls, v: datetime) -> datetime:
        return _aware(v)


class BillDataDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")

    payee: Optional[str] = None
    recurring_date: Optional[int] = None
    payment_amount: Optional[float] = None
    nickname: Optional[str] = None


class RecurringPaymentDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    user_id: str = Field(alias="userId")
    bill_id: str = Field(alias="billId")
    bill_data: BillDataDocument = Field(default_factory=BillDataDocument, alias="billData")
    payment_history: List[PaymentDocument] = Field(default_factory=list, alias="paymentHistory")
    last_payment_date: Optional[datetime] = Field(None, alias="lastPaymentDate")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @field_validator("last_payment_date", "created_at", "updated_at")
    @classmethod
    def ensure_aware(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _aware(v)


class LoanDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    user_id: str = Field(alias="userId")
    type: str
    status: str
    credit_score: int
    amount: int
    monthly_payment: int
    term_months: int
    description: str = ""
    declined_reason: Optional[str] = None
    approved_at: Optional[datetime] = None
    created_at: datetime = Field(alias="createdAt")

    @field_validator("approved_at", "created_at")
    @classmethod
    def ensure_aware(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _aware(v)
