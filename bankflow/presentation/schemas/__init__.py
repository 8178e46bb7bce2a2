"""Pydantic schemas for API request/response validation."""

from .bill import (
    BillDetailsSchema,
    BillListSchema,
    BillSchema,
    CreateBillRequestSchema,
    DeletionResultSchema,
    PaymentResultSchema,
    UserScopedRequestSchema,
)
from .error import ErrorResponseSchema, FieldErrorSchema
from .loan import LoanListSchema, LoanQuoteSchema, LoanRequestSchema, LoanSchema
from .recurring import (
    BillPaymentStatusSchema,
    CleanupResponseSchema,
    MigrationResponseSchema,
    PaymentListSchema,
    PaymentSchema,
    RecurringRecordListSchema,
    RecurringRecordSchema,
)
from .transfer import TransferRequestSchema, TransferResultSchema, TransferSchema

__all__ = [
    "BillDetailsSchema",
    "BillListSchema",
    "BillSchema",
    "CreateBillRequestSchema",
    "DeletionResultSchema",
    "PaymentResultSchema",
    "UserScopedRequestSchema",
    "ErrorResponseSchema",
    "FieldErrorSchema",
    "LoanListSchema",
    "LoanQuoteSchema",
    "LoanRequestSchema",
    "LoanSchema",
    "BillPaymentStatusSchema",
    "CleanupResponseSchema",
    "MigrationResponseSchema",
    "PaymentListSchema",
    "PaymentSchema",
    "RecurringRecordListSchema",
    "RecurringRecordSchema",
    "TransferRequestSchema",
    "TransferResultSchema",
    "TransferSchema",
]
