"""Data Transfer Objects for application layer."""

from .bill import BillDetails, CreateBillRequest, DeletionResult, PaymentResult
from .loan import LoanRequest
from .recurring import BillPaymentStatus, MigrationResult, PaymentRequest
from .transfer import TransferRequest, TransferResult

__all__ = [
    "BillDetails",
    "CreateBillRequest",
    "DeletionResult",
    "PaymentResult",
    "LoanRequest",
    "BillPaymentStatus",
    "MigrationResult",
    "PaymentRequest",
    "TransferRequest",
    "TransferResult",
]
