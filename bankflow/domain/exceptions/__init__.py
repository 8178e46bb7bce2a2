"""Domain Exceptions - Business rule violations and domain errors."""

from .base import DomainException
from .account_store import (
    AccountNotFoundException,
    AccountStoreException,
    AccountStoreTimeoutException,
)
from .bill import (
    BillAlreadyPaidException,
    BillNotFoundException,
    InvalidBillRequestException,
    InvalidBillTransitionException,
)
from .document_store import DocumentSchemaException, DocumentStoreException
from .loan import InvalidLoanRequestException
from .transfer import InsufficientFundsException, InvalidTransferRequestException

__all__ = [
    "DomainException",
    "AccountNotFoundException",
    "AccountStoreException",
    "AccountStoreTimeoutException",
    "BillAlreadyPaidException",
    "BillNotFoundException",
    "InvalidBillRequestException",
    "InvalidBillTransitionException",
    "DocumentSchemaException",
    "DocumentStoreException",
    "InvalidLoanRequestException",
    "InsufficientFundsException",
    "InvalidTransferRequestException",
]
