"""Repository and store implementations."""

from .document_store import SqlDocumentStore
from .legacy_store import SqlLegacyStore
from .loan_repository import DocumentLoanRepository
from .recurring_repository import DocumentRecurringPaymentRepository

__all__ = [
    "SqlDocumentStore",
    "SqlLegacyStore",
    "DocumentLoanRepository",
    "DocumentRecurringPaymentRepository",
]
