"""
Domain Interfaces (Ports)
"""

from .clients import AccountStoreClient, CreditScoreClient
from .repositories import LoanRepository, RecurringPaymentRepository
from .stores import DocumentStore, LegacyStore

__all__ = [
    "AccountStoreClient",
    "CreditScoreClient",
    "LoanRepository",
    "RecurringPaymentRepository",
    "DocumentStore",
    "LegacyStore",
]
