"""Domain Entities - Core business objects."""

from .account import Account, Transfer, TransferMedium
from .bill import Bill, BillStatus, OPEN_STATUSES
from .loan import Loan, LoanStatus, LoanType
from .recurring import BillSnapshot, Payment, RecurringPaymentRecord, record_key

__all__ = [
    "Account",
    "Transfer",
    "TransferMedium",
    "Bill",
    "BillStatus",
    "OPEN_STATUSES",
    "Loan",
    "LoanStatus",
    "LoanType",
    "BillSnapshot",
    "Payment",
    "RecurringPaymentRecord",
    "record_key",
]
