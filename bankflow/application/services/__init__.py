"""Application services (use cases)."""

from .bill_service import BillLifecycleManager
from .bill_watcher import BillChanges, BillWatcher, diff_bills
from .loan_service import LoanService
from .migration_service import LegacyMigrationAdapter
from .recurring_service import RecurringBillTracker, local_now
from .transfer_service import TransferService

__all__ = [
    "BillLifecycleManager",
    "BillChanges",
    "BillWatcher",
    "diff_bills",
    "LoanService",
    "LegacyMigrationAdapter",
    "RecurringBillTracker",
    "local_now",
    "TransferService",
]
