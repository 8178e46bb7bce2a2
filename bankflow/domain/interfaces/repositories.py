"""Repository interfaces for data persistence."""

from abc import ABC, abstractmethod
from typing import List, Optional

from bankflow.domain.entities import Loan, RecurringPaymentRecord


class RecurringPaymentRepository(ABC):
    """
    Abstract repository for RecurringPaymentRecord persistence.

    There is at most one record per (user, bill); the key is derived
    from both ids.
    """

    @abstractmethod
    async def get(self, user_id: str, bill_id: str) -> Optional[RecurringPaymentRecord]:
        """
        Retrieve the record for a user and bill.

        Returns:
            The record if found, None otherwise

        Raises:
            DocumentSchemaException: If the stored document is malformed
        """
        ...

    @abstractmethod
    async def create(self, record: RecurringPaymentRecord) -> RecurringPaymentRecord:
        """Persist a new record."""
        ...

    @abstractmethod
    async def save_history(self, record: RecurringPaymentRecord) -> RecurringPaymentRecord:
        """
        Write the record's payment history, last payment date and
        updated timestamp over the stored copy.
        """
        ...

    @abstractmethod
    async def delete(self, user_id: str, bill_id: str) -> bool:
        """Delete the record. Returns False if it didn't exist."""
        ...

    @abstractmethod
    async def list_by_user(self, user_id: str) -> List[RecurringPaymentRecord]:
        """Retrieve all records for a user, in no particular order."""
        ...


class LoanRepository(ABC):
    """Abstract repository for Loan persistence."""

    @abstractmethod
    async def save(self, loan: Loan) -> Loan:
        """Persist a loan."""
        ...

    @abstractmethod
    async def list_by_user(self, user_id: str) -> List[Loan]:
        """Retrieve a user's loans, newest first."""
        ...
