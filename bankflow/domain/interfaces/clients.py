"""External client interfaces."""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import structlog

from bankflow.domain.entities import Account, Bill, Transfer, TransferMedium
from bankflow.domain.exceptions import AccountStoreException

logger = structlog.get_logger(__name__)

BALANCE_TOLERANCE = 0.01


class AccountStoreClient(ABC):
    """
    Abstract client for the remote account store.

    The store owns customers, accounts, bills and transfers. Balances
    are only trusted as of a fresh read.
    """

    @abstractmethod
    async def get_account(self, account_id: str) -> Account:
        """
        Fetch a single account.

        Raises:
            AccountNotFoundException: If the account doesn't exist
            AccountStoreException: If the store returns an error
            AccountStoreTimeoutException: If the request times out
        """
        ...

    @abstractmethod
    async def get_customer_accounts(self, customer_id: str) -> List[Account]:
        """Fetch all accounts owned by a customer."""
        ...

    @abstractmethod
    async def update_account_balance(self, account_id: str, balance: float) -> None:
        """Overwrite an account's balance."""
        ...

    @abstractmethod
    async def get_account_bills(self, account_id: str) -> List[Bill]:
        """Fetch all bills for an account. An unknown account yields []."""
        ...

    @abstractmethod
    async def get_bill(self, bill_id: str) -> Bill:
        """
        Fetch a single bill.

        Raises:
            BillNotFoundException: If the bill doesn't exist
        """
        ...

    @abstractmethod
    async def create_bill(self, account_id: str, payload: Dict[str, Any]) -> Bill:
        """Create a bill and return it unwrapped from the creation envelope."""
        ...

    @abstractmethod
    async def update_bill(self, bill_id: str, fields: Dict[str, Any]) -> None:
        """Apply a partial update to a bill."""
        ...

    @abstractmethod
    async def delete_bill(self, bill_id: str) -> None:
        """
        Delete a bill.

        Raises:
            BillNotFoundException: If the bill doesn't exist
        """
        ...

    @abstractmethod
    async def create_transfer(
        self,
        payer_id: str,
        payee_id: str,
        amount: float,
        medium: TransferMedium,
        description: Optional[str] = None,
    ) -> Transfer:
        """Create a transfer from payer to payee."""
        ...

    @abstractmethod
    async def get_account_transfers(self, account_id: str) -> List[Transfer]:
        """List transfers for an account."""
        ...

    @abstractmethod
    async def get_account_purchases(self, account_id: str) -> List[Dict[str, Any]]:
        """List purchases for an account as raw records."""
        ...

    async def get_account_balance(self, account_id: str) -> float:
        """Fresh balance read for an account."""
        account = await self.get_account(account_id)
        return account.balance

    async def wait_for_balance_update(
        self,
        account_id: str,
        expected_balance: float,
        max_attempts: int = 20,
        interval: float = 0.5,
    ) -> Optional[float]:
        """
        Poll an account until its balance reaches the expected value.

        Gives up after max_attempts and returns the last balance it
        observed instead of raising. Returns None only if no read ever
        succeeded.
        """
        last_balance: Optional[float] = None

        for attempt in range(max_attempts):
            try:
                last_balance = await self.get_account_balance(account_id)
            except AccountStoreException as e:
                logger.warning(
                    "balance_poll_read_failed",
                    account_id=account_id,
                    attempt=attempt + 1,
                    error=e.message,
                )
            else:
                if abs(last_balance - expected_balance) < BALANCE_TOLERANCE:
                    return last_balance

            if attempt < max_attempts - 1:
                await asyncio.sleep(interval)

        logger.warning(
            "balance_poll_exhausted",
            account_id=account_id,
            expected_balance=expected_balance,
            last_balance=last_balance,
            attempts=max_attempts,
        )
        return last_balance


class CreditScoreClient(ABC):
    """Abstract client for the credit score lookup service."""

    @abstractmethod
    async def get_credit_score(self, customer_id: str) -> int:
        """
        Look up a customer's credit score.

        Returns:
            The score, or 0 when the lookup fails
        """
        ...
