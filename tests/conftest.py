"""
Shared fixtures.

Provides:
- In-memory document and legacy stores
- Fake account store and credit score clients
- A controllable clock and a tracker wired to the in-memory store
"""

import copy
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

import pytest

from bankflow.application.services import (
    BillLifecycleManager,
    LegacyMigrationAdapter,
    RecurringBillTracker,
)
from bankflow.domain.entities import Account, Bill, BillStatus, Transfer, TransferMedium
from bankflow.domain.exceptions import (
    AccountNotFoundException,
    AccountStoreException,
    BillNotFoundException,
    DocumentStoreException,
)
from bankflow.domain.interfaces import (
    AccountStoreClient,
    CreditScoreClient,
    DocumentStore,
    LegacyStore,
)
from bankflow.infrastructure.repositories import DocumentRecurringPaymentRepository


# =============================================================================
# In-Memory Stores
# =============================================================================

class InMemoryDocumentStore(DocumentStore):
    """Dict-backed document store with switchable failures."""

    def __init__(self):
        self.documents: Dict[tuple, Dict[str, Any]] = {}
        self.owners: Dict[tuple, Optional[str]] = {}
        self.fail_reads = False
        self.fail_writes = False
        self.fail_deletes = False
        self.write_count = 0

    async def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        if self.fail_reads:
            raise DocumentStoreException("document store unavailable")
        data = self.documents.get((collection, doc_id))
        return copy.deepcopy(data) if data is not None else None

    async def set(
        self,
        collection: str,
        doc_id: str,
        data: Dict[str, Any],
        owner_id: Optional[str] = None,
    ) -> None:
        if self.fail_writes:
            raise DocumentStoreException("document store unavailable")
        self.write_count += 1
        self.documents[(collection, doc_id)] = copy.deepcopy(data)
        self.owners[(collection, doc_id)] = owner_id

    async def update(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> None:
        if self.fail_writes:
            raise DocumentStoreException("document store unavailable")
        key = (collection, doc_id)
        if key not in self.documents:
            raise DocumentStoreException(f"Document not found: {collection}/{doc_id}")
        self.write_count += 1
        self.documents[key] = {**self.documents[key], **copy.deepcopy(fields)}

    async def delete(self, collection: str, doc_id: str) -> bool:
        if self.fail_deletes:
            raise DocumentStoreException("document store unavailable")
        self.owners.pop((collection, doc_id), None)
        return self.documents.pop((collection, doc_id), None) is not None

    async def find_by_owner(self, collection: str, owner_id: str) -> List[Dict[str, Any]]:
        if self.fail_reads:
            raise DocumentStoreException("document store unavailable")
        return [
            copy.deepcopy(data)
            for key, data in self.documents.items()
            if key[0] == collection and self.owners.get(key) == owner_id
        ]


class InMemoryLegacyStore(LegacyStore):
    def __init__(self, items: Optional[Dict[tuple, str]] = None):
        self.items: Dict[tuple, str] = dict(items or {})

    async def get_item(self, namespace: str, key: str) -> Optional[str]:
        return self.items.get((namespace, key))

    async def set_item(self, namespace: str, key: str, value: str) -> None:
        self.items[(namespace, key)] = value

    async def remove_item(self, namespace: str, key: str) -> None:
        self.items.pop((namespace, key), None)


# =============================================================================
# Fake Clients
# =============================================================================

class FakeAccountStoreClient(AccountStoreClient):
    """
    Account store held in memory.

    With settle_transfers off, transfers are recorded but balances never
    move, which is what a lagging store looks like to the balance poll.
    """

    def __init__(self, fail_mode: bool = False, settle_transfers: bool = True):
        self.accounts: Dict[str, Account] = {}
        self.bills: Dict[str, Bill] = {}
        self.transfers: List[Transfer] = []
        self.fail_mode = fail_mode
        self.settle_transfers = settle_transfers
        self.balance_reads = 0

    def add_account(self, account_id: str, balance: float = 0.0, rewards: int = 0) -> Account:
        account = Account(
            id=account_id,
            type="Checking",
            nickname=f"Account {account_id}",
            balance=balance,
            customer_id="customer_1",
            rewards=rewards,
        )
        self.accounts[account_id] = account
        return account

    def add_bill(
        self,
        account_id: str = "acct_1",
        payee: str = "City Power",
        amount: float = 84.5,
        status: BillStatus = BillStatus.PENDING,
        recurring_date: Optional[int] = None,
        bill_id: Optional[str] = None,
    ) -> Bill:
        bill = Bill(
            id=bill_id or uuid4().hex[:12],
            account_id=account_id,
            payee=payee,
            payment_amount=amount,
            status=status,
            nickname=payee,
            recurring_date=recurring_date,
        )
        self.bills[bill.id] = bill
        return bill

    def _check(self) -> None:
        if self.fail_mode:
            raise AccountStoreException("Account store unavailable", status_code=500)

    async def get_account(self, account_id: str) -> Account:
        self._check()
        self.balance_reads += 1
        if account_id not in self.accounts:
            raise AccountNotFoundException(account_id)
        return self.accounts[account_id]

    async def get_customer_accounts(self, customer_id: str) -> List[Account]:
        self._check()
        return [a for a in self.accounts.values() if a.customer_id == customer_id]

    async def update_account_balance(self, account_id: str, balance: float) -> None:
        self._check()
        account = await self.get_account(account_id)
        self.accounts[account_id] = Account(
            id=account.id,
            type=account.type,
            nickname=account.nickname,
            balance=balance,
            customer_id=account.customer_id,
            rewards=account.rewards,
        )

    async def get_account_bills(self, account_id: str) -> List[Bill]:
        self._check()
        return [copy.copy(b) for b in self.bills.values() if b.account_id == account_id]

    async def get_bill(self, bill_id: str) -> Bill:
        self._check()
        if bill_id not in self.bills:
            raise BillNotFoundException(bill_id)
        return copy.copy(self.bills[bill_id])

    async def create_bill(self, account_id: str, payload: Dict[str, Any]) -> Bill:
        self._check()
        bill = Bill(
            id=uuid4().hex[:12],
            account_id=account_id,
            payee=payload["payee"],
            payment_amount=payload["payment_amount"],
            status=BillStatus(payload["status"]),
            nickname=payload.get("nickname"),
            payment_date=payload.get("payment_date"),
            recurring_date=payload.get("recurring_date"),
        )
        self.bills[bill.id] = bill
        return copy.copy(bill)

    async def update_bill(self, bill_id: str, fields: Dict[str, Any]) -> None:
        self._check()
        if bill_id not in self.bills:
            raise BillNotFoundException(bill_id)
        bill = self.bills[bill_id]
        if "status" in fields:
            bill.status = BillStatus(fields["status"])

    async def delete_bill(self, bill_id: str) -> None:
        self._check()
        if self.bills.pop(bill_id, None) is None:
            raise BillNotFoundException(bill_id)

    async def create_transfer(
        self,
        payer_id: str,
        payee_id: str,
        amount: float,
        medium: TransferMedium,
        description: Optional[str] = None,
    ) -> Transfer:
        self._check()
        transfer = Transfer(
            id=uuid4().hex[:12],
            payer_id=payer_id,
            payee_id=payee_id,
            amount=amount,
            medium=medium,
            transaction_date="2026-10-19",
            status="pending",
            description=description or "P2P Transfer",
        )
        self.transfers.append(transfer)

        if self.settle_transfers and medium == TransferMedium.BALANCE:
            payer = self.accounts[payer_id]
            payee = self.accounts[payee_id]
            await self.update_account_balance(payer_id, payer.balance - amount)
            await self.update_account_balance(payee_id, payee.balance + amount)
        return transfer

    async def get_account_transfers(self, account_id: str) -> List[Transfer]:
        self._check()
        return [t for t in self.transfers if account_id in (t.payer_id, t.payee_id)]

    async def get_account_purchases(self, account_id: str) -> List[Dict[str, Any]]:
        self._check()
        return []


class FakeCreditScoreClient(CreditScoreClient):
    """Returns scores from a dict; unknown customers score 0."""

    def __init__(self, scores: Optional[Dict[str, int]] = None):
        self.scores = dict(scores or {})
        self.lookups: List[str] = []

    async def get_credit_score(self, customer_id: str) -> int:
        self.lookups.append(customer_id)
        return self.scores.get(customer_id, 0)


class FixedClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.current = now

    def __call__(self) -> datetime:
        return self.current

    def set(self, now: datetime) -> None:
        self.current = now


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def clock() -> FixedClock:
    """Clock fixed at mid-month so month boundaries are a few weeks away."""
    return FixedClock(datetime(2026, 10, 15, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def document_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def legacy_store() -> InMemoryLegacyStore:
    return InMemoryLegacyStore()


@pytest.fixture
def account_client() -> FakeAccountStoreClient:
    client = FakeAccountStoreClient()
    client.add_account("acct_1", balance=500.0, rewards=40)
    client.add_account("acct_2", balance=100.0)
    return client


@pytest.fixture
def credit_score_client() -> FakeCreditScoreClient:
    return FakeCreditScoreClient({"cust_good": 720, "cust_fair": 620, "cust_low": 420})


@pytest.fixture
def tracker(document_store: InMemoryDocumentStore, clock: FixedClock) -> RecurringBillTracker:
    return RecurringBillTracker(
        DocumentRecurringPaymentRepository(document_store),
        clock=clock,
    )


@pytest.fixture
def migration(tracker: RecurringBillTracker, legacy_store: InMemoryLegacyStore) -> LegacyMigrationAdapter:
    return LegacyMigrationAdapter(tracker, legacy_store)


@pytest.fixture
def bill_manager(
    account_client: FakeAccountStoreClient,
    tracker: RecurringBillTracker,
    migration: LegacyMigrationAdapter,
) -> BillLifecycleManager:
    return BillLifecycleManager(account_client, tracker, migration)
