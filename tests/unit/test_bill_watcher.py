"""
Unit tests for the polling bill watcher.
"""

from dataclasses import replace

import pytest

from bankflow.application.services import BillChanges, BillWatcher, diff_bills
from bankflow.domain.entities import Bill, BillStatus
from bankflow.domain.exceptions import AccountStoreException

from tests.conftest import FakeAccountStoreClient


def make_bill(bill_id: str, status: BillStatus = BillStatus.PENDING) -> Bill:
    return Bill(id=bill_id, account_id="acct_1", payee="Gym", payment_amount=30, status=status)


class FlakyAccountStoreClient(FakeAccountStoreClient):
    """Fails the first bill listing, then behaves."""

    def __init__(self):
        super().__init__()
        self.bill_calls = 0

    async def get_account_bills(self, account_id):
        self.bill_calls += 1
        if self.bill_calls == 1:
            raise AccountStoreException("temporarily down", status_code=503)
        return await super().get_account_bills(account_id)


class TestDiffBills:

    def test_added_removed_updated(self):
        previous = {"a": make_bill("a"), "b": make_bill("b")}
        current = {"b": make_bill("b", BillStatus.COMPLETED), "c": make_bill("c")}

        changes = diff_bills(previous, current)

        assert [b.id for b in changes.added] == ["c"]
        assert [b.id for b in changes.removed] == ["a"]
        assert [b.id for b in changes.updated] == ["b"]

    def test_no_change_is_falsy(self):
        bills = {"a": make_bill("a")}

        assert not diff_bills(bills, dict(bills))
        assert not BillChanges()


class TestBillWatcher:

    @pytest.mark.asyncio
    async def test_initial_snapshot_then_changes_only(self, account_client):
        first = account_client.add_bill(bill_id="a")
        watcher = BillWatcher(account_client, interval=0)
        stream = watcher.watch("acct_1")

        try:
            snapshot = await stream.__anext__()
            assert [b.id for b in snapshot.added] == ["a"]

            account_client.add_bill(bill_id="b")
            changes = await stream.__anext__()
            assert [b.id for b in changes.added] == ["b"]
            assert changes.updated == []

            account_client.bills["a"] = replace(first, status=BillStatus.CANCELLED)
            changes = await stream.__anext__()
            assert [b.id for b in changes.updated] == ["a"]
        finally:
            await stream.aclose()

    @pytest.mark.asyncio
    async def test_empty_account_still_yields_snapshot(self, account_client):
        stream = BillWatcher(account_client, interval=0).watch("acct_1")

        try:
            snapshot = await stream.__anext__()
            assert not snapshot
        finally:
            await stream.aclose()

    @pytest.mark.asyncio
    async def test_poll_failure_keeps_watching(self):
        client = FlakyAccountStoreClient()
        client.add_bill(bill_id="a")
        stream = BillWatcher(client).watch("acct_1", interval=0)

        try:
            snapshot = await stream.__anext__()
            assert [b.id for b in snapshot.added] == ["a"]
            assert client.bill_calls == 2
        finally:
            await stream.aclose()
