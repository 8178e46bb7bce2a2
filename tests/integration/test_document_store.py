"""
Integration tests for the SQL-backed stores and repositories.

These tests verify:
1. Documents are written, merged, listed by owner and deleted
2. Legacy key/value pairs round-trip
3. Recurring payment records survive the trip through the documents table
"""

from datetime import datetime, timezone

import pytest
from sqlalchemy import select

from bankflow.domain.entities import BillSnapshot, Payment, RecurringPaymentRecord
from bankflow.domain.exceptions import DocumentStoreException
from bankflow.infrastructure.database import DocumentModel
from bankflow.infrastructure.repositories import (
    DocumentRecurringPaymentRepository,
    SqlDocumentStore,
    SqlLegacyStore,
)


# =============================================================================
# Document Store
# =============================================================================

class TestSqlDocumentStore:

    @pytest.mark.asyncio
    async def test_set_and_get(self, test_session):
        store = SqlDocumentStore(test_session)

        await store.set("things", "a", {"name": "first", "tags": [1, 2]}, owner_id="u1")

        assert await store.get("things", "a") == {"name": "first", "tags": [1, 2]}
        assert await store.get("things", "missing") is None
        assert await store.get("other", "a") is None

    @pytest.mark.asyncio
    async def test_set_replaces(self, test_session):
        store = SqlDocumentStore(test_session)

        await store.set("things", "a", {"name": "first", "extra": True})
        await store.set("things", "a", {"name": "second"})

        assert await store.get("things", "a") == {"name": "second"}

    @pytest.mark.asyncio
    async def test_update_merges_top_level_fields(self, test_session):
        store = SqlDocumentStore(test_session)
        await store.set("things", "a", {"name": "first", "count": 1})

        await store.update("things", "a", {"count": 2, "flag": "x"})

        assert await store.get("things", "a") == {"name": "first", "count": 2, "flag": "x"}

    @pytest.mark.asyncio
    async def test_update_missing_document(self, test_session):
        store = SqlDocumentStore(test_session)

        with pytest.raises(DocumentStoreException):
            await store.update("things", "nope", {"count": 1})

    @pytest.mark.asyncio
    async def test_delete(self, test_session):
        store = SqlDocumentStore(test_session)
        await store.set("things", "a", {"name": "first"})

        assert await store.delete("things", "a") is True
        assert await store.delete("things", "a") is False
        assert await store.get("things", "a") is None

    @pytest.mark.asyncio
    async def test_find_by_owner(self, test_session):
        store = SqlDocumentStore(test_session)
        await store.set("things", "a", {"n": 1}, owner_id="u1")
        await store.set("things", "b", {"n": 2}, owner_id="u1")
        await store.set("things", "c", {"n": 3}, owner_id="u2")
        await store.set("other", "d", {"n": 4}, owner_id="u1")

        found = await store.find_by_owner("things", "u1")

        assert sorted(d["n"] for d in found) == [1, 2]
        assert await store.find_by_owner("things", "u3") == []

    @pytest.mark.asyncio
    async def test_rows_are_keyed_by_collection(self, test_session):
        store = SqlDocumentStore(test_session)
        await store.set("things", "a", {"n": 1}, owner_id="u1")

        result = await test_session.execute(select(DocumentModel))
        rows = result.scalars().all()

        assert [(r.collection, r.doc_id, r.owner_id) for r in rows] == [("things", "a", "u1")]


# =============================================================================
# Legacy Store
# =============================================================================

class TestSqlLegacyStore:

    @pytest.mark.asyncio
    async def test_round_trip(self, test_session):
        store = SqlLegacyStore(test_session)

        await store.set_item("u1", "@payment_history", "{}")
        await store.set_item("u1", "@payment_history", '{"b": []}')

        assert await store.get_item("u1", "@payment_history") == '{"b": []}'
        assert await store.get_item("u2", "@payment_history") is None

    @pytest.mark.asyncio
    async def test_remove(self, test_session):
        store = SqlLegacyStore(test_session)
        await store.set_item("u1", "@payment_history", "{}")

        await store.remove_item("u1", "@payment_history")
        await store.remove_item("u1", "@payment_history")

        assert await store.get_item("u1", "@payment_history") is None


# =============================================================================
# Recurring Payment Repository
# =============================================================================

class TestRecurringRepositoryOnSql:

    @pytest.mark.asyncio
    async def test_record_round_trip(self, test_session):
        repo = DocumentRecurringPaymentRepository(SqlDocumentStore(test_session))
        created = datetime(2026, 3, 1, 8, 30, tzinfo=timezone.utc)
        paid = datetime(2026, 3, 5, 14, 0, 0, 123000, tzinfo=timezone.utc)

        record = RecurringPaymentRecord(
            user_id="u1",
            bill_id="b1",
            bill_data=BillSnapshot(payee="Water", recurring_date=5, payment_amount=42.0),
            created_at=created,
            updated_at=created,
        )
        await repo.create(record)

        record.payment_history = [
            Payment(id="p1", date=paid, amount=42.0, month=2, year=2026, payee="Water"),
        ]
        record.last_payment_date = paid
        record.updated_at = paid
        await repo.save_history(record)

        loaded = await repo.get("u1", "b1")

        assert loaded.bill_data.payee == "Water"
        assert loaded.bill_data.recurring_date == 5
        assert loaded.payment_history[0].date == paid
        assert loaded.payment_history[0].payee == "Water"
        assert loaded.last_payment_date == paid
        assert loaded.created_at == created
        assert [r.bill_id for r in await repo.list_by_user("u1")] == ["b1"]

    @pytest.mark.asyncio
    async def test_stored_with_camel_case_keys(self, test_session):
        store = SqlDocumentStore(test_session)
        repo = DocumentRecurringPaymentRepository(store)
        now = datetime(2026, 3, 1, tzinfo=timezone.utc)

        await repo.create(RecurringPaymentRecord(
            user_id="u1",
            bill_id="b1",
            bill_data=BillSnapshot(payee="Water"),
            created_at=now,
            updated_at=now,
        ))

        data = await store.get("recurringPayments", "u1_b1")
        assert data["userId"] == "u1"
        assert data["billId"] == "b1"
        assert data["paymentHistory"] == []
        assert data["createdAt"] == "2026-03-01T00:00:00.000Z"

    @pytest.mark.asyncio
    async def test_invalid_document_skipped_in_listing(self, test_session):
        store = SqlDocumentStore(test_session)
        repo = DocumentRecurringPaymentRepository(store)
        await store.set("recurringPayments", "u1_bad", {"userId": "u1", "billId": "bad"}, owner_id="u1")

        assert await repo.list_by_user("u1") == []
