"""
Unit tests for the legacy migration adapter.
"""

import json
from datetime import datetime, timezone

import pytest

from bankflow.application.dto import PaymentRequest
from bankflow.application.services import LegacyMigrationAdapter, RecurringBillTracker

USER = "user_1"
KEY = "@payment_history"
COLLECTION = "recurringPayments"


def legacy_blob(bills: int, payments: int) -> str:
    history = {}
    for b in range(bills):
        history[f"bill_{b}"] = [
            {
                "amount": 10 + p,
                "payee": f"Payee {b}",
                "recurring_date": 5,
                "date": datetime(2026, 1 + p, 3, tzinfo=timezone.utc).isoformat(),
            }
            for p in range(payments)
        ]
    return json.dumps(history)


class TestCheckMigrationNeeded:

    @pytest.mark.asyncio
    async def test_needed_when_blob_present(self, migration: LegacyMigrationAdapter, legacy_store):
        legacy_store.items[(USER, KEY)] = "{}"

        assert await migration.check_migration_needed(USER) is True

    @pytest.mark.asyncio
    async def test_not_needed_without_blob(self, migration: LegacyMigrationAdapter):
        assert await migration.check_migration_needed(USER) is False


class TestMigrate:

    @pytest.mark.asyncio
    async def test_bills_and_payments_move_over(
        self,
        migration: LegacyMigrationAdapter,
        tracker: RecurringBillTracker,
        legacy_store,
        document_store,
    ):
        legacy_store.items[(USER, KEY)] = legacy_blob(bills=3, payments=4)

        result = await migration.migrate(USER)

        assert result.migrated is True
        assert result.migrated_count == 3
        assert result.total_payments == 12
        assert result.message == "Migrated 3 bills with 12 payments"
        assert (USER, KEY) not in legacy_store.items

        records = await tracker.get_user_recurring_bills(USER)
        assert len(records) == 3
        assert all(r.total_payments == 4 for r in records)

    @pytest.mark.asyncio
    async def test_replayed_payments_keep_legacy_dates(
        self,
        migration: LegacyMigrationAdapter,
        tracker: RecurringBillTracker,
        legacy_store,
    ):
        legacy_store.items[(USER, KEY)] = legacy_blob(bills=1, payments=3)

        await migration.migrate(USER)

        history = await tracker.get_payment_history(USER, "bill_0")
        assert [p.date.month for p in history] == [3, 2, 1]
        assert [p.month for p in history] == [2, 1, 0]
        assert history[0].payee == "Payee 0"

    @pytest.mark.asyncio
    async def test_month_and_year_come_from_legacy_date(
        self,
        migration: LegacyMigrationAdapter,
        tracker: RecurringBillTracker,
        legacy_store,
    ):
        # Stored month 12 would fail the 0-11 check on every later read
        legacy_store.items[(USER, KEY)] = json.dumps({
            "b1": [
                {"amount": 50, "month": 12, "year": 2024, "date": "2024-12-05T10:00:00Z"},
                {"amount": 50, "date": "2024-11-05T10:00:00Z"},
            ],
        })

        result = await migration.migrate(USER)

        assert result.migrated_count == 1
        history = await tracker.get_payment_history(USER, "b1")
        assert [(p.month, p.year) for p in history] == [(11, 2024), (10, 2024)]

        await tracker.add_payment_to_history(USER, "b1", PaymentRequest(amount=50))
        assert len(await tracker.get_payment_history(USER, "b1")) == 3

    @pytest.mark.asyncio
    async def test_undated_entry_with_bad_month_uses_now(
        self,
        migration: LegacyMigrationAdapter,
        tracker: RecurringBillTracker,
        legacy_store,
    ):
        legacy_store.items[(USER, KEY)] = json.dumps({"b1": [{"amount": 5, "month": 12, "year": "2024"}]})

        await migration.migrate(USER)

        history = await tracker.get_payment_history(USER, "b1")
        assert [(p.month, p.year) for p in history] == [(9, 2026)]

    @pytest.mark.asyncio
    async def test_snapshot_defaults(
        self,
        migration: LegacyMigrationAdapter,
        legacy_store,
        document_store,
    ):
        legacy_store.items[(USER, KEY)] = json.dumps({"bill_x": [{"amount": "7.25"}]})

        await migration.migrate(USER)

        doc = document_store.documents[(COLLECTION, f"{USER}_bill_x")]
        assert doc["billData"] == {
            "payee": "Migrated Bill",
            "recurring_date": 1,
            "payment_amount": 7.25,
        }
        assert doc["paymentHistory"][0]["amount"] == 7.25

    @pytest.mark.asyncio
    async def test_no_data(self, migration: LegacyMigrationAdapter):
        result = await migration.migrate(USER)

        assert result.migrated is False
        assert result.message == "No data to migrate"

    @pytest.mark.asyncio
    async def test_runs_once_per_user(self, migration: LegacyMigrationAdapter, legacy_store):
        await migration.migrate(USER)
        legacy_store.items[(USER, KEY)] = legacy_blob(bills=1, payments=1)

        result = await migration.migrate(USER)

        assert result.migrated is False
        assert result.message == "Migration already attempted"
        assert (USER, KEY) in legacy_store.items

    @pytest.mark.asyncio
    async def test_invalid_json_keeps_blob(self, migration: LegacyMigrationAdapter, legacy_store):
        legacy_store.items[(USER, KEY)] = "{not json"

        result = await migration.migrate(USER)

        assert result.migrated is False
        assert result.error
        assert (USER, KEY) in legacy_store.items

    @pytest.mark.asyncio
    async def test_bad_bill_is_skipped(self, migration: LegacyMigrationAdapter, legacy_store):
        legacy_store.items[(USER, KEY)] = json.dumps({
            "good": [{"amount": 5, "payee": "Gym"}],
            "empty": [],
            "wrong": "not a list",
        })

        result = await migration.migrate(USER)

        assert result.migrated is True
        assert result.migrated_count == 1
        assert result.total_payments == 1
        assert (USER, KEY) not in legacy_store.items

    @pytest.mark.asyncio
    async def test_nothing_migrated_keeps_blob(
        self,
        migration: LegacyMigrationAdapter,
        legacy_store,
        document_store,
    ):
        legacy_store.items[(USER, KEY)] = legacy_blob(bills=2, payments=1)
        document_store.fail_writes = True

        result = await migration.migrate(USER)

        assert result.migrated is False
        assert result.migrated_count == 0
        assert (USER, KEY) in legacy_store.items

    @pytest.mark.asyncio
    async def test_shared_registry(self, tracker: RecurringBillTracker, legacy_store):
        done = set()
        first = LegacyMigrationAdapter(tracker, legacy_store, completed_users=done)
        second = LegacyMigrationAdapter(tracker, legacy_store, completed_users=done)

        await first.migrate(USER)
        result = await second.migrate(USER)

        assert result.message == "Migration already attempted"
        assert done == {USER}
