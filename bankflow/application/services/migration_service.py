"""Legacy migration adapter - moves old local payment history into recurring records."""

import json
from datetime import datetime
from typing import Any, Dict, List, MutableSet, Optional

import structlog

from bankflow.application.dto import MigrationResult, PaymentRequest
from bankflow.core.metrics import record_bill_payment, record_migration
from bankflow.domain.entities import BillSnapshot
from bankflow.domain.interfaces import LegacyStore
from bankflow.service.billing import parse_timestamp
from bankflow.service.underwriting import as_number
from .recurring_service import RecurringBillTracker

logger = structlog.get_logger(__name__)

LEGACY_HISTORY_KEY = "@payment_history"
DEFAULT_PAYEE = "Migrated Bill"
DEFAULT_RECURRING_DAY = 1


class LegacyMigrationAdapter:
    """
    One-shot backfill of the old client's local payment history.

    The legacy blob is a JSON object mapping bill id to a list of
    payment-like entries. Each bill becomes a recurring payment record
    and every entry is replayed through the tracker's normal append path.

    Runs at most once per user per process: users are remembered in
    `completed_users` after any attempt. The blob is deleted once at
    least one bill has moved over.
    """

    def __init__(
        self,
        tracker: RecurringBillTracker,
        legacy_store: LegacyStore,
        completed_users: Optional[MutableSet[str]] = None,
        legacy_key: str = LEGACY_HISTORY_KEY,
    ):
        self._tracker = tracker
        self._legacy_store = legacy_store
        self._completed_users = completed_users if completed_users is not None else set()
        self._legacy_key = legacy_key

    async def check_migration_needed(self, user_id: str) -> bool:
        """Whether the user still has a legacy history blob."""
        try:
            return await self._legacy_store.get_item(user_id, self._legacy_key) is not None
        except Exception as e:
            logger.warning("legacy_check_failed", user_id=user_id, error=str(e))
            return False

    async def migrate(self, user_id: str) -> MigrationResult:
        """
        Migrate a user's legacy history.

        Per-bill failures are logged and skipped. The result reports how
        many bills and payments moved over.
        """
        if user_id in self._completed_users:
            return MigrationResult(migrated=False, message="Migration already attempted")

        log = logger.bind(user_id=user_id)

        try:
            raw = await self._legacy_store.get_item(user_id, self._legacy_key)
        except Exception as e:
            log.error("legacy_read_failed", error=str(e))
            record_migration("failed")
            return MigrationResult(migrated=False, message="Migration failed", error=str(e))

        self._completed_users.add(user_id)

        if raw is None:
            record_migration("empty")
            return MigrationResult(migrated=False, message="No data to migrate")

        try:
            history = json.loads(raw)
            if not isinstance(history, dict):
                raise ValueError("legacy history must be a JSON object")
        except ValueError as e:
            log.error("legacy_blob_invalid", error=str(e))
            record_migration("failed")
            return MigrationResult(migrated=False, message="Migration failed", error=str(e))

        log.info("migration_started", bills=len(history))

        migrated_count = 0
        total_payments = 0

        for bill_id, entries in history.items():
            try:
                replayed = await self._migrate_bill(user_id, bill_id, entries)
            except Exception as e:
                log.error("bill_migration_failed", bill_id=bill_id, error=str(e))
                continue

            migrated_count += 1
            total_payments += replayed

        if migrated_count > 0:
            try:
                await self._legacy_store.remove_item(user_id, self._legacy_key)
            except Exception as e:
                log.error("legacy_blob_remove_failed", error=str(e))

        record_migration("migrated" if migrated_count > 0 else "failed")
        log.info(
            "migration_completed",
            migrated_count=migrated_count,
            total_payments=total_payments,
        )

        return MigrationResult(
            migrated=migrated_count > 0,
            migrated_count=migrated_count,
            total_payments=total_payments,
            message=f"Migrated {migrated_count} bills with {total_payments} payments",
        )

    async def _migrate_bill(
        self,
        user_id: str,
        bill_id: str,
        entries: List[Dict[str, Any]],
    ) -> int:
        """Initialize one bill's record from its first entry and replay all entries."""
        if not isinstance(entries, list) or not entries:
            raise ValueError("no legacy payments for bill")

        first = entries[0]
        snapshot = BillSnapshot(
            payee=first.get("payee") or DEFAULT_PAYEE,
            recurring_date=first.get("recurring_date") or DEFAULT_RECURRING_DAY,
            payment_amount=as_number(first.get("payment_amount", first.get("amount"))) or 0,
            nickname=first.get("nickname") or "",
        )
        await self._tracker.initialize_recurring_bill(user_id, bill_id, snapshot)

        for entry in entries:
            paid_at = self._entry_date(entry)
            await self._tracker.add_payment_to_history(
                user_id,
                bill_id,
                PaymentRequest(
                    amount=as_number(entry.get("amount")) or 0,
                    payee=entry.get("payee") or snapshot.payee,
                    month=paid_at.month - 1 if paid_at else entry.get("month"),
                    year=paid_at.year if paid_at else entry.get("year"),
                    paid_at=paid_at,
                ),
            )
            record_bill_payment("migrated")

        return len(entries)

    def _entry_date(self, entry: Dict[str, Any]) -> Optional[datetime]:
        """Legacy timestamp, or None to stamp the replayed payment with now."""
        value = entry.get("date")
        if not isinstance(value, str):
            return None
        try:
            return parse_timestamp(value)
        except ValueError:
            return None
