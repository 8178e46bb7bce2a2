"""Bill watcher - polls an account's bills and yields what changed."""

import asyncio
from dataclasses import dataclass, field
from typing import AsyncIterator, Dict, List, Optional

import structlog

from bankflow.core.config import settings
from bankflow.domain.entities import Bill
from bankflow.domain.exceptions import AccountStoreException
from bankflow.domain.interfaces import AccountStoreClient

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class BillChanges:
    """Difference between two consecutive bill snapshots of one account."""

    added: List[Bill] = field(default_factory=list)
    removed: List[Bill] = field(default_factory=list)
    updated: List[Bill] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.added or self.removed or self.updated)


def diff_bills(previous: Dict[str, Bill], current: Dict[str, Bill]) -> BillChanges:
    return BillChanges(
        added=[bill for bill_id, bill in current.items() if bill_id not in previous],
        removed=[bill for bill_id, bill in previous.items() if bill_id not in current],
        updated=[
            bill for bill_id, bill in current.items()
            if bill_id in previous and previous[bill_id] != bill
        ],
    )


class BillWatcher:
    """
    Polling replacement for a live bill subscription.

    `watch` is an async generator: the first item is the full snapshot
    (everything as added), later items are only emitted when something
    changed. Stop watching by breaking out of the loop or calling
    `aclose()` on the generator.
    """

    def __init__(self, account_client: AccountStoreClient, interval: float | None = None):
        self._accounts = account_client
        self._interval = interval if interval is not None else settings.bill_watch_interval

    async def watch(
        self,
        account_id: str,
        interval: Optional[float] = None,
    ) -> AsyncIterator[BillChanges]:
        delay = self._interval if interval is None else interval
        previous: Optional[Dict[str, Bill]] = None

        while True:
            try:
                bills = await self._accounts.get_account_bills(account_id)
            except AccountStoreException as e:
                logger.warning("bill_watch_poll_failed", account_id=account_id, error=e.message)
            else:
                current = {bill.id: bill for bill in bills}
                changes = diff_bills(previous or {}, current)
                if previous is None or changes:
                    yield changes
                previous = current

            await asyncio.sleep(delay)
