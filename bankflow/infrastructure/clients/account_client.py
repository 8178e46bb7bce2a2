"""HTTP implementation of AccountStoreClient."""

import asyncio
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

import httpx
import structlog

from bankflow.core.config import settings
from bankflow.core.metrics import (
    track_account_store_latency,
    record_account_store_success,
    record_account_store_failure,
)
from bankflow.domain.entities import Account, Bill, BillStatus, Transfer, TransferMedium
from bankflow.domain.exceptions import (
    AccountNotFoundException,
    AccountStoreException,
    AccountStoreTimeoutException,
    BillNotFoundException,
    DomainException,
)
from bankflow.domain.interfaces import AccountStoreClient
from bankflow.service.billing import format_local_date

logger = structlog.get_logger(__name__)

DEFAULT_TRANSFER_DESCRIPTION = "P2P Transfer"


class HttpAccountStoreClient(AccountStoreClient):
    """
    HTTP client for the remote account store.

    Holds one connection pool for its lifetime; call aclose() on shutdown.
    The API key travels as the `key` query parameter on every request.
    GETs are retried with exponential backoff, writes are sent once.
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._max_retries = max_retries or settings.account_api_max_retries
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.account_api_url,
            timeout=timeout or settings.account_api_timeout,
            params={"key": api_key if api_key is not None else settings.account_api_key},
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    # =========================================================================
    # Accounts
    # =========================================================================

    async def get_account(self, account_id: str) -> Account:
        data = await self._request(
            "GET",
            f"/accounts/{account_id}",
            not_found=lambda: AccountNotFoundException(account_id),
        )
        return self._parse_account(data)

    async def get_customer_accounts(self, customer_id: str) -> List[Account]:
        data = await self._request(
            "GET",
            f"/customers/{customer_id}/accounts",
            empty_on_404=True,
        )
        return [self._parse_account(item) for item in data or []]

    async def update_account_balance(self, account_id: str, balance: float) -> None:
        await self._request(
            "PUT",
            f"/accounts/{account_id}",
            json={"balance": balance},
            not_found=lambda: AccountNotFoundException(account_id),
        )

    # =========================================================================
    # Bills
    # =========================================================================

    async def get_account_bills(self, account_id: str) -> List[Bill]:
        data = await self._request(
            "GET",
            f"/accounts/{account_id}/bills",
            empty_on_404=True,
        )
        return [self._parse_bill(item) for item in data or []]

    async def get_bill(self, bill_id: str) -> Bill:
        data = await self._request(
            "GET",
            f"/bills/{bill_id}",
            not_found=lambda: BillNotFoundException(bill_id),
        )
        return self._parse_bill(data)

    async def create_bill(self, account_id: str, payload: Dict[str, Any]) -> Bill:
        data = await self._request(
            "POST",
            f"/accounts/{account_id}/bills",
            json=payload,
            not_found=lambda: AccountNotFoundException(account_id),
        )
        created = self._unwrap_created(data)
        created.setdefault("account_id", account_id)
        return self._parse_bill(created)

    async def update_bill(self, bill_id: str, fields: Dict[str, Any]) -> None:
        await self._request(
            "PUT",
            f"/bills/{bill_id}",
            json=fields,
            not_found=lambda: BillNotFoundException(bill_id),
        )

    async def delete_bill(self, bill_id: str) -> None:
        await self._request(
            "DELETE",
            f"/bills/{bill_id}",
            not_found=lambda: BillNotFoundException(bill_id),
        )

    # =========================================================================
    # Transfers and purchases
    # =========================================================================

    async def create_transfer(
        self,
        payer_id: str,
        payee_id: str,
        amount: float,
        medium: TransferMedium,
        description: Optional[str] = None,
    ) -> Transfer:
        payload = {
            "medium": medium.value,
            "payee_id": payee_id,
            "amount": amount,
            "transaction_date": format_local_date(datetime.now()),
            "description": description or DEFAULT_TRANSFER_DESCRIPTION,
        }
        data = await self._request(
            "POST",
            f"/accounts/{payer_id}/transfers",
            json=payload,
            not_found=lambda: AccountNotFoundException(payer_id),
        )
        created = self._unwrap_created(data)
        created.setdefault("payer_id", payer_id)
        return self._parse_transfer(created)

    async def get_account_transfers(self, account_id: str) -> List[Transfer]:
        data = await self._request(
            "GET",
            f"/accounts/{account_id}/transfers",
            empty_on_404=True,
        )
        return [self._parse_transfer(item) for item in data or []]

    async def get_account_purchases(self, account_id: str) -> List[Dict[str, Any]]:
        data = await self._request(
            "GET",
            f"/accounts/{account_id}/purchases",
            empty_on_404=True,
        )
        return list(data or [])

    # =========================================================================
    # Transport
    # =========================================================================

    async def _request(
        self,
        method: str,
        path: str,
        json: Dict[str, Any] | None = None,
        not_found: Callable[[], DomainException] | None = None,
        empty_on_404: bool = False,
    ) -> Any:
        """
        Send a request and decode the JSON body.

        Only GETs are retried; timeouts and transport errors trigger a
        retry, HTTP error statuses do not.
        """
        attempts = self._max_retries if method == "GET" else 1
        last_exception: AccountStoreException | None = None

        for attempt in range(attempts):
            try:
                with track_account_store_latency():
                    response = await self._client.request(method, path, json=json)

                if response.status_code == 404:
                    record_account_store_failure("not_found")
                    if empty_on_404:
                        return None
                    if not_found is not None:
                        raise not_found()
                    raise AccountStoreException(f"Not found: {path}", status_code=404)

                if response.status_code >= 400:
                    record_account_store_failure("error")
                    raise AccountStoreException(
                        message=f"Account store error: {response.text}",
                        status_code=response.status_code,
                    )

                record_account_store_success()
                return response.json() if response.content else None

            except httpx.TimeoutException:
                record_account_store_failure("timeout")
                last_exception = AccountStoreTimeoutException()
                logger.warning(
                    "account_store_timeout",
                    method=method,
                    path=path,
                    attempt=attempt + 1,
                    max_attempts=attempts,
                )
            except httpx.HTTPError as e:
                record_account_store_failure("error")
                last_exception = AccountStoreException(
                    message=f"Unexpected error: {str(e)}",
                )
                logger.error(
                    "account_store_error",
                    method=method,
                    path=path,
                    attempt=attempt + 1,
                    error=str(e),
                )
            except ValueError as e:
                record_account_store_failure("error")
                raise AccountStoreException(f"Invalid JSON from account store: {e}") from e

            # Exponential backoff
            if attempt < attempts - 1:
                await asyncio.sleep(2**attempt * 0.1)

        raise last_exception or AccountStoreException("Account store request failed")

    def _unwrap_created(self, data: Any) -> Dict[str, Any]:
        """Creation calls wrap the new object in an `objectCreated` envelope."""
        if isinstance(data, dict) and isinstance(data.get("objectCreated"), dict):
            return dict(data["objectCreated"])
        if isinstance(data, dict):
            return dict(data)
        raise AccountStoreException("Creation response missing objectCreated")

    def _parse_account(self, item: Dict[str, Any]) -> Account:
        try:
            return Account(
                id=item["_id"],
                type=item.get("type", ""),
                nickname=item.get("nickname", ""),
                balance=float(item.get("balance") or 0),
                customer_id=item.get("customer_id", ""),
                rewards=int(item.get("rewards") or 0),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise AccountStoreException(f"Malformed account payload: {e}") from e

    def _parse_bill(self, item: Dict[str, Any]) -> Bill:
        try:
            recurring = item.get("recurring_date")
            return Bill(
                id=item["_id"],
                account_id=item.get("account_id", ""),
                payee=item.get("payee", ""),
                payment_amount=float(item.get("payment_amount") or 0),
                status=BillStatus(item.get("status") or BillStatus.PENDING.value),
                nickname=item.get("nickname") or None,
                payment_date=item.get("payment_date") or None,
                recurring_date=int(recurring) if recurring not in (None, "") else None,
            )
        except (KeyError, TypeError, ValueError) as e:
            raise AccountStoreException(f"Malformed bill payload: {e}") from e

    def _parse_transfer(self, item: Dict[str, Any]) -> Transfer:
        try:
            return Transfer(
                id=item["_id"],
                payer_id=item.get("payer_id", ""),
                payee_id=item["payee_id"],
                amount=float(item["amount"]),
                medium=TransferMedium(item.get("medium") or TransferMedium.BALANCE.value),
                transaction_date=item.get("transaction_date", ""),
                status=item.get("status", "pending"),
                description=item.get("description"),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise AccountStoreException(f"Malformed transfer payload: {e}") from e
