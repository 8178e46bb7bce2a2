"""Transfer service - moves money and waits for the balance to settle."""

import structlog

from bankflow.application.dto import TransferRequest, TransferResult
from bankflow.domain.entities import TransferMedium
from bankflow.domain.exceptions import (
    InsufficientFundsException,
    InvalidTransferRequestException,
)
from bankflow.domain.interfaces import AccountStoreClient
from bankflow.domain.interfaces.clients import BALANCE_TOLERANCE
from bankflow.core.metrics import record_balance_poll_exhausted
from bankflow.service.billing import format_currency

logger = structlog.get_logger(__name__)


class TransferService:
    """
    Application service for account transfers.

    After the transfer is created the payer's balance is polled until it
    reflects the debit. The poll gives up quietly and reports the last
    balance it saw.
    """

    def __init__(
        self,
        account_client: AccountStoreClient,
        poll_attempts: int = 20,
        poll_interval: float = 0.5,
    ):
        self._accounts = account_client
        self._poll_attempts = poll_attempts
        self._poll_interval = poll_interval

    async def create_transfer(self, request: TransferRequest) -> TransferResult:
        """
        Transfer between two accounts.

        Raises:
            InvalidTransferRequestException: If request validation fails
            AccountNotFoundException: If either account doesn't exist
            InsufficientFundsException: If the payer can't cover the amount
            AccountStoreException: If the account store fails
        """
        errors = request.validate()
        if errors:
            raise InvalidTransferRequestException("; ".join(errors))

        medium = TransferMedium(request.medium)
        log = logger.bind(
            payer_id=request.payer_id,
            payee_id=request.payee_id,
            amount=request.amount,
            medium=medium.value,
        )

        await self._accounts.get_account(request.payee_id)
        payer = await self._accounts.get_account(request.payer_id)

        available = payer.available(medium)
        if available < request.amount:
            log.info("transfer_rejected_insufficient_funds", available=available)
            raise InsufficientFundsException(medium.value, format_currency(available))

        transfer = await self._accounts.create_transfer(
            payer_id=request.payer_id,
            payee_id=request.payee_id,
            amount=request.amount,
            medium=medium,
            description=request.description,
        )
        log.info("transfer_created", transfer_id=transfer.id)

        if medium != TransferMedium.BALANCE:
            return TransferResult(transfer=transfer, payer_balance=payer.balance, balance_confirmed=True)

        expected = payer.balance - request.amount
        observed = await self._accounts.wait_for_balance_update(
            request.payer_id,
            expected,
            max_attempts=self._poll_attempts,
            interval=self._poll_interval,
        )
        confirmed = observed is not None and abs(observed - expected) < BALANCE_TOLERANCE
        if not confirmed:
            record_balance_poll_exhausted()

        log.info("transfer_settled", payer_balance=observed, balance_confirmed=confirmed)
        return TransferResult(transfer=transfer, payer_balance=observed, balance_confirmed=confirmed)
