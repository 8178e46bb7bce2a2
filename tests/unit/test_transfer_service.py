"""
Unit tests for transfers and balance confirmation.
"""

import pytest

from bankflow.application.dto import TransferRequest
from bankflow.application.services import TransferService
from bankflow.domain.exceptions import (
    AccountNotFoundException,
    AccountStoreException,
    InsufficientFundsException,
    InvalidTransferRequestException,
)


@pytest.fixture
def transfer_service(account_client) -> TransferService:
    return TransferService(account_client, poll_attempts=3, poll_interval=0)


class TestCreateTransfer:

    @pytest.mark.asyncio
    async def test_balance_transfer_confirmed(self, transfer_service: TransferService, account_client):
        result = await transfer_service.create_transfer(
            TransferRequest(payer_id="acct_1", payee_id="acct_2", amount=120)
        )

        assert result.balance_confirmed is True
        assert result.payer_balance == 380
        assert account_client.accounts["acct_2"].balance == 220
        assert result.transfer.description == "P2P Transfer"

    @pytest.mark.asyncio
    async def test_lagging_store_returns_last_balance(self, transfer_service: TransferService, account_client):
        account_client.settle_transfers = False

        result = await transfer_service.create_transfer(
            TransferRequest(payer_id="acct_1", payee_id="acct_2", amount=120)
        )

        assert result.balance_confirmed is False
        assert result.payer_balance == 500
        assert len(account_client.transfers) == 1

    @pytest.mark.asyncio
    async def test_rewards_transfer_skips_poll(self, transfer_service: TransferService, account_client):
        result = await transfer_service.create_transfer(
            TransferRequest(payer_id="acct_1", payee_id="acct_2", amount=30, medium="rewards")
        )

        assert result.balance_confirmed is True
        assert account_client.balance_reads == 2

    @pytest.mark.parametrize("medium,amount,message", [
        ("balance", 600, "Insufficient balance. Available: $500.00"),
        ("rewards", 50, "Insufficient rewards. Available: $40.00"),
    ])
    @pytest.mark.asyncio
    async def test_insufficient_funds(
        self,
        transfer_service: TransferService,
        account_client,
        medium,
        amount,
        message,
    ):
        with pytest.raises(InsufficientFundsException) as exc_info:
            await transfer_service.create_transfer(
                TransferRequest(payer_id="acct_1", payee_id="acct_2", amount=amount, medium=medium)
            )

        assert exc_info.value.message == message
        assert account_client.transfers == []

    @pytest.mark.asyncio
    async def test_unknown_payee(self, transfer_service: TransferService, account_client):
        with pytest.raises(AccountNotFoundException):
            await transfer_service.create_transfer(
                TransferRequest(payer_id="acct_1", payee_id="nobody", amount=10)
            )

        assert account_client.transfers == []

    @pytest.mark.parametrize("fields", [
        {"payer_id": "acct_1", "payee_id": "acct_1", "amount": 10},
        {"payer_id": "acct_1", "payee_id": "acct_2", "amount": 0},
        {"payer_id": "", "payee_id": "acct_2", "amount": 10},
        {"payer_id": "acct_1", "payee_id": "acct_2", "amount": 10, "medium": "gold"},
    ])
    @pytest.mark.asyncio
    async def test_validation(self, transfer_service: TransferService, account_client, fields):
        with pytest.raises(InvalidTransferRequestException):
            await transfer_service.create_transfer(TransferRequest(**fields))

        assert account_client.balance_reads == 0

    @pytest.mark.asyncio
    async def test_store_failure_propagates(self, transfer_service: TransferService, account_client):
        account_client.fail_mode = True

        with pytest.raises(AccountStoreException):
            await transfer_service.create_transfer(
                TransferRequest(payer_id="acct_1", payee_id="acct_2", amount=10)
            )


class TestWaitForBalanceUpdate:

    @pytest.mark.asyncio
    async def test_returns_as_soon_as_balance_matches(self, account_client):
        balance = await account_client.wait_for_balance_update("acct_1", 500.004, max_attempts=5, interval=0)

        assert balance == 500
        assert account_client.balance_reads == 1

    @pytest.mark.asyncio
    async def test_exhausted_returns_last_seen(self, account_client):
        balance = await account_client.wait_for_balance_update("acct_1", 1.0, max_attempts=4, interval=0)

        assert balance == 500
        assert account_client.balance_reads == 4

    @pytest.mark.asyncio
    async def test_no_successful_read(self, account_client):
        account_client.fail_mode = True

        assert await account_client.wait_for_balance_update("acct_1", 1.0, max_attempts=2, interval=0) is None
