"""Dependency injection for FastAPI."""

from typing import Annotated, MutableSet

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from bankflow.application.services import (
    BillLifecycleManager,
    LegacyMigrationAdapter,
    LoanService,
    RecurringBillTracker,
    TransferService,
)
from bankflow.core.config import settings
from bankflow.domain.interfaces import (
    AccountStoreClient,
    CreditScoreClient,
    DocumentStore,
    LegacyStore,
)
from bankflow.infrastructure.database import get_db_session
from bankflow.infrastructure.repositories import (
    DocumentLoanRepository,
    DocumentRecurringPaymentRepository,
    SqlDocumentStore,
    SqlLegacyStore,
)


# Store dependencies
async def get_document_store(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> DocumentStore:
    """Get a DocumentStore bound to the request's session."""
    return SqlDocumentStore(session)


async def get_legacy_store(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> LegacyStore:
    return SqlLegacyStore(session)


# External client dependencies
def get_account_client(request: Request) -> AccountStoreClient:
    """Get the shared AccountStoreClient built at startup."""
    return request.app.state.account_client


def get_credit_score_client(request: Request) -> CreditScoreClient:
    """Get the shared CreditScoreClient built at startup."""
    return request.app.state.credit_score_client


def get_migration_registry(request: Request) -> MutableSet[str]:
    """Users whose legacy migration has already been attempted by this process."""
    return request.app.state.migrated_users


# Repository dependencies
async def get_recurring_repository(
    store: Annotated[DocumentStore, Depends(get_document_store)],
) -> DocumentRecurringPaymentRepository:
    return DocumentRecurringPaymentRepository(store, collection=settings.recurring_collection)


async def get_loan_repository(
    store: Annotated[DocumentStore, Depends(get_document_store)],
) -> DocumentLoanRepository:
    return DocumentLoanRepository(store, collection=settings.loans_collection)


# Service dependencies
async def get_tracker(
    repository: Annotated[DocumentRecurringPaymentRepository, Depends(get_recurring_repository)],
) -> RecurringBillTracker:
    """Get a RecurringBillTracker with the configured history windows."""
    return RecurringBillTracker(
        repository=repository,
        retention_months=settings.history_retention_months,
        recent_window_months=settings.recent_payments_window_months,
    )


async def get_migration_adapter(
    tracker: Annotated[RecurringBillTracker, Depends(get_tracker)],
    legacy_store: Annotated[LegacyStore, Depends(get_legacy_store)],
    completed_users: Annotated[MutableSet[str], Depends(get_migration_registry)],
) -> LegacyMigrationAdapter:
    return LegacyMigrationAdapter(
        tracker=tracker,
        legacy_store=legacy_store,
        completed_users=completed_users,
        legacy_key=settings.legacy_history_key,
    )


async def get_bill_manager(
    account_client: Annotated[AccountStoreClient, Depends(get_account_client)],
    tracker: Annotated[RecurringBillTracker, Depends(get_tracker)],
    migration: Annotated[LegacyMigrationAdapter, Depends(get_migration_adapter)],
) -> BillLifecycleManager:
    """Get a BillLifecycleManager with all dependencies."""
    return BillLifecycleManager(
        account_client=account_client,
        tracker=tracker,
        migration=migration,
    )


async def get_loan_service(
    loan_repo: Annotated[DocumentLoanRepository, Depends(get_loan_repository)],
    credit_score_client: Annotated[CreditScoreClient, Depends(get_credit_score_client)],
) -> LoanService:
    return LoanService(
        loan_repository=loan_repo,
        credit_score_client=credit_score_client,
    )


async def get_transfer_service(
    account_client: Annotated[AccountStoreClient, Depends(get_account_client)],
) -> TransferService:
    return TransferService(
        account_client=account_client,
        poll_attempts=settings.balance_poll_attempts,
        poll_interval=settings.balance_poll_interval,
    )
