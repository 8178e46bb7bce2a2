"""Legacy history migration endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from bankflow.application.services import LegacyMigrationAdapter
from bankflow.core.dependencies import get_migration_adapter
from bankflow.presentation.schemas import MigrationResponseSchema

migrations_router = APIRouter(prefix="/migrations")


@migrations_router.post(
    "/{user_id}",
    response_model=MigrationResponseSchema,
    summary="Migrate Legacy History",
    description="""
    Move a user's legacy local payment history into recurring payment records.

    Runs at most once per user per process. Failures are reported in the
    body rather than as an error status.
    """,
)
async def migrate_user(
    user_id: Annotated[str, Path(min_length=1, max_length=255)],
    adapter: Annotated[LegacyMigrationAdapter, Depends(get_migration_adapter)],
) -> MigrationResponseSchema:
    result = await adapter.migrate(user_id)
    return MigrationResponseSchema(
        migrated=result.migrated,
        migrated_count=result.migrated_count,
        total_payments=result.total_payments,
        message=result.message,
        error=result.error,
    )
