"""Liveness endpoint, with a probe of the document database."""

from typing import Annotated, Literal

import structlog
from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bankflow import __version__
from bankflow.infrastructure.database import get_db_session

logger = structlog.get_logger(__name__)

health_router = APIRouter()


class HealthResponse(BaseModel):
    status: Literal["healthy", "degraded"]
    version: str
    database: Literal["ok", "unavailable"]


@health_router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="""
    Reports the service version and whether the document database answers.

    Returns 503 with status "degraded" when the database probe fails; the
    account store is not probed.
    """,
)
async def health_check(
    response: Response,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> HealthResponse:
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("health_database_unavailable", error=str(e))
        response.status_code = 503
        return HealthResponse(status="degraded", version=__version__, database="unavailable")

    return HealthResponse(status="healthy", version=__version__, database="ok")
