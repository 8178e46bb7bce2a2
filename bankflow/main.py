"""
Bankflow Gateway - Main Application Entry Point

Bill tracking, recurring payment history, transfers and loan
underwriting for the mobile banking app, in front of the remote
account store.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from bankflow import __version__
from bankflow.core.config import settings
from bankflow.core.logging import setup_logging
from bankflow.core.metrics import get_metrics, get_metrics_content_type
from bankflow.infrastructure.clients import HttpAccountStoreClient, HttpCreditScoreClient
from bankflow.infrastructure.database import DatabaseSessionManager
from bankflow.presentation.api import api_router
from bankflow.presentation.middleware import (
    LoggingMiddleware,
    RequestContextMiddleware,
    error_handler_middleware,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Build the process-wide resources and tear them down on shutdown.

    The document database engine and the account store and credit score
    clients live on app.state; request dependencies read them from there.
    """
    setup_logging()

    db_manager = DatabaseSessionManager()
    db_manager.init()
    if settings.db_create_tables:
        await db_manager.create_tables()

    app.state.db_manager = db_manager
    app.state.account_client = HttpAccountStoreClient()
    app.state.credit_score_client = HttpCreditScoreClient()

    logger = structlog.get_logger(__name__)
    logger.info("application_started", version=__version__)

    yield

    await app.state.account_client.aclose()
    await app.state.credit_score_client.aclose()
    await db_manager.close()
    logger.info("application_stopped")


app = FastAPI(
    title="Bankflow Gateway",
    description="Bills, recurring payments, transfers and loans for mobile banking",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.state.migrated_users = set()

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestContextMiddleware)

error_handler_middleware(app)

app.include_router(api_router)


if settings.metrics_enabled:

    @app.get("/metrics", include_in_schema=False)
    async def metrics() -> Response:
        """Prometheus metrics endpoint."""
        return Response(
            content=get_metrics(),
            media_type=get_metrics_content_type(),
        )


@app.get("/", include_in_schema=False)
async def root():
    """Redirect to API documentation."""
    return RedirectResponse(url="/docs")
