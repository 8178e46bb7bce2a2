"""Error handling middleware and exception handlers."""

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import structlog

from bankflow.domain.exceptions import (
    DomainException,
    AccountNotFoundException,
    AccountStoreException,
    AccountStoreTimeoutException,
    BillAlreadyPaidException,
    BillNotFoundException,
    DocumentStoreException,
    InvalidBillRequestException,
    InvalidBillTransitionException,
    InvalidLoanRequestException,
    InvalidTransferRequestException,
)
from bankflow.presentation.schemas import ErrorResponseSchema, FieldErrorSchema
from .request_context import get_request_id

logger = structlog.get_logger(__name__)


def _error_response(
    status_code: int,
    code: str,
    message: str,
    fields: Optional[list[FieldErrorSchema]] = None,
) -> JSONResponse:
    body = ErrorResponseSchema(
        error=code,
        message=message,
        request_id=get_request_id(),
        fields=fields,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def error_handler_middleware(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI app.

    Maps domain exceptions to appropriate HTTP responses:

    - 400: invalid bill, loan or transfer requests, other domain errors
    - 422: request body or query parameters that fail schema validation
    - 404: unknown bill or account
    - 409: bill already paid this month, or not open for the action
    - 503: account store or document store unavailable
    - 500: anything unexpected
    """

    @app.exception_handler(BillNotFoundException)
    @app.exception_handler(AccountNotFoundException)
    async def not_found_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        logger.info("resource_not_found", path=request.url.path, **exc.log_fields())
        return _error_response(404, exc.code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        fields = [
            FieldErrorSchema(
                field=".".join(str(part) for part in err.get("loc", ())),
                message=err.get("msg", "Invalid value"),
            )
            for err in exc.errors()
        ]
        logger.info("request_validation_failed", fields=[f.field for f in fields])
        return _error_response(422, "VALIDATION_ERROR", "Request validation failed", fields)

    @app.exception_handler(InvalidBillRequestException)
    @app.exception_handler(InvalidLoanRequestException)
    @app.exception_handler(InvalidTransferRequestException)
    async def invalid_request_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle request validation errors raised by the services."""
        return _error_response(400, exc.code, exc.message)

    @app.exception_handler(BillAlreadyPaidException)
    @app.exception_handler(InvalidBillTransitionException)
    async def bill_conflict_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle actions the bill's current state does not allow."""
        logger.info("bill_conflict", **exc.log_fields())
        return _error_response(409, exc.code, exc.message)

    @app.exception_handler(AccountStoreTimeoutException)
    async def account_store_timeout_handler(
        request: Request,
        exc: AccountStoreTimeoutException,
    ) -> JSONResponse:
        """Handle account store timeout errors."""
        logger.error("account_store_timeout")
        return _error_response(
            503,
            exc.code,
            "Service temporarily unavailable. Please try again.",
        )

    @app.exception_handler(AccountStoreException)
    async def account_store_error_handler(
        request: Request,
        exc: AccountStoreException,
    ) -> JSONResponse:
        """Handle account store errors."""
        logger.error("account_store_error", **exc.log_fields())
        return _error_response(
            503,
            exc.code,
            "Unable to process request. Please try again later.",
        )

    @app.exception_handler(DocumentStoreException)
    async def document_store_error_handler(
        request: Request,
        exc: DocumentStoreException,
    ) -> JSONResponse:
        logger.error("document_store_error", **exc.log_fields())
        return _error_response(
            503,
            exc.code,
            "Unable to save your changes. Please try again later.",
        )

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle generic domain exceptions."""
        logger.warning("domain_exception", **exc.log_fields())
        return _error_response(400, exc.code, exc.message)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return _error_response(500, "INTERNAL_ERROR", "An unexpected error occurred.")
