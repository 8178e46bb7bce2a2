"""Per-request tracing context: request id, method and path."""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

REQUEST_ID_HEADER = "X-Request-ID"

# Mobile clients forward whatever their own tracing put in the header
_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def get_request_id() -> Optional[str]:
    """Request id of the request being handled, None outside a request."""
    return request_id_var.get()


def resolve_request_id(header_value: Optional[str]) -> str:
    """Keep a well-formed inbound id, otherwise mint a new one."""
    if header_value and _VALID_REQUEST_ID.match(header_value.strip()):
        return header_value.strip()
    return uuid.uuid4().hex


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Tag every log line emitted while handling a request.

    The id, method and path are bound into structlog's contextvars for the
    duration of the request, and the id is echoed on the response so the
    app can quote it in support tickets.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))

        token = request_id_var.set(request_id)
        try:
            with structlog.contextvars.bound_contextvars(
                request_id=request_id,
                method=request.method,
                path=request.url.path,
            ):
                response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
