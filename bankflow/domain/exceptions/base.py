"""Base class for errors raised by the bill, loan and transfer rules."""

from typing import Any, Dict


class DomainException(Exception):
    """
    A broken business rule or an unavailable store, with a stable code.

    API clients switch on `code`; `message` is safe to show to a user.
    Keyword context (bill or account ids and the like) goes to the logs
    only, never into a response body.
    """

    def __init__(self, message: str, code: str = "DOMAIN_ERROR", **context: Any):
        self.message = message
        self.code = code
        self.context: Dict[str, Any] = context
        super().__init__(message)

    def log_fields(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, **self.context}
