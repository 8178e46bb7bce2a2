"""Transfer-related domain exceptions."""

from .base import DomainException


class InvalidTransferRequestException(DomainException):
    """Raised when a transfer request fails validation."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_TRANSFER_REQUEST",
        )


class InsufficientFundsException(DomainException):
    """Raised when the payer cannot cover a transfer."""

    def __init__(self, medium: str, available: str):
        super().__init__(
            message=f"Insufficient {medium}. Available: ${available}",
            code="INSUFFICIENT_FUNDS",
            medium=medium,
        )
        self.medium = medium
