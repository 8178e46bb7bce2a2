"""Loan-related domain exceptions."""

from .base import DomainException


class InvalidLoanRequestException(DomainException):
    """Raised when a loan request fails validation."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_LOAN_REQUEST",
        )
