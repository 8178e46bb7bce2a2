"""Remote account store exceptions."""

from .base import DomainException


class AccountStoreException(DomainException):
    """Raised when the remote account store returns an error."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(
            message=message,
            code="ACCOUNT_STORE_ERROR",
            status_code=status_code,
        )
        self.status_code = status_code


class AccountStoreTimeoutException(AccountStoreException):
    """Raised when the remote account store times out."""

    def __init__(self):
        super().__init__(
            message="Account store request timed out",
            status_code=None,
        )
        self.code = "ACCOUNT_STORE_TIMEOUT"


class AccountNotFoundException(DomainException):
    """Raised when an account does not exist in the account store."""

    def __init__(self, account_id: str):
        super().__init__(
            message=f"Account not found: {account_id}",
            code="ACCOUNT_NOT_FOUND",
            account_id=account_id,
        )
        self.account_id = account_id
