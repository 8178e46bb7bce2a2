"""Bill-related domain exceptions."""

from .base import DomainException


class BillNotFoundException(DomainException):
    """Raised when a bill cannot be found."""

    def __init__(self, bill_id: str):
        super().__init__(
            message=f"Bill not found: {bill_id}",
            code="BILL_NOT_FOUND",
            bill_id=bill_id,
        )
        self.bill_id = bill_id


class InvalidBillRequestException(DomainException):
    """Raised when a bill creation request fails validation."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_BILL_REQUEST",
        )


class InvalidBillTransitionException(DomainException):
    """Raised when a bill cannot move to the requested status."""

    def __init__(self, bill_id: str, current: str, action: str):
        super().__init__(
            message=f"Cannot {action} bill {bill_id} with status '{current}'",
            code="INVALID_BILL_TRANSITION",
            bill_id=bill_id,
            status=current,
            action=action,
        )
        self.bill_id = bill_id
        self.current = current


class BillAlreadyPaidException(DomainException):
    """Raised when a bill already has a payment in the current month."""

    def __init__(self, bill_id: str):
        super().__init__(
            message=f"Bill {bill_id} has already been paid this month",
            code="BILL_ALREADY_PAID",
            bill_id=bill_id,
        )
        self.bill_id = bill_id
