"""Data transfer objects for account transfers."""

from dataclasses import dataclass
from typing import List, Optional

from bankflow.domain.entities import Transfer, TransferMedium

MEDIUMS = frozenset(m.value for m in TransferMedium)


@dataclass(frozen=True)
class TransferRequest:
    """Input data for moving money between accounts."""
    payer_id: str
    payee_id: str
    amount: float
    medium: str = TransferMedium.BALANCE.value
    description: Optional[str] = None

    def validate(self) -> List[str]:
        errors = []

        if not self.payer_id or not self.payer_id.strip():
            errors.append("payer_id is required")

        if not self.payee_id or not self.payee_id.strip():
            errors.append("payee_id is required")
        elif self.payee_id == self.payer_id:
            errors.append("payer and payee must be different accounts")

        if self.amount is None or self.amount <= 0:
            errors.append("amount must be positive")

        if self.medium not in MEDIUMS:
            errors.append(f"medium must be one of: {', '.join(sorted(MEDIUMS))}")

        return errors


@dataclass(frozen=True)
class TransferResult:
    """
    A created transfer and the payer balance observed afterwards.

    balance_confirmed is False when the poll ran out of attempts before
    the account store reflected the transfer.
    """

    transfer: Transfer
    payer_balance: Optional[float]
    balance_confirmed: bool
