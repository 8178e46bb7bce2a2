"""Account and transfer entities from the remote account store."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TransferMedium(str, Enum):
    BALANCE = "balance"
    REWARDS = "rewards"


@dataclass(frozen=True)
class Account:
    """
    A bank account. Balance is authoritative only as of the read that
    produced this object.
    """

    id: str
    type: str
    nickname: str
    balance: float
    customer_id: str
    rewards: int = 0

    def available(self, medium: TransferMedium) -> float:
        if medium == TransferMedium.REWARDS:
            return float(self.rewards)
        return self.balance


@dataclass(frozen=True)
class Transfer:
    """A transfer between two accounts."""

    id: str
    payer_id: str
    payee_id: str
    amount: float
    medium: TransferMedium
    transaction_date: str
    status: str
    description: Optional[str] = None
