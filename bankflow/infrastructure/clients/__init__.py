"""External API client implementations."""

from .account_client import HttpAccountStoreClient
from .credit_score_client import HttpCreditScoreClient

__all__ = [
    "HttpAccountStoreClient",
    "HttpCreditScoreClient",
]
