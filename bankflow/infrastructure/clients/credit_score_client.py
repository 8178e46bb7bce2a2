"""HTTP implementation of CreditScoreClient."""

import httpx
import structlog

from bankflow.core.config import settings
from bankflow.domain.interfaces import CreditScoreClient
from bankflow.service.underwriting import as_number

logger = structlog.get_logger(__name__)


class HttpCreditScoreClient(CreditScoreClient):
    """
    Looks up credit scores with `GET <url>?id=<customer_id>`.

    The service answers {"credit_score": <int>}. Any failure, including
    a missing URL, yields a score of 0 so the applicant is declined
    rather than the request erroring.
    """

    def __init__(
        self,
        url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._url = url if url is not None else settings.credit_score_api_url
        self._client = httpx.AsyncClient(
            timeout=timeout or settings.credit_score_api_timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_credit_score(self, customer_id: str) -> int:
        if not self._url:
            logger.warning("credit_score_api_not_configured", customer_id=customer_id)
            return 0

        try:
            response = await self._client.get(self._url, params={"id": customer_id})
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(
                "credit_score_lookup_failed",
                customer_id=customer_id,
                error=str(e),
            )
            return 0

        score = as_number(data.get("credit_score")) if isinstance(data, dict) else None
        if score is None:
            logger.warning("credit_score_missing", customer_id=customer_id)
            return 0
        return int(score)
