"""
Integration tests for metrics tracking.

These tests verify:
1. Metrics endpoint returns valid Prometheus format
2. Business metrics (loan decisions, bill payments) are tracked
3. HTTP request metrics are labelled by route, not by id
"""

import pytest
from httpx import AsyncClient
from prometheus_client import REGISTRY

from bankflow.domain.entities import BillStatus


def sample(name: str, **labels) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


# =============================================================================
# Metrics Endpoint Tests
# =============================================================================

class TestMetricsEndpoint:
    """Tests for GET /metrics endpoint."""

    @pytest.mark.asyncio
    async def test_metrics_endpoint_returns_prometheus_format(self, client: AsyncClient):
        response = await client.get("/metrics")

        assert response.status_code == 200
        content_type = response.headers.get("content-type", "")
        assert "text/plain" in content_type or "text/openmetrics" in content_type
        assert "# HELP" in response.text

    @pytest.mark.asyncio
    async def test_metrics_include_custom_metrics(self, client: AsyncClient):
        content = (await client.get("/metrics")).text

        assert "bankflow_loan_decision_total" in content
        assert "bankflow_bill_payment_total" in content
        assert "bankflow_account_store_latency_seconds" in content


# =============================================================================
# Business Metrics Tests
# =============================================================================

class TestBusinessMetrics:

    @pytest.mark.asyncio
    async def test_loan_decision_counted(self, client: AsyncClient):
        before = sample("bankflow_loan_decision_total", outcome="declined", loan_type="home")

        response = await client.post("/v1/loans", json={
            "user_id": "user_1",
            "loan_type": "home",
            "amount": 90000,
            "credit_score": 700,
        })

        assert response.status_code == 201
        after = sample("bankflow_loan_decision_total", outcome="declined", loan_type="home")
        assert after == before + 1

    @pytest.mark.asyncio
    async def test_one_time_payment_counted(self, client: AsyncClient, account_client):
        bill = account_client.add_bill()
        before_payments = sample("bankflow_bill_payment_total", kind="one_time")
        before_transitions = sample(
            "bankflow_bill_transition_total", from_status="pending", to_status="completed"
        )

        response = await client.post(f"/v1/bills/{bill.id}/payments", json={"user_id": "user_1"})

        assert response.status_code == 201
        assert sample("bankflow_bill_payment_total", kind="one_time") == before_payments + 1
        assert sample(
            "bankflow_bill_transition_total", from_status="pending", to_status="completed"
        ) == before_transitions + 1

    @pytest.mark.asyncio
    async def test_recurring_payment_counted(self, client: AsyncClient, account_client):
        bill = account_client.add_bill(status=BillStatus.RECURRING, recurring_date=1)
        before = sample("bankflow_bill_payment_total", kind="recurring")

        await client.post(f"/v1/bills/{bill.id}/payments", json={"user_id": "user_1"})

        assert sample("bankflow_bill_payment_total", kind="recurring") == before + 1


# =============================================================================
# HTTP Metrics Tests
# =============================================================================

class TestHttpMetrics:

    @pytest.mark.asyncio
    async def test_requests_labelled_by_route(self, client: AsyncClient):
        labels = {"method": "GET", "endpoint": "/v1/bills/{bill_id}", "status": "404"}
        before = sample("bankflow_http_requests_total", **labels)

        await client.get("/v1/bills/abc", params={"user_id": "user_1"})
        await client.get("/v1/bills/def", params={"user_id": "user_1"})

        assert sample("bankflow_http_requests_total", **labels) == before + 2
        assert sample(
            "bankflow_http_requests_total", method="GET", endpoint="/v1/bills/abc", status="404"
        ) == 0.0
