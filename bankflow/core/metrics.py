"""Prometheus metrics for the bankflow gateway.

Business Metrics (for Product/Finance):
- bankflow_loan_decision_total: Loan decisions by outcome and loan type
- bankflow_loan_amount_dollars: Requested loan amounts
- bankflow_bill_payment_total: Bill payments by kind
- bankflow_bill_transition_total: Bill status transitions
- bankflow_migration_total: Legacy history migrations by outcome

Technical Metrics (for Engineering/SRE):
- bankflow_account_store_latency_seconds: Account store request latency
- bankflow_account_store_requests_total: Account store requests by status
- bankflow_account_store_failures_total: Account store failures by type
- bankflow_document_store_read_failures_total: Degraded document reads
- bankflow_balance_poll_exhausted_total: Balance polls that ran out of attempts
- bankflow_http_requests_total: HTTP requests by endpoint/status
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


# =============================================================================
# Business Metrics
# =============================================================================

loan_decision_total = Counter(
    "bankflow_loan_decision_total",
    "Total number of loan decisions made",
    ["outcome", "loan_type"],  # approved, declined
)

loan_amount = Histogram(
    "bankflow_loan_amount_dollars",
    "Requested loan amounts in dollars",
    buckets=[1000, 1500, 5000, 10000, 25000, 50000, 75000, 100000],
)

bill_payment_total = Counter(
    "bankflow_bill_payment_total",
    "Total number of bill payments recorded",
    ["kind"],  # one_time, recurring, migrated
)

bill_transition_total = Counter(
    "bankflow_bill_transition_total",
    "Bill status transitions",
    ["from_status", "to_status"],
)

migration_total = Counter(
    "bankflow_migration_total",
    "Legacy payment history migrations",
    ["outcome"],  # migrated, empty, failed
)


# =============================================================================
# Technical Metrics
# =============================================================================

account_store_latency = Histogram(
    "bankflow_account_store_latency_seconds",
    "Remote account store request latency in seconds",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

account_store_requests_total = Counter(
    "bankflow_account_store_requests_total",
    "Total number of remote account store requests",
    ["status"],  # success, failure
)

account_store_failures = Counter(
    "bankflow_account_store_failures_total",
    "Total number of remote account store failures",
    ["error_type"],  # timeout, error, not_found
)

document_store_read_failures = Counter(
    "bankflow_document_store_read_failures_total",
    "Document store reads that failed and returned a degraded result",
    ["operation"],
)

balance_poll_exhausted = Counter(
    "bankflow_balance_poll_exhausted_total",
    "Balance confirmation polls that exhausted their attempts",
)

http_requests_total = Counter(
    "bankflow_http_requests_total",
    "Total HTTP requests by endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_latency = Histogram(
    "bankflow_http_request_latency_seconds",
    "HTTP request latency by endpoint",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_loan_decision(approved: bool, loan_type: str, amount: float) -> None:
    """Record a loan decision in metrics."""
    outcome = "approved" if approved else "declined"
    loan_decision_total.labels(outcome=outcome, loan_type=loan_type).inc()
    if amount > 0:
        loan_amount.observe(amount)


def record_bill_payment(kind: str) -> None:
    bill_payment_total.labels(kind=kind).inc()


def record_bill_transition(from_status: str, to_status: str) -> None:
    bill_transition_total.labels(from_status=from_status, to_status=to_status).inc()


def record_migration(outcome: str) -> None:
    migration_total.labels(outcome=outcome).inc()


@contextmanager
def track_account_store_latency() -> Generator[None, None, None]:
    """Context manager to track account store latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        account_store_latency.observe(duration)


def record_account_store_success() -> None:
    """Record a successful account store request."""
    account_store_requests_total.labels(status="success").inc()


def record_account_store_failure(error_type: str) -> None:
    """Record an account store failure."""
    account_store_requests_total.labels(status="failure").inc()
    account_store_failures.labels(error_type=error_type).inc()


def record_document_read_failure(operation: str) -> None:
    document_store_read_failures.labels(operation=operation).inc()


def record_balance_poll_exhausted() -> None:
    balance_poll_exhausted.inc()


def record_http_request(method: str, endpoint: str, status: int, duration: float) -> None:
    """Record an HTTP request."""
    http_requests_total.labels(method=method, endpoint=endpoint, status=str(status)).inc()
    http_request_latency.labels(method=method, endpoint=endpoint).observe(duration)


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get the content type for metrics response."""
    return CONTENT_TYPE_LATEST
