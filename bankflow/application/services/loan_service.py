"""Loan service - orchestrates loan submission and history."""

import math
from datetime import datetime, timezone
from typing import List

import structlog

from bankflow.application.dto import LoanRequest
from bankflow.core.metrics import record_loan_decision
from bankflow.domain.entities import Loan, LoanStatus, LoanType
from bankflow.domain.exceptions import InvalidLoanRequestException
from bankflow.domain.interfaces import CreditScoreClient, LoanRepository
from bankflow.service.underwriting import (
    UnderwritingSettings,
    calculate_monthly_payment,
    check_loan_approval,
    get_loan_term,
    underwriting_settings,
)

logger = structlog.get_logger(__name__)


class LoanService:
    """
    Application service for loan use cases.
    """

    def __init__(
        self,
        loan_repository: LoanRepository,
        credit_score_client: CreditScoreClient,
        settings: UnderwritingSettings = underwriting_settings,
    ):
        self._loan_repo = loan_repository
        self._credit_scores = credit_score_client
        self._settings = settings

    async def request_loan(self, request: LoanRequest) -> Loan:
        """
        Decide and record a loan request.

        Args:
            request: Loan type, amount and either a score or a customer
                id to look the score up by

        Returns:
            The persisted Loan, approved or declined

        Raises:
            InvalidLoanRequestException: If request validation fails
            DocumentStoreException: If the loan can't be saved
        """
        errors = request.validate()
        if errors:
            raise InvalidLoanRequestException("; ".join(errors))

        log = logger.bind(
            user_id=request.user_id,
            loan_type=request.loan_type,
            amount=request.amount,
        )
        log.info("loan_requested")

        credit_score = request.credit_score
        if credit_score is None:
            credit_score = await self._credit_scores.get_credit_score(request.customer_id)
            log.info("credit_score_fetched", credit_score=credit_score)

        term = get_loan_term(request.amount, self._settings)
        payment = calculate_monthly_payment(request.amount, term, self._settings)
        decision = check_loan_approval(request.amount, credit_score, self._settings)
        loan_type = LoanType(request.loan_type)
        now = datetime.now(timezone.utc)

        loan = Loan(
            user_id=request.user_id,
            type=loan_type,
            status=LoanStatus.APPROVED if decision.approved else LoanStatus.DECLINED,
            credit_score=credit_score,
            amount=math.floor(request.amount),
            monthly_payment=math.floor(payment),
            term_months=term,
            description=request.description or f"{loan_type.value} loan request",
            declined_reason=None if decision.approved else decision.reason,
            approved_at=now if decision.approved else None,
            created_at=now,
        )

        await self._loan_repo.save(loan)
        record_loan_decision(loan.approved, loan_type.value, request.amount)

        log.info(
            "loan_decided",
            loan_id=str(loan.id),
            approved=loan.approved,
            reason=decision.reason,
            term_months=term,
            monthly_payment=loan.monthly_payment,
        )

        if loan.approved:
            # No store holds card limits; the increase is only reported.
            log.info("credit_limit_increase_not_persisted", loan_id=str(loan.id))

        return loan

    async def get_loans(self, user_id: str) -> List[Loan]:
        """A user's loans, newest first. Empty if the store can't be read."""
        try:
            return await self._loan_repo.list_by_user(user_id)
        except Exception as e:
            logger.warning("loans_read_failed", user_id=user_id, error=str(e))
            return []
