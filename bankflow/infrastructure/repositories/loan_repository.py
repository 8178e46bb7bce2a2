"""Document-backed implementation of LoanRepository."""

from typing import Any, Dict, List
from uuid import UUID

import structlog
from pydantic import ValidationError

from bankflow.domain.entities import Loan, LoanStatus, LoanType
from bankflow.domain.interfaces import DocumentStore, LoanRepository
from bankflow.service.billing import to_iso_timestamp
from .documents import LoanDocument

logger = structlog.get_logger(__name__)


class DocumentLoanRepository(LoanRepository):
    """Stores each loan as its own document, owned by the requesting user."""

    def __init__(self, store: DocumentStore, collection: str = "loans"):
        self._store = store
        self._collection = collection

    async def save(self, loan: Loan) -> Loan:
        await self._store.set(
            self._collection,
            str(loan.id),
            self._to_document(loan),
            owner_id=loan.user_id,
        )
        return loan

    async def list_by_user(self, user_id: str) -> List[Loan]:
        """Retrieve a user's loans ordered by created_at descending."""
        documents = await self._store.find_by_owner(self._collection, user_id)

        loans = []
        for data in documents:
            try:
                loans.append(self._to_entity(data))
            except (ValidationError, ValueError) as e:
                logger.warning("loan_document_skipped", doc_id=data.get("id"), error=str(e))

        return sorted(loans, key=lambda loan: loan.created_at, reverse=True)

    def _to_document(self, loan: Loan) -> Dict[str, Any]:
        created = to_iso_timestamp(loan.created_at)
        return {
            "id": str(loan.id),
            "userId": loan.user_id,
            "type": loan.type.value,
            "status": loan.status.value,
            "credit_score": loan.credit_score,
            "amount": loan.amount,
            "monthly_payment": loan.monthly_payment,
            "term_months": loan.term_months,
            "description": loan.description,
            "declined_reason": loan.declined_reason,
            "approved_at": to_iso_timestamp(loan.approved_at) if loan.approved_at else None,
            "createdAt": created,
            "updatedAt": created,
        }

    def _to_entity(self, data: Dict[str, Any]) -> Loan:
        doc = LoanDocument.model_validate(data)
        return Loan(
            id=UUID(doc.id),
            user_id=doc.user_id,
            type=LoanType(doc.type),
            status=LoanStatus(doc.status),
            credit_score=doc.credit_score,
            amount=doc.amount,
            monthly_payment=doc.monthly_payment,
            term_months=doc.term_months,
            description=doc.description,
            declined_reason=doc.declined_reason,
            approved_at=doc.approved_at,
            created_at=doc.created_at,
        )
