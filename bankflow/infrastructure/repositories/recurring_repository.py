"""Document-backed implementation of RecurringPaymentRepository."""

from typing import Any, Dict, List, Optional

import structlog
from pydantic import ValidationError

from bankflow.domain.entities import (
    BillSnapshot,
    Payment,
    RecurringPaymentRecord,
    record_key,
)
from bankflow.domain.exceptions import DocumentSchemaException
from bankflow.domain.interfaces import DocumentStore, RecurringPaymentRepository
from bankflow.service.billing import to_iso_timestamp
from .documents import RecurringPaymentDocument

logger = structlog.get_logger(__name__)


class DocumentRecurringPaymentRepository(RecurringPaymentRepository):
    """
    Stores one document per (user, bill) in the recurring payments collection.

    The document key is "{user_id}_{bill_id}" and the owner is the user,
    so a user's records can be listed without scanning the collection.
    """

    def __init__(self, store: DocumentStore, collection: str = "recurringPayments"):
        self._store = store
        self._collection = collection

    async def get(self, user_id: str, bill_id: str) -> Optional[RecurringPaymentRecord]:
        doc_id = record_key(user_id, bill_id)
        data = await self._store.get(self._collection, doc_id)
        if data is None:
            return None
        return self._to_entity(doc_id, data)

    async def create(self, record: RecurringPaymentRecord) -> RecurringPaymentRecord:
        await self._store.set(
            self._collection,
            record.doc_id,
            self._to_document(record),
            owner_id=record.user_id,
        )
        return record

    async def save_history(self, record: RecurringPaymentRecord) -> RecurringPaymentRecord:
        await self._store.update(
            self._collection,
            record.doc_id,
            {
                "paymentHistory": [self._payment_to_document(p) for p in record.payment_history],
                "lastPaymentDate": (
                    to_iso_timestamp(record.last_payment_date)
                    if record.last_payment_date
                    else None
                ),
                "updatedAt": to_iso_timestamp(record.updated_at),
            },
        )
        return record

    async def delete(self, user_id: str, bill_id: str) -> bool:
        return await self._store.delete(self._collection, record_key(user_id, bill_id))

    async def list_by_user(self, user_id: str) -> List[RecurringPaymentRecord]:
        documents = await self._store.find_by_owner(self._collection, user_id)

        records = []
        for data in documents:
            doc_id = record_key(data.get("userId", user_id), data.get("billId", "?"))
            try:
                records.append(self._to_entity(doc_id, data))
            except DocumentSchemaException as e:
                logger.warning("recurring_record_skipped", doc_id=doc_id, error=e.message)
        return records

    def _to_document(self, record: RecurringPaymentRecord) -> Dict[str, Any]:
        return {
            "userId": record.user_id,
            "billId": record.bill_id,
            "billData": record.bill_data.to_dict(),
            "paymentHistory": [self._payment_to_document(p) for p in record.payment_history],
            "lastPaymentDate": (
                to_iso_timestamp(record.last_payment_date) if record.last_payment_date else None
            ),
            "createdAt": to_iso_timestamp(record.created_at),
            "updatedAt": to_iso_timestamp(record.updated_at),
        }

    def _payment_to_document(self, payment: Payment) -> Dict[str, Any]:
        data = {
            "id": payment.id,
            "date": to_iso_timestamp(payment.date),
            "amount": payment.amount,
            "month": payment.month,
            "year": payment.year,
        }
        if payment.payee is not None:
            data["payee"] = payment.payee
        return data

    def _to_entity(self, doc_id: str, data: Dict[str, Any]) -> RecurringPaymentRecord:
        """Validate a stored document and convert it to a domain entity."""
        try:
            doc = RecurringPaymentDocument.model_validate(data)
        except ValidationError as e:
            raise DocumentSchemaException(self._collection, doc_id, str(e)) from e

        return RecurringPaymentRecord(
            user_id=doc.user_id,
            bill_id=doc.bill_id,
            bill_data=BillSnapshot(
                payee=doc.bill_data.payee,
                recurring_date=doc.bill_data.recurring_date,
                payment_amount=doc.bill_data.payment_amount,
                nickname=doc.bill_data.nickname,
            ),
            payment_history=[
                Payment(
                    id=p.id,
                    date=p.date,
                    amount=p.amount,
                    month=p.month,
                    year=p.year,
                    payee=p.payee,
                )
                for p in doc.payment_history
            ],
            last_payment_date=doc.last_payment_date,
            created_at=doc.created_at,
            updated_at=doc.updated_at,
        )
