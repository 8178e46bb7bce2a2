"""SQL implementation of the DocumentStore port."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bankflow.domain.exceptions import DocumentStoreException
from bankflow.domain.interfaces import DocumentStore
from bankflow.infrastructure.database.models import DocumentModel


class SqlDocumentStore(DocumentStore):
    """
    Document store on top of a single `documents` table.

    Each row is one JSON document addressed by (collection, doc_id).
    SQLAlchemy errors surface as DocumentStoreException.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        try:
            model = await self._session.get(DocumentModel, (collection, doc_id))
        except SQLAlchemyError as e:
            raise DocumentStoreException(f"Failed to read {collection}/{doc_id}: {e}") from e

        if model is None:
            return None
        return dict(model.data)

    async def set(
        self,
        collection: str,
        doc_id: str,
        data: Dict[str, Any],
        owner_id: Optional[str] = None,
    ) -> None:
        try:
            model = await self._session.get(DocumentModel, (collection, doc_id))
            if model is None:
                self._session.add(
                    DocumentModel(
                        collection=collection,
                        doc_id=doc_id,
                        owner_id=owner_id,
                        data=dict(data),
                    )
                )
            else:
                model.data = dict(data)
                model.owner_id = owner_id
                model.updated_at = datetime.now(timezone.utc)
            await self._session.flush()
        except SQLAlchemyError as e:
            raise DocumentStoreException(f"Failed to write {collection}/{doc_id}: {e}") from e

    async def update(
        self,
        collection: str,
        doc_id: str,
        fields: Dict[str, Any],
    ) -> None:
        try:
            model = await self._session.get(DocumentModel, (collection, doc_id))
            if model is None:
                raise DocumentStoreException(f"Document not found: {collection}/{doc_id}")
            model.data = {**model.data, **fields}
            model.updated_at = datetime.now(timezone.utc)
            await self._session.flush()
        except SQLAlchemyError as e:
            raise DocumentStoreException(f"Failed to update {collection}/{doc_id}: {e}") from e

    async def delete(self, collection: str, doc_id: str) -> bool:
        try:
            model = await self._session.get(DocumentModel, (collection, doc_id))
            if model is None:
                return False
            await self._session.delete(model)
            await self._session.flush()
            return True
        except SQLAlchemyError as e:
            raise DocumentStoreException(f"Failed to delete {collection}/{doc_id}: {e}") from e

    async def find_by_owner(
        self,
        collection: str,
        owner_id: str,
    ) -> List[Dict[str, Any]]:
        stmt = select(DocumentModel).where(
            DocumentModel.collection == collection,
            DocumentModel.owner_id == owner_id,
        )
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            raise DocumentStoreException(f"Failed to query {collection}: {e}") from e

        return [dict(model.data) for model in result.scalars().all()]
