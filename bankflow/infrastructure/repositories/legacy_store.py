"""SQL implementation of the LegacyStore port."""

from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bankflow.domain.exceptions import DocumentStoreException
from bankflow.domain.interfaces import LegacyStore
from bankflow.infrastructure.database.models import LegacyStorageModel


class SqlLegacyStore(LegacyStore):
    """Per-user key/value pairs imported from the old client's local storage."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_item(self, namespace: str, key: str) -> Optional[str]:
        try:
            model = await self._session.get(LegacyStorageModel, (namespace, key))
        except SQLAlchemyError as e:
            raise DocumentStoreException(f"Failed to read legacy key {key}: {e}") from e
        return model.value if model else None

    async def set_item(self, namespace: str, key: str, value: str) -> None:
        try:
            model = await self._session.get(LegacyStorageModel, (namespace, key))
            if model is None:
                self._session.add(LegacyStorageModel(namespace=namespace, key=key, value=value))
            else:
                model.value = value
            await self._session.flush()
        except SQLAlchemyError as e:
            raise DocumentStoreException(f"Failed to write legacy key {key}: {e}") from e

    async def remove_item(self, namespace: str, key: str) -> None:
        try:
            model = await self._session.get(LegacyStorageModel, (namespace, key))
            if model is not None:
                await self._session.delete(model)
                await self._session.flush()
        except SQLAlchemyError as e:
            raise DocumentStoreException(f"Failed to remove legacy key {key}: {e}") from e
