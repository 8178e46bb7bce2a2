"""Keyed storage interfaces."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class DocumentStore(ABC):
    """
    Keyed JSON document store.

    Documents live in named collections and are addressed by a string
    key. Each document may carry an owner id for per-user queries.
    Implementations raise DocumentStoreException on failure.
    """

    @abstractmethod
    async def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        """Return the document, or None if it doesn't exist."""
        ...

    @abstractmethod
    async def set(
        self,
        collection: str,
        doc_id: str,
        data: Dict[str, Any],
        owner_id: Optional[str] = None,
    ) -> None:
        """Create or overwrite a document."""
        ...

    @abstractmethod
    async def update(
        self,
        collection: str,
        doc_id: str,
        fields: Dict[str, Any],
    ) -> None:
        """
        Merge fields into an existing document.

        Raises:
            DocumentStoreException: If the document doesn't exist
        """
        ...

    @abstractmethod
    async def delete(self, collection: str, doc_id: str) -> bool:
        """Delete a document. Returns False if it was already absent."""
        ...

    @abstractmethod
    async def find_by_owner(
        self,
        collection: str,
        owner_id: str,
    ) -> List[Dict[str, Any]]:
        """Return every document in the collection owned by owner_id."""
        ...


class LegacyStore(ABC):
    """Per-user string key/value storage left over from the old client."""

    @abstractmethod
    async def get_item(self, namespace: str, key: str) -> Optional[str]:
        ...

    @abstractmethod
    async def set_item(self, namespace: str, key: str, value: str) -> None:
        ...

    @abstractmethod
    async def remove_item(self, namespace: str, key: str) -> None:
        ...
