"""Database infrastructure."""

from .connection import DatabaseSessionManager, get_db_session, to_async_url
from .models import Base, DocumentModel, LegacyStorageModel

__all__ = [
    "DatabaseSessionManager",
    "get_db_session",
    "to_async_url",
    "Base",
    "DocumentModel",
    "LegacyStorageModel",
]
