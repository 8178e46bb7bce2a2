"""Document store exceptions."""

from .base import DomainException


class DocumentStoreException(DomainException):
    """Raised when a document read or write fails."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="DOCUMENT_STORE_ERROR",
        )


class DocumentSchemaException(DocumentStoreException):
    """Raised when a stored document does not match its expected shape."""

    def __init__(self, collection: str, doc_id: str, detail: str):
        super().__init__(f"Malformed document {collection}/{doc_id}: {detail}")
        self.code = "DOCUMENT_SCHEMA_ERROR"
        self.context.update(collection=collection, doc_id=doc_id)
        self.collection = collection
        self.doc_id = doc_id
