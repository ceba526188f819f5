"""Infrastructure exceptions for document store operations.

Store errors extend DiaryException so presentation can map them to HTTP
responses consistently.
"""

from diary.domain.exceptions import DiaryException


class DocumentStoreException(DiaryException):
    """Base exception for document store operations."""


class DocumentExistsError(DocumentStoreException):
    """A create was attempted for an id that already exists in the partition."""

    def __init__(self, container: str, document_id: str) -> None:
        super().__init__(
            f"Document already exists: {container}/{document_id}",
            "DOCUMENT_EXISTS",
            {"container": container, "document_id": document_id},
        )


class DocumentNotFoundError(DocumentStoreException):
    """A delete (or other strict operation) targeted a missing document."""

    def __init__(self, container: str, document_id: str) -> None:
        super().__init__(
            f"Document not found: {container}/{document_id}",
            "DOCUMENT_NOT_FOUND",
            {"container": container, "document_id": document_id},
        )
