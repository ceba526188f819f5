"""Document store factory: select backend from settings."""

from __future__ import annotations

from diary.core.config import Settings
from diary.infrastructure.document_store.memory import InMemoryDocumentStore
from diary.infrastructure.document_store.protocol import IDocumentStore


def build_document_store(settings: Settings) -> IDocumentStore:
    """Return the configured document store.

    Firestore is imported lazily so the in-memory backend does not need
    google-auth credentials at import time.

    Raises:
        ValueError: If the Firestore service account cannot be loaded.
    """
    if settings.document_store_backend == "firestore":
        from diary.infrastructure.document_store.firestore.client import (
            create_firestore_document_store,
        )

        return create_firestore_document_store(settings)
    return InMemoryDocumentStore()
