"""Document store: partitioned JSON-like records (memory or Firestore REST)."""

from diary.infrastructure.document_store.containers import (
    CONTAINER_DIARY_ENTRIES,
    CONTAINER_EMAIL_SETTINGS,
    CONTAINER_PERSONAL_ACCESS_TOKENS,
    CONTAINER_RECOMMENDATIONS,
    CONTAINER_SYSTEM_PROMPTS,
    PARTITION_KEY_FIELD,
)
from diary.infrastructure.document_store.factory import build_document_store
from diary.infrastructure.document_store.memory import InMemoryDocumentStore
from diary.infrastructure.document_store.protocol import IDocumentStore

__all__ = [
    "CONTAINER_DIARY_ENTRIES",
    "CONTAINER_EMAIL_SETTINGS",
    "CONTAINER_PERSONAL_ACCESS_TOKENS",
    "CONTAINER_RECOMMENDATIONS",
    "CONTAINER_SYSTEM_PROMPTS",
    "IDocumentStore",
    "InMemoryDocumentStore",
    "PARTITION_KEY_FIELD",
    "build_document_store",
]
