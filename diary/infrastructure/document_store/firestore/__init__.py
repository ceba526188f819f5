"""Firestore REST backend for the document store (no firebase-admin)."""

from diary.infrastructure.document_store.firestore.client import (
    create_firestore_document_store,
)
from diary.infrastructure.document_store.firestore.store import FirestoreDocumentStore

__all__ = ["FirestoreDocumentStore", "create_firestore_document_store"]
