"""IDocumentStore over the Firestore REST client.

Firestore document ids cannot contain "/" and live in a flat collection, so
the document key is a hash of (partition key, id). The logical id and the
partition key are stored as ordinary fields and used for queries.
"""

from __future__ import annotations

import copy
import hashlib
from typing import Any

from diary.infrastructure.document_store.containers import PARTITION_KEY_FIELD
from diary.infrastructure.document_store.firestore._rest_client import (
    FirestoreConflictError,
    FirestoreRESTClient,
)
from diary.infrastructure.exceptions import DocumentExistsError, DocumentNotFoundError


def document_key(partition_key: str, document_id: str) -> str:
    """Stable Firestore document key for a (partition, id) pair."""
    return hashlib.sha256(f"{partition_key}\x1f{document_id}".encode()).hexdigest()


class FirestoreDocumentStore:
    """Partitioned document store backed by Firestore collections."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client

    @staticmethod
    def _prepare(record: dict[str, Any], partition_key: str) -> dict[str, Any]:
        if not record.get("id"):
            raise ValueError("record must have a non-empty 'id'")
        data = copy.deepcopy(record)
        data[PARTITION_KEY_FIELD] = partition_key
        return data

    async def create(
        self, container: str, record: dict[str, Any], partition_key: str
    ) -> dict[str, Any]:
        data = self._prepare(record, partition_key)
        try:
            await self._client.collection(container).create(
                document_key(partition_key, data["id"]), data
            )
        except FirestoreConflictError as e:
            raise DocumentExistsError(container, data["id"]) from e
        return data

    async def get(
        self, container: str, document_id: str, partition_key: str
    ) -> dict[str, Any] | None:
        snap = await (
            self._client.collection(container)
            .document(document_key(partition_key, document_id))
            .get()
        )
        return snap.to_dict() if snap is not None else None

    async def query(
        self,
        container: str,
        filters: dict[str, Any] | None = None,
        partition_key: str | None = None,
    ) -> list[dict[str, Any]]:
        wanted = dict(filters or {})
        if partition_key is not None:
            wanted[PARTITION_KEY_FIELD] = partition_key
        query = self._client.collection(container).where(wanted)
        return [snap.to_dict() async for snap in query.stream()]

    async def upsert(
        self, container: str, record: dict[str, Any], partition_key: str
    ) -> dict[str, Any]:
        data = self._prepare(record, partition_key)
        await (
            self._client.collection(container)
            .document(document_key(partition_key, data["id"]))
            .set(data)
        )
        return data

    async def delete(self, container: str, document_id: str, partition_key: str) -> None:
        """Delete; DocumentNotFoundError when missing (Firestore deletes are idempotent)."""
        ref = self._client.collection(container).document(
            document_key(partition_key, document_id)
        )
        if await ref.get() is None:
            raise DocumentNotFoundError(container, document_id)
        await ref.delete()

    async def aclose(self) -> None:
        await self._client.aclose()
