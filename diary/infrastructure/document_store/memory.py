"""In-memory document store.

Single-process store for development and tests. Records are keyed by
(container, partition_key, id) and deep-copied on the way in and out so
callers never share mutable state with the store.
"""

from __future__ import annotations

import copy
from typing import Any

from diary.infrastructure.document_store.containers import PARTITION_KEY_FIELD
from diary.infrastructure.exceptions import DocumentExistsError, DocumentNotFoundError


class InMemoryDocumentStore:
    """IDocumentStore backed by nested dicts."""

    def __init__(self) -> None:
        self._containers: dict[str, dict[tuple[str, str], dict[str, Any]]] = {}

    def _container(self, name: str) -> dict[tuple[str, str], dict[str, Any]]:
        return self._containers.setdefault(name, {})

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
        """Insert; DocumentExistsError when (partition, id) is taken."""
        data = self._prepare(record, partition_key)
        key = (partition_key, data["id"])
        items = self._container(container)
        if key in items:
            raise DocumentExistsError(container, data["id"])
        items[key] = data
        return copy.deepcopy(data)

    async def get(
        self, container: str, document_id: str, partition_key: str
    ) -> dict[str, Any] | None:
        """Point read by id within a partition."""
        data = self._container(container).get((partition_key, document_id))
        return copy.deepcopy(data) if data is not None else None

    async def query(
        self,
        container: str,
        filters: dict[str, Any] | None = None,
        partition_key: str | None = None,
    ) -> list[dict[str, Any]]:
        """Equality-filter scan; cross-partition when partition_key is None."""
        wanted = filters or {}
        out: list[dict[str, Any]] = []
        for (pk, _), data in self._container(container).items():
            if partition_key is not None and pk != partition_key:
                continue
            if all(data.get(k) == v for k, v in wanted.items()):
                out.append(copy.deepcopy(data))
        return out

    async def upsert(
        self, container: str, record: dict[str, Any], partition_key: str
    ) -> dict[str, Any]:
        """Create or replace."""
        data = self._prepare(record, partition_key)
        self._container(container)[(partition_key, data["id"])] = data
        return copy.deepcopy(data)

    async def delete(self, container: str, document_id: str, partition_key: str) -> None:
        """Delete; DocumentNotFoundError when missing."""
        items = self._container(container)
        if items.pop((partition_key, document_id), None) is None:
            raise DocumentNotFoundError(container, document_id)

    async def aclose(self) -> None:
        """Nothing to release."""
        return None
