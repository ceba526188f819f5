"""Document store protocol (backend-agnostic)."""

from typing import Any, Protocol


class IDocumentStore(Protocol):
    """Partitioned document store (DIP).

    Records are plain dicts with an "id" field; the partition key is the
    owning user id and is also stored in the record's "userId" field.
    Returned records are copies: mutating them does not change the store.
    """

    async def create(
        self, container: str, record: dict[str, Any], partition_key: str
    ) -> dict[str, Any]:
        """Insert a new record. Raises DocumentExistsError if the id exists in the partition."""
        ...

    async def get(
        self, container: str, document_id: str, partition_key: str
    ) -> dict[str, Any] | None:
        """Return the record or None if missing."""
        ...

    async def query(
        self,
        container: str,
        filters: dict[str, Any] | None = None,
        partition_key: str | None = None,
    ) -> list[dict[str, Any]]:
        """Return records matching all equality filters (optionally within one partition)."""
        ...

    async def upsert(
        self, container: str, record: dict[str, Any], partition_key: str
    ) -> dict[str, Any]:
        """Create or replace the record."""
        ...

    async def delete(self, container: str, document_id: str, partition_key: str) -> None:
        """Delete the record. Raises DocumentNotFoundError if missing."""
        ...

    async def aclose(self) -> None:
        """Release connections (no-op for in-memory)."""
        ...
