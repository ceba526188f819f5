"""Personal access token repository over the document store."""

from __future__ import annotations

from typing import Any

from diary.domain.entities import PersonalAccessTokenEntity
from diary.domain.exceptions import DuplicateTokenException
from diary.infrastructure.document_store import (
    CONTAINER_PERSONAL_ACCESS_TOKENS,
    IDocumentStore,
)
from diary.infrastructure.exceptions import DocumentExistsError
from diary.infrastructure.repositories._serialization import dump_datetime, load_datetime
from diary.shared.utils.datetime import utc_now


class PersonalAccessTokenRepository:
    """Token records partitioned by userId; id is the hashed secret."""

    def __init__(self, store: IDocumentStore) -> None:
        self._store = store

    @staticmethod
    def _to_record(token: PersonalAccessTokenEntity) -> dict[str, Any]:
        return {
            "id": token.id,
            "userId": token.user_id,
            "tokenPrefix": token.token_prefix,
            "createdAt": dump_datetime(token.created_at),
            "isActive": token.is_active,
        }

    @staticmethod
    def _to_entity(data: dict[str, Any]) -> PersonalAccessTokenEntity:
        return PersonalAccessTokenEntity(
            id=data["id"],
            user_id=data.get("userId", ""),
            token_prefix=data.get("tokenPrefix", ""),
            created_at=load_datetime(data.get("createdAt")) or utc_now(),
            is_active=bool(data.get("isActive", True)),
        )

    async def create(self, token: PersonalAccessTokenEntity) -> PersonalAccessTokenEntity:
        """Insert; token ids are unique across all users, not just within one partition."""
        if await self.get_by_id(token.id) is not None:
            raise DuplicateTokenException(token.id)
        try:
            data = await self._store.create(
                CONTAINER_PERSONAL_ACCESS_TOKENS, self._to_record(token), token.user_id
            )
        except DocumentExistsError as e:
            raise DuplicateTokenException(token.id) from e
        return self._to_entity(data)

    async def get_by_id(self, token_id: str) -> PersonalAccessTokenEntity | None:
        """Cross-partition lookup: the caller only knows the secret, not the owner."""
        rows = await self._store.query(CONTAINER_PERSONAL_ACCESS_TOKENS, {"id": token_id})
        return self._to_entity(rows[0]) if rows else None

    async def get_for_user(
        self, user_id: str, token_id: str
    ) -> PersonalAccessTokenEntity | None:
        data = await self._store.get(CONTAINER_PERSONAL_ACCESS_TOKENS, token_id, user_id)
        return self._to_entity(data) if data else None

    async def list_for_user(self, user_id: str) -> list[PersonalAccessTokenEntity]:
        rows = await self._store.query(
            CONTAINER_PERSONAL_ACCESS_TOKENS, partition_key=user_id
        )
        tokens = [self._to_entity(r) for r in rows]
        tokens.sort(key=lambda t: t.created_at, reverse=True)
        return tokens

    async def delete(self, user_id: str, token_id: str) -> None:
        await self._store.delete(CONTAINER_PERSONAL_ACCESS_TOKENS, token_id, user_id)
