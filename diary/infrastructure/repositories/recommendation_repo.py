"""Recommendation history repository over the document store."""

from __future__ import annotations

from typing import Any

from diary.domain.entities import RecommendationEntity
from diary.infrastructure.document_store import CONTAINER_RECOMMENDATIONS, IDocumentStore
from diary.infrastructure.repositories._serialization import dump_datetime, load_datetime
from diary.shared.utils.datetime import utc_now


class RecommendationRepository:
    """Append-only recommendation records partitioned by userId."""

    def __init__(self, store: IDocumentStore) -> None:
        self._store = store

    async def add(self, recommendation: RecommendationEntity) -> RecommendationEntity:
        await self._store.create(
            CONTAINER_RECOMMENDATIONS,
            {
                "id": recommendation.id,
                "userId": recommendation.user_id,
                "date": dump_datetime(recommendation.date),
                "text": recommendation.text,
            },
            recommendation.user_id,
        )
        return recommendation

    async def list_for_user(
        self, user_id: str, limit: int | None = None
    ) -> list[RecommendationEntity]:
        rows = await self._store.query(CONTAINER_RECOMMENDATIONS, partition_key=user_id)
        items = [self._to_entity(r) for r in rows]
        items.sort(key=lambda r: r.date, reverse=True)
        return items[:limit] if limit is not None else items

    @staticmethod
    def _to_entity(data: dict[str, Any]) -> RecommendationEntity:
        return RecommendationEntity(
            id=data["id"],
            user_id=data.get("userId", ""),
            text=data.get("text", ""),
            date=load_datetime(data.get("date")) or utc_now(),
        )
