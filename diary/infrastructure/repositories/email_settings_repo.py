"""Email settings repository over the document store."""

from __future__ import annotations

from typing import Any

from diary.domain.entities import EmailSettingsEntity
from diary.domain.entities.email_settings import DEFAULT_PREFERRED_TIME, DEFAULT_TIME_ZONE
from diary.infrastructure.document_store import CONTAINER_EMAIL_SETTINGS, IDocumentStore
from diary.infrastructure.exceptions import DocumentNotFoundError
from diary.infrastructure.repositories._serialization import (
    dump_datetime,
    dump_time,
    load_datetime,
    load_time,
)


class EmailSettingsRepository:
    """One settings record per user, looked up by userId within its partition."""

    def __init__(self, store: IDocumentStore) -> None:
        self._store = store

    @staticmethod
    def _to_record(settings: EmailSettingsEntity) -> dict[str, Any]:
        return {
            "id": settings.id,
            "userId": settings.user_id,
            "email": settings.email,
            "preferredTime": dump_time(settings.preferred_time),
            "isEnabled": settings.is_enabled,
            "timeZone": settings.time_zone,
            "lastEmailSent": dump_datetime(settings.last_email_sent),
        }

    @staticmethod
    def _to_entity(data: dict[str, Any]) -> EmailSettingsEntity:
        return EmailSettingsEntity(
            id=data["id"],
            user_id=data.get("userId", ""),
            email=data.get("email", ""),
            preferred_time=load_time(data.get("preferredTime"), DEFAULT_PREFERRED_TIME),
            is_enabled=bool(data.get("isEnabled", True)),
            time_zone=data.get("timeZone") or DEFAULT_TIME_ZONE,
            last_email_sent=load_datetime(data.get("lastEmailSent")),
        )

    async def get_for_user(self, user_id: str) -> EmailSettingsEntity | None:
        rows = await self._store.query(
            CONTAINER_EMAIL_SETTINGS, {"userId": user_id}, partition_key=user_id
        )
        return self._to_entity(rows[0]) if rows else None

    async def list_all(self) -> list[EmailSettingsEntity]:
        rows = await self._store.query(CONTAINER_EMAIL_SETTINGS)
        return [self._to_entity(r) for r in rows]

    async def save(self, settings: EmailSettingsEntity) -> EmailSettingsEntity:
        data = await self._store.upsert(
            CONTAINER_EMAIL_SETTINGS, self._to_record(settings), settings.user_id
        )
        return self._to_entity(data)

    async def delete_for_user(self, user_id: str) -> bool:
        existing = await self.get_for_user(user_id)
        if existing is None:
            return False
        try:
            await self._store.delete(CONTAINER_EMAIL_SETTINGS, existing.id, user_id)
        except DocumentNotFoundError:
            return False
        return True
