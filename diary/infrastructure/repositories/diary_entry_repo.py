"""Diary entry repository: thought and context are encrypted at rest."""

from __future__ import annotations

from typing import Any

from diary.domain.entities import DiaryEntryEntity
from diary.infrastructure.document_store import CONTAINER_DIARY_ENTRIES, IDocumentStore
from diary.infrastructure.exceptions import DocumentNotFoundError
from diary.infrastructure.repositories._serialization import dump_datetime, load_datetime
from diary.infrastructure.security.encryption import FieldEncryptor
from diary.shared.utils.datetime import utc_now


class DiaryEntryRepository:
    """Entries partitioned by userId; ciphertext only in the stored record."""

    def __init__(self, store: IDocumentStore, encryptor: FieldEncryptor) -> None:
        self._store = store
        self._encryptor = encryptor

    def _to_record(self, entry: DiaryEntryEntity) -> dict[str, Any]:
        return {
            "id": entry.id,
            "userId": entry.user_id,
            "date": dump_datetime(entry.date),
            "encryptedThought": self._encryptor.encrypt(entry.thought),
            "encryptedContext": (
                self._encryptor.encrypt(entry.context) if entry.context else None
            ),
            "tags": list(entry.tags),
        }

    def _to_entity(self, data: dict[str, Any]) -> DiaryEntryEntity:
        context = data.get("encryptedContext")
        return DiaryEntryEntity(
            id=data["id"],
            user_id=data.get("userId", ""),
            thought=self._encryptor.decrypt(data["encryptedThought"]),
            context=self._encryptor.decrypt(context) if context else None,
            date=load_datetime(data.get("date")) or utc_now(),
            tags=list(data.get("tags") or []),
        )

    async def add(self, entry: DiaryEntryEntity) -> DiaryEntryEntity:
        await self._store.create(CONTAINER_DIARY_ENTRIES, self._to_record(entry), entry.user_id)
        return entry

    async def get(self, user_id: str, entry_id: str) -> DiaryEntryEntity | None:
        data = await self._store.get(CONTAINER_DIARY_ENTRIES, entry_id, user_id)
        return self._to_entity(data) if data else None

    async def list_for_user(self, user_id: str) -> list[DiaryEntryEntity]:
        rows = await self._store.query(CONTAINER_DIARY_ENTRIES, partition_key=user_id)
        entries = [self._to_entity(r) for r in rows]
        entries.sort(key=lambda e: e.date)
        return entries

    async def update(self, entry: DiaryEntryEntity) -> DiaryEntryEntity:
        await self._store.upsert(CONTAINER_DIARY_ENTRIES, self._to_record(entry), entry.user_id)
        return entry

    async def delete(self, user_id: str, entry_id: str) -> bool:
        try:
            await self._store.delete(CONTAINER_DIARY_ENTRIES, entry_id, user_id)
        except DocumentNotFoundError:
            return False
        return True
