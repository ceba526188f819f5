"""Diary entry use cases (owner-scoped CRUD)."""

from __future__ import annotations

from datetime import datetime

from diary.application.interfaces.repositories import IDiaryEntryRepository
from diary.domain.entities import DiaryEntryEntity
from diary.domain.exceptions import ResourceNotFoundException
from diary.shared.utils.datetime import ensure_utc, utc_now


class DiaryService:
    def __init__(self, entry_repo: IDiaryEntryRepository) -> None:
        self.entry_repo = entry_repo

    async def create_entry(
        self,
        user_id: str,
        thought: str,
        *,
        context: str | None = None,
        tags: list[str] | None = None,
        date: datetime | None = None,
    ) -> DiaryEntryEntity:
        entry = DiaryEntryEntity(
            user_id=user_id,
            thought=thought,
            context=context or None,
            tags=list(tags or []),
            date=ensure_utc(date) or utc_now(),
        )
        return await self.entry_repo.add(entry)

    async def list_entries(self, user_id: str) -> list[DiaryEntryEntity]:
        return await self.entry_repo.list_for_user(user_id)

    async def get_entry(self, user_id: str, entry_id: str) -> DiaryEntryEntity:
        """Raises ResourceNotFoundException if missing or owned by someone else."""
        entry = await self.entry_repo.get(user_id, entry_id)
        if entry is None:
            raise ResourceNotFoundException("diary_entry", entry_id)
        return entry

    async def update_entry(
        self,
        user_id: str,
        entry_id: str,
        thought: str,
        *,
        context: str | None = None,
        tags: list[str] | None = None,
    ) -> DiaryEntryEntity:
        """Replace thought, context and tags; the entry date is kept."""
        existing = await self.get_entry(user_id, entry_id)
        updated = DiaryEntryEntity(
            id=existing.id,
            user_id=user_id,
            thought=thought,
            context=context or None,
            tags=list(tags or []),
            date=existing.date,
        )
        return await self.entry_repo.update(updated)

    async def delete_entry(self, user_id: str, entry_id: str) -> None:
        if not await self.entry_repo.delete(user_id, entry_id):
            raise ResourceNotFoundException("diary_entry", entry_id)
