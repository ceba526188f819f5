"""System prompt repository (one document per user)."""

from __future__ import annotations

from diary.domain.entities import SystemPromptEntity
from diary.domain.entities.system_prompt import system_prompt_id
from diary.infrastructure.document_store import CONTAINER_SYSTEM_PROMPTS, IDocumentStore


class SystemPromptRepository:
    def __init__(self, store: IDocumentStore) -> None:
        self._store = store

    async def get(self, user_id: str) -> SystemPromptEntity | None:
        data = await self._store.get(
            CONTAINER_SYSTEM_PROMPTS, system_prompt_id(user_id), user_id
        )
        if not data:
            return None
        return SystemPromptEntity(user_id=user_id, lines=list(data.get("lines") or []))

    async def save(self, prompt: SystemPromptEntity) -> SystemPromptEntity:
        await self._store.upsert(
            CONTAINER_SYSTEM_PROMPTS,
            {"id": prompt.id, "userId": prompt.user_id, "lines": list(prompt.lines)},
            prompt.user_id,
        )
        return prompt
