"""Per-user system prompt: read (created on first use), add and remove lines."""

from __future__ import annotations

from diary.application.interfaces.repositories import ISystemPromptRepository
from diary.domain.entities import SystemPromptEntity
from diary.domain.exceptions import ValidationException


class SystemPromptService:
    def __init__(self, prompt_repo: ISystemPromptRepository) -> None:
        self.prompt_repo = prompt_repo

    async def get_prompt(self, user_id: str) -> SystemPromptEntity:
        """Return the user's prompt, storing the default one on first access."""
        prompt = await self.prompt_repo.get(user_id)
        if prompt is None or not prompt.lines:
            prompt = SystemPromptEntity(user_id=user_id)
            await self.prompt_repo.save(prompt)
        return prompt

    async def get_system_prompt(self, user_id: str) -> str:
        """Prompt lines joined with newlines."""
        return (await self.get_prompt(user_id)).text

    async def add_line(self, user_id: str, line: str) -> SystemPromptEntity:
        if not line or not line.strip():
            raise ValidationException("Prompt line cannot be empty", field="line")
        prompt = await self.get_prompt(user_id)
        prompt.add_line(line.strip())
        return await self.prompt_repo.save(prompt)

    async def remove_line(self, user_id: str, line: str) -> SystemPromptEntity:
        """Remove a line; the default line comes back when none are left."""
        prompt = await self.get_prompt(user_id)
        prompt.remove_line(line)
        return await self.prompt_repo.save(prompt)
