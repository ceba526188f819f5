"""Recommendation generation from diary entries via an LLM.

The prompt is the user's system prompt, a list of recent recommendations
to avoid repeating, and the diary entries oldest first.
"""

from __future__ import annotations

from diary.application.interfaces.repositories import (
    IDiaryEntryRepository,
    IRecommendationRepository,
)
from diary.application.interfaces.services import ILlmClient
from diary.application.services.system_prompt_service import SystemPromptService
from diary.domain.entities import DiaryEntryEntity, RecommendationEntity
from diary.domain.exceptions import RecommendationGenerationException
from diary.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

NO_ENTRIES_RECOMMENDATION = "Start writing your first diary entry!"
DEFAULT_HISTORY_COUNT = 5


def format_entry(entry: DiaryEntryEntity) -> str:
    line = f"At {entry.date.isoformat()} I wrote: {entry.thought}"
    if entry.context:
        line += f" in the context of {entry.context}"
    return line


class RecommendationService:
    """Implements IRecommendationGenerator on top of an ILlmClient."""

    def __init__(
        self,
        entry_repo: IDiaryEntryRepository,
        recommendation_repo: IRecommendationRepository,
        system_prompt_service: SystemPromptService,
        llm_client: ILlmClient,
        *,
        history_count: int = DEFAULT_HISTORY_COUNT,
    ) -> None:
        self.entry_repo = entry_repo
        self.recommendation_repo = recommendation_repo
        self.system_prompt_service = system_prompt_service
        self.llm_client = llm_client
        self.history_count = history_count

    async def build_messages(
        self, user_id: str, entries: list[DiaryEntryEntity]
    ) -> list[dict[str, str]]:
        system_prompt = await self.system_prompt_service.get_system_prompt(user_id)
        messages = [{"role": "system", "content": system_prompt}]

        history = await self.recommendation_repo.list_for_user(user_id, limit=self.history_count)
        if history:
            previous = "\n".join(f"- {r.text}" for r in reversed(history))
            messages.append(
                {
                    "role": "system",
                    "content": "Avoid repeating these previous recommendations:\n" + previous,
                }
            )

        entries_text = "\n".join(format_entry(e) for e in entries)
        messages.append(
            {
                "role": "user",
                "content": "Based on my diary entries, please provide me with "
                f"thoughtful recommendations:\n\n{entries_text}",
            }
        )
        return messages

    async def generate(self, user_id: str) -> str:
        """Generate, persist, and return a recommendation for user_id.

        Raises:
            RecommendationGenerationException: If the LLM call fails or returns nothing.
        """
        entries = await self.entry_repo.list_for_user(user_id)
        if not entries:
            return NO_ENTRIES_RECOMMENDATION

        messages = await self.build_messages(user_id, entries)
        try:
            text = await self.llm_client.complete(messages)
        except Exception as e:
            logger.exception("LLM completion failed for user %s", user_id)
            raise RecommendationGenerationException(user_id, str(e)) from e
        if not text or not text.strip():
            raise RecommendationGenerationException(user_id, "empty completion")

        await self.recommendation_repo.add(RecommendationEntity(user_id=user_id, text=text))
        return text

    async def get_history(self, user_id: str, limit: int | None = None) -> list[RecommendationEntity]:
        """Stored recommendations, newest first."""
        return await self.recommendation_repo.list_for_user(user_id, limit=limit)
