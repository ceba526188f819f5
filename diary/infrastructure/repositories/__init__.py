"""Document-store-backed repositories (implement application ports)."""

from diary.infrastructure.repositories.diary_entry_repo import DiaryEntryRepository
from diary.infrastructure.repositories.email_settings_repo import EmailSettingsRepository
from diary.infrastructure.repositories.personal_access_token_repo import (
    PersonalAccessTokenRepository,
)
from diary.infrastructure.repositories.recommendation_repo import RecommendationRepository
from diary.infrastructure.repositories.system_prompt_repo import SystemPromptRepository

__all__ = [
    "DiaryEntryRepository",
    "EmailSettingsRepository",
    "PersonalAccessTokenRepository",
    "RecommendationRepository",
    "SystemPromptRepository",
]
