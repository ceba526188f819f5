"""Domain entities."""

from diary.domain.entities.diary_entry import DiaryEntryEntity
from diary.domain.entities.email_settings import EmailSettingsEntity
from diary.domain.entities.personal_access_token import PersonalAccessTokenEntity
from diary.domain.entities.recommendation import RecommendationEntity
from diary.domain.entities.system_prompt import DEFAULT_SYSTEM_PROMPT_LINE, SystemPromptEntity

__all__ = [
    "DEFAULT_SYSTEM_PROMPT_LINE",
    "DiaryEntryEntity",
    "EmailSettingsEntity",
    "PersonalAccessTokenEntity",
    "RecommendationEntity",
    "SystemPromptEntity",
]
