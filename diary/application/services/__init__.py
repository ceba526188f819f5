"""Application services (use cases)."""

from diary.application.services.email_service import EmailService
from diary.application.services.email_settings_service import EmailSettingsService
from diary.application.services.diary_service import DiaryService
from diary.application.services.personal_access_token_service import (
    PersonalAccessTokenService,
)
from diary.application.services.recommendation_service import RecommendationService
from diary.application.services.system_prompt_service import SystemPromptService

__all__ = [
    "DiaryService",
    "EmailService",
    "EmailSettingsService",
    "PersonalAccessTokenService",
    "RecommendationService",
    "SystemPromptService",
]
