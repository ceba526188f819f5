"""Ports (Protocols) implemented by infrastructure."""

from diary.application.interfaces.repositories import (
    IDiaryEntryRepository,
    IEmailSettingsRepository,
    IPersonalAccessTokenRepository,
    IRecommendationRepository,
    ISystemPromptRepository,
)
from diary.application.interfaces.services import (
    Clock,
    IEmailContentRenderer,
    IEmailSender,
    ILlmClient,
    IRecommendationGenerator,
)

__all__ = [
    "Clock",
    "IDiaryEntryRepository",
    "IEmailContentRenderer",
    "IEmailSender",
    "IEmailSettingsRepository",
    "ILlmClient",
    "IPersonalAccessTokenRepository",
    "IRecommendationGenerator",
    "IRecommendationRepository",
    "ISystemPromptRepository",
]
