"""Recommendation and system prompt API schemas."""

from datetime import datetime

from pydantic import Field

from diary.schemas.base import CamelModel


class RecommendationResponse(CamelModel):
    recommendation: str


class RecommendationHistoryItem(CamelModel):
    id: str
    date: datetime
    text: str


class SystemPromptResponse(CamelModel):
    lines: list[str]
    text: str


class SystemPromptLineRequest(CamelModel):
    line: str = Field(..., min_length=1, max_length=2_000)
