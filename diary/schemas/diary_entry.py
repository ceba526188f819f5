"""Diary entry API schemas."""

from datetime import datetime

from pydantic import Field

from diary.schemas.base import CamelModel


class DiaryEntryRequest(CamelModel):
    """Body of POST/PUT /diary. The entry date comes from the X-Entry-Date header."""

    thought: str = Field(..., min_length=1, max_length=10_000)
    context: str | None = Field(default=None, max_length=10_000)
    tags: list[str] = Field(default_factory=list, max_length=50)


class DiaryEntryResponse(CamelModel):
    id: str
    user_id: str
    date: datetime
    thought: str
    context: str | None = None
    tags: list[str] = Field(default_factory=list)
