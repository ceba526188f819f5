"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
Types reference domain entities only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from diary.domain.entities import (
        DiaryEntryEntity,
        EmailSettingsEntity,
        PersonalAccessTokenEntity,
        RecommendationEntity,
        SystemPromptEntity,
    )


# Personal access token repository interface
class IPersonalAccessTokenRepository(Protocol):
    """Protocol for PAT persistence (partitioned by user id)."""

    async def create(self, token: PersonalAccessTokenEntity) -> PersonalAccessTokenEntity:
        """Insert a new token record. Raises DuplicateTokenException if the id exists."""

    async def get_by_id(self, token_id: str) -> PersonalAccessTokenEntity | None:
        """Return the token with this hashed id, whatever its owner."""

    async def get_for_user(
        self, user_id: str, token_id: str
    ) -> PersonalAccessTokenEntity | None:
        """Return the token only if it belongs to user_id."""

    async def list_for_user(self, user_id: str) -> list[PersonalAccessTokenEntity]:
        """Return all of a user's tokens (newest first)."""

    async def delete(self, user_id: str, token_id: str) -> None:
        """Delete the user's token. Raises DocumentNotFoundError when missing."""


# Email settings repository interface
class IEmailSettingsRepository(Protocol):
    """Protocol for per-user email settings (at most one record per user)."""

    async def get_for_user(self, user_id: str) -> EmailSettingsEntity | None:
        """Return the user's settings or None."""

    async def list_all(self) -> list[EmailSettingsEntity]:
        """Return every user's settings (used by the dispatch pass)."""

    async def save(self, settings: EmailSettingsEntity) -> EmailSettingsEntity:
        """Create or replace the user's settings."""

    async def delete_for_user(self, user_id: str) -> bool:
        """Delete the user's settings; False when there were none."""


# Recommendation repository interface
class IRecommendationRepository(Protocol):
    """Protocol for recommendation history (append-only)."""

    async def add(self, recommendation: RecommendationEntity) -> RecommendationEntity:
        """Persist a new recommendation."""

    async def list_for_user(
        self, user_id: str, limit: int | None = None
    ) -> list[RecommendationEntity]:
        """Return recommendations newest first, optionally only the first `limit`."""


# Diary entry repository interface
class IDiaryEntryRepository(Protocol):
    """Protocol for diary entries (content encrypted at rest by the implementation)."""

    async def add(self, entry: DiaryEntryEntity) -> DiaryEntryEntity:
        """Persist a new entry."""

    async def get(self, user_id: str, entry_id: str) -> DiaryEntryEntity | None:
        """Return the user's entry or None."""

    async def list_for_user(self, user_id: str) -> list[DiaryEntryEntity]:
        """Return the user's entries oldest first."""

    async def update(self, entry: DiaryEntryEntity) -> DiaryEntryEntity:
        """Replace an existing entry."""

    async def delete(self, user_id: str, entry_id: str) -> bool:
        """Delete the user's entry; False when missing."""


# System prompt repository interface
class ISystemPromptRepository(Protocol):
    """Protocol for the per-user system prompt document."""

    async def get(self, user_id: str) -> SystemPromptEntity | None:
        """Return the user's prompt or None when never saved."""

    async def save(self, prompt: SystemPromptEntity) -> SystemPromptEntity:
        """Create or replace the user's prompt."""
