"""Application DTOs (results returned by services)."""

from diary.application.dtos.personal_access_token import (
    TOKEN_SHOWN_ONCE_WARNING,
    PersonalAccessTokenCreated,
)

__all__ = ["TOKEN_SHOWN_ONCE_WARNING", "PersonalAccessTokenCreated"]
