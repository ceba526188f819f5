"""Personal access token API schemas."""

from datetime import datetime

from pydantic import Field

from diary.schemas.base import CamelModel


class PersonalAccessTokenCreatedResponse(CamelModel):
    """POST /personal-access-tokens. `token` is never returned again."""

    id: str
    token: str = Field(..., description="Plaintext token; shown only once")
    token_prefix: str
    created_at: datetime
    warning: str


class PersonalAccessTokenResponse(CamelModel):
    """Token metadata (no secret)."""

    id: str
    token_prefix: str
    created_at: datetime
    is_active: bool
