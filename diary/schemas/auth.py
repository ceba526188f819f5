"""Auth API schemas: the caller's identity and the public sign-in config."""

from typing import Any

from pydantic import Field

from diary.domain.enums import AuthMethod
from diary.schemas.base import CamelModel


class CurrentUserResponse(CamelModel):
    """GET /auth/me."""

    user_id: str
    name: str
    object_id: str | None = None
    auth_method: AuthMethod
    pat_id: str | None = Field(default=None, description="Set for PAT-authenticated calls")
    scopes: list[str] = Field(default_factory=list)
    claims: dict[str, Any] = Field(default_factory=dict)


class AuthConfigResponse(CamelModel):
    """GET /auth/config. Values a browser client needs to start Azure AD sign-in."""

    client_id: str
    tenant_id: str
    instance: str
