"""Presentation-layer dependency injection (composition root).

Services are built once in the lifespan and stored on app.state; routes
receive them through these Depends() providers. Authentication itself
happens in AuthenticationMiddleware; the dependencies here only read the
principal it left in request state.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from diary.application.services import (
    DiaryService,
    EmailService,
    EmailSettingsService,
    PersonalAccessTokenService,
    RecommendationService,
    SystemPromptService,
)
from diary.domain.enums import AuthMethod
from diary.domain.exceptions import AuthorizationException
from diary.middleware.authentication import Principal

SCOPE_DIARY_READ = "diary.read"
SCOPE_DIARY_WRITE = "diary.write"
SCOPE_RECOMMENDATIONS_READ = "recommendations.read"
SCOPE_TOKENS_MANAGE = "tokens.manage"

# Declares bearer auth in OpenAPI; the middleware does the validation.
_http_bearer = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> PersonalAccessTokenService:
    return request.app.state.token_service


def get_email_settings_service(request: Request) -> EmailSettingsService:
    return request.app.state.email_settings_service


def get_email_service(request: Request) -> EmailService:
    return request.app.state.email_service


def get_diary_service(request: Request) -> DiaryService:
    return request.app.state.diary_service


def get_recommendation_service(request: Request) -> RecommendationService:
    return request.app.state.recommendation_service


def get_system_prompt_service(request: Request) -> SystemPromptService:
    return request.app.state.system_prompt_service


async def get_current_principal(
    request: Request,
    _credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> Principal:
    """Return the authenticated principal; raise 401 if missing or rejected."""
    principal: Principal | None = getattr(request.state, "principal", None)
    if principal is None:
        detail = getattr(request.state, "auth_failure", None) or "Not authenticated"
        raise HTTPException(
            status_code=401,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return principal


async def get_current_user_id(
    principal: Annotated[Principal, Depends(get_current_principal)],
) -> str:
    return principal.user_id


def require_scope(scope: str):
    """Dependency factory: interactive (OAuth) callers always pass; PAT callers need `scope`."""

    async def _require(
        principal: Annotated[Principal, Depends(get_current_principal)],
    ) -> Principal:
        if principal.auth_method is AuthMethod.PAT and not principal.has_scope(scope):
            raise AuthorizationException(scope)
        return principal

    return _require


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]
CurrentUserId = Annotated[str, Depends(get_current_user_id)]
