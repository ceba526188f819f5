"""Personal access token API: create, list, revoke (owner-scoped)."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from diary.api.v1.dependencies import (
    SCOPE_TOKENS_MANAGE,
    get_token_service,
    require_scope,
)
from diary.application.services import PersonalAccessTokenService
from diary.core.limiter import limit_create_token, limit_writes
from diary.middleware.authentication import Principal
from diary.schemas.personal_access_token import (
    PersonalAccessTokenCreatedResponse,
    PersonalAccessTokenResponse,
)

router = APIRouter()

ManagePrincipal = Annotated[Principal, Depends(require_scope(SCOPE_TOKENS_MANAGE))]
TokenService = Annotated[PersonalAccessTokenService, Depends(get_token_service)]


@router.post("", response_model=PersonalAccessTokenCreatedResponse, status_code=201)
@limit_create_token
async def create_token(
    request: Request,
    principal: ManagePrincipal,
    token_service: TokenService,
):
    """Create a token. The plaintext token is in this response only."""
    created = await token_service.create_token(principal.user_id)
    return PersonalAccessTokenCreatedResponse(
        id=created.id,
        token=created.token,
        token_prefix=created.token_prefix,
        created_at=created.created_at,
        warning=created.warning,
    )


@router.get("", response_model=list[PersonalAccessTokenResponse])
async def list_tokens(principal: ManagePrincipal, token_service: TokenService):
    """List the caller's tokens (metadata only)."""
    tokens = await token_service.get_user_tokens(principal.user_id)
    return [
        PersonalAccessTokenResponse(
            id=t.id,
            token_prefix=t.token_prefix,
            created_at=t.created_at,
            is_active=t.is_active,
        )
        for t in tokens
    ]


# Token ids are standard base64 and may contain "/".
@router.delete("/{token_id:path}", status_code=204)
@limit_writes
async def revoke_token(
    request: Request,
    token_id: str,
    principal: ManagePrincipal,
    token_service: TokenService,
):
    """Revoke (delete) one of the caller's tokens; 404 if it is not theirs or missing."""
    if not await token_service.revoke_token(token_id, principal.user_id):
        raise HTTPException(status_code=404, detail="Token not found")
    return Response(status_code=204)
