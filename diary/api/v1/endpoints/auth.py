"""Auth API: who the caller is, and the Azure AD settings clients sign in with."""

from typing import Annotated

from fastapi import APIRouter, Depends

from diary.api.v1.dependencies import CurrentPrincipal
from diary.core.config import Settings, get_settings
from diary.schemas.auth import AuthConfigResponse, CurrentUserResponse

router = APIRouter()


@router.get("/me", response_model=CurrentUserResponse)
async def get_current_user(principal: CurrentPrincipal):
    """Return the identity the authentication pipeline established for this request."""
    return CurrentUserResponse(
        user_id=principal.user_id,
        name=principal.name,
        object_id=principal.claims.get("oid"),
        auth_method=principal.auth_method,
        pat_id=principal.pat_id,
        scopes=list(principal.scopes),
        claims=principal.claims,
    )


@router.get("/config", response_model=AuthConfigResponse)
def get_auth_config(settings: Annotated[Settings, Depends(get_settings)]):
    """Public: no secrets, only the app registration a client authenticates against."""
    return AuthConfigResponse(
        client_id=settings.azure_ad_client_id,
        tenant_id=settings.azure_ad_tenant_id,
        instance=settings.azure_ad_authority,
    )
