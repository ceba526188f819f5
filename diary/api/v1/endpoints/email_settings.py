"""Email settings API: the caller's daily recommendation email schedule."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from diary.api.v1.dependencies import (
    SCOPE_DIARY_READ,
    SCOPE_DIARY_WRITE,
    get_email_service,
    get_email_settings_service,
    require_scope,
)
from diary.application.services import EmailService, EmailSettingsService
from diary.core.limiter import limit_test_email, limit_writes
from diary.domain.entities import EmailSettingsEntity
from diary.middleware.authentication import Principal
from diary.schemas.email_settings import (
    EmailSettingsRequest,
    EmailSettingsResponse,
    SendTestEmailResponse,
)

router = APIRouter()

SettingsService = Annotated[EmailSettingsService, Depends(get_email_settings_service)]


def _to_response(settings: EmailSettingsEntity) -> EmailSettingsResponse:
    return EmailSettingsResponse(
        id=settings.id,
        user_id=settings.user_id,
        email=settings.email,
        preferred_time=settings.preferred_time,
        is_enabled=settings.is_enabled,
        time_zone=settings.time_zone,
        last_email_sent=settings.last_email_sent,
    )


@router.get("", response_model=EmailSettingsResponse)
async def get_email_settings(
    principal: Annotated[Principal, Depends(require_scope(SCOPE_DIARY_READ))],
    service: SettingsService,
):
    settings = await service.get(principal.user_id)
    if settings is None:
        raise HTTPException(status_code=404, detail="Email settings not found")
    return _to_response(settings)


@router.post("", response_model=EmailSettingsResponse)
@limit_writes
async def save_email_settings(
    request: Request,
    body: EmailSettingsRequest,
    principal: Annotated[Principal, Depends(require_scope(SCOPE_DIARY_WRITE))],
    service: SettingsService,
):
    """Create or update settings. The address always comes from the caller's token."""
    email = principal.email
    if not email:
        raise HTTPException(status_code=400, detail="User email not found in token claims")
    settings = await service.save(
        principal.user_id,
        email,
        preferred_time=body.preferred_time,
        is_enabled=body.is_enabled,
        time_zone=body.time_zone,
    )
    return _to_response(settings)


@router.delete("", status_code=204)
@limit_writes
async def delete_email_settings(
    request: Request,
    principal: Annotated[Principal, Depends(require_scope(SCOPE_DIARY_WRITE))],
    service: SettingsService,
):
    if not await service.delete(principal.user_id):
        raise HTTPException(status_code=404, detail="Email settings not found")
    return Response(status_code=204)


@router.post("/test", response_model=SendTestEmailResponse)
@limit_test_email
async def send_test_email(
    request: Request,
    principal: Annotated[Principal, Depends(require_scope(SCOPE_DIARY_WRITE))],
    service: SettingsService,
    email_service: Annotated[EmailService, Depends(get_email_service)],
):
    """Send a test email to the configured address."""
    settings = await service.get(principal.user_id)
    if settings is None:
        raise HTTPException(status_code=404, detail="Email settings not found")
    operation_id = await email_service.send_test_email(settings.email)
    return SendTestEmailResponse(message="Test email sent", operation_id=operation_id)
