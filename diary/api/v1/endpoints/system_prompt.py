"""System prompt API: view and edit the lines used to steer recommendations."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from diary.api.v1.dependencies import (
    SCOPE_DIARY_READ,
    SCOPE_DIARY_WRITE,
    get_system_prompt_service,
    require_scope,
)
from diary.application.services import SystemPromptService
from diary.core.limiter import limit_writes
from diary.domain.entities import SystemPromptEntity
from diary.middleware.authentication import Principal
from diary.schemas.recommendation import SystemPromptLineRequest, SystemPromptResponse

router = APIRouter()

Service = Annotated[SystemPromptService, Depends(get_system_prompt_service)]


def _to_response(prompt: SystemPromptEntity) -> SystemPromptResponse:
    return SystemPromptResponse(lines=list(prompt.lines), text=prompt.text)


@router.get("", response_model=SystemPromptResponse)
async def get_system_prompt(
    principal: Annotated[Principal, Depends(require_scope(SCOPE_DIARY_READ))],
    service: Service,
):
    return _to_response(await service.get_prompt(principal.user_id))


@router.post("/lines", response_model=SystemPromptResponse)
@limit_writes
async def add_line(
    request: Request,
    body: SystemPromptLineRequest,
    principal: Annotated[Principal, Depends(require_scope(SCOPE_DIARY_WRITE))],
    service: Service,
):
    return _to_response(await service.add_line(principal.user_id, body.line))


@router.delete("/lines", response_model=SystemPromptResponse)
@limit_writes
async def remove_line(
    request: Request,
    body: SystemPromptLineRequest,
    principal: Annotated[Principal, Depends(require_scope(SCOPE_DIARY_WRITE))],
    service: Service,
):
    """Remove a line; the default line is restored when none remain."""
    return _to_response(await service.remove_line(principal.user_id, body.line))
