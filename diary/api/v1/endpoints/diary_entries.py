"""Diary entry API: thin routes delegating to DiaryService."""

from typing import Annotated

from fastapi import APIRouter, Depends, Header, Request, Response

from diary.api.v1.dependencies import (
    SCOPE_DIARY_READ,
    SCOPE_DIARY_WRITE,
    get_diary_service,
    require_scope,
)
from diary.application.services import DiaryService
from diary.core.limiter import limit_writes
from diary.domain.entities import DiaryEntryEntity
from diary.middleware.authentication import Principal
from diary.schemas.diary_entry import DiaryEntryRequest, DiaryEntryResponse
from diary.shared.utils.datetime import parse_datetime_utc

router = APIRouter()

Service = Annotated[DiaryService, Depends(get_diary_service)]
Reader = Annotated[Principal, Depends(require_scope(SCOPE_DIARY_READ))]
Writer = Annotated[Principal, Depends(require_scope(SCOPE_DIARY_WRITE))]


def _to_response(entry: DiaryEntryEntity) -> DiaryEntryResponse:
    return DiaryEntryResponse(
        id=entry.id,
        user_id=entry.user_id,
        date=entry.date,
        thought=entry.thought,
        context=entry.context,
        tags=entry.tags,
    )


@router.post("", response_model=DiaryEntryResponse, status_code=201)
@limit_writes
async def create_entry(
    request: Request,
    body: DiaryEntryRequest,
    principal: Writer,
    service: Service,
    x_entry_date: Annotated[str | None, Header()] = None,
):
    """Create an entry. X-Entry-Date (ISO 8601) sets its date when parseable; otherwise now."""
    entry = await service.create_entry(
        principal.user_id,
        body.thought,
        context=body.context,
        tags=body.tags,
        date=parse_datetime_utc(x_entry_date),
    )
    return _to_response(entry)


@router.get("", response_model=list[DiaryEntryResponse])
async def list_entries(principal: Reader, service: Service):
    return [_to_response(e) for e in await service.list_entries(principal.user_id)]


@router.get("/{entry_id}", response_model=DiaryEntryResponse)
async def get_entry(entry_id: str, principal: Reader, service: Service):
    return _to_response(await service.get_entry(principal.user_id, entry_id))


@router.put("/{entry_id}", response_model=DiaryEntryResponse)
@limit_writes
async def update_entry(
    request: Request,
    entry_id: str,
    body: DiaryEntryRequest,
    principal: Writer,
    service: Service,
):
    entry = await service.update_entry(
        principal.user_id,
        entry_id,
        body.thought,
        context=body.context,
        tags=body.tags,
    )
    return _to_response(entry)


@router.delete("/{entry_id}", status_code=204)
@limit_writes
async def delete_entry(request: Request, entry_id: str, principal: Writer, service: Service):
    await service.delete_entry(principal.user_id, entry_id)
    return Response(status_code=204)
