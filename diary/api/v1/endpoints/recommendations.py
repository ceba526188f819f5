"""Recommendation API: generate on demand and read history."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from diary.api.v1.dependencies import (
    SCOPE_RECOMMENDATIONS_READ,
    get_recommendation_service,
    require_scope,
)
from diary.application.services import RecommendationService
from diary.core.limiter import limit_recommendations
from diary.middleware.authentication import Principal
from diary.schemas.recommendation import RecommendationHistoryItem, RecommendationResponse

router = APIRouter()

Service = Annotated[RecommendationService, Depends(get_recommendation_service)]
Reader = Annotated[Principal, Depends(require_scope(SCOPE_RECOMMENDATIONS_READ))]


@router.get("", response_model=RecommendationResponse)
@limit_recommendations
async def get_recommendation(request: Request, principal: Reader, service: Service):
    """Generate a fresh recommendation from the caller's diary entries."""
    return RecommendationResponse(recommendation=await service.generate(principal.user_id))


@router.get("/history", response_model=list[RecommendationHistoryItem])
async def get_history(
    principal: Reader,
    service: Service,
    limit: Annotated[int | None, Query(ge=1, le=100)] = None,
):
    """Past recommendations, newest first."""
    items = await service.get_history(principal.user_id, limit=limit)
    return [RecommendationHistoryItem(id=r.id, date=r.date, text=r.text) for r in items]
