"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. Routes get
services from diary.api.v1.dependencies.
"""

from fastapi import APIRouter

from diary.api.v1.endpoints import (
    auth,
    diary_entries,
    email_settings,
    health,
    personal_access_tokens,
    recommendations,
    system_prompt,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(
    personal_access_tokens.router,
    prefix="/personal-access-tokens",
    tags=["personal-access-tokens"],
)
api_router.include_router(
    email_settings.router, prefix="/email-settings", tags=["email-settings"]
)
api_router.include_router(diary_entries.router, prefix="/diary", tags=["diary"])
api_router.include_router(
    recommendations.router, prefix="/recommendations", tags=["recommendations"]
)
api_router.include_router(
    system_prompt.router, prefix="/system-prompt", tags=["system-prompt"]
)
