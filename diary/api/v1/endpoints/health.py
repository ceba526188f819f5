"""Health check endpoints. No authentication; used for liveness and readiness probes."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from diary.infrastructure.document_store import CONTAINER_SYSTEM_PROMPTS
from diary.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)
from diary.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

_PROBE_PARTITION = "__readiness__"

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Document store unavailable", "model": ReadinessErrorResponse}},
)
async def readiness_check(request: Request) -> ReadinessResponse | JSONResponse:
    """Return 200 when the document store answers a query; 503 otherwise."""
    store = getattr(request.app.state, "document_store", None)
    if store is None:
        return JSONResponse(
            status_code=503,
            content=ReadinessErrorResponse(message="Application not started").model_dump(),
        )
    try:
        await store.query(CONTAINER_SYSTEM_PROMPTS, {"id": _PROBE_PARTITION}, _PROBE_PARTITION)
    except Exception as e:
        logger.warning("Readiness probe failed: %s", e)
        return JSONResponse(
            status_code=503,
            content=ReadinessErrorResponse(message="Document store unavailable").model_dump(),
        )
    scheduler = getattr(request.app.state, "email_scheduler", None)
    return ReadinessResponse(scheduler_running=bool(scheduler and scheduler.running))
