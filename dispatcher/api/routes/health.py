"""Health and system info routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from dispatcher.api.deps import get_dispatcher
from dispatcher.api.models import SystemInfoResponse
from dispatcher.engine.dispatcher import Dispatcher

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
async def health_check() -> dict:
    """Liveness check -- always returns ok if the server is running."""
    return {"status": "ok"}


@router.get("/info", response_model=SystemInfoResponse)
async def system_info(
    dispatcher: Dispatcher = Depends(get_dispatcher),
) -> SystemInfoResponse:
    """System information snapshot."""
    from dispatcher.api.app import VERSION

    return SystemInfoResponse(
        version=VERSION,
        scheduled_notifications=dispatcher.count(),
        accounts=len(dispatcher.accounts()),
    )
