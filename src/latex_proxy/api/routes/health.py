import time
from datetime import datetime, timezone

from fastapi import APIRouter

from latex_proxy.api.schemas import HealthResponse

router = APIRouter()

_STARTED_AT = time.monotonic()


def _health() -> HealthResponse:
    return HealthResponse(
        timestamp=datetime.now(timezone.utc).isoformat(),
        uptime=round(time.monotonic() - _STARTED_AT, 3),
    )


@router.get("/", response_model=HealthResponse)
async def root() -> HealthResponse:
    return _health()


@router.get("/healthz/live", response_model=HealthResponse)
async def liveness() -> HealthResponse:
    """Liveness probe: is the process alive?"""
    return _health()
