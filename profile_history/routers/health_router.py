"""
Health check router.

Provides liveness and readiness endpoints.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .. import __version__
from ..config import settings
from ..dependencies import get_store
from ..repositories.kv_store import IKeyValueStore

router = APIRouter(prefix="/api/v1", tags=["health"])


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    timestamp: str
    service: str = settings.SERVICE_NAME
    version: str = __version__


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    ready: bool
    checks: dict
    timestamp: str


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
)
async def health_check():
    """Always returns 200 OK if the service is running."""
    return HealthResponse(status="healthy", timestamp=datetime.now(timezone.utc).isoformat())


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness check",
    description="Check if the key-value store is reachable",
)
async def readiness_check(store: IKeyValueStore = Depends(get_store)):
    """Returns 200 if the store answers, 503 otherwise."""
    store_ok = await store.ping()
    response = ReadinessResponse(
        ready=store_ok,
        checks={"store": {"backend": store.backend_name, "healthy": store_ok}},
        timestamp=datetime.now(timezone.utc).isoformat(),
    )

    return JSONResponse(
        status_code=status.HTTP_200_OK if store_ok else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=response.model_dump(),
    )
