"""
Main FastAPI application.

This file wires together all layers:
- Domain: Records, pair keys and pure queries
- Repositories: Key-value store backends and typed repositories
- Services: History orchestration and the history command
- Routers: HTTP endpoints
"""

import time
from contextlib import asynccontextmanager
from typing import Optional

import redis.asyncio as redis
import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .config import Settings, settings
from .dependencies import set_history_service, set_store
from .domain.exceptions import (
    AppNotFoundException,
    CorruptedDataException,
    DuplicateAppException,
    ProfileHistoryException,
    StorageException,
    ValidationException,
)
from .logging_config import configure_logging
from .metrics import http_request_duration_seconds, http_requests_total, metrics_endpoint
from .repositories.app_repository import AppRepository
from .repositories.file_store import FileKeyValueStore
from .repositories.history_repository import UsageHistoryRepository
from .repositories.kv_store import IKeyValueStore
from .repositories.memory_store import MemoryKeyValueStore
from .repositories.redis_store import RedisKeyValueStore
from .repositories.starred_repository import StarredHistoryRepository
from .routers import apps_router, health_router, history_router
from .services.history_service import ProfileHistoryService

configure_logging(log_level=settings.LOG_LEVEL, use_json=settings.LOG_JSON)

logger = structlog.get_logger(__name__)

# Global state
store: Optional[IKeyValueStore] = None


def create_store(config: Settings) -> IKeyValueStore:
    """
    Create the key-value store selected by configuration.

    Args:
        config: Application settings

    Returns:
        Store instance for the configured backend
    """
    if config.STORE_BACKEND == "redis":
        client = redis.from_url(config.REDIS_URL, encoding="utf-8", decode_responses=True)
        return RedisKeyValueStore(client, key_prefix=config.REDIS_KEY_PREFIX)
    if config.STORE_BACKEND == "file":
        return FileKeyValueStore(config.STORE_FILE_PATH)
    return MemoryKeyValueStore()


def create_history_service(kv_store: IKeyValueStore, config: Settings) -> ProfileHistoryService:
    """
    Create and configure the history service with all repositories.

    Args:
        kv_store: Store shared by all repositories
        config: Application settings
    """
    return ProfileHistoryService(
        history_repo=UsageHistoryRepository(kv_store, max_items=config.HISTORY_MAX_ITEMS),
        starred_repo=StarredHistoryRepository(kv_store),
        app_repo=AppRepository(kv_store),
        default_limit=config.DEFAULT_QUERY_LIMIT,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    global store

    logger.info("Starting Profile History Service", version=__version__)

    store = create_store(settings)
    if not await store.ping():
        logger.warning("Key-value store not reachable at startup", backend=store.backend_name)

    set_store(store)
    set_history_service(create_history_service(store, settings))
    logger.info("Profile history service initialized", backend=store.backend_name)

    yield

    logger.info("Shutting down Profile History Service...")
    set_history_service(None)
    set_store(None)
    await store.close()
    logger.info("Profile History Service shut down complete")


app = FastAPI(
    title="Profile History Service",
    description="Recently used and starred launcher profiles",
    version=__version__,
    lifespan=lifespan,
    docs_url="/api/docs" if settings.DEBUG else None,
    redoc_url="/api/redoc" if settings.DEBUG else None,
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


# Request ID middleware
@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add request ID for tracing."""
    request_id = request.headers.get("X-Request-ID", f"req-{id(request)}")

    structlog.contextvars.bind_contextvars(request_id=request_id)
    try:
        response = await call_next(request)
    finally:
        structlog.contextvars.clear_contextvars()

    response.headers["X-Request-ID"] = request_id
    return response


# Metrics middleware
@app.middleware("http")
async def track_metrics(request: Request, call_next):
    """Track Prometheus metrics."""
    start_time = time.time()

    response = await call_next(request)

    duration = time.time() - start_time
    route = request.scope.get("route")
    endpoint = getattr(route, "path", request.url.path)
    http_requests_total.labels(
        method=request.method, endpoint=endpoint, status=response.status_code
    ).inc()
    http_request_duration_seconds.labels(method=request.method, endpoint=endpoint).observe(
        duration
    )

    return response


app.include_router(health_router.router)
app.include_router(history_router.router)
app.include_router(apps_router.router)


@app.get("/metrics", include_in_schema=False)
async def metrics():
    """Prometheus metrics endpoint."""
    return await metrics_endpoint()


@app.get("/")
async def root():
    """Root endpoint with service information."""
    return {
        "service": "Profile History Service",
        "version": __version__,
        "status": "operational",
        "health": "/api/v1/health",
        "ready": "/api/v1/ready",
    }


def _error_response(status_code: int, error: str, exc: ProfileHistoryException, request: Request):
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": error,
            "message": exc.message,
            "details": exc.details,
            "request_id": request.headers.get("X-Request-ID"),
        },
    )


@app.exception_handler(ProfileHistoryException)
async def domain_exception_handler(request: Request, exc: ProfileHistoryException):
    """Map domain exceptions to HTTP responses."""
    if isinstance(exc, ValidationException):
        return _error_response(422, "validation_error", exc, request)
    if isinstance(exc, AppNotFoundException):
        return _error_response(status.HTTP_404_NOT_FOUND, "not_found", exc, request)
    if isinstance(exc, DuplicateAppException):
        return _error_response(status.HTTP_409_CONFLICT, "conflict", exc, request)
    if isinstance(exc, (StorageException, CorruptedDataException)):
        logger.error("Storage failure", path=request.url.path, error=exc.message)
        return _error_response(
            status.HTTP_503_SERVICE_UNAVAILABLE, "storage_unavailable", exc, request
        )
    return _error_response(status.HTTP_400_BAD_REQUEST, "bad_request", exc, request)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all unhandled exceptions."""
    logger.error(
        "Unhandled exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        exc_info=True,
    )

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "internal_server_error",
            "message": "An unexpected error occurred",
            "request_id": request.headers.get("X-Request-ID"),
        },
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("profile_history.app:app", host="0.0.0.0", port=8000, log_level="info")
