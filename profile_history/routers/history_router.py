"""
History router.

Endpoints for recently opened profiles, starred pairs and the history
command.
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Query, status

from ..dependencies import get_history_service
from ..services.history_service import ProfileHistoryService
from ..services.history_tool import HistoryTool, HistoryToolArgs
from ..validators import (
    HistoryListResponse,
    HistoryToolResponse,
    MessageResponse,
    RecordOpenRequest,
    RenameProfileRequest,
    StarToggleRequest,
    StarToggleResponse,
    UsageHistoryItemModel,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/v1", tags=["history"])


@router.get("/history", response_model=HistoryListResponse, summary="Recent profiles")
async def list_history(
    app: Optional[str] = Query(None, max_length=50, description="App value or name filter"),
    limit: Optional[int] = Query(None, ge=0, le=200, description="Maximum results"),
    service: ProfileHistoryService = Depends(get_history_service),
):
    """Recently opened profiles, newest first."""
    items = await service.get_recent_profiles(app=app, limit=limit)
    return HistoryListResponse.from_items(items)


@router.post(
    "/history",
    response_model=UsageHistoryItemModel,
    status_code=status.HTTP_201_CREATED,
    summary="Record opened profile",
)
async def record_history(
    request: RecordOpenRequest,
    service: ProfileHistoryService = Depends(get_history_service),
):
    item = await service.record_profile_open(request.profile, request.app, request.app_name)
    return UsageHistoryItemModel.from_entity(item)


@router.patch("/history", response_model=MessageResponse, summary="Rename profile")
async def rename_history_item(
    request: RenameProfileRequest,
    service: ProfileHistoryService = Depends(get_history_service),
):
    updated = await service.rename_profile(request.old_profile, request.app, request.new_profile)
    message = "Profile renamed" if updated else "No matching history entry"
    return MessageResponse(success=updated, message=message)


@router.delete("/history/all", response_model=MessageResponse, summary="Clear history")
async def clear_history(service: ProfileHistoryService = Depends(get_history_service)):
    await service.clear_history()
    logger.info("History cleared via API")
    return MessageResponse(message="History cleared")


@router.delete("/history", response_model=MessageResponse, summary="Forget profile")
async def delete_history_item(
    profile: str = Query(..., min_length=1, max_length=100),
    app: str = Query(..., min_length=1, max_length=50),
    service: ProfileHistoryService = Depends(get_history_service),
):
    removed = await service.forget_profile(profile, app)
    message = "History entry removed" if removed else "No matching history entry"
    return MessageResponse(success=removed, message=message)


@router.get("/starred", response_model=HistoryListResponse, summary="Starred profiles")
async def list_starred(
    app: Optional[str] = Query(None, max_length=50),
    limit: Optional[int] = Query(None, ge=0, le=200),
    service: ProfileHistoryService = Depends(get_history_service),
):
    items = await service.get_starred_profiles(app=app, limit=limit)
    return HistoryListResponse.from_items(items)


@router.post("/starred/toggle", response_model=StarToggleResponse, summary="Toggle star")
async def toggle_starred(
    request: StarToggleRequest,
    service: ProfileHistoryService = Depends(get_history_service),
):
    starred = await service.toggle_star(request.profile, request.app)
    return StarToggleResponse(profile=request.profile, app=request.app, starred=starred)


@router.delete("/starred", response_model=MessageResponse, summary="Clear starred")
async def clear_starred(service: ProfileHistoryService = Depends(get_history_service)):
    await service.clear_starred()
    return MessageResponse(message="Starred profiles cleared")


@router.post("/tool/history", response_model=HistoryToolResponse, summary="History command")
async def run_history_tool(
    args: HistoryToolArgs,
    service: ProfileHistoryService = Depends(get_history_service),
):
    """Run the launcher history command and return its result."""
    result = await HistoryTool(service).run(args)
    return HistoryToolResponse(
        success=result.success,
        message=result.message,
        items=[UsageHistoryItemModel.from_entity(item) for item in result.items],
    )
