"""
Apps router.

Endpoints for the app catalog, custom apps and visibility settings.
"""

from fastapi import APIRouter, Depends, Query, status

from ..dependencies import get_history_service
from ..services.history_service import ProfileHistoryService
from ..validators import (
    AppListResponse,
    AppModel,
    AppSettingModel,
    AppSettingsPayload,
    MessageResponse,
)

router = APIRouter(prefix="/api/v1/apps", tags=["apps"])


@router.get("", response_model=AppListResponse, summary="List apps")
async def list_apps(
    include_hidden: bool = Query(False, description="Ignore visibility settings"),
    service: ProfileHistoryService = Depends(get_history_service),
):
    apps = await service.list_apps(include_hidden=include_hidden)
    return AppListResponse(count=len(apps), apps=[AppModel.from_entity(a) for a in apps])


@router.post(
    "",
    response_model=AppModel,
    status_code=status.HTTP_201_CREATED,
    summary="Add custom app",
)
async def add_app(
    request: AppModel,
    service: ProfileHistoryService = Depends(get_history_service),
):
    app = await service.add_custom_app(request.to_entity())
    return AppModel.from_entity(app)


@router.get("/settings", response_model=AppSettingsPayload, summary="Visibility settings")
async def get_settings(service: ProfileHistoryService = Depends(get_history_service)):
    settings = await service.get_app_settings()
    return AppSettingsPayload(settings=[AppSettingModel.from_entity(s) for s in settings])


@router.put("/settings", response_model=AppSettingsPayload, summary="Replace settings")
async def update_settings(
    request: AppSettingsPayload,
    service: ProfileHistoryService = Depends(get_history_service),
):
    await service.update_app_settings([s.to_entity() for s in request.settings])
    return request


@router.patch("/settings/{value}", response_model=AppSettingModel, summary="Show or hide app")
async def set_visibility(
    value: str,
    visible: bool = Query(..., description="Whether the app is listed"),
    service: ProfileHistoryService = Depends(get_history_service),
):
    setting = await service.set_app_visibility(value, visible)
    return AppSettingModel.from_entity(setting)


@router.delete("/{value}", response_model=MessageResponse, summary="Remove custom app")
async def remove_app(
    value: str,
    service: ProfileHistoryService = Depends(get_history_service),
):
    await service.remove_custom_app(value)
    return MessageResponse(message=f"Removed custom app '{value}'")
