"""System settings API."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from src.api.settings.deps import (
    can_create,
    can_delete,
    can_read,
    can_update,
    get_settings_service,
)
from src.schemas import system_setting as schemas
from src.schemas.base import DeleteResponse
from src.settings.service import SettingsService

router = APIRouter(prefix="/settings", tags=["settings: system"])


@router.post(
    "/system",
    response_model=schemas.SystemSettingResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[can_create],
)
async def create_system_setting(
    data: schemas.SystemSettingCreate,
    service: SettingsService = Depends(get_settings_service),
):
    return await service.create_system_setting(data)


@router.get(
    "/system",
    response_model=List[schemas.SystemSettingResponse],
    dependencies=[can_read],
)
async def list_system_settings(
    category: Optional[str] = Query(None),
    include_system: bool = Query(True, alias="includeSystem"),
    service: SettingsService = Depends(get_settings_service),
):
    return await service.list_system_settings(category, include_system)


@router.patch(
    "/system",
    response_model=List[schemas.BulkUpdateResult],
    dependencies=[can_update],
)
async def bulk_update_settings(
    data: schemas.BulkUpdateSettings,
    service: SettingsService = Depends(get_settings_service),
):
    """Update several values at once.

    Returns one result per key in request order; failed keys do not roll
    back the ones that succeeded.
    """
    return await service.bulk_update_settings(data.settings)


# No token required
@router.get("/system/public", response_model=List[schemas.SystemSettingResponse])
async def list_public_settings(
    service: SettingsService = Depends(get_settings_service),
):
    return await service.list_public_settings()


@router.get(
    "/system/{key}",
    response_model=schemas.SystemSettingResponse,
    dependencies=[can_read],
)
async def get_system_setting(
    key: str,
    service: SettingsService = Depends(get_settings_service),
):
    return await service.get_system_setting(key)


@router.get(
    "/system/{key}/value",
    response_model=schemas.SettingValueResponse,
    dependencies=[can_read],
)
async def get_setting_value(
    key: str,
    service: SettingsService = Depends(get_settings_service),
):
    """Setting value converted to its declared type."""
    setting = await service.get_system_setting(key)
    return schemas.SettingValueResponse(
        key=setting.key,
        type=setting.type,
        value=await service.get_setting_value(key),
    )


@router.patch(
    "/system/{key}",
    response_model=schemas.SystemSettingResponse,
    dependencies=[can_update],
)
async def update_system_setting(
    key: str,
    data: schemas.SystemSettingUpdate,
    service: SettingsService = Depends(get_settings_service),
):
    return await service.update_system_setting(key, data)


@router.delete(
    "/system/{key}",
    response_model=DeleteResponse,
    dependencies=[can_delete],
)
async def delete_system_setting(
    key: str,
    service: SettingsService = Depends(get_settings_service),
):
    """Delete a setting. System settings are refused."""
    return await service.delete_system_setting(key)
