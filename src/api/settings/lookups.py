"""Lookup tables API — categories and their items."""

import uuid
from typing import List

from fastapi import APIRouter, Depends, Query, status

from src.api.settings.deps import (
    can_create,
    can_delete,
    can_read,
    can_update,
    get_settings_service,
)
from src.schemas import lookup as schemas
from src.schemas.base import DeleteResponse
from src.settings.service import SettingsService

router = APIRouter(prefix="/settings", tags=["settings: lookups"])


@router.post(
    "/lookup-categories",
    response_model=schemas.LookupCategoryResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[can_create],
)
async def create_lookup_category(
    data: schemas.LookupCategoryCreate,
    service: SettingsService = Depends(get_settings_service),
):
    return await service.create_lookup_category(data)


@router.get(
    "/lookup-categories",
    response_model=List[schemas.LookupCategoryResponse],
    dependencies=[can_read],
)
async def list_lookup_categories(
    include_inactive: bool = Query(False, alias="includeInactive"),
    service: SettingsService = Depends(get_settings_service),
):
    return await service.list_lookup_categories(include_inactive)


@router.get(
    "/lookup-categories/code/{code}",
    response_model=schemas.LookupCategoryResponse,
    dependencies=[can_read],
)
async def get_lookup_category_by_code(
    code: str,
    service: SettingsService = Depends(get_settings_service),
):
    """Category by code, with active items only."""
    return await service.get_lookup_category_by_code(code)


@router.get(
    "/lookup-categories/{category_id}",
    response_model=schemas.LookupCategoryResponse,
    dependencies=[can_read],
)
async def get_lookup_category(
    category_id: uuid.UUID,
    service: SettingsService = Depends(get_settings_service),
):
    return await service.get_lookup_category(category_id)


@router.patch(
    "/lookup-categories/{category_id}",
    response_model=schemas.LookupCategoryResponse,
    dependencies=[can_update],
)
async def update_lookup_category(
    category_id: uuid.UUID,
    data: schemas.LookupCategoryUpdate,
    service: SettingsService = Depends(get_settings_service),
):
    return await service.update_lookup_category(category_id, data)


@router.delete(
    "/lookup-categories/{category_id}",
    response_model=DeleteResponse,
    dependencies=[can_delete],
)
async def delete_lookup_category(
    category_id: uuid.UUID,
    service: SettingsService = Depends(get_settings_service),
):
    """Delete a category and its items. System categories are refused."""
    return await service.delete_lookup_category(category_id)


@router.post(
    "/lookup-categories/{category_id}/items",
    response_model=schemas.LookupItemResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[can_create],
)
async def add_lookup_item(
    category_id: uuid.UUID,
    data: schemas.LookupItemCreate,
    service: SettingsService = Depends(get_settings_service),
):
    return await service.add_lookup_item(category_id, data)


@router.patch(
    "/lookup-items/{item_id}",
    response_model=schemas.LookupItemResponse,
    dependencies=[can_update],
)
async def update_lookup_item(
    item_id: uuid.UUID,
    data: schemas.LookupItemUpdate,
    service: SettingsService = Depends(get_settings_service),
):
    return await service.update_lookup_item(item_id, data)


@router.delete(
    "/lookup-items/{item_id}",
    response_model=DeleteResponse,
    dependencies=[can_delete],
)
async def delete_lookup_item(
    item_id: uuid.UUID,
    service: SettingsService = Depends(get_settings_service),
):
    return await service.delete_lookup_item(item_id)
