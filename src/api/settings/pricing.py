"""Pricing API — price lists, their items and distance-rate bands."""

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from src.api.settings.deps import (
    can_create,
    can_delete,
    can_read,
    can_update,
    get_settings_service,
)
from src.models.enums import ServiceCategory
from src.schemas import pricing as schemas
from src.schemas.base import DeleteResponse
from src.settings.service import SettingsService

router = APIRouter(prefix="/settings", tags=["settings: pricing"])


# Price lists

@router.post(
    "/price-lists",
    response_model=schemas.PriceListResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[can_create],
)
async def create_price_list(
    data: schemas.PriceListCreate,
    service: SettingsService = Depends(get_settings_service),
):
    """Create a price list with optional nested items.

    A list created as default replaces the current default of its category.
    """
    return await service.create_price_list(data)


@router.get(
    "/price-lists",
    response_model=List[schemas.PriceListResponse],
    dependencies=[can_read],
)
async def list_price_lists(
    category: Optional[ServiceCategory] = Query(None),
    include_inactive: bool = Query(False, alias="includeInactive"),
    service: SettingsService = Depends(get_settings_service),
):
    return await service.list_price_lists(category, include_inactive)


@router.get(
    "/price-lists/{price_list_id}",
    response_model=schemas.PriceListResponse,
    dependencies=[can_read],
)
async def get_price_list(
    price_list_id: uuid.UUID,
    service: SettingsService = Depends(get_settings_service),
):
    return await service.get_price_list(price_list_id)


@router.patch(
    "/price-lists/{price_list_id}",
    response_model=schemas.PriceListResponse,
    dependencies=[can_update],
)
async def update_price_list(
    price_list_id: uuid.UUID,
    data: schemas.PriceListUpdate,
    service: SettingsService = Depends(get_settings_service),
):
    return await service.update_price_list(price_list_id, data)


@router.delete(
    "/price-lists/{price_list_id}",
    response_model=DeleteResponse,
    dependencies=[can_delete],
)
async def delete_price_list(
    price_list_id: uuid.UUID,
    service: SettingsService = Depends(get_settings_service),
):
    return await service.delete_price_list(price_list_id)


@router.post(
    "/price-lists/{price_list_id}/items",
    response_model=schemas.PriceListItemResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[can_create],
)
async def add_price_list_item(
    price_list_id: uuid.UUID,
    data: schemas.PriceListItemCreate,
    service: SettingsService = Depends(get_settings_service),
):
    return await service.add_price_list_item(price_list_id, data)


@router.patch(
    "/price-list-items/{item_id}",
    response_model=schemas.PriceListItemResponse,
    dependencies=[can_update],
)
async def update_price_list_item(
    item_id: uuid.UUID,
    data: schemas.PriceListItemUpdate,
    service: SettingsService = Depends(get_settings_service),
):
    return await service.update_price_list_item(item_id, data)


@router.delete(
    "/price-list-items/{item_id}",
    response_model=DeleteResponse,
    dependencies=[can_delete],
)
async def delete_price_list_item(
    item_id: uuid.UUID,
    service: SettingsService = Depends(get_settings_service),
):
    return await service.delete_price_list_item(item_id)


# Distance rates

@router.post(
    "/distance-rates",
    response_model=schemas.DistanceRateResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[can_create],
)
async def create_distance_rate(
    data: schemas.DistanceRateCreate,
    service: SettingsService = Depends(get_settings_service),
):
    return await service.create_distance_rate(data)


@router.get(
    "/distance-rates",
    response_model=List[schemas.DistanceRateResponse],
    dependencies=[can_read],
)
async def list_distance_rates(
    include_inactive: bool = Query(False, alias="includeInactive"),
    service: SettingsService = Depends(get_settings_service),
):
    return await service.list_distance_rates(include_inactive)


# Registered before /distance-rates/{rate_id}
@router.get(
    "/distance-rates/lookup",
    response_model=schemas.DistanceRateResponse,
    dependencies=[can_read],
)
async def rate_for_distance(
    km: float = Query(..., ge=0),
    service: SettingsService = Depends(get_settings_service),
):
    """Active band covering ``km``; a band covers [fromKm, toKm)."""
    return await service.rate_for_distance(km)


@router.get(
    "/distance-rates/{rate_id}",
    response_model=schemas.DistanceRateResponse,
    dependencies=[can_read],
)
async def get_distance_rate(
    rate_id: uuid.UUID,
    service: SettingsService = Depends(get_settings_service),
):
    return await service.get_distance_rate(rate_id)


@router.patch(
    "/distance-rates/{rate_id}",
    response_model=schemas.DistanceRateResponse,
    dependencies=[can_update],
)
async def update_distance_rate(
    rate_id: uuid.UUID,
    data: schemas.DistanceRateUpdate,
    service: SettingsService = Depends(get_settings_service),
):
    return await service.update_distance_rate(rate_id, data)


@router.delete(
    "/distance-rates/{rate_id}",
    response_model=DeleteResponse,
    dependencies=[can_delete],
)
async def delete_distance_rate(
    rate_id: uuid.UUID,
    service: SettingsService = Depends(get_settings_service),
):
    return await service.delete_distance_rate(rate_id)
