"""Schemas for price lists, price list items and distance rates."""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from src.models.enums import ServiceCategory
from src.schemas.base import CamelModel


class PriceListItemCreate(CamelModel):
    name: str = Field(max_length=255)
    name_ar: str = Field(max_length=255)
    description: Optional[str] = None
    description_ar: Optional[str] = None
    code: str = Field(min_length=1, max_length=50)
    price: float = Field(ge=0)
    unit: str = "unit"
    unit_ar: str = "وحدة"
    min_quantity: int = Field(default=1, ge=1)
    max_quantity: Optional[int] = Field(default=None, ge=1)
    is_active: bool = True
    sort_order: int = 0


class PriceListItemUpdate(CamelModel):
    name: Optional[str] = Field(default=None, max_length=255)
    name_ar: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    description_ar: Optional[str] = None
    code: Optional[str] = Field(default=None, min_length=1, max_length=50)
    price: Optional[float] = Field(default=None, ge=0)
    unit: Optional[str] = None
    unit_ar: Optional[str] = None
    min_quantity: Optional[int] = Field(default=None, ge=1)
    max_quantity: Optional[int] = Field(default=None, ge=1)
    is_active: Optional[bool] = None
    sort_order: Optional[int] = None


class PriceListItemResponse(CamelModel):
    id: uuid.UUID
    price_list_id: uuid.UUID
    name: str
    name_ar: str
    description: Optional[str] = None
    description_ar: Optional[str] = None
    code: str
    price: float
    unit: str
    unit_ar: str
    min_quantity: int
    max_quantity: Optional[int] = None
    is_active: bool
    sort_order: int
    created_at: datetime
    updated_at: datetime


class PriceListCreate(CamelModel):
    name: str = Field(max_length=255)
    name_ar: str = Field(max_length=255)
    description: Optional[str] = None
    description_ar: Optional[str] = None
    code: str = Field(min_length=1, max_length=50)
    category: ServiceCategory
    valid_from: Optional[datetime] = None
    valid_to: Optional[datetime] = None
    is_active: bool = True
    is_default: bool = False
    items: Optional[List[PriceListItemCreate]] = None


class PriceListUpdate(CamelModel):
    """Partial update. Items are managed through the item endpoints."""

    name: Optional[str] = Field(default=None, max_length=255)
    name_ar: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    description_ar: Optional[str] = None
    code: Optional[str] = Field(default=None, min_length=1, max_length=50)
    category: Optional[ServiceCategory] = None
    valid_from: Optional[datetime] = None
    valid_to: Optional[datetime] = None
    is_active: Optional[bool] = None
    is_default: Optional[bool] = None


class PriceListResponse(CamelModel):
    id: uuid.UUID
    name: str
    name_ar: str
    description: Optional[str] = None
    description_ar: Optional[str] = None
    code: str
    category: ServiceCategory
    valid_from: datetime
    valid_to: Optional[datetime] = None
    is_active: bool
    is_default: bool
    items: List[PriceListItemResponse] = []
    created_at: datetime
    updated_at: datetime


class DistanceRateCreate(CamelModel):
    from_km: int = Field(ge=0)
    to_km: int = Field(ge=0)
    rate: float = Field(ge=0)
    rate_per_km: Optional[float] = Field(default=None, ge=0)
    description: Optional[str] = None
    description_ar: Optional[str] = None
    is_active: bool = True
    sort_order: int = 0


class DistanceRateUpdate(CamelModel):
    from_km: Optional[int] = Field(default=None, ge=0)
    to_km: Optional[int] = Field(default=None, ge=0)
    rate: Optional[float] = Field(default=None, ge=0)
    rate_per_km: Optional[float] = Field(default=None, ge=0)
    description: Optional[str] = None
    description_ar: Optional[str] = None
    is_active: Optional[bool] = None
    sort_order: Optional[int] = None


class DistanceRateResponse(CamelModel):
    id: uuid.UUID
    from_km: int
    to_km: int
    rate: float
    rate_per_km: Optional[float] = None
    description: Optional[str] = None
    description_ar: Optional[str] = None
    is_active: bool
    sort_order: int
    created_at: datetime
    updated_at: datetime
