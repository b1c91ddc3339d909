"""Schemas for lookup categories and their items."""

import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, Field

from src.schemas.base import CamelModel


class LookupItemCreate(CamelModel):
    name: str = Field(max_length=255)
    name_ar: str = Field(max_length=255)
    description: Optional[str] = None
    description_ar: Optional[str] = None
    code: str = Field(min_length=1, max_length=50)
    value: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    extra_data: Optional[Dict[str, Any]] = Field(default=None, alias="metadata")
    is_active: bool = True
    is_default: bool = False
    sort_order: int = 0


class LookupItemUpdate(CamelModel):
    name: Optional[str] = Field(default=None, max_length=255)
    name_ar: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    description_ar: Optional[str] = None
    code: Optional[str] = Field(default=None, min_length=1, max_length=50)
    value: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    extra_data: Optional[Dict[str, Any]] = Field(default=None, alias="metadata")
    is_active: Optional[bool] = None
    is_default: Optional[bool] = None
    sort_order: Optional[int] = None


class LookupItemResponse(CamelModel):
    id: uuid.UUID
    category_id: uuid.UUID
    name: str
    name_ar: str
    description: Optional[str] = None
    description_ar: Optional[str] = None
    code: str
    value: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    # ORM attribute is extra_data; `metadata` on the class is SQLAlchemy's MetaData
    extra_data: Optional[Dict[str, Any]] = Field(
        default=None,
        validation_alias=AliasChoices("extra_data", "metadata"),
        serialization_alias="metadata",
    )
    is_active: bool
    is_default: bool
    sort_order: int
    created_at: datetime
    updated_at: datetime


class LookupCategoryCreate(CamelModel):
    name: str = Field(max_length=255)
    name_ar: str = Field(max_length=255)
    description: Optional[str] = None
    description_ar: Optional[str] = None
    code: str = Field(min_length=1, max_length=50)
    is_active: bool = True
    is_system: bool = False
    items: Optional[List[LookupItemCreate]] = None


class LookupCategoryUpdate(CamelModel):
    """Partial update. Items are managed through the item endpoints."""

    name: Optional[str] = Field(default=None, max_length=255)
    name_ar: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    description_ar: Optional[str] = None
    code: Optional[str] = Field(default=None, min_length=1, max_length=50)
    is_active: Optional[bool] = None
    is_system: Optional[bool] = None


class LookupCategoryResponse(CamelModel):
    id: uuid.UUID
    name: str
    name_ar: str
    description: Optional[str] = None
    description_ar: Optional[str] = None
    code: str
    is_active: bool
    is_system: bool
    items: List[LookupItemResponse] = []
    created_at: datetime
    updated_at: datetime
