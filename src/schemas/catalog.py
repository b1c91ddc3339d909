"""Schemas for test types, sample types, standards and mixer types."""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from src.models.enums import ServiceCategory, StandardType
from src.schemas.base import CamelModel


# Test types

class TestTypeCreate(CamelModel):
    name: str = Field(max_length=255)
    name_ar: str = Field(max_length=255)
    description: Optional[str] = None
    description_ar: Optional[str] = None
    code: str = Field(min_length=1, max_length=50)
    category: ServiceCategory
    base_price: Optional[float] = Field(default=None, ge=0)
    is_active: bool = True
    sort_order: int = 0


class TestTypeUpdate(CamelModel):
    name: Optional[str] = Field(default=None, max_length=255)
    name_ar: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    description_ar: Optional[str] = None
    code: Optional[str] = Field(default=None, min_length=1, max_length=50)
    category: Optional[ServiceCategory] = None
    base_price: Optional[float] = Field(default=None, ge=0)
    is_active: Optional[bool] = None
    sort_order: Optional[int] = None


class TestTypeSummary(CamelModel):
    id: uuid.UUID
    name: str
    name_ar: str
    code: str
    category: ServiceCategory
    base_price: Optional[float] = None
    is_active: bool


# Sample types

class SampleTypeCreate(CamelModel):
    name: str = Field(max_length=255)
    name_ar: str = Field(max_length=255)
    description: Optional[str] = None
    description_ar: Optional[str] = None
    code: str = Field(min_length=1, max_length=50)
    test_type_id: uuid.UUID
    unit: str = "sample"
    unit_ar: str = "عينة"
    min_quantity: int = Field(default=1, ge=1)
    max_quantity: Optional[int] = Field(default=None, ge=1)
    price_per_unit: Optional[float] = Field(default=None, ge=0)
    is_active: bool = True
    sort_order: int = 0


class SampleTypeUpdate(CamelModel):
    name: Optional[str] = Field(default=None, max_length=255)
    name_ar: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    description_ar: Optional[str] = None
    code: Optional[str] = Field(default=None, min_length=1, max_length=50)
    test_type_id: Optional[uuid.UUID] = None
    unit: Optional[str] = None
    unit_ar: Optional[str] = None
    min_quantity: Optional[int] = Field(default=None, ge=1)
    max_quantity: Optional[int] = Field(default=None, ge=1)
    price_per_unit: Optional[float] = Field(default=None, ge=0)
    is_active: Optional[bool] = None
    sort_order: Optional[int] = None


class SampleTypeResponse(CamelModel):
    id: uuid.UUID
    name: str
    name_ar: str
    description: Optional[str] = None
    description_ar: Optional[str] = None
    code: str
    test_type_id: uuid.UUID
    unit: str
    unit_ar: str
    min_quantity: int
    max_quantity: Optional[int] = None
    price_per_unit: Optional[float] = None
    is_active: bool
    sort_order: int
    created_at: datetime
    updated_at: datetime


class SampleTypeDetail(SampleTypeResponse):
    test_type: Optional[TestTypeSummary] = None


# Standards

class StandardCreate(CamelModel):
    name: str = Field(max_length=100)
    name_ar: str = Field(max_length=100)
    title: str = Field(max_length=500)
    title_ar: str = Field(max_length=500)
    description: Optional[str] = None
    description_ar: Optional[str] = None
    code: str = Field(min_length=1, max_length=50)
    type: StandardType = StandardType.EGYPTIAN
    test_type_ids: Optional[List[uuid.UUID]] = None
    document_url: Optional[str] = None
    version: Optional[str] = None
    published_year: Optional[int] = None
    is_active: bool = True
    sort_order: int = 0


class StandardUpdate(CamelModel):
    name: Optional[str] = Field(default=None, max_length=100)
    name_ar: Optional[str] = Field(default=None, max_length=100)
    title: Optional[str] = Field(default=None, max_length=500)
    title_ar: Optional[str] = Field(default=None, max_length=500)
    description: Optional[str] = None
    description_ar: Optional[str] = None
    code: Optional[str] = Field(default=None, min_length=1, max_length=50)
    type: Optional[StandardType] = None
    # None leaves links untouched, [] clears them
    test_type_ids: Optional[List[uuid.UUID]] = None
    document_url: Optional[str] = None
    version: Optional[str] = None
    published_year: Optional[int] = None
    is_active: Optional[bool] = None
    sort_order: Optional[int] = None


class StandardResponse(CamelModel):
    id: uuid.UUID
    name: str
    name_ar: str
    title: str
    title_ar: str
    description: Optional[str] = None
    description_ar: Optional[str] = None
    code: str
    type: StandardType
    document_url: Optional[str] = None
    version: Optional[str] = None
    published_year: Optional[int] = None
    is_active: bool
    sort_order: int
    created_at: datetime
    updated_at: datetime


class StandardDetail(StandardResponse):
    test_types: List[TestTypeSummary] = []


class TestTypeResponse(CamelModel):
    id: uuid.UUID
    name: str
    name_ar: str
    description: Optional[str] = None
    description_ar: Optional[str] = None
    code: str
    category: ServiceCategory
    base_price: Optional[float] = None
    is_active: bool
    sort_order: int
    created_at: datetime
    updated_at: datetime
    samples: List[SampleTypeResponse] = []
    standards: List[StandardResponse] = []


# Mixer types

class MixerTypeCreate(CamelModel):
    name: str = Field(max_length=255)
    name_ar: str = Field(max_length=255)
    description: Optional[str] = None
    description_ar: Optional[str] = None
    code: str = Field(min_length=1, max_length=50)
    capacity: Optional[float] = Field(default=None, ge=0)
    capacity_unit: str = "m³"
    capacity_unit_ar: str = "م³"
    price_per_batch: Optional[float] = Field(default=None, ge=0)
    is_active: bool = True
    sort_order: int = 0


class MixerTypeUpdate(CamelModel):
    name: Optional[str] = Field(default=None, max_length=255)
    name_ar: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    description_ar: Optional[str] = None
    code: Optional[str] = Field(default=None, min_length=1, max_length=50)
    capacity: Optional[float] = Field(default=None, ge=0)
    capacity_unit: Optional[str] = None
    capacity_unit_ar: Optional[str] = None
    price_per_batch: Optional[float] = Field(default=None, ge=0)
    is_active: Optional[bool] = None
    sort_order: Optional[int] = None


class MixerTypeResponse(CamelModel):
    id: uuid.UUID
    name: str
    name_ar: str
    description: Optional[str] = None
    description_ar: Optional[str] = None
    code: str
    capacity: Optional[float] = None
    capacity_unit: str
    capacity_unit_ar: str
    price_per_batch: Optional[float] = None
    is_active: bool
    sort_order: int
    created_at: datetime
    updated_at: datetime
