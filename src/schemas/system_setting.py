"""Schemas for system settings, typed reads and bulk updates."""

import uuid
from datetime import datetime
from typing import Any, List, Optional

from pydantic import Field

from src.models.enums import SettingType
from src.schemas.base import CamelModel


class SettingOption(CamelModel):
    value: str
    label: str
    label_ar: str


class SystemSettingCreate(CamelModel):
    key: str = Field(min_length=1, max_length=100)
    value: str
    type: SettingType = SettingType.STRING
    category: str = "general"
    label: str = Field(max_length=255)
    label_ar: str = Field(max_length=255)
    description: Optional[str] = None
    description_ar: Optional[str] = None
    is_required: bool = False
    validation_rule: Optional[str] = None
    input_type: str = "text"
    options: Optional[List[SettingOption]] = None
    is_system: bool = False
    is_public: bool = False


class SystemSettingUpdate(CamelModel):
    value: str
    label: Optional[str] = Field(default=None, max_length=255)
    label_ar: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    description_ar: Optional[str] = None
    input_type: Optional[str] = None
    options: Optional[List[SettingOption]] = None


class SystemSettingResponse(CamelModel):
    id: uuid.UUID
    key: str
    value: str
    type: SettingType
    category: str
    label: str
    label_ar: str
    description: Optional[str] = None
    description_ar: Optional[str] = None
    is_required: bool
    validation_rule: Optional[str] = None
    input_type: str
    options: Optional[List[SettingOption]] = None
    is_system: bool
    is_public: bool
    created_at: datetime
    updated_at: datetime


class SettingValueResponse(CamelModel):
    key: str
    type: SettingType
    value: Any


class SettingKeyValue(CamelModel):
    key: str
    value: str


class BulkUpdateSettings(CamelModel):
    settings: List[SettingKeyValue]


class BulkUpdateResult(CamelModel):
    key: str
    success: bool
    setting: Optional[SystemSettingResponse] = None
    error: Optional[str] = None
