"""SQLAlchemy ORM models."""

from src.models.base import Base
from src.models.catalog import MixerType, SampleType, Standard, TestType
from src.models.pricing import DistanceRate, PriceList, PriceListItem
from src.models.lookup import LookupCategory, LookupItem
from src.models.system_setting import SystemSetting

__all__ = [
    "Base",
    "TestType",
    "SampleType",
    "Standard",
    "MixerType",
    "PriceList",
    "PriceListItem",
    "DistanceRate",
    "LookupCategory",
    "LookupItem",
    "SystemSetting",
]
