"""System settings — key/value configuration with a runtime type tag."""

from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy import Boolean, Enum, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.models.base import Base, TimestampMixin, UUIDMixin
from src.models.enums import SettingType
from src.models.lookup import JSONType
from src.settings import rules


class SystemSetting(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "system_settings"

    key: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    # Always stored as text; `type` says how to read it
    value: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[SettingType] = mapped_column(
        Enum(SettingType, name="setting_type"), default=SettingType.STRING, nullable=False
    )
    category: Mapped[str] = mapped_column(String(100), default="general", index=True)

    label: Mapped[str] = mapped_column(String(255), nullable=False)
    label_ar: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    description_ar: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    is_required: Mapped[bool] = mapped_column(Boolean, default=False)
    validation_rule: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    input_type: Mapped[str] = mapped_column(String(20), default="text")
    options: Mapped[Optional[List[dict]]] = mapped_column(JSONType, nullable=True)

    is_system: Mapped[bool] = mapped_column(Boolean, default=False)
    is_public: Mapped[bool] = mapped_column(Boolean, default=False)

    @property
    def typed_value(self) -> Any:
        return rules.coerce_setting_value(self.type, self.value)

    def as_number(self) -> float:
        return rules.as_number(self.value)

    def as_bool(self) -> bool:
        return rules.as_bool(self.value)

    def as_json(self) -> Any:
        return rules.as_json(self.value)

    def as_date(self) -> datetime:
        return rules.as_date(self.value)
