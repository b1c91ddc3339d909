"""Price lists, their items and distance-rate bands."""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    Uuid,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.models.base import Base, TimestampMixin, UUIDMixin, utcnow
from src.models.enums import ServiceCategory


class PriceList(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "price_lists"
    __table_args__ = (
        # One default list per service category
        Index(
            "uq_price_lists_default_category",
            "category",
            unique=True,
            postgresql_where=text("is_default"),
            sqlite_where=text("is_default = 1"),
        ),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    name_ar: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    description_ar: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    category: Mapped[ServiceCategory] = mapped_column(
        Enum(ServiceCategory, name="service_category"), nullable=False, index=True
    )

    valid_from: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    valid_to: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False)

    items: Mapped[List["PriceListItem"]] = relationship(
        back_populates="price_list",
        order_by="[PriceListItem.sort_order, PriceListItem.name]",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class PriceListItem(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "price_list_items"
    __table_args__ = (
        UniqueConstraint("price_list_id", "code", name="uq_price_list_items_list_code"),
    )

    price_list_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("price_lists.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    name_ar: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    description_ar: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    code: Mapped[str] = mapped_column(String(50), nullable=False)

    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    unit: Mapped[str] = mapped_column(String(50), default="unit")
    unit_ar: Mapped[str] = mapped_column(String(50), default="وحدة")
    min_quantity: Mapped[int] = mapped_column(Integer, default=1)
    max_quantity: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    sort_order: Mapped[int] = mapped_column(Integer, default=0)

    price_list: Mapped["PriceList"] = relationship(back_populates="items")


class DistanceRate(Base, UUIDMixin, TimestampMixin):
    """Transport rate for the half-open band [from_km, to_km)."""

    __tablename__ = "distance_rates"

    from_km: Mapped[int] = mapped_column(Integer, nullable=False)
    to_km: Mapped[int] = mapped_column(Integer, nullable=False)

    rate: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    rate_per_km: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    description_ar: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)
    sort_order: Mapped[int] = mapped_column(Integer, default=0)
