"""Test catalog — test types, their sample types and the standards they follow."""

import uuid
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import (
    Boolean,
    Column,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Table,
    Text,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.models.base import Base, TimestampMixin, UUIDMixin
from src.models.enums import ServiceCategory, StandardType

test_type_standards = Table(
    "test_type_standards",
    Base.metadata,
    Column(
        "test_type_id",
        Uuid(as_uuid=True),
        ForeignKey("test_types.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "standard_id",
        Uuid(as_uuid=True),
        ForeignKey("standards.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class TestType(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "test_types"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    name_ar: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    description_ar: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    category: Mapped[ServiceCategory] = mapped_column(
        Enum(ServiceCategory, name="service_category"), nullable=False, index=True
    )
    base_price: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)
    sort_order: Mapped[int] = mapped_column(Integer, default=0)

    # Relationships
    samples: Mapped[List["SampleType"]] = relationship(
        back_populates="test_type",
        order_by="[SampleType.sort_order, SampleType.name]",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    standards: Mapped[List["Standard"]] = relationship(
        secondary=test_type_standards,
        back_populates="test_types",
        order_by="[Standard.sort_order, Standard.name]",
    )


class SampleType(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "sample_types"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    name_ar: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    description_ar: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    test_type_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("test_types.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    unit: Mapped[str] = mapped_column(String(50), default="sample")
    unit_ar: Mapped[str] = mapped_column(String(50), default="عينة")
    min_quantity: Mapped[int] = mapped_column(Integer, default=1)
    max_quantity: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    price_per_unit: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)
    sort_order: Mapped[int] = mapped_column(Integer, default=0)

    test_type: Mapped["TestType"] = relationship(back_populates="samples")


class Standard(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "standards"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    name_ar: Mapped[str] = mapped_column(String(100), nullable=False)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    title_ar: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    description_ar: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    type: Mapped[StandardType] = mapped_column(
        Enum(StandardType, name="standard_type"),
        default=StandardType.EGYPTIAN,
        nullable=False,
        index=True,
    )

    document_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    version: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    published_year: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)
    sort_order: Mapped[int] = mapped_column(Integer, default=0)

    test_types: Mapped[List["TestType"]] = relationship(
        secondary=test_type_standards, back_populates="standards"
    )


class MixerType(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "mixer_types"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    name_ar: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    description_ar: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)

    capacity: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)
    capacity_unit: Mapped[str] = mapped_column(String(20), default="m³")
    capacity_unit_ar: Mapped[str] = mapped_column(String(20), default="م³")
    price_per_batch: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)
    sort_order: Mapped[int] = mapped_column(Integer, default=0)
