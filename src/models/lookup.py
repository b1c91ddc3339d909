"""Lookup tables — generic option lists (payment terms, units, ...)."""

import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import (
    JSON,
    Boolean,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
    text,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.models.base import Base, TimestampMixin, UUIDMixin

JSONType = JSON().with_variant(JSONB(), "postgresql")


class LookupCategory(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "lookup_categories"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    name_ar: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    description_ar: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    # Platform-owned: cannot be deleted or deactivated
    is_system: Mapped[bool] = mapped_column(Boolean, default=False)

    items: Mapped[List["LookupItem"]] = relationship(
        back_populates="category",
        order_by="[LookupItem.sort_order, LookupItem.name]",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class LookupItem(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "lookup_items"
    __table_args__ = (
        UniqueConstraint("category_id", "code", name="uq_lookup_items_category_code"),
        Index(
            "uq_lookup_items_default_category",
            "category_id",
            unique=True,
            postgresql_where=text("is_default"),
            sqlite_where=text("is_default = 1"),
        ),
    )

    category_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("lookup_categories.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    name_ar: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    description_ar: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    code: Mapped[str] = mapped_column(String(50), nullable=False)

    value: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    icon: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    color: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    # "metadata" is reserved on declarative classes
    extra_data: Mapped[Optional[Dict[str, Any]]] = mapped_column(
        "metadata", JSONType, nullable=True
    )

    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False)
    sort_order: Mapped[int] = mapped_column(Integer, default=0)

    category: Mapped["LookupCategory"] = relationship(back_populates="items")
