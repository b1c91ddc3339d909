"""Settings service — CRUD for the settings tables plus the rules around it.

Each public method is one unit of work: checks and writes go through the
same session and are committed once at the end. The rules applied here:

* natural keys (``code`` / ``key``) are unique, globally or per parent;
* sample types and standards must point at existing test types;
* active distance bands never overlap;
* at most one default price list per category and one default lookup item
  per category;
* system lookup categories and system settings are protected;
* setting values must match their ``validation_rule``.
"""

from __future__ import annotations

import json
import uuid
from decimal import Decimal
from typing import Any, Iterable, List, Optional, Sequence

import structlog
from sqlalchemy import inspect as sa_inspect
from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.errors import BadRequestError, ConflictError, NotFoundError, SettingsError
from src.models.catalog import MixerType, SampleType, Standard, TestType
from src.models.enums import ServiceCategory, StandardType
from src.models.lookup import LookupCategory, LookupItem
from src.models.pricing import DistanceRate, PriceList, PriceListItem
from src.models.system_setting import SystemSetting
from src.schemas import catalog, lookup, pricing
from src.schemas import system_setting as setting_schemas
from src.settings import rules

logger = structlog.get_logger()

_MISSING: Any = object()


def _decimal(value: Optional[float]) -> Optional[Decimal]:
    return None if value is None else Decimal(str(value))


def _to_decimals(changes: dict, *fields: str) -> dict:
    for field in fields:
        if field in changes:
            changes[field] = _decimal(changes[field])
    return changes


def _deleted(message: str, message_ar: str) -> dict:
    return {"message": message, "message_ar": message_ar}


def _apply_changes(obj: Any, changes: dict) -> None:
    """Copy a partial update onto a row. A null for a NOT NULL column is ignored."""
    columns = sa_inspect(type(obj)).columns
    for field, value in changes.items():
        if value is None and field in columns and not columns[field].nullable:
            continue
        setattr(obj, field, value)


class SettingsService:
    """Manages test catalog, pricing, lookup tables and system settings."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ------------------------------------------------------------------
    # Shared checks
    # ------------------------------------------------------------------

    async def _ensure_unique(
        self,
        model: Any,
        column: Any,
        value: Any,
        message: str,
        message_ar: str,
        exclude_id: Optional[uuid.UUID] = None,
        scope: Any = None,
    ) -> None:
        """Raise ConflictError if another row already holds ``value``."""
        stmt = select(model.id).where(column == value)
        if scope is not None:
            stmt = stmt.where(scope)
        if exclude_id is not None:
            stmt = stmt.where(model.id != exclude_id)
        result = await self.db.execute(stmt.limit(1))
        if result.first() is not None:
            raise ConflictError(message, message_ar)

    async def _fetch_one(self, stmt: Any, message: str, message_ar: str) -> Any:
        result = await self.db.execute(
            stmt.execution_options(populate_existing=True)
        )
        obj = result.scalar_one_or_none()
        if obj is None:
            raise NotFoundError(message, message_ar)
        return obj

    async def _fetch_all(self, stmt: Any) -> List[Any]:
        result = await self.db.execute(
            stmt.execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def _demote_defaults(
        self, model: Any, scope: Any, exclude_id: Optional[uuid.UUID] = None
    ) -> int:
        """Clear ``is_default`` on every other row in the scope."""
        stmt = update(model).where(scope, model.is_default == True)  # noqa: E712
        if exclude_id is not None:
            stmt = stmt.where(model.id != exclude_id)
        result = await self.db.execute(
            stmt.values(is_default=False).execution_options(synchronize_session=False)
        )
        return result.rowcount or 0

    async def _resolve_test_types(self, ids: Sequence[uuid.UUID]) -> List[TestType]:
        wanted = set(ids)
        if not wanted:
            return []
        result = await self.db.execute(select(TestType).where(TestType.id.in_(wanted)))
        found = list(result.scalars().all())
        if len(found) != len(wanted):
            raise BadRequestError("Test type not found", "نوع الاختبار غير موجود")
        return found

    @staticmethod
    def _ensure_distinct_codes(codes: Iterable[str], message: str, message_ar: str) -> None:
        seen = set()
        for code in codes:
            if code in seen:
                raise ConflictError(message, message_ar)
            seen.add(code)

    # ------------------------------------------------------------------
    # Test types
    # ------------------------------------------------------------------

    def _test_type_query(self, include_inactive: bool = True):
        samples = TestType.samples
        standards = TestType.standards
        if not include_inactive:
            samples = samples.and_(SampleType.is_active == True)  # noqa: E712
            standards = standards.and_(Standard.is_active == True)  # noqa: E712
        return select(TestType).options(selectinload(samples), selectinload(standards))

    async def create_test_type(self, data: catalog.TestTypeCreate) -> TestType:
        await self._ensure_unique(
            TestType, TestType.code, data.code,
            "Test type with this code already exists",
            "نوع اختبار بهذا الرمز موجود بالفعل",
        )

        values = _to_decimals(data.model_dump(), "base_price")
        test_type = TestType(**values)
        self.db.add(test_type)
        await self.db.commit()

        logger.info("test_type_created", test_type_id=str(test_type.id), code=test_type.code)
        return await self.get_test_type(test_type.id)

    async def list_test_types(self, include_inactive: bool = False) -> List[TestType]:
        stmt = self._test_type_query(include_inactive)
        if not include_inactive:
            stmt = stmt.where(TestType.is_active == True)  # noqa: E712
        return await self._fetch_all(stmt.order_by(TestType.sort_order, TestType.name))

    async def get_test_type(self, test_type_id: uuid.UUID) -> TestType:
        return await self._fetch_one(
            self._test_type_query().where(TestType.id == test_type_id),
            "Test type not found",
            "نوع الاختبار غير موجود",
        )

    async def update_test_type(
        self, test_type_id: uuid.UUID, data: catalog.TestTypeUpdate
    ) -> TestType:
        test_type = await self.get_test_type(test_type_id)
        changes = _to_decimals(data.model_dump(exclude_unset=True), "base_price")

        if changes.get("code") is not None:
            await self._ensure_unique(
                TestType, TestType.code, changes["code"],
                "Test type with this code already exists",
                "نوع اختبار بهذا الرمز موجود بالفعل",
                exclude_id=test_type_id,
            )

        _apply_changes(test_type, changes)
        await self.db.commit()

        logger.info("test_type_updated", test_type_id=str(test_type_id), fields=sorted(changes))
        return await self.get_test_type(test_type_id)

    async def delete_test_type(self, test_type_id: uuid.UUID) -> dict:
        test_type = await self.get_test_type(test_type_id)
        await self.db.delete(test_type)
        await self.db.commit()

        logger.info("test_type_deleted", test_type_id=str(test_type_id))
        return _deleted("Test type deleted successfully", "تم حذف نوع الاختبار بنجاح")

    # ------------------------------------------------------------------
    # Sample types
    # ------------------------------------------------------------------

    async def _ensure_test_type_exists(self, test_type_id: uuid.UUID) -> None:
        result = await self.db.execute(
            select(TestType.id).where(TestType.id == test_type_id)
        )
        if result.first() is None:
            raise BadRequestError("Test type not found", "نوع الاختبار غير موجود")

    async def create_sample_type(self, data: catalog.SampleTypeCreate) -> SampleType:
        await self._ensure_unique(
            SampleType, SampleType.code, data.code,
            "Sample type with this code already exists",
            "نوع عينة بهذا الرمز موجود بالفعل",
        )
        await self._ensure_test_type_exists(data.test_type_id)

        values = _to_decimals(data.model_dump(), "price_per_unit")
        sample_type = SampleType(**values)
        self.db.add(sample_type)
        await self.db.commit()

        logger.info(
            "sample_type_created",
            sample_type_id=str(sample_type.id),
            test_type_id=str(data.test_type_id),
            code=sample_type.code,
        )
        return await self.get_sample_type(sample_type.id)

    async def list_sample_types(
        self,
        test_type_id: Optional[uuid.UUID] = None,
        include_inactive: bool = False,
    ) -> List[SampleType]:
        stmt = select(SampleType).options(selectinload(SampleType.test_type))
        if not include_inactive:
            stmt = stmt.where(SampleType.is_active == True)  # noqa: E712
        if test_type_id:
            stmt = stmt.where(SampleType.test_type_id == test_type_id)
        return await self._fetch_all(stmt.order_by(SampleType.sort_order, SampleType.name))

    async def get_sample_type(self, sample_type_id: uuid.UUID) -> SampleType:
        return await self._fetch_one(
            select(SampleType)
            .options(selectinload(SampleType.test_type))
            .where(SampleType.id == sample_type_id),
            "Sample type not found",
            "نوع العينة غير موجود",
        )

    async def update_sample_type(
        self, sample_type_id: uuid.UUID, data: catalog.SampleTypeUpdate
    ) -> SampleType:
        sample_type = await self.get_sample_type(sample_type_id)
        changes = _to_decimals(data.model_dump(exclude_unset=True), "price_per_unit")

        if changes.get("code") is not None:
            await self._ensure_unique(
                SampleType, SampleType.code, changes["code"],
                "Sample type with this code already exists",
                "نوع عينة بهذا الرمز موجود بالفعل",
                exclude_id=sample_type_id,
            )
        if changes.get("test_type_id"):
            await self._ensure_test_type_exists(changes["test_type_id"])

        _apply_changes(sample_type, changes)
        await self.db.commit()

        logger.info("sample_type_updated", sample_type_id=str(sample_type_id), fields=sorted(changes))
        return await self.get_sample_type(sample_type_id)

    async def delete_sample_type(self, sample_type_id: uuid.UUID) -> dict:
        sample_type = await self.get_sample_type(sample_type_id)
        await self.db.delete(sample_type)
        await self.db.commit()

        logger.info("sample_type_deleted", sample_type_id=str(sample_type_id))
        return _deleted("Sample type deleted successfully", "تم حذف نوع العينة بنجاح")

    # ------------------------------------------------------------------
    # Standards
    # ------------------------------------------------------------------

    async def create_standard(self, data: catalog.StandardCreate) -> Standard:
        await self._ensure_unique(
            Standard, Standard.code, data.code,
            "Standard with this code already exists",
            "مواصفة قياسية بهذا الرمز موجودة بالفعل",
        )

        values = data.model_dump(exclude={"test_type_ids"})
        test_types = await self._resolve_test_types(data.test_type_ids or [])

        standard = Standard(**values, test_types=test_types)
        self.db.add(standard)
        await self.db.commit()

        logger.info(
            "standard_created",
            standard_id=str(standard.id),
            code=standard.code,
            test_types=len(test_types),
        )
        return await self.get_standard(standard.id)

    async def list_standards(
        self,
        standard_type: Optional[StandardType] = None,
        include_inactive: bool = False,
    ) -> List[Standard]:
        stmt = select(Standard).options(selectinload(Standard.test_types))
        if not include_inactive:
            stmt = stmt.where(Standard.is_active == True)  # noqa: E712
        if standard_type:
            stmt = stmt.where(Standard.type == standard_type)
        return await self._fetch_all(stmt.order_by(Standard.sort_order, Standard.name))

    async def get_standard(self, standard_id: uuid.UUID) -> Standard:
        return await self._fetch_one(
            select(Standard)
            .options(selectinload(Standard.test_types))
            .where(Standard.id == standard_id),
            "Standard not found",
            "المواصفة القياسية غير موجودة",
        )

    async def update_standard(
        self, standard_id: uuid.UUID, data: catalog.StandardUpdate
    ) -> Standard:
        standard = await self.get_standard(standard_id)
        changes = data.model_dump(exclude_unset=True)
        test_type_ids = changes.pop("test_type_ids", None)

        if changes.get("code") is not None:
            await self._ensure_unique(
                Standard, Standard.code, changes["code"],
                "Standard with this code already exists",
                "مواصفة قياسية بهذا الرمز موجودة بالفعل",
                exclude_id=standard_id,
            )

        # Replaces the whole set of links
        if test_type_ids is not None:
            standard.test_types = await self._resolve_test_types(test_type_ids)

        _apply_changes(standard, changes)
        await self.db.commit()

        logger.info("standard_updated", standard_id=str(standard_id), fields=sorted(changes))
        return await self.get_standard(standard_id)

    async def delete_standard(self, standard_id: uuid.UUID) -> dict:
        standard = await self.get_standard(standard_id)
        await self.db.delete(standard)
        await self.db.commit()

        logger.info("standard_deleted", standard_id=str(standard_id))
        return _deleted("Standard deleted successfully", "تم حذف المواصفة القياسية بنجاح")

    # ------------------------------------------------------------------
    # Price lists
    # ------------------------------------------------------------------

    def _price_list_query(self, include_inactive: bool = True):
        items = PriceList.items
        if not include_inactive:
            items = items.and_(PriceListItem.is_active == True)  # noqa: E712
        return select(PriceList).options(selectinload(items))

    async def create_price_list(self, data: pricing.PriceListCreate) -> PriceList:
        await self._ensure_unique(
            PriceList, PriceList.code, data.code,
            "Price list with this code already exists",
            "قائمة أسعار بهذا الرمز موجودة بالفعل",
        )
        items = data.items or []
        self._ensure_distinct_codes(
            (item.code for item in items),
            "Item with this code already exists in this price list",
            "عنصر بهذا الرمز موجود بالفعل في قائمة الأسعار",
        )

        if data.is_default:
            demoted = await self._demote_defaults(
                PriceList, PriceList.category == data.category
            )
            if demoted:
                logger.info("price_list_default_reassigned", category=data.category.value)

        values = data.model_dump(exclude={"items"}, exclude_none=True)
        price_list = PriceList(
            **values,
            items=[
                PriceListItem(**_to_decimals(item.model_dump(), "price"))
                for item in items
            ],
        )
        self.db.add(price_list)
        await self.db.commit()

        logger.info(
            "price_list_created",
            price_list_id=str(price_list.id),
            code=price_list.code,
            items=len(items),
        )
        return await self.get_price_list(price_list.id)

    async def list_price_lists(
        self,
        category: Optional[ServiceCategory] = None,
        include_inactive: bool = False,
    ) -> List[PriceList]:
        stmt = self._price_list_query(include_inactive)
        if not include_inactive:
            stmt = stmt.where(PriceList.is_active == True)  # noqa: E712
        if category:
            stmt = stmt.where(PriceList.category == category)
        return await self._fetch_all(
            stmt.order_by(PriceList.valid_from.desc(), PriceList.name)
        )

    async def get_price_list(self, price_list_id: uuid.UUID) -> PriceList:
        return await self._fetch_one(
            self._price_list_query().where(PriceList.id == price_list_id),
            "Price list not found",
            "قائمة الأسعار غير موجودة",
        )

    async def update_price_list(
        self, price_list_id: uuid.UUID, data: pricing.PriceListUpdate
    ) -> PriceList:
        price_list = await self.get_price_list(price_list_id)
        changes = data.model_dump(exclude_unset=True)

        if changes.get("code") is not None:
            await self._ensure_unique(
                PriceList, PriceList.code, changes["code"],
                "Price list with this code already exists",
                "قائمة أسعار بهذا الرمز موجودة بالفعل",
                exclude_id=price_list_id,
            )

        # A default list moving to another category must not collide there either
        category = changes.get("category") or price_list.category
        is_default = changes.get("is_default")
        if is_default is None:
            is_default = price_list.is_default
        if is_default and (changes.get("is_default") or category != price_list.category):
            demoted = await self._demote_defaults(
                PriceList, PriceList.category == category, exclude_id=price_list_id
            )
            if demoted:
                logger.info(
                    "price_list_default_reassigned",
                    category=ServiceCategory(category).value,
                    price_list_id=str(price_list_id),
                )

        _apply_changes(price_list, changes)
        await self.db.commit()

        logger.info("price_list_updated", price_list_id=str(price_list_id), fields=sorted(changes))
        return await self.get_price_list(price_list_id)

    async def delete_price_list(self, price_list_id: uuid.UUID) -> dict:
        price_list = await self.get_price_list(price_list_id)
        await self.db.delete(price_list)
        await self.db.commit()

        logger.info("price_list_deleted", price_list_id=str(price_list_id))
        return _deleted("Price list deleted successfully", "تم حذف قائمة الأسعار بنجاح")

    # Price list items

    async def add_price_list_item(
        self, price_list_id: uuid.UUID, data: pricing.PriceListItemCreate
    ) -> PriceListItem:
        await self.get_price_list(price_list_id)
        await self._ensure_unique(
            PriceListItem, PriceListItem.code, data.code,
            "Item with this code already exists in this price list",
            "عنصر بهذا الرمز موجود بالفعل في قائمة الأسعار",
            scope=PriceListItem.price_list_id == price_list_id,
        )

        item = PriceListItem(
            price_list_id=price_list_id,
            **_to_decimals(data.model_dump(), "price"),
        )
        self.db.add(item)
        await self.db.commit()

        logger.info(
            "price_list_item_added",
            price_list_id=str(price_list_id),
            item_id=str(item.id),
            code=item.code,
        )
        return await self.get_price_list_item(item.id)

    async def get_price_list_item(self, item_id: uuid.UUID) -> PriceListItem:
        return await self._fetch_one(
            select(PriceListItem).where(PriceListItem.id == item_id),
            "Price list item not found",
            "عنصر قائمة الأسعار غير موجود",
        )

    async def update_price_list_item(
        self, item_id: uuid.UUID, data: pricing.PriceListItemUpdate
    ) -> PriceListItem:
        item = await self.get_price_list_item(item_id)
        changes = _to_decimals(data.model_dump(exclude_unset=True), "price")

        if changes.get("code") is not None:
            await self._ensure_unique(
                PriceListItem, PriceListItem.code, changes["code"],
                "Item with this code already exists in this price list",
                "عنصر بهذا الرمز موجود بالفعل في قائمة الأسعار",
                exclude_id=item_id,
                scope=PriceListItem.price_list_id == item.price_list_id,
            )

        _apply_changes(item, changes)
        await self.db.commit()

        logger.info("price_list_item_updated", item_id=str(item_id), fields=sorted(changes))
        return await self.get_price_list_item(item_id)

    async def delete_price_list_item(self, item_id: uuid.UUID) -> dict:
        item = await self.get_price_list_item(item_id)
        await self.db.delete(item)
        await self.db.commit()

        logger.info("price_list_item_deleted", item_id=str(item_id))
        return _deleted("Item deleted successfully", "تم حذف العنصر بنجاح")

    # ------------------------------------------------------------------
    # Distance rates
    # ------------------------------------------------------------------

    async def _ensure_no_overlap(
        self, from_km: int, to_km: int, exclude_id: Optional[uuid.UUID] = None
    ) -> None:
        stmt = select(DistanceRate).where(DistanceRate.is_active == True)  # noqa: E712
        if exclude_id is not None:
            stmt = stmt.where(DistanceRate.id != exclude_id)
        active = await self._fetch_all(stmt)

        clash = rules.find_overlapping(active, from_km, to_km)
        if clash is not None:
            logger.info(
                "distance_rate_overlap",
                from_km=from_km,
                to_km=to_km,
                existing_id=str(clash.id),
            )
            raise ConflictError(
                "Distance range overlaps with existing rate",
                "نطاق المسافة يتداخل مع سعر موجود",
            )

    async def create_distance_rate(self, data: pricing.DistanceRateCreate) -> DistanceRate:
        rules.validate_range(data.from_km, data.to_km)
        await self._ensure_no_overlap(data.from_km, data.to_km)

        values = _to_decimals(data.model_dump(), "rate", "rate_per_km")
        rate = DistanceRate(**values)
        self.db.add(rate)
        await self.db.commit()

        logger.info(
            "distance_rate_created",
            distance_rate_id=str(rate.id),
            from_km=rate.from_km,
            to_km=rate.to_km,
        )
        return await self.get_distance_rate(rate.id)

    async def list_distance_rates(self, include_inactive: bool = False) -> List[DistanceRate]:
        stmt = select(DistanceRate)
        if not include_inactive:
            stmt = stmt.where(DistanceRate.is_active == True)  # noqa: E712
        return await self._fetch_all(stmt.order_by(DistanceRate.from_km))

    async def get_distance_rate(self, rate_id: uuid.UUID) -> DistanceRate:
        return await self._fetch_one(
            select(DistanceRate).where(DistanceRate.id == rate_id),
            "Distance rate not found",
            "سعر المسافة غير موجود",
        )

    async def update_distance_rate(
        self, rate_id: uuid.UUID, data: pricing.DistanceRateUpdate
    ) -> DistanceRate:
        rate = await self.get_distance_rate(rate_id)
        changes = _to_decimals(data.model_dump(exclude_unset=True), "rate", "rate_per_km")
        for field in ("from_km", "to_km", "is_active"):
            if changes.get(field, False) is None:
                del changes[field]

        from_km = changes.get("from_km", rate.from_km)
        to_km = changes.get("to_km", rate.to_km)
        rules.validate_range(from_km, to_km)

        bounds_changed = "from_km" in changes or "to_km" in changes
        reactivated = changes.get("is_active") is True and not rate.is_active
        will_be_active = changes.get("is_active", rate.is_active)
        if (bounds_changed and will_be_active) or reactivated:
            await self._ensure_no_overlap(from_km, to_km, exclude_id=rate_id)

        _apply_changes(rate, changes)
        await self.db.commit()

        logger.info("distance_rate_updated", distance_rate_id=str(rate_id), fields=sorted(changes))
        return await self.get_distance_rate(rate_id)

    async def delete_distance_rate(self, rate_id: uuid.UUID) -> dict:
        rate = await self.get_distance_rate(rate_id)
        await self.db.delete(rate)
        await self.db.commit()

        logger.info("distance_rate_deleted", distance_rate_id=str(rate_id))
        return _deleted("Distance rate deleted successfully", "تم حذف سعر المسافة بنجاح")

    async def rate_for_distance(self, km: float) -> DistanceRate:
        """Return the active band whose [from_km, to_km) contains ``km``."""
        for rate in await self.list_distance_rates():
            if rules.band_contains(rate, km):
                return rate
        raise NotFoundError(
            "No distance rate covers this distance",
            "لا يوجد سعر مسافة يغطي هذه المسافة",
        )

    # ------------------------------------------------------------------
    # Mixer types
    # ------------------------------------------------------------------

    async def create_mixer_type(self, data: catalog.MixerTypeCreate) -> MixerType:
        await self._ensure_unique(
            MixerType, MixerType.code, data.code,
            "Mixer type with this code already exists",
            "نوع خلاطة بهذا الرمز موجود بالفعل",
        )

        values = _to_decimals(data.model_dump(), "capacity", "price_per_batch")
        mixer_type = MixerType(**values)
        self.db.add(mixer_type)
        await self.db.commit()

        logger.info("mixer_type_created", mixer_type_id=str(mixer_type.id), code=mixer_type.code)
        return await self.get_mixer_type(mixer_type.id)

    async def list_mixer_types(self, include_inactive: bool = False) -> List[MixerType]:
        stmt = select(MixerType)
        if not include_inactive:
            stmt = stmt.where(MixerType.is_active == True)  # noqa: E712
        return await self._fetch_all(stmt.order_by(MixerType.sort_order, MixerType.name))

    async def get_mixer_type(self, mixer_type_id: uuid.UUID) -> MixerType:
        return await self._fetch_one(
            select(MixerType).where(MixerType.id == mixer_type_id),
            "Mixer type not found",
            "نوع الخلاطة غير موجود",
        )

    async def update_mixer_type(
        self, mixer_type_id: uuid.UUID, data: catalog.MixerTypeUpdate
    ) -> MixerType:
        mixer_type = await self.get_mixer_type(mixer_type_id)
        changes = _to_decimals(
            data.model_dump(exclude_unset=True), "capacity", "price_per_batch"
        )

        if changes.get("code") is not None:
            await self._ensure_unique(
                MixerType, MixerType.code, changes["code"],
                "Mixer type with this code already exists",
                "نوع خلاطة بهذا الرمز موجود بالفعل",
                exclude_id=mixer_type_id,
            )

        _apply_changes(mixer_type, changes)
        await self.db.commit()

        logger.info("mixer_type_updated", mixer_type_id=str(mixer_type_id), fields=sorted(changes))
        return await self.get_mixer_type(mixer_type_id)

    async def delete_mixer_type(self, mixer_type_id: uuid.UUID) -> dict:
        mixer_type = await self.get_mixer_type(mixer_type_id)
        await self.db.delete(mixer_type)
        await self.db.commit()

        logger.info("mixer_type_deleted", mixer_type_id=str(mixer_type_id))
        return _deleted("Mixer type deleted successfully", "تم حذف نوع الخلاطة بنجاح")

    # ------------------------------------------------------------------
    # Lookup categories
    # ------------------------------------------------------------------

    def _lookup_category_query(self, include_inactive: bool = True):
        items = LookupCategory.items
        if not include_inactive:
            items = items.and_(LookupItem.is_active == True)  # noqa: E712
        return select(LookupCategory).options(selectinload(items))

    async def create_lookup_category(
        self, data: lookup.LookupCategoryCreate
    ) -> LookupCategory:
        await self._ensure_unique(
            LookupCategory, LookupCategory.code, data.code,
            "Lookup category with this code already exists",
            "جدول بحث بهذا الرمز موجود بالفعل",
        )
        items = data.items or []
        self._ensure_distinct_codes(
            (item.code for item in items),
            "Item with this code already exists in this category",
            "عنصر بهذا الرمز موجود بالفعل في هذا الجدول",
        )

        # Same rule as adding items one by one: the last default wins
        defaults = [i for i, item in enumerate(items) if item.is_default]
        rows = []
        for i, item in enumerate(items):
            values = item.model_dump()
            values["is_default"] = bool(defaults) and i == defaults[-1]
            rows.append(LookupItem(**values))

        category = LookupCategory(**data.model_dump(exclude={"items"}), items=rows)
        self.db.add(category)
        await self.db.commit()

        logger.info(
            "lookup_category_created",
            category_id=str(category.id),
            code=category.code,
            items=len(rows),
        )
        return await self.get_lookup_category(category.id)

    async def list_lookup_categories(
        self, include_inactive: bool = False
    ) -> List[LookupCategory]:
        stmt = self._lookup_category_query(include_inactive)
        if not include_inactive:
            stmt = stmt.where(LookupCategory.is_active == True)  # noqa: E712
        return await self._fetch_all(stmt.order_by(LookupCategory.name))

    async def get_lookup_category(self, category_id: uuid.UUID) -> LookupCategory:
        return await self._fetch_one(
            self._lookup_category_query().where(LookupCategory.id == category_id),
            "Lookup category not found",
            "جدول البحث غير موجود",
        )

    async def get_lookup_category_by_code(self, code: str) -> LookupCategory:
        """Category by code with its active items only."""
        return await self._fetch_one(
            self._lookup_category_query(include_inactive=False).where(
                LookupCategory.code == code
            ),
            "Lookup category not found",
            "جدول البحث غير موجود",
        )

    async def update_lookup_category(
        self, category_id: uuid.UUID, data: lookup.LookupCategoryUpdate
    ) -> LookupCategory:
        category = await self.get_lookup_category(category_id)
        changes = data.model_dump(exclude_unset=True)

        if category.is_system and changes.get("is_active") is False:
            raise BadRequestError(
                "Cannot deactivate system category",
                "لا يمكن تعطيل جدول بحث خاص بالنظام",
            )

        if changes.get("code") is not None:
            await self._ensure_unique(
                LookupCategory, LookupCategory.code, changes["code"],
                "Lookup category with this code already exists",
                "جدول بحث بهذا الرمز موجود بالفعل",
                exclude_id=category_id,
            )

        _apply_changes(category, changes)
        await self.db.commit()

        logger.info("lookup_category_updated", category_id=str(category_id), fields=sorted(changes))
        return await self.get_lookup_category(category_id)

    async def delete_lookup_category(self, category_id: uuid.UUID) -> dict:
        category = await self.get_lookup_category(category_id)
        if category.is_system:
            raise BadRequestError(
                "Cannot delete system category",
                "لا يمكن حذف جدول بحث خاص بالنظام",
            )

        await self.db.delete(category)
        await self.db.commit()

        logger.info("lookup_category_deleted", category_id=str(category_id))
        return _deleted("Lookup category deleted successfully", "تم حذف جدول البحث بنجاح")

    # Lookup items

    async def add_lookup_item(
        self, category_id: uuid.UUID, data: lookup.LookupItemCreate
    ) -> LookupItem:
        await self.get_lookup_category(category_id)
        await self._ensure_unique(
            LookupItem, LookupItem.code, data.code,
            "Item with this code already exists in this category",
            "عنصر بهذا الرمز موجود بالفعل في هذا الجدول",
            scope=LookupItem.category_id == category_id,
        )

        if data.is_default:
            demoted = await self._demote_defaults(
                LookupItem, LookupItem.category_id == category_id
            )
            if demoted:
                logger.info("lookup_item_default_reassigned", category_id=str(category_id))

        item = LookupItem(category_id=category_id, **data.model_dump())
        self.db.add(item)
        await self.db.commit()

        logger.info(
            "lookup_item_added",
            category_id=str(category_id),
            item_id=str(item.id),
            code=item.code,
        )
        return await self.get_lookup_item(item.id)

    async def get_lookup_item(self, item_id: uuid.UUID) -> LookupItem:
        return await self._fetch_one(
            select(LookupItem).where(LookupItem.id == item_id),
            "Lookup item not found",
            "عنصر جدول البحث غير موجود",
        )

    async def update_lookup_item(
        self, item_id: uuid.UUID, data: lookup.LookupItemUpdate
    ) -> LookupItem:
        item = await self.get_lookup_item(item_id)
        changes = data.model_dump(exclude_unset=True)

        if changes.get("code") is not None:
            await self._ensure_unique(
                LookupItem, LookupItem.code, changes["code"],
                "Item with this code already exists in this category",
                "عنصر بهذا الرمز موجود بالفعل في هذا الجدول",
                exclude_id=item_id,
                scope=LookupItem.category_id == item.category_id,
            )

        if changes.get("is_default"):
            demoted = await self._demote_defaults(
                LookupItem, LookupItem.category_id == item.category_id, exclude_id=item_id
            )
            if demoted:
                logger.info(
                    "lookup_item_default_reassigned",
                    category_id=str(item.category_id),
                    item_id=str(item_id),
                )

        _apply_changes(item, changes)
        await self.db.commit()

        logger.info("lookup_item_updated", item_id=str(item_id), fields=sorted(changes))
        return await self.get_lookup_item(item_id)

    async def delete_lookup_item(self, item_id: uuid.UUID) -> dict:
        item = await self.get_lookup_item(item_id)
        await self.db.delete(item)
        await self.db.commit()

        logger.info("lookup_item_deleted", item_id=str(item_id))
        return _deleted("Item deleted successfully", "تم حذف العنصر بنجاح")

    # ------------------------------------------------------------------
    # System settings
    # ------------------------------------------------------------------

    async def create_system_setting(
        self, data: setting_schemas.SystemSettingCreate
    ) -> SystemSetting:
        await self._ensure_unique(
            SystemSetting, SystemSetting.key, data.key,
            "Setting with this key already exists",
            "إعداد بهذا المفتاح موجود بالفعل",
        )
        if data.validation_rule:
            rules.compile_validation_rule(data.validation_rule)
        rules.check_validation_rule(data.validation_rule, data.value)

        values = data.model_dump(exclude={"options"})
        if data.options is not None:
            values["options"] = [o.model_dump(by_alias=True) for o in data.options]
        setting = SystemSetting(**values)
        self.db.add(setting)
        await self.db.commit()

        logger.info("system_setting_created", key=setting.key, type=setting.type.value)
        return await self.get_system_setting(setting.key)

    async def list_system_settings(
        self, category: Optional[str] = None, include_system: bool = True
    ) -> List[SystemSetting]:
        stmt = select(SystemSetting)
        if category:
            stmt = stmt.where(SystemSetting.category == category)
        if not include_system:
            stmt = stmt.where(SystemSetting.is_system == False)  # noqa: E712
        return await self._fetch_all(
            stmt.order_by(SystemSetting.category, SystemSetting.key)
        )

    async def list_public_settings(self) -> List[SystemSetting]:
        return await self._fetch_all(
            select(SystemSetting)
            .where(SystemSetting.is_public == True)  # noqa: E712
            .order_by(SystemSetting.category, SystemSetting.key)
        )

    async def get_system_setting(self, key: str) -> SystemSetting:
        return await self._fetch_one(
            select(SystemSetting).where(SystemSetting.key == key),
            "Setting not found",
            "الإعداد غير موجود",
        )

    async def update_system_setting(
        self, key: str, data: setting_schemas.SystemSettingUpdate
    ) -> SystemSetting:
        setting = await self.get_system_setting(key)
        rules.check_validation_rule(setting.validation_rule, data.value)

        changes = data.model_dump(exclude_unset=True, exclude={"options"})
        if "options" in data.model_fields_set:
            changes["options"] = (
                None
                if data.options is None
                else [o.model_dump(by_alias=True) for o in data.options]
            )

        _apply_changes(setting, changes)
        await self.db.commit()

        logger.info("system_setting_updated", key=key, fields=sorted(changes))
        return await self.get_system_setting(key)

    async def bulk_update_settings(
        self, updates: Sequence[setting_schemas.SettingKeyValue]
    ) -> List[setting_schemas.BulkUpdateResult]:
        """Update settings one by one, reporting each outcome.

        A failing item does not stop the rest, and items that already
        succeeded stay committed.
        """
        results: List[setting_schemas.BulkUpdateResult] = []
        for entry in updates:
            try:
                setting = await self.update_system_setting(
                    entry.key, setting_schemas.SystemSettingUpdate(value=entry.value)
                )
            except SettingsError as e:
                results.append(
                    setting_schemas.BulkUpdateResult(key=entry.key, success=False, error=e.message)
                )
                continue
            except SQLAlchemyError as e:
                await self.db.rollback()
                logger.error("system_setting_bulk_item_failed", key=entry.key, error=str(e))
                results.append(
                    setting_schemas.BulkUpdateResult(key=entry.key, success=False, error=str(e))
                )
                continue

            results.append(
                setting_schemas.BulkUpdateResult(
                    key=entry.key,
                    success=True,
                    setting=setting_schemas.SystemSettingResponse.model_validate(setting),
                )
            )

        logger.info(
            "system_setting_bulk_updated",
            total=len(results),
            failed=sum(1 for r in results if not r.success),
        )
        return results

    async def delete_system_setting(self, key: str) -> dict:
        setting = await self.get_system_setting(key)
        if setting.is_system:
            raise BadRequestError(
                "Cannot delete system setting",
                "لا يمكن حذف إعداد خاص بالنظام",
            )

        await self.db.delete(setting)
        await self.db.commit()

        logger.info("system_setting_deleted", key=key)
        return _deleted("Setting deleted successfully", "تم حذف الإعداد بنجاح")

    async def get_setting_value(self, key: str, default: Any = _MISSING) -> Any:
        """Read a setting converted to its declared type.

        A missing key, or a NUMBER or DATE value that does not parse, falls
        back to ``default`` when one is given and raises otherwise. Malformed
        JSON always raises.
        """
        try:
            setting = await self.get_system_setting(key)
        except NotFoundError:
            if default is not _MISSING:
                return default
            raise NotFoundError(
                f"Setting '{key}' not found",
                f"الإعداد '{key}' غير موجود",
            ) from None

        try:
            return setting.typed_value
        except json.JSONDecodeError:
            raise
        except ValueError:
            logger.warning("system_setting_unparsable", key=key, type=setting.type.value)
            if default is not _MISSING:
                return default
            raise BadRequestError(
                f"Stored value cannot be parsed as {setting.type.value}",
                "لا يمكن قراءة القيمة المخزنة حسب نوع الإعداد",
            ) from None
