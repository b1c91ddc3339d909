"""Seed database with reference data (system settings, system lookup tables)."""

import asyncio

from src.database import dispose_engine, get_engine, get_session_factory
from src.errors import NotFoundError
from src.models.base import Base
from src.models.enums import SettingType
from src.schemas.lookup import LookupCategoryCreate, LookupItemCreate
from src.schemas.system_setting import SystemSettingCreate
from src.settings.service import SettingsService


SYSTEM_SETTINGS = [
    {
        "key": "company_name", "value": "Materials Testing Laboratory",
        "category": "company", "label": "Company name", "label_ar": "اسم الشركة",
        "is_public": True,
    },
    {
        "key": "company_name_ar", "value": "معمل اختبار المواد",
        "category": "company", "label": "Company name (Arabic)", "label_ar": "اسم الشركة بالعربية",
        "is_public": True,
    },
    {
        "key": "vat_rate", "value": "14", "type": SettingType.NUMBER,
        "category": "finance", "label": "VAT rate (%)", "label_ar": "نسبة ضريبة القيمة المضافة",
        "validation_rule": r"^\d+(\.\d+)?$", "input_type": "number",
    },
    {
        "key": "default_currency", "value": "EGP",
        "category": "finance", "label": "Default currency", "label_ar": "العملة الافتراضية",
        "validation_rule": r"^[A-Z]{3}$", "is_public": True,
    },
    {
        "key": "report_validity_days", "value": "30", "type": SettingType.NUMBER,
        "category": "reports", "label": "Report validity (days)", "label_ar": "مدة صلاحية التقرير بالأيام",
        "validation_rule": r"^\d+$", "input_type": "number",
    },
    {
        "key": "maintenance_mode", "value": "false", "type": SettingType.BOOLEAN,
        "category": "general", "label": "Maintenance mode", "label_ar": "وضع الصيانة",
        "validation_rule": r"^(true|false)$", "input_type": "switch", "is_public": True,
    },
]

LOOKUP_CATEGORIES = [
    {
        "code": "payment_terms", "name": "Payment terms", "name_ar": "شروط الدفع",
        "items": [
            {"code": "cash", "name": "Cash", "name_ar": "نقدي", "is_default": True},
            {"code": "net_30", "name": "Net 30 days", "name_ar": "آجل 30 يوم"},
            {"code": "advance_50", "name": "50% in advance", "name_ar": "50% مقدم"},
        ],
    },
    {
        "code": "units", "name": "Units", "name_ar": "الوحدات",
        "items": [
            {"code": "sample", "name": "Sample", "name_ar": "عينة", "is_default": True},
            {"code": "m3", "name": "Cubic meter", "name_ar": "متر مكعب"},
            {"code": "ton", "name": "Ton", "name_ar": "طن"},
        ],
    },
]


async def seed():
    """Seed the database with reference data. Existing keys and codes are kept."""
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with get_session_factory()() as session:
        service = SettingsService(session)

        for data in SYSTEM_SETTINGS:
            try:
                await service.get_system_setting(data["key"])
                print(f"  = Setting: {data['key']}")
                continue
            except NotFoundError:
                pass
            await service.create_system_setting(
                SystemSettingCreate(**data, is_system=True, is_required=True)
            )
            print(f"  + Setting: {data['key']}")

        for data in LOOKUP_CATEGORIES:
            try:
                await service.get_lookup_category_by_code(data["code"])
                print(f"  = Lookup: {data['code']}")
                continue
            except NotFoundError:
                pass
            items = [LookupItemCreate(**item) for item in data["items"]]
            await service.create_lookup_category(
                LookupCategoryCreate(
                    code=data["code"],
                    name=data["name"],
                    name_ar=data["name_ar"],
                    is_system=True,
                    items=items,
                )
            )
            print(f"  + Lookup: {data['code']} ({len(items)} items)")

    await dispose_engine()
    print("\nSeed completed!")


if __name__ == "__main__":
    asyncio.run(seed())
