"""Tests for system settings — typed reads, validation rules, bulk updates."""

from datetime import datetime

import pytest

from src.errors import BadRequestError, ConflictError, NotFoundError
from src.models.enums import SettingType
from src.schemas import system_setting as schemas


def _setting(key: str, value: str, **overrides):
    data = {"key": key, "value": value, "label": key, "label_ar": key}
    data.update(overrides)
    return schemas.SystemSettingCreate(**data)


class TestSystemSettings:
    """Test setting CRUD and guards."""

    @pytest.mark.asyncio
    async def test_duplicate_key_conflicts(self, service):
        await service.create_system_setting(_setting("company_name", "Lab"))
        with pytest.raises(ConflictError):
            await service.create_system_setting(_setting("company_name", "Other"))

    @pytest.mark.asyncio
    async def test_missing_key(self, service):
        with pytest.raises(NotFoundError):
            await service.get_system_setting("nope")

    @pytest.mark.asyncio
    async def test_options_stored(self, service):
        options = [schemas.SettingOption(value="en", label="English", label_ar="الإنجليزية")]
        setting = await service.create_system_setting(
            _setting("language", "en", input_type="select", options=options)
        )

        response = schemas.SystemSettingResponse.model_validate(setting)
        assert response.options[0].label_ar == "الإنجليزية"

    @pytest.mark.asyncio
    async def test_list_filters(self, service):
        await service.create_system_setting(_setting("b_key", "1", category="finance"))
        await service.create_system_setting(_setting("a_key", "1", category="finance"))
        await service.create_system_setting(_setting("core", "1", category="finance", is_system=True))
        await service.create_system_setting(_setting("other", "1", category="general"))

        finance = await service.list_system_settings(category="finance")
        assert [s.key for s in finance] == ["a_key", "b_key", "core"]

        user_only = await service.list_system_settings(category="finance", include_system=False)
        assert [s.key for s in user_only] == ["a_key", "b_key"]

    @pytest.mark.asyncio
    async def test_list_public(self, service):
        await service.create_system_setting(_setting("company_name", "Lab", is_public=True))
        await service.create_system_setting(_setting("smtp_password", "secret"))

        public = await service.list_public_settings()
        assert [s.key for s in public] == ["company_name"]

    @pytest.mark.asyncio
    async def test_system_setting_cannot_be_deleted(self, service):
        await service.create_system_setting(_setting("vat_rate", "14", is_system=True))

        with pytest.raises(BadRequestError):
            await service.delete_system_setting("vat_rate")

    @pytest.mark.asyncio
    async def test_delete(self, service):
        await service.create_system_setting(_setting("tmp", "x"))

        result = await service.delete_system_setting("tmp")
        assert result["message"] == "Setting deleted successfully"
        with pytest.raises(NotFoundError):
            await service.get_system_setting("tmp")


class TestValidationRules:
    """Test regex checks on create and update."""

    @pytest.mark.asyncio
    async def test_update_rejects_non_matching_value(self, service):
        await service.create_system_setting(
            _setting("report_validity_days", "30", validation_rule=r"^\d+$")
        )

        with pytest.raises(BadRequestError):
            await service.update_system_setting(
                "report_validity_days", schemas.SystemSettingUpdate(value="thirty")
            )
        assert (await service.get_system_setting("report_validity_days")).value == "30"

    @pytest.mark.asyncio
    async def test_update_accepts_matching_value(self, service):
        await service.create_system_setting(
            _setting("report_validity_days", "30", validation_rule=r"^\d+$")
        )

        updated = await service.update_system_setting(
            "report_validity_days", schemas.SystemSettingUpdate(value="45", label="Validity")
        )
        assert updated.value == "45"
        assert updated.label == "Validity"

    @pytest.mark.asyncio
    async def test_create_rejects_non_matching_value(self, service):
        with pytest.raises(BadRequestError):
            await service.create_system_setting(
                _setting("currency", "egp", validation_rule=r"^[A-Z]{3}$")
            )

    @pytest.mark.asyncio
    async def test_create_rejects_invalid_rule(self, service):
        with pytest.raises(BadRequestError):
            await service.create_system_setting(
                _setting("currency", "", validation_rule="([A-Z")
            )


class TestSettingValues:
    """Test typed reads."""

    @pytest.mark.asyncio
    async def test_number(self, service):
        await service.create_system_setting(_setting("vat_rate", "42.5", type=SettingType.NUMBER))
        assert await service.get_setting_value("vat_rate") == 42.5

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw,expected", [("true", True), ("false", False), ("yes", False)])
    async def test_boolean(self, service, raw, expected):
        await service.create_system_setting(_setting("flag", raw, type=SettingType.BOOLEAN))
        assert await service.get_setting_value("flag") is expected

    @pytest.mark.asyncio
    async def test_json(self, service):
        await service.create_system_setting(
            _setting("working_days", '["sun", "mon"]', type=SettingType.JSON)
        )
        assert await service.get_setting_value("working_days") == ["sun", "mon"]

    @pytest.mark.asyncio
    async def test_malformed_json_raises(self, service):
        await service.create_system_setting(_setting("broken", "{", type=SettingType.JSON))
        with pytest.raises(ValueError):
            await service.get_setting_value("broken", default={})

    @pytest.mark.asyncio
    @pytest.mark.parametrize("setting_type,raw", [
        (SettingType.NUMBER, "abc"),
        (SettingType.DATE, "not a date"),
    ])
    async def test_unparsable_value_is_bad_request(self, service, setting_type, raw):
        await service.create_system_setting(_setting("broken", raw, type=setting_type))

        with pytest.raises(BadRequestError) as exc_info:
            await service.get_setting_value("broken")
        assert exc_info.value.message == f"Stored value cannot be parsed as {setting_type.value}"
        assert exc_info.value.message_ar

    @pytest.mark.asyncio
    async def test_unparsable_value_returns_default(self, service):
        await service.create_system_setting(_setting("max_samples", "abc", type=SettingType.NUMBER))
        assert await service.get_setting_value("max_samples", default=10) == 10

    @pytest.mark.asyncio
    async def test_date(self, service):
        await service.create_system_setting(
            _setting("fiscal_year_start", "2025-07-01", type=SettingType.DATE)
        )
        assert await service.get_setting_value("fiscal_year_start") == datetime(2025, 7, 1)

    @pytest.mark.asyncio
    async def test_string(self, service):
        await service.create_system_setting(_setting("company_name", "Lab"))
        assert await service.get_setting_value("company_name") == "Lab"

    @pytest.mark.asyncio
    async def test_missing_key_returns_default(self, service):
        assert await service.get_setting_value("nope", default=7) == 7
        assert await service.get_setting_value("nope", default=None) is None

    @pytest.mark.asyncio
    async def test_missing_key_without_default_raises(self, service):
        with pytest.raises(NotFoundError) as exc_info:
            await service.get_setting_value("nope")
        assert exc_info.value.message == "Setting 'nope' not found"

    @pytest.mark.asyncio
    async def test_model_accessors(self, service):
        setting = await service.create_system_setting(_setting("max_samples", "12"))
        assert setting.as_number() == 12.0
        assert setting.typed_value == "12"


class TestBulkUpdate:
    """Test per-item results."""

    @pytest.mark.asyncio
    async def test_partial_failure_keeps_successes(self, service):
        await service.create_system_setting(_setting("valid_key", "old"))

        results = await service.bulk_update_settings([
            schemas.SettingKeyValue(key="valid_key", value="x"),
            schemas.SettingKeyValue(key="missing_key", value="y"),
        ])

        assert len(results) == 2
        assert results[0].success is True
        assert results[0].setting.value == "x"
        assert results[1].success is False
        assert results[1].error
        assert (await service.get_system_setting("valid_key")).value == "x"

    @pytest.mark.asyncio
    async def test_rule_failure_reported(self, service):
        await service.create_system_setting(_setting("days", "1", validation_rule=r"^\d+$"))
        await service.create_system_setting(_setting("name", "Lab"))

        results = await service.bulk_update_settings([
            schemas.SettingKeyValue(key="days", value="many"),
            schemas.SettingKeyValue(key="name", value="New Lab"),
        ])

        assert [r.success for r in results] == [False, True]
        assert results[0].error == "Value does not match validation rule"
        assert (await service.get_system_setting("days")).value == "1"
