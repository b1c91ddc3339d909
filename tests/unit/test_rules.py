"""Tests for rule helpers — distance banding, typed values, validation rules."""
from __future__ import annotations

import json
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from src.errors import BadRequestError
from src.models.enums import SettingType
from src.settings import rules


class TestDistanceBands:
    """Test half-open band arithmetic (without DB)."""

    def _make_band(self, from_km: int, to_km: int):
        band = MagicMock()
        band.from_km = from_km
        band.to_km = to_km
        return band

    def test_adjacent_bands_do_not_overlap(self):
        """[0, 10) and [10, 20) share only the excluded end point."""
        assert not rules.ranges_overlap(0, 10, 10, 20)
        assert not rules.ranges_overlap(10, 20, 0, 10)

    def test_partial_overlap(self):
        assert rules.ranges_overlap(0, 10, 5, 15)
        assert rules.ranges_overlap(5, 15, 0, 10)

    def test_containment_overlaps(self):
        """A band strictly inside another overlaps it, in either order."""
        assert rules.ranges_overlap(0, 100, 10, 20)
        assert rules.ranges_overlap(10, 20, 0, 100)

    def test_identical_bands_overlap(self):
        assert rules.ranges_overlap(0, 10, 0, 10)

    def test_disjoint_bands(self):
        assert not rules.ranges_overlap(0, 10, 20, 30)

    def test_find_overlapping_returns_first_clash(self):
        bands = [self._make_band(0, 10), self._make_band(10, 20), self._make_band(20, 30)]

        clash = rules.find_overlapping(bands, 15, 25)
        assert clash is bands[1]

    def test_find_overlapping_none(self):
        bands = [self._make_band(0, 10), self._make_band(20, 30)]
        assert rules.find_overlapping(bands, 10, 20) is None

    def test_validate_range_rejects_inverted(self):
        with pytest.raises(BadRequestError) as exc_info:
            rules.validate_range(10, 5)
        assert exc_info.value.status_code == 400
        assert exc_info.value.message_ar

    def test_validate_range_rejects_empty(self):
        """A zero-width band covers nothing."""
        with pytest.raises(BadRequestError):
            rules.validate_range(10, 10)

    def test_validate_range_accepts_valid(self):
        rules.validate_range(0, 10)

    def test_band_contains_is_half_open(self):
        band = self._make_band(10, 20)
        assert rules.band_contains(band, 10)
        assert rules.band_contains(band, 19.9)
        assert not rules.band_contains(band, 20)
        assert not rules.band_contains(band, 9.99)


class TestSettingValues:
    """Test conversion of stored strings by type tag."""

    def test_number(self):
        assert rules.coerce_setting_value(SettingType.NUMBER, "42.5") == 42.5

    def test_number_accepts_plain_string_tag(self):
        assert rules.coerce_setting_value("NUMBER", "7") == 7.0

    def test_number_invalid_raises(self):
        with pytest.raises(ValueError):
            rules.coerce_setting_value(SettingType.NUMBER, "abc")

    @pytest.mark.parametrize("raw,expected", [
        ("true", True),
        ("false", False),
        ("TRUE", False),
        ("1", False),
        ("", False),
    ])
    def test_boolean_only_exact_true(self, raw, expected):
        assert rules.coerce_setting_value(SettingType.BOOLEAN, raw) is expected

    def test_json(self):
        value = rules.coerce_setting_value(SettingType.JSON, '{"a": [1, 2]}')
        assert value == {"a": [1, 2]}

    def test_json_malformed_raises(self):
        with pytest.raises(json.JSONDecodeError):
            rules.coerce_setting_value(SettingType.JSON, "{not json")

    def test_date_with_zulu_suffix(self):
        value = rules.coerce_setting_value(SettingType.DATE, "2025-01-15T10:00:00Z")
        assert value == datetime(2025, 1, 15, 10, 0, tzinfo=timezone.utc)

    def test_date_plain(self):
        assert rules.as_date("2025-01-15") == datetime(2025, 1, 15)

    def test_string_passthrough(self):
        assert rules.coerce_setting_value(SettingType.STRING, "42") == "42"

    def test_unknown_tag_passthrough(self):
        assert rules.coerce_setting_value("COLOR", "#fff") == "#fff"


class TestValidationRules:
    """Test regex checks on setting values."""

    def test_matching_value_passes(self):
        rules.check_validation_rule(r"^\d+$", "30")

    def test_non_matching_value_rejected(self):
        with pytest.raises(BadRequestError) as exc_info:
            rules.check_validation_rule(r"^\d+$", "thirty")
        assert exc_info.value.message == "Value does not match validation rule"

    def test_rule_is_searched_not_anchored(self):
        """Without anchors a match anywhere in the value is enough."""
        rules.check_validation_rule(r"\d", "abc1")

    def test_no_rule_skips_check(self):
        rules.check_validation_rule(None, "anything")
        rules.check_validation_rule("", "anything")

    def test_empty_value_skips_check(self):
        rules.check_validation_rule(r"^\d+$", "")

    def test_invalid_rule_rejected(self):
        with pytest.raises(BadRequestError) as exc_info:
            rules.compile_validation_rule("([a-z")
        assert exc_info.value.message.startswith("Invalid validation rule")
