"""Pure rule helpers — range banding and typed setting values.

Nothing here touches the database; ``SettingsService`` loads the rows and
calls these helpers, which keeps the rules testable on plain objects.
"""

from __future__ import annotations

import json
import re
from datetime import datetime
from typing import Any, Iterable, Optional, Protocol, TypeVar

from src.errors import BadRequestError
from src.models.enums import SettingType


class Band(Protocol):
    from_km: int
    to_km: int


BandT = TypeVar("BandT", bound=Band)


# ---------------------------------------------------------------------------
# Distance bands
# ---------------------------------------------------------------------------


def validate_range(from_km: float, to_km: float) -> None:
    """Reject empty or inverted bands."""
    if from_km >= to_km:
        raise BadRequestError(
            "fromKm must be less than toKm",
            "يجب أن تكون بداية المسافة أقل من نهايتها",
        )


def ranges_overlap(
    from_a: float, to_a: float, from_b: float, to_b: float
) -> bool:
    """Half-open intersection test for [from_a, to_a) and [from_b, to_b).

    Adjacent bands such as [0, 10) and [10, 20) do not overlap.
    """
    return from_a < to_b and from_b < to_a


def find_overlapping(
    bands: Iterable[BandT], from_km: float, to_km: float
) -> Optional[BandT]:
    """Return the first band intersecting [from_km, to_km), if any."""
    for band in bands:
        if ranges_overlap(band.from_km, band.to_km, from_km, to_km):
            return band
    return None


def band_contains(band: Band, km: float) -> bool:
    return band.from_km <= km < band.to_km


# ---------------------------------------------------------------------------
# System setting values
# ---------------------------------------------------------------------------


def as_number(raw: str) -> float:
    """Parse a NUMBER setting. Raises ValueError on non-numeric text."""
    return float(raw)


def as_bool(raw: str) -> bool:
    # Only the exact string "true" is truthy
    return raw == "true"


def as_json(raw: str) -> Any:
    """Parse a JSON setting. Malformed JSON raises json.JSONDecodeError."""
    return json.loads(raw)


def as_date(raw: str) -> datetime:
    """Parse an ISO 8601 DATE setting (a trailing ``Z`` is accepted)."""
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    return datetime.fromisoformat(raw)


_COERCERS = {
    SettingType.NUMBER: as_number,
    SettingType.BOOLEAN: as_bool,
    SettingType.JSON: as_json,
    SettingType.DATE: as_date,
}


def coerce_setting_value(setting_type: SettingType | str, raw: str) -> Any:
    """Convert a stored string into the value its type tag describes.

    STRING (and any unknown tag) passes the text through unchanged.
    """
    try:
        coercer = _COERCERS.get(SettingType(setting_type))
    except ValueError:
        coercer = None
    if coercer is None:
        return raw
    return coercer(raw)


def compile_validation_rule(rule: str) -> re.Pattern:
    try:
        return re.compile(rule)
    except re.error as e:
        raise BadRequestError(
            f"Invalid validation rule: {e}",
            "قاعدة التحقق غير صالحة",
        ) from e


def check_validation_rule(rule: Optional[str], value: Optional[str]) -> None:
    """Reject ``value`` when it does not match ``rule``.

    The rule is searched anywhere in the value, so anchors (``^...$``) are
    the rule author's responsibility. An empty value skips the check.
    """
    if not rule or not value:
        return
    if compile_validation_rule(rule).search(value) is None:
        raise BadRequestError(
            "Value does not match validation rule",
            "القيمة لا تطابق قاعدة التحقق",
        )
