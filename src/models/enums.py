"""Enumerations shared by the settings models and schemas."""

from enum import Enum


class ServiceCategory(str, Enum):
    """Service line a test type or price list belongs to."""

    LAB_TESTS = "LAB_TESTS"
    CONSULTANCY = "CONSULTANCY"
    STATIONS_APPROVAL = "STATIONS_APPROVAL"
    FIRE_SAFETY = "FIRE_SAFETY"
    GREEN_BUILDING = "GREEN_BUILDING"
    TRAINING = "TRAINING"
    SOIL_TESTING = "SOIL_TESTING"
    CONCRETE_TESTING = "CONCRETE_TESTING"
    STRUCTURAL_REVIEW = "STRUCTURAL_REVIEW"
    SEISMIC_ANALYSIS = "SEISMIC_ANALYSIS"
    THERMAL_INSULATION = "THERMAL_INSULATION"
    ACOUSTIC_TESTING = "ACOUSTIC_TESTING"
    OTHER = "OTHER"


class StandardType(str, Enum):
    EGYPTIAN = "EGYPTIAN"
    BRITISH = "BRITISH"
    AMERICAN = "AMERICAN"
    EUROPEAN = "EUROPEAN"
    INTERNATIONAL = "INTERNATIONAL"
    OTHER = "OTHER"


class SettingType(str, Enum):
    """How a system setting's string value is parsed on read."""

    STRING = "STRING"
    NUMBER = "NUMBER"
    BOOLEAN = "BOOLEAN"
    JSON = "JSON"
    DATE = "DATE"
