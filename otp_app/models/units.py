"""Enumerations for intensity metrics and distance units."""

from enum import Enum
from typing import Optional


class IntensityMetric(str, Enum):
    """Ways of measuring workout intensity."""
    VO2MAX = "vo2max"        # Fraction of VO2max
    HR_MAX = "hr_max"        # Fraction of maximum heart rate

    @classmethod
    def parse(cls, text: str) -> Optional["IntensityMetric"]:
        """Case-insensitive exact match against the metric names."""
        lowered = text.lower()
        for metric in cls:
            if metric.value == lowered:
                return metric
        return None


class DistanceUnit(str, Enum):
    """Length units accepted in distance measures, valued by their symbol."""
    KILOMETERS = "km"
    METERS = "m"
    MILES = "mi"

    @classmethod
    def parse(cls, text: str) -> Optional["DistanceUnit"]:
        """Resolve a symbol or long unit name, case-insensitively."""
        return _UNIT_ALIASES.get(text.lower())


_UNIT_ALIASES = {
    "km": DistanceUnit.KILOMETERS,
    "kilometers": DistanceUnit.KILOMETERS,
    "m": DistanceUnit.METERS,
    "meters": DistanceUnit.METERS,
    "mi": DistanceUnit.MILES,
    "miles": DistanceUnit.MILES,
}
