"""
Workout measure codec.

A measure is either a duration or a distance, written on the wire as a single
string: ``"30:00"``, ``"1:30:00"``, ``"400 m"``, ``"5 km"``. The time grammar
is tried before the distance grammar.
"""

import re
from dataclasses import dataclass
from typing import Any, Optional

from ..errors import InvalidFormatError
from ..models.units import DistanceUnit
from .numbers import format_fixed

_TIME_RE = re.compile(r"^(\d+):(\d+)(?::(\d+))?$")
_DISTANCE_RE = re.compile(r"^(\d+(?:\.\d*)?|\.\d+)\s*([A-Za-z]+)$")

EXPECTED_FORMAT = "'H:MM:SS', 'M:SS' or '<number> <km|m|mi>'"


@dataclass(frozen=True)
class WorkoutMeasure:
    """Duration in seconds or distance with unit; exactly one is set."""
    seconds: Optional[int] = None
    distance: Optional[float] = None
    unit: Optional[DistanceUnit] = None

    def __post_init__(self):
        has_time = self.seconds is not None
        has_distance = self.distance is not None or self.unit is not None
        if has_time == has_distance:
            raise ValueError("WorkoutMeasure needs either seconds or distance and unit")
        if has_distance and (self.distance is None or self.unit is None):
            raise ValueError("Distance measures need both a value and a unit")
        if has_time and self.seconds < 0:
            raise ValueError(f"Duration must be non-negative, got {self.seconds}")

    @classmethod
    def time(cls, seconds: int) -> "WorkoutMeasure":
        return cls(seconds=seconds)

    @classmethod
    def of_distance(cls, value: float, unit: DistanceUnit) -> "WorkoutMeasure":
        return cls(distance=float(value), unit=unit)

    @property
    def is_time(self) -> bool:
        return self.seconds is not None

    @property
    def time_value(self) -> Optional[int]:
        """Duration in seconds, None for distances."""
        return self.seconds

    @property
    def distance_value(self) -> Optional[tuple[float, DistanceUnit]]:
        """(value, unit) pair, None for durations."""
        if self.distance is None:
            return None
        return self.distance, self.unit

    @classmethod
    def from_document(cls, raw: Any) -> "WorkoutMeasure":
        """
        Decode a measure string.

        Raises:
            InvalidFormatError: If the value matches neither grammar
        """
        if not isinstance(raw, str):
            raise InvalidFormatError(
                f"Workout measure must be a string, got {type(raw).__name__}",
                raw_value=raw,
                expected_format=EXPECTED_FORMAT,
            )

        seconds = _parse_time(raw)
        if seconds is not None:
            return cls.time(seconds)

        distance = _parse_distance(raw)
        if distance is not None:
            return cls.of_distance(*distance)

        raise InvalidFormatError(
            f"Invalid measure format: {raw!r}",
            raw_value=raw,
            expected_format=EXPECTED_FORMAT,
        )

    def to_document(self) -> str:
        if self.seconds is not None:
            return _format_time(self.seconds)
        return f"{format_fixed(self.distance)} {self.unit.value}"

    def __str__(self) -> str:
        return self.to_document()


def _parse_time(text: str) -> Optional[int]:
    """Parse 'M:SS' or 'H:MM:SS'; components are not range checked."""
    match = _TIME_RE.match(text)
    if not match:
        return None
    first, second, third = match.groups()
    if third is None:
        return int(first) * 60 + int(second)
    return int(first) * 3600 + int(second) * 60 + int(third)


def _format_time(total_seconds: int) -> str:
    hours = total_seconds // 3600
    minutes = total_seconds // 60 % 60
    seconds = total_seconds % 60

    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def _parse_distance(text: str) -> Optional[tuple[float, DistanceUnit]]:
    match = _DISTANCE_RE.match(text)
    if not match:
        return None
    unit = DistanceUnit.parse(match.group(2))
    if unit is None:
        return None
    return float(match.group(1)), unit
