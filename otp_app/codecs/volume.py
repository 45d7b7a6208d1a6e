"""
Target volume codec.

A target volume is a share of the weekly volume (``"8%"``) or an absolute
workout measure (``"5 km"``, ``"45:00"``). Percentages are stored as a
fraction; a string ending in ``%`` is never read as a measure.
"""

from dataclasses import dataclass
from typing import Any, Optional

from ..errors import InvalidFormatError
from .measure import WorkoutMeasure
from .numbers import format_significant, parse_number


@dataclass(frozen=True)
class TargetVolume:
    """Percentage (as a 0-1 fraction) or absolute measure; exactly one is set."""
    fraction: Optional[float] = None
    measure: Optional[WorkoutMeasure] = None

    def __post_init__(self):
        if (self.fraction is None) == (self.measure is None):
            raise ValueError("TargetVolume needs either a fraction or a measure")

    @classmethod
    def percentage(cls, fraction: float) -> "TargetVolume":
        return cls(fraction=fraction)

    @classmethod
    def absolute(cls, measure: WorkoutMeasure) -> "TargetVolume":
        return cls(measure=measure)

    @property
    def is_percentage(self) -> bool:
        return self.fraction is not None

    @classmethod
    def from_document(cls, raw: Any) -> "TargetVolume":
        """
        Decode a target volume string.

        Raises:
            InvalidFormatError: If the value is neither a percentage nor a measure
        """
        if isinstance(raw, str) and raw.endswith("%"):
            percent = parse_number(raw[:-1])
            if percent is None or not 0 <= percent <= 100:
                raise InvalidFormatError(
                    f"Invalid percentage: {raw!r}",
                    raw_value=raw,
                    expected_format="'<number>%' between 0% and 100%",
                )
            return cls.percentage(percent / 100.0)

        return cls.absolute(WorkoutMeasure.from_document(raw))

    def to_document(self) -> str:
        if self.fraction is not None:
            return f"{format_significant(self.fraction * 100)}%"
        return self.measure.to_document()

    def __str__(self) -> str:
        return self.to_document()
