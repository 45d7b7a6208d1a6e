"""
Direct intensity codec.

Direct intensities are written either as a single string such as
``"0.65vo2max"`` / ``"0.80 hr_max"`` or as a ``{value, metric}`` mapping.
Zone references (``{zoneCode, zoneSystem}``) are handled by the schema layer
because their zone system may be a remote reference.
"""

import re
from dataclasses import dataclass
from typing import Any, Optional

from ..errors import InvalidFormatError
from ..models.units import IntensityMetric
from .numbers import NUMBER_PATTERN, format_significant

_INTENSITY_RE = re.compile(rf"^({NUMBER_PATTERN})\s*([A-Za-z0-9_]+)$")


@dataclass(frozen=True)
class DirectIntensity:
    """Intensity value expressed against a metric."""
    value: float
    metric: IntensityMetric

    def to_document(self) -> str:
        return f"{format_significant(self.value)}{self.metric.value}"

    def __str__(self) -> str:
        return self.to_document()


def decode_direct_intensity(raw: Any) -> Optional[DirectIntensity]:
    """
    Decode the string or ``{value, metric}`` forms.

    Returns None when ``raw`` has neither shape so the caller can try the
    zone reference form next.

    Raises:
        InvalidFormatError: If the shape matches but its content is invalid
    """
    if isinstance(raw, str):
        return _parse_intensity_string(raw)

    if isinstance(raw, dict) and "value" in raw:
        value = raw["value"]
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            raise InvalidFormatError(
                f"Intensity value must be a number, got {value!r}",
                raw_value=raw,
                expected_format="{value: <number>, metric: vo2max|hr_max}",
            )
        metric_raw = raw.get("metric")
        metric = IntensityMetric.parse(metric_raw) if isinstance(metric_raw, str) else None
        if metric is None:
            raise InvalidFormatError(
                f"Invalid intensity metric: {metric_raw!r}",
                raw_value=raw,
                expected_format="{value: <number>, metric: vo2max|hr_max}",
            )
        return DirectIntensity(value=float(value), metric=metric)

    return None


def _parse_intensity_string(text: str) -> DirectIntensity:
    match = _INTENSITY_RE.match(text.strip())
    metric = IntensityMetric.parse(match.group(2)) if match else None
    if metric is None:
        raise InvalidFormatError(
            f"Invalid intensity format: {text!r}",
            raw_value=text,
            expected_format="'<number><vo2max|hr_max>'",
        )
    return DirectIntensity(value=float(match.group(1)), metric=metric)
