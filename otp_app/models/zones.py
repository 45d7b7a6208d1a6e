"""
Training zone systems.

A zone system maps short codes ("E", "T", "Z2") to zone definitions. Zone
systems are plain values: they hold no references of their own, so they are
shared as-is between the wire-level graph and the resolved public view.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

from ..codecs.fields import (
    decode_field,
    decode_number,
    expect_mapping,
    field_path,
    put_if_present,
    string_field,
)
from ..errors import InvalidFormatError, ZoneNotFoundError
from .units import IntensityMetric


@dataclass(frozen=True)
class ZoneDefinition:
    """A single training zone."""
    code: str                                        # Short code, e.g. "E", "T"
    name: str
    metric: IntensityMetric
    target_intensity: float                          # Fraction of the metric
    description: Optional[str] = None
    intensity_range: Optional[tuple[float, float]] = None

    def contains(self, intensity: float) -> bool:
        """True if ``intensity`` falls inside the closed intensity range."""
        if self.intensity_range is None:
            return intensity == self.target_intensity
        low, high = self.intensity_range
        return low <= intensity <= high

    @classmethod
    def from_document(cls, raw: Any) -> "ZoneDefinition":
        raw = expect_mapping(raw, "Zone definition")
        return cls(
            code=string_field(raw, "code", required=True),
            name=string_field(raw, "name", required=True),
            metric=decode_field(raw, "metric", _decode_metric, required=True),
            target_intensity=decode_field(raw, "targetIntensity", decode_number, required=True),
            description=string_field(raw, "description"),
            intensity_range=decode_field(raw, "intensityRange", _decode_range),
        )

    def to_document(self) -> dict[str, Any]:
        document: dict[str, Any] = {
            "code": self.code,
            "name": self.name,
        }
        put_if_present(document, "description", self.description)
        document["metric"] = self.metric.value
        document["targetIntensity"] = self.target_intensity
        if self.intensity_range is not None:
            document["intensityRange"] = list(self.intensity_range)
        return document


@dataclass(frozen=True)
class ZoneSystem:
    """Named set of zone definitions with unique codes."""
    name: str
    zones: Mapping[str, ZoneDefinition] = field(default_factory=dict)
    description: Optional[str] = None

    def __post_init__(self):
        for code, zone in self.zones.items():
            if code != zone.code:
                raise ValueError(f"Zone keyed by {code!r} declares code {zone.code!r}")
        object.__setattr__(self, "zones", MappingProxyType(dict(self.zones)))

    @classmethod
    def create(cls, name: str, zones: list[ZoneDefinition],
               description: Optional[str] = None) -> "ZoneSystem":
        """Build a zone system from a list, rejecting duplicate codes."""
        indexed: dict[str, ZoneDefinition] = {}
        for zone in zones:
            if zone.code in indexed:
                raise ValueError(f"Duplicate zone code: {zone.code}")
            indexed[zone.code] = zone
        return cls(name=name, zones=indexed, description=description)

    def zone_for_code(self, code: str) -> ZoneDefinition:
        """
        Get a zone definition by code.

        Raises:
            ZoneNotFoundError: If no zone has that code
        """
        zone = self.zones.get(code)
        if zone is None:
            raise ZoneNotFoundError(
                f"Zone {code!r} not found in zone system {self.name!r}",
                zone_code=code,
                zone_system=self.name,
            )
        return zone

    def zone_for_intensity(self, intensity: float, metric: IntensityMetric) -> Optional[ZoneDefinition]:
        """Zone whose target intensity and metric match exactly, if any."""
        for zone in self.all_zones:
            if zone.metric == metric and zone.target_intensity == intensity:
                return zone
        return None

    @property
    def all_zones(self) -> list[ZoneDefinition]:
        """All zones sorted by ascending target intensity."""
        return sorted(self.zones.values(), key=lambda zone: zone.target_intensity)

    @classmethod
    def from_document(cls, raw: Any, context: Any = None) -> "ZoneSystem":
        """
        Decode a zone system document.

        ``zones`` may be a mapping of code to definition or a list of
        definitions. The decode context is accepted for symmetry with the
        other document nodes and is not used.
        """
        raw = expect_mapping(raw, "Zone system")
        name = string_field(raw, "name", required=True)
        description = string_field(raw, "description")
        zones = decode_field(raw, "zones", _decode_zones, required=True)
        return cls(name=name, zones=zones, description=description)

    def to_document(self) -> dict[str, Any]:
        document: dict[str, Any] = {"name": self.name}
        put_if_present(document, "description", self.description)
        document["zones"] = {code: zone.to_document() for code, zone in self.zones.items()}
        return document


def _decode_metric(value: Any) -> IntensityMetric:
    metric = IntensityMetric.parse(value) if isinstance(value, str) else None
    if metric is None:
        raise InvalidFormatError(
            f"Invalid intensity metric: {value!r}",
            raw_value=value,
            expected_format="vo2max|hr_max",
        )
    return metric


def _decode_range(value: Any) -> tuple[float, float]:
    if not isinstance(value, list) or len(value) != 2:
        raise InvalidFormatError(
            f"Intensity range must be a [low, high] pair, got {value!r}",
            raw_value=value,
            expected_format="[low, high]",
        )
    low, high = decode_number(value[0]), decode_number(value[1])
    if low > high:
        raise InvalidFormatError(
            f"Intensity range lower bound {low} exceeds upper bound {high}",
            raw_value=value,
            expected_format="[low, high]",
        )
    return low, high


def _decode_zones(value: Any) -> dict[str, ZoneDefinition]:
    zones: dict[str, ZoneDefinition] = {}

    if isinstance(value, dict):
        for key, item in value.items():
            with field_path(key):
                zone = ZoneDefinition.from_document(item)
                if zone.code != key:
                    raise InvalidFormatError(
                        f"Zone keyed by {key!r} declares code {zone.code!r}",
                        raw_value=item,
                    )
            zones[key] = zone
        return zones

    if isinstance(value, list):
        for i, item in enumerate(value):
            with field_path(i):
                zone = ZoneDefinition.from_document(item)
                if zone.code in zones:
                    raise InvalidFormatError(f"Duplicate zone code: {zone.code}", raw_value=item)
            zones[zone.code] = zone
        return zones

    raise InvalidFormatError(
        f"Zones must be a mapping or a list, got {type(value).__name__}",
        raw_value=value,
        expected_format="mapping or list",
    )
