"""
Intensity document node.

An intensity is written as ``"0.65vo2max"``, ``{value, metric}`` or
``{zoneCode, zoneSystem}``, tried in that order. Every intensity captures the
decode context's zone-system cell so that, once the graph is resolved, a
direct value can be classified into the zone whose target it matches.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from ..codecs.fields import field_path, put_if_present, string_field
from ..codecs.intensity import DirectIntensity, decode_direct_intensity
from ..errors import InvalidFormatError, ZoneNotFoundError
from ..models.plan import Intensity
from ..models.zones import ZoneSystem
from ..remote.cells import RemoteResource
from ..remote.resolvable import Resolvable
from .context import TrainingContext

EXPECTED_FORMAT = "'<number><vo2max|hr_max>', {value, metric} or {zoneCode, zoneSystem}"


def _empty_zone_system() -> RemoteResource[ZoneSystem]:
    return RemoteResource(ZoneSystem)


@dataclass
class IntensityDocument(Resolvable):
    """Direct intensity or zone reference, as written in a segment."""
    direct: Optional[DirectIntensity] = None
    zone_code: Optional[str] = None
    zone_system: RemoteResource[ZoneSystem] = field(default_factory=_empty_zone_system)
    context_zone_system: RemoteResource[ZoneSystem] = field(
        default_factory=_empty_zone_system, repr=False, compare=False
    )

    @classmethod
    def from_document(cls, raw: Any, context: Optional[TrainingContext] = None) -> "IntensityDocument":
        """
        Decode an intensity.

        Raises:
            InvalidFormatError: If no accepted form matches
        """
        context_cell = context.zone_system if context is not None else _empty_zone_system()

        direct = decode_direct_intensity(raw)
        if direct is not None:
            return cls(direct=direct, context_zone_system=context_cell)

        if isinstance(raw, dict) and "zoneCode" in raw:
            zone_code = string_field(raw, "zoneCode", required=True)
            with field_path("zoneSystem"):
                zone_system = RemoteResource.from_document(ZoneSystem, raw.get("zoneSystem"), context)
            return cls(zone_code=zone_code, zone_system=zone_system, context_zone_system=context_cell)

        raise InvalidFormatError(
            f"Invalid intensity format: {raw!r}",
            raw_value=raw,
            expected_format=EXPECTED_FORMAT,
        )

    def to_document(self) -> Any:
        if self.direct is not None:
            return self.direct.to_document()
        document: dict[str, Any] = {"zoneCode": self.zone_code}
        put_if_present(document, "zoneSystem", self.zone_system.to_document())
        return document

    def to_model(self) -> Intensity:
        """
        Build the resolved intensity.

        Direct values are classified by exact (target intensity, metric)
        match against the context zone system. Zone references look up
        their code in their own zone system, or the context one if omitted.

        Raises:
            ZoneNotFoundError: If a zone reference cannot be satisfied
        """
        if self.direct is not None:
            return Intensity.direct(
                self.direct.value,
                self.direct.metric,
                zone_system=self.context_zone_system.value,
            )

        zone_system = self.zone_system.value or self.context_zone_system.value
        if zone_system is None:
            raise ZoneNotFoundError(
                f"Zone {self.zone_code!r} referenced without a zone system",
                zone_code=self.zone_code,
            )
        return Intensity.from_zone(zone_system, self.zone_code)
