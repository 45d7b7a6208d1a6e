"""
Decode context shared across one load.

The plan root publishes its zone-system reference here before any of its
weeks are decoded, so intensities further down the document can capture
"the zone system in effect" even though it may still be an unresolved
reference at that point.
"""

from typing import Optional

from ..errors import ContractViolation
from ..models.zones import ZoneSystem
from ..remote.cells import RemoteResource


class TrainingContext:
    """Single-writer side channel carrying the active zone system."""

    def __init__(self, zone_system: Optional[ZoneSystem] = None) -> None:
        self._zone_system: RemoteResource[ZoneSystem] = RemoteResource(ZoneSystem, value=zone_system)
        self._published = zone_system is not None
        self._frozen = False

    @property
    def zone_system(self) -> RemoteResource[ZoneSystem]:
        """The zone-system cell in effect; empty if none was published."""
        return self._zone_system

    @property
    def frozen(self) -> bool:
        return self._frozen

    def publish_zone_system(self, cell: RemoteResource[ZoneSystem]) -> None:
        """
        Publish the plan's zone-system cell.

        Raises:
            ContractViolation: If a zone system was already published or the
                context is frozen
        """
        if self._frozen:
            raise ContractViolation("Decode context is frozen; zone system can no longer be published")
        if self._published:
            raise ContractViolation("Zone system was already published to this decode context")
        self._zone_system = cell
        self._published = True

    def freeze(self) -> None:
        """Mark the end of the decode phase; the context is read-only afterwards."""
        self._frozen = True
