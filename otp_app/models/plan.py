"""
Resolved training plan models.

The public view of a plan once every reference has been fetched: plain,
immutable values with no notion of locators or pending resolution.
"""

from dataclasses import dataclass
from typing import Optional

from ..codecs.measure import WorkoutMeasure
from ..codecs.volume import TargetVolume
from .units import IntensityMetric
from .zones import ZoneDefinition, ZoneSystem


@dataclass(frozen=True)
class Intensity:
    """Segment intensity with the zone it falls into, if known."""
    value: float
    metric: IntensityMetric
    zone_code: Optional[str] = None
    zone: Optional[ZoneDefinition] = None

    @classmethod
    def direct(cls, value: float, metric: IntensityMetric,
               zone_system: Optional[ZoneSystem] = None) -> "Intensity":
        """Direct value, classified against ``zone_system`` by exact target match."""
        zone = zone_system.zone_for_intensity(value, metric) if zone_system else None
        return cls(
            value=value,
            metric=metric,
            zone_code=zone.code if zone else None,
            zone=zone,
        )

    @classmethod
    def from_zone(cls, zone_system: ZoneSystem, zone_code: str) -> "Intensity":
        """
        Intensity at the target of a named zone.

        Raises:
            ZoneNotFoundError: If the zone system has no such code
        """
        zone = zone_system.zone_for_code(zone_code)
        return cls(
            value=zone.target_intensity,
            metric=zone.metric,
            zone_code=zone_code,
            zone=zone,
        )


@dataclass(frozen=True)
class WorkoutSegment:
    """Repeatable block of work with optional recovery."""
    intensity: Intensity
    work: WorkoutMeasure
    recovery: Optional[WorkoutMeasure] = None
    iterations: int = 1
    label: Optional[str] = None


@dataclass(frozen=True)
class WorkoutTemplate:
    """Structured workout."""
    name: str
    segments: list[WorkoutSegment]
    description: Optional[str] = None
    warmup: Optional[WorkoutMeasure] = None
    cooldown: Optional[WorkoutMeasure] = None
    tags: Optional[list[str]] = None


@dataclass(frozen=True)
class ScheduledWorkout:
    """Workout placed on a day, with optional alternates."""
    template: WorkoutTemplate
    alternates: Optional[list[WorkoutTemplate]] = None
    target_volume: Optional[TargetVolume] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class Day:
    workouts: list[ScheduledWorkout]
    notes: Optional[str] = None


@dataclass(frozen=True)
class Week:
    days: list[Day]
    notes: Optional[str] = None


@dataclass(frozen=True)
class TrainingPlan:
    """Fully resolved training plan."""
    name: str
    description: str
    weeks: list[Week]
    author: Optional[str] = None
    tags: Optional[list[str]] = None
    zone_system: Optional[ZoneSystem] = None
