"""
Training plan document nodes.

The plan root decodes its zone-system reference first and publishes it to
the decode context before decoding any week, and declares it before
``weeks`` so the resolution pass fetches it first as well.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from ..codecs.fields import (
    decode_field,
    decode_list,
    expect_mapping,
    field_path,
    put_if_present,
    string_field,
    string_list_field,
)
from ..codecs.volume import TargetVolume
from ..errors import MissingFieldError
from ..models.plan import Day, ScheduledWorkout, TrainingPlan, Week
from ..models.zones import ZoneSystem
from ..remote.cells import RemoteResource, RemoteResourceList
from ..remote.resolvable import Resolvable
from .context import TrainingContext
from .workout import WorkoutTemplateDocument


def _no_alternates() -> RemoteResourceList[WorkoutTemplateDocument]:
    return RemoteResourceList(WorkoutTemplateDocument)


def _no_zone_system() -> RemoteResource[ZoneSystem]:
    return RemoteResource(ZoneSystem)


@dataclass
class ScheduledWorkoutDocument(Resolvable):
    """Workout slot whose template and alternates may be references."""
    template: RemoteResource[WorkoutTemplateDocument]
    alternates: RemoteResourceList[WorkoutTemplateDocument] = field(default_factory=_no_alternates)
    target_volume: Optional[TargetVolume] = None
    notes: Optional[str] = None

    @classmethod
    def from_document(cls, raw: Any, context: Optional[TrainingContext] = None) -> "ScheduledWorkoutDocument":
        raw = expect_mapping(raw, "Scheduled workout")
        if raw.get("template") is None:
            raise MissingFieldError("Missing required field: template", field_name="template").with_path("template")

        with field_path("template"):
            template = RemoteResource.from_document(WorkoutTemplateDocument, raw["template"], context)
        with field_path("alternates"):
            alternates = RemoteResourceList.from_document(WorkoutTemplateDocument, raw.get("alternates"), context)

        return cls(
            template=template,
            alternates=alternates,
            target_volume=decode_field(raw, "targetVolume", TargetVolume.from_document),
            notes=string_field(raw, "notes"),
        )

    def to_document(self) -> dict[str, Any]:
        document: dict[str, Any] = {"template": self.template.to_document()}
        put_if_present(document, "alternates", self.alternates.to_document())
        if self.target_volume is not None:
            document["targetVolume"] = self.target_volume.to_document()
        put_if_present(document, "notes", self.notes)
        return document

    def to_model(self) -> ScheduledWorkout:
        with field_path("template"):
            template = self.template.value.to_model()

        alternates = None
        resolved_alternates = self.alternates.values
        if resolved_alternates is not None:
            alternates = []
            for i, alternate in enumerate(resolved_alternates):
                with field_path("alternates", i):
                    alternates.append(alternate.to_model())

        return ScheduledWorkout(
            template=template,
            alternates=alternates,
            target_volume=self.target_volume,
            notes=self.notes,
        )


@dataclass
class DayDocument(Resolvable):
    workouts: list[ScheduledWorkoutDocument]
    notes: Optional[str] = None

    @classmethod
    def from_document(cls, raw: Any, context: Optional[TrainingContext] = None) -> "DayDocument":
        raw = expect_mapping(raw, "Day")
        return cls(
            workouts=decode_list(
                raw, "workouts", lambda value: ScheduledWorkoutDocument.from_document(value, context), required=True
            ),
            notes=string_field(raw, "notes"),
        )

    def to_document(self) -> dict[str, Any]:
        document: dict[str, Any] = {"workouts": [workout.to_document() for workout in self.workouts]}
        put_if_present(document, "notes", self.notes)
        return document

    def to_model(self) -> Day:
        workouts = []
        for i, workout in enumerate(self.workouts):
            with field_path("workouts", i):
                workouts.append(workout.to_model())
        return Day(workouts=workouts, notes=self.notes)


@dataclass
class WeekDocument(Resolvable):
    days: list[DayDocument]
    notes: Optional[str] = None

    @classmethod
    def from_document(cls, raw: Any, context: Optional[TrainingContext] = None) -> "WeekDocument":
        raw = expect_mapping(raw, "Week")
        return cls(
            days=decode_list(raw, "days", lambda value: DayDocument.from_document(value, context), required=True),
            notes=string_field(raw, "notes"),
        )

    def to_document(self) -> dict[str, Any]:
        document: dict[str, Any] = {"days": [day.to_document() for day in self.days]}
        put_if_present(document, "notes", self.notes)
        return document

    def to_model(self) -> Week:
        days = []
        for i, day in enumerate(self.days):
            with field_path("days", i):
                days.append(day.to_model())
        return Week(days=days, notes=self.notes)


@dataclass
class TrainingPlanDocument(Resolvable):
    """Plan root as written on the wire."""
    name: str
    description: str
    author: Optional[str] = None
    zone_system: RemoteResource[ZoneSystem] = field(default_factory=_no_zone_system)
    weeks: list[WeekDocument] = field(default_factory=list)
    tags: Optional[list[str]] = None

    @classmethod
    def from_document(cls, raw: Any, context: Optional[TrainingContext] = None) -> "TrainingPlanDocument":
        """
        Decode a plan, publishing its zone system before decoding weeks.

        Raises:
            DecodeError: If any part of the plan is malformed
            ContractViolation: If the context already carries a zone system
        """
        if context is None:
            context = TrainingContext()

        raw = expect_mapping(raw, "Training plan")
        name = string_field(raw, "name", required=True)
        description = string_field(raw, "description", required=True)
        author = string_field(raw, "author")

        with field_path("zoneSystem"):
            zone_system = RemoteResource.from_document(ZoneSystem, raw.get("zoneSystem"), context)
        context.publish_zone_system(zone_system)

        weeks = decode_list(raw, "weeks", lambda value: WeekDocument.from_document(value, context), required=True)

        return cls(
            name=name,
            description=description,
            author=author,
            zone_system=zone_system,
            weeks=weeks,
            tags=string_list_field(raw, "tags"),
        )

    def to_document(self) -> dict[str, Any]:
        document: dict[str, Any] = {
            "name": self.name,
            "description": self.description,
        }
        put_if_present(document, "author", self.author)
        put_if_present(document, "zoneSystem", self.zone_system.to_document())
        document["weeks"] = [week.to_document() for week in self.weeks]
        put_if_present(document, "tags", self.tags)
        return document

    def to_model(self) -> TrainingPlan:
        weeks = []
        for i, week in enumerate(self.weeks):
            with field_path("weeks", i):
                weeks.append(week.to_model())
        return TrainingPlan(
            name=self.name,
            description=self.description,
            weeks=weeks,
            author=self.author,
            tags=list(self.tags) if self.tags is not None else None,
            zone_system=self.zone_system.value,
        )
