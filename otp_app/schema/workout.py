"""
Workout template and segment document nodes.
"""

from dataclasses import dataclass
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
from ..codecs.measure import WorkoutMeasure
from ..errors import InvalidFormatError
from ..models.plan import WorkoutSegment, WorkoutTemplate
from ..remote.resolvable import Resolvable
from .context import TrainingContext
from .intensity import IntensityDocument


def _decode_iterations(value: Any) -> int:
    if not isinstance(value, int) or isinstance(value, bool) or value < 1:
        raise InvalidFormatError(
            f"Iterations must be a positive integer, got {value!r}",
            raw_value=value,
            expected_format="integer >= 1",
        )
    return value


def _encode_measure(measure: Optional[WorkoutMeasure]) -> Optional[str]:
    return measure.to_document() if measure is not None else None


@dataclass
class WorkoutSegmentDocument(Resolvable):
    """Segment as written in a workout template."""
    intensity: IntensityDocument
    work: WorkoutMeasure
    recovery: Optional[WorkoutMeasure] = None
    iterations: int = 1
    label: Optional[str] = None

    @classmethod
    def from_document(cls, raw: Any, context: Optional[TrainingContext] = None) -> "WorkoutSegmentDocument":
        raw = expect_mapping(raw, "Workout segment")
        return cls(
            intensity=decode_field(
                raw, "intensity", lambda value: IntensityDocument.from_document(value, context), required=True
            ),
            work=decode_field(raw, "work", WorkoutMeasure.from_document, required=True),
            recovery=decode_field(raw, "recovery", WorkoutMeasure.from_document),
            iterations=decode_field(raw, "iterations", _decode_iterations) or 1,
            label=string_field(raw, "label"),
        )

    def to_document(self) -> dict[str, Any]:
        document: dict[str, Any] = {
            "intensity": self.intensity.to_document(),
            "work": self.work.to_document(),
        }
        put_if_present(document, "recovery", _encode_measure(self.recovery))
        if self.iterations > 1:
            document["iterations"] = self.iterations
        put_if_present(document, "label", self.label)
        return document

    def to_model(self) -> WorkoutSegment:
        with field_path("intensity"):
            intensity = self.intensity.to_model()
        return WorkoutSegment(
            intensity=intensity,
            work=self.work,
            recovery=self.recovery,
            iterations=self.iterations,
            label=self.label,
        )


@dataclass
class WorkoutTemplateDocument(Resolvable):
    """Workout template as written inline or in its own document."""
    name: str
    segments: list[WorkoutSegmentDocument]
    description: Optional[str] = None
    warmup: Optional[WorkoutMeasure] = None
    cooldown: Optional[WorkoutMeasure] = None
    tags: Optional[list[str]] = None

    @classmethod
    def from_document(cls, raw: Any, context: Optional[TrainingContext] = None) -> "WorkoutTemplateDocument":
        raw = expect_mapping(raw, "Workout template")
        return cls(
            name=string_field(raw, "name", required=True),
            description=string_field(raw, "description"),
            warmup=decode_field(raw, "warmup", WorkoutMeasure.from_document),
            segments=decode_list(
                raw, "segments", lambda value: WorkoutSegmentDocument.from_document(value, context), required=True
            ),
            cooldown=decode_field(raw, "cooldown", WorkoutMeasure.from_document),
            tags=string_list_field(raw, "tags"),
        )

    def to_document(self) -> dict[str, Any]:
        document: dict[str, Any] = {"name": self.name}
        put_if_present(document, "description", self.description)
        put_if_present(document, "warmup", _encode_measure(self.warmup))
        document["segments"] = [segment.to_document() for segment in self.segments]
        put_if_present(document, "cooldown", _encode_measure(self.cooldown))
        put_if_present(document, "tags", self.tags)
        return document

    def to_model(self) -> WorkoutTemplate:
        segments = []
        for i, segment in enumerate(self.segments):
            with field_path("segments", i):
                segments.append(segment.to_model())
        return WorkoutTemplate(
            name=self.name,
            segments=segments,
            description=self.description,
            warmup=self.warmup,
            cooldown=self.cooldown,
            tags=list(self.tags) if self.tags is not None else None,
        )
