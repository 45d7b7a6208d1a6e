"""Pytest configuration and shared fixtures."""

import asyncio
from typing import Any, Optional, Union

import orjson
import pytest

from otp_app.errors import FetchError, ResourceNotFoundError
from otp_app.models.units import IntensityMetric
from otp_app.models.zones import ZoneDefinition, ZoneSystem
from otp_app.remote.transport import RemoteResolver

DANIELS_URL = "https://api.example.com/systems/daniels"
HR_URL = "https://api.example.com/systems/hr"
EASY_RUN_URL = "https://api.example.com/workouts/easy-run"
TEMPO_URL = "https://api.example.com/workouts/tempo"
HILLS_URL = "https://api.example.com/workouts/hills"
INTERVALS_URL = "https://api.example.com/workouts/intervals"


class MockRemoteResolver(RemoteResolver):
    """In-memory transport that records every fetch."""

    def __init__(self, documents: Optional[dict[str, Union[bytes, str, dict[str, Any]]]] = None,
                 delay: float = 0.0, failures: Optional[dict[str, FetchError]] = None):
        self.documents = {locator: _as_bytes(data) for locator, data in (documents or {}).items()}
        self.delay = delay
        self.failures = failures or {}
        self.calls: list[str] = []
        self.closed = False

    async def fetch(self, locator: str) -> bytes:
        self.calls.append(locator)
        if self.delay:
            await asyncio.sleep(self.delay)
        if locator in self.failures:
            raise self.failures[locator]
        if locator not in self.documents:
            raise ResourceNotFoundError(f"No document at {locator}", locator=locator)
        return self.documents[locator]

    async def aclose(self) -> None:
        self.closed = True

    def fetch_count(self, locator: Optional[str] = None) -> int:
        if locator is None:
            return len(self.calls)
        return self.calls.count(locator)


def _as_bytes(data: Union[bytes, str, dict[str, Any]]) -> bytes:
    if isinstance(data, bytes):
        return data
    if isinstance(data, str):
        return data.encode("utf-8")
    return orjson.dumps(data)


def build_daniels_system() -> ZoneSystem:
    return ZoneSystem.create(
        "Daniels",
        [
            ZoneDefinition("E", "Easy", IntensityMetric.VO2MAX, 0.65, "Easy/Recovery pace", (0.59, 0.74)),
            ZoneDefinition("M", "Marathon", IntensityMetric.VO2MAX, 0.75, "Marathon training pace", (0.75, 0.84)),
            ZoneDefinition("T", "Threshold", IntensityMetric.VO2MAX, 0.88, "Lactate threshold training", (0.85, 0.91)),
            ZoneDefinition("I", "Interval", IntensityMetric.VO2MAX, 0.95, "VO2max intervals", (0.92, 0.97)),
            ZoneDefinition("R", "Repetition", IntensityMetric.VO2MAX, 1.0, "Speed work", (0.98, 1.0)),
        ],
        description="Daniels Running Formula Training Zones",
    )


def build_hr_system() -> ZoneSystem:
    return ZoneSystem.create(
        "Heart Rate Zones",
        [
            ZoneDefinition("Z1", "Recovery", IntensityMetric.HR_MAX, 0.60, "Very light intensity", (0.50, 0.60)),
            ZoneDefinition("Z2", "Aerobic", IntensityMetric.HR_MAX, 0.70, "Light aerobic", (0.60, 0.70)),
            ZoneDefinition("Z3", "Tempo", IntensityMetric.HR_MAX, 0.80, "Moderate intensity", (0.70, 0.80)),
            ZoneDefinition("Z4", "Threshold", IntensityMetric.HR_MAX, 0.90, "Hard intensity", (0.80, 0.90)),
            ZoneDefinition("Z5", "Maximum", IntensityMetric.HR_MAX, 0.95, "Maximum effort", (0.90, 1.0)),
        ],
        description="5-Zone Heart Rate Training System",
    )


def workout_document(name: str, intensity: str, work: str = "5:00",
                     recovery: Optional[str] = "1:00") -> dict[str, Any]:
    segment: dict[str, Any] = {"intensity": intensity, "work": work}
    if recovery is not None:
        segment["recovery"] = recovery
    return {"name": name, "segments": [segment]}


def plan_document(workouts: list[dict[str, Any]], zone_system: Any = None,
                  name: str = "Test Plan") -> dict[str, Any]:
    """Single-week, single-day plan holding ``workouts``."""
    document: dict[str, Any] = {"name": name, "description": "Plan used in tests"}
    if zone_system is not None:
        document["zoneSystem"] = zone_system
    document["weeks"] = [{"days": [{"workouts": workouts}]}]
    return document


@pytest.fixture
def daniels_system() -> ZoneSystem:
    """Daniels running zones (vo2max)."""
    return build_daniels_system()


@pytest.fixture
def hr_system() -> ZoneSystem:
    """Five-zone heart rate system (hr_max)."""
    return build_hr_system()


@pytest.fixture
def remote_documents() -> dict[str, Any]:
    """Documents served by the mock transport."""
    return {
        DANIELS_URL: build_daniels_system().to_document(),
        HR_URL: build_hr_system().to_document(),
        EASY_RUN_URL: {
            "name": "Easy Run",
            "description": "Basic easy run",
            "segments": [{"intensity": "0.65 hr_max", "work": "30:00"}],
        },
        TEMPO_URL: workout_document("Tempo Run", "0.88 vo2max"),
        HILLS_URL: workout_document("Hill Workout", "1.0 vo2max", work="1:00", recovery="2:00"),
        INTERVALS_URL: workout_document("Interval Session", "0.95 vo2max", work="3:00", recovery="3:00"),
    }


@pytest.fixture
def mock_resolver(remote_documents: dict[str, Any]) -> MockRemoteResolver:
    """Counting in-memory transport over ``remote_documents``."""
    return MockRemoteResolver(remote_documents)
