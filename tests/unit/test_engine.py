"""Unit tests for the plan loader entry points."""

from pathlib import Path

import orjson
import pytest

from conftest import DANIELS_URL, TEMPO_URL, MockRemoteResolver, plan_document, workout_document
from otp_app.engine import PlanLoader, load_training_plan
from otp_app.remote.documents import JsonDocumentDecoder, YamlDocumentDecoder
from otp_app.remote.transport import DefaultRemoteResolver
from otp_app.schema.context import TrainingContext


class TestPlanLoaderSetup:
    """Test loader construction and configuration."""

    def test_defaults(self) -> None:
        loader = PlanLoader()
        assert isinstance(loader.document_decoder, YamlDocumentDecoder)
        assert isinstance(loader.resolver, DefaultRemoteResolver)
        assert loader.config.resolver.concurrent is False

    def test_from_config_dir(self, tmp_path: Path) -> None:
        (tmp_path / "otp.yaml").write_text("document:\n  format: json\nresolver:\n  concurrent: true\n")
        loader = PlanLoader.from_config_dir(tmp_path, overrides={"resolver": {"max_concurrent_fetches": 2}})

        assert isinstance(loader.document_decoder, JsonDocumentDecoder)
        assert loader.config.resolver.concurrent is True
        assert loader.config.resolver.max_concurrent_fetches == 2

    def test_open_session_has_fresh_context(self, mock_resolver: MockRemoteResolver) -> None:
        loader = PlanLoader(resolver=mock_resolver)
        first, second = loader.open_session(), loader.open_session()

        assert isinstance(first.context, TrainingContext)
        assert first.context is not second.context
        assert first.resolver is mock_resolver

    @pytest.mark.asyncio
    async def test_injected_resolver_not_closed(self, mock_resolver: MockRemoteResolver) -> None:
        async with PlanLoader(resolver=mock_resolver):
            pass
        assert not mock_resolver.closed


class TestLoadTemplate:
    """Test loading a standalone workout template."""

    @pytest.mark.asyncio
    async def test_with_zone_system(self, daniels_system, mock_resolver: MockRemoteResolver) -> None:
        loader = PlanLoader(resolver=mock_resolver)
        data = orjson.dumps(workout_document("Tempo Run", "0.88vo2max"))

        template = await loader.load_template(data, zone_system=daniels_system)

        assert template.name == "Tempo Run"
        assert template.segments[0].intensity.zone_code == "T"
        assert template.segments[0].recovery.time_value == 60

    @pytest.mark.asyncio
    async def test_without_zone_system(self, mock_resolver: MockRemoteResolver) -> None:
        loader = PlanLoader(resolver=mock_resolver)
        template = await loader.load_template(orjson.dumps(workout_document("Tempo Run", "0.88vo2max")))
        assert template.segments[0].intensity.zone is None

    @pytest.mark.asyncio
    async def test_zone_reference_resolved(self, mock_resolver: MockRemoteResolver) -> None:
        data = orjson.dumps({
            "name": "Intervals",
            "segments": [{
                "intensity": {"zoneCode": "I", "zoneSystem": DANIELS_URL},
                "work": "3:00",
                "recovery": "3:00",
                "iterations": 5,
            }],
        })

        template = await PlanLoader(resolver=mock_resolver).load_template(data)

        segment = template.segments[0]
        assert segment.iterations == 5
        assert segment.intensity.value == 0.95
        assert mock_resolver.calls == [DANIELS_URL]


class TestLoadTrainingPlan:
    """Test the module-level convenience coroutine."""

    @pytest.mark.asyncio
    async def test_load(self, mock_resolver: MockRemoteResolver) -> None:
        data = orjson.dumps(plan_document([{"template": TEMPO_URL}], zone_system=DANIELS_URL))

        plan = await load_training_plan(data, resolver=mock_resolver)

        assert plan.zone_system.name == "Daniels"
        assert plan.weeks[0].days[0].workouts[0].template.name == "Tempo Run"
        assert not mock_resolver.closed

    @pytest.mark.asyncio
    async def test_owned_resolver_closed(self, monkeypatch: pytest.MonkeyPatch) -> None:
        closed = []

        async def fake_aclose(self) -> None:
            closed.append(True)

        monkeypatch.setattr(DefaultRemoteResolver, "aclose", fake_aclose)
        data = orjson.dumps(plan_document([{"template": workout_document("Inline", "0.7vo2max")}]))

        plan = await load_training_plan(data)

        assert plan.weeks[0].days[0].workouts[0].template.name == "Inline"
        assert closed == [True]
