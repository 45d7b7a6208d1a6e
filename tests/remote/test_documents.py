"""Tests for the JSON and YAML document formats."""

import pytest

from otp_app.errors import DocumentSyntaxError
from otp_app.models.zones import ZoneSystem
from otp_app.remote.documents import JsonDocumentDecoder, YamlDocumentDecoder, get_document_decoder
from otp_app.schema.workout import WorkoutTemplateDocument

TEMPO_YAML = """
name: Tempo Run
warmup: 10:00
segments:
  - intensity: 0.88vo2max
    work: 20:00
    recovery: 1:30:00
  - intensity: {value: 0.75, metric: vo2max}
    work: 5 km
    iterations: 2
cooldown: 10:00
"""


class TestYamlDocuments:
    """Test YAML parsing rules."""

    def test_durations_stay_strings(self) -> None:
        """Test that sexagesimal-looking values are not read as numbers."""
        decoder = YamlDocumentDecoder()
        assert decoder.load("work: 30:00") == {"work": "30:00"}
        assert decoder.load("work: 1:30:00") == {"work": "1:30:00"}

    def test_plain_numbers_still_parse(self) -> None:
        decoder = YamlDocumentDecoder()
        assert decoder.load("a: 3\nb: 0.65\nc: -2\nd: 1e3") == {"a": 3, "b": 0.65, "c": -2, "d": 1000.0}
        assert decoder.load("flag: true") == {"flag": True}

    def test_decode_template(self) -> None:
        template = YamlDocumentDecoder().decode(WorkoutTemplateDocument, TEMPO_YAML)

        assert template.name == "Tempo Run"
        assert template.warmup.time_value == 600
        assert template.segments[0].work.time_value == 1200
        assert template.segments[0].recovery.time_value == 5400
        assert template.segments[1].iterations == 2
        assert template.segments[1].intensity.direct.value == 0.75

    def test_reads_json(self) -> None:
        decoder = YamlDocumentDecoder()
        assert decoder.load('{"work": "30:00", "iterations": 4}') == {"work": "30:00", "iterations": 4}

    def test_syntax_error(self) -> None:
        with pytest.raises(DocumentSyntaxError) as exc_info:
            YamlDocumentDecoder().load("name: [unclosed")
        assert exc_info.value.document_format == "yaml"

    def test_unsafe_tags_rejected(self) -> None:
        with pytest.raises(DocumentSyntaxError):
            YamlDocumentDecoder().load("!!python/object/apply:os.system ['true']")

    def test_encode_keeps_field_order(self) -> None:
        decoder = YamlDocumentDecoder()
        template = decoder.decode(WorkoutTemplateDocument, TEMPO_YAML)
        encoded = decoder.encode(template).decode("utf-8")

        assert encoded.index("name:") < encoded.index("warmup:") < encoded.index("segments:")
        assert decoder.decode(WorkoutTemplateDocument, encoded) == template


class TestJsonDocuments:
    """Test JSON parsing via orjson."""

    def test_round_trip(self, daniels_system: ZoneSystem) -> None:
        decoder = JsonDocumentDecoder()
        encoded = decoder.encode(daniels_system)
        assert decoder.decode(ZoneSystem, encoded) == daniels_system

    def test_syntax_error(self) -> None:
        with pytest.raises(DocumentSyntaxError) as exc_info:
            JsonDocumentDecoder().load(b"{name: tempo}")
        assert exc_info.value.document_format == "json"


class TestDecoderFactory:
    """Test format selection."""

    def test_default_is_yaml(self) -> None:
        assert isinstance(get_document_decoder(), YamlDocumentDecoder)

    def test_by_name(self) -> None:
        assert isinstance(get_document_decoder("json"), JsonDocumentDecoder)
        assert isinstance(get_document_decoder("YAML"), YamlDocumentDecoder)

    def test_unknown_format(self) -> None:
        with pytest.raises(ValueError):
            get_document_decoder("toml")
