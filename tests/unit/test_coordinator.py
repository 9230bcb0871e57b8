"""Tests for the export coordinator pipeline."""

import json
import re
from datetime import UTC, datetime

from tokenbridge.core.assembler import ConversionResult
from tokenbridge.core.coordinator import ExportCoordinator, export_tokens, format_summary
from tokenbridge.core.ir import Collection, ExportProgress, ExportSettings, ExportStage, Mode

FIXED = datetime(2024, 1, 1, tzinfo=UTC)
UUID_RE = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-5[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$")


def fixed_clock() -> datetime:
    return FIXED


class TestExport:
    def test_default_export_files(self, theme_collection, theme_variables):
        result = ExportCoordinator(clock=fixed_clock).export(
            [theme_collection], theme_variables, ExportSettings()
        )
        assert result.success
        assert [f.filename for f in result.files] == [
            "design-tokens.json",
            "extended-tokens.json",
            "README.md",
            "export-manifest.json",
        ]
        assert result.statistics.token_count == 3
        assert result.statistics.file_count == 4
        assert result.statistics.collection_count == 1
        assert result.statistics.total_bytes == sum(f.byte_size for f in result.files)

    def test_manifest_lists_earlier_files(self, theme_collection, theme_variables):
        result = ExportCoordinator(clock=fixed_clock).export(
            [theme_collection], theme_variables, ExportSettings()
        )
        manifest = json.loads(result.get_file("export-manifest.json").content)
        assert [f["filename"] for f in manifest["files"]] == [
            "design-tokens.json",
            "extended-tokens.json",
            "README.md",
        ]
        assert manifest["exportDate"] == "2024-01-01T00:00:00+00:00"
        assert "2024-01-01T00:00:00+00:00" in result.get_file("README.md").content

    def test_corner_radius_end_to_end(self, make_variable):
        collection = Collection(
            id="c",
            name="Shape",
            modes=[Mode(mode_id="m1", name="Light"), Mode(mode_id="m2", name="Dark")],
            default_mode_id="m1",
            variable_ids=["v1"],
        )
        variable = make_variable("v1", "corner-radius-100", "FLOAT", {"m1": 4, "m2": 4})
        result = export_tokens([collection], [variable], ExportSettings(format="both"))
        assert result.success

        token = json.loads(result.get_file("design-tokens.json").content)["corner-radius-100"]
        assert token["$type"] == "dimension"
        assert token["$value"] == {"value": 4, "unit": "px"}
        assert token["$extensions"]["com.tokenbridge"]["schemaHint"] == "borderRadius"

        extended = json.loads(result.get_file("extended-tokens.json").content)
        assert extended["corner-radius-100"]["value"] == "4px"
        assert UUID_RE.match(extended["corner-radius-100"]["uuid"])

    def test_canonical_only(self, theme_collection, theme_variables):
        result = export_tokens([theme_collection], theme_variables, ExportSettings(format="canonical"))
        assert [f.filename for f in result.files] == [
            "design-tokens.json",
            "README.md",
            "export-manifest.json",
        ]

    def test_platform_code(self, theme_collection, theme_variables):
        settings = ExportSettings(format="platform-code", platform="android")
        result = export_tokens([theme_collection], theme_variables, settings)
        assert result.success
        assert [f.filename for f in result.files] == [
            "platform-tokens-android.json",
            "README.md",
            "export-manifest.json",
        ]
        tokens = json.loads(result.files[0].content)
        assert tokens["color"]["brand"]["primary"]["value"] == "Color(0xFFFF0000)"
        assert tokens["corner-radius-100"]["value"] == "4dp"

    def test_empty_export_still_succeeds(self):
        result = export_tokens([], [])
        assert result.success
        assert result.statistics.token_count == 0
        assert "No collections provided for export" in result.warnings
        assert "No variables provided for export" in result.warnings
        assert json.loads(result.get_file("design-tokens.json").content) == {}

    def test_conversion_errors_keep_files(self, make_variable):
        broken = make_variable("v1", "color/broken", "COLOR", {"m1": None})
        vector = make_variable("v2", "icon", "VECTOR", {"m1": 1})
        result = export_tokens([], [broken, vector])
        assert not result.success
        assert result.statistics.error_count == 1
        assert result.get_file("export-manifest.json") is not None


class TestSettingsFailures:
    def test_invalid_format_produces_no_files(self):
        result = export_tokens([], [], ExportSettings(format="xml"))
        assert not result.success
        assert result.files == []
        assert result.errors[0].startswith("Export settings error: [INVALID_FORMAT]")

    def test_invalid_platform(self):
        result = export_tokens([], [], ExportSettings(format="platform-code", platform="tv"))
        assert not result.success
        assert "[INVALID_PLATFORM]" in result.errors[0]

    def test_unknown_naming_falls_back_with_warning(self, theme_collection, theme_variables):
        result = export_tokens(
            [theme_collection], theme_variables, ExportSettings(naming_convention="pascal")
        )
        assert result.success
        assert result.warnings[0].startswith("[INVALID_NAMING_CONVENTION]")
        canonical = json.loads(result.get_file("design-tokens.json").content)
        assert "corner-radius-100" in canonical


class TestProgress:
    def test_stages_and_percentages(self, theme_collection, theme_variables):
        events: list[ExportProgress] = []
        ExportCoordinator(on_progress=events.append).export(
            [theme_collection], theme_variables, ExportSettings()
        )
        assert [e.percentage for e in events] == [0, 25, 50, 60, 70, 80, 90, 100]
        assert events[0].stage == ExportStage.SCANNING
        assert events[1].stage == ExportStage.CONVERTING
        assert events[-1].stage == ExportStage.COMPLETE
        assert events[-1].current == events[-1].total == 4

    def test_no_progress_for_invalid_settings(self):
        events: list[ExportProgress] = []
        export_tokens([], [], ExportSettings(structure="tree"), on_progress=events.append)
        assert events == []


class TestFailures:
    def test_unexpected_error_is_captured(self, monkeypatch, theme_collection, theme_variables):
        def explode(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr("tokenbridge.core.coordinator.convert_tokens", explode)
        result = export_tokens([theme_collection], theme_variables)
        assert not result.success
        assert result.files == []
        assert result.errors == ["Export failed: boom"]

    def test_token_count_mismatch(self, monkeypatch):
        monkeypatch.setattr(
            "tokenbridge.core.coordinator.convert_tokens",
            lambda *args: ConversionResult(canonical_count=2, extended_count=1),
        )
        result = export_tokens([], [])
        assert not result.success
        assert result.errors[0].startswith("[TOKEN_COUNT_MISMATCH]")

    def test_coordinator_is_reusable(self, theme_collection, theme_variables):
        coordinator = ExportCoordinator(clock=fixed_clock)
        first = coordinator.export([theme_collection], theme_variables, ExportSettings())
        second = coordinator.export([theme_collection], theme_variables, ExportSettings())
        assert [f.content for f in first.files] == [f.content for f in second.files]


class TestFormatSummary:
    def test_report_sections(self, make_variable):
        result = export_tokens([], [make_variable("v1", "icon", "VECTOR", {"m1": 1})])
        text = format_summary(result)
        assert "EXPORT SUMMARY" in text
        assert "Export completed with errors" in text
        assert "FILES:" in text
        assert "  design-tokens.json (" in text
        assert "WARNINGS:" in text
        assert "ERRORS:" in text
