"""Tests for the input document and settings loaders."""

import json

import pytest

from tokenbridge.core.errors import InputDocumentError, SettingsError
from tokenbridge.core.input_loader import load_input_document, parse_input_document
from tokenbridge.core.ir import AliasReference, ColorComponents
from tokenbridge.core.settings_loader import load_settings, parse_settings


class TestInputDocument:
    def test_load_adapter_dump(self, tmp_path, adapter_dump):
        path = tmp_path / "variables.json"
        path.write_text(json.dumps(adapter_dump))

        document = load_input_document(path)
        assert len(document.collections) == 1
        assert document.collections[0].default_mode_id == "m1"
        assert document.collections[0].mode_name("m2") == "Dark"

        primary, radius, background = document.variables
        assert primary.values_by_mode["m1"] == ColorComponents(r=1, g=0, b=0)
        assert radius.scope_hints == frozenset({"CORNER_RADIUS"})
        assert background.values_by_mode["m1"] == AliasReference(target_variable_id="v1")

    def test_missing_file(self, tmp_path):
        with pytest.raises(InputDocumentError, match="Input file not found"):
            load_input_document(tmp_path / "missing.json")

    def test_invalid_json_reports_line(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text('{\n  "variables": [\n')
        with pytest.raises(InputDocumentError) as exc_info:
            load_input_document(path)
        assert "Invalid JSON" in exc_info.value.message
        assert exc_info.value.context.pointer.startswith("line ")

    def test_top_level_must_be_object(self):
        with pytest.raises(InputDocumentError, match="must be a JSON object"):
            parse_input_document([])

    def test_bad_record_shape(self):
        with pytest.raises(InputDocumentError) as exc_info:
            parse_input_document({"collections": [{"modes": [{"name": "Light"}]}]})
        assert exc_info.value.context.pointer.startswith("collections[0]")

    def test_null_fields_become_defaults(self):
        document = parse_input_document(
            {"variables": [{"id": "v", "name": "x", "description": None, "scopes": None}]}
        )
        variable = document.variables[0]
        assert variable.description == ""
        assert variable.scope_hints == frozenset()


class TestSettings:
    def test_defaults(self):
        settings = load_settings()
        assert settings.format == "both"
        assert settings.include_metadata is True

    def test_yaml_file_and_overrides(self, tmp_path):
        path = tmp_path / "tokens.yaml"
        path.write_text("format: canonical\nstructure: flat\ninclude_private: true\n")
        settings = load_settings(path, {"structure": "nested", "modes": None})
        assert settings.format == "canonical"
        assert settings.structure == "nested"
        assert settings.include_private is True
        assert settings.modes == "default"

    def test_unknown_enum_value_is_kept(self):
        assert parse_settings({"format": "xml"}).format == "xml"

    def test_unknown_key_rejected(self):
        with pytest.raises(SettingsError, match="Invalid export settings"):
            parse_settings({"colour": "red"})

    def test_bad_value_type(self):
        with pytest.raises(SettingsError):
            parse_settings({"include_private": [1, 2]})

    def test_missing_file(self, tmp_path):
        with pytest.raises(SettingsError, match="not found"):
            load_settings(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("format: [unclosed\n")
        with pytest.raises(SettingsError, match="Invalid YAML"):
            load_settings(path)

    def test_non_mapping_yaml(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- canonical\n- flat\n")
        with pytest.raises(SettingsError, match="mapping"):
            load_settings(path)

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_settings(path).format == "both"
