"""Tests for ngapigen.config."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from ngapigen.config import (
    find_project_config,
    load_config_file,
    normalize_options,
    parse_bool,
    parse_defines,
    resolve_options,
)
from ngapigen.exceptions import ConfigError, InvalidUsageError
from ngapigen.models import GeneratorOptions


# ---------------------------------------------------------------------------
# Value parsing
# ---------------------------------------------------------------------------


class TestParseBool:
    """Only "true" (any case) is true."""

    @pytest.mark.parametrize("value", ["true", "TRUE", " True ", True])
    def test_true(self, value: object) -> None:
        assert parse_bool(value) is True

    @pytest.mark.parametrize("value", ["false", "yes", "1", "", False, 0])
    def test_false(self, value: object) -> None:
        assert parse_bool(value) is False


class TestNormalizeOptions:
    """Key spellings and unknown keys."""

    def test_aliases_and_field_names(self) -> None:
        result = normalize_options(
            {"useHttpResource": "false", "readonly_output_models": "true"}, "test"
        )
        assert result == {"use_reactive_resource": False, "readonly_output_models": True}

    def test_unknown_keys_ignored(self) -> None:
        assert normalize_options({"npmName": "client"}, "test") == {}


class TestParseDefines:
    """``-D key=value`` parsing."""

    def test_pairs(self) -> None:
        assert parse_defines(["readonlyModels=false", "a = b=c"]) == {
            "readonlyModels": "false",
            "a": "b=c",
        }

    @pytest.mark.parametrize("pair", ["noequals", "=value", "  =x"])
    def test_invalid(self, pair: str) -> None:
        with pytest.raises(InvalidUsageError):
            parse_defines([pair])


# ---------------------------------------------------------------------------
# Config files
# ---------------------------------------------------------------------------


class TestConfigFiles:
    """Project config discovery and loading."""

    def test_find_prefers_json(self, tmp_path: Path) -> None:
        (tmp_path / "ngapigen.yaml").write_text("{}", encoding="utf-8")
        (tmp_path / "ngapigen.json").write_text("{}", encoding="utf-8")
        assert find_project_config(tmp_path) == tmp_path / "ngapigen.json"

    def test_find_none(self, tmp_path: Path) -> None:
        assert find_project_config(tmp_path) is None

    def test_yaml_with_additional_properties(self, tmp_path: Path) -> None:
        path = tmp_path / "ngapigen.yml"
        path.write_text(
            "separateResources: true\nadditionalProperties:\n  separateResources: false\n",
            encoding="utf-8",
        )
        assert load_config_file(path) == {"separateResources": False}

    def test_empty_json(self, tmp_path: Path) -> None:
        path = tmp_path / "ngapigen.json"
        path.write_text("", encoding="utf-8")
        assert load_config_file(path) == {}

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "ngapigen.json"
        path.write_text("{oops", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid config file"):
            load_config_file(path)

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "ngapigen.yaml"
        path.write_text("- a\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="mapping"):
            load_config_file(path)


# ---------------------------------------------------------------------------
# resolve_options precedence
# ---------------------------------------------------------------------------


class TestResolveOptions:
    """CLI > environment > -D > config file > defaults."""

    def test_defaults(self, tmp_path: Path) -> None:
        assert resolve_options(environ={}, cwd=tmp_path) == GeneratorOptions()

    def test_config_file_applies(self, tmp_path: Path) -> None:
        (tmp_path / "ngapigen.json").write_text(
            json.dumps({"readonlyModels": False}), encoding="utf-8"
        )
        options = resolve_options(environ={}, cwd=tmp_path)
        assert options.readonly_output_models is False

    def test_defines_override_config_file(self, tmp_path: Path) -> None:
        (tmp_path / "ngapigen.json").write_text(
            json.dumps({"readonlyModels": False}), encoding="utf-8"
        )
        options = resolve_options(
            additional_properties={"readonlyModels": "true"}, environ={}, cwd=tmp_path
        )
        assert options.readonly_output_models is True

    def test_environment_overrides_defines(self, tmp_path: Path) -> None:
        options = resolve_options(
            additional_properties={"useInjectFunction": "true"},
            environ={"NGAPIGEN_USE_INJECTED_DEPENDENCY": "false"},
            cwd=tmp_path,
        )
        assert options.use_injected_dependency is False

    def test_cli_overrides_everything(self, tmp_path: Path) -> None:
        options = resolve_options(
            cli_overrides={"split_resource_artifacts": True, "strict_paths": None},
            additional_properties={"separateResources": "false"},
            environ={"NGAPIGEN_SPLIT_RESOURCE_ARTIFACTS": "false"},
            cwd=tmp_path,
        )
        assert options.split_resource_artifacts is True
        assert options.strict_paths is False

    def test_explicit_config_file(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.yaml"
        path.write_text("strictPaths: 'true'\n", encoding="utf-8")
        options = resolve_options(config_file=path, environ={}, cwd=tmp_path)
        assert options.strict_paths is True

    def test_explicit_config_file_missing(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            resolve_options(config_file=tmp_path / "missing.json", environ={}, cwd=tmp_path)
