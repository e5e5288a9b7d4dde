# pyright: reportAny=false
from pathlib import Path

import pytest

from stacheview.config import (
    DEFAULT_CONFIG,
    Config,
    LogFormat,
    LogLevel,
    deep_merge,
    parse_env_value,
    parse_env_vars,
    read_toml_file,
)
from stacheview.exceptions import ConfigLoadError, ConfigValidationError


def write_config(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "stacheview.toml"
    _ = path.write_text(content, encoding="utf-8")
    return path


class TestReadTomlFile:
    def test_parses_valid_toml(self, tmp_path: Path) -> None:
        path = write_config(tmp_path, '[views]\nprefix = "views/"\n')

        assert read_toml_file(path) == {"views": {"prefix": "views/"}}

    def test_raises_file_not_found_for_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            _ = read_toml_file(tmp_path / "missing.toml")

    def test_reports_location_of_syntax_errors(self, tmp_path: Path) -> None:
        path = write_config(tmp_path, '[views]\nprefix = "ok"\n\n[broken\n')

        with pytest.raises(ConfigLoadError) as exc_info:
            _ = read_toml_file(path)

        assert exc_info.value.path == path
        assert exc_info.value.line == 4
        assert exc_info.value.column is not None
        assert exc_info.value.__cause__ is not None


class TestDeepMerge:
    def test_override_wins(self) -> None:
        assert deep_merge({"a": 1}, {"a": 2}) == {"a": 2}

    def test_nested_dicts_are_merged(self) -> None:
        base = {"views": {"prefix": "a/", "suffix": ".html"}}
        override = {"views": {"prefix": "b/"}}

        assert deep_merge(base, override) == {"views": {"prefix": "b/", "suffix": ".html"}}

    def test_inputs_are_not_modified(self) -> None:
        base = {"views": {"prefix": "a/"}}
        override = {"views": {"suffix": ".html"}}

        result = deep_merge(base, override)
        result["views"]["prefix"] = "changed"

        assert base == {"views": {"prefix": "a/"}}
        assert override == {"views": {"suffix": ".html"}}

    def test_non_dict_replaces_dict(self) -> None:
        assert deep_merge({"a": {"b": 1}}, {"a": 3}) == {"a": 3}


class TestParseEnvValue:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("true", True),
            ("FALSE", False),
            ("42", "42"),
            ("views/", "views/"),
        ],
    )
    def test_only_booleans_are_converted(self, raw: str, expected: object) -> None:
        assert parse_env_value(raw) == expected


class TestParseEnvVars:
    def test_maps_double_underscore_to_nesting(self) -> None:
        environ = {
            "STACHEVIEW_VIEWS__PREFIX": "views/",
            "STACHEVIEW_VIEWS__CACHE": "true",
            "STACHEVIEW_LOGGING__LEVEL": "debug",
        }

        assert parse_env_vars(environ=environ) == {
            "views": {"prefix": "views/", "cache": True},
            "logging": {"level": "debug"},
        }

    def test_skips_flat_switches_and_foreign_variables(self) -> None:
        environ = {
            "STACHEVIEW_DEBUG": "1",
            "STACHEVIEW_LOG_LEVEL": "info",
            "HOME": "/root",
        }

        assert parse_env_vars(environ=environ) == {}


class TestConfigFromDict:
    def test_defaults(self) -> None:
        config = Config.from_dict({})

        assert config.views.root == "."
        assert config.views.prefix == ""
        assert config.views.suffix == ""
        assert config.views.cache is False
        assert config.views.encoding == "utf-8"
        assert config.logging.level is LogLevel.WARNING
        assert config.logging.format is LogFormat.TEXT
        assert config.logging.file == ""

    def test_default_table_matches_models(self) -> None:
        assert Config.from_dict({}).model_dump(mode="json") == DEFAULT_CONFIG

    def test_values_override_defaults(self) -> None:
        config = Config.from_dict(
            {"views": {"prefix": "views/", "cache": True}, "logging": {"format": "json"}}
        )

        assert config.views.prefix == "views/"
        assert config.views.cache is True
        assert config.views.suffix == ""
        assert config.logging.format is LogFormat.JSON

    def test_invalid_value_raises_validation_error(self) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            _ = Config.from_dict({"logging": {"level": "loud"}}, source="test")

        error = exc_info.value
        assert error.key == "logging.level"
        assert error.value == "loud"
        assert error.expected
        assert error.source == "test"

    def test_unknown_key_raises_validation_error(self) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            _ = Config.from_dict({"views": {"location": "/srv"}})

        assert exc_info.value.key == "views.location"

    def test_is_frozen(self) -> None:
        config = Config.from_dict({})

        with pytest.raises(ValueError, match="frozen"):
            config.views.prefix = "x"  # pyright: ignore[reportAttributeAccessIssue]


class TestConfigFromFile:
    def test_loads_file(self, tmp_path: Path) -> None:
        path = write_config(
            tmp_path, '[views]\nroot = "/srv/app"\nsuffix = ".mustache"\n'
        )

        config = Config.from_file(path)

        assert config.views.root == "/srv/app"
        assert config.views.suffix == ".mustache"

    def test_validation_error_names_the_file(self, tmp_path: Path) -> None:
        path = write_config(tmp_path, '[views]\ncache = "sometimes"\n')

        with pytest.raises(ConfigValidationError) as exc_info:
            _ = Config.from_file(path)

        assert exc_info.value.source == str(path)
        assert exc_info.value.key == "views.cache"


class TestConfigLoad:
    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for key in ("STACHEVIEW_VIEWS__PREFIX", "STACHEVIEW_VIEWS__CACHE"):
            monkeypatch.delenv(key, raising=False)

    def test_missing_file_is_skipped(self, tmp_path: Path) -> None:
        config = Config.load(tmp_path / "absent.toml", include_env=False)

        assert config == Config.from_dict({})

    def test_environment_overrides_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = write_config(tmp_path, '[views]\nprefix = "file/"\nsuffix = ".html"\n')
        monkeypatch.setenv("STACHEVIEW_VIEWS__PREFIX", "env/")
        monkeypatch.setenv("STACHEVIEW_VIEWS__CACHE", "true")

        config = Config.load(path)

        assert config.views.prefix == "env/"
        assert config.views.suffix == ".html"
        assert config.views.cache is True

    def test_environment_can_be_ignored(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = write_config(tmp_path, '[views]\nprefix = "file/"\n')
        monkeypatch.setenv("STACHEVIEW_VIEWS__PREFIX", "env/")

        assert Config.load(path, include_env=False).views.prefix == "file/"

    def test_sources_are_reported(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = write_config(tmp_path, '[views]\nprefix = "file/"\n')
        monkeypatch.setenv("STACHEVIEW_VIEWS__CACHE", "maybe")

        with pytest.raises(ConfigValidationError) as exc_info:
            _ = Config.load(path)

        assert exc_info.value.source == f"{path}, env"
