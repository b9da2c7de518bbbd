"""
Tests for argument splitting and run configuration resolution.
"""

from pathlib import Path

import pytest
from unittest.mock import patch

from tofurunner.config.resolver import (
    CONFIG_FILE_NAME,
    DEFAULT_TOFU_VERSION,
    RunConfiguration,
    load_project_config,
    normalize_log_level,
    resolve_configuration,
    split_arguments,
)
from tofurunner.core.exceptions import ConfigurationError, UnsupportedPlatformError
from tofurunner.core.platform import Architecture, OperatingSystem, PlatformInfo


class TestSplitArguments:
    """Test --tofu-version extraction."""

    def test_no_args(self):
        version, forwarded = split_arguments([])

        assert version == DEFAULT_TOFU_VERSION
        assert forwarded == []

    def test_pass_through_args_preserved(self):
        version, forwarded = split_arguments(["init", "-backend=false"])

        assert version == DEFAULT_TOFU_VERSION
        assert forwarded == ["init", "-backend=false"]

    def test_flag_overrides_version(self):
        version, forwarded = split_arguments(["--tofu-version", "1.8.0", "plan"])

        assert version == "1.8.0"
        assert forwarded == ["plan"]

    def test_flag_at_end_is_passed_through(self):
        version, forwarded = split_arguments(["plan", "--tofu-version"])

        assert version == DEFAULT_TOFU_VERSION
        assert forwarded == ["plan", "--tofu-version"]

    def test_flag_in_middle(self):
        version, forwarded = split_arguments(
            ["apply", "--tofu-version", "1.7.0", "-auto-approve"]
        )

        assert version == "1.7.0"
        assert forwarded == ["apply", "-auto-approve"]

    def test_last_flag_wins(self):
        version, forwarded = split_arguments(
            ["--tofu-version", "1.6.0", "plan", "--tofu-version", "1.7.0"]
        )

        assert version == "1.7.0"
        assert forwarded == ["plan"]

    def test_equals_form_is_not_reserved(self):
        version, forwarded = split_arguments(["--tofu-version=1.7.0"])

        assert version == DEFAULT_TOFU_VERSION
        assert forwarded == ["--tofu-version=1.7.0"]

    def test_custom_default(self):
        version, _ = split_arguments(["plan"], default_version="1.6.2")

        assert version == "1.6.2"

    def test_input_not_mutated(self):
        args = ["--tofu-version", "1.8.0", "plan"]
        split_arguments(args)

        assert args == ["--tofu-version", "1.8.0", "plan"]


class TestLoadProjectConfig:
    def test_missing_file(self, tmp_path):
        assert load_project_config(tmp_path) == {}

    def test_empty_file(self, tmp_path):
        (tmp_path / CONFIG_FILE_NAME).write_text("")

        assert load_project_config(tmp_path) == {}

    def test_version(self, tmp_path):
        (tmp_path / CONFIG_FILE_NAME).write_text('version: "1.8.2"\n')

        assert load_project_config(tmp_path) == {"version": "1.8.2"}

    def test_invalid_yaml(self, tmp_path):
        (tmp_path / CONFIG_FILE_NAME).write_text("version: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_project_config(tmp_path)

    def test_not_a_mapping(self, tmp_path):
        (tmp_path / CONFIG_FILE_NAME).write_text("- 1.9.0\n")

        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            load_project_config(tmp_path)

    def test_numeric_version_rejected(self, tmp_path):
        (tmp_path / CONFIG_FILE_NAME).write_text("version: 1.10\n")

        with pytest.raises(ConfigurationError, match="must be a string"):
            load_project_config(tmp_path)


class TestNormalizeLogLevel:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, "INFO"),
            ("", "INFO"),
            ("debug", "DEBUG"),
            ("WARNING", "WARNING"),
            ("verbose", "INFO"),
        ],
    )
    def test_normalize(self, value, expected):
        assert normalize_log_level(value) == expected


@pytest.fixture
def linux_amd64():
    with patch(
        "tofurunner.config.resolver.detect_platform",
        return_value=PlatformInfo(OperatingSystem.LINUX, Architecture.AMD64),
    ):
        yield


class TestResolveConfiguration:
    def test_defaults(self, tmp_path, linux_amd64):
        config = resolve_configuration(["plan"], base_dir=tmp_path, environ={})

        assert config == RunConfiguration(
            version=DEFAULT_TOFU_VERSION,
            os=OperatingSystem.LINUX,
            arch=Architecture.AMD64,
            forwarded_args=("plan",),
            base_dir=tmp_path,
            log_level="INFO",
        )

    def test_base_dir_defaults_to_cwd(self, tmp_path, monkeypatch, linux_amd64):
        monkeypatch.chdir(tmp_path)

        config = resolve_configuration([], environ={})

        assert config.base_dir == Path.cwd()

    def test_flag_beats_env_and_file(self, tmp_path, linux_amd64):
        (tmp_path / CONFIG_FILE_NAME).write_text('version: "1.6.0"\n')

        config = resolve_configuration(
            ["--tofu-version", "1.8.0"],
            base_dir=tmp_path,
            environ={"TOFU_RUNNER_VERSION": "1.7.0"},
        )

        assert config.version == "1.8.0"

    def test_env_beats_file(self, tmp_path, linux_amd64):
        (tmp_path / CONFIG_FILE_NAME).write_text('version: "1.6.0"\n')

        config = resolve_configuration(
            [], base_dir=tmp_path, environ={"TOFU_RUNNER_VERSION": "1.7.0"}
        )

        assert config.version == "1.7.0"

    def test_file_beats_default(self, tmp_path, linux_amd64):
        (tmp_path / CONFIG_FILE_NAME).write_text('version: "1.6.0"\n')

        config = resolve_configuration([], base_dir=tmp_path, environ={})

        assert config.version == "1.6.0"

    def test_trailing_flag_falls_back_to_override(self, tmp_path, linux_amd64):
        config = resolve_configuration(
            ["plan", "--tofu-version"],
            base_dir=tmp_path,
            environ={"TOFU_RUNNER_VERSION": "1.7.0"},
        )

        assert config.version == "1.7.0"
        assert config.forwarded_args == ("plan", "--tofu-version")

    def test_log_level_from_env(self, tmp_path, linux_amd64):
        config = resolve_configuration(
            [], base_dir=tmp_path, environ={"TOFU_RUNNER_LOG_LEVEL": "debug"}
        )

        assert config.log_level == "DEBUG"

    def test_log_level_from_file(self, tmp_path, linux_amd64):
        (tmp_path / CONFIG_FILE_NAME).write_text("log_level: warning\n")

        config = resolve_configuration([], base_dir=tmp_path, environ={})

        assert config.log_level == "WARNING"

    def test_forwarded_args_are_immutable(self, tmp_path, linux_amd64):
        config = resolve_configuration(["plan", "-out=x"], base_dir=tmp_path, environ={})

        assert config.forwarded_args == ("plan", "-out=x")
        with pytest.raises(AttributeError):
            config.version = "0.0.1"

    def test_unsupported_platform(self, tmp_path):
        with patch("platform.machine", return_value="riscv64"):
            with pytest.raises(UnsupportedPlatformError):
                resolve_configuration([], base_dir=tmp_path, environ={})
