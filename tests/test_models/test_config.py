"""Tests for LogLevel and LoggerConfig."""

from pathlib import Path

import pytest

from codexlog.exceptions import ConfigError, InvalidLogLevelError
from codexlog.models.config import LoggerConfig, LogLevel
from codexlog.storage.paths import log_directory_for


class TestLogLevel:
    def test_ordering(self):
        assert LogLevel.VERBOSE.at_least(LogLevel.STANDARD)
        assert LogLevel.VERBOSE.at_least(LogLevel.VERBOSE)
        assert LogLevel.STANDARD.at_least(LogLevel.STANDARD)
        assert not LogLevel.STANDARD.at_least(LogLevel.VERBOSE)

    @pytest.mark.parametrize("raw", ["verbose", "VERBOSE", " Verbose "])
    def test_parse_case_insensitive(self, raw):
        assert LogLevel.parse(raw) is LogLevel.VERBOSE

    def test_parse_passthrough(self):
        assert LogLevel.parse(LogLevel.STANDARD) is LogLevel.STANDARD

    @pytest.mark.parametrize("raw", ["debug", "", 1, None])
    def test_parse_invalid(self, raw):
        with pytest.raises(InvalidLogLevelError):
            LogLevel.parse(raw)


class TestLoggerConfig:
    def test_defaults(self):
        config = LoggerConfig()
        assert config.max_files == 5
        assert config.log_level is LogLevel.VERBOSE
        assert config.log_dir is None
        assert config.pruning_enabled

    def test_level_from_string(self):
        assert LoggerConfig(log_level="Standard").log_level is LogLevel.STANDARD

    def test_invalid_level(self):
        with pytest.raises(InvalidLogLevelError):
            LoggerConfig(log_level="loud")

    @pytest.mark.parametrize("limit", [0, -1])
    def test_pruning_disabled(self, limit):
        assert not LoggerConfig(max_files=limit).pruning_enabled

    def test_resolve_explicit_dir(self, tmp_path):
        assert LoggerConfig(log_dir=tmp_path).resolve_log_dir() == tmp_path

    def test_resolve_default_dir(self, monkeypatch, tmp_path):
        monkeypatch.setattr(
            "codexlog.storage.paths.app_data_root", lambda: tmp_path
        )
        assert LoggerConfig().resolve_log_dir() == log_directory_for(tmp_path)


class TestFromEnv:
    def test_empty_env_keeps_defaults(self):
        assert LoggerConfig.from_env({}) == LoggerConfig()

    def test_reads_all_variables(self, tmp_path):
        config = LoggerConfig.from_env({
            "CODEXLOG_MAX_FILES": "12",
            "CODEXLOG_LEVEL": "standard",
            "CODEXLOG_DIR": str(tmp_path),
        })
        assert config.max_files == 12
        assert config.log_level is LogLevel.STANDARD
        assert config.log_dir == tmp_path

    def test_blank_values_ignored(self):
        config = LoggerConfig.from_env({"CODEXLOG_MAX_FILES": " ", "CODEXLOG_LEVEL": ""})
        assert config.max_files == 5

    def test_non_integer_max_files(self):
        with pytest.raises(ConfigError, match="CODEXLOG_MAX_FILES"):
            LoggerConfig.from_env({"CODEXLOG_MAX_FILES": "five"})

    def test_unknown_level(self):
        with pytest.raises(InvalidLogLevelError):
            LoggerConfig.from_env({"CODEXLOG_LEVEL": "trace"})

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("CODEXLOG_MAX_FILES", "0")
        assert LoggerConfig.from_env().max_files == 0

    def test_expands_user(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        config = LoggerConfig.from_env({"CODEXLOG_DIR": "~/logs"})
        assert config.log_dir == Path(tmp_path) / "logs"


class TestModuleImports:
    def test_default_directory_helper_is_module_level(self):
        from codexlog.models import config
        from codexlog.storage import paths

        assert config.default_log_directory is paths.default_log_directory
