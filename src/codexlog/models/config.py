"""Configuration models for codexlog.

LogLevel is the verbosity gate for high-volume diagnostic entries.
LoggerConfig holds the writer's construction parameters.
"""

from __future__ import annotations

import enum
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, field_validator

from codexlog.exceptions import ConfigError, InvalidLogLevelError
from codexlog.storage.paths import default_log_directory

ENV_MAX_FILES = "CODEXLOG_MAX_FILES"
ENV_LEVEL = "CODEXLOG_LEVEL"
ENV_DIR = "CODEXLOG_DIR"

DEFAULT_MAX_FILES = 5


class LogLevel(str, enum.Enum):
    """Verbosity gate for diagnostic entries."""

    STANDARD = "standard"
    VERBOSE = "verbose"

    @classmethod
    def parse(cls, value: LogLevel | str) -> LogLevel:
        """Return the level for *value*, accepting names case-insensitively.

        Raises:
            InvalidLogLevelError: If *value* names no level.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidLogLevelError(value)

    def at_least(self, other: LogLevel) -> bool:
        return _LEVEL_ORDER[self] >= _LEVEL_ORDER[other]


_LEVEL_ORDER: dict[LogLevel, int] = {
    LogLevel.STANDARD: 0,
    LogLevel.VERBOSE: 1,
}


class LoggerConfig(BaseModel):
    """Construction parameters for a SessionLogWriter."""

    max_files: int = DEFAULT_MAX_FILES  # <= 0 disables pruning
    log_level: LogLevel = LogLevel.VERBOSE
    log_dir: Optional[Path] = None  # None = platform default

    @field_validator("log_level", mode="before")
    @classmethod
    def _parse_level(cls, value: object) -> LogLevel:
        if isinstance(value, (LogLevel, str)):
            return LogLevel.parse(value)
        raise InvalidLogLevelError(value)

    @property
    def pruning_enabled(self) -> bool:
        return self.max_files > 0

    def resolve_log_dir(self) -> Path:
        """Return the configured directory, or the platform default."""
        if self.log_dir is not None:
            return Path(self.log_dir).expanduser()
        return default_log_directory()

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> LoggerConfig:
        """Build a config from ``CODEXLOG_*`` environment variables.

        Unset or empty variables keep their defaults.

        Raises:
            ConfigError: If ``CODEXLOG_MAX_FILES`` is not an integer.
            InvalidLogLevelError: If ``CODEXLOG_LEVEL`` names no level.
        """
        env = os.environ if environ is None else environ
        values: dict = {}

        raw_max = env.get(ENV_MAX_FILES, "").strip()
        if raw_max:
            try:
                values["max_files"] = int(raw_max)
            except ValueError:
                raise ConfigError(
                    f"{ENV_MAX_FILES} must be an integer, got {raw_max!r}"
                ) from None

        raw_level = env.get(ENV_LEVEL, "").strip()
        if raw_level:
            values["log_level"] = LogLevel.parse(raw_level)

        raw_dir = env.get(ENV_DIR, "").strip()
        if raw_dir:
            values["log_dir"] = Path(raw_dir).expanduser()

        return cls(**values)
