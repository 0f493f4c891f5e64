"""codexlog exception hierarchy.

All codexlog-specific exceptions inherit from CodexLogError.

The write path never raises: I/O failures while logging are swallowed at
the writer boundary. These exceptions cover configuration and read-side
usage errors only.
"""

from __future__ import annotations

from pathlib import Path


class CodexLogError(Exception):
    """Base exception for all codexlog errors."""


class ConfigError(CodexLogError):
    """Raised when a configuration value cannot be interpreted."""


class InvalidLogLevelError(ConfigError):
    """Raised when a log level name is not recognised."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(
            f"Unknown log level: {value!r} (expected 'standard' or 'verbose')"
        )


class LogFileNotFoundError(CodexLogError):
    """Raised when a session log file lookup fails."""

    def __init__(self, name: str | Path, log_dir: Path | None = None) -> None:
        self.name = str(name)
        self.log_dir = log_dir
        where = f" in {log_dir}" if log_dir is not None else ""
        super().__init__(f"Session log not found: {self.name}{where}")


class WriterClosedError(CodexLogError):
    """Raised when submitting work to a queued writer after close()."""

    def __init__(self) -> None:
        super().__init__("Log writer is closed; no further calls are accepted.")
