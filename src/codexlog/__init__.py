"""codexlog: structured, append-only session logs for a Codex agent client.

Records protocol traffic, turn and tool-call lifecycle events, and
internal diagnostics as one JSON object per line, in one file per
session, with bounded retention.
"""

from codexlog._version import __version__

# Core entry points
from codexlog.writer import SessionLogWriter
from codexlog.dispatch import QueuedLogWriter

# Event schema
from codexlog.models.entries import (
    DIAGNOSTIC_TYPES,
    AnyEntry,
    DiagnosticEntry,
    DiagnosticStats,
    LogEntry,
    MessageSnapshot,
)

# Configuration
from codexlog.models.config import LoggerConfig, LogLevel

# Serialization and read side
from codexlog.serialization import decode_line, encode_line, read_entries
from codexlog.export import LogFileInfo, describe_log_files, export_logs

# Storage
from codexlog.storage.files import LogFileStore, sanitize_filename
from codexlog.storage.paths import app_data_root, default_log_directory
from codexlog.storage.retention import prune_old_logs

# Exceptions
from codexlog.exceptions import (
    CodexLogError,
    ConfigError,
    InvalidLogLevelError,
    LogFileNotFoundError,
    WriterClosedError,
)

__all__ = [
    "__version__",
    # Core
    "SessionLogWriter",
    "QueuedLogWriter",
    # Schema
    "DIAGNOSTIC_TYPES",
    "AnyEntry",
    "DiagnosticEntry",
    "DiagnosticStats",
    "LogEntry",
    "MessageSnapshot",
    # Configuration
    "LoggerConfig",
    "LogLevel",
    # Serialization / read side
    "decode_line",
    "encode_line",
    "read_entries",
    "LogFileInfo",
    "describe_log_files",
    "export_logs",
    # Storage
    "LogFileStore",
    "sanitize_filename",
    "app_data_root",
    "default_log_directory",
    "prune_old_logs",
    # Exceptions
    "CodexLogError",
    "ConfigError",
    "InvalidLogLevelError",
    "LogFileNotFoundError",
    "WriterClosedError",
]
