"""SessionLogWriter -- serialized, session-scoped JSONL event logger.

The writer owns at most one open log file at a time. Every public
operation runs under a single re-entrant lock, so calls from any number
of producer threads are applied one at a time and the lines written to
the active file never interleave.

Logging is best-effort: I/O and encoding failures drop the affected
entry (logged at DEBUG) and never reach the caller. ``start_session``
is the one operation that reports failure, by returning None.

Usage::

    from codexlog import SessionLogWriter

    with SessionLogWriter() as log:
        log.start_session("thr_123", endpoint="wss://host", cwd="/repo")
        log.log_wire("out", "initialize", "{}", "thr_123")
        log.log_turn_event("turn/started", "thr_123", "turn_1")
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any

from codexlog.models.config import LoggerConfig, LogLevel
from codexlog.models.entries import (
    CHAT_SNAPSHOT,
    COMMAND_EXECUTION,
    CONNECTION,
    FILE_CHANGE,
    MERGE_OUTCOME,
    REASONING,
    RENDER_DECISION,
    SESSION_END,
    SESSION_START,
    TOOL_CALL,
    WIRE,
    DiagnosticEntry,
    DiagnosticStats,
    LogEntry,
    MessageSnapshot,
    format_timestamp,
)
from codexlog.serialization import encode_line
from codexlog.storage.files import LogFileStore
from codexlog.storage.paths import default_log_directory
from codexlog.storage.retention import prune_old_logs

if TYPE_CHECKING:
    from codexlog.storage.paths import LogRootResolver

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SessionLogWriter:
    """Append-only JSONL logger with one file per session.

    State invariant: the current session id, file path and file handle
    are either all set (a file is open) or all None.
    """

    def __init__(
        self,
        config: LoggerConfig | None = None,
        *,
        log_root: LogRootResolver | None = None,
        clock: Clock | None = None,
    ) -> None:
        """Initialize the writer.

        Args:
            config: Retention limit, initial level and optional explicit
                log directory. Defaults to ``LoggerConfig()``.
            log_root: Resolver for the app-data root, used when the
                config names no directory.
            clock: Returns the current time as an aware datetime; used
                for entry timestamps and filenames.
        """
        self._config = config or LoggerConfig()
        if self._config.log_dir is not None:
            directory = self._config.resolve_log_dir()
        else:
            directory = default_log_directory(log_root)
        self._store = LogFileStore(directory)
        self._clock = clock or _utc_now
        self._log_level = self._config.log_level
        self._lock = threading.RLock()

        self._session_id: str | None = None
        self._file: Path | None = None
        self._handle: IO[str] | None = None

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def log_dir(self) -> Path:
        return self._store.directory

    @property
    def store(self) -> LogFileStore:
        return self._store

    @property
    def max_files(self) -> int:
        return self._config.max_files

    @property
    def log_level(self) -> LogLevel:
        return self._log_level

    @property
    def current_session_id(self) -> str | None:
        return self._session_id

    @property
    def current_file(self) -> Path | None:
        return self._file

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    def start_session(
        self,
        session_id: str,
        endpoint: str | None = None,
        cwd: str | None = None,
    ) -> Path | None:
        """Rotate to a new log file for *session_id*.

        Re-entering the session that is already open is a no-op that
        returns the current file. Otherwise any open session is ended
        (with a ``session_end`` line), old files are pruned, and a new
        file is created starting with a ``session_start`` line.

        Returns:
            Path of the session's log file, or None if the file could not
            be created. Until the next successful start, log calls are
            no-ops.
        """
        with self._lock:
            if session_id == self._session_id and self._handle is not None:
                return self._file

            self._end_current_session()

            if not self._store.ensure_directory():
                return None
            if self._config.pruning_enabled:
                prune_old_logs(self._store, self._config.max_files, reserve=1)

            created = self._store.create(session_id, self._clock().astimezone())
            if created is None:
                return None
            self._file, self._handle = created
            self._session_id = session_id

            self._emit(
                LogEntry,
                type=SESSION_START,
                session_id=session_id,
                endpoint=endpoint,
                cwd=cwd,
            )
            return self._file

    def end_session(self) -> None:
        """Write ``session_end`` and close the open file, if any."""
        with self._lock:
            self._end_current_session()

    def close(self) -> None:
        self.end_session()

    def __enter__(self) -> SessionLogWriter:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Wire / session entries
    # ------------------------------------------------------------------

    def log_wire(
        self,
        direction: str,
        method: str | None,
        message: str,
        session_id: str | None = None,
    ) -> None:
        """Record one protocol message; *direction* is ``"in"`` or ``"out"``."""
        self._locked_emit(
            LogEntry,
            type=WIRE,
            session_id=session_id,
            direction=direction,
            method=method,
            message=message,
        )

    def log_turn_event(
        self,
        event_type: str,
        session_id: str | None = None,
        turn_id: str | None = None,
    ) -> None:
        self._locked_emit(LogEntry, type=event_type, session_id=session_id, turn_id=turn_id)

    def log_reasoning(
        self,
        session_id: str | None,
        turn_id: str | None,
        item_id: str | None,
        text: str,
    ) -> None:
        self._locked_emit(
            LogEntry,
            type=REASONING,
            session_id=session_id,
            turn_id=turn_id,
            item_id=item_id,
            message=text,
        )

    def log_tool_call(
        self,
        session_id: str | None,
        turn_id: str | None,
        item_id: str | None,
        title: str,
        kind: str | None = None,
        status: str | None = None,
        output: str | None = None,
    ) -> None:
        self._locked_emit(
            LogEntry,
            type=TOOL_CALL,
            session_id=session_id,
            turn_id=turn_id,
            item_id=item_id,
            title=title,
            kind=kind,
            status=status,
            output=output,
        )

    def log_file_change(
        self,
        session_id: str | None,
        turn_id: str | None,
        item_id: str | None,
        path: str | None = None,
        change_type: str | None = None,
        diff: str | None = None,
    ) -> None:
        self._locked_emit(
            LogEntry,
            type=FILE_CHANGE,
            session_id=session_id,
            turn_id=turn_id,
            item_id=item_id,
            path=path,
            change_type=change_type,
            diff=diff,
        )

    def log_command_execution(
        self,
        session_id: str | None,
        turn_id: str | None,
        item_id: str | None,
        command: str | None = None,
        output: str | None = None,
    ) -> None:
        self._locked_emit(
            LogEntry,
            type=COMMAND_EXECUTION,
            session_id=session_id,
            turn_id=turn_id,
            item_id=item_id,
            command=command,
            output=output,
        )

    # ------------------------------------------------------------------
    # Diagnostic entries
    # ------------------------------------------------------------------

    def log_connection_event(
        self,
        event: str,
        session_id: str | None = None,
        endpoint: str | None = None,
        detail: str | None = None,
    ) -> None:
        """Record a connection lifecycle event. Emitted at every level."""
        self._locked_emit(
            DiagnosticEntry,
            type=CONNECTION,
            session_id=session_id,
            event=event,
            endpoint=endpoint,
            detail=detail,
        )

    def log_merge_outcome(
        self,
        session_id: str | None,
        source: str,
        *,
        reused: int | None = None,
        inserted: int | None = None,
        updated: int | None = None,
        unchanged: int | None = None,
        resumed_turns: int | None = None,
        resumed_items: int | None = None,
        stale_detected: bool | None = None,
        prefer_local_richness: bool | None = None,
        carry_forward_unmatched: bool | None = None,
        local_tool_calls: int | None = None,
        resumed_tool_calls: int | None = None,
        detail: str | None = None,
        stats: DiagnosticStats | None = None,
    ) -> None:
        """Record the outcome of reconciling local and resumed chat state.

        Emitted at every level. Counts and flags are bundled into one
        stats block; when *stats* is given, explicit keywords override
        its fields.
        """
        counts: dict[str, Any] = {
            "reused": reused,
            "inserted": inserted,
            "updated": updated,
            "unchanged": unchanged,
            "resumed_turns": resumed_turns,
            "resumed_items": resumed_items,
            "stale_detected": stale_detected,
            "prefer_local_richness": prefer_local_richness,
            "carry_forward_unmatched": carry_forward_unmatched,
            "local_tool_calls": local_tool_calls,
            "resumed_tool_calls": resumed_tool_calls,
        }
        given = {k: v for k, v in counts.items() if v is not None}
        if stats is None:
            block = DiagnosticStats(**given)
        else:
            block = stats.model_copy(update=given) if given else stats

        self._locked_emit(
            DiagnosticEntry,
            type=MERGE_OUTCOME,
            session_id=session_id,
            source=source,
            detail=detail,
            stats=block,
        )

    def log_chat_snapshot(
        self,
        session_id: str | None,
        label: str,
        messages: Sequence[MessageSnapshot],
    ) -> None:
        """Record a chat state snapshot. Verbose level only."""
        with self._lock:
            if not self._log_level.at_least(LogLevel.VERBOSE):
                return
            self._emit(
                DiagnosticEntry,
                type=CHAT_SNAPSHOT,
                session_id=session_id,
                event=label,
                messages=messages,
            )

    def log_render_decision(self, session_id: str | None, event: str, detail: str) -> None:
        """Record a UI rendering decision. Verbose level only."""
        with self._lock:
            if not self._log_level.at_least(LogLevel.VERBOSE):
                return
            self._emit(
                DiagnosticEntry,
                type=RENDER_DECISION,
                session_id=session_id,
                event=event,
                detail=detail,
            )

    def set_log_level(self, level: LogLevel | str) -> None:
        """Change the verbosity gate for subsequent calls.

        Raises:
            InvalidLogLevelError: If *level* names no level.
        """
        parsed = LogLevel.parse(level)
        with self._lock:
            self._log_level = parsed

    # ------------------------------------------------------------------
    # Directory management
    # ------------------------------------------------------------------

    def delete_all_logs(self) -> int:
        """Close the open file (no ``session_end``) and delete every log.

        Returns:
            Number of files deleted.
        """
        with self._lock:
            self._close_file()
            self._session_id = None
            self._file = None
            return self._store.delete_all()

    def collect_log_files(self) -> list[Path]:
        """Return the session log files, newest first.

        Not serialized with writes: the listing is a snapshot of the
        directory at some point relative to in-flight calls.
        """
        return self._store.list_newest_first()

    # ------------------------------------------------------------------
    # Internals (caller holds the lock)
    # ------------------------------------------------------------------

    def _end_current_session(self) -> None:
        if self._session_id is None:
            self._close_file()
            return
        self._emit(LogEntry, type=SESSION_END, session_id=self._session_id)
        self._close_file()
        self._session_id = None
        self._file = None

    def _close_file(self) -> None:
        handle, self._handle = self._handle, None
        if handle is None:
            return
        try:
            handle.close()
        except OSError as exc:
            logger.debug("Error closing session log %s: %s", self._file, exc)

    def _locked_emit(self, model: type[LogEntry] | type[DiagnosticEntry], **fields: Any) -> None:
        with self._lock:
            self._emit(model, **fields)

    def _emit(self, model: type[LogEntry] | type[DiagnosticEntry], **fields: Any) -> bool:
        """Build, encode and append one entry. Returns False if it was dropped."""
        if self._handle is None:
            return False
        try:
            line = encode_line(model(ts=format_timestamp(self._clock()), **fields))
        except (ValueError, TypeError) as exc:
            logger.debug("Dropping unencodable %s entry: %s", fields.get("type"), exc)
            return False
        try:
            self._handle.write(line)
            self._handle.flush()
        except (OSError, ValueError) as exc:
            logger.debug("Write to session log %s failed: %s", self._file, exc)
            return False
        return True
