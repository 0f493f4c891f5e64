"""Session log file lifecycle.

LogFileStore owns one log directory: it creates it, names and creates
session files, lists them in creation order, and deletes them. Every
filesystem failure is reported as a False/None result and a DEBUG log
line; nothing here raises on I/O errors except :meth:`LogFileStore.resolve`.

Naming convention::

    codex-session-<sanitized-id>-<yyyyMMdd-HHmmss>.jsonl

with ``-2``, ``-3``, ... appended before the extension when a file of
that name already exists (two sessions with the same id in one second).
"""

from __future__ import annotations

import logging
import os
import re
from datetime import datetime
from pathlib import Path
from typing import IO

from codexlog.exceptions import LogFileNotFoundError

logger = logging.getLogger(__name__)

FILENAME_PREFIX = "codex-session-"
FILENAME_SUFFIX = ".jsonl"
FILENAME_TIME_FORMAT = "%Y%m%d-%H%M%S"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_-]")
_NAME_PATTERN = re.compile(
    r"^codex-session-(?P<session>.+)-(?P<stamp>\d{8}-\d{6})(?:-(?P<seq>\d+))?\.jsonl$"
)

# Upper bound on collision suffixes tried before giving up on a name.
_MAX_NAME_ATTEMPTS = 100


def sanitize_filename(value: str) -> str:
    """Replace every character outside ``[A-Za-z0-9_-]`` with ``-``.

    Returns ``"session"`` when the result would be empty.
    """
    sanitized = _UNSAFE_CHARS.sub("-", value)
    return sanitized or "session"


def build_filename(session_id: str, moment: datetime, sequence: int = 1) -> str:
    """Return the log filename for *session_id* created at *moment*."""
    stamp = moment.strftime(FILENAME_TIME_FORMAT)
    suffix = f"-{sequence}" if sequence > 1 else ""
    return f"{FILENAME_PREFIX}{sanitize_filename(session_id)}-{stamp}{suffix}{FILENAME_SUFFIX}"


def is_session_log_name(name: str) -> bool:
    return name.startswith(FILENAME_PREFIX) and name.endswith(FILENAME_SUFFIX)


def session_label(name: str) -> str | None:
    """Extract the sanitized session id from a log filename, if it has one."""
    match = _NAME_PATTERN.match(name)
    return match.group("session") if match else None


def creation_time(path: Path) -> float:
    """Return the creation time of *path* in epoch seconds.

    Uses the birth time where the platform records one, else the inode
    change time. Returns ``-inf`` when the file cannot be stat'ed so the
    file sorts as the oldest.
    """
    try:
        st = os.stat(path)
    except OSError:
        return float("-inf")
    birth = getattr(st, "st_birthtime", None)
    return birth if birth else st.st_ctime


def newest_first(paths: list[Path]) -> list[Path]:
    """Sort *paths* by creation time, newest first; ties break on name."""
    keyed = [((creation_time(p), p.name), p) for p in paths]
    keyed.sort(key=lambda item: item[0], reverse=True)
    return [p for _, p in keyed]


class LogFileStore:
    """Filesystem operations on one session log directory."""

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def ensure_directory(self) -> bool:
        """Create the log directory (and parents) if missing."""
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.debug("Cannot create log directory %s: %s", self._directory, exc)
            return False
        return True

    def create(self, session_id: str, moment: datetime) -> tuple[Path, IO[str]] | None:
        """Create and open a new log file for *session_id*.

        The file is created exclusively; on a name collision the next
        sequence suffix is tried.

        Returns:
            ``(path, handle)`` with the handle open for writing, or None
            if no file could be created.
        """
        for sequence in range(1, _MAX_NAME_ATTEMPTS + 1):
            path = self._directory / build_filename(session_id, moment, sequence)
            try:
                handle = open(path, "x", encoding="utf-8", newline="")
            except FileExistsError:
                continue
            except OSError as exc:
                logger.debug("Cannot open log file %s: %s", path, exc)
                return None
            logger.debug("Opened session log %s", path)
            return path, handle
        logger.debug("No free log filename for session %r at %s", session_id, moment)
        return None

    def list_files(self) -> list[Path]:
        """Return the session log files in the directory, unordered."""
        try:
            with os.scandir(self._directory) as it:
                return [
                    Path(e.path)
                    for e in it
                    if is_session_log_name(e.name) and e.is_file(follow_symlinks=False)
                ]
        except OSError as exc:
            logger.debug("Cannot list log directory %s: %s", self._directory, exc)
            return []

    def list_newest_first(self) -> list[Path]:
        return newest_first(self.list_files())

    def delete(self, path: Path) -> bool:
        try:
            os.remove(path)
        except FileNotFoundError:
            return True
        except OSError as exc:
            logger.debug("Cannot delete log file %s: %s", path, exc)
            return False
        return True

    def delete_all(self) -> int:
        """Delete every session log file; return how many were removed."""
        return sum(1 for path in self.list_files() if self.delete(path))

    def resolve(self, name: str | Path) -> Path:
        """Find a session log by filename in the directory, or by path.

        A bare filename is looked up in the log directory before the
        current directory.

        Raises:
            LogFileNotFoundError: If no such file exists.
        """
        candidate = Path(name)
        in_dir = self._directory / candidate.name
        if candidate.name == str(name) and in_dir.is_file():
            return in_dir
        if candidate.is_file():
            return candidate
        if in_dir.is_file():
            return in_dir
        raise LogFileNotFoundError(name, self._directory)
