"""Read-side helpers for sharing session logs.

Provides:
- LogFileInfo: summary of one log file for listings
- describe_log_files: summaries in newest-first order
- export_logs: copy logs into a directory or a single zip archive
"""

from __future__ import annotations

import shutil
import zipfile
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from codexlog.storage.files import LogFileStore, creation_time, session_label


@dataclass(frozen=True)
class LogFileInfo:
    """Summary of one session log file.

    Attributes:
        path: Location of the file.
        session: Sanitized session id parsed from the filename; None if
            the name does not follow the full convention.
        created_at: Creation time (local), None if unreadable.
        size: Size in bytes.
        lines: Number of newline-terminated entries.
    """

    path: Path
    session: str | None
    created_at: datetime | None
    size: int
    lines: int

    @property
    def name(self) -> str:
        return self.path.name


def _count_lines(path: Path) -> int:
    count = 0
    with open(path, "rb") as fh:
        for chunk in iter(lambda: fh.read(1 << 16), b""):
            count += chunk.count(b"\n")
    return count


def describe_log_file(path: Path) -> LogFileInfo:
    created = creation_time(path)
    return LogFileInfo(
        path=path,
        session=session_label(path.name),
        created_at=datetime.fromtimestamp(created) if created != float("-inf") else None,
        size=path.stat().st_size,
        lines=_count_lines(path),
    )


def describe_log_files(store: LogFileStore) -> list[LogFileInfo]:
    """Summarize every log file in *store*, newest first.

    Files removed between listing and inspection are left out.
    """
    infos = []
    for path in store.list_newest_first():
        try:
            infos.append(describe_log_file(path))
        except FileNotFoundError:
            continue
    return infos


def export_logs(
    files: Iterable[Path],
    destination: str | Path,
    *,
    as_zip: bool = False,
) -> Path:
    """Copy *files* into *destination*.

    With ``as_zip``, *destination* is the archive path and every file is
    stored at the archive root under its own name; otherwise it is a
    directory, created if missing.

    Returns:
        The directory or archive that was written.

    Raises:
        OSError: If the destination cannot be written.
    """
    dest = Path(destination)
    if as_zip:
        dest.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(dest, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for path in files:
                archive.write(path, arcname=Path(path).name)
        return dest

    dest.mkdir(parents=True, exist_ok=True)
    for path in files:
        shutil.copy2(path, dest / Path(path).name)
    return dest
