"""JSON Lines encoding for session log entries.

One entry is one compact JSON object (UTF-8, forward slashes left
unescaped, None fields omitted) followed by a newline.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from pathlib import Path

from codexlog.models.entries import (
    DIAGNOSTIC_TYPES,
    AnyEntry,
    DiagnosticEntry,
    LogEntry,
)

logger = logging.getLogger(__name__)


def encode_line(entry: AnyEntry) -> str:
    """Serialize *entry* to a single newline-terminated JSON line.

    Raises:
        ValueError: If the entry cannot be serialized (pydantic raises a
            ValueError subclass).
    """
    return entry.model_dump_json(by_alias=True, exclude_none=True) + "\n"


def decode_line(line: str | bytes) -> AnyEntry:
    """Parse one JSON line back into the matching entry model.

    Diagnostic type names decode to DiagnosticEntry, anything else to
    LogEntry.

    Raises:
        ValueError: If the line is not a JSON object or fails validation.
    """
    data = json.loads(line)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    if data.get("type") in DIAGNOSTIC_TYPES:
        return DiagnosticEntry.model_validate(data)
    return LogEntry.model_validate(data)


def read_entries(path: str | Path, *, skip_invalid: bool = True) -> Iterator[AnyEntry]:
    """Yield the entries of a session log file in file order.

    Blank lines are ignored. A malformed line (for instance a torn final
    line, possibly cut inside a multi-byte character) is skipped when
    *skip_invalid* is true, otherwise its ValueError propagates.
    """
    with open(path, "rb") as fh:
        for lineno, raw in enumerate(fh, start=1):
            if not raw.strip():
                continue
            try:
                yield decode_line(raw)
            except ValueError:
                if not skip_invalid:
                    raise
                logger.debug("Skipping malformed line %d in %s", lineno, path)
