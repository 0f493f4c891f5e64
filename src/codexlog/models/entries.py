"""Event schema for session logs.

Defines the two record shapes written to a session log, as frozen
Pydantic models:

- LogEntry: wire/session events (session boundaries, wire traffic,
  turn lifecycle, reasoning, tool calls, file changes, commands)
- DiagnosticEntry: internal observability events (connection state,
  merge outcomes, chat snapshots, render decisions)

Python attributes are snake_case; the serialized keys are camelCase.
Optional fields left as None are omitted from the serialized line.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal, Optional, Union

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Entry type names
# ---------------------------------------------------------------------------

SESSION_START = "session_start"
SESSION_END = "session_end"
WIRE = "wire"
REASONING = "reasoning"
TOOL_CALL = "tool_call"
FILE_CHANGE = "file_change"
COMMAND_EXECUTION = "command_execution"

CONNECTION = "connection"
MERGE_OUTCOME = "merge_outcome"
CHAT_SNAPSHOT = "chat_snapshot"
RENDER_DECISION = "render_decision"

DiagnosticType = Literal["connection", "merge_outcome", "chat_snapshot", "render_decision"]

DIAGNOSTIC_TYPES: frozenset[str] = frozenset({
    CONNECTION, MERGE_OUTCOME, CHAT_SNAPSHOT, RENDER_DECISION,
})

# Diagnostic types emitted only when the writer is at verbose level.
VERBOSE_ONLY_TYPES: frozenset[str] = frozenset({CHAT_SNAPSHOT, RENDER_DECISION})


_ENTRY_MODEL_CONFIG = {
    "frozen": True,
    "alias_generator": to_camel,
    "populate_by_name": True,
}


def format_timestamp(moment: datetime | None = None) -> str:
    """Format *moment* (default: now) as UTC ISO-8601 with milliseconds.

    Naive datetimes are taken to be UTC already.
    """
    if moment is None:
        moment = datetime.now(timezone.utc)
    elif moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    text = moment.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


# ---------------------------------------------------------------------------
# Wire / session entries
# ---------------------------------------------------------------------------


class LogEntry(BaseModel):
    """One wire or session-lifecycle event.

    ``type`` is one of the constants above or a free-form turn event
    name (``turn/started``, ``turn_completed``, ...). Fields are a
    superset across all types; each type fills only what it needs.
    """

    model_config = _ENTRY_MODEL_CONFIG

    type: str
    ts: str
    session_id: Optional[str] = None
    turn_id: Optional[str] = None
    item_id: Optional[str] = None
    direction: Optional[str] = None
    method: Optional[str] = None
    message: Optional[str] = None
    title: Optional[str] = None
    kind: Optional[str] = None
    status: Optional[str] = None
    output: Optional[str] = None
    path: Optional[str] = None
    change_type: Optional[str] = None
    diff: Optional[str] = None
    command: Optional[str] = None
    cwd: Optional[str] = None
    endpoint: Optional[str] = None

    @property
    def is_diagnostic(self) -> bool:
        return False


# ---------------------------------------------------------------------------
# Diagnostic entries
# ---------------------------------------------------------------------------


class DiagnosticStats(BaseModel):
    """Counts and flags from a merge/reconciliation of a resumed session.

    Every field is optional; a field is absent when it does not apply.
    """

    model_config = _ENTRY_MODEL_CONFIG

    reused: Optional[int] = None
    inserted: Optional[int] = None
    updated: Optional[int] = None
    unchanged: Optional[int] = None
    resumed_turns: Optional[int] = None
    resumed_items: Optional[int] = None
    stale_detected: Optional[bool] = None
    prefer_local_richness: Optional[bool] = None
    carry_forward_unmatched: Optional[bool] = None
    local_tool_calls: Optional[int] = None
    resumed_tool_calls: Optional[int] = None


class MessageSnapshot(BaseModel):
    """Point-in-time view of one chat message, supplied by the caller."""

    model_config = _ENTRY_MODEL_CONFIG

    index: int
    role: str
    is_streaming: bool
    segment_count: int
    segment_kinds: str
    tool_call_count: int
    content_preview: str
    message_id: str


class DiagnosticEntry(BaseModel):
    """One internal observability event."""

    model_config = _ENTRY_MODEL_CONFIG

    type: DiagnosticType
    ts: str
    session_id: Optional[str] = None
    event: Optional[str] = None
    source: Optional[str] = None
    detail: Optional[str] = None
    endpoint: Optional[str] = None
    stats: Optional[DiagnosticStats] = None
    messages: Optional[tuple[MessageSnapshot, ...]] = None

    @property
    def is_diagnostic(self) -> bool:
        return True


AnyEntry = Union[LogEntry, DiagnosticEntry]
