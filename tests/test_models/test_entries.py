"""Tests for the event schema.

Covers:
- camelCase serialized names with snake_case attributes
- Entries are immutable
- DiagnosticEntry only accepts the four diagnostic types
- format_timestamp produces UTC ISO-8601 with milliseconds
"""

from datetime import datetime, timedelta, timezone

import pytest
from hypothesis import given
from pydantic import ValidationError

from codexlog.models.entries import (
    DIAGNOSTIC_TYPES,
    VERBOSE_ONLY_TYPES,
    DiagnosticEntry,
    DiagnosticStats,
    LogEntry,
    MessageSnapshot,
    format_timestamp,
)
from tests.strategies import message_snapshots


class TestLogEntry:
    def test_snake_case_attributes(self):
        e = LogEntry(type="file_change", ts="t", session_id="s", change_type="modify")
        assert e.session_id == "s"
        assert e.change_type == "modify"

    def test_accepts_camel_case_keys(self):
        e = LogEntry.model_validate({"type": "wire", "ts": "t", "sessionId": "s", "turnId": "u"})
        assert e.session_id == "s"
        assert e.turn_id == "u"

    def test_dump_uses_camel_case(self):
        e = LogEntry(type="tool_call", ts="t", item_id="i", title="Run tests")
        dumped = e.model_dump(by_alias=True, exclude_none=True)
        assert dumped == {"type": "tool_call", "ts": "t", "itemId": "i", "title": "Run tests"}

    def test_arbitrary_turn_event_type(self):
        e = LogEntry(type="turn/completed", ts="t")
        assert e.type == "turn/completed"

    def test_frozen(self):
        e = LogEntry(type="wire", ts="t")
        with pytest.raises(ValidationError):
            e.message = "changed"  # type: ignore[misc]

    def test_not_diagnostic(self):
        assert LogEntry(type="wire", ts="t").is_diagnostic is False


class TestDiagnosticEntry:
    @pytest.mark.parametrize("kind", sorted(DIAGNOSTIC_TYPES))
    def test_valid_types(self, kind):
        e = DiagnosticEntry(type=kind, ts="t")
        assert e.type == kind
        assert e.is_diagnostic is True

    def test_rejects_wire_type(self):
        with pytest.raises(ValidationError):
            DiagnosticEntry(type="wire", ts="t")  # type: ignore[arg-type]

    def test_stats_block_camel_case(self):
        stats = DiagnosticStats(reused=3, stale_detected=True, resumed_tool_calls=2)
        dumped = stats.model_dump(by_alias=True, exclude_none=True)
        assert dumped == {"reused": 3, "staleDetected": True, "resumedToolCalls": 2}

    def test_messages_stored_as_tuple(self):
        snap = MessageSnapshot(
            index=0, role="user", is_streaming=False, segment_count=1,
            segment_kinds="text", tool_call_count=0, content_preview="hi",
            message_id="m1",
        )
        e = DiagnosticEntry(type="chat_snapshot", ts="t", messages=[snap])
        assert e.messages == (snap,)

    def test_verbose_only_types_are_diagnostic(self):
        assert VERBOSE_ONLY_TYPES <= DIAGNOSTIC_TYPES
        assert VERBOSE_ONLY_TYPES == {"chat_snapshot", "render_decision"}


class TestMessageSnapshot:
    def test_missing_fields_fail(self):
        with pytest.raises(ValidationError):
            MessageSnapshot(index=0, role="user")  # type: ignore[call-arg]

    @given(snap=message_snapshots)
    def test_camel_case_keys(self, snap):
        dumped = snap.model_dump(by_alias=True)
        assert set(dumped) == {
            "index", "role", "isStreaming", "segmentCount", "segmentKinds",
            "toolCallCount", "contentPreview", "messageId",
        }


class TestFormatTimestamp:
    def test_utc_with_milliseconds(self):
        moment = datetime(2026, 10, 17, 9, 30, 15, 123456, tzinfo=timezone.utc)
        assert format_timestamp(moment) == "2026-10-17T09:30:15.123Z"

    def test_converts_other_zones_to_utc(self):
        tz = timezone(timedelta(hours=2))
        moment = datetime(2026, 10, 17, 11, 30, 15, tzinfo=tz)
        assert format_timestamp(moment) == "2026-10-17T09:30:15.000Z"

    def test_naive_taken_as_utc(self):
        assert format_timestamp(datetime(2026, 1, 2, 3, 4, 5)) == "2026-01-02T03:04:05.000Z"

    def test_default_is_now(self):
        before = datetime.now(timezone.utc).replace(microsecond=0)
        text = format_timestamp()
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        assert text.endswith("Z")
        assert parsed >= before
