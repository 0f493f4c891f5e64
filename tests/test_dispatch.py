"""Tests for QueuedLogWriter."""

from __future__ import annotations

import threading

import pytest

from codexlog.dispatch import DISPATCHABLE_OPERATIONS, QueuedLogWriter
from codexlog.exceptions import InvalidLogLevelError, WriterClosedError
from codexlog.models.config import LogLevel
from tests.helpers import read_lines


@pytest.fixture
def queued(writer):
    q = QueuedLogWriter(writer)
    yield q
    q.close(timeout=5)


class TestSubmit:
    def test_start_session_future_returns_path(self, queued, log_dir):
        path = queued.start_session("s", "wss://host", "/repo").result(timeout=5)
        assert path.parent == log_dir
        assert queued.writer.current_file == path

    def test_calls_run_in_submission_order(self, queued):
        path = queued.submit("start_session", "s", "wss://host", None).result(timeout=5)
        for i in range(50):
            queued.submit("log_turn_event", "turn/started", "s", str(i))
        assert queued.flush(timeout=5)
        turns = [line["turnId"] for line in read_lines(path)[1:]]
        assert turns == [str(i) for i in range(50)]

    def test_fire_and_forget_returns_immediately(self, queued, writer):
        gate = threading.Event()
        original = writer.log_wire

        def slow_log_wire(*args, **kwargs):
            gate.wait(timeout=5)
            return original(*args, **kwargs)

        writer.log_wire = slow_log_wire
        queued.start_session("s", "wss://host", None)
        future = queued.log_wire("out", "initialize", "{}", "s")
        assert not future.done()
        gate.set()
        assert future.result(timeout=5) is None

    def test_unknown_operation(self, queued):
        with pytest.raises(ValueError, match="collect_log_files"):
            queued.submit("collect_log_files")

    def test_unknown_attribute(self, queued):
        with pytest.raises(AttributeError):
            queued.not_a_method  # noqa: B018

    def test_operations_exist_on_writer(self, writer):
        for name in DISPATCHABLE_OPERATIONS:
            assert callable(getattr(writer, name))

    def test_error_reported_on_future(self, queued):
        future = queued.set_log_level("chatty")
        with pytest.raises(InvalidLogLevelError):
            future.result(timeout=5)
        # worker keeps draining after a failed call
        assert queued.set_log_level("standard").result(timeout=5) is None
        assert queued.writer.log_level is LogLevel.STANDARD

    def test_collect_bypasses_queue(self, queued):
        queued.start_session("s", "wss://host", None).result(timeout=5)
        assert len(queued.collect_log_files()) == 1


class TestFlushAndClose:
    def test_flush_timeout(self, queued, writer):
        gate = threading.Event()
        writer.end_session = lambda: gate.wait(timeout=5)
        queued.end_session()
        assert queued.flush(timeout=0.05) is False
        gate.set()
        assert queued.flush(timeout=5) is True

    def test_close_ends_session(self, writer):
        queued = QueuedLogWriter(writer)
        path = queued.start_session("s", "wss://host", None).result(timeout=5)
        queued.log_wire("in", "turn/completed", "{}", "s")
        queued.close(timeout=5)

        assert queued.closed
        types = [line["type"] for line in read_lines(path)]
        assert types == ["session_start", "wire", "session_end"]

    def test_context_manager_drains_queue(self, writer):
        with QueuedLogWriter(writer) as queued:
            queued.start_session("s", None, None)
            for i in range(50):
                queued.log_wire("out", f"m/{i}", "{}", "s")

        assert queued.closed
        lines = read_lines(writer.collect_log_files()[0])
        assert len(lines) == 52
        assert lines[-1]["type"] == "session_end"

    def test_submit_after_close(self, writer):
        queued = QueuedLogWriter(writer)
        queued.close(timeout=5)
        with pytest.raises(WriterClosedError):
            queued.log_wire("out", "x", "{}", None)
        with pytest.raises(WriterClosedError):
            queued.flush()

    def test_close_twice(self, writer):
        queued = QueuedLogWriter(writer)
        queued.close(timeout=5)
        queued.close(timeout=5)
