"""Fire-and-forget dispatch into a SessionLogWriter.

QueuedLogWriter puts every call on a FIFO queue drained by one daemon
worker thread, so producers on latency-sensitive threads never block on
file I/O. Calls execute in the order they were submitted.

Usage::

    queued = QueuedLogWriter(SessionLogWriter())
    queued.start_session("thr_1", "wss://host", "/repo")   # returns a Future
    queued.log_wire("in", "turn/started", "{...}", "thr_1")
    queued.flush()
    queued.close()
"""

from __future__ import annotations

import functools
import logging
import queue
import threading
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FutureTimeoutError
from pathlib import Path
from typing import Any

from codexlog.exceptions import WriterClosedError
from codexlog.writer import SessionLogWriter

logger = logging.getLogger(__name__)

DISPATCHABLE_OPERATIONS: frozenset[str] = frozenset({
    "start_session",
    "end_session",
    "log_wire",
    "log_turn_event",
    "log_reasoning",
    "log_tool_call",
    "log_file_change",
    "log_command_execution",
    "log_connection_event",
    "log_merge_outcome",
    "log_chat_snapshot",
    "log_render_decision",
    "set_log_level",
    "delete_all_logs",
})

_STOP = object()


class QueuedLogWriter:
    """Single-consumer queue in front of a SessionLogWriter.

    Every writer operation is available as a method of the same name
    that enqueues the call and returns a :class:`~concurrent.futures.Future`.
    Callers may ignore the future.

    The worker is a daemon thread, so calls still queued when the
    interpreter exits are lost. Call :meth:`close` (or use the instance
    as a context manager) to drain the queue and end the open session.
    """

    def __init__(self, writer: SessionLogWriter, *, name: str = "codexlog-writer") -> None:
        self._writer = writer
        self._queue: queue.Queue = queue.Queue()
        self._closed = False
        self._submit_lock = threading.Lock()
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)
        self._thread.start()

    @property
    def writer(self) -> SessionLogWriter:
        return self._writer

    @property
    def closed(self) -> bool:
        return self._closed

    def submit(self, operation: str, /, *args: Any, **kwargs: Any) -> Future:
        """Enqueue ``writer.<operation>(*args, **kwargs)``.

        Raises:
            ValueError: If *operation* is not a writer operation.
            WriterClosedError: If close() has been called.
        """
        if operation not in DISPATCHABLE_OPERATIONS:
            raise ValueError(f"Not a writer operation: {operation!r}")
        return self._enqueue(operation, args, kwargs)

    def __getattr__(self, name: str) -> Any:
        if name in DISPATCHABLE_OPERATIONS:
            return functools.partial(self.submit, name)
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def collect_log_files(self) -> list[Path]:
        """List log files directly; the read path bypasses the queue."""
        return self._writer.collect_log_files()

    def flush(self, timeout: float | None = None) -> bool:
        """Block until every previously submitted call has run.

        Returns:
            False if *timeout* expired first.
        """
        marker = self._enqueue(None, (), {})
        try:
            marker.result(timeout=timeout)
        except FutureTimeoutError:
            return False
        return True

    def close(self, timeout: float | None = None) -> None:
        """Drain pending calls, end the open session and stop the worker."""
        with self._submit_lock:
            if self._closed:
                return
            self._closed = True
            self._queue.put((Future(), "end_session", (), {}))
            self._queue.put(_STOP)
        self._thread.join(timeout)

    def __enter__(self) -> QueuedLogWriter:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def _enqueue(self, operation: str | None, args: tuple, kwargs: dict) -> Future:
        future: Future = Future()
        with self._submit_lock:
            if self._closed:
                raise WriterClosedError()
            self._queue.put((future, operation, args, kwargs))
        return future

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            if item is _STOP:
                return
            future, operation, args, kwargs = item
            if not future.set_running_or_notify_cancel():
                continue
            try:
                result = getattr(self._writer, operation)(*args, **kwargs) if operation else None
            except Exception as exc:
                logger.exception("Queued log call %s failed", operation)
                future.set_exception(exc)
            else:
                future.set_result(result)
