"""Shared test fixtures for codexlog.

Provides a scratch log directory, a controllable clock, and a writer
factory that closes every writer it created.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from codexlog.models.config import LoggerConfig
from codexlog.writer import SessionLogWriter
from tests.helpers import FakeClock


@pytest.fixture
def log_dir(tmp_path: Path) -> Path:
    return tmp_path / "Agmente" / "logs" / "codex"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_writer(log_dir: Path):
    """Factory for writers logging into the scratch directory."""
    created: list[SessionLogWriter] = []

    def _make(*, clock=None, **config) -> SessionLogWriter:
        config.setdefault("log_dir", log_dir)
        writer = SessionLogWriter(LoggerConfig(**config), clock=clock)
        created.append(writer)
        return writer

    yield _make
    for writer in created:
        writer.close()


@pytest.fixture
def writer(make_writer) -> SessionLogWriter:
    return make_writer()
