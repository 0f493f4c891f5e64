"""Test helpers shared across codexlog test modules."""

from __future__ import annotations

import json
import time
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Pause between file creations so creation times are distinguishable
# on filesystems with coarse timestamps.
CREATION_GAP = 0.03


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 10, 17, 9, 30, 15, 123456, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float = 1.0) -> None:
        self.now += timedelta(seconds=seconds)


def read_lines(path: Path) -> list[dict]:
    """Parse every line of a JSONL file."""
    with open(path, encoding="utf-8") as fh:
        return [json.loads(line) for line in fh]


def pause() -> None:
    time.sleep(CREATION_GAP)
