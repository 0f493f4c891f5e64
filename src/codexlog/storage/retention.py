"""Retention pruning for session log files."""

from __future__ import annotations

import logging
from pathlib import Path

from codexlog.storage.files import LogFileStore, newest_first

logger = logging.getLogger(__name__)


def prune_old_logs(store: LogFileStore, max_files: int, *, reserve: int = 0) -> list[Path]:
    """Delete the oldest session logs beyond the retention limit.

    Keeps the ``max_files - reserve`` most recently created files and
    deletes the rest. *reserve* leaves room for files about to be
    created, so a rotation can prune first and still end at
    ``max_files``. A file whose creation time cannot be read counts as
    the oldest. Deletion failures are skipped.

    Args:
        store: The log directory to prune.
        max_files: Retention limit; ``<= 0`` disables pruning.
        reserve: Number of slots to keep free below the limit.

    Returns:
        The files that were deleted.
    """
    if max_files <= 0:
        return []
    keep = max(max_files - reserve, 0)

    files = store.list_files()
    if len(files) <= keep:
        return []

    deleted = [path for path in newest_first(files)[keep:] if store.delete(path)]
    if deleted:
        logger.debug(
            "Pruned %d session log(s) from %s (limit=%d)",
            len(deleted), store.directory, max_files,
        )
    return deleted
