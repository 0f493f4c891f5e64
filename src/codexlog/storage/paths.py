"""Log directory resolution.

Session logs live in ``<app-data-root>/Agmente/logs/codex/``. The
app-data root is the platform's per-user application data location,
falling back to the temporary directory when none can be determined.
"""

from __future__ import annotations

import os
import sys
import tempfile
from collections.abc import Callable, Mapping
from pathlib import Path

APP_NAME = "Agmente"
LOG_SUBDIR = ("logs", "codex")

# Returns the app-data root under which APP_NAME/logs/codex is placed.
LogRootResolver = Callable[[], Path]


def app_data_root(
    *,
    platform: str | None = None,
    environ: Mapping[str, str] | None = None,
    home: Path | None = None,
) -> Path:
    """Return the per-user application data root for *platform*.

    - macOS: ``~/Library/Application Support``
    - Windows: ``%APPDATA%``
    - elsewhere: ``$XDG_DATA_HOME`` or ``~/.local/share``

    Falls back to the system temporary directory when the home
    directory (or ``%APPDATA%``) is unavailable.
    """
    platform = platform or sys.platform
    env = os.environ if environ is None else environ

    try:
        home_dir = home if home is not None else Path.home()
    except RuntimeError:
        home_dir = None

    if platform.startswith("win"):
        appdata = env.get("APPDATA")
        if appdata:
            return Path(appdata)
    elif platform == "darwin":
        if home_dir is not None:
            return home_dir / "Library" / "Application Support"
    else:
        xdg = env.get("XDG_DATA_HOME")
        if xdg and os.path.isabs(xdg):
            return Path(xdg)
        if home_dir is not None:
            return home_dir / ".local" / "share"

    return Path(tempfile.gettempdir())


def log_directory_for(root: Path) -> Path:
    """Return the session log directory under an app-data *root*."""
    return Path(root, APP_NAME, *LOG_SUBDIR)


def default_log_directory(resolver: LogRootResolver | None = None) -> Path:
    """Return the session log directory for the current user."""
    root = (resolver or app_data_root)()
    return log_directory_for(root)
