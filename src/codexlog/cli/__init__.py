"""codexlog CLI -- inspect, export and purge Codex session logs.

This module is NEVER imported from codexlog/__init__.py.
It is only loaded via the ``codexlog`` entry point defined in pyproject.toml.
"""

from __future__ import annotations

from pathlib import Path

try:
    import click
except ImportError:
    raise ImportError(
        "CLI dependencies not installed. Install with: pip install codexlog[cli]"
    ) from None

from codexlog.models.config import ENV_DIR, LoggerConfig
from codexlog.storage.files import LogFileStore
from codexlog.writer import SessionLogWriter


@click.group()
@click.option(
    "--log-dir",
    default=None,
    envvar=ENV_DIR,
    type=click.Path(file_okay=False, path_type=Path),
    help="Session log directory (defaults to the per-user app-data location).",
)
@click.pass_context
def cli(ctx: click.Context, log_dir: Path | None) -> None:
    """codexlog: inspect structured Codex session logs."""
    ctx.ensure_object(dict)
    ctx.obj["log_dir"] = log_dir


def _get_config(ctx: click.Context) -> LoggerConfig:
    """Build a LoggerConfig from the environment and the --log-dir option."""
    config = LoggerConfig.from_env()
    log_dir = ctx.obj.get("log_dir")
    if log_dir is not None:
        config = config.model_copy(update={"log_dir": log_dir})
    return config


def _get_store(ctx: click.Context) -> LogFileStore:
    return LogFileStore(_get_config(ctx).resolve_log_dir())


def _get_writer(ctx: click.Context) -> SessionLogWriter:
    return SessionLogWriter(_get_config(ctx))


# Register subcommands after cli group is defined
from codexlog.cli.commands.list import list_logs  # noqa: E402
from codexlog.cli.commands.show import show  # noqa: E402
from codexlog.cli.commands.export import export  # noqa: E402
from codexlog.cli.commands.purge import purge  # noqa: E402

cli.add_command(list_logs)
cli.add_command(show)
cli.add_command(export)
cli.add_command(purge)
