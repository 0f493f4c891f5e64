"""codexlog list -- show session log files, newest first."""

from __future__ import annotations

import click

from codexlog.cli.formatting import format_error, format_file_list, get_console


@click.command("list")
@click.option("-n", "--limit", default=None, type=int, help="Maximum number of files to show.")
@click.option("--paths", is_flag=True, help="Print bare file paths, one per line.")
@click.pass_context
def list_logs(ctx: click.Context, limit: int | None, paths: bool) -> None:
    """List session log files, newest first."""
    from codexlog.cli import _get_store
    from codexlog.export import describe_log_files

    console = get_console()
    try:
        store = _get_store(ctx)
        if paths:
            files = store.list_newest_first()[:limit]
            for path in files:
                click.echo(str(path))
            return
        infos = describe_log_files(store)[:limit]
        format_file_list(infos, console)
    except SystemExit:
        raise
    except Exception as e:
        format_error(str(e), console)
        raise SystemExit(1) from None
