"""codexlog purge -- delete every session log."""

from __future__ import annotations

import click

from codexlog.cli.formatting import format_error, get_console


@click.command()
@click.option("--yes", is_flag=True, help="Do not ask for confirmation.")
@click.pass_context
def purge(ctx: click.Context, yes: bool) -> None:
    """Delete all session logs in the log directory."""
    from codexlog.cli import _get_writer

    console = get_console()
    try:
        writer = _get_writer(ctx)
        if not yes:
            click.confirm(f"Delete all session logs in {writer.log_dir}?", abort=True)
        deleted = writer.delete_all_logs()
        console.print(f"Deleted [red]{deleted}[/red] log(s).", highlight=False)
    except SystemExit:
        raise
    except click.Abort:
        raise
    except Exception as e:
        format_error(str(e), console)
        raise SystemExit(1) from None
