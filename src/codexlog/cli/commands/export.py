"""codexlog export -- copy session logs for sharing."""

from __future__ import annotations

from pathlib import Path

import click

from codexlog.cli.formatting import format_error, get_console


@click.command()
@click.argument("destination", type=click.Path(path_type=Path))
@click.option("--zip", "as_zip", is_flag=True, help="Write a single zip archive at DESTINATION.")
@click.option("-n", "--latest", default=None, type=int, help="Export only the N newest logs.")
@click.pass_context
def export(ctx: click.Context, destination: Path, as_zip: bool, latest: int | None) -> None:
    """Export session logs to DESTINATION (a directory, or a zip with --zip)."""
    from codexlog.cli import _get_store
    from codexlog.export import export_logs

    console = get_console()
    try:
        files = _get_store(ctx).list_newest_first()
        if latest is not None:
            files = files[:latest]
        if not files:
            console.print("[dim]No session logs to export.[/dim]")
            return
        written = export_logs(files, destination, as_zip=as_zip)
        console.print(f"Exported [green]{len(files)}[/green] log(s) to {written}", highlight=False)
    except SystemExit:
        raise
    except Exception as e:
        format_error(str(e), console)
        raise SystemExit(1) from None
