"""codexlog show -- display the entries of one session log."""

from __future__ import annotations

import click

from codexlog.cli.formatting import format_entries, format_error, get_console


@click.command()
@click.argument("file")
@click.option("--type", "type_filter", default=None, help="Only show entries of this type.")
@click.option("-n", "--limit", default=None, type=int, help="Show only the last N matching entries.")
@click.option("--raw", is_flag=True, help="Print the JSON lines unchanged.")
@click.pass_context
def show(ctx: click.Context, file: str, type_filter: str | None, limit: int | None, raw: bool) -> None:
    """Show the entries of FILE.

    FILE is a log filename inside the log directory, or a path.
    """
    from codexlog.cli import _get_store
    from codexlog.serialization import encode_line, read_entries

    console = get_console()
    try:
        path = _get_store(ctx).resolve(file)
        entries = [
            e for e in read_entries(path)
            if type_filter is None or e.type == type_filter
        ]
        if limit is not None:
            entries = entries[-limit:] if limit > 0 else []
        if raw:
            for entry in entries:
                click.echo(encode_line(entry), nl=False)
        else:
            format_entries(entries, console)
    except SystemExit:
        raise
    except Exception as e:
        format_error(str(e), console)
        raise SystemExit(1) from None
