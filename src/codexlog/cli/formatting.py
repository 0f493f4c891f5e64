"""Rich formatting helpers for the codexlog CLI.

Rich auto-detects TTY and degrades gracefully when piped (no ANSI codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from codexlog.export import LogFileInfo
    from codexlog.models.entries import AnyEntry, DiagnosticStats

# Entry fields shown in the detail column, in display order.
_DETAIL_FIELDS = (
    "direction", "method", "title", "kind", "status", "path", "change_type",
    "command", "cwd", "endpoint", "event", "source",
)
_PREVIEW_FIELDS = ("message", "output", "diff", "detail")
_PREVIEW_LIMIT = 120


def get_console() -> Console:
    """Create a Rich Console that auto-detects TTY for graceful pipe degradation."""
    return Console(stderr=False)


def format_size(size: int) -> str:
    for unit in ("B", "KB", "MB"):
        if size < 1024 or unit == "MB":
            return f"{size} {unit}" if unit == "B" else f"{size:.1f} {unit}"
        size /= 1024
    return f"{size} B"


def format_file_list(infos: list[LogFileInfo], console: Console) -> None:
    """Display session log files in a compact table."""
    if not infos:
        console.print("[dim]No session logs.[/dim]")
        return

    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("File", style="yellow")
    table.add_column("Session", style="cyan")
    table.add_column("Created", style="dim")
    table.add_column("Size", justify="right")
    table.add_column("Lines", justify="right", style="green")

    for info in infos:
        created = info.created_at.strftime("%Y-%m-%d %H:%M:%S") if info.created_at else "?"
        table.add_row(
            escape(info.name),
            escape(info.session or ""),
            created,
            format_size(info.size),
            str(info.lines),
        )

    console.print(table)


def _preview(text: str) -> str:
    flat = " ".join(text.split())
    if len(flat) > _PREVIEW_LIMIT:
        flat = flat[: _PREVIEW_LIMIT - 3] + "..."
    return flat


def _format_stats(stats: DiagnosticStats) -> str:
    parts = [f"{k}={v}" for k, v in stats.model_dump(by_alias=True, exclude_none=True).items()]
    return ", ".join(parts)


def format_entries(entries: list[AnyEntry], console: Console) -> None:
    """Display decoded log entries, one row per entry."""
    if not entries:
        console.print("[dim]No entries.[/dim]")
        return

    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Time", style="dim")
    table.add_column("Type", style="cyan")
    table.add_column("Turn", style="yellow")
    table.add_column("Details")

    for entry in entries:
        details = []
        for name in _DETAIL_FIELDS:
            value = getattr(entry, name, None)
            if value is not None:
                details.append(f"{name}={value}")
        for name in _PREVIEW_FIELDS:
            value = getattr(entry, name, None)
            if value:
                details.append(_preview(value))
        stats = getattr(entry, "stats", None)
        if stats is not None:
            details.append(_format_stats(stats))
        messages = getattr(entry, "messages", None)
        if messages is not None:
            details.append(f"{len(messages)} message(s)")

        table.add_row(
            entry.ts,
            escape(entry.type),
            escape(getattr(entry, "turn_id", None) or ""),
            escape(" ".join(details)),
        )

    console.print(table)


def format_error(message: str, console: Console) -> None:
    """Display an error message."""
    console.print(f"[red]Error:[/red] {message}", highlight=False)
