"""Terminal output for introspector.

Key principle: stderr for status messages, stdout for reports and payloads.

Messages routinely quote inspected names such as ``[[Scopes]]`` or
``Symbol(meta)``, so status text is escaped before Rich sees it and data
output is written with markup disabled.
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.markup import escape

# stderr console for status messages (success/error/warnings)
err_console = Console(stderr=True)

# stdout console for data output (reports, JSON payloads)
out_console = Console()


def success(message: str, *, console: Console | None = None) -> None:
    """Print a success message (green checkmark) to stderr."""
    c = console or err_console
    c.print(f"[green]  \u2713 {escape(message)}[/green]")


def error(message: str, *, console: Console | None = None) -> None:
    """Print an error message (red X) to stderr."""
    c = console or err_console
    c.print(f"[red]  \u2717 {escape(message)}[/red]")


def warn(message: str, *, console: Console | None = None) -> None:
    """Print a warning message (yellow) to stderr."""
    c = console or err_console
    c.print(f"[yellow]  \u26a0 {escape(message)}[/yellow]")


def emit_text(text: str, *, console: Console | None = None) -> None:
    """Write report text to stdout exactly as rendered."""
    c = console or out_console
    c.print(text, markup=False, highlight=False, soft_wrap=True, end="")


def emit_json(data: dict[str, Any], *, console: Console | None = None) -> None:
    """Write a JSON document to stdout."""
    c = console or out_console
    c.print_json(data=data)
