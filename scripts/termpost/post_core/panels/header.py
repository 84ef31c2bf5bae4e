"""Header renderer."""

from __future__ import annotations

from rich.panel import Panel


def history_position(cursor: int | None, total: int) -> str:
    if total == 0:
        return "empty"
    if cursor is None:
        return f"live ({total} saved)"
    return f"{cursor + 1}/{total}"


def render(mode: str, pane: str, cursor: int | None, total: int, in_flight: int, layout_mode: str) -> Panel:
    text = (
        f"Mode: [bold]{mode}[/bold]   "
        f"Pane: [bold]{pane}[/bold]   "
        f"History: [bold]{history_position(cursor, total)}[/bold]   "
        f"In flight: [bold]{in_flight}[/bold]   "
        f"Layout: [bold]{layout_mode}[/bold]"
    )
    return Panel(text, title="[bold]termpost[/bold]", border_style="cyan")
