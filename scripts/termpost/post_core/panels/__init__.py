"""Panel rendering helpers."""

from __future__ import annotations

from rich.panel import Panel
from rich.text import Text

BORDER_STYLES = {
    "idle": "cyan",
    "focused": "yellow",
    "editing": "bold green",
    "error": "red",
}


def border_for(state: str) -> str:
    return BORDER_STYLES.get(state, "cyan")


def pane_state(focused: bool, editing: bool = False) -> str:
    if focused and editing:
        return "editing"
    if focused:
        return "focused"
    return "idle"


def titled_panel(renderable, title: str, state: str, **kwargs) -> Panel:
    return Panel(renderable, title=f"[bold]{title}[/bold]", border_style=border_for(state), **kwargs)


def empty_text(message: str) -> Text:
    return Text(message, style="dim")


def with_cursor(text: str, position: int) -> Text:
    """Render text with a reverse-video block at position."""
    rendered = Text(text[:position])
    rendered.append(text[position : position + 1] or " ", style="reverse")
    rendered.append(text[position + 1 :])
    return rendered
