"""Key help renderer."""

from __future__ import annotations

from rich.panel import Panel
from rich.text import Text

from post_core.models import InputMode, Pane

NAVIGATION_HELP = "[Tab] Next Pane | [i] Edit | [Enter] Send | [q] Quit"

PANE_HELP = {
    Pane.METHOD: "[Left/Right/Space] Cycle Method",
    Pane.URL: "[Up/Down] History",
    Pane.REQUEST_DETAILS: "[Left/Right] Tab | [Up/Down] Row | [x] Toggle Row",
    Pane.BODY: "",
    Pane.RESPONSE: "[Up/Down/PgUp/PgDn] Scroll | [Left/Right] Body/Headers",
}

EDIT_HELP = {
    Pane.REQUEST_DETAILS: "[Esc] Done | [Tab] Key/Value | [Enter] Next Row | [Ctrl+D] Delete Row",
    Pane.BODY: "[Esc] Done | JSON is validated as you type",
}


def help_text(pane: Pane, mode: InputMode) -> str:
    if mode is InputMode.EDITING:
        return EDIT_HELP.get(pane, "[Esc] Finish Editing")
    extra = PANE_HELP.get(pane, "")
    return f"{NAVIGATION_HELP} | {extra}" if extra else NAVIGATION_HELP


def render(pane: Pane, mode: InputMode) -> Panel:
    return Panel(Text(f" {help_text(pane, mode)} "), title="[bold]Controls[/bold]", border_style="cyan")
