"""Method, URL and request-details (headers/params/auth) renderers."""

from __future__ import annotations

from rich.console import Group
from rich.table import Table
from rich.text import Text

from post_core.formatting import method_style
from post_core.key_value import KeyValueTable
from post_core.models import KeyValueField, RequestTab
from post_core.panels import empty_text, pane_state, titled_panel, with_cursor


def render_method(method: str, focused: bool):
    text = Text(f" {method} ", style=f"bold {method_style(method)}")
    return titled_panel(text, "Method", pane_state(focused), width=12)


def render_url(url: str, focused: bool, editing: bool):
    if editing:
        content = with_cursor(url, len(url))
    elif url:
        content = Text(url, no_wrap=True, overflow="ellipsis")
    else:
        content = empty_text("Enter a URL (i to edit)")
    return titled_panel(content, "URL", pane_state(focused, editing))


def tab_bar(active: RequestTab) -> Text:
    bar = Text()
    for idx, tab in enumerate(RequestTab):
        if idx:
            bar.append(" ")
        style = "bold blue" if tab is active else "dim"
        bar.append(f"[{tab.value}]", style=style)
    return bar


def _cell(text: str, active: bool, editing: bool) -> Text:
    if active and editing:
        return with_cursor(text, len(text))
    return Text(text, overflow="fold")


def kv_table(table: KeyValueTable, focused: bool, editing: bool, rows: int = 20) -> Table:
    grid = Table(box=None, expand=True, pad_edge=False)
    grid.add_column("", width=1, no_wrap=True)
    grid.add_column("Key", style="bold", ratio=1)
    grid.add_column("Value", ratio=1)

    start = max(0, table.focused_index - rows + 2)
    for idx, entry in enumerate(table.entries[start : start + rows], start=start):
        selected = focused and idx == table.focused_index
        key_cell = _cell(entry.key, selected and table.focused_field is KeyValueField.KEY, editing)
        value_cell = _cell(entry.value, selected and table.focused_field is KeyValueField.VALUE, editing)
        row_style = "on grey23" if selected else ""
        if not entry.enabled:
            row_style = f"{row_style} dim strike".strip()
        grid.add_row("x" if entry.enabled else " ", key_cell, value_cell, style=row_style)

    if not table.entries:
        grid.add_row("", empty_text("(empty - i to edit, Enter to add)"), "")
    elif focused and table.on_new_row:
        grid.add_row("", Text("(add new entry)", style="dim"), "", style="on grey23")
    return grid


def render_details(tabs, focused: bool, editing: bool, rows: int = 20):
    active = tabs.active
    body = Group(tab_bar(tabs.active_tab), kv_table(active, focused, editing, rows))
    return titled_panel(body, "Request", pane_state(focused, editing))
