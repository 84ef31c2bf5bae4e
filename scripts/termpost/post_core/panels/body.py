"""Body editor renderer."""

from __future__ import annotations

from rich.text import Text

from post_core.body import BodyBuffer
from post_core.models import JsonIssue
from post_core.panels import empty_text, pane_state, titled_panel, with_cursor


def body_lines(buffer: BodyBuffer, editing: bool, rows: int) -> list[Text]:
    row, col = buffer.cursor
    start = max(0, row - rows + 1)
    lines: list[Text] = []
    for idx, line in enumerate(buffer.lines[start : start + rows], start=start):
        if editing and idx == row:
            lines.append(with_cursor(line, col))
        else:
            lines.append(Text(line))
    if editing and not buffer.lines:
        lines.append(with_cursor("", 0))
    return lines


def render(buffer: BodyBuffer, label: str, issue: JsonIssue | None, focused: bool, editing: bool, rows: int = 20):
    lines = body_lines(buffer, editing, rows)
    if lines:
        content = Text("\n").join(lines)
    else:
        content = empty_text("JSON body (i to edit)")
    state = "error" if issue is not None else pane_state(focused, editing)
    return titled_panel(content, label, state)
