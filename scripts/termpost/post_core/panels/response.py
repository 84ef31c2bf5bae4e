"""Response renderer."""

from __future__ import annotations

from rich.text import Text

from post_core.formatting import compact_elapsed, status_phrase, status_style
from post_core.highlight import DEFAULT_THEME, highlight_json
from post_core.models import EMPTY_RESPONSE_TEXT, ResponseState, ResponseView
from post_core.panels import pane_state, titled_panel


def response_title(response: ResponseState) -> str:
    title = "Response"
    if response.view is ResponseView.HEADERS:
        title = "Response Headers"
    if response.status is not None:
        style = status_style(response.status)
        title += (
            f" ([{style}]Status: {response.status} {status_phrase(response.status)}[/{style}]"
            f" in {compact_elapsed(response.elapsed_ms)})"
        )
    return title


def response_lines(response: ResponseState, theme: str = DEFAULT_THEME) -> list[Text]:
    if response.view is ResponseView.HEADERS:
        if not response.headers:
            return [Text("No headers", style="dim")]
        return [Text(line) for line in response.headers.split("\n")]

    if response.text is None:
        return [Text(EMPTY_RESPONSE_TEXT, style="dim")]
    if response.is_loading:
        return [Text(response.text, style="italic")]
    if response.is_error:
        return [Text(line, style="red") for line in response.text.split("\n")]
    return highlight_json(response.text, theme)


def render(response: ResponseState, focused: bool, rows: int = 20, theme: str = DEFAULT_THEME):
    lines = response_lines(response, theme)
    offset = min(response.scroll_offset, max(0, len(lines) - 1))
    visible = lines[offset : offset + rows]
    return titled_panel(Text("\n").join(visible), response_title(response), pane_state(focused))
