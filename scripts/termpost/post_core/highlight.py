"""JSON syntax highlighting via rich's Pygments integration."""

from __future__ import annotations

from rich.syntax import Syntax
from rich.text import Text

DEFAULT_THEME = "monokai"


def highlight_json(text: str, theme: str = DEFAULT_THEME) -> list[Text]:
    if not text:
        return []
    syntax = Syntax(text, "json", theme=theme, background_color="default")
    highlighted = syntax.highlight(text)
    highlighted.rstrip()
    return list(highlighted.split("\n"))
