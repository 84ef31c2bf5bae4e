"""Responsive layout mode selection and viewport sizing."""

from __future__ import annotations

HEADER_ROWS = 3
FOOTER_ROWS = 3
URL_ROW = 3
PANEL_CHROME = 2


def select_layout_mode(width: int) -> str:
    if width < 90:
        return "narrow"
    if width < 150:
        return "medium"
    return "wide"


def response_viewport(height: int, mode: str) -> int:
    """Lines of response text visible inside the response panel."""
    available = height - HEADER_ROWS - FOOTER_ROWS
    if mode == "wide":
        rows = available
    elif mode == "medium":
        # Request section takes half, the response panel the rest.
        rows = available - available // 2
    else:
        rows = available // 3
    return max(1, rows - PANEL_CHROME)


def editor_viewport(height: int, mode: str) -> int:
    """Lines visible in the body editor and key/value table."""
    available = height - HEADER_ROWS - FOOTER_ROWS
    if mode == "wide":
        rows = (available - URL_ROW) // 2
    elif mode == "medium":
        rows = available // 2 - URL_ROW
    else:
        rows = available // 4
    return max(1, rows - PANEL_CHROME)
