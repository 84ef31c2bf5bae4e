"""Shared text formatting helpers for human-facing panels."""

from __future__ import annotations

import json

METHOD_STYLES = {
    "GET": "green",
    "POST": "yellow",
    "PUT": "blue",
    "DELETE": "red",
    "PATCH": "magenta",
}

STATUS_CLASS_STYLES = {
    2: "green",
    3: "blue",
    4: "yellow",
    5: "red",
}


def pretty_json(text: str) -> str:
    """Re-indent a JSON document; non-JSON text comes back unchanged."""
    try:
        parsed = json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return text
    return json.dumps(parsed, indent=2, ensure_ascii=False)


def status_style(status: int | None) -> str:
    if status is None:
        return "default"
    return STATUS_CLASS_STYLES.get(status // 100, "default")


def status_phrase(status: int | None) -> str:
    if status is None:
        return ""
    if 200 <= status < 300:
        return "Success"
    if 300 <= status < 400:
        return "Redirect"
    if 400 <= status < 500:
        return "Client Error"
    if status >= 500:
        return "Server Error"
    return "Informational"


def compact_elapsed(elapsed_ms: float | None) -> str:
    if elapsed_ms is None:
        return "n/a"
    ms = max(0.0, float(elapsed_ms))
    if ms < 1000:
        return f"{int(ms)}ms"
    return f"{ms / 1000:.2f}s"


def method_style(method: str) -> str:
    return METHOD_STYLES.get(method, "default")
