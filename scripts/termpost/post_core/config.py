"""Built-in defaults and user config merging for the request TUI."""

from __future__ import annotations

import json
from pathlib import Path

from post_core.models import HttpMethod

DEFAULT_CONFIG: dict = {
    "poll_interval_ms": 100,
    "inbox_capacity": 10,
    "highlight_theme": "monokai",
    "default_method": "GET",
    "default_url": "",
}

MIN_POLL_INTERVAL_MS = 10


def load_user_config(path: str | None) -> dict:
    if not path:
        return {}

    config_path = Path(path)
    if not config_path.exists():
        raise ValueError(f"config path not found: {config_path}")

    try:
        payload = json.loads(config_path.read_text())
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON config: {exc}") from exc
    if not isinstance(payload, dict):
        raise ValueError("config must be a JSON object")
    return payload


def _int_setting(user_config: dict, key: str, minimum: int) -> int:
    try:
        value = int(user_config[key])
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{key} must be an integer") from exc
    return max(minimum, value)


def resolve_config(config_path: str | None = None) -> dict:
    resolved = dict(DEFAULT_CONFIG)
    user_config = load_user_config(config_path)

    if "poll_interval_ms" in user_config:
        resolved["poll_interval_ms"] = _int_setting(user_config, "poll_interval_ms", MIN_POLL_INTERVAL_MS)

    if "inbox_capacity" in user_config:
        resolved["inbox_capacity"] = _int_setting(user_config, "inbox_capacity", 1)

    theme = user_config.get("highlight_theme")
    if theme:
        resolved["highlight_theme"] = str(theme)

    method = user_config.get("default_method")
    if method:
        resolved["default_method"] = parse_method(str(method)).value

    url = user_config.get("default_url")
    if isinstance(url, str):
        resolved["default_url"] = url

    return resolved


def parse_method(value: str) -> HttpMethod:
    try:
        return HttpMethod(value.strip().upper())
    except ValueError as exc:
        raise ValueError(f"unknown method: {value}") from exc
