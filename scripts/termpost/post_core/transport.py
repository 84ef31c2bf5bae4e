"""Outgoing request composition and the requests-backed HTTP transport."""

from __future__ import annotations

import base64
import logging
import re
from urllib.parse import urlencode

import requests

from post_core.key_value import KeyValueTable
from post_core.models import HistoryEntry, OutgoingRequest, TransportResponse

logger = logging.getLogger(__name__)

HEADER_NAME_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")
HEADER_VALUE_BAD_RE = re.compile(r"[\r\n\x00]")
JSON_CONTENT_TYPE = "application/json"


class TransportError(Exception):
    """Connection, timeout or protocol failure while sending a request."""


def valid_header(name: str, value: str) -> bool:
    if not HEADER_NAME_RE.match(name):
        return False
    if HEADER_VALUE_BAD_RE.search(value) or value[:1] in (" ", "\t"):
        return False
    try:
        value.encode("latin-1")
    except UnicodeEncodeError:
        return False
    return True


def append_query(url: str, params: list[tuple[str, str]]) -> str:
    pairs = [(key, value) for key, value in params if key]
    if not pairs:
        return url
    separator = "&" if "?" in url else "?"
    if url.endswith(("?", "&")):
        separator = ""
    return f"{url}{separator}{urlencode(pairs)}"


def _first_row(rows: dict[str, tuple[str, str]], *names: str) -> tuple[str, str] | None:
    for name in names:
        row = rows.get(name.lower())
        if row is not None:
            return row
    return None


def auth_headers(auth: KeyValueTable) -> dict[str, str]:
    """Translate Authorization-tab rows into concrete headers.

    Precedence: Authorization, Bearer, API-Key/X-API-Key, username+password.
    Only the first matching rule applies.
    """
    rows: dict[str, tuple[str, str]] = {}
    for key, value in auth.enabled_pairs():
        rows.setdefault(key.strip().lower(), (key.strip(), value))

    row = _first_row(rows, "Authorization", "Bearer")
    if row is not None:
        return {"Authorization": row[1]}

    row = _first_row(rows, "API-Key", "X-API-Key")
    if row is not None:
        return {row[0]: row[1]}

    user = _first_row(rows, "username")
    password = _first_row(rows, "password")
    if user is not None and password is not None:
        raw = f"{user[1]}:{password[1]}".encode("utf-8")
        return {"Authorization": "Basic " + base64.b64encode(raw).decode("ascii")}
    return {}


def build_headers(headers: KeyValueTable, auth: KeyValueTable, body: str) -> dict[str, str]:
    result: dict[str, str] = {}
    candidates = list(headers.enabled_pairs()) + list(auth_headers(auth).items())
    for name, value in candidates:
        name = name.strip()
        if not valid_header(name, value):
            logger.debug("skipping invalid header row %r", name)
            continue
        result[name] = value
    if body.strip():
        result["Content-Type"] = JSON_CONTENT_TYPE
    return result


def build_outgoing(entry: HistoryEntry) -> OutgoingRequest:
    body = entry.body
    return OutgoingRequest(
        method=entry.method.value,
        url=append_query(entry.url, entry.params.enabled_pairs()),
        headers=build_headers(entry.headers, entry.auth, body),
        body=body if body.strip() else None,
    )


def format_headers(headers) -> str:
    return "\n".join(f"{name}: {value}" for name, value in headers.items())


def send(request: OutgoingRequest) -> TransportResponse:
    data = request.body.encode("utf-8") if request.body is not None else None
    try:
        resp = requests.request(
            request.method,
            request.url,
            headers=request.headers,
            data=data,
        )
    except requests.RequestException as exc:
        raise TransportError(str(exc)) from exc

    return TransportResponse(
        status=resp.status_code,
        headers=format_headers(resp.headers),
        body=resp.text,
        elapsed_ms=resp.elapsed.total_seconds() * 1000,
    )
