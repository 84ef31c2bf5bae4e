"""Shared model contracts for request/response state."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from post_core.key_value import KeyValueTable

LOADING_TEXT = "Loading..."
EMPTY_RESPONSE_TEXT = "No response yet..."
ERROR_PREFIX = "Error: "


class HttpMethod(Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"

    def next(self) -> "HttpMethod":
        members = list(HttpMethod)
        return members[(members.index(self) + 1) % len(members)]

    def prev(self) -> "HttpMethod":
        members = list(HttpMethod)
        return members[(members.index(self) - 1) % len(members)]

    def __str__(self) -> str:
        return self.value


class Pane(Enum):
    METHOD = "method"
    URL = "url"
    REQUEST_DETAILS = "request_details"
    BODY = "body"
    RESPONSE = "response"


class InputMode(Enum):
    NAVIGATION = "navigation"
    EDITING = "editing"


class RequestTab(Enum):
    HEADERS = "Headers"
    PARAMS = "Params"
    AUTHORIZATION = "Auth"

    def next(self) -> "RequestTab":
        members = list(RequestTab)
        return members[(members.index(self) + 1) % len(members)]

    def prev(self) -> "RequestTab":
        members = list(RequestTab)
        return members[(members.index(self) - 1) % len(members)]


class KeyValueField(Enum):
    KEY = "key"
    VALUE = "value"


class ResponseView(Enum):
    BODY = "Body"
    HEADERS = "Headers"


@dataclass
class KeyValueEntry:
    key: str = ""
    value: str = ""
    enabled: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {"key": self.key, "value": self.value, "enabled": self.enabled}


@dataclass(frozen=True)
class JsonIssue:
    line: int
    column: int
    message: str


@dataclass(frozen=True)
class HistoryEntry:
    method: HttpMethod
    url: str
    headers: KeyValueTable
    params: KeyValueTable
    auth: KeyValueTable
    body: str
    timestamp: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "method": self.method.value,
            "url": self.url,
            "headers": self.headers.to_dict(),
            "params": self.params.to_dict(),
            "auth": self.auth.to_dict(),
            "body": self.body,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class OutgoingRequest:
    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: str | None = None


@dataclass(frozen=True)
class TransportResponse:
    status: int
    headers: str
    body: str
    elapsed_ms: float | None = None


@dataclass
class ResponseState:
    status: int | None = None
    text: str | None = None
    scroll_offset: int = 0
    headers: str | None = None
    elapsed_ms: float | None = None
    view: ResponseView = ResponseView.BODY

    @property
    def is_loading(self) -> bool:
        return self.text == LOADING_TEXT

    @property
    def is_error(self) -> bool:
        return self.text is not None and self.text.startswith(ERROR_PREFIX)

    def scroll_up(self, amount: int = 1) -> None:
        self.scroll_offset = max(0, self.scroll_offset - amount)

    def scroll_down(self, amount: int = 1) -> None:
        self.scroll_offset += amount

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "text": self.text,
            "scroll_offset": self.scroll_offset,
            "headers": self.headers,
            "elapsed_ms": self.elapsed_ms,
            "view": self.view.value,
        }
