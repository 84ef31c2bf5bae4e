"""The request currently being composed."""

from __future__ import annotations

import time
from typing import Any

from post_core.body import BodyBuffer, validate_json, validation_label
from post_core.key_value import KeyValueTable
from post_core.keys import Key
from post_core.models import HistoryEntry, HttpMethod, JsonIssue, RequestTab


class RequestTabGroup:
    def __init__(self):
        self.headers = KeyValueTable()
        self.params = KeyValueTable()
        self.auth = KeyValueTable()
        self.active_tab = RequestTab.HEADERS

    def table(self, tab: RequestTab) -> KeyValueTable:
        if tab is RequestTab.HEADERS:
            return self.headers
        if tab is RequestTab.PARAMS:
            return self.params
        return self.auth

    @property
    def active(self) -> KeyValueTable:
        return self.table(self.active_tab)

    def next_tab(self) -> None:
        self.active_tab = self.active_tab.next()

    def prev_tab(self) -> None:
        self.active_tab = self.active_tab.prev()


class RequestBuilderState:
    def __init__(self, method: HttpMethod = HttpMethod.GET, url: str = ""):
        self.method = method
        self.url = url
        self.tabs = RequestTabGroup()
        self.body = BodyBuffer()
        self.validation: JsonIssue | None = None

    def next_method(self) -> None:
        self.method = self.method.next()

    def prev_method(self) -> None:
        self.method = self.method.prev()

    def get_body_text(self) -> str:
        return self.body.get_text()

    def set_body_text(self, text: str) -> None:
        self.body.set_text(text)
        self.validate_body()

    def validate_body(self) -> JsonIssue | None:
        self.validation = validate_json(self.body.get_text())
        return self.validation

    def edit_body(self, key: Key) -> None:
        self.body.input(key)
        self.validate_body()

    def validation_status(self) -> str:
        return validation_label(self.body.get_text(), self.validation)

    def type_url_char(self, char: str) -> None:
        self.url += char

    def url_backspace(self) -> None:
        self.url = self.url[:-1]

    def to_history_entry(self, timestamp: float | None = None) -> HistoryEntry:
        return HistoryEntry(
            method=self.method,
            url=self.url,
            headers=self.tabs.headers.snapshot(),
            params=self.tabs.params.snapshot(),
            auth=self.tabs.auth.snapshot(),
            body=self.get_body_text(),
            timestamp=time.time() if timestamp is None else timestamp,
        )

    def load(self, entry: HistoryEntry) -> None:
        """Replace the live request with a history entry's fields."""
        self.method = entry.method
        self.url = entry.url
        # Copy so later edits never reach back into the stored entry.
        self.tabs.headers = entry.headers.snapshot()
        self.tabs.params = entry.params.snapshot()
        self.tabs.auth = entry.auth.snapshot()
        self.set_body_text(entry.body)

    def to_dict(self) -> dict[str, Any]:
        issue = self.validation
        return {
            "method": self.method.value,
            "url": self.url,
            "active_tab": self.tabs.active_tab.value,
            "headers": self.tabs.headers.to_dict(),
            "params": self.tabs.params.to_dict(),
            "auth": self.tabs.auth.to_dict(),
            "body": self.get_body_text(),
            "validation": None
            if issue is None
            else {"line": issue.line, "column": issue.column, "message": issue.message},
        }
