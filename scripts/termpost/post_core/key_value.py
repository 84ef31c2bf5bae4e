"""Editable key/value table used for headers, query params and auth rows."""

from __future__ import annotations

import copy
from typing import Any

from post_core.models import KeyValueEntry, KeyValueField


class KeyValueTable:
    """Ordered rows plus a (row, field) cursor.

    ``focused_index`` ranges over ``[0, len(entries)]``; the last position is
    the virtual new-row slot. A row is only created by the first keystroke
    typed into that slot or by committing it, never by navigation.
    """

    def __init__(self, entries: list[KeyValueEntry] | None = None):
        self.entries: list[KeyValueEntry] = list(entries or [])
        self.focused_index = 0
        self.focused_field = KeyValueField.KEY

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def on_new_row(self) -> bool:
        return self.focused_index >= len(self.entries)

    def add_entry(self, key: str, value: str, enabled: bool = True) -> None:
        self.entries.append(KeyValueEntry(key=key, value=value, enabled=enabled))

    def focused_entry(self) -> KeyValueEntry | None:
        if self.focused_index < len(self.entries):
            return self.entries[self.focused_index]
        return None

    def _materialize(self) -> KeyValueEntry:
        entry = self.focused_entry()
        if entry is None:
            self.add_entry("", "")
            self.focused_index = len(self.entries) - 1
            entry = self.entries[-1]
        return entry

    def move_cursor_up(self) -> None:
        if self.focused_index > 0:
            self.focused_index -= 1

    def move_cursor_down(self) -> None:
        if self.focused_index < len(self.entries):
            self.focused_index += 1

    def switch_field(self) -> None:
        if self.focused_field is KeyValueField.KEY:
            self.focused_field = KeyValueField.VALUE
        else:
            self.focused_field = KeyValueField.KEY

    def type_char(self, char: str) -> None:
        entry = self._materialize()
        if self.focused_field is KeyValueField.KEY:
            entry.key += char
        else:
            entry.value += char

    def backspace(self) -> None:
        entry = self.focused_entry()
        if entry is None:
            return
        if self.focused_field is KeyValueField.KEY:
            entry.key = entry.key[:-1]
        else:
            entry.value = entry.value[:-1]

    def commit_row_and_advance(self) -> None:
        self._materialize()
        self.focused_field = KeyValueField.KEY
        self.focused_index = min(self.focused_index + 1, len(self.entries))

    def delete_row(self) -> None:
        if self.focused_index >= len(self.entries):
            return
        del self.entries[self.focused_index]
        if self.focused_index >= len(self.entries) and self.focused_index > 0:
            self.focused_index -= 1

    def toggle_enabled(self) -> None:
        entry = self.focused_entry()
        if entry is not None:
            entry.enabled = not entry.enabled

    def enabled_pairs(self) -> list[tuple[str, str]]:
        return [(e.key, e.value) for e in self.entries if e.enabled]

    def to_pairs(self) -> dict[str, str]:
        # Later duplicates overwrite earlier ones.
        return dict(self.enabled_pairs())

    def snapshot(self) -> "KeyValueTable":
        return copy.deepcopy(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "entries": [entry.to_dict() for entry in self.entries],
            "focused_index": self.focused_index,
            "focused_field": self.focused_field.value,
        }
