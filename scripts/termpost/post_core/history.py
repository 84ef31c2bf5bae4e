"""In-memory request history with a browse cursor."""

from __future__ import annotations

from post_core.models import HistoryEntry


class HistoryStack:
    """Append-only log of submitted requests.

    ``cursor`` is None while editing live; otherwise it indexes the entry
    currently loaded into the request builder.
    """

    def __init__(self):
        self.entries: list[HistoryEntry] = []
        self.cursor: int | None = None

    def __len__(self) -> int:
        return len(self.entries)

    def push(self, entry: HistoryEntry) -> None:
        self.entries.append(entry)
        self.cursor = None

    def browse_prev(self) -> HistoryEntry | None:
        """Step to an older entry and return it for loading, or None."""
        if not self.entries:
            return None
        if self.cursor is None:
            self.cursor = len(self.entries) - 1
        elif self.cursor == 0:
            return None
        else:
            self.cursor -= 1
        return self.entries[self.cursor]

    def browse_next(self) -> HistoryEntry | None:
        """Step to a newer entry and return it for loading, or None.

        Stepping past the newest entry returns to live editing without
        reloading anything.
        """
        if self.cursor is None:
            return None
        if self.cursor >= len(self.entries) - 1:
            self.cursor = None
            return None
        self.cursor += 1
        return self.entries[self.cursor]
