"""Pane focus and input mode state machine."""

from __future__ import annotations

from post_core.models import InputMode, Pane

PANE_RING = [
    Pane.METHOD,
    Pane.URL,
    Pane.REQUEST_DETAILS,
    Pane.BODY,
    Pane.RESPONSE,
]


class FocusController:
    def __init__(self, pane: Pane = Pane.URL):
        self.pane = pane
        self.mode = InputMode.NAVIGATION
        self.running = True

    @property
    def editing(self) -> bool:
        return self.mode is InputMode.EDITING

    def advance_pane(self) -> None:
        idx = PANE_RING.index(self.pane)
        self.pane = PANE_RING[(idx + 1) % len(PANE_RING)]

    def retreat_pane(self) -> None:
        idx = PANE_RING.index(self.pane)
        self.pane = PANE_RING[(idx - 1) % len(PANE_RING)]

    def enter_editing(self) -> None:
        self.mode = InputMode.EDITING

    def exit_editing(self) -> None:
        self.mode = InputMode.NAVIGATION

    def quit(self) -> None:
        self.running = False

    def to_dict(self) -> dict:
        return {"pane": self.pane.value, "mode": self.mode.value, "running": self.running}
