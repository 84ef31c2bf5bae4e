"""Keyboard event decoding and non-blocking terminal input."""

from __future__ import annotations

import os
import re
import select
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

CHAR = "char"
TAB = "tab"
BACKTAB = "backtab"
ENTER = "enter"
ESC = "esc"
BACKSPACE = "backspace"
DELETE = "delete"
UP = "up"
DOWN = "down"
LEFT = "left"
RIGHT = "right"
HOME = "home"
END = "end"
PAGE_UP = "page_up"
PAGE_DOWN = "page_down"


@dataclass(frozen=True)
class Key:
    code: str
    char: str = ""
    ctrl: bool = False

    @property
    def printable(self) -> bool:
        return self.code == CHAR and not self.ctrl and self.char.isprintable()

    def is_char(self, char: str, ctrl: bool = False) -> bool:
        return self.code == CHAR and self.char == char and self.ctrl == ctrl


CSI_RE = re.compile(r"\x1b\[([0-9;]*)([A-Za-z~])")
SS3_RE = re.compile(r"\x1bO([A-Za-z])")

CSI_FINAL = {
    "A": UP,
    "B": DOWN,
    "C": RIGHT,
    "D": LEFT,
    "H": HOME,
    "F": END,
    "Z": BACKTAB,
}

CSI_TILDE = {
    "1": HOME,
    "7": HOME,
    "4": END,
    "8": END,
    "3": DELETE,
    "5": PAGE_UP,
    "6": PAGE_DOWN,
}

SINGLE = {
    "\t": TAB,
    "\r": ENTER,
    "\n": ENTER,
    "\x7f": BACKSPACE,
    "\x08": BACKSPACE,
}


def _csi_key(params: str, final: str) -> Key | None:
    parts = [p for p in params.split(";") if p]
    # xterm modifier parameter: 5 = ctrl, 6 = ctrl+shift, 7 = ctrl+alt, 8 = all
    modifier = int(parts[1]) if len(parts) > 1 and parts[1].isdigit() else 1
    ctrl = modifier in (5, 6, 7, 8)
    if final == "~":
        code = CSI_TILDE.get(parts[0] if parts else "")
    else:
        code = CSI_FINAL.get(final)
    if code is None:
        return None
    return Key(code, ctrl=ctrl)


def decode_keys(data: str) -> list[Key]:
    """Split a chunk of terminal input into key events.

    Escape sequences arrive in one read, so a lone ESC at the end of a chunk
    (or followed by anything other than ``[``/``O``) is the Escape key itself.
    Unknown sequences are dropped.
    """
    keys: list[Key] = []
    pos = 0
    while pos < len(data):
        ch = data[pos]
        if ch == "\x1b":
            match = CSI_RE.match(data, pos) or SS3_RE.match(data, pos)
            if match is None:
                keys.append(Key(ESC))
                pos += 1
                continue
            if match.re is CSI_RE:
                key = _csi_key(match.group(1), match.group(2))
            else:
                code = CSI_FINAL.get(match.group(1))
                key = Key(code) if code else None
            if key is not None:
                keys.append(key)
            pos = match.end()
            continue
        if ch in SINGLE:
            keys.append(Key(SINGLE[ch]))
        elif "\x01" <= ch <= "\x1a":
            keys.append(Key(CHAR, chr(ord(ch) + 96), ctrl=True))
        elif ch.isprintable():
            keys.append(Key(CHAR, ch))
        pos += 1
    return keys


def poll_keys(fd: int, timeout: float) -> list[Key]:
    """Wait up to ``timeout`` seconds for input on fd and decode what arrived."""
    readable, _, _ = select.select([fd], [], [], timeout)
    if not readable:
        return []
    try:
        raw = os.read(fd, 1024)
    except OSError:
        return []
    return decode_keys(raw.decode("utf-8", errors="ignore"))


@contextmanager
def raw_terminal(fd: int | None = None) -> Iterator[bool]:
    """Put stdin in non-canonical, no-echo mode for the duration of the block.

    Uses ICANON/ECHO off with VMIN=0/VTIME=0 rather than tty.setraw() so
    Rich Live's alternate screen keeps working. Yields False when the
    terminal cannot be configured (not a tty, or no termios).
    """
    try:
        import termios
    except ImportError:
        yield False
        return

    if fd is None:
        fd = sys.stdin.fileno()
    old_settings = None
    try:
        old_settings = termios.tcgetattr(fd)
        new = termios.tcgetattr(fd)
        new[3] &= ~(termios.ICANON | termios.ECHO)
        # Leave ISIG on so Ctrl+C still raises KeyboardInterrupt.
        new[6][termios.VMIN] = 0
        new[6][termios.VTIME] = 0
        termios.tcsetattr(fd, termios.TCSADRAIN, new)
    except termios.error:
        old_settings = None

    try:
        yield old_settings is not None
    finally:
        if old_settings is not None:
            termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)
