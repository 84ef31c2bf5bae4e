"""Request body text buffer and live JSON validation."""

from __future__ import annotations

import json
import re

from post_core import keys
from post_core.keys import Key
from post_core.models import JsonIssue


# Skips string literals so only bare NaN/Infinity tokens match.
BARE_CONSTANT_RE = re.compile(r'"(?:\\.|[^"\\])*"|(-?Infinity|NaN)')


class _NonStandardConstant(ValueError):
    def __init__(self, name: str):
        super().__init__(name)
        self.name = name


def _reject_constant(name: str):
    raise _NonStandardConstant(name)


def _constant_offset(text: str) -> int:
    for match in BARE_CONSTANT_RE.finditer(text):
        if match.group(1):
            return match.start(1)
    return 0


def validate_json(text: str) -> JsonIssue | None:
    if not text.strip():
        return None
    try:
        json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        return JsonIssue(line=exc.lineno, column=exc.colno, message=exc.msg)
    except _NonStandardConstant as exc:
        err = json.JSONDecodeError(f"{exc.name} is not valid JSON", text, _constant_offset(text))
        return JsonIssue(line=err.lineno, column=err.colno, message=err.msg)
    return None


def validation_label(text: str, issue: JsonIssue | None) -> str:
    if issue is not None:
        return f"Body (Invalid JSON at line {issue.line}, col {issue.column})"
    if not text.strip():
        return "Body"
    return "Body (Valid JSON)"


class BodyBuffer:
    """Line-oriented text buffer with a (row, col) cursor.

    An empty buffer has zero lines; the first edit creates the first line.
    """

    def __init__(self, text: str = ""):
        self.lines: list[str] = []
        self.row = 0
        self.col = 0
        self.set_text(text)

    def get_text(self) -> str:
        return "\n".join(self.lines)

    def set_text(self, text: str) -> None:
        self.lines = text.split("\n") if text else []
        self.row = 0
        self.col = 0

    @property
    def cursor(self) -> tuple[int, int]:
        return self.row, self.col

    def _ensure_line(self) -> None:
        if not self.lines:
            self.lines.append("")
            self.row = 0
            self.col = 0

    def insert_char(self, char: str) -> None:
        self._ensure_line()
        line = self.lines[self.row]
        self.lines[self.row] = line[: self.col] + char + line[self.col :]
        self.col += len(char)

    def insert_newline(self) -> None:
        self._ensure_line()
        line = self.lines[self.row]
        self.lines[self.row] = line[: self.col]
        self.lines.insert(self.row + 1, line[self.col :])
        self.row += 1
        self.col = 0

    def delete_backward(self) -> None:
        if not self.lines:
            return
        if self.col > 0:
            line = self.lines[self.row]
            self.lines[self.row] = line[: self.col - 1] + line[self.col :]
            self.col -= 1
        elif self.row > 0:
            previous = self.lines[self.row - 1]
            self.lines[self.row - 1] = previous + self.lines.pop(self.row)
            self.row -= 1
            self.col = len(previous)

    def delete_forward(self) -> None:
        if not self.lines:
            return
        line = self.lines[self.row]
        if self.col < len(line):
            self.lines[self.row] = line[: self.col] + line[self.col + 1 :]
        elif self.row + 1 < len(self.lines):
            self.lines[self.row] = line + self.lines.pop(self.row + 1)

    def _line_len(self) -> int:
        return len(self.lines[self.row]) if self.lines else 0

    def move_left(self) -> None:
        if self.col > 0:
            self.col -= 1
        elif self.row > 0:
            self.row -= 1
            self.col = self._line_len()

    def move_right(self) -> None:
        if self.col < self._line_len():
            self.col += 1
        elif self.row + 1 < len(self.lines):
            self.row += 1
            self.col = 0

    def move_up(self) -> None:
        if self.row > 0:
            self.row -= 1
            self.col = min(self.col, self._line_len())

    def move_down(self) -> None:
        if self.row + 1 < len(self.lines):
            self.row += 1
            self.col = min(self.col, self._line_len())

    def move_home(self) -> None:
        self.col = 0

    def move_end(self) -> None:
        self.col = self._line_len()

    def input(self, key: Key) -> bool:
        """Apply one key press. Returns True if the key was understood."""
        if key.printable:
            self.insert_char(key.char)
        elif key.code == keys.ENTER:
            self.insert_newline()
        elif key.code == keys.TAB:
            self.insert_char("  ")
        elif key.code == keys.BACKSPACE:
            self.delete_backward()
        elif key.code == keys.DELETE:
            self.delete_forward()
        elif key.code == keys.LEFT:
            self.move_left()
        elif key.code == keys.RIGHT:
            self.move_right()
        elif key.code == keys.UP:
            self.move_up()
        elif key.code == keys.DOWN:
            self.move_down()
        elif key.code == keys.HOME or key.is_char("a", ctrl=True):
            self.move_home()
        elif key.code == keys.END or key.is_char("e", ctrl=True):
            self.move_end()
        else:
            return False
        return True
