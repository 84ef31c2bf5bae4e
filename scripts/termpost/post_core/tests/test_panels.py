from __future__ import annotations

import io
import unittest
from pathlib import Path
import sys

from rich.console import Console, Group
from rich.layout import Layout
from rich.text import Text

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from post_core.app import App, render_screen  # noqa: E402
from post_core.formatting import compact_elapsed, pretty_json, status_phrase, status_style  # noqa: E402
from post_core.highlight import highlight_json  # noqa: E402
from post_core.key_value import KeyValueTable  # noqa: E402
from post_core.models import LOADING_TEXT, InputMode, Pane, RequestTab, ResponseState, ResponseView  # noqa: E402
from post_core.panels import footer as footer_panel  # noqa: E402
from post_core.panels import header as header_panel  # noqa: E402
from post_core.panels.request import kv_table, tab_bar  # noqa: E402
from post_core.panels.response import response_lines, response_title  # noqa: E402


def plain(lines: list[Text]) -> list[str]:
    return [line.plain for line in lines]


class FormattingTests(unittest.TestCase):
    def test_pretty_json(self):
        self.assertEqual(pretty_json('{"b":2}'), '{\n  "b": 2\n}')
        self.assertEqual(pretty_json("not json"), "not json")

    def test_status_helpers(self):
        self.assertEqual(status_style(204), "green")
        self.assertEqual(status_style(404), "yellow")
        self.assertEqual(status_style(None), "default")
        self.assertEqual(status_phrase(503), "Server Error")

    def test_compact_elapsed(self):
        self.assertEqual(compact_elapsed(None), "n/a")
        self.assertEqual(compact_elapsed(42.7), "42ms")
        self.assertEqual(compact_elapsed(1500), "1.50s")


class ResponsePanelTests(unittest.TestCase):
    def test_empty_state(self):
        self.assertEqual(plain(response_lines(ResponseState())), ["No response yet..."])

    def test_loading_sentinel_is_not_highlighted(self):
        lines = response_lines(ResponseState(text=LOADING_TEXT))
        self.assertEqual(plain(lines), [LOADING_TEXT])
        self.assertEqual(lines[0].spans, [])

    def test_body_is_highlighted_per_line(self):
        lines = response_lines(ResponseState(status=200, text='{\n  "b": 2\n}'))
        self.assertEqual(plain(lines), ["{", '  "b": 2', "}"])

    def test_headers_view(self):
        state = ResponseState(status=200, text="{}", headers="A: 1\nB: 2", view=ResponseView.HEADERS)
        self.assertEqual(plain(response_lines(state)), ["A: 1", "B: 2"])
        self.assertIn("Headers", response_title(state))

    def test_title_shows_status(self):
        self.assertEqual(response_title(ResponseState()), "Response")
        self.assertIn("Status: 200", response_title(ResponseState(status=200, elapsed_ms=5)))

    def test_highlight_empty(self):
        self.assertEqual(highlight_json(""), [])


class RequestPanelTests(unittest.TestCase):
    def test_kv_table_columns(self):
        table = KeyValueTable()
        table.add_entry("Accept", "json")
        table.move_cursor_down()
        grid = kv_table(table, focused=True, editing=False)
        headers = [column.header for column in grid.columns]
        self.assertEqual(headers, ["", "Key", "Value"])
        self.assertEqual(grid.row_count, 2)

    def test_tab_bar_lists_tabs(self):
        self.assertEqual(tab_bar(RequestTab.PARAMS).plain, "[Headers] [Params] [Auth]")

    def test_header_history_position(self):
        self.assertEqual(header_panel.history_position(None, 0), "empty")
        self.assertEqual(header_panel.history_position(None, 2), "live (2 saved)")
        self.assertEqual(header_panel.history_position(0, 2), "1/2")

    def test_footer_help_depends_on_mode(self):
        self.assertIn("[q] Quit", footer_panel.help_text(Pane.URL, InputMode.NAVIGATION))
        self.assertIn("[Esc]", footer_panel.help_text(Pane.BODY, InputMode.EDITING))


class ScreenTests(unittest.TestCase):
    def test_layout_modes(self):
        app = App(url="http://x")
        self.assertIsInstance(render_screen(app, 200, 40), Layout)
        self.assertIsInstance(render_screen(app, 120, 40), Layout)
        self.assertIsInstance(render_screen(app, 80, 40), Group)

    def test_render_does_not_mutate(self):
        app = App(url="http://x")
        app.request.set_body_text('{"a":')
        before = app.to_dict()
        console = Console(width=120, height=40, record=True, file=io.StringIO())
        console.print(render_screen(app, 120, 40))
        self.assertEqual(app.to_dict(), before)
        self.assertIn("http://x", console.export_text())


if __name__ == "__main__":
    unittest.main()
