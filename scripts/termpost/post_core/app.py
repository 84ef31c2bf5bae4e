"""Interactive HTTP request TUI entrypoint."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from datetime import datetime, timezone

from rich.console import Console, Group
from rich.layout import Layout
from rich.live import Live

from post_core.config import parse_method, resolve_config
from post_core.dispatch import DispatchOutcome, DispatchReconciler, Transport
from post_core.focus import FocusController
from post_core.history import HistoryStack
from post_core.keys import Key, poll_keys, raw_terminal
from post_core.layout import editor_viewport, response_viewport, select_layout_mode
from post_core.models import HttpMethod, InputMode, Pane, ResponseState
from post_core.panels import body as body_panel
from post_core.panels import footer as footer_panel
from post_core.panels import header as header_panel
from post_core.panels import request as request_panel
from post_core.panels import response as response_panel
from post_core.request_state import RequestBuilderState
from post_core.routing import handle_key
from post_core.transport import send

logger = logging.getLogger("post_core")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class App:
    """Owns every piece of UI state; only the loop thread touches it."""

    def __init__(
        self,
        method: HttpMethod = HttpMethod.GET,
        url: str = "",
        transport: Transport = send,
        inbox_capacity: int = 10,
        theme: str = "monokai",
    ):
        self.focus = FocusController()
        self.request = RequestBuilderState(method=method, url=url)
        self.history = HistoryStack()
        self.response = ResponseState()
        self.dispatcher = DispatchReconciler(transport=transport, capacity=inbox_capacity)
        self.theme = theme

    @property
    def running(self) -> bool:
        return self.focus.running

    def submit(self) -> None:
        self.dispatcher.submit(self.request, self.history, self.response)

    def handle_key(self, key: Key) -> None:
        handle_key(self, key)

    def reconcile(self) -> DispatchOutcome | None:
        return self.dispatcher.poll(self.response)

    def step(self, keys: list[Key]) -> None:
        """One loop iteration minus the input wait and repaint."""
        for key in keys:
            self.handle_key(key)
            if not self.running:
                return
        self.reconcile()

    def to_dict(self) -> dict:
        return {
            "focus": self.focus.to_dict(),
            "request": self.request.to_dict(),
            "response": self.response.to_dict(),
            "history": {
                "cursor": self.history.cursor,
                "entries": [entry.to_dict() for entry in self.history.entries],
            },
        }


def render_screen(app: App, width: int, height: int):
    mode = select_layout_mode(width)
    focus = app.focus
    editing = focus.mode is InputMode.EDITING
    editor_rows = editor_viewport(height, mode)

    def is_focused(pane: Pane) -> bool:
        return focus.pane is pane

    header = header_panel.render(
        mode=focus.mode.value,
        pane=focus.pane.value,
        cursor=app.history.cursor,
        total=len(app.history),
        in_flight=app.dispatcher.in_flight,
        layout_mode=mode,
    )
    method = request_panel.render_method(app.request.method.value, is_focused(Pane.METHOD))
    url = request_panel.render_url(app.request.url, is_focused(Pane.URL), editing and is_focused(Pane.URL))
    details = request_panel.render_details(
        app.request.tabs,
        is_focused(Pane.REQUEST_DETAILS),
        editing and is_focused(Pane.REQUEST_DETAILS),
        rows=editor_rows,
    )
    body = body_panel.render(
        app.request.body,
        app.request.validation_status(),
        app.request.validation,
        is_focused(Pane.BODY),
        editing and is_focused(Pane.BODY),
        rows=editor_rows,
    )
    response = response_panel.render(
        app.response,
        is_focused(Pane.RESPONSE),
        rows=response_viewport(height, mode),
        theme=app.theme,
    )
    footer = footer_panel.render(focus.pane, focus.mode)

    if mode == "narrow":
        return Group(header, method, url, details, body, response, footer)

    layout = Layout()
    layout.split_column(
        Layout(header, name="header", size=3),
        Layout(name="main"),
        Layout(footer, name="footer", size=3),
    )
    top_row = Layout(name="top", size=3)
    top_row.split_row(
        Layout(method, name="method", size=12),
        Layout(url, name="url"),
    )

    if mode == "medium":
        layout["main"].split_column(
            Layout(name="request", ratio=1),
            Layout(response, name="response", ratio=1),
        )
        layout["main"]["request"].split_column(top_row, Layout(name="details"))
        layout["main"]["request"]["details"].split_row(
            Layout(details, name="kv", ratio=1),
            Layout(body, name="body", ratio=1),
        )
        return layout

    # wide
    layout["main"].split_row(
        Layout(name="request", ratio=1),
        Layout(response, name="response", ratio=1),
    )
    layout["main"]["request"].split_column(
        top_row,
        Layout(details, name="kv", ratio=1),
        Layout(body, name="body", ratio=1),
    )
    return layout


def run_live(app: App, console: Console, poll_interval: float) -> None:
    fd = sys.stdin.fileno()
    with raw_terminal(fd) as has_keyboard:
        if not has_keyboard:
            raise RuntimeError("interactive mode needs a terminal on stdin")
        width, height = console.size
        with Live(render_screen(app, width, height), console=console, auto_refresh=False, screen=True) as live:
            try:
                while app.running:
                    app.step(poll_keys(fd, poll_interval))
                    width, height = console.size
                    live.update(render_screen(app, width, height), refresh=True)
            except KeyboardInterrupt:
                pass


def _json_output(app: App) -> str:
    payload = {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        **app.to_dict(),
    }
    return json.dumps(payload, indent=2)


def configure_logging(log_file: str | None, level: str) -> None:
    if not log_file:
        logger.addHandler(logging.NullHandler())
        return
    logging.basicConfig(filename=log_file, level=level, format=LOG_FORMAT)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Terminal HTTP request composer")
    parser.add_argument("--url", help="Initial request URL")
    parser.add_argument("--method", help="Initial method: GET|POST|PUT|DELETE|PATCH")
    parser.add_argument(
        "--config",
        default=os.environ.get("TERMPOST_CONFIG"),
        help="Optional JSON config file",
    )
    parser.add_argument("--theme", help="Pygments style used for response highlighting")
    parser.add_argument("--log-file", help="Write logs to this file (the terminal belongs to the UI)")
    parser.add_argument(
        "--log-level",
        default="INFO",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for --log-file",
    )
    parser.add_argument("--snapshot", action="store_true", help="Print one frame and exit")
    parser.add_argument("--json", action="store_true", help="Emit initial state as JSON and exit")
    args = parser.parse_args(argv)

    try:
        config = resolve_config(args.config)
        method = parse_method(args.method or config["default_method"])
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    configure_logging(args.log_file, args.log_level)

    app = App(
        method=method,
        url=args.url if args.url is not None else config["default_url"],
        inbox_capacity=config["inbox_capacity"],
        theme=args.theme or config["highlight_theme"],
    )

    if args.json:
        print(_json_output(app))
        return 0

    console = Console()

    if args.snapshot:
        width, height = console.size
        console.print(render_screen(app, width, height))
        return 0

    try:
        run_live(app, console, config["poll_interval_ms"] / 1000)
    except RuntimeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
