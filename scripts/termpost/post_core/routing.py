"""Keystroke routing keyed by (pane, mode)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from post_core import keys
from post_core.keys import Key
from post_core.models import InputMode, Pane, ResponseView

if TYPE_CHECKING:
    from post_core.app import App

Handler = Callable[["App", Key], None]

PAGE_SIZE = 10


def browse_older(app: App) -> None:
    entry = app.history.browse_prev()
    if entry is not None:
        app.request.load(entry)


def browse_newer(app: App) -> None:
    entry = app.history.browse_next()
    if entry is not None:
        app.request.load(entry)


def _global_navigation(app: App, key: Key) -> bool:
    if key.is_char("q"):
        app.focus.quit()
    elif key.code == keys.TAB:
        app.focus.advance_pane()
    elif key.code == keys.BACKTAB:
        app.focus.retreat_pane()
    elif key.is_char("i"):
        app.focus.enter_editing()
    elif key.code == keys.ENTER:
        app.submit()
    else:
        return False
    return True


def _ignore(app: App, key: Key) -> None:
    return None


def _nav_method(app: App, key: Key) -> None:
    if key.code == keys.RIGHT or key.is_char(" "):
        app.request.next_method()
    elif key.code == keys.LEFT:
        app.request.prev_method()


def _nav_url(app: App, key: Key) -> None:
    if key.code == keys.UP or key.is_char("p", ctrl=True):
        browse_older(app)
    elif key.code == keys.DOWN or key.is_char("n", ctrl=True):
        browse_newer(app)


def _nav_request_details(app: App, key: Key) -> None:
    tabs = app.request.tabs
    if key.code == keys.RIGHT or key.is_char(" "):
        tabs.next_tab()
    elif key.code == keys.LEFT:
        tabs.prev_tab()
    elif key.code == keys.UP:
        tabs.active.move_cursor_up()
    elif key.code == keys.DOWN:
        tabs.active.move_cursor_down()
    elif key.is_char("x"):
        tabs.active.toggle_enabled()


def _nav_response(app: App, key: Key) -> None:
    response = app.response
    if key.code == keys.UP:
        response.scroll_up()
    elif key.code == keys.DOWN:
        response.scroll_down()
    elif key.code == keys.PAGE_UP:
        response.scroll_up(PAGE_SIZE)
    elif key.code == keys.PAGE_DOWN:
        response.scroll_down(PAGE_SIZE)
    elif key.code in (keys.LEFT, keys.RIGHT):
        response.view = ResponseView.HEADERS if response.view is ResponseView.BODY else ResponseView.BODY
        response.scroll_offset = 0


def _edit_url(app: App, key: Key) -> None:
    if key.printable:
        app.request.type_url_char(key.char)
    elif key.code == keys.BACKSPACE:
        app.request.url_backspace()


def _edit_request_details(app: App, key: Key) -> None:
    table = app.request.tabs.active
    if key.code == keys.TAB:
        table.switch_field()
    elif key.code == keys.ENTER:
        table.commit_row_and_advance()
    elif (key.code == keys.DELETE and key.ctrl) or key.is_char("d", ctrl=True):
        table.delete_row()
    elif key.printable:
        table.type_char(key.char)
    elif key.code == keys.BACKSPACE:
        table.backspace()


def _edit_body(app: App, key: Key) -> None:
    app.request.edit_body(key)


ROUTES: dict[tuple[Pane, InputMode], Handler] = {
    (Pane.METHOD, InputMode.NAVIGATION): _nav_method,
    (Pane.URL, InputMode.NAVIGATION): _nav_url,
    (Pane.REQUEST_DETAILS, InputMode.NAVIGATION): _nav_request_details,
    (Pane.BODY, InputMode.NAVIGATION): _ignore,
    (Pane.RESPONSE, InputMode.NAVIGATION): _nav_response,
    (Pane.METHOD, InputMode.EDITING): _ignore,
    (Pane.URL, InputMode.EDITING): _edit_url,
    (Pane.REQUEST_DETAILS, InputMode.EDITING): _edit_request_details,
    (Pane.BODY, InputMode.EDITING): _edit_body,
    (Pane.RESPONSE, InputMode.EDITING): _ignore,
}


def handle_key(app: App, key: Key) -> None:
    focus = app.focus
    if focus.mode is InputMode.NAVIGATION:
        if _global_navigation(app, key):
            return
    elif key.code == keys.ESC:
        focus.exit_editing()
        return
    ROUTES[(focus.pane, focus.mode)](app, key)
