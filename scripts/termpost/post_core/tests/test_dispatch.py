from __future__ import annotations

import threading
import time
import unittest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from post_core import keys  # noqa: E402
from post_core.app import App  # noqa: E402
from post_core.keys import Key  # noqa: E402
from post_core.models import LOADING_TEXT, Pane, TransportResponse  # noqa: E402
from post_core.transport import TransportError  # noqa: E402


def wait_for_outcome(app: App, timeout: float = 2.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        outcome = app.reconcile()
        if outcome is not None:
            return outcome
        time.sleep(0.01)
    raise AssertionError("no dispatch outcome arrived")


class GatedTransport:
    """Fake transport whose calls block until released per URL."""

    def __init__(self, responses: dict[str, TransportResponse]):
        self.responses = responses
        self.gates = {url: threading.Event() for url in responses}
        self.calls = []

    def release(self, url: str) -> None:
        self.gates[url].set()

    def __call__(self, request):
        self.calls.append(request)
        self.gates[request.url].wait(timeout=5)
        return self.responses[request.url]


class EndToEndTests(unittest.TestCase):
    def test_submit_loading_then_success(self):
        transport = GatedTransport({"http://x/y": TransportResponse(200, "X: 1", '{"b":2}', 12.0)})
        app = App(transport=transport)

        app.handle_key(Key(keys.CHAR, "i"))
        for ch in "http://x/y":
            app.handle_key(Key(keys.CHAR, ch))
        app.handle_key(Key(keys.ESC))
        while app.focus.pane is not Pane.BODY:
            app.handle_key(Key(keys.TAB))
        app.handle_key(Key(keys.CHAR, "i"))
        for ch in '{"a":1}':
            app.handle_key(Key(keys.CHAR, ch))
        app.handle_key(Key(keys.ESC))

        self.assertIsNone(app.request.validation)
        self.assertEqual(app.request.validation_status(), "Body (Valid JSON)")

        app.handle_key(Key(keys.ENTER))
        self.assertEqual(len(app.history), 1)
        entry = app.history.entries[0]
        self.assertEqual(entry.url, "http://x/y")
        self.assertEqual(entry.method, app.request.method)
        self.assertEqual(entry.body, '{"a":1}')
        self.assertEqual(app.response.text, LOADING_TEXT)
        self.assertIsNone(app.reconcile())

        transport.release("http://x/y")
        wait_for_outcome(app)
        self.assertEqual(app.response.status, 200)
        self.assertEqual(app.response.text, '{\n  "b": 2\n}')
        self.assertEqual(app.response.headers, "X: 1")
        self.assertEqual(transport.calls[0].headers["Content-Type"], "application/json")

    def test_transport_error_sets_error_text(self):
        def failing(_request):
            raise TransportError("connection refused")

        app = App(transport=failing)
        app.response.status = 204
        app.submit()
        wait_for_outcome(app)
        self.assertIsNone(app.response.status)
        self.assertEqual(app.response.text, "Error: connection refused")

    def test_unexpected_worker_exception_is_reported(self):
        def broken(_request):
            raise KeyError("boom")

        app = App(transport=broken)
        app.submit()
        wait_for_outcome(app)
        self.assertTrue(app.response.text.startswith("Error: "))

    def test_submit_allowed_with_invalid_json(self):
        transport = GatedTransport({"": TransportResponse(200, "", "ok")})
        transport.release("")
        app = App(transport=transport)
        app.request.set_body_text('{"a":')
        self.assertIsNotNone(app.request.validation)
        app.submit()
        wait_for_outcome(app)
        self.assertEqual(app.response.text, "ok")
        self.assertEqual(transport.calls[0].body, '{"a":')

    def test_submit_does_not_block(self):
        transport = GatedTransport({"http://slow": TransportResponse(200, "", "late")})
        app = App(transport=transport)
        app.request.url = "http://slow"
        started = time.monotonic()
        app.submit()
        self.assertLess(time.monotonic() - started, 1.0)
        self.assertEqual(app.dispatcher.in_flight, 1)
        transport.release("http://slow")
        wait_for_outcome(app)
        self.assertEqual(app.dispatcher.in_flight, 0)


class ConcurrentDispatchTests(unittest.TestCase):
    def test_last_arrival_wins(self):
        transport = GatedTransport(
            {
                "http://x/slow": TransportResponse(200, "", '"slow"'),
                "http://x/fast": TransportResponse(201, "", '"fast"'),
            }
        )
        app = App(transport=transport)
        app.request.url = "http://x/slow"
        app.submit()
        app.request.url = "http://x/fast"
        app.submit()
        self.assertEqual(len(app.history), 2)

        transport.release("http://x/fast")
        wait_for_outcome(app)
        self.assertEqual(app.response.text, '"fast"')

        transport.release("http://x/slow")
        wait_for_outcome(app)
        self.assertEqual(app.response.status, 200)
        self.assertEqual(app.response.text, '"slow"')


if __name__ == "__main__":
    unittest.main()
