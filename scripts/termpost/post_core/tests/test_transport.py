from __future__ import annotations

import base64
import unittest
from datetime import timedelta
from pathlib import Path
from unittest import mock
import sys

import requests

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from post_core.key_value import KeyValueTable  # noqa: E402
from post_core.models import HttpMethod, OutgoingRequest  # noqa: E402
from post_core.request_state import RequestBuilderState  # noqa: E402
from post_core.transport import (  # noqa: E402
    TransportError,
    append_query,
    auth_headers,
    build_headers,
    build_outgoing,
    send,
    valid_header,
)


def table_with(*rows: tuple[str, str]) -> KeyValueTable:
    table = KeyValueTable()
    for key, value in rows:
        table.add_entry(key, value)
    return table


class QueryTests(unittest.TestCase):
    def test_appends_encoded_params(self):
        self.assertEqual(append_query("http://x/y", [("q", "a b"), ("n", "1")]), "http://x/y?q=a+b&n=1")

    def test_extends_existing_query(self):
        self.assertEqual(append_query("http://x/y?a=1", [("b", "2")]), "http://x/y?a=1&b=2")

    def test_skips_empty_keys_and_no_params(self):
        self.assertEqual(append_query("http://x", [("", "v")]), "http://x")
        self.assertEqual(append_query("http://x", []), "http://x")

    def test_disabled_params_excluded(self):
        state = RequestBuilderState(url="http://x")
        state.tabs.params.add_entry("a", "1")
        state.tabs.params.add_entry("b", "2", enabled=False)
        outgoing = build_outgoing(state.to_history_entry())
        self.assertEqual(outgoing.url, "http://x?a=1")


class AuthTests(unittest.TestCase):
    def test_authorization_row_verbatim(self):
        headers = auth_headers(table_with(("Authorization", "Token abc"), ("X-API-Key", "k")))
        self.assertEqual(headers, {"Authorization": "Token abc"})

    def test_bearer_row(self):
        self.assertEqual(auth_headers(table_with(("Bearer", "abc"))), {"Authorization": "abc"})
        self.assertEqual(auth_headers(table_with(("bearer", "Bearer abc"))), {"Authorization": "Bearer abc"})

    def test_authorization_row_wins_over_bearer_row(self):
        headers = auth_headers(table_with(("Bearer", "t"), ("Authorization", "Token a")))
        self.assertEqual(headers, {"Authorization": "Token a"})

    def test_api_key_row_uses_its_name(self):
        self.assertEqual(auth_headers(table_with(("X-API-Key", "k"))), {"X-API-Key": "k"})
        self.assertEqual(auth_headers(table_with(("API-Key", "k"))), {"API-Key": "k"})

    def test_basic_credentials(self):
        headers = auth_headers(table_with(("username", "user"), ("password", "pass")))
        expected = "Basic " + base64.b64encode(b"user:pass").decode("ascii")
        self.assertEqual(headers, {"Authorization": expected})

    def test_username_without_password_yields_nothing(self):
        self.assertEqual(auth_headers(table_with(("username", "user"))), {})

    def test_precedence_prefers_bearer_over_api_key(self):
        headers = auth_headers(table_with(("X-API-Key", "k"), ("Bearer", "t")))
        self.assertEqual(headers, {"Authorization": "t"})


class HeaderTests(unittest.TestCase):
    def test_valid_header(self):
        self.assertTrue(valid_header("X-Trace", "abc"))
        self.assertFalse(valid_header("Bad Name", "abc"))
        self.assertFalse(valid_header("", "abc"))
        self.assertFalse(valid_header("X", "a\r\nb"))
        self.assertFalse(valid_header("X", "☃"))

    def test_invalid_rows_skipped(self):
        headers = build_headers(table_with(("Good", "1"), ("Bad Name", "2"), ("X", "a\nb")), KeyValueTable(), "")
        self.assertEqual(headers, {"Good": "1"})

    def test_content_type_only_with_body(self):
        self.assertNotIn("Content-Type", build_headers(KeyValueTable(), KeyValueTable(), "  "))
        headers = build_headers(table_with(("Content-Type", "text/plain")), KeyValueTable(), "{}")
        self.assertEqual(headers["Content-Type"], "application/json")

    def test_auth_overrides_header_tab(self):
        headers = build_headers(table_with(("Authorization", "old")), table_with(("Bearer", "new")), "")
        self.assertEqual(headers["Authorization"], "new")


class SendTests(unittest.TestCase):
    def test_send_maps_response(self):
        fake = mock.Mock(status_code=201, headers={"X-Id": "7"}, text='{"ok":true}', elapsed=timedelta(milliseconds=42))
        with mock.patch("post_core.transport.requests.request", return_value=fake) as request:
            result = send(OutgoingRequest("POST", "http://x", {"A": "1"}, "{}"))
        request.assert_called_once_with("POST", "http://x", headers={"A": "1"}, data=b"{}")
        self.assertEqual(result.status, 201)
        self.assertEqual(result.headers, "X-Id: 7")
        self.assertEqual(result.body, '{"ok":true}')
        self.assertAlmostEqual(result.elapsed_ms, 42.0)

    def test_send_wraps_request_errors(self):
        with mock.patch("post_core.transport.requests.request", side_effect=requests.ConnectionError("refused")):
            with self.assertRaises(TransportError) as ctx:
                send(OutgoingRequest("GET", "http://x"))
        self.assertIn("refused", str(ctx.exception))

    def test_build_outgoing_without_body(self):
        state = RequestBuilderState(method=HttpMethod.DELETE, url="http://x")
        outgoing = build_outgoing(state.to_history_entry())
        self.assertEqual(outgoing.method, "DELETE")
        self.assertIsNone(outgoing.body)
        self.assertEqual(outgoing.headers, {})


if __name__ == "__main__":
    unittest.main()
