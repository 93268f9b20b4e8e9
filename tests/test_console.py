"""
Tests for console.py
Logic testing: Decision/Branch coverage
"""
from unittest.mock import patch

import pytest

from fetch_builder.console import (
    format_body,
    mask_auth_header,
    mask_headers,
    mask_sensitive,
    print_request,
    print_response,
)
from fetch_builder.response import ResponseView


class TestMasking:
    """Tests for masking helpers."""

    # Decision: None, short and long values
    @pytest.mark.parametrize(
        "value,expected",
        [(None, "<none>"), ("abc", "***"), ("abcd", "****"), ("abcdefgh", "abcd***")],
    )
    def test_mask_sensitive(self, value, expected):
        assert mask_sensitive(value) == expected

    # Path: scheme kept visible
    def test_mask_auth_header(self):
        assert mask_auth_header("Bearer supersecret") == "Bearer supe***"

    # Decision: value without scheme
    def test_mask_auth_header_no_scheme(self):
        assert mask_auth_header("supersecret") == "supe***"

    # Path: only credential headers masked
    def test_mask_headers(self):
        masked = mask_headers(
            {
                "Authorization": "Bearer supersecret",
                "Cookie": "session=abcdef",
                "X-API-Key": "key-123456",
                "Content-Type": "application/json",
            }
        )
        assert masked["Authorization"] == "Bearer supe***"
        assert masked["Cookie"] == "sess***"
        assert masked["X-API-Key"] == "key-***"
        assert masked["Content-Type"] == "application/json"

    # State: input untouched
    def test_mask_headers_copy(self):
        headers = {"Authorization": "Bearer supersecret"}
        mask_headers(headers)
        assert headers["Authorization"] == "Bearer supersecret"


class TestFormatBody:
    """Tests for format_body function."""

    # Decision: body types
    def test_none(self):
        assert format_body(None) == ""

    def test_dict(self):
        assert format_body({"a": 1}) == '{\n  "a": 1\n}'

    def test_utf8_bytes(self):
        assert format_body("café".encode("utf-8")) == "café"

    def test_binary_bytes(self):
        assert format_body(b"\xff\xfe") == "<binary data: 2 bytes>"

    def test_other(self):
        assert format_body(42) == "42"


class TestPrinting:
    """Tests for request/response printing."""

    # Path: request panel never shows the raw token
    def test_print_request_masks(self, builder):
        from fetch_builder.core.finalizer import finalize

        request = finalize(builder.bearer_auth("supersecrettoken").post("/items").body(b'{"a": 1}'))
        with patch("fetch_builder.console.console") as console:
            print_request(request)

        printed = " ".join(str(arg) for call in console.print.call_args_list for arg in call.args)
        assert "supersecrettoken" not in printed
        assert "Bearer supe***" in printed

    # Path: response panels printed, empty body skipped
    def test_print_response(self):
        response = ResponseView(204, [(b"X-Trace", b"1")])
        with patch("fetch_builder.console.console") as console:
            print_response("http://api.example.com/", response)

        assert console.print.call_count == 2
