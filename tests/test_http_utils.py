"""
Tests for the single-shot JSON request helper.
"""

import requests

from tests.conftest import FakeResponse
from utils.http_utils import make_request, ProviderErrorKind


def test_success_returns_decoded_json(record_requests):
    calls, respond = record_requests
    respond(FakeResponse(200, {"Symbol": "AAPL"}))

    result = make_request("https://example.test/query", params={"function": "OVERVIEW"})

    assert result.ok
    assert result.data == {"Symbol": "AAPL"}
    assert result.status_code == 200
    assert calls[0]["method"] == "GET"
    assert calls[0]["params"] == {"function": "OVERVIEW"}


def test_post_sends_json_body(record_requests):
    calls, respond = record_requests
    respond(FakeResponse(200, {"ok": True}))

    make_request("https://example.test/gen", method="POST", json_body={"contents": []})

    assert calls[0]["method"] == "POST"
    assert calls[0]["json"] == {"contents": []}


def test_transport_failure_is_network_error(record_requests):
    _, respond = record_requests
    respond(requests.exceptions.ConnectionError("connection refused"))

    result = make_request("https://example.test/query")

    assert not result.ok
    assert result.error.kind == ProviderErrorKind.NETWORK
    assert isinstance(result.error.cause, requests.exceptions.ConnectionError)
    assert result.status_code is None


def test_timeout_is_network_error(record_requests):
    _, respond = record_requests
    respond(requests.exceptions.Timeout("read timed out"))

    result = make_request("https://example.test/query")

    assert result.error.kind == ProviderErrorKind.NETWORK


def test_status_codes_map_to_error_kinds(record_requests):
    _, respond = record_requests
    respond(
        FakeResponse(404, text="missing"),
        FakeResponse(429, text="slow down"),
        FakeResponse(500, text="boom"),
    )

    assert make_request("u").error.kind == ProviderErrorKind.NOT_FOUND
    assert make_request("u").error.kind == ProviderErrorKind.RATE_LIMITED
    server_error = make_request("u")
    assert server_error.error.kind == ProviderErrorKind.MALFORMED
    assert server_error.status_code == 500


def test_unparsable_body_is_malformed(record_requests):
    _, respond = record_requests
    respond(FakeResponse(200, None, text="<html>not json</html>"))

    result = make_request("https://example.test/query")

    assert result.error.kind == ProviderErrorKind.MALFORMED
    assert result.status_code == 200
