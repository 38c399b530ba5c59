"""Tests for HttpClient request handling, retries and caching."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from tiation_sdk.config.settings import Settings
from tiation_sdk.exceptions import (
    AuthenticationError,
    NotFoundError,
    RateLimitError,
    ServerError,
    TransportError,
    ValidationError,
)
from tiation_sdk.services.http_client import HttpClient

from .conftest import make_response


def test_default_headers(http, session):
    assert session.headers["Authorization"] == "Bearer test-key-1234"
    assert session.headers["Accept"] == "application/json"
    assert session.headers["User-Agent"].startswith("tiation-sdk-python/")


def test_get_joins_url_and_drops_none_params(http, session):
    session.request.return_value = make_response(200, {"ok": True})

    result = http.get("/analytics/events", params={"name": None, "page": 2})

    assert result == {"ok": True}
    session.request.assert_called_once_with(
        "GET",
        "https://api.example.test/v1/analytics/events",
        params={"page": 2},
        json=None,
        timeout=5,
    )


def test_no_content_returns_none(http, session):
    session.request.return_value = make_response(204)

    assert http.delete("/webhooks/wh_1") is None


def test_error_status_raises_mapped_error(http, session):
    session.request.return_value = make_response(404, {"error": {"message": "missing", "code": "not_found"}})

    with pytest.raises(NotFoundError) as exc_info:
        http.get("/cms/content/c_1")

    assert exc_info.value.code == "not_found"
    assert http.get_usage_statistics()["failed_requests"] == 1


def test_non_json_error_body(http, session):
    session.request.return_value = make_response(401, text="Unauthorized")

    with pytest.raises(AuthenticationError, match="Unauthorized"):
        http.get("/webhooks")


def test_connection_error_becomes_transport_error(http, session):
    session.request.side_effect = requests.exceptions.ConnectionError("refused")

    with pytest.raises(TransportError) as exc_info:
        http.get("/webhooks")

    assert isinstance(exc_info.value.original, requests.exceptions.ConnectionError)


def test_timeout_becomes_transport_error(http, session):
    session.request.side_effect = requests.exceptions.Timeout()

    with pytest.raises(TransportError, match="timed out"):
        http.get("/webhooks")


@patch("time.sleep")
def test_retries_server_errors(mock_sleep, settings, session):
    settings.max_retries = 2
    client = HttpClient(settings, session=session)
    session.request.side_effect = [
        make_response(503, {"message": "unavailable"}),
        make_response(200, {"ok": True}),
    ]

    assert client.get("/webhooks") == {"ok": True}
    assert session.request.call_count == 2
    mock_sleep.assert_called_once_with(1.0)
    stats = client.get_usage_statistics()
    assert stats["retried_requests"] == 1
    assert stats["failed_requests"] == 0


@patch("time.sleep")
def test_rate_limit_honours_retry_after(mock_sleep, settings, session):
    settings.max_retries = 1
    client = HttpClient(settings, session=session)
    session.request.side_effect = [
        make_response(429, {"message": "slow down"}, headers={"Retry-After": "3"}),
        make_response(200, {"ok": True}),
    ]

    assert client.get("/webhooks") == {"ok": True}
    mock_sleep.assert_called_once_with(3.0)


@patch("time.sleep")
def test_gives_up_after_max_retries(mock_sleep, settings, session):
    settings.max_retries = 2
    client = HttpClient(settings, session=session)
    session.request.return_value = make_response(500, {"message": "boom"})

    with pytest.raises(ServerError):
        client.get("/webhooks")

    assert session.request.call_count == 3
    assert mock_sleep.call_count == 2


@patch("time.sleep")
def test_client_errors_are_not_retried(mock_sleep, settings, session):
    settings.max_retries = 3
    client = HttpClient(settings, session=session)
    session.request.return_value = make_response(401, {"message": "bad key"})

    with pytest.raises(AuthenticationError):
        client.get("/webhooks")

    assert session.request.call_count == 1
    mock_sleep.assert_not_called()


def test_rate_limit_error_surfaces_retry_after(http, session):
    session.request.return_value = make_response(429, {"message": "slow down"}, headers={"retry-after": "30"})

    with pytest.raises(RateLimitError) as exc_info:
        http.get("/webhooks")

    assert exc_info.value.retry_after == 30.0


def test_get_responses_are_cached_when_enabled(tmp_path, session):
    settings = Settings(
        api_key="key",
        base_url="https://api.example.test/v1",
        max_retries=0,
        cache_enabled=True,
        cache_dir=str(tmp_path),
    )
    client = HttpClient(settings, session=session)
    session.request.return_value = make_response(200, {"items": [1, 2]})

    assert client.get("/cms/content", params={"page": 1}) == {"items": [1, 2]}
    assert client.get("/cms/content", params={"page": 1}) == {"items": [1, 2]}
    assert session.request.call_count == 1

    # Writes invalidate cached reads
    client.post("/cms/content", json_body={"title": "x"})
    client.get("/cms/content", params={"page": 1})
    assert session.request.call_count == 3


def test_close_closes_session(http, session):
    http.close()
    session.close.assert_called_once()


def _cached_client(cache_dir, session, api_key="key", base_url="https://api.example.test/v1"):
    settings = Settings(
        api_key=api_key,
        base_url=base_url,
        max_retries=0,
        cache_enabled=True,
        cache_dir=str(cache_dir),
    )
    return HttpClient(settings, session=session)


def test_cache_is_scoped_to_host_and_api_key(tmp_path):
    session_a = MagicMock(headers={})
    session_b = MagicMock(headers={})
    session_c = MagicMock(headers={})
    client_a = _cached_client(tmp_path, session_a, api_key="tenant-A", base_url="https://a.example.test")
    client_b = _cached_client(tmp_path, session_b, api_key="tenant-B", base_url="https://a.example.test")
    client_c = _cached_client(tmp_path, session_c, api_key="tenant-A", base_url="https://b.example.test")
    session_a.request.return_value = make_response(200, {"secret": "A-data"})
    session_b.request.return_value = make_response(200, {"secret": "B-data"})
    session_c.request.return_value = make_response(200, {"secret": "C-data"})

    assert client_a.get("/cms/content") == {"secret": "A-data"}
    assert client_b.get("/cms/content") == {"secret": "B-data"}
    assert client_c.get("/cms/content") == {"secret": "C-data"}
    assert session_b.request.call_count == 1
    assert session_c.request.call_count == 1


def test_failed_write_keeps_cached_reads(tmp_path, session):
    client = _cached_client(tmp_path, session)
    session.request.return_value = make_response(200, {"items": []})
    client.get("/cms/content")

    session.request.return_value = make_response(422, {"message": "title required"})
    with pytest.raises(ValidationError):
        client.post("/cms/content", json_body={})

    assert client.get("/cms/content") == {"items": []}
    assert session.request.call_count == 2


@patch("time.sleep")
def test_retry_after_is_capped(mock_sleep, settings, session):
    settings.max_retries = 1
    settings.max_retry_after = 60
    client = HttpClient(settings, session=session)
    session.request.side_effect = [
        make_response(429, {"message": "slow down"}, headers={"Retry-After": "86400"}),
        make_response(200, {"ok": True}),
    ]

    assert client.get("/webhooks") == {"ok": True}
    mock_sleep.assert_called_once_with(60)
