"""Shared fixtures for SDK tests."""

import json
from unittest.mock import MagicMock

import pytest

from tiation_sdk.config.settings import Settings
from tiation_sdk.services.http_client import HttpClient


def make_response(status_code=200, json_data=None, headers=None, text=None, reason=""):
    """Build a mock requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.headers = headers or {}
    response.reason = reason
    if json_data is not None:
        body = json.dumps(json_data)
        response.json.return_value = json_data
    else:
        body = text or ""
        response.json.side_effect = ValueError("No JSON")
    response.text = body
    response.content = body.encode("utf-8")
    return response


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a fake API, with retries off."""
    return Settings(
        api_key="test-key-1234",
        base_url="https://api.example.test/v1",
        timeout=5,
        max_retries=0,
        batch_size=2,
        cache_dir=str(tmp_path / "cache"),
    )


@pytest.fixture
def session():
    mock_session = MagicMock()
    mock_session.headers = {}
    return mock_session


@pytest.fixture
def http(settings, session):
    return HttpClient(settings, session=session)


@pytest.fixture
def mock_http():
    """Stand-in for HttpClient used by service tests."""
    return MagicMock()
