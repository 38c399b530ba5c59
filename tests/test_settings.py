"""Tests for Settings loading and validation."""

from unittest.mock import patch

import pytest

from tiation_sdk.config.settings import DEFAULT_BASE_URL, Settings
from tiation_sdk.exceptions import ConfigurationError

ENV_VARS = [
    "TIATION_API_KEY",
    "TIATION_BASE_URL",
    "TIATION_TIMEOUT",
    "TIATION_MAX_RETRIES",
    "TIATION_BACKOFF_FACTOR",
    "TIATION_BATCH_SIZE",
    "TIATION_CACHE_ENABLED",
    "TIATION_CACHE_DIR",
    "TIATION_CACHE_MAX_AGE",
    "TIATION_USER_AGENT",
    "TIATION_MAX_RETRY_AFTER",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start every test without TIATION_* variables or a .env file."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    with patch("tiation_sdk.config.settings.load_dotenv") as mock_load:
        yield mock_load


def test_from_env_defaults():
    settings = Settings.from_env()

    assert settings.api_key == ""
    assert settings.base_url == DEFAULT_BASE_URL
    assert settings.timeout == 30.0
    assert settings.max_retries == 3
    assert settings.cache_enabled is False
    assert settings.max_retry_after == 60.0


def test_from_env_reads_variables(monkeypatch):
    monkeypatch.setenv("TIATION_API_KEY", "sk_test")
    monkeypatch.setenv("TIATION_BASE_URL", "https://eu.api.tiation.test/v2/")
    monkeypatch.setenv("TIATION_TIMEOUT", "12.5")
    monkeypatch.setenv("TIATION_BATCH_SIZE", "10")
    monkeypatch.setenv("TIATION_CACHE_ENABLED", "true")

    settings = Settings.from_env()

    assert settings.api_key == "sk_test"
    assert settings.base_url == "https://eu.api.tiation.test/v2"
    assert settings.timeout == 12.5
    assert settings.batch_size == 10
    assert settings.cache_enabled is True


def test_from_env_loads_given_env_file(clean_env):
    Settings.from_env("custom.env")
    clean_env.assert_called_once_with("custom.env")


def test_invalid_number_names_variable(monkeypatch):
    monkeypatch.setenv("TIATION_TIMEOUT", "soon")

    with pytest.raises(ConfigurationError, match="TIATION_TIMEOUT"):
        Settings.from_env()


def test_validate_requires_api_key():
    with pytest.raises(ConfigurationError, match="TIATION_API_KEY"):
        Settings().validate()


@pytest.mark.parametrize("field,value", [
    ("base_url", "ftp://api.example.test"),
    ("timeout", 0),
    ("max_retries", -1),
    ("batch_size", 0),
    ("max_retry_after", -1),
])
def test_validate_rejects_bad_values(field, value):
    settings = Settings(api_key="key")
    setattr(settings, field, value)

    with pytest.raises(ConfigurationError):
        settings.validate()


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        Settings().validate()


def test_masked_api_key():
    assert Settings(api_key="sk_live_abcd1234").masked_api_key().endswith("1234")
    assert "abcd" not in Settings(api_key="sk_live_abcd1234").masked_api_key()
    assert Settings().masked_api_key() == "(not set)"


def test_max_retry_after_from_env(monkeypatch):
    monkeypatch.setenv("TIATION_MAX_RETRY_AFTER", "5")

    assert Settings.from_env().max_retry_after == 5.0
