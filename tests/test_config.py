"""Connector configuration tests."""

from __future__ import annotations

import logging

import pytest

from penneo.config import API_USER_HEADER, DEFAULT_ENDPOINT, ConnectorConfig, Settings, get_settings
from penneo.errors import ConfigurationError
from penneo.observability import TRACE, parse_log_level


@pytest.mark.parametrize(("key", "secret"), [("", "s"), ("k", "")])
def test_empty_credentials_are_rejected(key: str, secret: str) -> None:
    with pytest.raises(ConfigurationError):
        ConnectorConfig(key=key, secret=secret)


def test_default_endpoint_and_headers() -> None:
    config = ConnectorConfig(key="k", secret="s")

    assert config.endpoint == DEFAULT_ENDPOINT
    assert config.default_headers() == {"Content-type": "application/json"}


def test_user_and_extra_headers() -> None:
    extra = {"X-Trace": "1"}
    config = ConnectorConfig(key="k", secret="s", user="u-9", headers=extra)
    extra["X-Trace"] = "changed"

    headers = config.default_headers()

    assert headers[API_USER_HEADER] == "u-9"
    assert headers["X-Trace"] == "1"


def test_repr_hides_secret() -> None:
    assert "top-secret" not in repr(ConnectorConfig(key="k", secret="top-secret"))


def test_settings_read_prefixed_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PENNEO_API_KEY", "env-key")
    monkeypatch.setenv("PENNEO_API_SECRET", "env-secret")
    monkeypatch.setenv("PENNEO_ENDPOINT", "https://api.test/v1")
    monkeypatch.setenv("PENNEO_TIMEOUT_SECONDS", "12.5")
    get_settings.cache_clear()
    try:
        config = ConnectorConfig.from_settings(get_settings())
    finally:
        get_settings.cache_clear()

    assert config.key == "env-key"
    assert config.endpoint == "https://api.test/v1"
    assert config.timeout_seconds == 12.5


def test_from_settings_without_credentials_fails() -> None:
    with pytest.raises(ConfigurationError):
        ConnectorConfig.from_settings(Settings(api_key="", api_secret=""))


@pytest.mark.parametrize(
    ("value", "expected"),
    [("trace", TRACE), ("INFO", logging.INFO), (logging.DEBUG, logging.DEBUG), ("10", 10)],
)
def test_parse_log_level(value: str | int, expected: int) -> None:
    assert parse_log_level(value) == expected


def test_parse_log_level_rejects_unknown() -> None:
    with pytest.raises(ValueError):
        parse_log_level("chatty")
