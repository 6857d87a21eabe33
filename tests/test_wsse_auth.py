"""WSSE UsernameToken header tests."""

from __future__ import annotations

import base64
import hashlib
from datetime import UTC, datetime, timedelta, timezone

import httpx
import pytest

from penneo.connector.auth import (
    WSSE_AUTHORIZATION,
    WSSE_HEADER,
    WSSEAuth,
    format_created,
    parse_wsse_header,
    password_digest,
)
from penneo.errors import ConfigurationError

FIXED_NOW = datetime(2024, 5, 17, 9, 30, 5, tzinfo=UTC)


def _sign(auth: WSSEAuth) -> httpx.Request:
    request = httpx.Request("GET", "https://api.test/v1/cases/1")
    flow = auth.auth_flow(request)
    return next(flow)


def test_digest_is_base64_sha1_of_nonce_created_secret() -> None:
    nonce = b"0123456789abcdef"
    created = "2024-05-17T09:30:05Z"
    expected = base64.b64encode(hashlib.sha1(nonce + created.encode() + b"s3cret").digest()).decode()

    digest = password_digest(nonce, created, "s3cret")

    assert digest == expected
    assert len(base64.b64decode(digest)) == 20


def test_created_is_utc_iso8601_with_z_suffix() -> None:
    local = FIXED_NOW.astimezone(timezone(timedelta(hours=2)))
    assert format_created(local) == "2024-05-17T09:30:05Z"


def test_header_carries_username_digest_nonce_and_created() -> None:
    nonce = b"fixed-nonce-0001"
    auth = WSSEAuth("api-key", "api-secret", clock=lambda: FIXED_NOW, nonce_factory=lambda: nonce)

    request = _sign(auth)

    assert request.headers["Authorization"] == WSSE_AUTHORIZATION
    fields = parse_wsse_header(request.headers[WSSE_HEADER])
    assert fields == {
        "Username": "api-key",
        "PasswordDigest": password_digest(nonce, "2024-05-17T09:30:05Z", "api-secret"),
        "Nonce": base64.b64encode(nonce).decode(),
        "Created": "2024-05-17T09:30:05Z",
    }


def test_header_is_fresh_for_every_request() -> None:
    auth = WSSEAuth("k", "s", clock=lambda: FIXED_NOW)

    first = _sign(auth).headers[WSSE_HEADER]
    second = _sign(auth).headers[WSSE_HEADER]

    assert first != second
    assert parse_wsse_header(first)["Nonce"] != parse_wsse_header(second)["Nonce"]


def test_timestamp_tracks_the_clock() -> None:
    moments = iter([FIXED_NOW, FIXED_NOW + timedelta(minutes=10)])
    auth = WSSEAuth("k", "s", clock=lambda: next(moments), nonce_factory=lambda: b"same")

    first = parse_wsse_header(_sign(auth).headers[WSSE_HEADER])
    second = parse_wsse_header(_sign(auth).headers[WSSE_HEADER])

    assert first["Created"] == "2024-05-17T09:30:05Z"
    assert second["Created"] == "2024-05-17T09:40:05Z"
    assert first["PasswordDigest"] != second["PasswordDigest"]


@pytest.mark.parametrize(("key", "secret"), [("", "s"), ("k", "")])
def test_empty_credentials_fail_at_construction(key: str, secret: str) -> None:
    with pytest.raises(ConfigurationError):
        WSSEAuth(key, secret)


def test_parse_rejects_other_schemes() -> None:
    with pytest.raises(ValueError):
        parse_wsse_header("Bearer abc")
