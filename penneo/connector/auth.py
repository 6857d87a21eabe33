"""WSSE UsernameToken authentication for httpx."""

from __future__ import annotations

import base64
import hashlib
import secrets
from collections.abc import Callable, Generator
from datetime import UTC, datetime

import httpx

from penneo.errors import ConfigurationError

NONCE_BYTES = 16
WSSE_HEADER = "X-WSSE"
WSSE_AUTHORIZATION = 'WSSE profile="UsernameToken"'


def utc_now() -> datetime:
    return datetime.now(UTC)


def format_created(moment: datetime) -> str:
    return moment.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


def password_digest(nonce: bytes, created: str, secret: str) -> str:
    """base64(SHA1(nonce + created + secret))."""
    raw = hashlib.sha1(nonce + created.encode("utf-8") + secret.encode("utf-8")).digest()
    return base64.b64encode(raw).decode("ascii")


def parse_wsse_header(value: str) -> dict[str, str]:
    """Split an ``X-WSSE`` header into its UsernameToken fields."""
    prefix = "UsernameToken "
    if not value.startswith(prefix):
        raise ValueError("Not a UsernameToken header.")
    fields: dict[str, str] = {}
    for part in value[len(prefix):].split(", "):
        key, _, quoted = part.partition("=")
        fields[key.strip()] = quoted.strip().strip('"')
    return fields


class WSSEAuth(httpx.Auth):
    """Signs every outgoing request with a fresh WSSE UsernameToken.

    The nonce and timestamp are regenerated per request, so a header is
    never reused. Nothing mutable is shared between calls.
    """

    def __init__(
        self,
        key: str,
        secret: str,
        *,
        clock: Callable[[], datetime] | None = None,
        nonce_factory: Callable[[], bytes] | None = None,
    ) -> None:
        if not key:
            raise ConfigurationError("WSSE key must not be empty.")
        if not secret:
            raise ConfigurationError("WSSE secret must not be empty.")
        self._key = key
        self._secret = secret
        self._clock = clock or utc_now
        self._nonce_factory = nonce_factory or (lambda: secrets.token_bytes(NONCE_BYTES))

    def header_value(self) -> str:
        nonce = self._nonce_factory()
        created = format_created(self._clock())
        digest = password_digest(nonce, created, self._secret)
        encoded_nonce = base64.b64encode(nonce).decode("ascii")
        return (
            f'UsernameToken Username="{self._key}", PasswordDigest="{digest}", '
            f'Nonce="{encoded_nonce}", Created="{created}"'
        )

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers[WSSE_HEADER] = self.header_value()
        request.headers["Authorization"] = WSSE_AUTHORIZATION
        yield request


__all__ = [
    "WSSE_AUTHORIZATION",
    "WSSE_HEADER",
    "WSSEAuth",
    "format_created",
    "parse_wsse_header",
    "password_digest",
]
