"""Connector configuration."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType

from pydantic_settings import BaseSettings, SettingsConfigDict

from penneo.errors import ConfigurationError

DEFAULT_ENDPOINT = "https://sandbox.penneo.com/api/v1"
API_USER_HEADER = "penneo-api-user"


class Settings(BaseSettings):
    """Settings loaded from ``PENNEO_*`` environment variables or ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="PENNEO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    endpoint: str = DEFAULT_ENDPOINT
    api_key: str = ""
    api_secret: str = ""
    api_user: str | None = None
    timeout_seconds: float | None = None
    log_level: str = "WARNING"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


@dataclass(frozen=True)
class ConnectorConfig:
    """Immutable credentials and transport options for one connector.

    ``headers`` holds extra default headers sent with every request; the
    JSON content type and the optional API user header are added on top.
    """

    key: str
    secret: str
    endpoint: str = DEFAULT_ENDPOINT
    user: str | None = None
    headers: Mapping[str, str] = field(default_factory=dict, hash=False)
    timeout_seconds: float | None = None

    def __post_init__(self) -> None:
        if not self.key:
            raise ConfigurationError("Penneo API key must not be empty.")
        if not self.secret:
            raise ConfigurationError("Penneo API secret must not be empty.")
        endpoint = (self.endpoint or DEFAULT_ENDPOINT).rstrip("/")
        object.__setattr__(self, "endpoint", endpoint)
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> ConnectorConfig:
        settings = settings or get_settings()
        return cls(
            key=settings.api_key,
            secret=settings.api_secret,
            endpoint=settings.endpoint,
            user=settings.api_user or None,
            timeout_seconds=settings.timeout_seconds,
        )

    def default_headers(self) -> dict[str, str]:
        headers = dict(self.headers)
        headers["Content-type"] = "application/json"
        if self.user:
            headers[API_USER_HEADER] = self.user
        return headers

    def __repr__(self) -> str:
        return (
            f"ConnectorConfig(key={self.key!r}, secret='***', endpoint={self.endpoint!r}, "
            f"user={self.user!r})"
        )


__all__ = [
    "API_USER_HEADER",
    "DEFAULT_ENDPOINT",
    "ConnectorConfig",
    "Settings",
    "get_settings",
]
