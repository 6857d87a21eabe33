"""Error types raised by the Penneo connector."""

from __future__ import annotations

from typing import Any


class PenneoError(Exception):
    """Base error carrying a stable code and optional HTTP status."""

    default_code = "PENNEO_ERROR"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.status_code = status_code
        self.details = details


class ConfigurationError(PenneoError):
    """Connector configuration is missing or invalid."""

    default_code = "CONFIGURATION_ERROR"


class AuthenticationError(ConfigurationError):
    """The connector was requested before credentials were initialized."""

    default_code = "NOT_INITIALIZED"


class TransportError(PenneoError):
    """No response could be obtained from the API."""

    default_code = "TRANSPORT_ERROR"


class ApiResponseError(PenneoError):
    """The API answered with a status outside the success whitelist."""

    default_code = "API_RESPONSE_ERROR"


class HydrationError(PenneoError):
    """A response body could not be mapped onto an entity."""

    default_code = "HYDRATION_ERROR"


class ParseError(HydrationError):
    """A response body is not the JSON shape the operation expects."""

    default_code = "PARSE_ERROR"


class UnregisteredResourceError(PenneoError):
    """An entity type or resource path is missing from the registry."""

    default_code = "UNREGISTERED_RESOURCE"


__all__ = [
    "ApiResponseError",
    "AuthenticationError",
    "ConfigurationError",
    "HydrationError",
    "ParseError",
    "PenneoError",
    "TransportError",
    "UnregisteredResourceError",
]
