"""Process-wide connector access.

Applications that prefer explicit wiring can construct :class:`ApiConnector`
themselves and pass it around. This module covers the common case of one
connector per process: call :func:`initialize` once at startup, then use
:func:`get_connector` anywhere. Tests swap the implementation with
:func:`set_factory`.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping

from penneo.config import ConnectorConfig, Settings
from penneo.connector.api_connector import ApiConnector
from penneo.connector.ports import Connector
from penneo.errors import AuthenticationError

logger = logging.getLogger(__name__)

ConnectorFactory = Callable[[ConnectorConfig], Connector]

_lock = threading.Lock()
_config: ConnectorConfig | None = None
_factory: ConnectorFactory | None = None
_instance: Connector | None = None


def initialize(
    key: str,
    secret: str,
    *,
    endpoint: str | None = None,
    user: str | None = None,
    headers: Mapping[str, str] | None = None,
    timeout_seconds: float | None = None,
) -> ConnectorConfig:
    """Install the credentials used by :func:`get_connector`."""
    config = ConnectorConfig(
        key=key,
        secret=secret,
        endpoint=endpoint or "",
        user=user,
        headers=dict(headers or {}),
        timeout_seconds=timeout_seconds,
    )
    install(config)
    return config


def initialize_from_settings(settings: Settings | None = None) -> ConnectorConfig:
    config = ConnectorConfig.from_settings(settings)
    install(config)
    return config


def install(config: ConnectorConfig) -> None:
    global _config, _instance
    with _lock:
        _config = config
        _instance = None
    logger.debug("Penneo connector configured for %s", config.endpoint)


def is_initialized() -> bool:
    return _config is not None


def set_factory(factory: ConnectorFactory | None) -> None:
    """Replace the connector factory; the current instance is discarded."""
    global _factory, _instance
    with _lock:
        _factory = factory
        _instance = None


def reset() -> None:
    """Forget configuration, factory and instance."""
    global _config, _factory, _instance
    with _lock:
        _config = None
        _factory = None
        _instance = None


def get_connector() -> Connector:
    global _instance
    instance = _instance
    if instance is not None:
        return instance

    with _lock:
        if _instance is not None:
            return _instance
        if _config is None:
            raise AuthenticationError("The Penneo connector has not been initialized")
        factory = _factory or _default_factory
        _instance = factory(_config)
        return _instance


def _default_factory(config: ConnectorConfig) -> Connector:
    return ApiConnector(config)


__all__ = [
    "ConnectorFactory",
    "get_connector",
    "initialize",
    "initialize_from_settings",
    "install",
    "is_initialized",
    "reset",
    "set_factory",
]
