"""Connector implementations and the process-wide provider."""

from penneo.connector.api_connector import ApiConnector
from penneo.connector.auth import WSSEAuth
from penneo.connector.memory import InMemoryConnector
from penneo.connector.ports import Connector, FetchResult
from penneo.connector.provider import (
    get_connector,
    initialize,
    initialize_from_settings,
    is_initialized,
    reset,
    set_factory,
)

__all__ = [
    "ApiConnector",
    "Connector",
    "FetchResult",
    "InMemoryConnector",
    "WSSEAuth",
    "get_connector",
    "initialize",
    "initialize_from_settings",
    "is_initialized",
    "reset",
    "set_factory",
]
