"""Penneo API client: signed requests in, typed entities out."""

from penneo.config import ConnectorConfig, Settings, get_settings
from penneo.connector import (
    ApiConnector,
    Connector,
    FetchResult,
    InMemoryConnector,
    get_connector,
    initialize,
    initialize_from_settings,
    is_initialized,
    reset,
    set_factory,
)
from penneo.errors import (
    ApiResponseError,
    AuthenticationError,
    ConfigurationError,
    HydrationError,
    ParseError,
    PenneoError,
    TransportError,
    UnregisteredResourceError,
)
from penneo.resources import ResourceRegistry, default_registry
from penneo.schemas import (
    CaseFile,
    Document,
    Entity,
    Folder,
    SignatureLine,
    Signer,
    SigningRequest,
)

__version__ = "0.1.0"

__all__ = [
    "ApiConnector",
    "ApiResponseError",
    "AuthenticationError",
    "CaseFile",
    "ConfigurationError",
    "Connector",
    "ConnectorConfig",
    "Document",
    "Entity",
    "FetchResult",
    "Folder",
    "HydrationError",
    "InMemoryConnector",
    "ParseError",
    "PenneoError",
    "ResourceRegistry",
    "Settings",
    "SignatureLine",
    "Signer",
    "SigningRequest",
    "TransportError",
    "UnregisteredResourceError",
    "default_registry",
    "get_connector",
    "get_settings",
    "initialize",
    "initialize_from_settings",
    "is_initialized",
    "reset",
    "set_factory",
]
