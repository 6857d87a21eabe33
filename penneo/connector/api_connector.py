"""HTTP connector for the Penneo REST API."""

from __future__ import annotations

import base64
import logging
from collections.abc import Mapping
from types import TracebackType
from typing import Any, TypeGuard, TypeVar

import httpx

from penneo.config import ConnectorConfig
from penneo.connector.auth import WSSEAuth
from penneo.connector.ports import SUCCESS_STATUS_CODES, FetchResult
from penneo.connector.request_builder import QUERY_OPTION, RequestBuilder, RequestOptions
from penneo.errors import ApiResponseError, TransportError
from penneo.hydration import (
    create_object,
    create_objects,
    decode_asset,
    request_data,
    set_properties_from_json,
)
from penneo.observability import TRACE, log_request_event
from penneo.resources import ResourceRegistry, default_registry
from penneo.schemas.entity import Entity

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT", bound=Entity)

COMPONENT = "penneo.connector"
LINK_METHOD = "LINK"
UNLINK_METHOD = "UNLINK"
ACTION_METHOD = "patch"


def is_success(response: httpx.Response | None) -> TypeGuard[httpx.Response]:
    return response is not None and response.status_code in SUCCESS_STATUS_CODES


class ApiConnector:
    """Maps entities onto signed requests against the Penneo API.

    Every call goes through :meth:`call_server`, which never raises for
    transport failures; it returns ``None`` instead and each operation
    reports that as a failure.
    """

    def __init__(
        self,
        config: ConnectorConfig,
        *,
        registry: ResourceRegistry | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = config
        self._registry = registry or default_registry()
        self._client = httpx.Client(
            base_url=config.endpoint,
            headers=config.default_headers(),
            auth=WSSEAuth(config.key, config.secret),
            timeout=config.timeout_seconds,
            transport=transport,
        )
        self._builder = RequestBuilder(self._client)

    @property
    def config(self) -> ConnectorConfig:
        return self._config

    @property
    def registry(self) -> ResourceRegistry:
        return self._registry

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def relative_url(self, entity: Entity) -> str:
        return self._registry.path_for(type(entity))

    def _object_url(self, entity: Entity) -> str:
        return f"{self.relative_url(entity)}/{entity.id}"

    def _nested_url(self, parent: Entity, child_type: type[Entity]) -> str:
        return f"{self._object_url(parent)}/{self._registry.nested_path_for(type(parent), child_type)}"

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def write_object(self, entity: Entity) -> bool:
        data = request_data(entity)
        if data is None:
            return False

        if not entity.is_new:
            response = self.call_server(self._object_url(entity), data, "PUT")
            return is_success(response)

        response = self.call_server(self.relative_url(entity), data, "POST")
        if not is_success(response):
            return False
        # Created objects come back with server-assigned fields, unless the body is empty.
        if response.content:
            set_properties_from_json(entity, response.content)
        return True

    def delete_object(self, entity: Entity) -> bool:
        response = self.call_server(self._object_url(entity), method="DELETE")
        return response is not None and response.status_code in (200, 204)

    def read_object(self, entity: Entity) -> bool:
        response = self.call_server(self._object_url(entity))
        if response is None or response.status_code != 200:
            return False
        set_properties_from_json(entity, response.content)
        return True

    def find(self, entity_type: type[EntityT], entity_id: int) -> FetchResult[EntityT]:
        url = f"{self._registry.path_for(entity_type)}/{entity_id}"
        return self._fetch_one(entity_type, url)

    # ------------------------------------------------------------------
    # Linking
    # ------------------------------------------------------------------

    def link_entity(self, parent: Entity, child: Entity) -> bool:
        url = f"{self._nested_url(parent, type(child))}/{child.id}"
        return is_success(self.call_server(url, custom_method=LINK_METHOD))

    def unlink_entity(self, parent: Entity, child: Entity) -> bool:
        url = f"{self._nested_url(parent, type(child))}/{child.id}"
        return is_success(self.call_server(url, custom_method=UNLINK_METHOD))

    def get_linked_entities(self, parent: Entity, child_type: type[EntityT]) -> list[EntityT]:
        response = self._require(self.call_server(self._nested_url(parent, child_type)))
        return create_objects(child_type, response.content)

    def find_linked_entity(
        self,
        parent: Entity,
        child_type: type[EntityT],
        entity_id: int,
    ) -> FetchResult[EntityT]:
        url = f"{self._nested_url(parent, child_type)}/{entity_id}"
        return self._fetch_one(child_type, url)

    # ------------------------------------------------------------------
    # Assets
    # ------------------------------------------------------------------

    def get_file_assets(self, entity: Entity, asset_name: str) -> bytes:
        return base64.b64decode(self.get_text_assets(entity, asset_name), validate=True)

    def get_text_assets(self, entity: Entity, asset_name: str) -> str:
        response = self._require(self.call_server(f"{self._object_url(entity)}/{asset_name}"))
        return decode_asset(response.content)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_by(
        self,
        entity_type: type[EntityT],
        query: Mapping[str, Any] | None = None,
    ) -> FetchResult[list[EntityT]]:
        resource = self._registry.path_for(entity_type)
        options: dict[str, Mapping[str, Any]] | None = None
        if query:
            options = {QUERY_OPTION: query}

        response = self.call_server(resource, options=options)
        if response is None:
            return FetchResult.failure("No response from the Penneo API.")
        if not is_success(response):
            return FetchResult.failure(response.text, status_code=response.status_code)
        return FetchResult.success(
            create_objects(entity_type, response.content),
            status_code=response.status_code,
        )

    def find_one_by(
        self,
        entity_type: type[EntityT],
        query: Mapping[str, Any] | None = None,
    ) -> FetchResult[EntityT]:
        result = self.find_by(entity_type, query)
        if not result.ok:
            return FetchResult.failure(result.error or "Lookup failed.", status_code=result.status_code)
        if not result.value:
            return FetchResult.failure(
                f"No {entity_type.__name__} matches the query.",
                status_code=result.status_code,
            )
        return FetchResult.success(result.value[0], status_code=result.status_code)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def perform_action(self, entity: Entity, action_name: str) -> bool:
        url = f"{self._object_url(entity)}/{action_name}"
        return is_success(self.call_server(url, custom_method=ACTION_METHOD))

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def call_server(
        self,
        url: str,
        data: Mapping[str, Any] | None = None,
        method: str = "GET",
        options: RequestOptions | None = None,
        custom_method: str | None = None,
    ) -> httpx.Response | None:
        """Send one request; transport failures are logged and yield ``None``."""
        actual_method = custom_method or method
        try:
            request = self._builder.build(
                url,
                data=data,
                method=method,
                options=options,
                custom_method=custom_method,
            )
            response = self._client.send(request)
        except httpx.HTTPError as exc:
            log_request_event(
                logger,
                level=logging.CRITICAL,
                message=f"Request {actual_method} {url} failed: {exc}",
                component=COMPONENT,
                operation="call_server",
                method=actual_method,
                url=url,
                exc_info=True,
            )
            return None

        log_request_event(
            logger,
            level=TRACE,
            message=f"Request {actual_method} {url} / Response '{response.status_code}'",
            component=COMPONENT,
            operation="call_server",
            method=actual_method,
            url=url,
            status_code=response.status_code,
        )
        return response

    def _fetch_one(self, entity_type: type[EntityT], url: str) -> FetchResult[EntityT]:
        response = self.call_server(url)
        if response is None:
            return FetchResult.failure("No response from the Penneo API.")
        if not is_success(response):
            return FetchResult.failure(response.text, status_code=response.status_code)
        return FetchResult.success(
            create_object(entity_type, response.content),
            status_code=response.status_code,
        )

    @staticmethod
    def _require(response: httpx.Response | None) -> httpx.Response:
        if response is None:
            raise TransportError("No response from the Penneo API.")
        if not is_success(response):
            raise ApiResponseError(
                f"Penneo API error {response.status_code}: {response.text}",
                status_code=response.status_code,
            )
        return response

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self) -> ApiConnector:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()


__all__ = ["ACTION_METHOD", "LINK_METHOD", "UNLINK_METHOD", "ApiConnector", "is_success"]
