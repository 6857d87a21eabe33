"""Assembly of outgoing API requests."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from penneo.hydration import first_character_to_lower

QUERY_OPTION = "query"

RequestOptions = Mapping[str, Mapping[str, Any]]


def query_params(query: Mapping[str, Any]) -> dict[str, Any]:
    return {first_character_to_lower(key): value for key, value in query.items()}


class RequestBuilder:
    """Builds requests against a client's base URL and default headers.

    Authentication is applied by the client when the request is sent.
    """

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    def build(
        self,
        url: str,
        *,
        data: Mapping[str, Any] | None = None,
        method: str = "GET",
        options: RequestOptions | None = None,
        custom_method: str | None = None,
    ) -> httpx.Request:
        params: dict[str, Any] = {}
        for group, values in (options or {}).items():
            if group == QUERY_OPTION:
                params.update(query_params(values))

        request = self._client.build_request(
            custom_method or method,
            url.lstrip("/"),
            params=params or None,
            json=dict(data) if data is not None else None,
        )
        if custom_method:
            # httpx upper-cases methods; custom verbs go out as given.
            request.method = custom_method
        return request


__all__ = ["QUERY_OPTION", "RequestBuilder", "RequestOptions", "query_params"]
