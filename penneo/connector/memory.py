"""In-memory connector for exercising application code without HTTP."""

from __future__ import annotations

import base64
from collections import defaultdict
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, TypeVar

from penneo.connector.ports import FetchResult
from penneo.errors import ApiResponseError
from penneo.hydration import first_character_to_lower, request_data, set_properties_from_dict
from penneo.resources import ResourceRegistry, default_registry
from penneo.schemas.entity import Entity

EntityT = TypeVar("EntityT", bound=Entity)

_Key = tuple[type[Entity], int]


@dataclass
class InMemoryStore:
    """Stored wire payloads keyed by entity type and id."""

    records: dict[_Key, dict[str, Any]] = field(default_factory=dict)
    links: dict[_Key, set[_Key]] = field(default_factory=lambda: defaultdict(set))
    assets: dict[tuple[_Key, str], str] = field(default_factory=dict)
    actions: list[tuple[_Key, str]] = field(default_factory=list)
    sequence: int = 0

    def next_id(self) -> int:
        self.sequence += 1
        return self.sequence


class InMemoryConnector:
    """Connector double that behaves like the API over dictionaries.

    Only sendable fields are stored, as the real API would receive them.
    """

    def __init__(
        self,
        registry: ResourceRegistry | None = None,
        store: InMemoryStore | None = None,
    ) -> None:
        self._registry = registry or default_registry()
        self.store = store or InMemoryStore()

    def write_object(self, entity: Entity) -> bool:
        data = request_data(entity)
        if data is None:
            return False
        self._registry.path_for(type(entity))
        if entity.is_new:
            entity.id = self.store.next_id()
        elif self._key(entity) not in self.store.records:
            return False
        self.store.records[self._key(entity)] = {**data, "id": entity.id}
        return True

    def delete_object(self, entity: Entity) -> bool:
        key = self._key(entity)
        if key not in self.store.records:
            return False
        del self.store.records[key]
        self.store.links.pop(key, None)
        for linked in self.store.links.values():
            linked.discard(key)
        return True

    def read_object(self, entity: Entity) -> bool:
        record = self.store.records.get(self._key(entity))
        if record is None:
            return False
        set_properties_from_dict(entity, record)
        return True

    def find(self, entity_type: type[EntityT], entity_id: int) -> FetchResult[EntityT]:
        record = self.store.records.get((entity_type, entity_id))
        if record is None:
            return FetchResult.failure("Not found", status_code=404)
        return FetchResult.success(self._build(entity_type, record), status_code=200)

    def link_entity(self, parent: Entity, child: Entity) -> bool:
        self._registry.nested_path_for(type(parent), type(child))
        parent_key, child_key = self._key(parent), self._key(child)
        if parent_key not in self.store.records or child_key not in self.store.records:
            return False
        self.store.links[parent_key].add(child_key)
        return True

    def unlink_entity(self, parent: Entity, child: Entity) -> bool:
        linked = self.store.links.get(self._key(parent), set())
        child_key = self._key(child)
        if child_key not in linked:
            return False
        linked.discard(child_key)
        return True

    def get_linked_entities(self, parent: Entity, child_type: type[EntityT]) -> list[EntityT]:
        self._registry.nested_path_for(type(parent), child_type)
        linked = sorted(
            entity_id
            for (entity_type, entity_id) in self.store.links.get(self._key(parent), set())
            if entity_type is child_type
        )
        return [self._build(child_type, self.store.records[(child_type, entity_id)]) for entity_id in linked]

    def find_linked_entity(
        self,
        parent: Entity,
        child_type: type[EntityT],
        entity_id: int,
    ) -> FetchResult[EntityT]:
        if (child_type, entity_id) not in self.store.links.get(self._key(parent), set()):
            return FetchResult.failure("Not found", status_code=404)
        return FetchResult.success(
            self._build(child_type, self.store.records[(child_type, entity_id)]),
            status_code=200,
        )

    def put_asset(self, entity: Entity, asset_name: str, content: bytes | str) -> None:
        """Seed an asset; bytes are stored base64 encoded like the API serves them."""
        if isinstance(content, bytes):
            content = base64.b64encode(content).decode("ascii")
        self.store.assets[(self._key(entity), asset_name)] = content

    def get_file_assets(self, entity: Entity, asset_name: str) -> bytes:
        return base64.b64decode(self.get_text_assets(entity, asset_name), validate=True)

    def get_text_assets(self, entity: Entity, asset_name: str) -> str:
        asset = self.store.assets.get((self._key(entity), asset_name))
        if asset is None:
            raise ApiResponseError(f"Asset {asset_name!r} not found", status_code=404)
        return asset

    def find_by(
        self,
        entity_type: type[EntityT],
        query: Mapping[str, Any] | None = None,
    ) -> FetchResult[list[EntityT]]:
        self._registry.path_for(entity_type)
        wanted = {first_character_to_lower(key): value for key, value in (query or {}).items()}
        items = [
            self._build(entity_type, record)
            for (stored_type, _), record in sorted(self.store.records.items(), key=lambda item: item[0][1])
            if stored_type is entity_type and all(record.get(key) == value for key, value in wanted.items())
        ]
        return FetchResult.success(items, status_code=200)

    def find_one_by(
        self,
        entity_type: type[EntityT],
        query: Mapping[str, Any] | None = None,
    ) -> FetchResult[EntityT]:
        result = self.find_by(entity_type, query)
        if not result.value:
            return FetchResult.failure(f"No {entity_type.__name__} matches the query.", status_code=200)
        return FetchResult.success(result.value[0], status_code=200)

    def perform_action(self, entity: Entity, action_name: str) -> bool:
        key = self._key(entity)
        if key not in self.store.records:
            return False
        self.store.actions.append((key, action_name))
        return True

    @staticmethod
    def _key(entity: Entity) -> _Key:
        return (type(entity), entity.id or 0)

    @staticmethod
    def _build(entity_type: type[EntityT], record: Mapping[str, Any]) -> EntityT:
        instance = entity_type()
        set_properties_from_dict(instance, record)
        return instance


__all__ = ["InMemoryConnector", "InMemoryStore"]
