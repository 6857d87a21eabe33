"""Connector boundary shared by the HTTP connector and test doubles."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeVar

from penneo.schemas.entity import Entity

T = TypeVar("T")
EntityT = TypeVar("EntityT", bound=Entity)

SUCCESS_STATUS_CODES = frozenset({200, 201, 204})


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Outcome of a lookup that may fail without raising."""

    ok: bool
    value: T | None = None
    status_code: int | None = None
    error: str | None = None

    @classmethod
    def success(cls, value: T, status_code: int | None = None) -> FetchResult[T]:
        return cls(ok=True, value=value, status_code=status_code)

    @classmethod
    def failure(cls, error: str, status_code: int | None = None) -> FetchResult[T]:
        return cls(ok=False, status_code=status_code, error=error)

    def __bool__(self) -> bool:
        return self.ok


class Connector(Protocol):
    """Entity CRUD, linking and action protocol of the Penneo API."""

    def write_object(self, entity: Entity) -> bool:
        ...

    def delete_object(self, entity: Entity) -> bool:
        ...

    def read_object(self, entity: Entity) -> bool:
        ...

    def link_entity(self, parent: Entity, child: Entity) -> bool:
        ...

    def unlink_entity(self, parent: Entity, child: Entity) -> bool:
        ...

    def get_linked_entities(self, parent: Entity, child_type: type[EntityT]) -> list[EntityT]:
        ...

    def find_linked_entity(
        self,
        parent: Entity,
        child_type: type[EntityT],
        entity_id: int,
    ) -> FetchResult[EntityT]:
        ...

    def get_file_assets(self, entity: Entity, asset_name: str) -> bytes:
        ...

    def get_text_assets(self, entity: Entity, asset_name: str) -> str:
        ...

    def find(self, entity_type: type[EntityT], entity_id: int) -> FetchResult[EntityT]:
        ...

    def find_by(
        self,
        entity_type: type[EntityT],
        query: Mapping[str, Any] | None = None,
    ) -> FetchResult[list[EntityT]]:
        ...

    def find_one_by(
        self,
        entity_type: type[EntityT],
        query: Mapping[str, Any] | None = None,
    ) -> FetchResult[EntityT]:
        ...

    def perform_action(self, entity: Entity, action_name: str) -> bool:
        ...


__all__ = ["SUCCESS_STATUS_CODES", "Connector", "FetchResult"]
