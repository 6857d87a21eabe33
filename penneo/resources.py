"""Mapping between entity types and their REST resource paths."""

from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache
from types import MappingProxyType
from typing import TYPE_CHECKING

from penneo.errors import UnregisteredResourceError

if TYPE_CHECKING:
    from penneo.schemas.entity import Entity

EntityType = type["Entity"]


class ResourceRegistry:
    """Read-only lookup of collection paths per entity type.

    ``nested`` overrides the segment used for a child type under a specific
    parent; without an override the child's own collection path is used.
    """

    def __init__(
        self,
        resources: Mapping[EntityType, str],
        nested: Mapping[tuple[EntityType, EntityType], str] | None = None,
    ) -> None:
        paths: dict[EntityType, str] = {}
        types_by_path: dict[str, EntityType] = {}
        for entity_type, raw_path in resources.items():
            path = raw_path.strip("/")
            if not path:
                raise ValueError(f"Empty resource path for {entity_type.__name__}")
            if path in types_by_path:
                raise ValueError(
                    f"Resource path {path!r} registered for both "
                    f"{types_by_path[path].__name__} and {entity_type.__name__}"
                )
            paths[entity_type] = path
            types_by_path[path] = entity_type

        nested_paths: dict[tuple[EntityType, EntityType], str] = {}
        for (parent, child), segment in (nested or {}).items():
            for entity_type in (parent, child):
                if entity_type not in paths:
                    raise UnregisteredResourceError(
                        f"Nested resource refers to unregistered type {entity_type.__name__}"
                    )
            nested_paths[(parent, child)] = segment.strip("/")

        self._paths = MappingProxyType(paths)
        self._types = MappingProxyType(types_by_path)
        self._nested = MappingProxyType(nested_paths)

    @property
    def paths(self) -> Mapping[EntityType, str]:
        return self._paths

    def path_for(self, entity_type: EntityType) -> str:
        try:
            return self._paths[entity_type]
        except KeyError:
            raise UnregisteredResourceError(
                f"No resource registered for {entity_type.__name__}"
            ) from None

    def nested_path_for(self, parent_type: EntityType, child_type: EntityType) -> str:
        self.path_for(parent_type)
        override = self._nested.get((parent_type, child_type))
        if override is not None:
            return override
        return self.path_for(child_type)

    def type_for(self, path: str) -> EntityType:
        try:
            return self._types[path.strip("/")]
        except KeyError:
            raise UnregisteredResourceError(f"Unknown resource path: {path!r}") from None

    def resource_names(self) -> list[str]:
        return sorted(self._types)

    def __contains__(self, entity_type: object) -> bool:
        return entity_type in self._paths


@lru_cache
def default_registry() -> ResourceRegistry:
    """Registry covering the bundled Penneo entities."""
    from penneo.schemas.penneo import DEFAULT_NESTED_RESOURCES, DEFAULT_RESOURCES

    return ResourceRegistry(DEFAULT_RESOURCES, DEFAULT_NESTED_RESOURCES)


__all__ = ["EntityType", "ResourceRegistry", "default_registry"]
