"""Mapping between JSON payloads and entity instances."""

from __future__ import annotations

import json
from collections.abc import Mapping
from functools import lru_cache
from typing import Any, TypeVar

from pydantic import ValidationError

from penneo.errors import HydrationError, ParseError
from penneo.schemas.entity import Entity

EntityT = TypeVar("EntityT", bound=Entity)


def first_character_to_lower(text: str) -> str:
    if not text:
        return text
    return text[0].lower() + text[1:]


@lru_cache
def _field_lookup(entity_type: type[Entity]) -> dict[str, str]:
    """Wire or Python name (first letter lowered) -> Python field name."""
    lookup: dict[str, str] = {}
    for name, info in entity_type.model_fields.items():
        lookup[first_character_to_lower(name)] = name
        if info.alias:
            lookup[first_character_to_lower(info.alias)] = name
    return lookup


def request_data(entity: Entity) -> dict[str, Any] | None:
    """Body for a create or update call, or ``None`` when nothing is sendable."""
    sendable = entity.sendable_fields
    if not sendable:
        return None
    return entity.model_dump(mode="json", by_alias=True, include=set(sendable))


def set_properties_from_dict(entity: Entity, values: Mapping[str, Any]) -> Entity:
    """Assign matching values; the entity is left unchanged if any value is invalid."""
    lookup = _field_lookup(type(entity))
    staged = entity.model_copy()
    assigned: list[str] = []
    for key, value in values.items():
        name = lookup.get(first_character_to_lower(key))
        if name is None:
            continue
        try:
            setattr(staged, name, value)
        except ValidationError as exc:
            raise HydrationError(
                f"Invalid value for {type(entity).__name__}.{name}: {value!r}",
                details={"field": name, "errors": exc.errors(include_url=False)},
            ) from exc
        assigned.append(name)

    for name in assigned:
        setattr(entity, name, getattr(staged, name))
    return entity


def _decode(text: str | bytes | None) -> Any:
    if text is None or text == "" or text == b"":
        raise ParseError("Response body is empty.")
    try:
        return json.loads(text)
    except ValueError as exc:
        raise ParseError(f"Response body is not valid JSON: {exc}") from exc


def _expect_object(payload: Any) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise ParseError(f"Expected a JSON object, got {type(payload).__name__}.")
    return payload


def set_properties_from_json(entity: Entity, text: str | bytes | None) -> Entity:
    return set_properties_from_dict(entity, _expect_object(_decode(text)))


def create_object(entity_type: type[EntityT], text: str | bytes | None) -> EntityT:
    instance = entity_type()
    set_properties_from_dict(instance, _expect_object(_decode(text)))
    return instance


def create_objects(entity_type: type[EntityT], text: str | bytes | None) -> list[EntityT]:
    payload = _decode(text)
    if not isinstance(payload, list):
        raise ParseError(f"Expected a JSON array, got {type(payload).__name__}.")
    objects: list[EntityT] = []
    for item in payload:
        instance = entity_type()
        set_properties_from_dict(instance, _expect_object(item))
        objects.append(instance)
    return objects


def decode_asset(text: str | bytes | None) -> str:
    """First element of an asset response, which is a one-item JSON array."""
    payload = _decode(text)
    if not isinstance(payload, list) or not payload:
        raise ParseError("Asset response must be a non-empty JSON array.")
    asset = payload[0]
    if not isinstance(asset, str):
        raise ParseError(f"Asset payload must be a string, got {type(asset).__name__}.")
    return asset


__all__ = [
    "create_object",
    "create_objects",
    "decode_asset",
    "first_character_to_lower",
    "request_data",
    "set_properties_from_dict",
    "set_properties_from_json",
]
