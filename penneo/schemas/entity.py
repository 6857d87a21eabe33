"""Base model for Penneo API entities."""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Entity(BaseModel):
    """A record stored under one of the API's resource collections.

    Field names are snake_case in Python and lowerCamelCase on the wire.
    Only the fields listed in ``sendable_fields`` are sent on create and
    update; everything else is filled from server responses.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
        extra="ignore",
    )

    sendable_fields: ClassVar[tuple[str, ...]] = ()

    id: int | None = Field(default=None, description="Server-assigned identifier")

    @property
    def is_new(self) -> bool:
        """True until the server has assigned an identifier."""
        return not self.id


__all__ = ["Entity"]
