"""Schema object model handed over by the upstream parsing stage.

A schema node is exactly one of the classes below. Array and Map nodes own
their child node; nothing here is shared between parents.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class PrimitiveSchema:
    """A scalar with a declared OpenAPI type name (``string``, ``integer``, ``DateTime``...)."""

    name: str


@dataclass(frozen=True)
class ArraySchema:
    items: Schema


@dataclass(frozen=True)
class MapSchema:
    """A dictionary schema.

    ``value_schema`` is set when ``additionalProperties`` carries a schema;
    ``allows_any`` is set when it is the bare boolean ``true``.
    ``properties`` holds any named properties declared next to it.
    """

    value_schema: Schema | None = None
    allows_any: bool = False
    properties: dict[str, Schema] = field(default_factory=dict)

    @property
    def has_explicit_properties(self) -> bool:
        return self.value_schema is not None


@dataclass(frozen=True)
class ObjectSchema:
    """A free-form object. Extra metadata never changes how it resolves."""

    description: str | None = None


@dataclass(frozen=True)
class BinarySchema:
    """File uploads and ``format: binary`` strings."""

    kind: str = "binary"


@dataclass(frozen=True)
class RefSchema:
    """A named reference to a component schema or a language type."""

    name: str


Schema = Union[PrimitiveSchema, ArraySchema, MapSchema, ObjectSchema, BinarySchema, RefSchema]
