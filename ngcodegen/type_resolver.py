"""Resolve schema nodes to TypeScript type declarations.

Handles:
- Arrays (Array<T>, recursively)
- Maps with a value schema ({ [key: string]: T; })
- Maps with bare additionalProperties: true (value is a free-form object)
- File/binary payloads (Blob)
- Free-form objects (any)
- Primitives and references through the base mapping table
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from .schema import (
    ArraySchema,
    BinarySchema,
    MapSchema,
    ObjectSchema,
    PrimitiveSchema,
    RefSchema,
    Schema,
)

LIST_TYPE = "Array"
BLOB_TYPE = "Blob"
ANY_TYPE = "any"

# OpenAPI/base type name -> TypeScript type
_BASE_TYPE_MAPPING: dict[str, str] = {
    "Array": "Array",
    "array": "Array",
    "List": "Array",
    "boolean": "boolean",
    "string": "string",
    "int": "number",
    "float": "number",
    "number": "number",
    "long": "number",
    "short": "number",
    "char": "string",
    "double": "number",
    "object": "any",
    "integer": "number",
    "Map": "any",
    "date": "string",
    "DateTime": "Date",
    "binary": "any",
    "File": "any",
    "file": BLOB_TYPE,
    "ByteArray": "string",
    "UUID": "string",
    "Error": "Error",
}

_LANGUAGE_PRIMITIVES: frozenset[str] = frozenset({
    "string", "String", "boolean", "Boolean", "Double", "Integer", "Long",
    "Float", "Object", "Array", "Date", "number", "any", "File", "Error",
    "Map", BLOB_TYPE,
})

_LANGUAGE_GENERIC_TYPES: tuple[str, ...] = (LIST_TYPE,)


@dataclass(frozen=True)
class TypeTable:
    """Mapping table and built-in type names of the target language."""

    mapping: dict[str, str] = field(default_factory=lambda: dict(_BASE_TYPE_MAPPING))
    primitives: frozenset[str] = _LANGUAGE_PRIMITIVES
    generic_types: tuple[str, ...] = _LANGUAGE_GENERIC_TYPES


class SchemaTypeResolver:
    """Pure schema -> type string resolver.

    ``model_namer`` turns a referenced schema name into the class name of
    its generated model; it defaults to the identity.
    """

    def __init__(
        self,
        table: TypeTable | None = None,
        model_namer: Callable[[str], str] | None = None,
    ) -> None:
        self.table = table or TypeTable()
        self._model_namer = model_namer or (lambda name: name)

    def resolve(self, schema: Schema) -> str:
        """Return the TypeScript type declaration for ``schema``."""
        if isinstance(schema, RefSchema):
            return self._resolve_named(schema.name, is_reference=True)
        if isinstance(schema, ArraySchema):
            return f"{LIST_TYPE}<{self.resolve(schema.items)}>"
        if isinstance(schema, MapSchema):
            # bare additionalProperties: true behaves like a map of free-form objects
            value = schema.value_schema if schema.has_explicit_properties else ObjectSchema()
            return "{ [key: string]: " + self.resolve(value) + "; }"
        if isinstance(schema, BinarySchema):
            return BLOB_TYPE
        if isinstance(schema, ObjectSchema):
            return ANY_TYPE
        if isinstance(schema, PrimitiveSchema):
            return self._resolve_named(schema.name, is_reference=False)
        raise TypeError(f"Not a schema node: {schema!r}")

    def _resolve_named(self, name: str, is_reference: bool) -> str:
        if self.is_language_primitive(name) or self.is_language_generic_type(name):
            return name
        if name in self.table.mapping:
            return self.table.mapping[name]
        if is_reference:
            return self._model_namer(name)
        return name

    def referenced_models(self, schema: Schema) -> list[str]:
        """Model class names ``schema`` depends on, in first-seen order."""
        found: list[str] = []

        def walk(node: Schema | None) -> None:
            if node is None:
                return
            if isinstance(node, RefSchema):
                resolved = self.resolve(node)
                if self.needs_import(resolved) and resolved not in found:
                    found.append(resolved)
            elif isinstance(node, ArraySchema):
                walk(node.items)
            elif isinstance(node, MapSchema):
                walk(node.value_schema)

        walk(schema)
        return found

    def is_language_primitive(self, type_name: str) -> bool:
        return type_name in self.table.primitives

    def is_language_generic_type(self, type_name: str) -> bool:
        return any(type_name.startswith(f"{generic}<") for generic in self.table.generic_types)

    def needs_import(self, type_name: str | None) -> bool:
        """True when ``type_name`` is a model that has to be imported."""
        if not type_name:
            return False
        if self.is_language_primitive(type_name) or self.is_language_generic_type(type_name):
            return False
        if type_name in self.table.mapping.values():
            return False
        return type_name.isidentifier()

    def apply_local_type_mapping(self, type_name: str) -> str:
        return self.table.mapping.get(type_name, type_name)

    def is_data_type_file(self, type_name: str | None) -> bool:
        return type_name == BLOB_TYPE
