"""Build schema nodes, operations and models from decoded OpenAPI mappings.

Handles:
- $ref (kept as a named reference, never inlined)
- arrays and maps (additionalProperties as schema or as ``true``)
- binary/file payloads
- string/number formats that have their own base type (date-time, uuid, int64...)
- allOf with a single reference, oneOf/anyOf (first concrete member)
- parameter $ref resolution
"""

from __future__ import annotations

from typing import Any

from .metadata import Model, Operation, Parameter
from .naming import TypeScriptNaming, build_operation_id
from .schema import (
    ArraySchema,
    BinarySchema,
    MapSchema,
    ObjectSchema,
    PrimitiveSchema,
    RefSchema,
    Schema,
)
from .type_resolver import SchemaTypeResolver

# (type, format) -> base type name understood by the mapping table
_FORMAT_TYPES: dict[tuple[str, str], str] = {
    ("string", "date"): "date",
    ("string", "date-time"): "DateTime",
    ("string", "uuid"): "UUID",
    ("string", "byte"): "ByteArray",
    ("integer", "int32"): "integer",
    ("integer", "int64"): "long",
    ("number", "float"): "float",
    ("number", "double"): "double",
}


def resolve_ref(spec: dict[str, Any], ref: str) -> dict[str, Any]:
    """Resolve a $ref pointer in the spec."""
    parts = ref.lstrip("#/").split("/")
    node = spec
    for part in parts:
        node = node[part]
    return node


def ref_name(ref: str) -> str:
    """Schema name of a ``#/components/schemas/<name>`` pointer."""
    return ref.rsplit("/", 1)[-1]


def parse_schema(schema: dict[str, Any] | None) -> Schema:
    """Convert an OpenAPI schema mapping to a schema node.

    Inline objects are expected to have been hoisted into named models
    upstream; any left here resolve as free-form objects.
    """
    if not schema:
        return ObjectSchema()

    if "$ref" in schema:
        return RefSchema(ref_name(schema["$ref"]))

    if "allOf" in schema:
        members = schema["allOf"]
        if len(members) == 1 and "$ref" in members[0]:
            return RefSchema(ref_name(members[0]["$ref"]))
        return ObjectSchema(schema.get("description"))

    for key in ("oneOf", "anyOf"):
        if key in schema:
            for sub in schema[key]:
                node = parse_schema(sub)
                if not isinstance(node, ObjectSchema):
                    return node
            return ObjectSchema(schema.get("description"))

    schema_type = schema.get("type")
    schema_format = schema.get("format")

    if schema_type == "array":
        return ArraySchema(parse_schema(schema.get("items")))
    if schema_type == "file" or (schema_type == "string" and schema_format == "binary"):
        return BinarySchema(schema_type)

    if "additionalProperties" in schema and schema["additionalProperties"] is not False:
        additional = schema["additionalProperties"]
        properties = {
            name: parse_schema(prop) for name, prop in schema.get("properties", {}).items()
        }
        if isinstance(additional, dict):
            return MapSchema(value_schema=parse_schema(additional), properties=properties)
        return MapSchema(allows_any=True, properties=properties)

    if schema_type == "object" or schema_type is None:
        return ObjectSchema(schema.get("description"))

    if (schema_type, schema_format) in _FORMAT_TYPES:
        return PrimitiveSchema(_FORMAT_TYPES[(schema_type, schema_format)])
    return PrimitiveSchema(schema_type)


def parse_parameters(
    spec: dict[str, Any],
    operation: dict[str, Any],
    resolver: SchemaTypeResolver,
    naming: TypeScriptNaming,
) -> list[Parameter]:
    """Parse the declared parameters of an operation, in declaration order."""
    params: list[Parameter] = []
    for param in operation.get("parameters", []):
        if "$ref" in param:
            param = resolve_ref(spec, param["$ref"])
        node = parse_schema(param.get("schema"))
        params.append(Parameter(
            raw_name=param["name"],
            encoded_name=naming.to_var_name(param["name"]),
            data_type=resolver.resolve(node),
            location=param.get("in", "query"),
            required=param.get("required", False),
        ))
    return params


def _content_schemas(container: dict[str, Any]) -> list[Schema]:
    return [
        parse_schema(media.get("schema"))
        for media in container.get("content", {}).values()
        if media.get("schema")
    ]


def parse_operation(
    spec: dict[str, Any],
    method: str,
    path: str,
    operation: dict[str, Any],
    resolver: SchemaTypeResolver,
    naming: TypeScriptNaming,
) -> Operation:
    """Build the initial metadata of one operation."""
    params = parse_parameters(spec, operation, resolver, naming)

    declared = [
        resolve_ref(spec, p["$ref"]) if "$ref" in p else p
        for p in operation.get("parameters", [])
    ]
    schemas: list[Schema] = [parse_schema(p.get("schema")) for p in declared]
    schemas.extend(_content_schemas(operation.get("requestBody", {})))

    responses = operation.get("responses", {})
    success = responses.get("200", responses.get("201", {}))
    response_schemas = _content_schemas(success)
    schemas.extend(response_schemas)

    imports: list[str] = []
    for node in schemas:
        for name in resolver.referenced_models(node):
            if name not in imports:
                imports.append(name)

    return Operation(
        http_method=method.upper(),
        path=path,
        operation_id=operation.get("operationId") or build_operation_id(method, path),
        parameters=params,
        imports=imports,
        return_type=resolver.resolve(response_schemas[0]) if response_schemas else None,
        raw_path=path,
    )


def _model_dependencies(schema: dict[str, Any], node: Schema) -> list[Schema]:
    """Nodes whose references a model depends on.

    Array and alias models depend on their own node; object models on their
    properties; composed models on every allOf member and its properties.
    """
    if isinstance(node, (RefSchema, ArraySchema)):
        return [node]
    children = [parse_schema(prop) for prop in schema.get("properties", {}).values()]
    for member in schema.get("allOf", []):
        if "$ref" in member:
            children.append(RefSchema(ref_name(member["$ref"])))
        else:
            children.extend(_model_dependencies(member, parse_schema(member)))
    return children


def parse_model(
    name: str,
    schema: dict[str, Any],
    resolver: SchemaTypeResolver,
    naming: TypeScriptNaming,
) -> Model:
    """Build the initial metadata of one named component schema."""
    node = parse_schema(schema)
    children = _model_dependencies(schema, node)

    imports: list[str] = []
    for child in children:
        for ref in resolver.referenced_models(child):
            if ref not in imports:
                imports.append(ref)

    return Model(
        name=name,
        classname=naming.to_model_name(name),
        schema=node,
        imports=imports,
        vendor_extensions={k: v for k, v in schema.items() if k.startswith("x-")},
    )
