"""Schema flattening shared by both dialect extractors.

Converts a JSON-schema node into a list of canonical ``Field`` objects.
Nesting is bounded by ``MAX_DEPTH`` so self-referential schemas terminate.
"""

from .base import Field, FieldType
from .common import describe_error, is_reference, plain_value, to_title_case

MAX_DEPTH = 2

_TYPE_MAP: dict[str, FieldType] = {
    "string": "string",
    "number": "number",
    "integer": "number",
    "boolean": "boolean",
    "array": "array",
    "object": "object",
}


def map_type(schema_type) -> FieldType:
    """Map a declared schema type onto one of the five canonical field types."""
    if not isinstance(schema_type, str):
        return "string"
    return _TYPE_MAP.get(schema_type, "string")


def flatten(schema, warnings: list[str], depth: int = 0) -> list[Field]:
    """Flatten ``schema`` into fields, appending any failure to ``warnings``.

    Object properties that are themselves objects recurse with ``depth + 1``;
    a top-level array schema is flattened through its items at the same depth.
    Once ``depth`` reaches ``MAX_DEPTH`` the result is empty.
    """
    if depth >= MAX_DEPTH:
        return []

    try:
        if schema.get("type") == "object" and schema.get("properties"):
            required = schema.get("required") or []
            fields = []
            for key, prop in schema["properties"].items():
                if is_reference(prop):
                    continue
                fields.append(_property_to_field(key, prop, key in required, warnings, depth))
            return fields

        items = schema.get("items")
        if schema.get("type") == "array" and items and not is_reference(items):
            return flatten(items, warnings, depth)

        return []
    except Exception as e:
        warnings.append(f"Failed to convert schema: {describe_error(e)}")
        return []


def _property_to_field(key: str, prop, required: bool, warnings: list[str], depth: int) -> Field:
    properties = None
    if prop.get("type") == "object" and prop.get("properties"):
        properties = flatten(prop, warnings, depth + 1)

    items = None
    item_schema = prop.get("items")
    if prop.get("type") == "array" and item_schema and not is_reference(item_schema):
        items = _item_field(item_schema, warnings, depth)

    return Field(
        key=key,
        label=to_title_case(key),
        type=map_type(prop.get("type")),
        required=required,
        description=prop.get("description"),
        enum=_as_list(prop.get("enum")),
        format=prop.get("format"),
        default=plain_value(prop.get("default")),
        example=plain_value(prop.get("example")),
        properties=properties,
        items=items,
    )


def _item_field(item_schema, warnings: list[str], depth: int) -> Field:
    properties = None
    if item_schema.get("type") == "object" and item_schema.get("properties"):
        properties = flatten(item_schema, warnings, depth + 1)

    return Field(
        key="item",
        label="Item",
        type=map_type(item_schema.get("type")),
        required=False,
        description=item_schema.get("description"),
        enum=_as_list(item_schema.get("enum")),
        format=item_schema.get("format"),
        properties=properties,
    )


def _as_list(value) -> list | None:
    return plain_value(list(value)) if value is not None else None
