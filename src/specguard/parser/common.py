"""Helpers shared by the OpenAPI 3 and Swagger 2 extractors."""

import re

import jsonref

HTTP_METHODS = ("get", "post", "put", "patch", "delete")
SUCCESS_CODES = ("200", "201", "2XX")


def slugify(text: str) -> str:
    """``List All Pets`` / ``get-/pets/{petId}`` -> ``list-all-pets`` / ``get-pets-petid``."""
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")


def to_title_case(text: str) -> str:
    """``pet-id`` / ``pet_id`` -> ``Pet Id``."""
    return re.sub(r"\b\w", lambda m: m.group().upper(), re.sub(r"[-_]", " ", text))


def is_reference(node) -> bool:
    """True for a ``$ref`` object left in place by a reference-tolerant parse."""
    return node is not None and "$ref" in node


def describe_error(error: Exception) -> str:
    return str(error) or type(error).__name__


def success_schema(responses, schema_of):
    """Schema of the first 200 / 201 / 2XX response that declares one.

    Status keys are compared as strings. ``schema_of`` pulls the schema out of
    a response object in the dialect's own layout.
    """
    by_code = {str(code): response for code, response in (responses or {}).items()}
    for code in SUCCESS_CODES:
        response = by_code.get(code)
        if not response or is_reference(response):
            continue
        schema = schema_of(response)
        if schema:
            return schema
    return None


def plain_value(value):
    """Copy a literal (default, example, enum member) with ``$ref`` proxies put back as written."""
    if isinstance(value, jsonref.JsonRef):
        return plain_value(value.__reference__)
    if isinstance(value, dict):
        return {key: plain_value(item) for key, item in value.items()}
    if isinstance(value, list):
        return [plain_value(item) for item in value]
    return value
