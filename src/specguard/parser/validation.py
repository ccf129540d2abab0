"""Structural validation and internal reference resolution.

The normalizer only depends on the two-method ``SpecValidator`` protocol, so
any validator with the same shape can be passed in instead of the default.
"""

import copy
from typing import Protocol

import jsonref
from openapi_spec_validator import validate as validate_spec

from specguard.errors import RemoteReferenceError


class SpecValidator(Protocol):
    def validate(self, document: dict) -> dict:
        """Strictly validate ``document``; return a copy with internal refs resolved."""
        ...

    def parse(self, document: dict) -> dict:
        """Return a copy of ``document`` without validating or resolving refs."""
        ...


def refuse_remote(uri: str):
    raise RemoteReferenceError(uri)


def check_local_refs(node) -> None:
    """Raise RemoteReferenceError for the first ``$ref`` that leaves the document."""
    if isinstance(node, dict):
        ref = node.get("$ref")
        if isinstance(ref, str) and not ref.startswith("#"):
            raise RemoteReferenceError(ref)
        for value in node.values():
            check_local_refs(value)
    elif isinstance(node, list):
        for item in node:
            check_local_refs(item)


class OpenApiSpecValidator:
    """Validates with openapi-spec-validator and resolves ``$ref`` with jsonref.

    References are replaced by lazy proxies, so recursive schemas are fine as
    long as the consumer bounds its own traversal.

    Remote references are refused before the validator runs, so nothing is
    fetched over the network.
    """

    def validate(self, document: dict) -> dict:
        doc = copy.deepcopy(document)
        check_local_refs(doc)
        validate_spec(doc)
        return jsonref.replace_refs(doc, loader=refuse_remote)

    def parse(self, document: dict) -> dict:
        if not isinstance(document, dict):
            raise TypeError(f"Expected a mapping, got {type(document).__name__}")
        return copy.deepcopy(document)
