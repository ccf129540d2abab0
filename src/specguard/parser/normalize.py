"""Normalize an API description document into a CanonicalAPI.

Validates the document, detects its dialect, and dispatches to the matching
extractor. Every outcome is returned as a ParseSuccess or ParseFailure; no
exception escapes ``normalize``.
"""

import logging
from typing import Callable

from referencing.exceptions import Unresolvable

from specguard.errors import InvalidSpecError, RemoteReferenceError, UnsupportedVersionError

from . import openapi3, swagger2
from .base import CanonicalAPI, ParseFailure, ParseResult, ParseSuccess
from .common import describe_error
from .detect import OPENAPI3, SWAGGER2, detect_dialect
from .validation import OpenApiSpecValidator, SpecValidator

logger = logging.getLogger(__name__)

Extractor = Callable[[dict, list[str]], CanonicalAPI]

EXTRACTORS: dict[str, Extractor] = {
    OPENAPI3: openapi3.extract,
    SWAGGER2: swagger2.extract,
}

UNRESOLVED_REF_MARKERS = ("Missing $ref pointer", "does not exist", "Unresolvable")


def normalize(document, validator: SpecValidator | None = None) -> ParseResult:
    """Validate ``document`` and convert it into the canonical model."""
    validator = validator or OpenApiSpecValidator()
    try:
        warnings: list[str] = []
        validated = _validate(document, validator, warnings)

        dialect = detect_dialect(validated)
        if dialect is None:
            raise UnsupportedVersionError("Only OpenAPI 3.x and Swagger 2.0 are supported")

        logger.debug("Detected %s document", dialect)
        api = EXTRACTORS[dialect](validated, warnings)
        return ParseSuccess(api=api)
    except InvalidSpecError as e:
        return ParseFailure(
            error="Invalid OpenAPI/Swagger specification",
            details=e.details,
            reason="invalid-spec",
        )
    except UnsupportedVersionError as e:
        return ParseFailure(
            error="Unsupported specification version",
            details=str(e),
            reason="unsupported-version",
        )
    except Exception as e:
        logger.exception("Unexpected failure while normalizing document")
        return ParseFailure(error="Failed to parse specification", details=describe_error(e))


def is_unresolved_reference(error: Exception) -> bool:
    """True when a validation error is only about a ``$ref`` that cannot be resolved."""
    if isinstance(error, (Unresolvable, RemoteReferenceError)):
        return True
    message = str(error)
    return any(marker in message for marker in UNRESOLVED_REF_MARKERS)


def _validate(document, validator: SpecValidator, warnings: list[str]) -> dict:
    try:
        return validator.validate(document)
    except Exception as e:
        message = describe_error(e)
        if not is_unresolved_reference(e):
            raise InvalidSpecError(message) from e

    logger.debug("Unresolved references, retrying without resolution: %s", message)
    warnings.append(f"Unresolved references: {message}")
    try:
        return validator.parse(document)
    except Exception as e:
        raise InvalidSpecError(message) from e
