"""Auto-detect the API description dialect of a deserialized document."""

OPENAPI3 = "openapi3"
SWAGGER2 = "swagger2"


def detect_dialect(document) -> str | None:
    """Detect the API description dialect from its version marker.

    Returns: 'openapi3', 'swagger2', or None when neither marker is present.
    """
    if not isinstance(document, dict):
        return None

    openapi = document.get("openapi")
    if isinstance(openapi, str) and openapi.startswith("3."):
        return OPENAPI3
    if document.get("swagger") == "2.0":
        return SWAGGER2
    return None
