"""Swagger 2.0 extractor.

Turns a validated Swagger 2.0 document into a CanonicalAPI. Basic auth has no
variant of its own and is reported as bearer with scheme ``basic``.
"""

import logging

from .base import (
    Action,
    ApiKeyAuth,
    AuthDescriptor,
    BearerAuth,
    CanonicalAPI,
    Contact,
    Field,
    NoAuth,
    OAuth2Auth,
)
from .common import (
    HTTP_METHODS,
    describe_error,
    is_reference,
    plain_value,
    slugify,
    success_schema,
    to_title_case,
)
from .flatten import flatten, map_type

logger = logging.getLogger(__name__)

DEFAULT_SCHEME = "https"
DEFAULT_HOST = "api.example.com"


def extract(doc: dict, warnings: list[str]) -> CanonicalAPI:
    """Build the canonical model for a Swagger 2.0 document."""
    info = doc.get("info") or {}
    schemes = doc.get("schemes") or []
    scheme = schemes[0] if schemes else DEFAULT_SCHEME
    base_url = f"{scheme}://{doc.get('host') or DEFAULT_HOST}{doc.get('basePath') or ''}"

    auth = extract_auth(doc.get("securityDefinitions"))
    actions = extract_actions(doc.get("paths") or {}, warnings)
    logger.debug("Extracted %d actions from Swagger 2.0 document", len(actions))

    contact = info.get("contact")
    return CanonicalAPI(
        name=info.get("title") or "Untitled API",
        description=info.get("description") or "",
        version=str(info["version"]) if info.get("version") is not None else None,
        base_url=base_url,
        auth=auth,
        actions=actions,
        warnings=warnings,
        provider=(contact or {}).get("name"),
        terms_of_service=info.get("termsOfService"),
        contact=Contact(**{k: contact.get(k) for k in ("name", "email", "url")}) if contact else None,
    )


def extract_auth(definitions: dict | None) -> AuthDescriptor:
    """Pick one security definition: apiKey, then basic, then oauth2."""
    if not definitions:
        return NoAuth()

    entries = list(definitions.values())
    api_key = next((d for d in entries if d.get("type") == "apiKey"), None)
    basic = next((d for d in entries if d.get("type") == "basic"), None)
    oauth2 = next((d for d in entries if d.get("type") == "oauth2"), None)

    if api_key and api_key.get("name") and api_key.get("in") in ("header", "query"):
        return ApiKeyAuth(name=api_key["name"], location=api_key["in"])

    if basic:
        return BearerAuth(scheme="basic")

    if oauth2:
        return OAuth2Auth(
            authorization_url=oauth2.get("authorizationUrl") or "",
            token_url=oauth2.get("tokenUrl") or "",
            scopes=dict(oauth2.get("scopes") or {}),
        )

    return NoAuth()


def extract_actions(paths: dict, warnings: list[str]) -> list[Action]:
    actions = []
    for path, path_item in paths.items():
        if not path_item:
            continue
        for method in HTTP_METHODS:
            operation = path_item.get(method)
            if not operation:
                continue
            action = _create_action(path, method, operation, warnings)
            if action:
                actions.append(action)
    return actions


def _create_action(path: str, method: str, op: dict, warnings: list[str]) -> Action | None:
    try:
        slug = slugify(op.get("operationId") or f"{method}-{path}")
        path_params: list[Field] = []
        query_params: list[Field] = []
        body_schema: list[Field] = []

        for param in op.get("parameters") or []:
            if is_reference(param) or "in" not in param:
                continue
            if param["in"] == "body":
                if param.get("schema"):
                    body_schema = flatten(param["schema"], warnings, 0)
                continue

            field = _param_to_field(param)
            if field is None:
                continue
            if param["in"] == "path":
                path_params.append(field)
            elif param["in"] == "query":
                query_params.append(field)

        return Action(
            slug=slug,
            label=op.get("summary") or to_title_case(slug),
            description=op.get("description") or op.get("summary") or "",
            method=method.upper(),
            path=path,
            path_params=path_params,
            query_params=query_params,
            body_schema=body_schema,
            response_schema=_extract_response(op.get("responses"), warnings),
            tags=op.get("tags"),
            deprecated=op.get("deprecated"),
        )
    except Exception as e:
        message = f"Failed to parse {method.upper()} {path}: {describe_error(e)}"
        logger.debug(message)
        warnings.append(message)
        return None


def _param_to_field(param: dict) -> Field | None:
    # Non-body parameters declare their type inline.
    if "schema" in param:
        return None

    enum = param.get("enum")
    return Field(
        key=param["name"],
        label=to_title_case(param["name"]),
        type=map_type(param.get("type")),
        required=bool(param.get("required", False)),
        description=param.get("description"),
        enum=plain_value(list(enum)) if enum is not None else None,
        format=param.get("format"),
        default=plain_value(param.get("default")),
    )


def _extract_response(responses: dict | None, warnings: list[str]) -> list[Field]:
    try:
        schema = success_schema(responses, lambda response: response.get("schema"))
        return flatten(schema, warnings, 0) if schema else []
    except Exception as e:
        warnings.append(f"Failed to extract response schema: {describe_error(e)}")
        return []
