"""OpenAPI 3.x extractor.

Turns a validated OpenAPI 3.x document into a CanonicalAPI.
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

DEFAULT_BASE_URL = "https://api.example.com"

BODY_CONTENT_TYPES = ("application/json", "application/x-www-form-urlencoded")

OAUTH2_FLOWS = ("authorizationCode", "implicit", "password", "clientCredentials")


def extract(doc: dict, warnings: list[str]) -> CanonicalAPI:
    """Build the canonical model for an OpenAPI 3.x document."""
    info = doc.get("info") or {}
    servers = doc.get("servers") or []
    base_url = servers[0].get("url") if servers else DEFAULT_BASE_URL

    components = doc.get("components") or {}
    auth = extract_auth(components.get("securitySchemes"))
    actions = extract_actions(doc.get("paths") or {}, warnings)
    logger.debug("Extracted %d actions from OpenAPI %s document", len(actions), doc.get("openapi"))

    return CanonicalAPI(
        name=info.get("title") or "Untitled API",
        description=info.get("description") or "",
        version=_as_str(info.get("version")),
        base_url=base_url or DEFAULT_BASE_URL,
        auth=auth,
        actions=actions,
        warnings=warnings,
        provider=(info.get("contact") or {}).get("name"),
        terms_of_service=info.get("termsOfService"),
        contact=_contact(info.get("contact")),
    )


def extract_auth(schemes: dict | None) -> AuthDescriptor:
    """Pick one security scheme: apiKey, then http bearer, then oauth2."""
    if not schemes:
        return NoAuth()

    entries = [s for s in schemes.values() if s and not is_reference(s)]
    api_key = next((s for s in entries if s.get("type") == "apiKey"), None)
    bearer = next(
        (s for s in entries if s.get("type") == "http" and s.get("scheme") == "bearer"), None
    )
    oauth2 = next((s for s in entries if s.get("type") == "oauth2"), None)

    if api_key and api_key.get("name") and api_key.get("in") in ("header", "query"):
        return ApiKeyAuth(name=api_key["name"], location=api_key["in"])

    if bearer:
        return BearerAuth(scheme=bearer.get("scheme") or "bearer")

    if oauth2:
        flows = oauth2.get("flows") or {}
        flow_list = [flows.get(name) or {} for name in OAUTH2_FLOWS]
        return OAuth2Auth(
            authorization_url=_first(flow_list, "authorizationUrl", ""),
            token_url=_first(flow_list, "tokenUrl", ""),
            scopes=dict(_first(flow_list, "scopes", {})),
        )

    return NoAuth()


def extract_actions(paths: dict, warnings: list[str]) -> list[Action]:
    actions = []
    for path, path_item in paths.items():
        if not path_item:
            continue
        for method in HTTP_METHODS:
            operation = path_item.get(method)
            if operation:
                action = _create_action(path, method, operation, warnings)
                if action:
                    actions.append(action)
    return actions


def _create_action(path: str, method: str, op: dict, warnings: list[str]) -> Action | None:
    try:
        slug = slugify(op.get("operationId") or f"{method}-{path}")
        path_params: list[Field] = []
        query_params: list[Field] = []

        for param in op.get("parameters") or []:
            if is_reference(param):
                continue
            field = _param_to_field(param)
            if field is None:
                continue
            if param.get("in") == "path":
                path_params.append(field)
            elif param.get("in") == "query":
                query_params.append(field)

        return Action(
            slug=slug,
            label=op.get("summary") or to_title_case(slug),
            description=op.get("description") or op.get("summary") or "",
            method=method.upper(),
            path=path,
            path_params=path_params,
            query_params=query_params,
            body_schema=_extract_body(op.get("requestBody"), warnings),
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
    schema = param.get("schema")
    if not schema:
        return None

    enum = schema.get("enum")
    return Field(
        key=param["name"],
        label=to_title_case(param["name"]),
        type=map_type(schema.get("type")),
        required=bool(param.get("required", False)),
        description=param.get("description"),
        enum=plain_value(list(enum)) if enum is not None else None,
        format=schema.get("format"),
        default=plain_value(schema.get("default")),
        example=plain_value(param.get("example") or schema.get("example")),
    )


def _extract_body(request_body: dict | None, warnings: list[str]) -> list[Field]:
    if not request_body or is_reference(request_body):
        return []

    try:
        content = request_body.get("content") or {}
        media = next((content[ct] for ct in BODY_CONTENT_TYPES if content.get(ct)), None)
        if not media or not media.get("schema"):
            return []
        return flatten(media["schema"], warnings, 0)
    except Exception as e:
        warnings.append(f"Failed to extract request body: {describe_error(e)}")
        return []


def _extract_response(responses: dict | None, warnings: list[str]) -> list[Field]:
    try:
        schema = success_schema(responses, _json_schema)
        return flatten(schema, warnings, 0) if schema else []
    except Exception as e:
        warnings.append(f"Failed to extract response schema: {describe_error(e)}")
        return []


def _json_schema(response: dict):
    media = (response.get("content") or {}).get("application/json")
    return media.get("schema") if media else None


def _first(flows: list[dict], key: str, default):
    for flow in flows:
        if flow.get(key):
            return flow[key]
    return default


def _contact(contact: dict | None) -> Contact | None:
    if not contact:
        return None
    return Contact(name=contact.get("name"), email=contact.get("email"), url=contact.get("url"))


def _as_str(value) -> str | None:
    return str(value) if value is not None else None
