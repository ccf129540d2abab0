"""Display-ready summary of a normalized API."""

from specguard.parser.base import CanonicalAPI, CanonicalModel


class ValidationSummary(CanonicalModel):
    title: str
    version: str
    base_url: str
    auth_type: str
    endpoint_count: int
    endpoints_by_method: dict[str, int]
    tags: list[str]
    errors: list[str]
    warnings: list[str]
    deprecated: int


def build_summary(api: CanonicalAPI, errors: list[str] | None = None) -> ValidationSummary:
    """Count actions per method, collect sorted tags, and count deprecated actions."""
    by_method: dict[str, int] = {}
    tags: set[str] = set()
    deprecated = 0

    for action in api.actions:
        by_method[action.method] = by_method.get(action.method, 0) + 1
        tags.update(action.tags or [])
        if action.deprecated:
            deprecated += 1

    return ValidationSummary(
        title=api.name,
        version=api.version or "unknown",
        base_url=api.base_url,
        auth_type=api.auth.type,
        endpoint_count=len(api.actions),
        endpoints_by_method=by_method,
        tags=sorted(tags),
        errors=list(errors or []),
        warnings=list(api.warnings),
        deprecated=deprecated,
    )
