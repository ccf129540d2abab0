"""Models for classified differences between two canonical action lists."""

from enum import Enum

from specguard.parser.base import CanonicalModel


class ChangeType(str, Enum):
    BREAKING = "breaking"
    NON_BREAKING = "non-breaking"


class ChangeCategory(str, Enum):
    ENDPOINT_REMOVED = "endpoint-removed"
    ENDPOINT_ADDED = "endpoint-added"
    REQUIRED_PARAM_ADDED = "required-param-added"
    OPTIONAL_PARAM_ADDED = "optional-param-added"
    PARAM_REMOVED = "param-removed"
    PARAM_TYPE_CHANGED = "param-type-changed"
    REQUIRED_BODY_FIELD_ADDED = "required-body-field-added"
    RESPONSE_FIELD_REMOVED = "response-field-removed"
    DESCRIPTION_CHANGED = "description-changed"


class Change(CanonicalModel):
    type: ChangeType
    category: ChangeCategory
    message: str
    method: str | None = None
    path: str | None = None

    @property
    def is_breaking(self) -> bool:
        return self.type == ChangeType.BREAKING


class DiffResult(CanonicalModel):
    changes: list[Change] = []
    breaking_count: int = 0
    non_breaking_count: int = 0

    def breaking_changes(self) -> list[Change]:
        return [c for c in self.changes if c.is_breaking]

    def filter(self, breaking_only: bool = False) -> list[Change]:
        """Changes to display; counts always describe the full result."""
        return self.breaking_changes() if breaking_only else list(self.changes)
