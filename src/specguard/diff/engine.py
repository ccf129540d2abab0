"""Classify the differences between two versions of an API.

Actions are matched on ``"METHOD path"``. Changes are emitted in a fixed
order: removed endpoints, added endpoints, then per-endpoint parameter,
body, response, and description changes. Body and response comparison only
looks at top-level field keys.
"""

import logging
from typing import Iterable

from specguard.parser.base import Action, Field

from .base import Change, ChangeCategory, ChangeType, DiffResult

logger = logging.getLogger(__name__)

BREAKING = ChangeType.BREAKING
NON_BREAKING = ChangeType.NON_BREAKING


def diff_actions(old_actions: Iterable[Action] | None, new_actions: Iterable[Action] | None) -> DiffResult:
    """Compare two action lists and classify every change as breaking or not."""
    old_map = {action.key: action for action in old_actions or []}
    new_map = {action.key: action for action in new_actions or []}
    changes: list[Change] = []

    for key, old in old_map.items():
        if key not in new_map:
            changes.append(
                _change(BREAKING, ChangeCategory.ENDPOINT_REMOVED, f"Endpoint removed: {key}", old)
            )

    for key, new in new_map.items():
        if key not in old_map:
            changes.append(
                _change(NON_BREAKING, ChangeCategory.ENDPOINT_ADDED, f"Endpoint added: {key}", new)
            )

    for key, new in new_map.items():
        old = old_map.get(key)
        if old is not None:
            changes.extend(compare_actions(old, new))

    breaking = sum(1 for c in changes if c.type == BREAKING)
    logger.info("Diff found %d breaking and %d non-breaking changes", breaking, len(changes) - breaking)
    return DiffResult(
        changes=changes,
        breaking_count=breaking,
        non_breaking_count=len(changes) - breaking,
    )


def compare_actions(old: Action, new: Action) -> list[Change]:
    """Changes between two versions of the same endpoint."""
    where = f"{new.method} {new.path}"
    changes: list[Change] = []

    def emit(change_type: ChangeType, category: ChangeCategory, message: str) -> None:
        changes.append(_change(change_type, category, message, new))

    old_params = _params(old)
    new_params = _params(new)
    old_required = {p.key for p in old_params if p.required}
    old_keys = {p.key for p in old_params}
    new_keys = {p.key for p in new_params}

    # A parameter that was optional and is now required lands here too.
    for param in new_params:
        if param.required and param.key not in old_required:
            emit(
                BREAKING,
                ChangeCategory.REQUIRED_PARAM_ADDED,
                f'Required parameter added: "{param.key}" on {where}',
            )

    for param in new_params:
        if not param.required and param.key not in old_keys:
            emit(
                NON_BREAKING,
                ChangeCategory.OPTIONAL_PARAM_ADDED,
                f'Optional parameter added: "{param.key}" on {where}',
            )

    for key in dict.fromkeys(p.key for p in old_params):
        if key not in new_keys:
            emit(BREAKING, ChangeCategory.PARAM_REMOVED, f'Parameter removed: "{key}" from {where}')

    old_by_key = {p.key: p for p in old_params}
    for param in new_params:
        previous = old_by_key.get(param.key)
        if previous is not None and previous.type != param.type:
            emit(
                BREAKING,
                ChangeCategory.PARAM_TYPE_CHANGED,
                f'Parameter type changed: "{param.key}" {previous.type} -> {param.type} on {where}',
            )

    old_body_keys = {f.key for f in old.body_schema or []}
    for field in new.body_schema or []:
        if field.required and field.key not in old_body_keys:
            emit(
                BREAKING,
                ChangeCategory.REQUIRED_BODY_FIELD_ADDED,
                f'Required body field added: "{field.key}" on {where}',
            )

    new_response_keys = {f.key for f in new.response_schema or []}
    for field in old.response_schema or []:
        if field.key not in new_response_keys:
            emit(
                BREAKING,
                ChangeCategory.RESPONSE_FIELD_REMOVED,
                f'Response field removed: "{field.key}" from {where}',
            )

    if old.description and new.description and old.description != new.description:
        emit(NON_BREAKING, ChangeCategory.DESCRIPTION_CHANGED, f"Description changed on {where}")

    return changes


def _params(action: Action) -> list[Field]:
    return [*(action.query_params or []), *(action.path_params or [])]


def _change(change_type: ChangeType, category: ChangeCategory, message: str, action: Action) -> Change:
    return Change(
        type=change_type,
        category=category,
        message=message,
        method=action.method,
        path=action.path,
    )
