"""
Sanitizing of extraction-service output.

Every enum field is checked against its allow-set and replaced by the
documented default when invalid (priority Must, status Planned, effort M).
Text is trimmed and clamped, lists are clamped in count and per-item
length. Entries without a name are dropped. Nothing here raises.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from ..config import config
from ..models.nodes import (
    FeatureEffort,
    FeatureNodeData,
    FeaturePriority,
    FeatureStatus,
    ScreenNodeData,
)

MAX_LIST_ITEM_LENGTH = 200

FEATURE_LIST_LIMITS = {
    'acceptance_criteria': 8,
    'dependencies': 8,
}
SCREEN_LIST_LIMITS = {
    'key_elements': 12,
    'user_actions': 10,
    'states': 8,
    'data_sources': 8,
}
FEATURE_TEXT_FIELDS = ('feature_name', 'summary', 'problem', 'user_story', 'risks', 'metrics', 'notes')
SCREEN_TEXT_FIELDS = ('screen_name', 'purpose', 'navigation', 'wireframe_url', 'notes')


def clamp_text(value: Any, max_length: int) -> str:
    if not isinstance(value, str):
        return ''
    return value.strip()[:max_length]


def clamp_list(value: Any, max_items: int, max_item_length: int = MAX_LIST_ITEM_LENGTH) -> list[str]:
    if not isinstance(value, (list, tuple)):
        return []
    items = [clamp_text(v, max_item_length) for v in value if isinstance(v, str) and v]
    return [item for item in items if item][:max_items]


def sanitize_priority(value: Any) -> FeaturePriority:
    try:
        return FeaturePriority(value)
    except ValueError:
        return FeaturePriority.MUST


def sanitize_status(value: Any) -> FeatureStatus:
    try:
        return FeatureStatus(value)
    except ValueError:
        return FeatureStatus.PLANNED


def sanitize_effort(value: Any) -> FeatureEffort:
    try:
        return FeatureEffort(value)
    except ValueError:
        return FeatureEffort.M


def _as_mapping(raw: Mapping[str, Any] | BaseModel) -> Mapping[str, Any]:
    return raw.model_dump() if isinstance(raw, BaseModel) else raw


def sanitize_feature_details(
    raw: Mapping[str, Any] | BaseModel,
    max_field_length: int | None = None,
) -> FeatureNodeData | None:
    """
    Coerce one raw feature entry into FeatureNodeData.

    Returns:
        The sanitized record, or None when the entry has no name
    """
    limit = max_field_length or config.MAX_TEXT_FIELD
    values = _as_mapping(raw)

    fields: dict[str, Any] = {name: clamp_text(values.get(name), limit) for name in FEATURE_TEXT_FIELDS}
    if not fields['feature_name']:
        return None
    for name, max_items in FEATURE_LIST_LIMITS.items():
        fields[name] = clamp_list(values.get(name), max_items)

    return FeatureNodeData(
        **fields,
        priority=sanitize_priority(values.get('priority')),
        status=sanitize_status(values.get('status')),
        effort=sanitize_effort(values.get('effort')),
    )


def sanitize_screen_details(
    raw: Mapping[str, Any] | BaseModel,
    max_field_length: int | None = None,
) -> ScreenNodeData | None:
    """Coerce one raw screen entry into ScreenNodeData; None when unnamed."""
    limit = max_field_length or config.MAX_TEXT_FIELD
    values = _as_mapping(raw)

    fields: dict[str, Any] = {name: clamp_text(values.get(name), limit) for name in SCREEN_TEXT_FIELDS}
    if not fields['screen_name']:
        return None
    for name, max_items in SCREEN_LIST_LIMITS.items():
        fields[name] = clamp_list(values.get(name), max_items)

    return ScreenNodeData(**fields)


def sanitize_features(
    raw_items: list[Mapping[str, Any] | BaseModel],
    max_field_length: int | None = None,
) -> list[FeatureNodeData]:
    sanitized = (sanitize_feature_details(item, max_field_length) for item in raw_items)
    return [item for item in sanitized if item is not None]


def sanitize_screens(
    raw_items: list[Mapping[str, Any] | BaseModel],
    max_field_length: int | None = None,
) -> list[ScreenNodeData]:
    sanitized = (sanitize_screen_details(item, max_field_length) for item in raw_items)
    return [item for item in sanitized if item is not None]
