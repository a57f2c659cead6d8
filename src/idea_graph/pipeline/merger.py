"""
Merge strategy: fill-only-if-empty field updates for matched nodes.

Given the populated-field set of one matched existing node and a bag of
freshly extracted values, decide which fields to fill:
- protected fields (UI flags, version counters, tags, hour estimates) are
  never touched
- primary name fields are never touched
- fields the node already has are never overwritten
- empty candidate values are never staged
"""

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel

from ..logging import get_logger
from ..models.merge import FieldUpdate
from ..models.nodes import NodeType

logger = get_logger(__name__)


PROTECTED_FIELDS = frozenset({
    'expanded',
    'completed',
    'version',
    'tags',
    'estimated_hours',
})

PRIMARY_NAME_FIELDS = frozenset({
    'feature_name',
    'screen_name',
    'app_name',
    'tool_name',
})


def is_empty(value: Any) -> bool:
    """
    True for an empty string, None, or an empty list/tuple/set/dict.

    Zero and False are values, not emptiness.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return value == ''
    if isinstance(value, (list, tuple, set, frozenset, dict)):
        return len(value) == 0
    return False


def populated_fields(data: Mapping[str, Any] | BaseModel) -> list[str]:
    """Keys of ``data`` whose value is not empty, in declaration order."""
    values = data.model_dump() if isinstance(data, BaseModel) else data
    return [key for key, value in values.items() if not is_empty(value)]


def build_field_update(
    entity_id: str,
    node_type: NodeType,
    populated: Iterable[str],
    candidate_data: Mapping[str, Any],
) -> FieldUpdate | None:
    """
    Compute the minimal set of fields to fill on one existing node.

    Args:
        entity_id: Id of the matched existing node
        node_type: Its node type
        populated: Field names already holding a value on that node
        candidate_data: Freshly extracted field values

    Returns:
        A FieldUpdate, or None when there is nothing to fill
    """
    already = set(populated)
    fields_to_fill: dict[str, Any] = {}

    for key, value in candidate_data.items():
        if key in PROTECTED_FIELDS or key in PRIMARY_NAME_FIELDS:
            continue
        if key in already:
            continue
        if is_empty(value):
            continue
        fields_to_fill[key] = value

    if not fields_to_fill:
        return None

    logger.debug(
        'merger.field_update_built',
        entity_id=entity_id,
        fields=sorted(fields_to_fill),
    )
    return FieldUpdate(entity_id=entity_id, type=node_type, fields_to_fill=fields_to_fill)
