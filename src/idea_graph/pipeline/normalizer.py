"""
List normalizer: loosely structured text or JSON fragments -> clean item names.

Accepted shapes:
- a JSON array of strings
- a JSON array of objects (the first present key from a caller-supplied
  ordered key list names the item)
- newline/comma/semicolon separated free text, optionally bulleted
- pipe or box-drawing tables (screens only)

Metadata-looking lines (``Phase: Setup``, ``Owner: ...``) and JSON syntax
fragments are dropped. Output is always de-duplicated case-insensitively,
keeping the first-seen casing and order.
"""

import json
import re
from collections.abc import Iterable, Sequence
from typing import Any

BULLET_PREFIX = re.compile(r'^(\s*[-*•]\s+|\s*\d+[.)]\s+)')
SURROUNDING_QUOTES = re.compile(r'^["\'`]+|["\'`]+$')

METADATA_PREFIXES = (
    'phase',
    'owner',
    'plan item id',
    'plan item',
    'linked',
    'linked to',
    'metadata',
)
GARBAGE_TOKENS = frozenset({'[object object]', 'undefined', 'null', 'none'})

TABLE_DIVIDER_PATTERNS = (
    re.compile(r'^[-+\s|:]+$'),
    re.compile(r'^[┌┬┐├┼┤└┴┘─│\s]+$'),
)
TABLE_CELL_SPLIT = re.compile(r'[|│]')
SCREEN_HEADER_LABELS = frozenset({'#', 'screen'})

FEATURE_NAME_DELIMITERS = (' — ', ' - ', ': ')
MIN_COMPACT_NAME_LENGTH = 3

FEATURE_OBJECT_KEYS = ('feature_name', 'featureName', 'name', 'title', 'label')
SCREEN_OBJECT_KEYS = ('screen_name', 'screenName', 'name', 'title', 'page', 'route')


# =============================================================================
# Token helpers
# =============================================================================


def normalize_token(value: str) -> str:
    """Trim, drop a bullet/ordinal prefix and surrounding quote characters."""
    token = BULLET_PREFIX.sub('', value.strip(), count=1)
    return SURROUNDING_QUOTES.sub('', token).strip()


def is_metadata_token(value: str) -> bool:
    lowered = value.lower()
    return any(lowered.startswith(f'{prefix}:') for prefix in METADATA_PREFIXES)


def is_garbage_token(value: str) -> bool:
    """True for empty, placeholder, metadata or JSON-fragment tokens."""
    if not value:
        return True
    if value.lower() in GARBAGE_TOKENS:
        return True
    if is_metadata_token(value):
        return True
    if value[0] in '{[' or value[-1] in '}]':
        return True
    return '":' in value or "':" in value


def compact_feature_name(name: str) -> str:
    """
    Keep only the label when a line carries an inline description.

    ``"Auth — email and OAuth sign-in"`` becomes ``"Auth"``. Returns an
    empty string for metadata lines.
    """
    base = normalize_token(name)
    if not base or is_metadata_token(base):
        return ''

    for delimiter in FEATURE_NAME_DELIMITERS:
        index = base.find(delimiter)
        if index > 2:
            candidate = base[:index].strip()
            if len(candidate) >= MIN_COMPACT_NAME_LENGTH:
                return candidate

    return base


def dedupe_case_insensitive(items: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for item in items:
        key = item.lower()
        if key in seen:
            continue
        seen.add(key)
        result.append(item)
    return result


# =============================================================================
# JSON and free-text paths
# =============================================================================


def _token_from_object(item: Any, object_keys: Sequence[str]) -> str | None:
    if not isinstance(item, dict):
        return None
    for key in object_keys:
        value = item.get(key)
        if isinstance(value, str):
            token = normalize_token(value)
            if not is_garbage_token(token):
                return token
    return None


def items_from_json(raw: str, object_keys: Sequence[str]) -> list[str]:
    """
    Item names from a JSON array; empty when ``raw`` is not a JSON array.

    Object elements consult ``object_keys`` in order and use the first
    usable string value.
    """
    text = raw.strip()
    if not text:
        return []
    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError):
        return []
    if not isinstance(parsed, list):
        return []

    items: list[str] = []
    for element in parsed:
        if isinstance(element, str):
            token = normalize_token(element)
            if not is_garbage_token(token):
                items.append(token)
            continue
        token = _token_from_object(element, object_keys)
        if token:
            items.append(token)
    return items


def split_free_text(raw: str) -> list[str]:
    tokens = (normalize_token(part) for part in re.split(r'[\n,;]', raw))
    return [token for token in tokens if not is_garbage_token(token)]


def is_table_divider(line: str) -> bool:
    stripped = line.strip()
    if not stripped:
        return True
    return any(pattern.match(stripped) for pattern in TABLE_DIVIDER_PATTERNS)


def table_cells(line: str) -> list[str]:
    if '|' not in line and '│' not in line:
        return []
    return [cell.strip() for cell in TABLE_CELL_SPLIT.split(line) if cell.strip()]


def _segment_names(line: str) -> list[str]:
    names = []
    for segment in re.split(r'[;,]', line):
        token = compact_feature_name(segment)
        if token and not is_garbage_token(token):
            names.append(token)
    return names


def _feature_lines(raw: str) -> list[str]:
    items: list[str] = []
    for line in raw.split('\n'):
        if is_table_divider(line):
            continue
        items.extend(_segment_names(line))
    return items


def _screen_lines(raw: str) -> list[str]:
    items: list[str] = []
    for line in raw.split('\n'):
        if is_table_divider(line):
            continue

        cells = table_cells(line)
        if len(cells) >= 2:
            first = cells[0].lower()
            second = normalize_token(cells[1])
            if first in SCREEN_HEADER_LABELS or second.lower() == 'screen':
                continue
            if second and not is_garbage_token(second):
                items.append(second)
            continue

        items.extend(_segment_names(line))
    return items


# =============================================================================
# Public API
# =============================================================================


def normalize_item_list(raw: str, preferred_object_keys: Sequence[str]) -> list[str]:
    """
    Normalize a raw field into clean, de-duplicated item names.

    Falls back to free-text splitting when the JSON path yields nothing.
    """
    if not raw or not raw.strip():
        return []
    items = items_from_json(raw, preferred_object_keys) or split_free_text(raw)
    return dedupe_case_insensitive(items)


def normalize_feature_list(raw: str) -> list[str]:
    """Feature names, compacted to their label when a description is inline."""
    if not raw or not raw.strip():
        return []
    from_json = items_from_json(raw, FEATURE_OBJECT_KEYS)
    if from_json:
        return dedupe_case_insensitive(n for n in map(compact_feature_name, from_json) if n)
    return dedupe_case_insensitive(_feature_lines(raw))


def normalize_screen_list(raw: str) -> list[str]:
    """Screen names, reading the name column of pipe or box-drawn tables."""
    if not raw or not raw.strip():
        return []
    from_json = items_from_json(raw, SCREEN_OBJECT_KEYS)
    if from_json:
        return dedupe_case_insensitive(n for n in map(compact_feature_name, from_json) if n)
    return dedupe_case_insensitive(_screen_lines(raw))


def normalize_names(names: Iterable[str]) -> list[str]:
    """Normalize an already-split list of names (document bullets, wizard rows)."""
    cleaned = (compact_feature_name(name) for name in names)
    return dedupe_case_insensitive(n for n in cleaned if n and not is_garbage_token(n))
