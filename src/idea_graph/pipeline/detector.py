"""
Format detection and turn parsing for pasted conversation material.

Recognized shapes:
- structured transcript: one JSON object per line (coding-agent session
  logs), where entries of type "user"/"assistant" carry a message whose
  content is a string or a list of typed blocks
- plain dialogue: lines starting with a role marker such as "Human:" or
  "Assistant:"
- generic: anything else, treated as a single human turn

Nothing here raises for malformed input. Bad transcript lines are skipped.
"""

import json
import re
from dataclasses import dataclass, field
from typing import Any

from ..logging import get_logger
from ..models.conversation import ConversationTurn, Role, SourceKind

logger = get_logger(__name__)

# Detection samples this many non-empty lines
TRANSCRIPT_SAMPLE_LINES = 10

TRANSCRIPT_ROLES: dict[str, Role] = {
    'user': Role.HUMAN,
    'assistant': Role.ASSISTANT,
}
SKIPPED_SUBTYPES = frozenset({'api_error', 'turn_duration'})
TOOL_BLOCK_TYPES = frozenset({'tool_use', 'tool_result'})
PLACEHOLDER_TEXTS = frozenset({
    '[Request interrupted by user for tool use]',
    '[Request interrupted by user]',
    'continue',
})

DIALOGUE_ROLES: dict[str, Role] = {
    'human': Role.HUMAN,
    'user': Role.HUMAN,
    'assistant': Role.ASSISTANT,
    'claude': Role.ASSISTANT,
    'ai': Role.ASSISTANT,
}
ROLE_MARKER_PATTERN = re.compile(
    r'^[ \t]*(Human|User|Assistant|Claude|AI)[ \t]*:[ \t]*',
    re.IGNORECASE | re.MULTILINE,
)
MIN_DIALOGUE_MARKERS = 2


@dataclass
class TranscriptParse:
    """Turns plus first-seen session metadata from a structured transcript."""

    turns: list[ConversationTurn] = field(default_factory=list)
    session_id: str | None = None
    project_dir: str | None = None
    branch: str | None = None


# =============================================================================
# Detection
# =============================================================================


def is_structured_transcript(text: str) -> bool:
    """
    True when the first non-empty lines are all standalone JSON objects and
    at least one of them is a user/assistant turn entry.

    A single line that is not a JSON object disqualifies the format.
    """
    sampled = [line.strip() for line in text.strip().splitlines() if line.strip()]
    sampled = sampled[:TRANSCRIPT_SAMPLE_LINES]
    if not sampled:
        return False

    has_turn = False
    for line in sampled:
        try:
            entry = json.loads(line)
        except (ValueError, RecursionError):
            return False
        if not isinstance(entry, dict):
            return False
        if entry.get('type') in TRANSCRIPT_ROLES:
            has_turn = True

    return has_turn


def is_plain_dialogue(text: str) -> bool:
    """True when at least two lines start with a recognized role marker."""
    count = 0
    for _ in ROLE_MARKER_PATTERN.finditer(text):
        count += 1
        if count >= MIN_DIALOGUE_MARKERS:
            return True
    return False


def detect(text: str) -> SourceKind:
    """Classify raw text as a structured transcript, plain dialogue or generic prose."""
    if not text or not text.strip():
        return SourceKind.GENERIC
    if is_structured_transcript(text):
        return SourceKind.STRUCTURED_TRANSCRIPT
    if is_plain_dialogue(text):
        return SourceKind.PLAIN_DIALOGUE
    return SourceKind.GENERIC


# =============================================================================
# Structured transcript
# =============================================================================


def _string_field(entry: dict[str, Any], key: str) -> str | None:
    value = entry.get(key)
    return value if isinstance(value, str) and value else None


def _text_from_content(content: Any) -> str:
    """
    Join the text blocks of a message's content.

    Returns an empty string when every block is a tool invocation or tool
    result, so such turns drop out.
    """
    if isinstance(content, str):
        return content
    if not isinstance(content, list):
        return ''

    blocks = [block for block in content if isinstance(block, dict)]
    if all(block.get('type') in TOOL_BLOCK_TYPES for block in blocks):
        return ''

    return '\n'.join(
        block['text']
        for block in blocks
        if block.get('type') == 'text' and isinstance(block.get('text'), str) and block['text']
    )


def _turn_from_entry(entry: dict[str, Any]) -> ConversationTurn | None:
    role = TRANSCRIPT_ROLES.get(entry.get('type'))  # type: ignore[arg-type]
    if role is None:
        return None
    if entry.get('subtype') in SKIPPED_SUBTYPES or entry.get('isApiErrorMessage'):
        return None

    message = entry.get('message')
    if not isinstance(message, dict):
        return None

    text = _text_from_content(message.get('content')).strip()
    if not text or text in PLACEHOLDER_TEXTS:
        return None

    return ConversationTurn(role=role, text=text, timestamp=_string_field(entry, 'timestamp'))


def parse_transcript(text: str) -> TranscriptParse:
    """
    Parse a one-object-per-line transcript into turns.

    Session id, working directory and branch keep their first-seen values,
    including values carried by non-turn entries.
    """
    result = TranscriptParse()
    skipped = 0

    for line in text.strip().splitlines():
        line = line.strip()
        if not line:
            continue
        try:
            entry = json.loads(line)
        except (ValueError, RecursionError):
            skipped += 1
            continue
        if not isinstance(entry, dict):
            skipped += 1
            continue

        result.session_id = result.session_id or _string_field(entry, 'sessionId')
        result.project_dir = result.project_dir or _string_field(entry, 'cwd')
        result.branch = result.branch or _string_field(entry, 'gitBranch')

        turn = _turn_from_entry(entry)
        if turn is not None:
            result.turns.append(turn)

    if skipped:
        logger.debug('detector.transcript_lines_skipped', count=skipped)

    return result


# =============================================================================
# Plain dialogue
# =============================================================================


def parse_dialogue(text: str) -> list[ConversationTurn]:
    """
    Split text at every role marker line.

    Text before the first marker is preamble and is dropped, as are turns
    whose body is empty.
    """
    markers = list(ROLE_MARKER_PATTERN.finditer(text))
    turns: list[ConversationTurn] = []

    for index, match in enumerate(markers):
        end = markers[index + 1].start() if index + 1 < len(markers) else len(text)
        body = text[match.end():end].strip()
        if not body:
            continue
        role = DIALOGUE_ROLES[match.group(1).lower()]
        turns.append(ConversationTurn(role=role, text=body))

    return turns
