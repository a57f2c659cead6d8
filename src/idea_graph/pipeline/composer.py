"""
Markdown composer and the conversation parsing entry point.

Folds parsed turns and the content extractor's lists into one document with
fixed headings, so the rest of the import system can treat a conversation
exactly like a pasted document:

    # {Source} Session Import
    > Session: `...`          (optional metadata block)
    ## Description
    ## Features
    ## Tech Stack
    ## Tasks
    ## Conversation Summary
"""

from ..logging import get_logger
from ..models.conversation import ConversationTurn, ParseResult, Role, SourceKind
from .content_extractor import (
    DEFAULT_PATTERNS,
    ExtractionPatterns,
    extract_features,
    extract_tasks,
    extract_tech,
)
from .detector import detect, parse_dialogue, parse_transcript

logger = get_logger(__name__)

DESCRIPTION_MAX_CHARS = 2000
EXCERPT_MAX_CHARS = 1500
SUBSTANTIVE_MIN_CHARS = 100
MAX_ASSISTANT_EXCERPTS = 10
MAX_HUMAN_FALLBACK_EXCERPTS = 5
ELLIPSIS = '...'

CODEX_MARKERS = ('codex', 'openai')


def _truncate(text: str, limit: int) -> str:
    return text[:limit] + ELLIPSIS if len(text) > limit else text


def source_label(source: SourceKind, text: str = '') -> str:
    """Human label used in the document heading."""
    if source == SourceKind.STRUCTURED_TRANSCRIPT:
        return 'Claude Code'
    lowered = text.lower()
    if source == SourceKind.PLAIN_DIALOGUE and any(m in lowered for m in CODEX_MARKERS):
        return 'Codex'
    return 'AI Conversation'


def compose_document(
    turns: list[ConversationTurn],
    label: str,
    session_id: str | None = None,
    project_dir: str | None = None,
    branch: str | None = None,
    patterns: ExtractionPatterns = DEFAULT_PATTERNS,
) -> str:
    """
    Build the import-ready markdown for a list of turns.

    Args:
        turns: Parsed conversation turns, in order
        label: Source label for the top heading
        session_id: Optional transcript session id
        project_dir: Optional working directory
        branch: Optional version-control branch
        patterns: Extraction vocabulary for the Features/Tech Stack/Tasks sections

    Returns:
        The composed document, stripped of surrounding whitespace
    """
    lines: list[str] = [f'# {label} Session Import', '']

    metadata = [
        ('Session', session_id),
        ('Project', project_dir),
        ('Branch', branch),
    ]
    present = [(key, value) for key, value in metadata if value]
    for key, value in present:
        lines.append(f'> {key}: `{value}`')
    if present:
        lines.append('')

    human = [t for t in turns if t.role == Role.HUMAN]
    assistant = [t for t in turns if t.role == Role.ASSISTANT]

    if human:
        lines.extend(['## Description', '', _truncate(human[0].text, DESCRIPTION_MAX_CHARS), ''])

    all_text = '\n'.join(t.text for t in turns)
    sections = [
        ('Features', extract_features(all_text, patterns)),
        ('Tech Stack', extract_tech(all_text, patterns)),
        ('Tasks', extract_tasks(all_text, patterns)),
    ]
    for heading, items in sections:
        if not items:
            continue
        lines.extend([f'## {heading}', ''])
        lines.extend(f'- {item}' for item in items)
        lines.append('')

    lines.extend(['## Conversation Summary', ''])

    excerpts = [t for t in assistant if len(t.text) > SUBSTANTIVE_MIN_CHARS][:MAX_ASSISTANT_EXCERPTS]
    if not excerpts:
        excerpts = human[:MAX_HUMAN_FALLBACK_EXCERPTS]
    for turn in excerpts:
        lines.extend([_truncate(turn.text, EXCERPT_MAX_CHARS), ''])

    return '\n'.join(lines).strip()


def parse_conversation(
    text: str,
    patterns: ExtractionPatterns = DEFAULT_PATTERNS,
) -> ParseResult:
    """
    Detect the shape of ``text``, parse it into turns and compose the document.

    Empty input yields a generic result with no turns and an empty document.
    """
    if not text or not text.strip():
        return ParseResult(source=SourceKind.GENERIC)

    source = detect(text)

    if source == SourceKind.STRUCTURED_TRANSCRIPT:
        transcript = parse_transcript(text)
        result = ParseResult(
            source=source,
            turns=transcript.turns,
            session_id=transcript.session_id,
            project_dir=transcript.project_dir,
            branch=transcript.branch,
        )
    elif source == SourceKind.PLAIN_DIALOGUE:
        result = ParseResult(source=source, turns=parse_dialogue(text))
    else:
        result = ParseResult(source=source, turns=[ConversationTurn(role=Role.HUMAN, text=text)])

    result.composed_document = compose_document(
        result.turns,
        source_label(source, text),
        session_id=result.session_id,
        project_dir=result.project_dir,
        branch=result.branch,
        patterns=patterns,
    )

    logger.debug(
        'composer.parsed',
        source=source.value,
        turns=len(result.turns),
        document_chars=len(result.composed_document),
    )
    return result
