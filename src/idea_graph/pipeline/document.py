"""
Pasted-document parser and fresh document import.

Reads loosely structured markdown (a pasted spec or a composed conversation
document):
- ``Key: value`` lines set the app name, target user, problem or description
- headings (``## Features`` or ``Features:``) choose the current section via
  a fixed alias table
- bullets and numbered lines are routed to the current section
- plain lines extend the current text section, otherwise become notes

``document_to_graph`` turns the result into a fresh graph and pins an
"Imported Document" note holding the source excerpt next to the idea.
"""

import re
from dataclasses import dataclass, field

from ..config import config
from ..logging import get_logger
from ..models.nodes import (
    GraphEdge,
    IdeaNodeData,
    NoteColorTag,
    NoteNode,
    NoteNodeData,
    Position,
    TargetTool,
    TechCategory,
    TechStackNodeData,
)
from .content_extractor import extract_tech_mentions
from .defaults import infer_features, infer_tech_stack, lookup_tech
from .generator import GeneratedGraph, PromptSpec, generate_graph, now_ms
from .normalizer import normalize_names, normalize_screen_list, table_cells

logger = get_logger(__name__)

SOURCE_EXCERPT_CHARS = 2000
NOTE_OFFSET_X = -320.0
NOTE_OFFSET_Y = 180.0
IMPORTED_NOTE_TITLE = 'Imported Document'

# Checked in order; the first alias found in a heading wins
SECTION_ALIASES: tuple[tuple[str, str], ...] = (
    ('idea', 'description'),
    ('summary', 'description'),
    ('description', 'description'),
    ('overview', 'description'),
    ('target user', 'target_user'),
    ('audience', 'target_user'),
    ('user', 'target_user'),
    ('problem', 'core_problem'),
    ('pain', 'core_problem'),
    ('features', 'features'),
    ('functionality', 'features'),
    ('screens', 'screens'),
    ('pages', 'screens'),
    ('ui', 'screens'),
    ('tech stack', 'tech_stack'),
    ('stack', 'tech_stack'),
    ('tech', 'tech_stack'),
    ('prompts', 'prompts'),
    ('notes', 'notes'),
)
TEXT_SECTIONS = ('description', 'target_user', 'core_problem')

KEY_WORDS: tuple[tuple[frozenset[str], str], ...] = (
    (frozenset({'app', 'project', 'name', 'product'}), 'app_name'),
    (frozenset({'target', 'audience', 'user', 'users'}), 'target_user'),
    (frozenset({'problem', 'problems', 'pain'}), 'core_problem'),
    (frozenset({'description', 'summary', 'overview'}), 'description'),
)

DETECTABLE_TOOLS = (
    TargetTool.CLAUDE,
    TargetTool.BOLT,
    TargetTool.CURSOR,
    TargetTool.LOVABLE,
    TargetTool.REPLIT,
)

_KEY_VALUE = re.compile(r'^([A-Za-z][A-Za-z\s]+):\s*(.+)$')
_MARKDOWN_HEADING = re.compile(r'^#{1,6}\s+(.+)$')
_LABEL_HEADING = re.compile(r'^([A-Za-z][A-Za-z\s]+):$')
_BULLET = re.compile(r'^[-*•]\s+(.+)$')
_NUMBERED = re.compile(r'^\d+\.\s+(.+)$')
_TECH_ITEM = re.compile(r'^(frontend|backend|database|auth|hosting|other)\s*[:\-]\s*(.+)$', re.IGNORECASE)
_HEADING_NOISE = re.compile(r'[#*`_]')


@dataclass
class ParsedDocument:
    app_name: str = ''
    description: str = ''
    target_user: str = ''
    core_problem: str = ''
    features: list[str] = field(default_factory=list)
    screens: list[str] = field(default_factory=list)
    tech_stack: list[TechStackNodeData] = field(default_factory=list)
    prompts: list[PromptSpec] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)
    tool: TargetTool = TargetTool.CLAUDE
    source_excerpt: str = ''

    @property
    def idea(self) -> IdeaNodeData:
        return IdeaNodeData(
            app_name=self.app_name,
            description=self.description,
            target_user=self.target_user,
            core_problem=self.core_problem,
        )


# =============================================================================
# Line helpers
# =============================================================================


def detect_tool(text: str) -> TargetTool:
    lowered = text.lower()
    for tool in DETECTABLE_TOOLS:
        if re.search(rf'\b{tool.value.lower()}\b', lowered):
            return tool
    return TargetTool.CLAUDE


def section_for_heading(heading: str) -> str | None:
    cleaned = _HEADING_NOISE.sub('', heading).strip().lower()
    for alias, section in SECTION_ALIASES:
        if re.search(rf'\b{alias}s?\b', cleaned):
            return section
    return None


def field_for_key(key: str) -> str | None:
    words = set(key.lower().split())
    for vocabulary, name in KEY_WORDS:
        if words & vocabulary:
            return name
    return None


def bullet_text(line: str) -> str | None:
    match = _BULLET.match(line) or _NUMBERED.match(line)
    return match.group(1).strip() if match else None


def parse_tech_item(raw: str) -> TechStackNodeData:
    """
    ``Category: Tool`` bullets keep their category; bare tool names are
    looked up in the tech tables and default to Other.
    """
    match = _TECH_ITEM.match(raw)
    if match:
        return TechStackNodeData(
            category=TechCategory(match.group(1).strip().capitalize()),
            tool_name=match.group(2).strip(),
        )

    name = raw.strip()
    template = lookup_tech(name)
    if template:
        return TechStackNodeData(category=template.category, tool_name=name, notes=template.notes)
    mentions = extract_tech_mentions(name)
    if mentions:
        return TechStackNodeData(category=mentions[0].category, tool_name=name)
    return TechStackNodeData(category=TechCategory.OTHER, tool_name=name)


# =============================================================================
# Parsing
# =============================================================================


def parse_document(text: str) -> ParsedDocument:
    """Parse pasted markdown into idea fields and item lists."""
    stripped = text.strip()
    if not stripped:
        return ParsedDocument()

    parsed = ParsedDocument(
        tool=detect_tool(stripped),
        source_excerpt=stripped[:SOURCE_EXCERPT_CHARS],
    )
    section: str | None = None

    lines = (line.strip() for line in stripped.splitlines())
    for line in (line for line in lines if line):
        key_value = _KEY_VALUE.match(line)
        if key_value:
            target = field_for_key(key_value.group(1))
            if target:
                setattr(parsed, target, key_value.group(2).strip())
                continue

        heading = _MARKDOWN_HEADING.match(line) or _LABEL_HEADING.match(line)
        if heading:
            section = section_for_heading(heading.group(1))
            continue

        bullet = bullet_text(line)
        if bullet:
            _route_bullet(parsed, section, bullet)
            continue

        if section == 'screens' and len(table_cells(line)) >= 2:
            parsed.screens.extend(normalize_screen_list(line))
            continue

        if section in TEXT_SECTIONS:
            current = getattr(parsed, section)
            setattr(parsed, section, f'{current} {line}' if current else line)
            continue

        parsed.notes.append(line)

    if not parsed.description and parsed.notes:
        parsed.description = parsed.notes[0]

    return parsed


def _route_bullet(parsed: ParsedDocument, section: str | None, bullet: str) -> None:
    if section == 'features':
        parsed.features.append(bullet)
    elif section == 'screens':
        parsed.screens.append(bullet)
    elif section == 'tech_stack':
        parsed.tech_stack.append(parse_tech_item(bullet))
    elif section == 'prompts':
        parsed.prompts.append(PromptSpec(text=bullet, target_tool=parsed.tool))
    else:
        parsed.notes.append(bullet)


def finalize_items(parsed: ParsedDocument, infer_defaults: bool = False) -> ParsedDocument:
    """
    Normalize and cap the item lists in place.

    With ``infer_defaults``, an empty feature list is inferred from the idea
    fields (when there is a description) and an empty tech stack from the
    document text.
    """
    parsed.features = normalize_names(parsed.features)[: config.MAX_FEATURES]
    parsed.screens = normalize_names(parsed.screens)[: config.MAX_SCREENS]

    seen: set[str] = set()
    tech: list[TechStackNodeData] = []
    for item in parsed.tech_stack:
        key = item.tool_name.lower()
        if item.tool_name and key not in seen:
            seen.add(key)
            tech.append(item)
    parsed.tech_stack = tech[: config.MAX_TECH]
    parsed.prompts = parsed.prompts[: config.MAX_PROMPTS]

    if infer_defaults:
        if not parsed.features and parsed.description:
            parsed.features = infer_features(parsed.description, parsed.core_problem, parsed.target_user)
            logger.debug('document.features_inferred', count=len(parsed.features))
        if not parsed.tech_stack:
            parsed.tech_stack = infer_tech_stack(parsed.source_excerpt, parsed.description)[: config.MAX_TECH]

    return parsed


# =============================================================================
# Fresh import
# =============================================================================


def document_to_graph(
    text: str,
    *,
    infer_defaults: bool = False,
    timestamp: int | None = None,
) -> GeneratedGraph:
    """
    Build a fresh graph from a pasted document.

    Empty text yields an empty graph. Otherwise the generated graph gets an
    "Imported Document" note wired note -> idea.
    """
    parsed = parse_document(text)
    if not parsed.source_excerpt:
        return GeneratedGraph()

    finalize_items(parsed, infer_defaults=infer_defaults)
    ts = now_ms() if timestamp is None else timestamp

    graph = generate_graph(
        parsed.idea,
        parsed.features,
        parsed.screens,
        parsed.tech_stack,
        parsed.prompts,
        target_tool=parsed.tool,
        timestamp=ts,
    )

    idea_node = next(node for node in graph.nodes if node.type == 'idea')
    note = NoteNode(
        id=f'note-import-{ts}',
        position=Position(
            x=idea_node.position.x + NOTE_OFFSET_X,
            y=idea_node.position.y + NOTE_OFFSET_Y,
        ),
        data=NoteNodeData(
            title=IMPORTED_NOTE_TITLE,
            body=parsed.source_excerpt,
            color_tag=NoteColorTag.SLATE,
            expanded=True,
        ),
    )
    graph.nodes.append(note)
    graph.edges.append(GraphEdge.between(note.id, idea_node.id))

    logger.debug(
        'document.imported',
        features=len(parsed.features),
        screens=len(parsed.screens),
        tech=len(parsed.tech_stack),
        prompts=len(parsed.prompts),
    )
    return graph
