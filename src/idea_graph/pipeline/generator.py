"""
Graph generator: finalized item lists -> positioned nodes and wired edges.

Layout is five fixed columns (idea, feature, screen, techStack, prompt) with
every column vertically centred on the same midpoint. Wiring is fixed:

- idea -> every feature, idea -> every tech-stack item
- feature[i] -> screen[i mod screen count]
- every screen -> the first prompt
- prompt[i] -> prompt[i + 1]

Empty lists collapse their column and edges; nothing here raises.
"""

import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from ..logging import get_logger
from ..models.nodes import (
    FeatureNode,
    FeatureNodeData,
    GraphEdge,
    GraphNode,
    IdeaNode,
    IdeaNodeData,
    Position,
    PromptNode,
    PromptNodeData,
    ScreenNode,
    ScreenNodeData,
    TargetTool,
    TechStackNode,
    TechStackNodeData,
)

logger = get_logger(__name__)

COLUMN_X = {
    'idea': 0.0,
    'feature': 360.0,
    'screen': 720.0,
    'techStack': 1080.0,
    'prompt': 1440.0,
}
ROW_SPACING = 250.0


@dataclass(frozen=True)
class PromptSpec:
    """Prompt text plus an optional tool override."""

    text: str
    target_tool: TargetTool | None = None


@dataclass
class GeneratedGraph:
    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)

    @property
    def idea_id(self) -> str | None:
        for node in self.nodes:
            if node.type == 'idea':
                return node.id
        return None

    def node_ids(self) -> list[str]:
        return [node.id for node in self.nodes]

    def to_dict(self) -> dict[str, Any]:
        return {
            'nodes': [node.model_dump(mode='json') for node in self.nodes],
            'edges': [edge.model_dump(mode='json') for edge in self.edges],
        }


def now_ms() -> int:
    return int(time.time() * 1000)


def center_positions(count: int, column_x: float, total_height: float) -> list[Position]:
    """Positions for ``count`` rows centred within ``total_height``."""
    if count <= 0:
        return []
    start_y = (total_height - (count - 1) * ROW_SPACING) / 2
    return [Position(x=column_x, y=start_y + i * ROW_SPACING) for i in range(count)]


def _feature_records(features: Sequence[FeatureNodeData | str]) -> list[FeatureNodeData]:
    records = [FeatureNodeData(feature_name=f) if isinstance(f, str) else f for f in features]
    return [r for r in records if r.feature_name]


def _screen_records(screens: Sequence[ScreenNodeData | str]) -> list[ScreenNodeData]:
    records = [ScreenNodeData(screen_name=s) if isinstance(s, str) else s for s in screens]
    return [r for r in records if r.screen_name]


def _prompt_records(
    prompts: Sequence[PromptSpec | str],
    default_tool: TargetTool,
) -> list[PromptNodeData]:
    records = []
    for prompt in prompts:
        spec = PromptSpec(text=prompt) if isinstance(prompt, str) else prompt
        if spec.text:
            records.append(
                PromptNodeData(prompt_text=spec.text, target_tool=spec.target_tool or default_tool)
            )
    return records


def generate_graph(
    idea: IdeaNodeData | None = None,
    features: Sequence[FeatureNodeData | str] = (),
    screens: Sequence[ScreenNodeData | str] = (),
    tech_stack: Sequence[TechStackNodeData] = (),
    prompts: Sequence[PromptSpec | str] = (),
    *,
    skip_idea_node: bool = False,
    target_tool: TargetTool = TargetTool.CLAUDE,
    timestamp: int | None = None,
) -> GeneratedGraph:
    """
    Build a full node/edge graph.

    Args:
        idea: Root idea data (defaults to an empty idea)
        features: Feature names or detailed feature records
        screens: Screen names or detailed screen records
        tech_stack: Technology records
        prompts: Prompt texts or PromptSpec entries
        skip_idea_node: Omit the idea node and its outgoing edges
        target_tool: Tool for prompts that do not name one
        timestamp: Id discriminator (defaults to the current time in ms)

    Returns:
        GeneratedGraph with unique node ids and edges between them
    """
    ts = now_ms() if timestamp is None else timestamp

    feature_data = _feature_records(features)
    screen_data = _screen_records(screens)
    tech_data = [t for t in tech_stack if t.tool_name]
    prompt_data = _prompt_records(prompts, target_tool)

    max_items = max(len(feature_data), len(screen_data), len(tech_data), len(prompt_data), 1)
    total_height = (max_items - 1) * ROW_SPACING

    idea_id = f'idea-{ts}'
    idea_node = IdeaNode(
        id=idea_id,
        position=center_positions(1, COLUMN_X['idea'], total_height)[0],
        data=idea or IdeaNodeData(),
    )

    feature_nodes = [
        FeatureNode(id=f'feature-{ts}-{i}', position=pos, data=data)
        for i, (data, pos) in enumerate(
            zip(feature_data, center_positions(len(feature_data), COLUMN_X['feature'], total_height))
        )
    ]
    screen_nodes = [
        ScreenNode(id=f'screen-{ts}-{i}', position=pos, data=data)
        for i, (data, pos) in enumerate(
            zip(screen_data, center_positions(len(screen_data), COLUMN_X['screen'], total_height))
        )
    ]
    tech_nodes = [
        TechStackNode(id=f'techStack-{ts}-{i}', position=pos, data=data)
        for i, (data, pos) in enumerate(
            zip(tech_data, center_positions(len(tech_data), COLUMN_X['techStack'], total_height))
        )
    ]
    single_prompt = len(prompt_data) == 1
    prompt_nodes = [
        PromptNode(
            id=f'prompt-{ts}' if single_prompt else f'prompt-{ts}-{i}',
            position=pos,
            data=data,
        )
        for i, (data, pos) in enumerate(
            zip(prompt_data, center_positions(len(prompt_data), COLUMN_X['prompt'], total_height))
        )
    ]

    graph = GeneratedGraph()
    if not skip_idea_node:
        graph.nodes.append(idea_node)
    graph.nodes.extend(feature_nodes)
    graph.nodes.extend(screen_nodes)
    graph.nodes.extend(tech_nodes)
    graph.nodes.extend(prompt_nodes)

    if not skip_idea_node:
        graph.edges.extend(GraphEdge.between(idea_id, n.id) for n in feature_nodes)
        graph.edges.extend(GraphEdge.between(idea_id, n.id) for n in tech_nodes)

    if screen_nodes:
        for i, feature in enumerate(feature_nodes):
            screen = screen_nodes[i % len(screen_nodes)]
            graph.edges.append(GraphEdge.between(feature.id, screen.id))

    if prompt_nodes:
        first_prompt = prompt_nodes[0]
        graph.edges.extend(GraphEdge.between(s.id, first_prompt.id) for s in screen_nodes)
        graph.edges.extend(
            GraphEdge.between(a.id, b.id) for a, b in zip(prompt_nodes, prompt_nodes[1:])
        )

    logger.debug(
        'generator.generated',
        nodes=len(graph.nodes),
        edges=len(graph.edges),
        skip_idea_node=skip_idea_node,
    )
    return graph
