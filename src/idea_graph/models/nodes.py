"""
Project graph node and edge models.

Every node type carries its own data record; the node classes form a
tagged union keyed by ``type``. Each data record fills every field with a
documented default so "empty" has one representation per field type
(empty string, empty list, ``None`` only for the hour estimate).

Node types:
- idea: the single root entity describing the product concept
- feature: a capability of the product
- screen: a UI surface
- techStack: a technology choice
- prompt: a reusable build instruction
- note: free-form note (used for the imported-document excerpt)
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class NodeType(str, Enum):
    """Discriminator for graph nodes."""

    IDEA = 'idea'
    FEATURE = 'feature'
    SCREEN = 'screen'
    TECH_STACK = 'techStack'
    PROMPT = 'prompt'
    NOTE = 'note'


class FeaturePriority(str, Enum):
    MUST = 'Must'
    SHOULD = 'Should'
    NICE = 'Nice'


class FeatureStatus(str, Enum):
    PLANNED = 'Planned'
    IN_PROGRESS = 'In Progress'
    BUILT = 'Built'
    BROKEN = 'Broken'
    BLOCKED = 'Blocked'


class FeatureEffort(str, Enum):
    XS = 'XS'
    S = 'S'
    M = 'M'
    L = 'L'
    XL = 'XL'


class TechCategory(str, Enum):
    FRONTEND = 'Frontend'
    BACKEND = 'Backend'
    DATABASE = 'Database'
    AUTH = 'Auth'
    HOSTING = 'Hosting'
    OTHER = 'Other'


class TargetTool(str, Enum):
    """Coding tool a prompt is written for."""

    CLAUDE = 'Claude'
    BOLT = 'Bolt'
    CURSOR = 'Cursor'
    LOVABLE = 'Lovable'
    REPLIT = 'Replit'
    OTHER = 'Other'


class NoteColorTag(str, Enum):
    SLATE = 'Slate'
    AMBER = 'Amber'
    EMERALD = 'Emerald'
    SKY = 'Sky'
    ROSE = 'Rose'


class Position(BaseModel):
    """Canvas coordinates of a node."""

    x: float = 0.0
    y: float = 0.0


# =============================================================================
# Per-type node data
# =============================================================================


class IdeaNodeData(BaseModel):
    """Root product concept."""

    app_name: str = ''
    description: str = ''
    target_user: str = ''
    core_problem: str = ''
    expanded: bool = False
    completed: bool = False

    # AI context
    project_architecture: str = ''
    core_patterns: list[str] = Field(default_factory=list)
    constraints: list[str] = Field(default_factory=list)

    # Metadata
    tags: list[str] = Field(default_factory=list)
    estimated_hours: float | None = None
    version: int = 1


class FeatureNodeData(BaseModel):
    """A product capability with its planning fields."""

    feature_name: str = ''
    summary: str = ''
    problem: str = ''
    user_story: str = ''
    acceptance_criteria: list[str] = Field(default_factory=list)
    priority: FeaturePriority = FeaturePriority.MUST
    status: FeatureStatus = FeatureStatus.PLANNED
    effort: FeatureEffort = FeatureEffort.M
    dependencies: list[str] = Field(default_factory=list)
    risks: str = ''
    metrics: str = ''
    notes: str = ''
    expanded: bool = False
    completed: bool = False

    # AI context
    ai_context: str = ''
    implementation_steps: list[str] = Field(default_factory=list)
    code_references: list[str] = Field(default_factory=list)
    testing_requirements: str = ''
    related_files: list[str] = Field(default_factory=list)
    technical_constraints: str = ''

    # Metadata
    tags: list[str] = Field(default_factory=list)
    estimated_hours: float | None = None
    version: int = 1


class ScreenNodeData(BaseModel):
    """A UI surface and its behaviour."""

    screen_name: str = ''
    purpose: str = ''
    key_elements: list[str] = Field(default_factory=list)
    user_actions: list[str] = Field(default_factory=list)
    states: list[str] = Field(default_factory=list)
    navigation: str = ''
    data_sources: list[str] = Field(default_factory=list)
    wireframe_url: str = ''
    notes: str = ''
    expanded: bool = False
    completed: bool = False

    # AI context
    ai_context: str = ''
    acceptance_criteria: list[str] = Field(default_factory=list)
    component_hierarchy: list[str] = Field(default_factory=list)
    code_references: list[str] = Field(default_factory=list)
    testing_requirements: str = ''

    # Metadata
    tags: list[str] = Field(default_factory=list)
    estimated_hours: float | None = None
    version: int = 1


class TechStackNodeData(BaseModel):
    """A technology choice. ``version`` is the tool's version string."""

    category: TechCategory = TechCategory.OTHER
    tool_name: str = ''
    notes: str = ''
    expanded: bool = False
    completed: bool = False

    # AI context
    version: str = ''
    rationale: str = ''
    configuration_notes: str = ''
    integration_with: list[str] = Field(default_factory=list)

    # Metadata
    tags: list[str] = Field(default_factory=list)
    estimated_hours: float | None = None


class PromptNodeData(BaseModel):
    """A build instruction for a coding tool."""

    prompt_text: str = ''
    target_tool: TargetTool = TargetTool.CLAUDE
    result_notes: str = ''
    expanded: bool = False
    completed: bool = False

    # AI context
    prompt_version: str = ''
    context_used: list[str] = Field(default_factory=list)
    actual_output: str = ''
    refinements: list[str] = Field(default_factory=list)
    breakdown: list[str] = Field(default_factory=list)

    # Metadata
    tags: list[str] = Field(default_factory=list)
    estimated_hours: float | None = None


class NoteNodeData(BaseModel):
    title: str = ''
    body: str = ''
    color_tag: NoteColorTag = NoteColorTag.SLATE
    expanded: bool = False
    completed: bool = False

    # Metadata
    tags: list[str] = Field(default_factory=list)
    estimated_hours: float | None = None


# =============================================================================
# Nodes (tagged union on ``type``)
# =============================================================================


class _NodeBase(BaseModel):
    id: str
    position: Position = Field(default_factory=Position)


class IdeaNode(_NodeBase):
    type: Literal['idea'] = 'idea'
    data: IdeaNodeData = Field(default_factory=IdeaNodeData)

    @property
    def name(self) -> str:
        return self.data.app_name


class FeatureNode(_NodeBase):
    type: Literal['feature'] = 'feature'
    data: FeatureNodeData = Field(default_factory=FeatureNodeData)

    @property
    def name(self) -> str:
        return self.data.feature_name


class ScreenNode(_NodeBase):
    type: Literal['screen'] = 'screen'
    data: ScreenNodeData = Field(default_factory=ScreenNodeData)

    @property
    def name(self) -> str:
        return self.data.screen_name


class TechStackNode(_NodeBase):
    type: Literal['techStack'] = 'techStack'
    data: TechStackNodeData = Field(default_factory=TechStackNodeData)

    @property
    def name(self) -> str:
        return self.data.tool_name


class PromptNode(_NodeBase):
    type: Literal['prompt'] = 'prompt'
    data: PromptNodeData = Field(default_factory=PromptNodeData)

    @property
    def name(self) -> str:
        return self.data.prompt_text


class NoteNode(_NodeBase):
    type: Literal['note'] = 'note'
    data: NoteNodeData = Field(default_factory=NoteNodeData)

    @property
    def name(self) -> str:
        return self.data.title


GraphNode = Annotated[
    Union[IdeaNode, FeatureNode, ScreenNode, TechStackNode, PromptNode, NoteNode],
    Field(discriminator='type'),
]

NodeData = Union[
    IdeaNodeData,
    FeatureNodeData,
    ScreenNodeData,
    TechStackNodeData,
    PromptNodeData,
    NoteNodeData,
]


class GraphEdge(BaseModel):
    """Directed edge between two node ids of the same graph."""

    id: str
    source: str
    target: str

    @classmethod
    def between(cls, source: str, target: str) -> 'GraphEdge':
        return cls(id=f'e-{source}-{target}', source=source, target=target)
