"""
Data models for the Idea Graph import pipeline.
"""

from .conversation import ConversationTurn, FormatHint, ParseResult, RawInput, Role, SourceKind
from .nodes import (
    FeatureEffort,
    FeatureNode,
    FeatureNodeData,
    FeaturePriority,
    FeatureStatus,
    GraphEdge,
    GraphNode,
    IdeaNode,
    IdeaNodeData,
    NodeType,
    NoteColorTag,
    NoteNode,
    NoteNodeData,
    Position,
    PromptNode,
    PromptNodeData,
    ScreenNode,
    ScreenNodeData,
    TargetTool,
    TechCategory,
    TechStackNode,
    TechStackNodeData,
)
from .merge import (
    ExistingEntitySummary,
    ExtractedItem,
    FieldUpdate,
    NodeMatch,
    SmartImportResult,
    SmartImportSummary,
)

__all__ = [
    'ConversationTurn',
    'FormatHint',
    'ParseResult',
    'RawInput',
    'Role',
    'SourceKind',
    'FeatureEffort',
    'FeatureNode',
    'FeatureNodeData',
    'FeaturePriority',
    'FeatureStatus',
    'GraphEdge',
    'GraphNode',
    'IdeaNode',
    'IdeaNodeData',
    'NodeType',
    'NoteColorTag',
    'NoteNode',
    'NoteNodeData',
    'Position',
    'PromptNode',
    'PromptNodeData',
    'ScreenNode',
    'ScreenNodeData',
    'TargetTool',
    'TechCategory',
    'TechStackNode',
    'TechStackNodeData',
    'ExistingEntitySummary',
    'ExtractedItem',
    'FieldUpdate',
    'NodeMatch',
    'SmartImportResult',
    'SmartImportSummary',
]
