"""
Smart-merge models: extracted items, existing-node snapshots, matches and
field updates.

ExistingEntitySummary is a read view taken once at the start of an
import/merge cycle; every merge decision in that cycle is taken against the
same snapshot, so the model is frozen.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .nodes import GraphEdge, GraphNode, NodeType


class ExtractedItem(BaseModel):
    """A named item pulled out of imported material."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: NodeType


class ExistingEntitySummary(BaseModel):
    """Read-only snapshot of one node in the pre-existing graph."""

    model_config = ConfigDict(frozen=True)

    id: str
    type: NodeType
    name: str
    populated_fields: frozenset[str] = Field(default_factory=frozenset)


class NodeMatch(BaseModel):
    """An extracted item paired with the existing node it refers to."""

    extracted_name: str
    existing_node_id: str
    confidence: float = Field(..., ge=0.0, le=1.0)


class FieldUpdate(BaseModel):
    """
    Fields to fill on one existing node.

    Never contains a protected or primary-name field, and is never empty:
    "nothing to fill" is represented by the absence of an update.
    """

    entity_id: str
    type: NodeType
    fields_to_fill: dict[str, Any]


class SmartImportSummary(BaseModel):
    """Statistics from one smart import."""

    nodes_updated: int = 0
    fields_filled_total: int = 0
    nodes_created: int = 0
    nodes_skipped: int = 0
    match_details: list[NodeMatch] = Field(default_factory=list)


class SmartImportResult(BaseModel):
    """Field updates for matched nodes plus new nodes/edges for the rest."""

    updates: list[FieldUpdate] = Field(default_factory=list)
    new_nodes: list[GraphNode] = Field(default_factory=list)
    new_edges: list[GraphEdge] = Field(default_factory=list)
    summary: SmartImportSummary = Field(default_factory=SmartImportSummary)
    warnings: list[str] = Field(default_factory=list)
