"""
Caller-owned project graph.

The import pipeline never reads or writes ambient state: callers hold a
ProjectGraph, take a snapshot of it with ``summaries()`` at the start of an
import cycle, and apply the resulting updates and new nodes/edges
afterwards. Applying results to a shared graph must be serialized by the
caller; this class provides no locking.
"""

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from .errors import MergeError
from .logging import get_logger
from .models.merge import ExistingEntitySummary, FieldUpdate, SmartImportResult
from .models.nodes import GraphEdge, GraphNode, NodeType
from .pipeline.merger import populated_fields

logger = get_logger(__name__)


class ProjectGraph(BaseModel):
    """Nodes and edges of one project canvas."""

    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)

    def node_ids(self) -> set[str]:
        return {node.id for node in self.nodes}

    def get_node(self, node_id: str) -> GraphNode | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def has_idea(self) -> bool:
        return any(node.type == NodeType.IDEA for node in self.nodes)

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def summaries(self) -> list[ExistingEntitySummary]:
        """Snapshot every node as an ExistingEntitySummary."""
        return [
            ExistingEntitySummary(
                id=node.id,
                type=NodeType(node.type),
                name=node.name,
                populated_fields=frozenset(populated_fields(node.data)),
            )
            for node in self.nodes
        ]

    def apply_update(self, update: FieldUpdate) -> GraphNode:
        """
        Fill the fields named by ``update`` on the target node.

        Raises:
            MergeError: the node is missing, has a different type, or the
                filled values do not validate against the node's data model
        """
        for index, node in enumerate(self.nodes):
            if node.id != update.entity_id:
                continue
            if node.type != update.type:
                raise MergeError(
                    'Field update type does not match node type',
                    context={
                        'node_id': node.id,
                        'node_type': node.type,
                        'update_type': update.type.value,
                    },
                )
            merged = {**node.data.model_dump(), **update.fields_to_fill}
            try:
                data = type(node.data).model_validate(merged)
            except PydanticValidationError as exc:
                raise MergeError(
                    'Field update does not validate against node data',
                    context={'node_id': node.id, 'fields': sorted(update.fields_to_fill)},
                ) from exc
            updated = node.model_copy(update={'data': data})
            self.nodes[index] = updated
            return updated

        raise MergeError(
            'Field update targets an unknown node',
            context={'node_id': update.entity_id},
        )

    def extend(self, nodes: list[GraphNode], edges: list[GraphEdge]) -> None:
        self.nodes.extend(nodes)
        self.edges.extend(edges)

    def apply(self, result: SmartImportResult) -> None:
        """Apply every field update, then append new nodes and edges."""
        for update in result.updates:
            self.apply_update(update)
        self.extend(result.new_nodes, result.new_edges)
        logger.debug(
            'project_graph.applied',
            updates=len(result.updates),
            new_nodes=len(result.new_nodes),
            new_edges=len(result.new_edges),
        )
