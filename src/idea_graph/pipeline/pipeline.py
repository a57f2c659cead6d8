"""
Main pipeline orchestrator for importing text into a project graph.

Provides end-to-end processing:
1. Validate the raw input (non-empty, within MAX_INPUT_LENGTH)
2. Detect the source format and parse conversation turns
3. Compose conversations into a markdown document
4. Fresh import when the caller's graph is empty, smart import otherwise
5. Return nodes, edges, field updates and stage timings

The pipeline never mutates the caller's graph; apply the result with
``ProjectGraph.apply`` (smart import) or ``ProjectGraph.extend`` (fresh).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from ..config import config
from ..errors import PipelineError, ValidationError
from ..logging import PipelineTimer, get_logger, logging_context
from ..models.conversation import FormatHint, RawInput, SourceKind
from ..models.merge import FieldUpdate, SmartImportSummary
from ..models.nodes import GraphEdge, GraphNode
from .composer import parse_conversation
from .document import document_to_graph
from .extractor import DetailExtractor
from .generator import now_ms
from .smart_import import SmartImporter

if TYPE_CHECKING:
    from ..project_graph import ProjectGraph

logger = get_logger(__name__)


@dataclass
class PipelineResult:
    """Result of importing one input."""

    source: SourceKind
    turn_count: int = 0
    composed_document: str = ''

    # Fresh import fills nodes/edges; smart import also fills updates/summary
    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)
    updates: list[FieldUpdate] = field(default_factory=list)
    summary: SmartImportSummary | None = None

    # Timing
    processing_time_ms: int | None = None
    stage_timings: dict[str, float] = field(default_factory=dict)

    warnings: list[str] = field(default_factory=list)

    @property
    def is_merge(self) -> bool:
        """True when the input was merged into an existing graph."""
        return self.summary is not None

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'source': self.source.value,
            'turn_count': self.turn_count,
            'composed_document': self.composed_document,
            'nodes': [node.model_dump(mode='json') for node in self.nodes],
            'edges': [edge.model_dump(mode='json') for edge in self.edges],
            'updates': [update.model_dump(mode='json') for update in self.updates],
            'summary': self.summary.model_dump(mode='json') if self.summary else None,
            'processing_time_ms': self.processing_time_ms,
            'stage_timings': self.stage_timings,
            'warnings': self.warnings,
        }


class ImportPipeline:
    """
    End-to-end import of conversations and documents.

    Orchestrates:
    - parse_conversation: detect, parse turns and compose a document
    - document_to_graph: fresh graph for an empty project
    - SmartImporter: match, fill and append for an existing project

    Usage:
        pipeline = ImportPipeline(OpenAIDetailExtractor(OpenAIClient()))
        result = await pipeline.process(RawInput(text=pasted), graph)
        graph.apply(...)
    """

    def __init__(self, detail_extractor: DetailExtractor | None = None):
        """
        Initialize the pipeline.

        Args:
            detail_extractor: Used by smart import to fill feature/screen
                fields; None imports names only
        """
        self.detail_extractor = detail_extractor
        self.smart_importer = SmartImporter(detail_extractor)

    async def process(
        self,
        raw: RawInput,
        graph: ProjectGraph | None = None,
        trace_id: str | None = None,
        project_id: str | None = None,
        timestamp: int | None = None,
    ) -> PipelineResult:
        """
        Import one raw input.

        Args:
            raw: Text plus optional format hint
            graph: The caller's current project graph (None or empty for a
                fresh import)
            trace_id: Log correlation id (generated when absent)
            project_id: Project id for log context
            timestamp: Id/timestamp base for generated nodes (default now)

        Returns:
            PipelineResult with new nodes/edges and field updates

        Raises:
            ValidationError: Input is empty or exceeds MAX_INPUT_LENGTH
            PipelineError: An unexpected failure in a pipeline stage
        """
        text = raw.text or ''
        if not text.strip():
            raise ValidationError('Input text is required')
        if len(text) > config.MAX_INPUT_LENGTH:
            raise ValidationError(
                'Input text exceeds maximum length',
                context={'length': len(text), 'max_length': config.MAX_INPUT_LENGTH},
            )

        timer = PipelineTimer()
        ts = now_ms() if timestamp is None else timestamp

        with logging_context(trace_id=trace_id or uuid4().hex, project_id=project_id):
            logger.info(
                'pipeline.started',
                content_length=len(text),
                format_hint=raw.format_hint.value if raw.format_hint else None,
                existing_nodes=len(graph.nodes) if graph is not None else 0,
            )

            try:
                with timer.stage('parse'):
                    if raw.format_hint == FormatHint.DOCUMENT:
                        result = PipelineResult(source=SourceKind.GENERIC)
                        document = text
                    else:
                        parsed = parse_conversation(text)
                        result = PipelineResult(
                            source=parsed.source,
                            turn_count=len(parsed.turns),
                            composed_document=parsed.composed_document,
                        )
                        document = (
                            text if parsed.source == SourceKind.GENERIC else parsed.composed_document
                        )

                logger.info(
                    'pipeline.parse_complete',
                    source=result.source.value,
                    turns=result.turn_count,
                )

                if graph is None or graph.is_empty:
                    with timer.stage('generate'):
                        generated = document_to_graph(document, infer_defaults=True, timestamp=ts)
                    result.nodes = generated.nodes
                    result.edges = generated.edges
                else:
                    with timer.stage('smart_import'):
                        merged = await self.smart_importer.run(document, graph.summaries(), timestamp=ts)
                    result.nodes = merged.new_nodes
                    result.edges = merged.new_edges
                    result.updates = merged.updates
                    result.summary = merged.summary
                    result.warnings.extend(merged.warnings)

            except ValidationError:
                raise
            except PipelineError as e:
                logger.error('pipeline.failed', error=str(e), error_type=type(e).__name__)
                raise
            except Exception as e:
                logger.error('pipeline.failed', error=str(e), error_type=type(e).__name__)
                raise PipelineError(
                    f'Import failed: {e}',
                    context={'format_hint': raw.format_hint.value if raw.format_hint else None},
                ) from e

            result.processing_time_ms = int(timer.total_ms)
            result.stage_timings = timer.stages.copy()

            logger.info(
                'pipeline.complete',
                nodes=len(result.nodes),
                edges=len(result.edges),
                updates=len(result.updates),
                warnings=len(result.warnings),
                **timer.summary(),
            )

            return result
