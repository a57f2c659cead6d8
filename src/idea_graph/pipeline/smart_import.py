"""
Smart import: merge a document into an existing project graph.

Steps:
1. Parse the document and normalize its item names (with fallback inference)
2. Match extracted items against the existing-node snapshot
3. Ask the detail extractor for fields of every feature/screen name
4. Build fill-only-if-empty FieldUpdates for matched nodes
5. Generate new nodes/edges for unmatched items only

A failing detail extractor never fails the import: the run continues with
names only.
"""

from collections.abc import Sequence
from typing import Any

from ..config import config
from ..errors import ValidationError
from ..logging import get_logger
from ..models.merge import (
    ExistingEntitySummary,
    ExtractedItem,
    FieldUpdate,
    NodeMatch,
    SmartImportResult,
    SmartImportSummary,
)
from ..models.nodes import FeatureNodeData, NodeType, ScreenNodeData, TechStackNodeData
from .document import ParsedDocument, finalize_items, parse_document
from .extractor import DetailExtractionResult, DetailExtractor
from .generator import generate_graph
from .matcher import NameMatcher
from .merger import build_field_update

logger = get_logger(__name__)


def extracted_items(parsed: ParsedDocument) -> list[ExtractedItem]:
    """Items to match, idea first when the document names the app."""
    items: list[ExtractedItem] = []
    if parsed.app_name:
        items.append(ExtractedItem(name=parsed.app_name, type=NodeType.IDEA))
    items.extend(ExtractedItem(name=n, type=NodeType.FEATURE) for n in parsed.features)
    items.extend(ExtractedItem(name=n, type=NodeType.SCREEN) for n in parsed.screens)
    items.extend(ExtractedItem(name=t.tool_name, type=NodeType.TECH_STACK) for t in parsed.tech_stack)
    return items


class SmartImporter:
    """
    Reconciles a document against an existing graph snapshot.

    The existing snapshot is read-only; the caller applies the returned
    updates and appends the new nodes/edges.
    """

    def __init__(
        self,
        detail_extractor: DetailExtractor | None = None,
        matcher: NameMatcher | None = None,
    ):
        """
        Initialize the importer.

        Args:
            detail_extractor: Source of per-item fields; None runs name-only
            matcher: Name matcher (default threshold and similarity)
        """
        self.detail_extractor = detail_extractor
        self.matcher = matcher or NameMatcher()

    async def run(
        self,
        text: str,
        existing: Sequence[ExistingEntitySummary],
        timestamp: int | None = None,
    ) -> SmartImportResult:
        """
        Compute updates and new nodes for one document.

        Raises:
            ValidationError: text is empty or longer than MAX_INPUT_LENGTH
        """
        if not text or not text.strip():
            raise ValidationError('Document text is required')
        if len(text) > config.MAX_INPUT_LENGTH:
            raise ValidationError(
                'Document is too long',
                context={'length': len(text), 'max_length': config.MAX_INPUT_LENGTH},
            )

        parsed = finalize_items(parse_document(text), infer_defaults=True)
        items = extracted_items(parsed)
        outcome = self.matcher.match(items, existing)

        warnings: list[str] = []
        details = await self._extract_details(parsed.features, parsed.screens, text, warnings)

        updates = self._build_updates(outcome.matches, existing, parsed, details)

        unmatched: dict[NodeType, list[str]] = {node_type: [] for node_type in NodeType}
        for item in outcome.unmatched:
            unmatched[item.type].append(item.name)

        features: list[FeatureNodeData | str] = [
            details.feature_by_name(name) or name for name in unmatched[NodeType.FEATURE]
        ]
        screens: list[ScreenNodeData | str] = [
            details.screen_by_name(name) or name for name in unmatched[NodeType.SCREEN]
        ]
        unmatched_tech = set(unmatched[NodeType.TECH_STACK])
        tech: list[TechStackNodeData] = [t for t in parsed.tech_stack if t.tool_name in unmatched_tech]

        has_idea = any(node.type == NodeType.IDEA for node in existing)
        generated = generate_graph(
            parsed.idea,
            features,
            screens,
            tech,
            skip_idea_node=has_idea,
            target_tool=parsed.tool,
            timestamp=timestamp,
        )

        summary = SmartImportSummary(
            nodes_updated=len(updates),
            fields_filled_total=sum(len(u.fields_to_fill) for u in updates),
            nodes_created=len(generated.nodes),
            nodes_skipped=len(outcome.matches) - len(updates),
            match_details=outcome.matches,
        )

        logger.info(
            'smart_import.completed',
            extracted=len(items),
            matched=len(outcome.matches),
            nodes_updated=summary.nodes_updated,
            fields_filled=summary.fields_filled_total,
            nodes_created=summary.nodes_created,
        )

        return SmartImportResult(
            updates=updates,
            new_nodes=generated.nodes,
            new_edges=generated.edges,
            summary=summary,
            warnings=warnings,
        )

    async def _extract_details(
        self,
        feature_names: list[str],
        screen_names: list[str],
        text: str,
        warnings: list[str],
    ) -> DetailExtractionResult:
        if self.detail_extractor is None or not (feature_names or screen_names):
            return DetailExtractionResult()
        try:
            return await self.detail_extractor.extract(feature_names, screen_names, text)
        except Exception as exc:
            logger.warning(
                'smart_import.detail_extraction_failed',
                error=str(exc),
                error_type=type(exc).__name__,
            )
            warnings.append(f'Detail extraction failed, imported names only: {exc}')
            return DetailExtractionResult()

    def _build_updates(
        self,
        matches: list[NodeMatch],
        existing: Sequence[ExistingEntitySummary],
        parsed: ParsedDocument,
        details: DetailExtractionResult,
    ) -> list[FieldUpdate]:
        by_id = {node.id: node for node in existing}
        updates: list[FieldUpdate] = []

        for match in matches:
            node = by_id.get(match.existing_node_id)
            if node is None:
                continue
            candidate = self._candidate_fields(node.type, match.extracted_name, parsed, details)
            update = build_field_update(node.id, node.type, node.populated_fields, candidate)
            if update is not None:
                updates.append(update)

        return updates

    @staticmethod
    def _candidate_fields(
        node_type: NodeType,
        name: str,
        parsed: ParsedDocument,
        details: DetailExtractionResult,
    ) -> dict[str, Any]:
        if node_type == NodeType.FEATURE:
            feature = details.feature_by_name(name)
            return feature.model_dump(mode='json') if feature else {}
        if node_type == NodeType.SCREEN:
            screen = details.screen_by_name(name)
            return screen.model_dump(mode='json') if screen else {}
        if node_type == NodeType.IDEA:
            return {
                'description': parsed.description,
                'target_user': parsed.target_user,
                'core_problem': parsed.core_problem,
                'app_name': parsed.app_name,
            }
        if node_type == NodeType.TECH_STACK:
            tech = next((t for t in parsed.tech_stack if t.tool_name == name), None)
            return {'notes': tech.notes, 'category': tech.category.value} if tech else {}
        return {}
