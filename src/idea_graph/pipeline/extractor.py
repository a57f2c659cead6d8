"""
Detail extraction service.

Fills the descriptive fields of named features and screens from a source
document. The pipeline depends only on the DetailExtractor protocol; the
OpenAI-backed implementation uses structured output and sanitizes every
response before handing it on.
"""

from dataclasses import dataclass, field
from typing import Protocol

from ..clients.openai_client import OpenAIClient
from ..errors import ExtractionError, wrap_openai_error
from ..logging import get_logger
from ..models.nodes import FeatureNodeData, ScreenNodeData
from ..prompts.extract_details import (
    DetailExtractionResponse,
    build_detail_extraction_messages,
)
from .sanitizer import sanitize_features, sanitize_screens

logger = get_logger(__name__)


@dataclass
class DetailExtractionResult:
    """Sanitized per-item details from one extraction call."""

    features: list[FeatureNodeData] = field(default_factory=list)
    screens: list[ScreenNodeData] = field(default_factory=list)

    def feature_by_name(self, name: str) -> FeatureNodeData | None:
        key = name.lower()
        return next((f for f in self.features if f.feature_name.lower() == key), None)

    def screen_by_name(self, name: str) -> ScreenNodeData | None:
        key = name.lower()
        return next((s for s in self.screens if s.screen_name.lower() == key), None)


class DetailExtractor(Protocol):
    async def extract(
        self,
        feature_names: list[str],
        screen_names: list[str],
        source_text: str,
    ) -> DetailExtractionResult:
        ...


class OpenAIDetailExtractor:
    """
    DetailExtractor backed by OpenAI structured output.

    Raises ExtractionError when the service fails; callers fall back to
    name-only behaviour.
    """

    def __init__(self, openai_client: OpenAIClient, max_field_length: int | None = None):
        """
        Initialize the extractor.

        Args:
            openai_client: Configured OpenAI client
            max_field_length: Clamp for text fields (default from config)
        """
        self.openai_client = openai_client
        self.max_field_length = max_field_length

    async def extract(
        self,
        feature_names: list[str],
        screen_names: list[str],
        source_text: str,
    ) -> DetailExtractionResult:
        if not feature_names and not screen_names:
            return DetailExtractionResult()

        messages = build_detail_extraction_messages(feature_names, screen_names, source_text)

        try:
            response = await self.openai_client.chat_completion_structured(
                messages=messages,
                response_model=DetailExtractionResponse,
            )
        except Exception as exc:
            wrapped = wrap_openai_error(
                exc,
                context={'features': len(feature_names), 'screens': len(screen_names)},
            )
            raise ExtractionError(str(wrapped), context=wrapped.context) from exc

        result = DetailExtractionResult(
            features=sanitize_features(response.features, self.max_field_length),
            screens=sanitize_screens(response.screens, self.max_field_length),
        )
        logger.info(
            'extractor.details_extracted',
            features_requested=len(feature_names),
            screens_requested=len(screen_names),
            features_returned=len(result.features),
            screens_returned=len(result.screens),
        )
        return result
