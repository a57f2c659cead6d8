"""
Prompt templates and response models for the detail extraction service.
"""

from .extract_details import (
    DETAIL_EXTRACTION_SYSTEM_PROMPT,
    DetailExtractionResponse,
    RawFeatureDetails,
    RawScreenDetails,
    build_detail_extraction_messages,
    truncate_source,
)

__all__ = [
    'DETAIL_EXTRACTION_SYSTEM_PROMPT',
    'DetailExtractionResponse',
    'RawFeatureDetails',
    'RawScreenDetails',
    'build_detail_extraction_messages',
    'truncate_source',
]
