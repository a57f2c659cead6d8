"""
Pipeline components for conversation parsing, list normalization, ranking,
name matching, merging and graph generation.
"""

from .composer import compose_document, parse_conversation, source_label
from .content_extractor import (
    DEFAULT_PATTERNS,
    ExtractionPatterns,
    TechMention,
    TechPattern,
    extract_features,
    extract_tasks,
    extract_tech,
    extract_tech_mentions,
)
from .detector import detect, parse_dialogue, parse_transcript
from .document import ParsedDocument, document_to_graph, finalize_items, parse_document
from .extractor import DetailExtractionResult, DetailExtractor, OpenAIDetailExtractor
from .generator import GeneratedGraph, PromptSpec, generate_graph
from .matcher import MatchOutcome, NameMatcher, similarity
from .merger import build_field_update, populated_fields
from .normalizer import (
    normalize_feature_list,
    normalize_item_list,
    normalize_names,
    normalize_screen_list,
)
from .pipeline import ImportPipeline, PipelineResult
from .prompt_builder import build_rich_prompt
from .ranker import ScoredItem, rank, rank_features, rank_screens
from .smart_import import SmartImporter
from .wizard import WizardAnswers, wizard_to_graph

__all__ = [
    # Main Pipeline
    'ImportPipeline',
    'PipelineResult',
    'SmartImporter',
    # Parsing
    'detect',
    'parse_transcript',
    'parse_dialogue',
    'parse_conversation',
    'compose_document',
    'source_label',
    'parse_document',
    'finalize_items',
    'ParsedDocument',
    # Content extraction
    'ExtractionPatterns',
    'TechPattern',
    'TechMention',
    'DEFAULT_PATTERNS',
    'extract_features',
    'extract_tech',
    'extract_tech_mentions',
    'extract_tasks',
    # Normalization and ranking
    'normalize_item_list',
    'normalize_feature_list',
    'normalize_screen_list',
    'normalize_names',
    'ScoredItem',
    'rank',
    'rank_features',
    'rank_screens',
    'build_rich_prompt',
    # Matching and merging
    'NameMatcher',
    'MatchOutcome',
    'similarity',
    'populated_fields',
    'build_field_update',
    # Detail extraction
    'DetailExtractor',
    'DetailExtractionResult',
    'OpenAIDetailExtractor',
    # Generation
    'GeneratedGraph',
    'PromptSpec',
    'generate_graph',
    'document_to_graph',
    'WizardAnswers',
    'wizard_to_graph',
]
