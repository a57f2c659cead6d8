"""
Idea Graph Import Pipeline

Turns pasted AI conversations and loose markdown documents into a project
graph of idea, feature, screen, tech-stack and prompt nodes, and merges
later imports into an existing graph without overwriting user edits.
"""

__version__ = '0.1.0'

# Re-export key classes for convenience
from .pipeline import (
    ImportPipeline,
    PipelineResult,
    SmartImporter,
    NameMatcher,
    OpenAIDetailExtractor,
    GeneratedGraph,
    generate_graph,
    parse_conversation,
)
from .project_graph import ProjectGraph
from .models import RawInput, FormatHint, SourceKind
from .logging import (
    configure_logging,
    get_logger,
    logging_context,
    PipelineTimer,
)
from .errors import (
    IdeaGraphError,
    PipelineError,
    ValidationError,
    ExtractionError,
    MergeError,
    OpenAIError,
)

__all__ = [
    # Version
    '__version__',
    # Main Pipeline
    'ImportPipeline',
    'PipelineResult',
    # Components
    'SmartImporter',
    'NameMatcher',
    'OpenAIDetailExtractor',
    'GeneratedGraph',
    'generate_graph',
    'parse_conversation',
    # Graph and inputs
    'ProjectGraph',
    'RawInput',
    'FormatHint',
    'SourceKind',
    # Logging
    'configure_logging',
    'get_logger',
    'logging_context',
    'PipelineTimer',
    # Errors
    'IdeaGraphError',
    'PipelineError',
    'ValidationError',
    'ExtractionError',
    'MergeError',
    'OpenAIError',
]
