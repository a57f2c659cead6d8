"""
Exception types for idea-graph.

Parsing, normalization, matching and graph generation never raise on
malformed text; they degrade to empty results instead. What remains are
failures of the orchestration layer (bad input size, a graph update that
does not fit) and of the external detail extraction service.
"""

from typing import Any

import openai


class IdeaGraphError(Exception):
    """Root of the package's exceptions. ``context`` carries debugging fields."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if not self.context:
            return self.message
        return f"{self.message} | context={self.context}"


# =============================================================================
# Detail extraction service
# =============================================================================


class ClientError(IdeaGraphError):
    pass


class OpenAIError(ClientError):
    """An OpenAI call failed after retries."""


class OpenAIRateLimitError(OpenAIError):
    pass


class OpenAIModelError(OpenAIError):
    """The model refused, or its reply did not fit the response schema."""


# =============================================================================
# Import pipeline
# =============================================================================


class PipelineError(IdeaGraphError):
    """An import could not complete. The HTTP layer maps this to a 500."""


class ValidationError(PipelineError):
    """Import text is empty or longer than MAX_INPUT_LENGTH."""


class ExtractionError(PipelineError):
    """Detail extraction failed; the import falls back to names only."""


class MergeError(PipelineError):
    """A FieldUpdate names a missing node, the wrong node type, or an invalid value."""


def wrap_openai_error(exc: Exception, context: dict[str, Any] | None = None) -> OpenAIError:
    """
    Classify an exception raised during an OpenAI call.

    SDK exception types decide first; the message text is the fallback for
    errors that arrive wrapped or re-raised as plain exceptions.
    """
    ctx = {**(context or {}), 'original_error': str(exc), 'error_type': type(exc).__name__}
    text = str(exc).lower()

    if isinstance(exc, openai.RateLimitError) or 'rate limit' in text or 'rate_limit' in text:
        return OpenAIRateLimitError(f"OpenAI rate limit exceeded: {exc}", context=ctx)
    if isinstance(exc, ValueError) or 'content policy' in text or 'refused' in text:
        return OpenAIModelError(f"OpenAI model refused request: {exc}", context=ctx)
    return OpenAIError(f"OpenAI API error: {exc}", context=ctx)
