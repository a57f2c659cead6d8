"""
Tests for exception types and OpenAI error classification.
"""

import pytest

from idea_graph.errors import (
    ClientError,
    ExtractionError,
    IdeaGraphError,
    MergeError,
    OpenAIError,
    OpenAIModelError,
    OpenAIRateLimitError,
    PipelineError,
    ValidationError,
    wrap_openai_error,
)


class TestIdeaGraphError:
    def test_str_includes_context(self):
        error = IdeaGraphError("Input too long", context={"length": 25001})

        assert error.message == "Input too long"
        assert str(error) == "Input too long | context={'length': 25001}"

    def test_str_without_context(self):
        assert str(IdeaGraphError("Empty input")) == "Empty input"
        assert IdeaGraphError("Empty input").context == {}

    @pytest.mark.parametrize("cls", [ValidationError, ExtractionError, MergeError])
    def test_pipeline_branch(self, cls):
        assert issubclass(cls, PipelineError)
        assert not issubclass(cls, ClientError)

    def test_client_branch(self):
        assert issubclass(OpenAIRateLimitError, OpenAIError)
        assert issubclass(OpenAIModelError, OpenAIError)
        assert not issubclass(OpenAIError, PipelineError)


class TestWrapOpenAIError:
    def test_rate_limit_by_message(self):
        wrapped = wrap_openai_error(RuntimeError("429: rate_limit reached"))

        assert isinstance(wrapped, OpenAIRateLimitError)
        assert wrapped.context["error_type"] == "RuntimeError"

    def test_refusal_from_client(self):
        wrapped = wrap_openai_error(ValueError("Model refused structured response: no"))

        assert isinstance(wrapped, OpenAIModelError)

    def test_unclassified(self):
        wrapped = wrap_openai_error(Exception("connection reset"), context={"features": 2})

        assert type(wrapped) is OpenAIError
        assert wrapped.context == {
            "features": 2,
            "original_error": "connection reset",
            "error_type": "Exception",
        }

    def test_caller_context_not_mutated(self):
        context = {"screens": 1}

        wrap_openai_error(Exception("boom"), context=context)

        assert context == {"screens": 1}
