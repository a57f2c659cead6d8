"""
Tests for the OpenAI-backed detail extractor.

The OpenAI client is replaced with AsyncMock; response sanitization and
error wrapping run for real.
"""

from unittest.mock import AsyncMock

import pytest

from idea_graph.errors import ExtractionError
from idea_graph.models.nodes import FeatureEffort, FeatureNodeData, FeaturePriority, ScreenNodeData
from idea_graph.pipeline.extractor import DetailExtractionResult, OpenAIDetailExtractor
from idea_graph.prompts import DetailExtractionResponse, RawFeatureDetails, RawScreenDetails


def _mock_client(response=None, error=None) -> AsyncMock:
    client = AsyncMock()
    if error is not None:
        client.chat_completion_structured = AsyncMock(side_effect=error)
    else:
        client.chat_completion_structured = AsyncMock(return_value=response)
    return client


class TestDetailExtractionResult:
    def test_lookup_is_case_insensitive(self):
        result = DetailExtractionResult(
            features=[FeatureNodeData(feature_name='Team Chat', summary='Chat per board')],
            screens=[ScreenNodeData(screen_name='Settings')],
        )

        assert result.feature_by_name('team chat').summary == 'Chat per board'
        assert result.screen_by_name('SETTINGS') is not None
        assert result.feature_by_name('Billing') is None


class TestOpenAIDetailExtractor:
    """Test extraction, sanitization and error handling."""

    @pytest.mark.asyncio
    async def test_sanitizes_response(self):
        response = DetailExtractionResponse(
            features=[
                RawFeatureDetails(
                    feature_name='  Team Chat ',
                    summary='Chat per board',
                    priority='Critical',
                    effort='L',
                    acceptance_criteria=['Messages appear instantly', ''],
                ),
                RawFeatureDetails(summary='No name, dropped'),
            ],
            screens=[RawScreenDetails(screen_name='Settings', purpose='Configure alerts')],
        )
        client = _mock_client(response)
        extractor = OpenAIDetailExtractor(client)

        result = await extractor.extract(['Team Chat'], ['Settings'], 'Source document')

        assert len(result.features) == 1
        feature = result.features[0]
        assert feature.feature_name == 'Team Chat'
        assert feature.priority == FeaturePriority.MUST
        assert feature.effort == FeatureEffort.L
        assert feature.acceptance_criteria == ['Messages appear instantly']
        assert result.screens[0].purpose == 'Configure alerts'

    @pytest.mark.asyncio
    async def test_prompt_names_targets(self):
        client = _mock_client(DetailExtractionResponse())
        extractor = OpenAIDetailExtractor(client)

        await extractor.extract(['Team Chat', 'Task Boards'], [], 'Source document')

        kwargs = client.chat_completion_structured.call_args.kwargs
        assert kwargs['response_model'] is DetailExtractionResponse
        user_content = kwargs['messages'][1]['content']
        assert 'FEATURES TO DETAIL: Team Chat, Task Boards' in user_content
        assert 'SCREENS TO DETAIL' not in user_content

    @pytest.mark.asyncio
    async def test_field_length_override(self):
        response = DetailExtractionResponse(
            features=[RawFeatureDetails(feature_name='Team Chat', summary='x' * 50)],
        )
        extractor = OpenAIDetailExtractor(_mock_client(response), max_field_length=10)

        result = await extractor.extract(['Team Chat'], [], 'doc')

        assert result.features[0].summary == 'x' * 10

    @pytest.mark.asyncio
    async def test_no_names_skips_call(self):
        client = _mock_client(DetailExtractionResponse())
        extractor = OpenAIDetailExtractor(client)

        result = await extractor.extract([], [], 'doc')

        assert result.features == []
        assert result.screens == []
        client.chat_completion_structured.assert_not_called()

    @pytest.mark.asyncio
    async def test_service_error_raises_extraction_error(self):
        client = _mock_client(error=Exception('Rate limit exceeded'))
        extractor = OpenAIDetailExtractor(client)

        with pytest.raises(ExtractionError) as exc_info:
            await extractor.extract(['Team Chat'], ['Settings'], 'doc')

        context = exc_info.value.context
        assert context['features'] == 1
        assert context['screens'] == 1
        assert context['error_type'] == 'Exception'
        assert 'rate limit' in str(exc_info.value).lower()
