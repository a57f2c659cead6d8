"""
Tests for extraction-service response sanitizing.
"""

from idea_graph.models.nodes import FeatureEffort, FeaturePriority, FeatureStatus
from idea_graph.pipeline.sanitizer import (
    clamp_list,
    clamp_text,
    sanitize_feature_details,
    sanitize_features,
    sanitize_screen_details,
    sanitize_screens,
)
from idea_graph.prompts.extract_details import RawFeatureDetails, RawScreenDetails


class TestClamps:
    def test_clamp_text(self):
        assert clamp_text('  hello  ', 3) == 'hel'
        assert clamp_text(None, 10) == ''
        assert clamp_text(42, 10) == ''

    def test_clamp_list(self):
        assert clamp_list(['a', '', None, 'b', 'c'], 2) == ['a', 'b']
        assert clamp_list('not a list', 5) == []
        assert clamp_list(['x' * 300], 5) == ['x' * 200]


class TestSanitizeFeature:
    """Test feature entry coercion."""

    def test_valid_enums_kept(self):
        feature = sanitize_feature_details(
            {'feature_name': 'Auth', 'priority': 'Should', 'status': 'Built', 'effort': 'XL'}
        )

        assert feature.priority == FeaturePriority.SHOULD
        assert feature.status == FeatureStatus.BUILT
        assert feature.effort == FeatureEffort.XL

    def test_invalid_enums_defaulted(self):
        feature = sanitize_feature_details(
            {'feature_name': 'Auth', 'priority': 'Critical', 'status': 'done', 'effort': 'huge'}
        )

        assert feature.priority == FeaturePriority.MUST
        assert feature.status == FeatureStatus.PLANNED
        assert feature.effort == FeatureEffort.M

    def test_text_and_lists_clamped(self):
        feature = sanitize_feature_details(
            {
                'feature_name': 'Auth',
                'summary': 's' * 1000,
                'acceptance_criteria': [f'criterion {i}' for i in range(20)],
            },
            max_field_length=50,
        )

        assert len(feature.summary) == 50
        assert len(feature.acceptance_criteria) == 8

    def test_unnamed_entry_dropped(self):
        assert sanitize_feature_details({'feature_name': '   ', 'summary': 'x'}) is None
        assert sanitize_feature_details({}) is None

    def test_accepts_response_model(self):
        raw = RawFeatureDetails(feature_name='Search', summary='Find things', priority='Nice')
        feature = sanitize_feature_details(raw)

        assert feature.feature_name == 'Search'
        assert feature.priority == FeaturePriority.NICE
        assert feature.problem == ''

    def test_list_helper_drops_unnamed(self):
        features = sanitize_features([{'feature_name': 'A1'}, {'summary': 'orphan'}])

        assert [f.feature_name for f in features] == ['A1']


class TestSanitizeScreen:
    def test_lists_clamped_per_field(self):
        screen = sanitize_screen_details(
            RawScreenDetails(
                screen_name='Inbox',
                key_elements=[f'el{i}' for i in range(20)],
                states=['loading', 'error', 'success', 'empty'],
            )
        )

        assert len(screen.key_elements) == 12
        assert screen.states == ['loading', 'error', 'success', 'empty']

    def test_unnamed_screen_dropped(self):
        assert sanitize_screens([{'purpose': 'x'}, {'screen_name': 'Home'}])[0].screen_name == 'Home'
