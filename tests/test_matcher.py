"""
Tests for the name matcher.

Tests cover:
- Name normalization and similarity scores
- Same-type scoping
- Greedy one-to-one assignment
- Pluggable similarity function
"""

import pytest

from idea_graph.models.merge import ExistingEntitySummary, ExtractedItem
from idea_graph.models.nodes import NodeType
from idea_graph.pipeline.matcher import (
    CONTAINMENT_SCORE,
    NameMatcher,
    levenshtein,
    match,
    normalize_name,
    similarity,
)


def _existing(node_id: str, node_type: NodeType, name: str) -> ExistingEntitySummary:
    return ExistingEntitySummary(id=node_id, type=node_type, name=name)


def _item(name: str, node_type: NodeType = NodeType.FEATURE) -> ExtractedItem:
    return ExtractedItem(name=name, type=node_type)


class TestSimilarity:
    """Test normalization and scoring."""

    def test_normalize_strips_suffix_words_and_punctuation(self):
        assert normalize_name('Login Screen') == 'login'
        assert normalize_name('  User-Profile  Page!') == 'userprofile'

    def test_levenshtein(self):
        assert levenshtein('kitten', 'sitting') == 3
        assert levenshtein('', 'abc') == 3
        assert levenshtein('same', 'same') == 0

    def test_exact_after_normalization(self):
        assert similarity('Login Screen', 'login') == 1.0

    def test_containment(self):
        assert similarity('Auth', 'Auth Flow') == CONTAINMENT_SCORE

    def test_edit_distance_ratio(self):
        assert similarity('Dashbord', 'Dashboard') == pytest.approx(1 - 1 / 9)

    def test_empty_after_normalization(self):
        assert similarity('Screen', 'Login') == 0.0

    def test_suffix_only_names_do_not_collide(self):
        assert similarity('Page', 'View') == 0.0
        assert similarity('Feature', 'Module') == 0.0
        assert similarity('#', 'Screen') == 0.0
        assert similarity('Page', 'page ') == 1.0


class TestNameMatcher:
    """Test match assignment."""

    def test_case_insensitive_match(self):
        outcome = match(
            [_item('user authentication')],
            [_existing('f1', NodeType.FEATURE, 'User Authentication')],
        )

        assert len(outcome.matches) == 1
        assert outcome.matches[0].existing_node_id == 'f1'
        assert outcome.matches[0].confidence == 1.0
        assert outcome.unmatched == []

    def test_same_type_only(self):
        outcome = match(
            [_item('Settings', NodeType.SCREEN)],
            [_existing('f1', NodeType.FEATURE, 'Settings')],
        )

        assert outcome.matches == []
        assert outcome.unmatched == [_item('Settings', NodeType.SCREEN)]

    def test_one_to_one_best_first(self):
        """The closest extracted name takes the node; the other stays unmatched."""
        outcome = match(
            [_item('Dashbord'), _item('Dashboard')],
            [_existing('f1', NodeType.FEATURE, 'Dashboard')],
        )

        assert [(m.extracted_name, m.existing_node_id) for m in outcome.matches] == [('Dashboard', 'f1')]
        assert [i.name for i in outcome.unmatched] == ['Dashbord']

    def test_each_existing_node_used_once(self):
        outcome = match(
            [_item('Chat'), _item('Team Chat')],
            [
                _existing('f1', NodeType.FEATURE, 'Team Chat'),
                _existing('f2', NodeType.FEATURE, 'Chat'),
            ],
        )

        pairs = {(m.extracted_name, m.existing_node_id) for m in outcome.matches}
        assert pairs == {('Chat', 'f2'), ('Team Chat', 'f1')}

    def test_below_threshold_unmatched(self):
        outcome = match([_item('Payments')], [_existing('f1', NodeType.FEATURE, 'Search')])

        assert outcome.matches == []

    def test_prompts_and_notes_never_match(self):
        outcome = match(
            [_item('Build it', NodeType.PROMPT)],
            [_existing('p1', NodeType.PROMPT, 'Build it')],
        )

        assert outcome.matches == []
        assert len(outcome.unmatched) == 1

    def test_custom_similarity_and_threshold(self):
        matcher = NameMatcher(threshold=0.5, similarity_fn=lambda a, b: 0.5)
        outcome = matcher.match(
            [_item('Anything')],
            [_existing('f1', NodeType.FEATURE, 'Else')],
        )

        assert outcome.matches[0].confidence == 0.5

    def test_suffix_only_names_stay_unmatched(self):
        outcome = match(
            [_item('Page', NodeType.SCREEN)],
            [_existing('s1', NodeType.SCREEN, 'View')],
        )

        assert outcome.matches == []
        assert [item.name for item in outcome.unmatched] == ['Page']

    def test_out_of_range_scores_clamped(self):
        matcher = NameMatcher(threshold=0.5, similarity_fn=lambda a, b: 1.7)
        outcome = matcher.match(
            [_item('Anything')],
            [_existing('f1', NodeType.FEATURE, 'Else')],
        )

        assert outcome.matches[0].confidence == 1.0

    def test_empty_inputs(self):
        outcome = match([], [])

        assert outcome.matches == []
        assert outcome.unmatched == []
