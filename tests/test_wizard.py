"""
Tests for wizard answers -> graph.
"""

from idea_graph.models.nodes import TechCategory
from idea_graph.pipeline.wizard import WizardAnswers, wizard_to_graph


class TestWizardToGraph:
    def test_free_text_answers(self):
        answers = WizardAnswers(
            app_name='  Habit Hero ',
            description='Build better habits',
            features='Streaks, Reminders',
            screens='Home\nStats',
            tech_stack='React, Supabase',
        )

        graph = wizard_to_graph(answers, timestamp=7)

        idea = graph.nodes[0]
        assert idea.id == 'idea-7'
        assert idea.data.app_name == 'Habit Hero'
        assert [n.data.feature_name for n in graph.nodes if n.type == 'feature'] == ['Streaks', 'Reminders']
        assert [n.data.screen_name for n in graph.nodes if n.type == 'screen'] == ['Home', 'Stats']
        tech = [n.data for n in graph.nodes if n.type == 'techStack']
        assert [(t.tool_name, t.category) for t in tech] == [
            ('React', TechCategory.FRONTEND),
            ('Supabase', TechCategory.DATABASE),
        ]
        assert len(graph.nodes) == 7
        assert len(graph.edges) == 6

    def test_json_answers(self):
        answers = WizardAnswers(
            app_name='Habit Hero',
            features='[{"name": "Streaks"}, "Reminders", null]',
            screens='[{"screenName": "Home"}]',
        )

        graph = wizard_to_graph(answers, timestamp=7)

        names = [n.name for n in graph.nodes]
        assert names == ['Habit Hero', 'Streaks', 'Reminders', 'Home']

    def test_empty_answers_yield_idea_only(self):
        graph = wizard_to_graph(WizardAnswers(), timestamp=7)

        assert [n.type for n in graph.nodes] == ['idea']
        assert graph.edges == []
