"""
Tests for the pasted-document parser and fresh document import.
"""

from idea_graph.models.nodes import TargetTool, TechCategory
from idea_graph.pipeline.document import (
    IMPORTED_NOTE_TITLE,
    detect_tool,
    document_to_graph,
    field_for_key,
    finalize_items,
    parse_document,
    parse_tech_item,
    section_for_heading,
)


class TestLineHelpers:
    def test_section_aliases(self):
        assert section_for_heading('Core Features') == 'features'
        assert section_for_heading('**Pages**') == 'screens'
        assert section_for_heading('Tech Stack') == 'tech_stack'
        assert section_for_heading('Build notes') == 'notes'
        assert section_for_heading('Random') is None

    def test_alias_needs_word_boundary(self):
        # "ui" inside another word is not the screens alias
        assert section_for_heading('Guidelines') is None

    def test_key_words(self):
        assert field_for_key('Project Name') == 'app_name'
        assert field_for_key('Audience') == 'target_user'
        assert field_for_key('Pain points') == 'core_problem'
        assert field_for_key('Color') is None

    def test_detect_tool(self):
        assert detect_tool('We prototype everything in Cursor.') == TargetTool.CURSOR
        assert detect_tool('Use bolt.new for the MVP') == TargetTool.BOLT
        assert detect_tool('No tool named here') == TargetTool.CLAUDE

    def test_tech_item_with_category(self):
        tech = parse_tech_item('Hosting - Vercel')

        assert tech.category == TechCategory.HOSTING
        assert tech.tool_name == 'Vercel'

    def test_known_tech_item(self):
        tech = parse_tech_item('Supabase')

        assert tech.category == TechCategory.DATABASE
        assert tech.notes == 'Open-source Firebase alternative'

    def test_unknown_tech_item(self):
        tech = parse_tech_item('Zyzzyva')

        assert tech.category == TechCategory.OTHER
        assert tech.tool_name == 'Zyzzyva'


class TestParseDocument:
    """Test section routing."""

    def test_full_document(self, spec_document):
        parsed = parse_document(spec_document)

        assert parsed.app_name == 'TaskFlow'
        assert parsed.target_user == 'Small remote teams'
        assert parsed.core_problem == 'Tasks get lost across chat threads'
        assert parsed.features == ['Task Boards', 'Due Date Reminders', 'Team Chat']
        assert parsed.screens == ['Board View', 'Settings']
        assert [(t.category, t.tool_name) for t in parsed.tech_stack] == [
            (TechCategory.FRONTEND, 'React'),
            (TechCategory.DATABASE, 'PostgreSQL'),
        ]
        assert [p.text for p in parsed.prompts] == ['Build the board view with drag and drop']
        assert parsed.tool == TargetTool.CLAUDE

    def test_text_section_lines_join(self):
        parsed = parse_document('## Description\nA tool for teams.\nIt syncs calendars.')

        assert parsed.description == 'A tool for teams. It syncs calendars.'

    def test_first_note_becomes_description(self):
        parsed = parse_document('A budgeting app for students.\nSecond thought.')

        assert parsed.description == 'A budgeting app for students.'
        assert parsed.notes == ['A budgeting app for students.', 'Second thought.']

    def test_screen_table_rows(self):
        text = (
            '## Screens\n'
            '| # | Screen | Purpose |\n'
            '|---|--------|---------|\n'
            '| 1 | Login | Sign in |\n'
            '| 2 | Inbox | Read mail |'
        )

        assert parse_document(text).screens == ['Login', 'Inbox']

    def test_prompts_use_detected_tool(self):
        parsed = parse_document('Built with Lovable.\n\n## Prompts\n- Scaffold the app')

        assert parsed.prompts[0].target_tool == TargetTool.LOVABLE

    def test_empty_text(self):
        parsed = parse_document('  \n ')

        assert parsed.source_excerpt == ''
        assert parsed.features == []


class TestFinalizeItems:
    def test_compacts_and_dedupes(self):
        parsed = parse_document('## Features\n- Auth — email sign in\n- auth\n- Chat')

        finalize_items(parsed)

        assert parsed.features == ['Auth', 'Chat']

    def test_dedupes_tech_case_insensitively(self):
        parsed = parse_document('## Tech Stack\n- React\n- react\n- Redis')

        finalize_items(parsed)

        assert [t.tool_name for t in parsed.tech_stack] == ['React', 'Redis']

    def test_infers_defaults(self):
        text = 'My app helps freelancers send invoices and get payment reminders by email.\nBuilt with Django.'

        parsed = finalize_items(parse_document(text), infer_defaults=True)

        assert parsed.features == ['Notifications', 'Payment Integration']
        assert [t.tool_name for t in parsed.tech_stack] == ['Django']

    def test_no_inference_by_default(self):
        text = 'My app helps freelancers send invoices.\nBuilt with Django.'

        parsed = finalize_items(parse_document(text))

        assert parsed.features == []
        assert parsed.tech_stack == []


class TestDocumentToGraph:
    """Test fresh document import."""

    def test_graph_with_imported_note(self, spec_document):
        graph = document_to_graph(spec_document, timestamp=100)

        types = [node.type for node in graph.nodes]
        assert types.count('feature') == 3
        assert types.count('screen') == 2
        assert types.count('techStack') == 2
        assert types.count('prompt') == 1
        assert len(graph.nodes) == 10
        assert len(graph.edges) == 11

        note = graph.nodes[-1]
        assert note.id == 'note-import-100'
        assert note.data.title == IMPORTED_NOTE_TITLE
        assert note.data.body == spec_document
        assert note.data.expanded is True
        assert (note.position.x, note.position.y) == (-320.0, 430.0)
        assert graph.edges[-1].source == 'note-import-100'
        assert graph.edges[-1].target == 'idea-100'

    def test_source_excerpt_is_capped(self):
        text = 'App Name: Big\n' + 'x' * 5000

        graph = document_to_graph(text, timestamp=1)

        assert len(graph.nodes[-1].data.body) == 2000

    def test_empty_text_yields_empty_graph(self):
        graph = document_to_graph('   ', timestamp=1)

        assert graph.nodes == []
        assert graph.edges == []
