"""
Tests for the markdown composer and parse_conversation.
"""

from idea_graph.models.conversation import ConversationTurn, Role, SourceKind
from idea_graph.pipeline.composer import (
    DESCRIPTION_MAX_CHARS,
    ELLIPSIS,
    EXCERPT_MAX_CHARS,
    MAX_ASSISTANT_EXCERPTS,
    compose_document,
    parse_conversation,
    source_label,
)


def _human(text: str) -> ConversationTurn:
    return ConversationTurn(role=Role.HUMAN, text=text)


def _assistant(text: str) -> ConversationTurn:
    return ConversationTurn(role=Role.ASSISTANT, text=text)


class TestSourceLabel:
    def test_labels(self):
        assert source_label(SourceKind.STRUCTURED_TRANSCRIPT) == 'Claude Code'
        assert source_label(SourceKind.PLAIN_DIALOGUE, 'User: hi\nAI: hello') == 'AI Conversation'
        assert source_label(SourceKind.PLAIN_DIALOGUE, 'User: ask Codex\nAI: ok') == 'Codex'
        assert source_label(SourceKind.GENERIC, 'mentions openai') == 'AI Conversation'


class TestComposeDocument:
    """Test the composed document layout."""

    def test_section_order(self):
        turns = [
            _human('Build a budgeting app.\n\nFeatures:\n- Expense tracking\n\nTODO: pick a name for it'),
            _assistant('Use React for the UI. ' + 'Details about the plan. ' * 5),
        ]
        document = compose_document(turns, 'AI Conversation')
        headings = [line for line in document.splitlines() if line.startswith('#')]

        assert headings == [
            '# AI Conversation Session Import',
            '## Description',
            '## Features',
            '## Tech Stack',
            '## Tasks',
            '## Conversation Summary',
        ]
        assert '- Expense tracking' in document
        assert '- React' in document
        assert '- pick a name for it' in document

    def test_metadata_block(self):
        document = compose_document(
            [_human('hello')],
            'Claude Code',
            session_id='abc',
            project_dir='/work/app',
            branch='feature/x',
        )
        lines = document.splitlines()

        assert lines[2:5] == [
            '> Session: `abc`',
            '> Project: `/work/app`',
            '> Branch: `feature/x`',
        ]

    def test_no_metadata_block_without_values(self):
        document = compose_document([_human('hello')], 'AI Conversation')

        assert '> ' not in document

    def test_empty_sections_omitted(self):
        document = compose_document([_human('just an idea')], 'AI Conversation')

        assert '## Features' not in document
        assert '## Tech Stack' not in document
        assert '## Tasks' not in document
        assert '## Conversation Summary' in document

    def test_description_truncated(self):
        long_text = 'a' * (DESCRIPTION_MAX_CHARS + 50)
        document = compose_document([_human(long_text)], 'AI Conversation')

        assert 'a' * DESCRIPTION_MAX_CHARS + ELLIPSIS in document
        assert 'a' * (DESCRIPTION_MAX_CHARS + 1) not in document

    def test_summary_uses_substantive_assistant_turns(self):
        short = _assistant('ok')
        long = _assistant('b' * (EXCERPT_MAX_CHARS + 10))
        document = compose_document([_human('q'), short, long], 'AI Conversation')
        summary = document.split('## Conversation Summary', 1)[1]

        assert 'b' * EXCERPT_MAX_CHARS + ELLIPSIS in summary
        assert '\nok' not in summary

    def test_summary_caps_assistant_excerpts(self):
        turns = [_assistant(f'{i:02d} ' + 'x' * 120) for i in range(MAX_ASSISTANT_EXCERPTS + 3)]
        summary = compose_document(turns, 'AI Conversation').split('## Conversation Summary', 1)[1]

        assert f'{MAX_ASSISTANT_EXCERPTS - 1:02d} ' in summary
        assert f'{MAX_ASSISTANT_EXCERPTS:02d} ' not in summary

    def test_summary_falls_back_to_human_turns(self):
        turns = [_human('first ask'), _assistant('short'), _human('second ask')]
        summary = compose_document(turns, 'AI Conversation').split('## Conversation Summary', 1)[1]

        assert 'first ask' in summary
        assert 'second ask' in summary
        assert 'short' not in summary

    def test_deterministic(self):
        turns = [_human('Build a CRM with Supabase'), _assistant('Sure. ' * 30)]

        assert compose_document(turns, 'Codex') == compose_document(turns, 'Codex')


class TestParseConversation:
    """Test the parse entry point."""

    def test_transcript(self, transcript_text):
        result = parse_conversation(transcript_text)

        assert result.source == SourceKind.STRUCTURED_TRANSCRIPT
        assert len(result.turns) == 2
        assert result.session_id == 'sess-42'
        assert result.composed_document.startswith('# Claude Code Session Import')
        assert '- Daily check-ins' in result.composed_document
        assert '## Tech Stack\n\n- React\n- Supabase' in result.composed_document

    def test_dialogue(self, dialogue_text):
        result = parse_conversation(dialogue_text)

        assert result.source == SourceKind.PLAIN_DIALOGUE
        assert len(result.human_turns) == 2
        assert len(result.assistant_turns) == 2
        assert result.composed_document.startswith('# AI Conversation Session Import')

    def test_generic_is_single_verbatim_turn(self):
        text = '  Some notes\nabout an app idea  '
        result = parse_conversation(text)

        assert result.source == SourceKind.GENERIC
        assert len(result.turns) == 1
        assert result.turns[0].role == Role.HUMAN
        assert result.turns[0].text == text

    def test_empty_input(self):
        result = parse_conversation('')

        assert result.source == SourceKind.GENERIC
        assert result.turns == []
        assert result.composed_document == ''

    def test_to_dict(self, dialogue_text):
        data = parse_conversation(dialogue_text).to_dict()

        assert data['source'] == 'plain-dialogue'
        assert data['turns'][0] == {'role': 'human', 'text': 'I need a recipe sharing app.', 'timestamp': None}
