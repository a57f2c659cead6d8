"""
Pytest configuration and shared fixtures.

Key fixtures:
- transcript_text: JSON-lines coding-assistant session
- dialogue_text: plain "Human:/Assistant:" dialogue
- spec_document: pasted markdown spec with every section
- existing_graph: a small ProjectGraph to merge into
- openai_api_key: OpenAI API key from environment (live tests only)

Only tests using openai_api_key touch the network; elsewhere the detail extraction service
is replaced with AsyncMock.
"""

import json
import os
import sys
from pathlib import Path

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

# Load environment variables
from dotenv import load_dotenv

env_file = Path(__file__).parent.parent / '.env'
if env_file.exists():
    load_dotenv(env_file)

from idea_graph.models.nodes import (
    FeatureNode,
    FeatureNodeData,
    IdeaNode,
    IdeaNodeData,
    ScreenNode,
    ScreenNodeData,
    TechCategory,
    TechStackNode,
    TechStackNodeData,
)
from idea_graph.project_graph import ProjectGraph


@pytest.fixture
def transcript_text() -> str:
    """Structured transcript: summary, user and assistant text, tool-only turns and an API error."""
    entries = [
        {'type': 'summary', 'summary': 'Habit tracker planning', 'sessionId': 'sess-42'},
        {
            'type': 'user',
            'sessionId': 'sess-42',
            'cwd': '/home/dev/habits',
            'gitBranch': 'main',
            'message': {'role': 'user', 'content': 'I want to build a habit tracker app with streaks.'},
        },
        {
            'type': 'assistant',
            'message': {
                'role': 'assistant',
                'content': [
                    {
                        'type': 'text',
                        'text': (
                            'Here is a plan for the habit tracker.\n\n'
                            '## Features\n'
                            '- Daily check-ins\n'
                            '- Streak tracking\n'
                            '- Reminder notifications\n\n'
                            'We can build it with React and Supabase.'
                        ),
                    },
                ],
            },
        },
        {
            'type': 'assistant',
            'message': {
                'role': 'assistant',
                'content': [{'type': 'tool_use', 'id': 't1', 'name': 'Write', 'input': {}}],
            },
        },
        {
            'type': 'user',
            'message': {
                'role': 'user',
                'content': [{'type': 'tool_result', 'tool_use_id': 't1', 'content': 'ok'}],
            },
        },
        {
            'type': 'assistant',
            'isApiErrorMessage': True,
            'message': {'role': 'assistant', 'content': 'API Error: overloaded'},
        },
    ]
    return '\n'.join(json.dumps(entry) for entry in entries)


@pytest.fixture
def dialogue_text() -> str:
    """Plain dialogue with role markers."""
    return (
        'Human: I need a recipe sharing app.\n'
        'Assistant: Great idea. Core features could be recipe upload and search.\n'
        'Human: Add meal planning too.\n'
        'Assistant: Sure, meal planning fits well.'
    )


@pytest.fixture
def spec_document() -> str:
    """Pasted markdown spec document."""
    return """
App Name: TaskFlow
Target User: Small remote teams
Problem: Tasks get lost across chat threads

## Features
- Task Boards
- Due Date Reminders
- Team Chat

## Screens
- Board View
- Settings

## Tech Stack
- Frontend: React
- Database: PostgreSQL

## Prompts
- Build the board view with drag and drop
""".strip()


@pytest.fixture
def existing_graph() -> ProjectGraph:
    """Graph with an idea, one detailed feature, one bare feature, a screen and a tech item."""
    return ProjectGraph(
        nodes=[
            IdeaNode(
                id='idea-1',
                data=IdeaNodeData(app_name='TaskFlow', description='Team task manager'),
            ),
            FeatureNode(
                id='feature-1-0',
                data=FeatureNodeData(feature_name='Task Boards', summary='Kanban boards per project'),
            ),
            FeatureNode(
                id='feature-1-1',
                data=FeatureNodeData(feature_name='Team Chat'),
            ),
            ScreenNode(
                id='screen-1-0',
                data=ScreenNodeData(screen_name='Board View'),
            ),
            TechStackNode(
                id='techStack-1-0',
                data=TechStackNodeData(category=TechCategory.FRONTEND, tool_name='React'),
            ),
        ],
    )


@pytest.fixture
def openai_api_key() -> str:
    """Get OpenAI API key from environment."""
    key = os.getenv('OPENAI_API_KEY')
    if not key:
        pytest.skip('OPENAI_API_KEY not set')
    return key
