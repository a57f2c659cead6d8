"""
Conversation models produced by the format detector and turn parser.

A ParseResult is transient: it is created per import call, folded into a
composed document and then discarded.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Role(str, Enum):
    """Speaker of a conversation turn."""

    HUMAN = 'human'
    ASSISTANT = 'assistant'


class SourceKind(str, Enum):
    """Detected shape of the raw input text."""

    STRUCTURED_TRANSCRIPT = 'structured-transcript'
    PLAIN_DIALOGUE = 'plain-dialogue'
    GENERIC = 'generic'


class FormatHint(str, Enum):
    """Caller-supplied hint about what the raw text is."""

    CONVERSATION = 'conversation'
    DOCUMENT = 'document'


@dataclass(frozen=True)
class ConversationTurn:
    """One immutable (role, text) turn of a parsed conversation."""

    role: Role
    text: str
    timestamp: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            'role': self.role.value,
            'text': self.text,
            'timestamp': self.timestamp,
        }


@dataclass
class ParseResult:
    """Turns, session metadata and the composed document for one input."""

    source: SourceKind
    turns: list[ConversationTurn] = field(default_factory=list)
    session_id: str | None = None
    project_dir: str | None = None
    branch: str | None = None
    composed_document: str = ''

    @property
    def human_turns(self) -> list[ConversationTurn]:
        return [t for t in self.turns if t.role == Role.HUMAN]

    @property
    def assistant_turns(self) -> list[ConversationTurn]:
        return [t for t in self.turns if t.role == Role.ASSISTANT]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'source': self.source.value,
            'turns': [t.to_dict() for t in self.turns],
            'session_id': self.session_id,
            'project_dir': self.project_dir,
            'branch': self.branch,
            'composed_document': self.composed_document,
        }


@dataclass(frozen=True)
class RawInput:
    """An opaque text blob plus an optional format hint."""

    text: str
    format_hint: FormatHint | None = None
