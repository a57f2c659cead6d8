"""
Environment-driven settings for the import pipeline.

A ``.env`` at the repository root is loaded first, so local runs and the
example script pick up OPENAI_API_KEY without exporting it.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

_dotenv = Path(__file__).resolve().parents[2] / '.env'
if _dotenv.is_file():
    load_dotenv(_dotenv)


def _int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


def _float(name: str, default: float) -> float:
    return float(os.getenv(name, str(default)))


class Config:
    # Detail extraction. Without a key the pipeline imports names only.
    OPENAI_API_KEY: str = os.getenv('OPENAI_API_KEY', '')
    OPENAI_CHAT_MODEL: str = os.getenv('OPENAI_CHAT_MODEL', 'gpt-4.1-mini')

    # Minimum similarity for an extracted name to match an existing node
    NAME_MATCH_THRESHOLD: float = _float('NAME_MATCH_THRESHOLD', 0.6)
    # Minimum relevance for a feature or screen to enter a prompt brief
    RELEVANCE_MIN_SCORE: float = _float('RELEVANCE_MIN_SCORE', 0.08)

    MAX_INPUT_LENGTH: int = _int('MAX_INPUT_LENGTH', 25000)
    MAX_TEXT_FIELD: int = _int('MAX_TEXT_FIELD', 400)
    MAX_FEATURES: int = _int('MAX_FEATURES', 20)
    MAX_SCREENS: int = _int('MAX_SCREENS', 20)
    MAX_TECH: int = _int('MAX_TECH', 10)
    MAX_PROMPTS: int = _int('MAX_PROMPTS', 10)

    LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO')

    @classmethod
    def validate(cls) -> list[str]:
        """Names of unset keys that detail extraction needs. Empty means ready."""
        return [] if cls.OPENAI_API_KEY else ['OPENAI_API_KEY']


config = Config()
