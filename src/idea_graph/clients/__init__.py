"""
External service clients for the Idea Graph import pipeline.
"""

from .openai_client import OpenAIClient

__all__ = [
    'OpenAIClient',
]
