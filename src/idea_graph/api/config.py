"""Configuration for the Idea Graph HTTP service."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Service settings loaded from environment variables.

    Without an OpenAI key the service still runs; smart imports then merge
    names only.
    """

    # OpenAI (optional)
    OPENAI_API_KEY: str | None = None
    OPENAI_CHAT_MODEL: str | None = None

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False


@lru_cache
def get_settings() -> Settings:
    """Cached settings singleton."""
    return Settings()
