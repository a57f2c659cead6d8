"""
Thin async wrapper around the OpenAI SDK.

The import pipeline only needs one kind of call: a chat completion whose
reply is parsed straight into a pydantic model. Transient transport
failures are retried by tenacity; anything else surfaces to the caller,
which decides whether to fall back to name-only import.
"""

import os
from typing import TypeVar

from openai import (
    APIConnectionError,
    APITimeoutError,
    AsyncOpenAI,
    InternalServerError,
    RateLimitError,
)
from pydantic import BaseModel
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..config import config
from ..logging import get_logger

logger = get_logger(__name__)

ModelT = TypeVar('ModelT', bound=BaseModel)

_TRANSIENT = (APIConnectionError, APITimeoutError, InternalServerError, RateLimitError)


class OpenAIClient:
    """
    Structured-output chat client used for feature and screen detail extraction.

    The API key comes from the argument or OPENAI_API_KEY; the model from the
    argument or OPENAI_CHAT_MODEL.
    """

    def __init__(self, api_key: str | None = None, chat_model: str | None = None):
        self.api_key = api_key or os.getenv('OPENAI_API_KEY')
        if not self.api_key:
            raise ValueError('OPENAI_API_KEY environment variable is required')

        self.chat_model = chat_model or config.OPENAI_CHAT_MODEL
        self._client = AsyncOpenAI(api_key=self.api_key)

    @retry(
        retry=retry_if_exception_type(_TRANSIENT),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        reraise=True,
    )
    async def chat_completion_structured(
        self,
        messages: list[dict[str, str]],
        response_model: type[ModelT],
        model: str | None = None,
        temperature: float = 0.2,
    ) -> ModelT:
        """
        Run one chat completion and return the reply as ``response_model``.

        Raises:
            ValueError: The model refused or the reply did not parse.
        """
        response = await self._client.beta.chat.completions.parse(
            model=model or self.chat_model,
            messages=messages,  # type: ignore
            response_format=response_model,
            temperature=temperature,
        )

        message = response.choices[0].message
        refusal = getattr(message, 'refusal', None)
        if refusal:
            logger.warning('openai.refused', model=model or self.chat_model, refusal=refusal)
            raise ValueError(f'Model refused structured response: {refusal}')
        if message.parsed is None:
            raise ValueError(f'Reply did not parse as {response_model.__name__}')
        return message.parsed

    async def health_check(self) -> dict[str, bool | str]:
        """Look up the configured model; never raises."""
        try:
            await self._client.models.retrieve(self.chat_model)
        except Exception as e:
            return {'healthy': False, 'error': str(e)}
        return {'healthy': True, 'chat_model': self.chat_model}

    async def close(self):
        await self._client.close()
