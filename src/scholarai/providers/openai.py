"""
OpenAI LLM Provider.
"""

import logging
from typing import Any

from openai import AsyncOpenAI

from scholarai.providers.base import LLMProvider

logger = logging.getLogger(__name__)


class OpenAIProvider(LLMProvider):
    """
    LLM Provider for the OpenAI chat completions API.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        organization: str | None = None,
        timeout: float | None = None,
        max_retries: int = 0,
        client: AsyncOpenAI | None = None
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.organization = organization
        self.timeout = timeout
        self.max_retries = max_retries
        self._client = client

    def _get_client(self) -> AsyncOpenAI:
        """Get or create OpenAI client."""
        if self._client is None:
            kwargs: dict[str, Any] = {
                "api_key": self.api_key,
                "base_url": self.base_url,
                "organization": self.organization,
                "max_retries": self.max_retries,
            }
            if self.timeout is not None:
                kwargs["timeout"] = self.timeout

            self._client = AsyncOpenAI(**kwargs)
        return self._client

    async def complete(
        self,
        messages: list[dict[str, Any]],
        *,
        model: str = "gpt-4o-mini",
        temperature: float = 0.2,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> dict[str, Any]:
        """Get a completion from OpenAI."""
        client = self._get_client()

        params: dict[str, Any] = {
            "model": model,
            "messages": messages,
            "temperature": temperature,
        }
        if max_tokens is not None:
            params["max_tokens"] = max_tokens

        params.update(kwargs)

        response = await client.chat.completions.create(**params)

        choice = response.choices[0] if response.choices else None
        content = choice.message.content if choice and choice.message else None

        result: dict[str, Any] = {
            "content": content or "",
            "usage": {
                "prompt_tokens": response.usage.prompt_tokens if response.usage else 0,
                "completion_tokens": response.usage.completion_tokens if response.usage else 0,
                "total_tokens": response.usage.total_tokens if response.usage else 0
            },
            "finish_reason": (choice.finish_reason if choice else None) or "stop"
        }

        logger.debug(f"Completion from {model}: {result['usage']['total_tokens']} tokens")
        return result
