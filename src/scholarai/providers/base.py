"""
Base LLM Provider interface.
"""

from abc import ABC, abstractmethod
from typing import Any


class LLMProvider(ABC):
    """
    Abstract base class for chat-completion providers.
    """

    @abstractmethod
    async def complete(
        self,
        messages: list[dict[str, Any]],
        *,
        model: str,
        temperature: float = 0.2,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> dict[str, Any]:
        """
        Get a completion from the LLM.

        Args:
            messages: List of messages in API format
            model: Model identifier
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate (provider default if None)
            **kwargs: Additional provider-specific options

        Returns:
            Dictionary with 'content', 'usage', 'finish_reason'
        """
        pass
