"""
Chat-completion providers.
"""

from scholarai.providers.base import LLMProvider
from scholarai.providers.openai import OpenAIProvider

__all__ = ["LLMProvider", "OpenAIProvider"]
