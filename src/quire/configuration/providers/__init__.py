"""Provider configurations for Quire."""

from quire.configuration.providers.litellm import LiteLLMProvider
from quire.configuration.providers.openai import OpenAIProvider

__all__ = ["LiteLLMProvider", "OpenAIProvider"]
