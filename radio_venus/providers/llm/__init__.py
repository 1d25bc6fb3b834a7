"""LLM providers used by the aesthetic judge."""

from radio_venus.providers.llm.anthropic_provider import AnthropicLLMProvider
from radio_venus.providers.llm.openai_provider import OpenAILLMProvider

__all__ = ["AnthropicLLMProvider", "OpenAILLMProvider"]
