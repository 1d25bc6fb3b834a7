"""Abstract base class for LLM service providers.

The only LLM consumer in the curation pipeline is the aesthetic judge, an
optional post-filter on discovery candidates.  Implementations wrap the
Anthropic or OpenAI APIs; a missing key makes the provider unavailable and
the judge becomes a no-op.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


# Concrete implementations: AnthropicLLMProvider, OpenAILLMProvider
# Located in: radio_venus/providers/llm/
class ILLMProvider(ABC):
    """Contract for text-completion backends."""

    @abstractmethod
    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.3,
        max_tokens: int = 1000,
    ) -> str:
        """Return the model's answer to one judging prompt.

        The judge sends the station description and a candidate batch as
        *user_prompt* and expects a JSON rejection list back, at temperature 0.

        Raises
        ------
        radio_venus.utils.errors.ConfigurationError
            If the provider has no API key.
        radio_venus.utils.errors.LLMError
            If the API call fails or returns no text.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this LLM provider."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if credentials are present.

        Implementations must not make a network call here.
        """

    @abstractmethod
    async def validate_credentials(self) -> bool:
        """Perform a lightweight API call to confirm credentials are valid."""
