"""Unit tests for LLM provider adapters: OpenAI and Anthropic."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import anthropic
import openai
import pytest

from radio_venus.config.settings import Settings
from radio_venus.providers.llm.anthropic_provider import AnthropicLLMProvider
from radio_venus.providers.llm.openai_provider import OpenAILLMProvider
from radio_venus.utils.errors import ConfigurationError, LLMError

# ======================================================================
# Shared helpers
# ======================================================================


def _settings(**overrides) -> Settings:
    defaults = {
        "_env_file": None,
        "openai_api_key": "sk-test",
        "openai_base_url": "",
        "openai_text_model": "",
        "anthropic_api_key": "test-anthropic",
    }
    defaults.update(overrides)
    return Settings(**defaults)


def _openai_response(content: str | None) -> MagicMock:
    response = MagicMock()
    response.choices = [MagicMock(message=MagicMock(content=content))]
    return response


# ======================================================================
# OpenAI LLM Provider
# ======================================================================


class TestOpenAILLMProvider:
    @pytest.fixture()
    def settings(self) -> Settings:
        return _settings()

    def test_provider_name_reflects_base_url(self, settings: Settings) -> None:
        assert OpenAILLMProvider(settings).get_provider_name() == "openai"
        compatible = OpenAILLMProvider(_settings(openai_base_url="http://localhost:8000/v1"))
        assert compatible.get_provider_name() == "openai-compatible"

    def test_is_available(self, settings: Settings) -> None:
        assert OpenAILLMProvider(settings).is_available() is True
        assert OpenAILLMProvider(_settings(openai_api_key="")).is_available() is False

    @pytest.mark.asyncio
    async def test_complete_success(self, settings: Settings) -> None:
        mock_client = AsyncMock()
        mock_client.chat.completions.create = AsyncMock(
            return_value=_openai_response('{"reject": []}')
        )

        with patch(
            "radio_venus.providers.llm.openai_provider.openai.AsyncOpenAI",
            return_value=mock_client,
        ):
            provider = OpenAILLMProvider(settings)
            result = await provider.complete("system prompt", "user prompt", temperature=0.0)

        assert result == '{"reject": []}'
        kwargs = mock_client.chat.completions.create.await_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["temperature"] == 0.0
        assert kwargs["messages"][0] == {"role": "system", "content": "system prompt"}

    @pytest.mark.asyncio
    async def test_complete_error(self, settings: Settings) -> None:
        mock_client = AsyncMock()
        mock_client.chat.completions.create = AsyncMock(
            side_effect=openai.APIError(message="Rate limited", request=MagicMock(), body=None)
        )

        with patch(
            "radio_venus.providers.llm.openai_provider.openai.AsyncOpenAI",
            return_value=mock_client,
        ):
            provider = OpenAILLMProvider(settings)
            with pytest.raises(LLMError):
                await provider.complete("system", "user")

    @pytest.mark.asyncio
    async def test_complete_empty_response_raises(self, settings: Settings) -> None:
        mock_client = AsyncMock()
        mock_client.chat.completions.create = AsyncMock(return_value=_openai_response(""))

        with patch(
            "radio_venus.providers.llm.openai_provider.openai.AsyncOpenAI",
            return_value=mock_client,
        ):
            provider = OpenAILLMProvider(settings)
            with pytest.raises(LLMError):
                await provider.complete("system", "user")

    @pytest.mark.asyncio
    async def test_validate_credentials(self, settings: Settings) -> None:
        mock_client = AsyncMock()
        mock_client.models.list = AsyncMock(return_value=MagicMock())

        with patch(
            "radio_venus.providers.llm.openai_provider.openai.AsyncOpenAI",
            return_value=mock_client,
        ):
            provider = OpenAILLMProvider(settings)
            assert await provider.validate_credentials() is True

        mock_client.models.list = AsyncMock(
            side_effect=openai.APIError(message="Invalid key", request=MagicMock(), body=None)
        )
        assert await provider.validate_credentials() is False

    @pytest.mark.asyncio
    async def test_validate_credentials_without_key(self) -> None:
        provider = OpenAILLMProvider(_settings(openai_api_key=""))
        assert await provider.validate_credentials() is False


# ======================================================================
# Anthropic LLM Provider
# ======================================================================


class TestAnthropicLLMProvider:
    @pytest.fixture()
    def settings(self) -> Settings:
        return _settings()

    def test_basics(self, settings: Settings) -> None:
        provider = AnthropicLLMProvider(settings)
        assert provider.get_provider_name() == "anthropic"
        assert provider.is_available() is True
        assert AnthropicLLMProvider(_settings(anthropic_api_key="")).is_available() is False

    @pytest.mark.asyncio
    async def test_complete_joins_text_blocks(self, settings: Settings) -> None:
        mock_response = MagicMock()
        mock_response.content = [
            MagicMock(type="text", text='{"reject":'),
            MagicMock(type="tool_use"),
            MagicMock(type="text", text=' ["X"]}'),
        ]
        mock_response.usage = MagicMock(input_tokens=50, output_tokens=10)

        mock_client = AsyncMock()
        mock_client.messages.create = AsyncMock(return_value=mock_response)

        with patch(
            "radio_venus.providers.llm.anthropic_provider.anthropic.AsyncAnthropic",
            return_value=mock_client,
        ):
            provider = AnthropicLLMProvider(settings)
            result = await provider.complete("system prompt", "user prompt")

        assert result == '{"reject":\n ["X"]}'
        kwargs = mock_client.messages.create.await_args.kwargs
        assert kwargs["system"] == "system prompt"
        assert kwargs["messages"] == [{"role": "user", "content": "user prompt"}]

    @pytest.mark.asyncio
    async def test_complete_error(self, settings: Settings) -> None:
        mock_client = AsyncMock()
        mock_client.messages.create = AsyncMock(
            side_effect=anthropic.APIError(message="Overloaded", request=MagicMock(), body=None)
        )

        with patch(
            "radio_venus.providers.llm.anthropic_provider.anthropic.AsyncAnthropic",
            return_value=mock_client,
        ):
            provider = AnthropicLLMProvider(settings)
            with pytest.raises(LLMError):
                await provider.complete("system", "user")

    @pytest.mark.asyncio
    async def test_no_text_blocks_raises(self, settings: Settings) -> None:
        mock_response = MagicMock()
        mock_response.content = []
        mock_client = AsyncMock()
        mock_client.messages.create = AsyncMock(return_value=mock_response)

        with patch(
            "radio_venus.providers.llm.anthropic_provider.anthropic.AsyncAnthropic",
            return_value=mock_client,
        ):
            provider = AnthropicLLMProvider(settings)
            with pytest.raises(LLMError):
                await provider.complete("system", "user")


class TestMissingKey:
    @pytest.mark.asyncio
    async def test_openai_complete_without_key(self) -> None:
        provider = OpenAILLMProvider(_settings(openai_api_key=""))
        with pytest.raises(ConfigurationError):
            await provider.complete(system_prompt="s", user_prompt="u")

    @pytest.mark.asyncio
    async def test_anthropic_complete_without_key(self) -> None:
        provider = AnthropicLLMProvider(_settings(anthropic_api_key=""))
        with pytest.raises(ConfigurationError):
            await provider.complete(system_prompt="s", user_prompt="u")
