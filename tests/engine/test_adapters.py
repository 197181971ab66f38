"""
Tests for the Gemini and OpenAI model adapters.

Provider SDK clients are mocked; no network calls are made.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from google.genai import errors as genai_errors
from openai import OpenAIError

from spontaneity.engine.adapters import GeminiAdapter, OpenAIAdapter, RecommendationConfig
from spontaneity.engine.errors import AdapterError


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def mock_genai_client():
    with patch("spontaneity.engine.adapters.genai.Client") as mock_cls:
        client = MagicMock()
        client.aio.models.generate_content = AsyncMock()
        mock_cls.return_value = client
        yield client


@pytest.fixture
def mock_openai_client():
    with patch("spontaneity.engine.adapters.AsyncOpenAI") as mock_cls:
        client = MagicMock()
        client.chat.completions.create = AsyncMock()
        mock_cls.return_value = client
        yield mock_cls, client


def _gemini_response(text):
    response = MagicMock()
    response.candidates = [MagicMock()]
    response.text = text
    return response


def _openai_response(content):
    response = MagicMock()
    choice = MagicMock()
    choice.message.content = content
    response.choices = [choice]
    return response


# =============================================================================
# GEMINI
# =============================================================================

class TestGeminiAdapter:

    def test_requires_api_key(self):
        with pytest.raises(ValueError):
            GeminiAdapter(api_key="")

    def test_name_and_provider(self, mock_genai_client):
        adapter = GeminiAdapter(api_key="key")
        assert adapter.name == "GeminiAdapter"
        assert adapter.provider == "gemini"

    @pytest.mark.asyncio
    async def test_returns_response_text(self, mock_genai_client):
        mock_genai_client.aio.models.generate_content.return_value = _gemini_response(
            '{"title": "Sunset hike"}'
        )
        adapter = GeminiAdapter(api_key="key", model="gemini-test")

        result = await adapter.generate_recommendation(
            "prompt", RecommendationConfig(temperature=0.5, max_tokens=256)
        )

        assert result == '{"title": "Sunset hike"}'
        kwargs = mock_genai_client.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-test"
        assert kwargs["contents"] == "prompt"
        assert kwargs["config"].temperature == 0.5
        assert kwargs["config"].max_output_tokens == 256
        assert kwargs["config"].response_mime_type == "application/json"

    @pytest.mark.asyncio
    async def test_api_error_becomes_adapter_error(self, mock_genai_client):
        mock_genai_client.aio.models.generate_content.side_effect = genai_errors.APIError(
            503, {"error": {"code": 503, "message": "overloaded", "status": "UNAVAILABLE"}}
        )
        adapter = GeminiAdapter(api_key="key")

        with pytest.raises(AdapterError) as exc_info:
            await adapter.generate_recommendation("prompt", RecommendationConfig())

        assert "503" in str(exc_info.value)
        assert exc_info.value.adapter_name == "GeminiAdapter"

    @pytest.mark.asyncio
    async def test_no_candidates_is_an_error(self, mock_genai_client):
        response = MagicMock()
        response.candidates = []
        mock_genai_client.aio.models.generate_content.return_value = response
        adapter = GeminiAdapter(api_key="key")

        with pytest.raises(AdapterError, match="no candidates"):
            await adapter.generate_recommendation("prompt", RecommendationConfig())

    @pytest.mark.asyncio
    async def test_empty_text_is_an_error(self, mock_genai_client):
        mock_genai_client.aio.models.generate_content.return_value = _gemini_response("   ")
        adapter = GeminiAdapter(api_key="key")

        with pytest.raises(AdapterError, match="empty response"):
            await adapter.generate_recommendation("prompt", RecommendationConfig())


# =============================================================================
# OPENAI
# =============================================================================

class TestOpenAIAdapter:

    def test_requires_api_key(self):
        with pytest.raises(ValueError):
            OpenAIAdapter(api_key="")

    def test_sdk_retries_are_disabled(self, mock_openai_client):
        mock_cls, _ = mock_openai_client
        OpenAIAdapter(api_key="key")
        mock_cls.assert_called_once_with(api_key="key", max_retries=0)

    @pytest.mark.asyncio
    async def test_only_set_parameters_are_sent(self, mock_openai_client):
        _, client = mock_openai_client
        client.chat.completions.create.return_value = _openai_response('{"title": "Museum"}')
        adapter = OpenAIAdapter(api_key="key", model="gpt-test")

        result = await adapter.generate_recommendation("prompt", RecommendationConfig(top_p=0.9))

        assert result == '{"title": "Museum"}'
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-test"
        assert kwargs["top_p"] == 0.9
        assert "temperature" not in kwargs
        assert "max_tokens" not in kwargs
        assert kwargs["response_format"] == {"type": "json_object"}
        assert kwargs["messages"][-1] == {"role": "user", "content": "prompt"}

    @pytest.mark.asyncio
    async def test_sdk_error_becomes_adapter_error(self, mock_openai_client):
        _, client = mock_openai_client
        client.chat.completions.create.side_effect = OpenAIError("rate limited")
        adapter = OpenAIAdapter(api_key="key")

        with pytest.raises(AdapterError, match="rate limited"):
            await adapter.generate_recommendation("prompt", RecommendationConfig())

    @pytest.mark.asyncio
    async def test_no_choices_is_an_error(self, mock_openai_client):
        _, client = mock_openai_client
        response = MagicMock()
        response.choices = []
        client.chat.completions.create.return_value = response
        adapter = OpenAIAdapter(api_key="key")

        with pytest.raises(AdapterError, match="no choices"):
            await adapter.generate_recommendation("prompt", RecommendationConfig())

    @pytest.mark.asyncio
    async def test_empty_content_is_an_error(self, mock_openai_client):
        _, client = mock_openai_client
        client.chat.completions.create.return_value = _openai_response(None)
        adapter = OpenAIAdapter(api_key="key")

        with pytest.raises(AdapterError, match="empty response"):
            await adapter.generate_recommendation("prompt", RecommendationConfig())
