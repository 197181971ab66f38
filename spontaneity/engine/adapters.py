"""
Model adapters for the Spontaneity Engine.

Each adapter wraps exactly one generative-AI provider behind the same
contract:

    await adapter.generate_recommendation(prompt, config) -> str

Adapters raise AdapterError on provider errors or malformed payloads and
never fabricate placeholder text; fallback is the engine's job. Provider SDK
retries are disabled so that a failed attempt surfaces immediately.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

from google import genai
from google.genai import errors as genai_errors
from google.genai import types
from openai import AsyncOpenAI, OpenAIError

from spontaneity.engine.errors import AdapterError
from spontaneity.engine.prompts import SPONTANEITY_SYSTEM_PROMPT

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecommendationConfig:
    """Per-request generation parameters. None means provider default."""
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    top_p: Optional[float] = None


class ModelAdapter(ABC):
    """Uniform wrapper around a single provider's generation call."""

    provider: str = "unknown"

    @property
    def name(self) -> str:
        """Display name used in logs and in the `adapterUsed` response field."""
        return type(self).__name__

    @abstractmethod
    async def generate_recommendation(self, prompt: str, config: RecommendationConfig) -> str:
        """Return the provider's raw text for `prompt` or raise AdapterError."""


class GeminiAdapter(ModelAdapter):
    """Google Gemini via the Google Gen AI SDK (async client)."""

    provider = "gemini"

    def __init__(self, api_key: str, model: str = "gemini-2.5-flash"):
        if not api_key:
            raise ValueError("GeminiAdapter requires an API key")
        self._client = genai.Client(api_key=api_key)
        self._model = model

    async def generate_recommendation(self, prompt: str, config: RecommendationConfig) -> str:
        generation_config = types.GenerateContentConfig(
            system_instruction=SPONTANEITY_SYSTEM_PROMPT,
            temperature=config.temperature,
            max_output_tokens=config.max_tokens,
            top_p=config.top_p,
            response_mime_type="application/json",
        )

        try:
            response = await self._client.aio.models.generate_content(
                model=self._model,
                contents=prompt,
                config=generation_config,
            )
        except genai_errors.APIError as e:
            raise AdapterError(f"Gemini API error ({e.code}): {e.message}", self.name) from e

        if not response.candidates or not response.candidates[0].content:
            raise AdapterError("Gemini returned no candidates", self.name)

        text = (response.text or "").strip()
        if not text:
            raise AdapterError("Gemini returned an empty response", self.name)

        logger.debug(f"Gemini response received ({len(text)} chars)")
        return text


class OpenAIAdapter(ModelAdapter):
    """OpenAI Chat Completions via the official async SDK."""

    provider = "openai"

    def __init__(self, api_key: str, model: str = "gpt-3.5-turbo"):
        if not api_key:
            raise ValueError("OpenAIAdapter requires an API key")
        self._client = AsyncOpenAI(api_key=api_key, max_retries=0)
        self._model = model

    async def generate_recommendation(self, prompt: str, config: RecommendationConfig) -> str:
        params: Dict[str, Any] = {}
        if config.temperature is not None:
            params["temperature"] = config.temperature
        if config.max_tokens is not None:
            params["max_tokens"] = config.max_tokens
        if config.top_p is not None:
            params["top_p"] = config.top_p

        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": SPONTANEITY_SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                response_format={"type": "json_object"},
                **params,
            )
        except OpenAIError as e:
            raise AdapterError(f"OpenAI API error: {e}", self.name) from e

        if not response.choices:
            raise AdapterError("OpenAI returned no choices", self.name)

        message = response.choices[0].message
        content = (message.content or "").strip() if message else ""
        if not content:
            raise AdapterError("OpenAI returned an empty response", self.name)

        logger.debug(f"OpenAI response received ({len(content)} chars)")
        return content
