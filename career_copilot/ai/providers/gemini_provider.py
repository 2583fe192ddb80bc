from __future__ import annotations

from typing import Any

from google import genai
from google.genai import types as genai_types

from career_copilot.ai.config import AIConfig
from career_copilot.ai.errors import ProviderError
from career_copilot.schemas.provider_schema import provider_json_schema


class GeminiProvider:
    """Google Gemini through the google-genai async client."""

    name = "gemini"

    def __init__(self, config: AIConfig):
        if not config.api_key:
            raise ProviderError(
                "Gemini API key not configured. Please set GEMINI_API_KEY environment variable.",
                provider=self.name,
            )
        self._model = config.model
        self._temperature = config.temperature
        self._top_p = config.top_p
        self._client = genai.Client(
            api_key=config.api_key,
            http_options=genai_types.HttpOptions(timeout=int(config.timeout_s * 1000)),
        )

    async def complete(
        self,
        prompt: str,
        *,
        max_tokens: int,
        system: str | None = None,
        response_schema: type[Any] | None = None,
    ) -> str:
        config_kwargs: dict[str, Any] = {
            "temperature": self._temperature,
            "top_p": self._top_p,
            "max_output_tokens": max_tokens,
        }
        if system:
            config_kwargs["system_instruction"] = system
        if response_schema is not None:
            config_kwargs["response_mime_type"] = "application/json"
            config_kwargs["response_schema"] = provider_json_schema(response_schema)

        try:
            response = await self._client.aio.models.generate_content(
                model=self._model,
                contents=prompt,
                config=genai_types.GenerateContentConfig(**config_kwargs),
            )
        except Exception as exc:  # noqa: BLE001 - every SDK failure is a provider failure
            raise ProviderError(f"Failed to call Gemini API: {exc}", provider=self.name) from exc

        text = response.text
        if not text:
            raise ProviderError("No text content in Gemini API response.", provider=self.name)
        return text
