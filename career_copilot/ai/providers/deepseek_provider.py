from __future__ import annotations

from typing import Any

from openai import AsyncOpenAI

from career_copilot.ai.config import AIConfig
from career_copilot.ai.errors import ProviderError


class DeepSeekProvider:
    """DeepSeek chat completions through its OpenAI-compatible endpoint."""

    name = "deepseek"

    def __init__(self, config: AIConfig):
        if not config.api_key:
            raise ProviderError(
                "Deepseek API key not configured. Please set DEEPSEEK_API_KEY environment variable.",
                provider=self.name,
            )
        self._model = config.model
        self._temperature = config.temperature
        self._top_p = config.top_p
        self._client = AsyncOpenAI(
            api_key=config.api_key,
            base_url=config.base_url,
            timeout=config.timeout_s,
            max_retries=config.max_retries,
        )

    async def complete(
        self,
        prompt: str,
        *,
        max_tokens: int,
        system: str | None = None,
        response_schema: type[Any] | None = None,
    ) -> str:
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        create_kwargs: dict[str, Any] = {
            "model": self._model,
            "messages": messages,
            "temperature": self._temperature,
            "top_p": self._top_p,
            "max_tokens": max_tokens,
        }
        if response_schema is not None:
            create_kwargs["response_format"] = {"type": "json_object"}

        try:
            response = await self._client.chat.completions.create(**create_kwargs)
        except Exception as exc:  # noqa: BLE001 - every SDK failure is a provider failure
            raise ProviderError(f"Failed to call Deepseek API: {exc}", provider=self.name) from exc

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise ProviderError("Invalid Deepseek API response format: no message content.", provider=self.name)
        return content
