from __future__ import annotations

from dataclasses import dataclass

from career_copilot.core.config import settings


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str
    api_key: str | None
    base_url: str | None
    timeout_s: float
    max_retries: int
    temperature: float
    top_p: float


def load_ai_config(provider: str) -> AIConfig:
    provider = provider.strip().lower()
    if provider == "deepseek":
        return AIConfig(
            provider=provider,
            model=settings.deepseek_model.strip(),
            api_key=(settings.deepseek_api_key or "").strip() or None,
            base_url=settings.deepseek_base_url.strip() or None,
            timeout_s=settings.ai_timeout_s,
            max_retries=settings.ai_max_retries,
            temperature=settings.ai_temperature,
            top_p=settings.ai_top_p,
        )
    return AIConfig(
        provider=provider,
        model=settings.gemini_model.strip(),
        api_key=(settings.gemini_api_key or "").strip() or None,
        base_url=None,
        timeout_s=settings.ai_timeout_s,
        max_retries=0,
        temperature=settings.ai_temperature,
        top_p=settings.ai_top_p,
    )
