from __future__ import annotations

import logging
import threading
from functools import lru_cache
from typing import Any, Callable

from career_copilot.ai.config import load_ai_config
from career_copilot.ai.errors import UnknownProviderError
from career_copilot.ai.providers.deepseek_provider import DeepSeekProvider
from career_copilot.ai.providers.gemini_provider import GeminiProvider
from career_copilot.ai.types import AIClient
from career_copilot.core.config import SUPPORTED_PROVIDERS, settings

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str], AIClient]


def get_ai_client(provider: str) -> AIClient:
    cfg = load_ai_config(provider)

    if cfg.provider == "deepseek":
        return DeepSeekProvider(cfg)

    if cfg.provider == "gemini":
        return GeminiProvider(cfg)

    raise UnknownProviderError(provider, SUPPORTED_PROVIDERS)


class ProviderRouter:
    """Picks the vendor for a call and hands out one lazily built client per vendor.

    Resolution order is the explicit per-request provider, then the caller's
    stored preference, then the configured default.
    """

    def __init__(
        self,
        clients: dict[str, AIClient] | None = None,
        *,
        factory: ClientFactory = get_ai_client,
        default_provider: str | None = None,
    ):
        self._clients: dict[str, AIClient] = dict(clients or {})
        self._factory = factory
        self._default = (default_provider or settings.ai_provider).strip().lower()
        self._lock = threading.Lock()

    @property
    def default_provider(self) -> str:
        return self._default

    def resolve(self, explicit: str | None = None, preferred: str | None = None) -> str:
        for candidate in (explicit, preferred, self._default):
            if candidate is None or not str(candidate).strip():
                continue
            name = str(candidate).strip().lower()
            if name not in SUPPORTED_PROVIDERS:
                raise UnknownProviderError(name, SUPPORTED_PROVIDERS)
            return name
        raise UnknownProviderError("", SUPPORTED_PROVIDERS)

    def client(self, provider: str) -> AIClient:
        if provider not in SUPPORTED_PROVIDERS:
            raise UnknownProviderError(provider, SUPPORTED_PROVIDERS)
        with self._lock:
            client = self._clients.get(provider)
            if client is None:
                client = self._factory(provider)
                self._clients[provider] = client
        return client

    async def call(
        self,
        provider: str,
        prompt: str,
        *,
        max_tokens: int,
        system: str | None = None,
        response_schema: type[Any] | None = None,
    ) -> str:
        logger.debug("ai_call provider=%s max_tokens=%s prompt_len=%s", provider, max_tokens, len(prompt))
        return await self.client(provider).complete(
            prompt,
            max_tokens=max_tokens,
            system=system,
            response_schema=response_schema,
        )


@lru_cache(maxsize=1)
def get_provider_router() -> ProviderRouter:
    return ProviderRouter()


async def call_ai(
    provider: str,
    prompt: str,
    max_tokens: int | None = None,
    *,
    system: str | None = None,
    response_schema: type[Any] | None = None,
) -> str:
    """Send one prompt to the named vendor through the process-wide router."""
    router = get_provider_router()
    return await router.call(
        router.resolve(provider),
        prompt,
        max_tokens=max_tokens or settings.max_tokens_default,
        system=system,
        response_schema=response_schema,
    )
