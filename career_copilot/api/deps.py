from __future__ import annotations

from fastapi import Header, Query, Request

from career_copilot.ai.factory import ProviderRouter
from career_copilot.services.response_cache import ResponseCache


def get_response_cache(request: Request) -> ResponseCache:
    return request.app.state.response_cache


def get_provider_router(request: Request) -> ProviderRouter:
    return request.app.state.provider_router


def mock_mode(mock: bool = Query(default=False, description="Serve deterministic mock data without calling a provider.")) -> bool:
    return mock


def preferred_provider(x_ai_provider: str | None = Header(default=None)) -> str | None:
    value = (x_ai_provider or "").strip()
    return value or None
