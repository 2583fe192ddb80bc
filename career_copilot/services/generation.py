"""Shared orchestration: cache lookup, provider call, recovery, cache store."""

from __future__ import annotations

import hashlib
import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from career_copilot.ai.errors import GenerationError, ResponseUnusableError
from career_copilot.ai.factory import ProviderRouter
from career_copilot.services.response_cache import ResponseCache

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


def _short_hash(value: str | None) -> str:
    normalized = (value or "").strip()
    if not normalized:
        return ""
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()[:12]


def log_event(event: str, **fields: Any) -> None:
    logger.info(json.dumps({"event": event, **fields}))


def describe_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "value"
    return f"{location}: {first.get('msg', 'invalid value')}"


def validate_payload(model: type[M], data: Any, *, task: str) -> M:
    """Strict final validation; failure means every recovery avenue is spent."""
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise ResponseUnusableError(
            f"The {task} response did not match the expected schema ({describe_validation_error(exc)})."
        ) from exc


@dataclass(frozen=True)
class GenerationRequest(Generic[T]):
    task: str
    prompt: str
    system: str
    max_tokens: int
    parse: Callable[[str], T]
    cache_key: str | None = None
    ttl_seconds: int = 0
    response_schema: type[BaseModel] | None = None


async def run_generation(
    request: GenerationRequest[T],
    *,
    router: ProviderRouter,
    provider: str,
    cache: ResponseCache | None = None,
) -> T:
    """Run one generation task end to end.

    Provider failures surface as ProviderError and unusable output as
    ResponseUnusableError; neither is cached.
    """
    started_at = time.perf_counter()
    key_hash = _short_hash(request.cache_key)

    if cache is not None and request.cache_key:
        cached = cache.get(request.cache_key)
        if cached is not None:
            log_event("generation_cache_hit", task=request.task, cache_key_hash=key_hash)
            return cached

    log_event(
        "generation_request",
        task=request.task,
        provider=provider,
        max_tokens=request.max_tokens,
        prompt_len=len(request.prompt),
        structured=request.response_schema is not None,
        cache_key_hash=key_hash,
    )

    try:
        raw_text = await router.call(
            provider,
            request.prompt,
            max_tokens=request.max_tokens,
            system=request.system,
            response_schema=request.response_schema,
        )
        result = request.parse(raw_text)
    except GenerationError as exc:
        logger.warning(
            json.dumps(
                {
                    "event": "generation_failed",
                    "task": request.task,
                    "provider": provider,
                    "code": exc.code,
                    "error": str(exc),
                    "duration_ms": int((time.perf_counter() - started_at) * 1000),
                }
            )
        )
        raise

    if cache is not None and request.cache_key:
        cache.set(request.cache_key, result, request.ttl_seconds)

    log_event(
        "generation_complete",
        task=request.task,
        provider=provider,
        response_len=len(raw_text),
        duration_ms=int((time.perf_counter() - started_at) * 1000),
    )
    return result
