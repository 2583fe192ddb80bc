from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

SUPPORTED_PROVIDERS = ("gemini", "deepseek")


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    app_env: str
    ai_provider: str
    deepseek_api_key: str | None
    deepseek_model: str
    deepseek_base_url: str
    gemini_api_key: str | None
    gemini_model: str
    ai_timeout_s: float
    ai_max_retries: int
    ai_temperature: float
    ai_top_p: float
    max_tokens_default: int
    max_tokens_resume: int
    max_tokens_career_path: int
    max_tokens_skill_gap: int
    max_tokens_roadmap: int
    cache_enabled: bool
    rate_limit: str
    rate_limit_enabled: bool
    dev_local_ip: str | None
    log_level: str
    sentry_dsn: str | None
    cors_allowed_origins: tuple[str, ...]
    max_upload_bytes: int


_app_env = (_get_env("APP_ENV", "production") or "production").strip().lower()

settings = Settings(
    app_env=_app_env,
    ai_provider=(_get_env("AI_PROVIDER", "gemini") or "gemini").strip().lower(),
    deepseek_api_key=_get_env("DEEPSEEK_API_KEY"),
    deepseek_model=_get_env("DEEPSEEK_MODEL", "deepseek-chat") or "deepseek-chat",
    deepseek_base_url=_get_env("DEEPSEEK_BASE_URL", "https://api.deepseek.com/v1") or "https://api.deepseek.com/v1",
    gemini_api_key=_get_env("GEMINI_API_KEY"),
    gemini_model=_get_env("GEMINI_MODEL", "gemini-2.5-flash") or "gemini-2.5-flash",
    ai_timeout_s=_get_env_float("AI_TIMEOUT_S", 60.0),
    ai_max_retries=_get_env_int("AI_MAX_RETRIES", 2),
    ai_temperature=_get_env_float("AI_TEMPERATURE", 0.01),
    ai_top_p=_get_env_float("AI_TOP_P", 0.3),
    max_tokens_default=_get_env_int("MAX_TOKENS_DEFAULT", 1500),
    max_tokens_resume=_get_env_int("MAX_TOKENS_RESUME", 1600),
    max_tokens_career_path=_get_env_int("MAX_TOKENS_CAREER_PATH", 2000),
    max_tokens_skill_gap=_get_env_int("MAX_TOKENS_SKILL_GAP", 1600),
    max_tokens_roadmap=_get_env_int("MAX_TOKENS_ROADMAP", 2500),
    cache_enabled=_get_env_bool("CACHE_ENABLED", _app_env != "development"),
    rate_limit=_get_env("RATE_LIMIT", "5/day") or "5/day",
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    dev_local_ip=_get_env("DEV_LOCAL_IP"),
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
    cors_allowed_origins=_get_env_list(
        "CORS_ALLOWED_ORIGINS",
        [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:5173",
        ],
    ),
    max_upload_bytes=_get_env_int("MAX_UPLOAD_BYTES", 5 * 1024 * 1024),
)

if settings.ai_provider not in SUPPORTED_PROVIDERS:
    raise RuntimeError(
        f"AI_PROVIDER must be one of: {', '.join(SUPPORTED_PROVIDERS)} (got '{settings.ai_provider}')."
    )

__all__ = ["SUPPORTED_PROVIDERS", "Settings", "settings"]
