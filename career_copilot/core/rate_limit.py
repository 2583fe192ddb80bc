from __future__ import annotations

import ipaddress
from datetime import datetime, timezone

from fastapi import Request
from limits import RateLimitItem, parse
from slowapi import Limiter

from career_copilot.core.config import settings

_SCOPE = "generation"

_FORWARDED_HEADERS = ("x-forwarded-for", "cf-connecting-ip", "x-real-ip")


class GenerationRateLimitExceeded(Exception):
    def __init__(self, message: str, reset_at: datetime):
        super().__init__(message)
        self.reset_at = reset_at


def client_ip(request: Request) -> str:
    for header in _FORWARDED_HEADERS:
        value = request.headers.get(header, "").strip()
        if value:
            return value.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


limiter = Limiter(
    key_func=client_ip,
    storage_uri="memory://",
    strategy="moving-window",
    enabled=settings.rate_limit_enabled,
)


def _is_exempt(ip: str) -> bool:
    if settings.dev_local_ip and ip == settings.dev_local_ip.strip():
        return True
    if ip == "localhost":
        return True
    try:
        return ipaddress.ip_address(ip).is_loopback
    except ValueError:
        return False


def _describe(item: RateLimitItem) -> str:
    return f"{item.amount} requests per {item.multiples} {item.GRANULARITY.name}"


def enforce_generation_rate_limit(request: Request) -> None:
    """Count one generation request against the caller's moving window.

    Loopback callers and DEV_LOCAL_IP are never limited.
    """
    if not settings.rate_limit_enabled:
        return
    ip = client_ip(request)
    if _is_exempt(ip):
        return

    item = parse(settings.rate_limit)
    strategy = limiter.limiter
    if strategy.hit(item, _SCOPE, ip):
        return

    reset_time, _remaining = strategy.get_window_stats(item, _SCOPE, ip)
    reset_at = datetime.fromtimestamp(reset_time, tz=timezone.utc)
    raise GenerationRateLimitExceeded(
        f"Daily limit reached ({_describe(item)}). "
        f"Resets at {reset_at.strftime('%Y-%m-%d %H:%M:%S')} UTC. "
        "Switch to Mock mode to continue testing.",
        reset_at=reset_at,
    )
