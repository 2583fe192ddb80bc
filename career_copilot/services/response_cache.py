from __future__ import annotations

import hashlib
import json
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable

from career_copilot.normalize.utils import normalize_key_part

Clock = Callable[[], float]


@dataclass(frozen=True)
class _Entry:
    value: Any
    expires_at: float


def fingerprint(task: str, *parts: Any) -> str:
    """Deterministic cache key from the semantically relevant request fields.

    Parts are casefolded and whitespace-collapsed; sequences keep their order.
    """
    canonical: list[Any] = []
    for part in parts:
        if isinstance(part, (list, tuple)):
            canonical.append([normalize_key_part(item) for item in part])
        else:
            canonical.append(normalize_key_part(part))
    payload = json.dumps([task, canonical], ensure_ascii=False, separators=(",", ":"))
    digest = hashlib.sha256(payload.encode("utf-8")).hexdigest()
    return f"{task}:{digest[:32]}"


class ResponseCache:
    """In-process TTL map shared by the orchestrators.

    Entries are replaced wholesale and evicted lazily when read after expiry;
    ``purge_expired`` sweeps the rest. A disabled cache never stores anything.
    """

    def __init__(self, *, enabled: bool = True, clock: Clock = time.monotonic):
        self.enabled = enabled
        self._clock = clock
        self._entries: dict[str, _Entry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        if not self.enabled:
            return None
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.expires_at <= self._clock():
                del self._entries[key]
                return None
            return entry.value

    def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        if not self.enabled or ttl_seconds <= 0:
            return
        with self._lock:
            self._entries[key] = _Entry(value=value, expires_at=self._clock() + ttl_seconds)

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def purge_expired(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [key for key, entry in self._entries.items() if entry.expires_at <= now]
            for key in expired:
                del self._entries[key]
        return len(expired)
