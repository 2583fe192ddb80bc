from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

_GENERATION_CONFIG_CACHE: dict[str, Any] | None = None
_GENERATION_CONFIG_PATH = Path(__file__).resolve().parent / "generation.yaml"


def get_generation_config() -> dict[str, Any]:
    """Load the packaged generation policy file and cache it."""
    global _GENERATION_CONFIG_CACHE

    if _GENERATION_CONFIG_CACHE is not None:
        return _GENERATION_CONFIG_CACHE

    if not _GENERATION_CONFIG_PATH.exists():
        raise RuntimeError(
            f"Generation config not found at '{_GENERATION_CONFIG_PATH}'. "
            "Expected file: career_copilot/core/config/generation.yaml"
        )

    try:
        raw = _GENERATION_CONFIG_PATH.read_text(encoding="utf-8")
    except OSError as exc:
        raise RuntimeError(
            f"Failed to read generation config '{_GENERATION_CONFIG_PATH}': {exc}"
        ) from exc

    try:
        parsed = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise RuntimeError(
            f"Invalid YAML in generation config '{_GENERATION_CONFIG_PATH}': {exc}"
        ) from exc

    if not isinstance(parsed, dict):
        raise RuntimeError(
            f"Invalid generation config '{_GENERATION_CONFIG_PATH}': expected a top-level mapping."
        )

    _GENERATION_CONFIG_CACHE = parsed
    return _GENERATION_CONFIG_CACHE


def get_generation_value(path: str, default: Any = None) -> Any:
    """Get nested config value using dot path notation, e.g. 'roadmap.max_phases'."""
    if not path:
        return default

    current: Any = get_generation_config()
    for key in path.split("."):
        if not isinstance(current, dict):
            return default
        if key not in current:
            return default
        current = current[key]
    return current


def cache_ttl_seconds(task: str) -> int:
    return int(get_generation_value(f"cache_ttl_seconds.{task}", 3600))
