from __future__ import annotations

from typing import Any, Iterable

from career_copilot.schemas.career import ORDINAL_VALUES, SKILL_LEVEL_VALUES

_IMPORTANCE_RANK = {"High": 0, "Medium": 1, "Low": 2}

# Boundary overshoots collapse onto the nearest end of the scale.
_ORDINAL_ALIASES = {
    "very high": "High",
    "very low": "Low",
}


def normalize_ordinal(value: Any) -> Any:
    """Map a near-miss Low/Medium/High value onto the vocabulary.

    "Very High" becomes "High" and "Very Low" becomes "Low" (any casing or
    spacing); every other value is returned unchanged so that validation can
    reject it.
    """
    if not isinstance(value, str) or value in ORDINAL_VALUES:
        return value
    return _ORDINAL_ALIASES.get(" ".join(value.split()).casefold(), value)


def normalize_skill_level(value: Any) -> Any:
    if isinstance(value, str) and value.strip() in SKILL_LEVEL_VALUES:
        return value.strip()
    return value


def normalize_string_list(value: Any, *, limit: int | None = None) -> list[str]:
    """Coerce a list-ish value to a list of non-empty, stripped strings."""
    if value is None:
        return []
    if isinstance(value, str):
        items: Iterable[Any] = [value]
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        return []
    clean = []
    for item in items:
        if isinstance(item, (int, float)) and not isinstance(item, bool):
            item = str(item)
        if not isinstance(item, str):
            continue
        text = item.strip()
        if text:
            clean.append(text)
    return clean[:limit] if limit is not None else clean


def clamp_score(value: Any) -> int | float | None:
    """Clamp a 0-100 score; numeric strings are accepted, anything else is None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip().rstrip("%"))
        except ValueError:
            return None
        if value.is_integer():
            value = int(value)
    if not isinstance(value, (int, float)):
        return None
    if value != value:  # NaN
        return None
    return max(0, min(100, value))


def sort_by_importance(gaps: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Stable sort: High before Medium before Low, unknown importance last."""
    return sorted(gaps, key=lambda gap: _IMPORTANCE_RANK.get(gap.get("importance"), len(_IMPORTANCE_RANK)))
