from .ordinals import (
    clamp_score,
    normalize_ordinal,
    normalize_skill_level,
    normalize_string_list,
    sort_by_importance,
)

__all__ = [
    "clamp_score",
    "normalize_ordinal",
    "normalize_skill_level",
    "normalize_string_list",
    "sort_by_importance",
]
