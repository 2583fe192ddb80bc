from __future__ import annotations

import re


def normalize_line(line: str) -> str:
    return re.sub(r"\s+", " ", line).strip()


def normalize_key_part(value: object) -> str:
    """Canonical form of a fingerprint component: casefolded, single-spaced."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return normalize_line(str(value)).casefold()
