"""Last-resort field extraction from text that no JSON parser accepts.

Every function here is pure and total: missing or garbled fields yield ``None``
or an empty list, never an exception.
"""

from __future__ import annotations

import json
import re
from typing import Any

_STRING_BODY = r'((?:[^"\\]|\\.)*)'
_QUOTED_RE = re.compile(r'"((?:[^"\\]|\\.)*)"', re.DOTALL)


def _unescape(raw: str) -> str:
    try:
        return json.loads(f'"{raw}"', strict=False)
    except ValueError:
        return raw.replace('\\"', '"').replace("\\n", "\n").replace("\\\\", "\\")


def _key_pattern(field_name: str) -> str:
    return rf'"{re.escape(field_name)}"\s*:\s*'


def extract_string_field(text: str, field_name: str) -> str | None:
    """Value of ``"field": "..."``; a value cut off at end of text is returned as-is."""
    match = re.search(_key_pattern(field_name) + '"' + _STRING_BODY, text, re.IGNORECASE | re.DOTALL)
    if not match:
        return None
    raw = match.group(1)
    if raw.endswith("\\"):
        raw = raw[:-1]
    value = _unescape(raw).strip()
    return value or None


def extract_number_field(text: str, field_name: str) -> int | float | None:
    match = re.search(_key_pattern(field_name) + r'"?(-?\d+(?:\.\d+)?)', text, re.IGNORECASE)
    if not match:
        return None
    raw = match.group(1)
    return float(raw) if "." in raw else int(raw)


def _array_body(text: str, field_name: str) -> str | None:
    match = re.search(_key_pattern(field_name) + r"\[", text, re.IGNORECASE)
    if not match:
        return None
    start = match.end()
    depth = 1
    in_string = False
    escape = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escape:
                escape = False
            elif char == "\\":
                escape = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char in "[{":
            depth += 1
        elif char in "]}":
            depth -= 1
            if depth == 0:
                return text[start:index]
    return text[start:]


def extract_string_array_field(text: str, field_name: str) -> list[str]:
    """Complete quoted strings inside ``"field": [ ... ]`` (the array may be truncated)."""
    body = _array_body(text, field_name)
    if body is None:
        return []
    items = [_unescape(raw).strip() for raw in _QUOTED_RE.findall(body)]
    return [item for item in items if item]


def extract_object_blocks(text: str, field_name: str | None = None) -> list[str]:
    """Complete ``{...}`` blocks, top-level within the named array or the whole text."""
    if field_name is None:
        body = text
        stripped = text.lstrip()
        if stripped.startswith("["):
            body = stripped[1:]
    else:
        body = _array_body(text, field_name)
        if body is None:
            return []

    blocks: list[str] = []
    depth = 0
    start = -1
    in_string = False
    escape = False
    for index, char in enumerate(body):
        if in_string:
            if escape:
                escape = False
            elif char == "\\":
                escape = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            if depth == 0:
                start = index
            depth += 1
        elif char == "}" and depth > 0:
            depth -= 1
            if depth == 0 and start != -1:
                blocks.append(body[start : index + 1])
                start = -1
    return blocks


def parse_block(block: str) -> dict[str, Any] | None:
    try:
        parsed = json.loads(block, strict=False)
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


def extract_fields(
    text: str,
    *,
    strings: tuple[str, ...] = (),
    numbers: tuple[str, ...] = (),
    string_arrays: tuple[str, ...] = (),
) -> dict[str, Any]:
    """Collect whichever of the named scalar and list fields can be found."""
    found: dict[str, Any] = {}
    for name in strings:
        value = extract_string_field(text, name)
        if value is not None:
            found[name] = value
    for name in numbers:
        number = extract_number_field(text, name)
        if number is not None:
            found[name] = number
    for name in string_arrays:
        if re.search(_key_pattern(name) + r"\[", text, re.IGNORECASE):
            found[name] = extract_string_array_field(text, name)
    return found
