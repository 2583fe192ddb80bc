"""Structural clean-up of model output that should have been plain JSON.

Models wrap JSON in markdown fences, prefix it with prose, or get cut off by
their token budget mid-value. The helpers here are pure string functions: they
never raise for malformed input and return ``None`` when they cannot help.
"""

from __future__ import annotations

import json
import re
from typing import Any, Callable

_OPENING_FENCE_RE = re.compile(r"^`{3,}[\w+-]*[ \t]*\r?\n?")
_CLOSING_FENCE_RE = re.compile(r"\r?\n?[ \t]*`{3,}\s*$")

_OPENERS = {"{": "}", "[": "]"}
_STRUCTURAL = set("{}[],:")


def strip_code_fences(text: str) -> str:
    """Remove a leading ```lang fence and its trailing fence, if present."""
    cleaned = (text or "").strip()
    if not cleaned.startswith("```"):
        return cleaned
    cleaned = _OPENING_FENCE_RE.sub("", cleaned, count=1)
    cleaned = _CLOSING_FENCE_RE.sub("", cleaned, count=1)
    return cleaned.strip()


def _find_balanced_end(text: str, start: int) -> int | None:
    """Index just past the container opened at ``start``, or None if unbalanced."""
    depth = 0
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
        elif char in "{[":
            depth += 1
        elif char in "}]":
            depth -= 1
            if depth == 0:
                return index + 1
    return None


def extract_embedded_json(
    text: str,
    opener: str = "{",
    accept: Callable[[Any], bool] | None = None,
) -> str | None:
    """Return the first complete, parseable JSON container embedded in prose.

    With ``accept``, parseable candidates it rejects are skipped and the scan
    continues inside them.
    """
    index = text.find(opener)
    while index != -1:
        end = _find_balanced_end(text, index)
        if end is None:
            # later openers sit inside this unterminated container
            return None
        candidate = text[index:end]
        try:
            value = json.loads(candidate, strict=False)
        except ValueError:
            index = text.find(opener, end)
            continue
        if accept is None or accept(value):
            return candidate
        index = text.find(opener, index + 1)
    return None


def _closers(stack: list[dict[str, str]]) -> str:
    return "".join(_OPENERS[frame["kind"]] for frame in reversed(stack))


def _is_complete_scalar(token: str) -> bool:
    try:
        json.loads(token)
    except ValueError:
        return False
    return True


def repair_truncated_json(text: str) -> str | None:
    """Close a JSON document that was cut off before its final bracket.

    The scan tracks the container stack and, for every container, whether it is
    waiting for a key, a colon, a value or a separator. Each position after
    which the document could legally end is remembered; the repaired text is
    the longest such prefix followed by the closing brackets it needs. A string
    value cut mid-way is kept and closed; a dangling key, colon, comma or
    partial literal is dropped. Returns None when no container was opened or
    the text is malformed for reasons other than truncation.
    """
    starts = [pos for pos in (text.find("{"), text.find("[")) if pos != -1]
    if not starts:
        return None
    begin = min(starts)

    stack: list[dict[str, str]] = []
    best: tuple[int, str] | None = None
    in_string = False
    escape = False
    string_start = 0
    escape_start = -1
    literal_start: int | None = None
    done = False

    def value_completed() -> None:
        if stack:
            stack[-1]["state"] = "after_value"

    def mark_safe(end: int) -> None:
        nonlocal best
        best = (end, _closers(stack))

    def flush_literal(end: int) -> bool:
        nonlocal literal_start
        if literal_start is None:
            return True
        token = text[literal_start:end]
        literal_start = None
        if not stack or stack[-1]["state"] not in {"value", "first_value"} or not _is_complete_scalar(token):
            return False
        value_completed()
        mark_safe(end)
        return True

    index = begin
    while index < len(text) and not done:
        char = text[index]

        if in_string:
            if escape:
                escape = False
            elif char == "\\":
                escape = True
                escape_start = index
            elif char == '"':
                in_string = False
                frame = stack[-1]
                if frame["state"] in {"key", "first_key"}:
                    frame["state"] = "colon"
                else:
                    value_completed()
                    mark_safe(index + 1)
            index += 1
            continue

        if literal_start is not None and (char in _STRUCTURAL or char.isspace() or char == '"'):
            if not flush_literal(index):
                return _finish(text, best)

        if char.isspace():
            index += 1
            continue

        frame = stack[-1] if stack else None
        state = frame["state"] if frame else "value"

        if char in _OPENERS:
            if frame is not None and state not in {"value", "first_value"}:
                return _finish(text, best)
            stack.append({"kind": char, "state": "first_key" if char == "{" else "first_value"})
            mark_safe(index + 1)
        elif char in "}]":
            if frame is None or _OPENERS[frame["kind"]] != char:
                return _finish(text, best)
            if state not in {"after_value", "first_key", "first_value"}:
                return _finish(text, best)
            stack.pop()
            if stack:
                value_completed()
                mark_safe(index + 1)
            else:
                best = (index + 1, "")
                done = True
        elif char == ",":
            if frame is None or state != "after_value":
                return _finish(text, best)
            frame["state"] = "key" if frame["kind"] == "{" else "value"
        elif char == ":":
            if frame is None or state != "colon":
                return _finish(text, best)
            frame["state"] = "value"
        elif char == '"':
            if frame is None:
                return _finish(text, best)
            if frame["kind"] == "{" and state in {"key", "first_key"}:
                pass
            elif state not in {"value", "first_value"}:
                return _finish(text, best)
            in_string = True
            escape = False
            string_start = index
        else:
            if frame is None or state not in {"value", "first_value"}:
                return _finish(text, best)
            if literal_start is None:
                literal_start = index
        index += 1

    if done:
        return _finish(text, best)

    if in_string and stack and stack[-1]["state"] in {"value", "first_value"}:
        cut = len(text)
        if escape:
            cut = escape_start
        elif escape_start > string_start and text[escape_start + 1] == "u" and len(text) - escape_start < 6:
            # \uXXXX cut before all four hex digits arrived
            cut = escape_start
        stack[-1]["state"] = "after_value"
        return text[begin:cut] + '"' + _closers(stack)

    if literal_start is not None:
        flush_literal(len(text))

    return _finish(text, best, begin)


def _finish(text: str, best: tuple[int, str] | None, begin: int | None = None) -> str | None:
    if best is None:
        return None
    end, closers = best
    if begin is None:
        starts = [pos for pos in (text.find("{"), text.find("[")) if pos != -1]
        begin = min(starts) if starts else 0
    return text[begin:end] + closers
