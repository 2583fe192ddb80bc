"""Ordered recovery of a JSON payload from raw model output.

Strategies are tried cheapest first; each returns a ``Recovered`` value or
``None`` so the pipeline simply moves on to the next one:

1. ``direct``    - strict parse of the fence-stripped text
2. ``embedded``  - first complete JSON container found inside surrounding prose
3. ``repaired``  - truncated JSON closed by :func:`repair_truncated_json`
4. ``extracted`` - task-specific field-by-field regex extraction
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Literal, Sequence

from career_copilot.ai.errors import ResponseUnusableError
from career_copilot.recovery.json_repair import (
    extract_embedded_json,
    repair_truncated_json,
    strip_code_fences,
)

logger = logging.getLogger(__name__)

Expected = Literal["object", "array"]
Extractor = Callable[[str], "dict[str, Any] | list[Any] | None"]


@dataclass(frozen=True)
class Recovered:
    value: Any
    strategy: str


Strategy = Callable[[str, Expected], "Recovered | None"]


def _loads(text: str) -> Any | None:
    try:
        return json.loads(text, strict=False)
    except ValueError:
        return None


def _matches(value: Any, expected: Expected) -> bool:
    if expected == "object":
        return isinstance(value, dict)
    return isinstance(value, list)


def parse_direct(text: str, expected: Expected) -> Recovered | None:
    value = _loads(text)
    if value is None or not _matches(value, expected):
        return None
    return Recovered(value=value, strategy="direct")


def _holds_records(value: Any, expected: Expected) -> bool:
    if expected == "object":
        return isinstance(value, dict)
    return isinstance(value, list) and any(isinstance(item, dict) for item in value)


def parse_embedded(text: str, expected: Expected) -> Recovered | None:
    candidate = extract_embedded_json(
        text,
        "{" if expected == "object" else "[",
        accept=lambda value: _holds_records(value, expected),
    )
    if candidate is None:
        return None
    value = _loads(candidate)
    if value is None:
        return None
    return Recovered(value=value, strategy="embedded")


def parse_repaired(text: str, expected: Expected) -> Recovered | None:
    opener = "{" if expected == "object" else "["
    start = text.find(opener)
    if start == -1:
        return None
    repaired = repair_truncated_json(text[start:])
    if repaired is None:
        return None
    value = _loads(repaired)
    # an empty shell means nothing before the damage was salvageable
    if not value or not _matches(value, expected):
        return None
    return Recovered(value=value, strategy="repaired")


DEFAULT_STRATEGIES: tuple[Strategy, ...] = (parse_direct, parse_embedded, parse_repaired)


def _recovered_event(task: str, strategy: str, text: str) -> str:
    return json.dumps({"event": "generation_recovered", "task": task, "strategy": strategy, "text_len": len(text)})


def recover_json(
    raw_text: str,
    *,
    expected: Expected = "object",
    extractor: Extractor | None = None,
    strategies: Sequence[Strategy] = DEFAULT_STRATEGIES,
    task: str = "unknown",
) -> Recovered:
    """Run the strategies in order and return the first success.

    Raises ResponseUnusableError when the text is empty or every strategy,
    including the optional field extractor, came back empty-handed.
    """
    text = strip_code_fences(raw_text or "")
    if not text or text in {"{}", "[]"}:
        raise ResponseUnusableError(f"Empty or invalid JSON response for {task}.")

    for strategy in strategies:
        recovered = strategy(text, expected)
        if recovered is not None:
            if recovered.strategy != "direct":
                logger.info(_recovered_event(task, recovered.strategy, text))
            return recovered

    if extractor is not None:
        extracted = extractor(text)
        if extracted:
            logger.warning(_recovered_event(task, "extracted", text))
            return Recovered(value=extracted, strategy="extracted")

    raise ResponseUnusableError(
        f"Could not recover a JSON {expected} from the {task} response "
        f"(length {len(text)}): no parse, repair or field extraction succeeded."
    )
