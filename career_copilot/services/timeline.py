"""Timeline arithmetic for roadmap planning, driven by generation.yaml."""

from __future__ import annotations

import math
import re

from career_copilot.core.config.generation import get_generation_value

_MONTHS_RE = re.compile(r"(\d+)(?:\s*-\s*(\d+))?\s*months?", re.IGNORECASE)


def _bounds() -> tuple[int, int]:
    return (
        int(get_generation_value("timeline.min_months", 3)),
        int(get_generation_value("timeline.max_months", 24)),
    )


def extract_months_from_estimate(estimate: str) -> tuple[int, int]:
    """(min, max) months from text like "3-6 months"; the default timeline when absent."""
    min_months, max_months = _bounds()
    match = _MONTHS_RE.search(estimate or "")
    if not match:
        default = int(get_generation_value("timeline.default_months", 6))
        return default, default
    low = int(match.group(1))
    high = int(match.group(2)) if match.group(2) else low
    return max(low, min_months), min(high, max_months)


def clamp_timeline(months: int) -> int:
    min_months, max_months = _bounds()
    return max(min_months, min(int(months), max_months))


def calculate_timeline_months(estimate: str, severity: str) -> int:
    """Upper end of the estimate plus the severity buffer, kept within bounds."""
    _, high = extract_months_from_estimate(estimate)
    buffer = int(get_generation_value(f"timeline.buffer_by_severity.{severity}", 0))
    return clamp_timeline(high + buffer)


def format_month_range(start_month: int, end_month: int) -> str:
    if start_month == end_month:
        return f"Month {start_month}"
    return f"Month {start_month}-{end_month}"


def recommended_phase_count(severity: str, timeline_months: int) -> int:
    short_max = int(get_generation_value("roadmap.timeline_breakpoints.short_max", 6))
    medium_max = int(get_generation_value("roadmap.timeline_breakpoints.medium_max", 12))
    if timeline_months <= short_max:
        bucket = "short"
    elif timeline_months <= medium_max:
        bucket = "medium"
    else:
        bucket = "long"

    count = int(get_generation_value(f"roadmap.phase_count_by_severity.{severity}.{bucket}", 3))
    min_phases = int(get_generation_value("roadmap.min_phases", 2))
    max_phases = int(get_generation_value("roadmap.max_phases", 5))
    return max(min_phases, min(count, max_phases))


def phase_month_ranges(timeline_months: int, phase_count: int) -> list[str]:
    """Split the timeline into contiguous "Month a-b" labels, one per phase."""
    phase_count = max(1, min(phase_count, timeline_months))
    labels = []
    start = 1
    for index in range(1, phase_count + 1):
        end = math.ceil(timeline_months * index / phase_count)
        labels.append(format_month_range(start, end))
        start = end + 1
    return labels
