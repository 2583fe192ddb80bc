from __future__ import annotations

import math
from typing import Any

from career_copilot.ai.factory import ProviderRouter
from career_copilot.core.config import settings
from career_copilot.core.config.generation import cache_ttl_seconds, get_generation_value
from career_copilot.normalize.ordinals import normalize_string_list
from career_copilot.prompts.roadmap import build_roadmap_prompt
from career_copilot.prompts.system import get_system_message
from career_copilot.recovery.extract import extract_fields, extract_object_blocks, parse_block
from career_copilot.recovery.pipeline import recover_json
from career_copilot.schemas.career import CareerPath, CareerRoadmap, ResumeProfile, SkillGapAnalysis
from career_copilot.services.generation import GenerationRequest, run_generation, validate_payload
from career_copilot.services.response_cache import ResponseCache, fingerprint
from career_copilot.services.timeline import (
    calculate_timeline_months,
    clamp_timeline,
    format_month_range,
    phase_month_ranges,
    recommended_phase_count,
)

_PHASE_LISTS = ("skillsFocus", "projectIdeas", "milestones", "actionItems")

DEFAULT_SUCCESS_METRICS = [
    "Foundational skills acquired",
    "Portfolio projects completed",
    "Ready for target role interviews",
]
DEFAULT_RISK_FACTORS = [
    "Learning curve steepness",
    "Time commitment",
    "Technology changes",
]


def fallback_phases(timeline_months: int) -> list[dict[str, Any]]:
    """Two generic phases used when the model produced none at all."""
    halfway = math.ceil(timeline_months / 2)
    return [
        {
            "phaseNumber": 1,
            "duration": format_month_range(1, halfway),
            "skillsFocus": ["Core skill development"],
            "learningDirection": "Build foundation in target domain",
            "projectIdeas": ["Foundational hands-on project"],
            "milestones": ["Complete foundational learning", "Build first project"],
            "actionItems": ["Study key concepts", "Start foundational project"],
        },
        {
            "phaseNumber": 2,
            "duration": format_month_range(min(halfway + 1, timeline_months), timeline_months),
            "skillsFocus": ["Advanced skill development"],
            "learningDirection": "Deepen expertise and prepare for transition",
            "projectIdeas": ["Advanced portfolio project"],
            "milestones": ["Complete advanced learning", "Polish portfolio"],
            "actionItems": ["Advance skills", "Refine projects for portfolio"],
        },
    ]


def _extract_roadmap_fields(text: str) -> dict[str, Any] | None:
    found = extract_fields(
        text,
        strings=("careerPathId", "careerPathName"),
        numbers=("timelineMonths",),
        string_arrays=("successMetrics", "riskFactors", "supportResources"),
    )
    phases = [parse_block(block) for block in extract_object_blocks(text, "phases")]
    phases = [phase for phase in phases if phase]
    if phases:
        found["phases"] = phases
    return found or None


def _resolve_timeline(requested: int | None, recovered: Any) -> int:
    if requested is not None:
        return requested
    if isinstance(recovered, (int, float)) and not isinstance(recovered, bool) and recovered >= 1:
        return min(int(recovered), 24)
    return int(get_generation_value("timeline.default_months", 6))


def _normalize_phases(raw_phases: Any, timeline_months: int, max_phases: int) -> list[dict[str, Any]]:
    items = [item for item in (raw_phases if isinstance(raw_phases, list) else []) if isinstance(item, dict)]
    items = items[:max_phases]
    durations = phase_month_ranges(timeline_months, len(items)) if items else []
    phases = []
    for position, item in enumerate(items, start=1):
        phase = dict(item)
        phase["phaseNumber"] = position
        duration = phase.get("duration")
        if not isinstance(duration, str) or not duration.strip():
            phase["duration"] = durations[position - 1] if position <= len(durations) else f"Phase {position}"
        direction = phase.get("learningDirection")
        phase["learningDirection"] = direction.strip() if isinstance(direction, str) else ""
        for key in _PHASE_LISTS:
            phase[key] = normalize_string_list(phase.get(key))
        phases.append(phase)
    return phases


def parse_roadmap_response(
    raw_text: str,
    *,
    career_path: CareerPath | None = None,
    timeline_months: int | None = None,
) -> CareerRoadmap:
    """Recover the roadmap, renumber its phases 1..n and fill missing collections.

    An empty or absent phase list is replaced by the two-phase template
    rather than failing the request.
    """
    recovered = recover_json(raw_text, expected="object", extractor=_extract_roadmap_fields, task="roadmap")
    data: dict[str, Any] = dict(recovered.value)

    months = _resolve_timeline(timeline_months, data.get("timelineMonths"))
    data["timelineMonths"] = months

    max_phases = int(get_generation_value("roadmap.max_phases", 5))
    phases = _normalize_phases(data.get("phases"), months, max_phases)
    data["phases"] = phases or fallback_phases(months)

    metrics = normalize_string_list(data.get("successMetrics"))
    data["successMetrics"] = metrics or list(DEFAULT_SUCCESS_METRICS)
    risks = normalize_string_list(data.get("riskFactors"))
    data["riskFactors"] = risks or list(DEFAULT_RISK_FACTORS)
    data["supportResources"] = normalize_string_list(data.get("supportResources"))

    if career_path is not None:
        data["careerPathId"] = career_path.role_id
        data["careerPathName"] = career_path.role_name

    return validate_payload(CareerRoadmap, data, task="roadmap")


def resolve_timeline_months(analysis: SkillGapAnalysis, timeline_months: int | None) -> int:
    """Requested months when given, otherwise the estimate plus severity buffer."""
    if timeline_months is not None:
        return clamp_timeline(timeline_months)
    return calculate_timeline_months(analysis.estimated_time_to_close, analysis.overall_gap_severity)


def roadmap_fingerprint(profile: ResumeProfile, career_path: CareerPath, analysis: SkillGapAnalysis, months: int) -> str:
    return fingerprint(
        "roadmap",
        career_path.role_id,
        career_path.role_name,
        career_path.required_skills[: int(get_generation_value("skill_gap.max_required_skills", 6))],
        profile.current_role,
        profile.years_of_experience,
        analysis.overall_gap_severity,
        months,
    )


async def generate_roadmap(
    profile: ResumeProfile,
    career_path: CareerPath,
    analysis: SkillGapAnalysis,
    timeline_months: int | None = None,
    *,
    router: ProviderRouter,
    provider: str,
    cache: ResponseCache | None = None,
) -> CareerRoadmap:
    months = resolve_timeline_months(analysis, timeline_months)
    phase_count = recommended_phase_count(analysis.overall_gap_severity, months)
    return await run_generation(
        GenerationRequest(
            task="roadmap",
            prompt=build_roadmap_prompt(profile, career_path, analysis, months, phase_count),
            system=get_system_message("roadmap"),
            max_tokens=settings.max_tokens_roadmap,
            parse=lambda raw: parse_roadmap_response(raw, career_path=career_path, timeline_months=months),
            cache_key=roadmap_fingerprint(profile, career_path, analysis, months),
            ttl_seconds=cache_ttl_seconds("roadmap"),
            response_schema=CareerRoadmap,
        ),
        router=router,
        provider=provider,
        cache=cache,
    )
