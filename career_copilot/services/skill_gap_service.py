from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from career_copilot.ai.factory import ProviderRouter
from career_copilot.core.config import settings
from career_copilot.core.config.generation import cache_ttl_seconds, get_generation_value
from career_copilot.normalize.ordinals import (
    normalize_ordinal,
    normalize_skill_level,
    normalize_string_list,
    sort_by_importance,
)
from career_copilot.prompts.skill_gap import build_skill_gap_prompt
from career_copilot.prompts.system import get_system_message
from career_copilot.recovery.extract import extract_fields, extract_object_blocks, parse_block
from career_copilot.recovery.pipeline import recover_json
from career_copilot.schemas.career import ORDINAL_VALUES, CareerPath, ResumeProfile, SkillGap, SkillGapAnalysis
from career_copilot.services.generation import (
    GenerationRequest,
    describe_validation_error,
    run_generation,
    validate_payload,
)
from career_copilot.services.response_cache import ResponseCache, fingerprint

logger = logging.getLogger(__name__)

ESTIMATE_BY_SEVERITY = {"Low": "1-3 months", "Medium": "3-6 months", "High": "6-12 months"}
DEFAULT_SUMMARY = "Focus on the high-importance skills first, then round out the remaining gaps."


def _extract_skill_gap_fields(text: str) -> dict[str, Any] | None:
    found = extract_fields(
        text,
        strings=("careerPathId", "careerPathName", "overallGapSeverity", "estimatedTimeToClose", "summary"),
    )
    gaps = [parse_block(block) for block in extract_object_blocks(text, "skillGaps")]
    gaps = [gap for gap in gaps if gap]
    if gaps:
        found["skillGaps"] = gaps
    return found or None


def _normalize_gap(item: dict[str, Any]) -> dict[str, Any]:
    data = dict(item)
    if isinstance(data.get("skillName"), str):
        data["skillName"] = data["skillName"].strip()
    data["currentLevel"] = normalize_skill_level(data.get("currentLevel"))
    data["requiredLevel"] = normalize_skill_level(data.get("requiredLevel"))
    data["importance"] = normalize_ordinal(data.get("importance"))
    resources = data.get("learningResources")
    data["learningResources"] = normalize_string_list(resources) if resources is not None else None
    return data


def _severity_from_gaps(gaps: list[dict[str, Any]]) -> str:
    for level in ("High", "Medium", "Low"):
        if any(gap.get("importance") == level for gap in gaps):
            return level
    return "Medium"


def parse_skill_gap_response(raw_text: str, career_path: CareerPath | None = None) -> SkillGapAnalysis:
    """Recover the analysis; invalid gap rows are dropped and the rest ordered High to Low."""
    recovered = recover_json(raw_text, expected="object", extractor=_extract_skill_gap_fields, task="skill_gap")
    data: dict[str, Any] = dict(recovered.value)

    gaps: list[dict[str, Any]] = []
    raw_gaps = data.get("skillGaps")
    for index, item in enumerate(raw_gaps if isinstance(raw_gaps, list) else []):
        if not isinstance(item, dict):
            continue
        normalized = _normalize_gap(item)
        try:
            SkillGap.model_validate(normalized)
        except ValidationError as exc:
            logger.warning("skill_gap_dropped index=%s reason=%s", index, describe_validation_error(exc))
            continue
        gaps.append(normalized)
    data["skillGaps"] = sort_by_importance(gaps)

    severity = normalize_ordinal(data.get("overallGapSeverity"))
    if severity not in ORDINAL_VALUES:
        severity = _severity_from_gaps(gaps)
    data["overallGapSeverity"] = severity

    estimate = data.get("estimatedTimeToClose")
    if not isinstance(estimate, str) or not estimate.strip():
        data["estimatedTimeToClose"] = ESTIMATE_BY_SEVERITY[severity]
    summary = data.get("summary")
    if not isinstance(summary, str) or not summary.strip():
        data["summary"] = DEFAULT_SUMMARY

    if career_path is not None:
        data["careerPathId"] = career_path.role_id
        data["careerPathName"] = career_path.role_name

    return validate_payload(SkillGapAnalysis, data, task="skill_gap")


def skill_gap_fingerprint(profile: ResumeProfile, career_path: CareerPath) -> str:
    return fingerprint(
        "skill_gap",
        career_path.role_id,
        career_path.role_name,
        career_path.required_skills[: int(get_generation_value("skill_gap.max_required_skills", 6))],
        profile.current_role,
        profile.years_of_experience,
        profile.tech_stack[:3],
    )


async def analyze_skill_gaps(
    profile: ResumeProfile,
    career_path: CareerPath,
    *,
    router: ProviderRouter,
    provider: str,
    cache: ResponseCache | None = None,
) -> SkillGapAnalysis:
    return await run_generation(
        GenerationRequest(
            task="skill_gap",
            prompt=build_skill_gap_prompt(profile, career_path),
            system=get_system_message("skill_gap"),
            max_tokens=settings.max_tokens_skill_gap,
            parse=lambda raw: parse_skill_gap_response(raw, career_path),
            cache_key=skill_gap_fingerprint(profile, career_path),
            ttl_seconds=cache_ttl_seconds("skill_gap"),
            response_schema=SkillGapAnalysis,
        ),
        router=router,
        provider=provider,
        cache=cache,
    )
