from __future__ import annotations

import re
from typing import Any

from career_copilot.ai.factory import ProviderRouter
from career_copilot.core.config import settings
from career_copilot.core.config.generation import cache_ttl_seconds
from career_copilot.normalize.ordinals import normalize_string_list
from career_copilot.prompts.resume import build_resume_prompt
from career_copilot.prompts.system import get_system_message
from career_copilot.recovery.extract import extract_fields
from career_copilot.recovery.pipeline import recover_json
from career_copilot.schemas.career import ResumeProfile
from career_copilot.services.generation import GenerationRequest, run_generation, validate_payload
from career_copilot.services.response_cache import ResponseCache, fingerprint

_NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")


def _extract_resume_fields(text: str) -> dict[str, Any] | None:
    found = extract_fields(
        text,
        strings=("name", "currentRole", "industryBackground"),
        numbers=("yearsOfExperience",),
        string_arrays=("techStack", "strengthAreas", "certifications", "education"),
    )
    return found or None


def _coerce_years(value: Any) -> Any:
    if isinstance(value, str):
        match = _NUMBER_RE.search(value)
        if not match:
            return value
        number = float(match.group(0))
        return int(number) if number.is_integer() else number
    return value


def parse_resume_response(raw_text: str) -> ResumeProfile:
    recovered = recover_json(raw_text, expected="object", extractor=_extract_resume_fields, task="resume")
    data: dict[str, Any] = dict(recovered.value)

    name = data.get("name")
    data["name"] = (name.strip() or None) if isinstance(name, str) else None
    if isinstance(data.get("currentRole"), str):
        data["currentRole"] = data["currentRole"].strip()
    data["yearsOfExperience"] = _coerce_years(data.get("yearsOfExperience"))
    data["techStack"] = normalize_string_list(data.get("techStack"))
    data["strengthAreas"] = normalize_string_list(data.get("strengthAreas"))
    background = data.get("industryBackground")
    data["industryBackground"] = background.strip() if isinstance(background, str) else ""
    for key in ("certifications", "education"):
        if data.get(key) is not None:
            data[key] = normalize_string_list(data[key])

    return validate_payload(ResumeProfile, data, task="resume")


def resume_fingerprint(resume_text: str) -> str:
    return fingerprint("resume", resume_text)


async def interpret_resume(
    resume_text: str,
    *,
    router: ProviderRouter,
    provider: str,
    cache: ResponseCache | None = None,
) -> ResumeProfile:
    return await run_generation(
        GenerationRequest(
            task="resume",
            prompt=build_resume_prompt(resume_text),
            system=get_system_message("resume"),
            max_tokens=settings.max_tokens_resume,
            parse=parse_resume_response,
            cache_key=resume_fingerprint(resume_text),
            ttl_seconds=cache_ttl_seconds("resume"),
            response_schema=ResumeProfile,
        ),
        router=router,
        provider=provider,
        cache=cache,
    )
