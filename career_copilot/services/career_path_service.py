from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from career_copilot.ai.errors import ResponseUnusableError
from career_copilot.ai.factory import ProviderRouter
from career_copilot.core.config import settings
from career_copilot.core.config.generation import cache_ttl_seconds
from career_copilot.normalize.ordinals import clamp_score, normalize_ordinal, normalize_string_list
from career_copilot.prompts.career_paths import (
    MINIMAL_KEY_MAP,
    build_career_path_details_prompt,
    build_career_paths_minimal_prompt,
    build_career_paths_prompt,
)
from career_copilot.prompts.system import get_system_message
from career_copilot.recovery.extract import extract_fields, extract_object_blocks, parse_block
from career_copilot.recovery.pipeline import recover_json
from career_copilot.schemas.career import (
    CareerPath,
    CareerPathDetails,
    CareerPathMinimal,
    ResumeProfile,
    validate_unique_role_ids,
)
from career_copilot.schemas.requests import PathBasic, PathVariant
from career_copilot.services.generation import (
    GenerationRequest,
    describe_validation_error,
    run_generation,
    validate_payload,
)
from career_copilot.services.response_cache import ResponseCache, fingerprint

logger = logging.getLogger(__name__)

_DETAIL_STRINGS = ("roleId", "roleName", "effortLevel", "rewardPotential", "reasoning", "detailedDescription")


def _extract_path_blocks(text: str) -> list[dict[str, Any]] | None:
    blocks = [parse_block(block) for block in extract_object_blocks(text)]
    items = [block for block in blocks if block]
    return items or None


def _unwrap_list(value: Any) -> list[Any]:
    if isinstance(value, list):
        return value
    if isinstance(value, dict):
        for candidate in value.values():
            if isinstance(candidate, list) and any(isinstance(item, dict) for item in candidate):
                return candidate
    return []


def _expand_keys(item: dict[str, Any]) -> dict[str, Any]:
    expanded = dict(item)
    for short, full in MINIMAL_KEY_MAP.items():
        if short in expanded and full not in expanded:
            expanded[full] = expanded.pop(short)
    return expanded


def _normalize_path(item: dict[str, Any], index: int, *, full: bool) -> dict[str, Any]:
    data = _expand_keys(item)
    role_id = data.get("roleId")
    if isinstance(role_id, (int, float)) and not isinstance(role_id, bool):
        role_id = str(role_id)
    data["roleId"] = role_id.strip() if isinstance(role_id, str) and role_id.strip() else f"path_{index:03d}"
    for key in ("roleName", "description", "reasoning"):
        if isinstance(data.get(key), str):
            data[key] = data[key].strip()
    for key in ("marketDemandScore", "industryAlignment"):
        data[key] = clamp_score(data.get(key))
    data["requiredSkills"] = normalize_string_list(data.get("requiredSkills"))
    if full:
        data["effortLevel"] = normalize_ordinal(data.get("effortLevel"))
        data["rewardPotential"] = normalize_ordinal(data.get("rewardPotential"))
    return data


def parse_career_paths_response(
    raw_text: str,
    *,
    variant: PathVariant = "minimal",
    expected_count: int | None = None,
) -> list[CareerPathMinimal] | list[CareerPath]:
    """Recover, normalize and validate a batch of paths.

    Entries that cannot be validated are dropped, as are repeated roleIds;
    the batch fails only when no entry survives.
    """
    task = f"career_paths_{variant}"
    recovered = recover_json(raw_text, expected="array", extractor=_extract_path_blocks, task=task)
    model: type[CareerPathMinimal] = CareerPath if variant == "full" else CareerPathMinimal

    paths: list[Any] = []
    seen: set[str] = set()
    dropped = 0
    for index, item in enumerate(_unwrap_list(recovered.value), start=1):
        if not isinstance(item, dict):
            dropped += 1
            continue
        data = _normalize_path(item, index, full=variant == "full")
        if data["roleId"] in seen:
            dropped += 1
            continue
        try:
            path = model.model_validate(data)
        except ValidationError as exc:
            dropped += 1
            logger.warning("career_path_dropped task=%s index=%s reason=%s", task, index, describe_validation_error(exc))
            continue
        seen.add(path.role_id)
        paths.append(path)

    if not paths:
        raise ResponseUnusableError(f"No valid career paths could be recovered from the {variant} response.")
    if dropped:
        logger.warning("career_paths_partial task=%s kept=%s dropped=%s", task, len(paths), dropped)
    if expected_count is not None:
        paths = paths[:expected_count]
    return validate_unique_role_ids(paths)


def parse_career_path_details_response(raw_text: str, path: PathBasic) -> CareerPathDetails:
    recovered = recover_json(
        raw_text,
        expected="object",
        extractor=lambda text: extract_fields(text, strings=_DETAIL_STRINGS) or None,
        task="career_path_details",
    )
    data: dict[str, Any] = dict(recovered.value)
    data["roleId"] = path.role_id
    data["roleName"] = path.role_name
    data["effortLevel"] = normalize_ordinal(data.get("effortLevel"))
    data["rewardPotential"] = normalize_ordinal(data.get("rewardPotential"))
    for key in ("reasoning", "detailedDescription"):
        value = data.get(key)
        data[key] = value.strip() if isinstance(value, str) else ""
    return validate_payload(CareerPathDetails, data, task="career_path_details")


def career_paths_fingerprint(profile: ResumeProfile, number_of_paths: int, variant: PathVariant) -> str:
    return fingerprint(
        f"career_paths_{variant}",
        number_of_paths,
        profile.current_role,
        profile.years_of_experience,
        profile.tech_stack[:3],
    )


def career_path_details_fingerprint(profile: ResumeProfile, path: PathBasic) -> str:
    return fingerprint("career_path_details", path.role_id, path.role_name, profile.current_role)


async def generate_career_paths(
    profile: ResumeProfile,
    number_of_paths: int,
    *,
    variant: PathVariant = "minimal",
    router: ProviderRouter,
    provider: str,
    cache: ResponseCache | None = None,
) -> list[CareerPathMinimal] | list[CareerPath]:
    if variant == "full":
        prompt = build_career_paths_prompt(profile, number_of_paths)
    else:
        prompt = build_career_paths_minimal_prompt(profile, number_of_paths)

    return await run_generation(
        GenerationRequest(
            task=f"career_paths_{variant}",
            prompt=prompt,
            system=get_system_message("career_paths"),
            max_tokens=settings.max_tokens_career_path,
            parse=lambda raw: parse_career_paths_response(raw, variant=variant, expected_count=number_of_paths),
            cache_key=career_paths_fingerprint(profile, number_of_paths, variant),
            ttl_seconds=cache_ttl_seconds(f"career_paths_{variant}"),
        ),
        router=router,
        provider=provider,
        cache=cache,
    )


async def generate_career_path_details(
    profile: ResumeProfile,
    path: PathBasic,
    *,
    router: ProviderRouter,
    provider: str,
    cache: ResponseCache | None = None,
) -> CareerPathDetails:
    return await run_generation(
        GenerationRequest(
            task="career_path_details",
            prompt=build_career_path_details_prompt(profile, path),
            system=get_system_message("career_path_details"),
            max_tokens=settings.max_tokens_default,
            parse=lambda raw: parse_career_path_details_response(raw, path),
            cache_key=career_path_details_fingerprint(profile, path),
            ttl_seconds=cache_ttl_seconds("career_path_details"),
            response_schema=CareerPathDetails,
        ),
        router=router,
        provider=provider,
        cache=cache,
    )
