from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from career_copilot.ai.factory import ProviderRouter
from career_copilot.api.deps import get_provider_router, get_response_cache, mock_mode, preferred_provider
from career_copilot.core.rate_limit import enforce_generation_rate_limit
from career_copilot.schemas import (
    ApiResponse,
    CareerPath,
    CareerPathDetails,
    CareerPathDetailsRequest,
    CareerPathGenerateRequest,
    CareerPathMinimal,
)
from career_copilot.services.career_path_service import generate_career_path_details, generate_career_paths
from career_copilot.services.mock_data import mock_career_path_details, mock_career_paths, mock_career_paths_minimal
from career_copilot.services.response_cache import ResponseCache

router = APIRouter()


@router.post("/career-paths/generate", response_model=None)
async def generate_career_paths_endpoint(
    payload: CareerPathGenerateRequest,
    request: Request,
    mock: bool = Depends(mock_mode),
    preferred: str | None = Depends(preferred_provider),
    ai_router: ProviderRouter = Depends(get_provider_router),
    cache: ResponseCache = Depends(get_response_cache),
):
    if mock:
        if payload.variant == "full":
            return ApiResponse[list[CareerPath]](data=mock_career_paths(payload.resume_profile, payload.number_of_paths))
        return ApiResponse[list[CareerPathMinimal]](
            data=mock_career_paths_minimal(payload.resume_profile, payload.number_of_paths)
        )

    provider = ai_router.resolve(payload.ai_provider, preferred)
    enforce_generation_rate_limit(request)
    paths = await generate_career_paths(
        payload.resume_profile,
        payload.number_of_paths,
        variant=payload.variant,
        router=ai_router,
        provider=provider,
        cache=cache,
    )
    if payload.variant == "full":
        return ApiResponse[list[CareerPath]](data=paths)
    return ApiResponse[list[CareerPathMinimal]](data=paths)


@router.post("/career-paths/details", response_model=ApiResponse[CareerPathDetails])
async def career_path_details_endpoint(
    payload: CareerPathDetailsRequest,
    request: Request,
    mock: bool = Depends(mock_mode),
    preferred: str | None = Depends(preferred_provider),
    ai_router: ProviderRouter = Depends(get_provider_router),
    cache: ResponseCache = Depends(get_response_cache),
):
    if mock:
        return ApiResponse[CareerPathDetails](data=mock_career_path_details(payload.resume_profile, payload.path_basic))

    provider = ai_router.resolve(payload.ai_provider, preferred)
    enforce_generation_rate_limit(request)
    details = await generate_career_path_details(
        payload.resume_profile,
        payload.path_basic,
        router=ai_router,
        provider=provider,
        cache=cache,
    )
    return ApiResponse[CareerPathDetails](data=details)
