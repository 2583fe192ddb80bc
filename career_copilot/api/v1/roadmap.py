from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from career_copilot.ai.factory import ProviderRouter
from career_copilot.api.deps import get_provider_router, get_response_cache, mock_mode, preferred_provider
from career_copilot.core.rate_limit import enforce_generation_rate_limit
from career_copilot.schemas import ApiResponse, CareerRoadmap, RoadmapGenerateRequest
from career_copilot.services.mock_data import mock_roadmap
from career_copilot.services.response_cache import ResponseCache
from career_copilot.services.roadmap_service import generate_roadmap, resolve_timeline_months

router = APIRouter()


@router.post("/roadmap/generate", response_model=ApiResponse[CareerRoadmap])
async def generate_roadmap_endpoint(
    payload: RoadmapGenerateRequest,
    request: Request,
    mock: bool = Depends(mock_mode),
    preferred: str | None = Depends(preferred_provider),
    ai_router: ProviderRouter = Depends(get_provider_router),
    cache: ResponseCache = Depends(get_response_cache),
):
    if mock:
        months = resolve_timeline_months(payload.skill_gap_analysis, payload.timeline_months)
        return ApiResponse[CareerRoadmap](
            data=mock_roadmap(payload.resume_profile, payload.career_path, payload.skill_gap_analysis, months)
        )

    provider = ai_router.resolve(payload.ai_provider, preferred)
    enforce_generation_rate_limit(request)
    roadmap = await generate_roadmap(
        payload.resume_profile,
        payload.career_path,
        payload.skill_gap_analysis,
        payload.timeline_months,
        router=ai_router,
        provider=provider,
        cache=cache,
    )
    return ApiResponse[CareerRoadmap](data=roadmap)
