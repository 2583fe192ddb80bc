from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from career_copilot.ai.factory import ProviderRouter
from career_copilot.api.deps import get_provider_router, get_response_cache, mock_mode, preferred_provider
from career_copilot.core.rate_limit import enforce_generation_rate_limit
from career_copilot.schemas import ApiResponse, SkillGapAnalysis, SkillGapAnalyzeRequest
from career_copilot.services.mock_data import mock_skill_gap_analysis
from career_copilot.services.response_cache import ResponseCache
from career_copilot.services.skill_gap_service import analyze_skill_gaps

router = APIRouter()


@router.post("/skill-gap/analyze", response_model=ApiResponse[SkillGapAnalysis])
async def analyze_skill_gap_endpoint(
    payload: SkillGapAnalyzeRequest,
    request: Request,
    mock: bool = Depends(mock_mode),
    preferred: str | None = Depends(preferred_provider),
    ai_router: ProviderRouter = Depends(get_provider_router),
    cache: ResponseCache = Depends(get_response_cache),
):
    if mock:
        return ApiResponse[SkillGapAnalysis](
            data=mock_skill_gap_analysis(payload.resume_profile, payload.career_path)
        )

    provider = ai_router.resolve(payload.ai_provider, preferred)
    enforce_generation_rate_limit(request)
    analysis = await analyze_skill_gaps(
        payload.resume_profile,
        payload.career_path,
        router=ai_router,
        provider=provider,
        cache=cache,
    )
    return ApiResponse[SkillGapAnalysis](data=analysis)
