from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from career_copilot.ai.factory import ProviderRouter
from career_copilot.api.deps import get_provider_router, get_response_cache, mock_mode, preferred_provider
from career_copilot.core.rate_limit import enforce_generation_rate_limit
from career_copilot.schemas import ApiResponse, ResumeInterpretRequest, ResumeProfile
from career_copilot.services.mock_data import mock_resume_profile
from career_copilot.services.response_cache import ResponseCache
from career_copilot.services.resume_service import interpret_resume

router = APIRouter()


@router.post("/resume/interpret", response_model=ApiResponse[ResumeProfile])
async def interpret_resume_endpoint(
    payload: ResumeInterpretRequest,
    request: Request,
    mock: bool = Depends(mock_mode),
    preferred: str | None = Depends(preferred_provider),
    ai_router: ProviderRouter = Depends(get_provider_router),
    cache: ResponseCache = Depends(get_response_cache),
):
    if mock:
        return ApiResponse[ResumeProfile](data=mock_resume_profile(payload.resume_text))

    provider = ai_router.resolve(payload.ai_provider, preferred)
    enforce_generation_rate_limit(request)
    profile = await interpret_resume(payload.resume_text, router=ai_router, provider=provider, cache=cache)
    return ApiResponse[ResumeProfile](data=profile)
