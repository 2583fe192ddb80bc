from __future__ import annotations

from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, Field

from career_copilot.core.config.generation import get_generation_value
from career_copilot.schemas.career import CamelModel, CareerPath, ResumeProfile, SkillGapAnalysis

ProviderName = Literal["gemini", "deepseek"]
PathVariant = Literal["minimal", "full"]

T = TypeVar("T")

_MIN_PATHS = int(get_generation_value("career_paths.min_count", 1))
_MAX_PATHS = int(get_generation_value("career_paths.max_count", 10))
_DEFAULT_PATHS = int(get_generation_value("career_paths.default_count", 5))
_MIN_MONTHS = int(get_generation_value("timeline.min_months", 3))
_MAX_MONTHS = int(get_generation_value("timeline.max_months", 24))


class ResumeInterpretRequest(CamelModel):
    resume_text: str = Field(min_length=10, max_length=50000)
    ai_provider: ProviderName | None = None


class CareerPathGenerateRequest(CamelModel):
    resume_profile: ResumeProfile
    number_of_paths: int = Field(default=_DEFAULT_PATHS, ge=_MIN_PATHS, le=_MAX_PATHS)
    variant: PathVariant = "minimal"
    ai_provider: ProviderName | None = None


class PathBasic(CamelModel):
    role_id: str = Field(min_length=1, max_length=100)
    role_name: str = Field(min_length=1, max_length=300)


class CareerPathDetailsRequest(CamelModel):
    resume_profile: ResumeProfile
    path_basic: PathBasic
    ai_provider: ProviderName | None = None


class SkillGapAnalyzeRequest(CamelModel):
    resume_profile: ResumeProfile
    career_path: CareerPath
    ai_provider: ProviderName | None = None


class RoadmapGenerateRequest(CamelModel):
    resume_profile: ResumeProfile
    career_path: CareerPath
    skill_gap_analysis: SkillGapAnalysis
    timeline_months: int | None = Field(default=None, ge=_MIN_MONTHS, le=_MAX_MONTHS)
    ai_provider: ProviderName | None = None


class ApiResponse(CamelModel, Generic[T]):
    success: Literal[True] = True
    data: T


class ApiErrorResponse(BaseModel):
    success: Literal[False] = False
    error: str
    code: str | None = None


class ResumeCheck(CamelModel):
    is_valid: bool
    error: str | None = None


class ParsedFile(CamelModel):
    filename: str
    source_type: str
    text: str
    characters: int = Field(ge=0)
    warnings: list[str] = Field(default_factory=list)
    resume_check: ResumeCheck
