from .career import (
    ORDINAL_VALUES,
    SKILL_LEVEL_VALUES,
    CareerPath,
    CareerPathDetails,
    CareerPathMinimal,
    CareerRoadmap,
    ResumeProfile,
    RoadmapPhase,
    SkillGap,
    SkillGapAnalysis,
)
from .requests import (
    ApiErrorResponse,
    ApiResponse,
    CareerPathDetailsRequest,
    CareerPathGenerateRequest,
    ParsedFile,
    PathBasic,
    ResumeCheck,
    ResumeInterpretRequest,
    RoadmapGenerateRequest,
    SkillGapAnalyzeRequest,
)

__all__ = [
    "ORDINAL_VALUES",
    "SKILL_LEVEL_VALUES",
    "ResumeProfile",
    "CareerPathMinimal",
    "CareerPath",
    "CareerPathDetails",
    "SkillGap",
    "SkillGapAnalysis",
    "RoadmapPhase",
    "CareerRoadmap",
    "ResumeInterpretRequest",
    "CareerPathGenerateRequest",
    "PathBasic",
    "CareerPathDetailsRequest",
    "SkillGapAnalyzeRequest",
    "RoadmapGenerateRequest",
    "ApiResponse",
    "ApiErrorResponse",
    "ParsedFile",
    "ResumeCheck",
]
