from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

Ordinal = Literal["Low", "Medium", "High"]
SkillLevel = Literal["None", "Beginner", "Intermediate", "Advanced", "Expert"]

ORDINAL_VALUES: tuple[str, ...] = ("Low", "Medium", "High")
SKILL_LEVEL_VALUES: tuple[str, ...] = ("None", "Beginner", "Intermediate", "Advanced", "Expert")


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ResumeProfile(CamelModel):
    name: str | None = None
    current_role: str = Field(min_length=1, max_length=300)
    years_of_experience: int | float = Field(ge=0, le=80)
    tech_stack: list[str] = Field(default_factory=list, max_length=100)
    strength_areas: list[str] = Field(default_factory=list, max_length=100)
    industry_background: str = Field(max_length=300)
    certifications: list[str] | None = None
    education: list[str] | None = None


class CareerPathMinimal(CamelModel):
    role_id: str = Field(min_length=1, max_length=100)
    role_name: str = Field(min_length=1, max_length=300)
    description: str
    market_demand_score: int | float = Field(ge=0, le=100)
    industry_alignment: int | float = Field(ge=0, le=100)
    required_skills: list[str] = Field(default_factory=list)


class CareerPath(CareerPathMinimal):
    effort_level: Ordinal
    reward_potential: Ordinal
    reasoning: str


class CareerPathDetails(CamelModel):
    role_id: str = Field(min_length=1, max_length=100)
    role_name: str = Field(min_length=1, max_length=300)
    effort_level: Ordinal
    reward_potential: Ordinal
    reasoning: str
    detailed_description: str = ""


class SkillGap(CamelModel):
    skill_name: str = Field(min_length=1)
    current_level: SkillLevel
    required_level: SkillLevel
    importance: Ordinal
    learning_resources: list[str] | None = None


class SkillGapAnalysis(CamelModel):
    career_path_id: str
    career_path_name: str
    skill_gaps: list[SkillGap]
    overall_gap_severity: Ordinal
    estimated_time_to_close: str
    summary: str


class RoadmapPhase(CamelModel):
    phase_number: int = Field(ge=1)
    duration: str
    skills_focus: list[str]
    learning_direction: str
    project_ideas: list[str]
    milestones: list[str]
    action_items: list[str]


class CareerRoadmap(CamelModel):
    career_path_id: str
    career_path_name: str
    timeline_months: int = Field(ge=1, le=24)
    phases: list[RoadmapPhase] = Field(min_length=1)
    success_metrics: list[str]
    risk_factors: list[str]
    support_resources: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _phases_are_contiguous(self) -> "CareerRoadmap":
        numbers = [phase.phase_number for phase in self.phases]
        if numbers != list(range(1, len(numbers) + 1)):
            raise ValueError("phases must be numbered contiguously starting at 1")
        return self


def validate_unique_role_ids(paths: list[CareerPathMinimal]) -> list[CareerPathMinimal]:
    seen: set[str] = set()
    for path in paths:
        if path.role_id in seen:
            raise ValueError(f"duplicate roleId '{path.role_id}' in generated batch")
        seen.add(path.role_id)
    return paths

