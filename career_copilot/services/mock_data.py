"""Deterministic synthetic results served in mock mode, without any provider call."""

from __future__ import annotations

import re

from career_copilot.schemas.career import (
    CareerPath,
    CareerPathDetails,
    CareerPathMinimal,
    CareerRoadmap,
    ResumeProfile,
    RoadmapPhase,
    SkillGap,
    SkillGapAnalysis,
)
from career_copilot.schemas.requests import PathBasic
from career_copilot.services.timeline import phase_month_ranges

_YEARS_RE = re.compile(r"(\d+(?:\.\d+)?)\s*\+?\s*(?:years?|yrs?)\b", re.IGNORECASE)
_SKILLS_LINE_RE = re.compile(r"^\s*(?:skills|tech(?:nical)? skills|tech stack|technologies)\s*:\s*(.+)$", re.IGNORECASE)

_DEFAULT_PROFILE = ResumeProfile(
    name="Alex Johnson",
    current_role="Senior Software Engineer",
    years_of_experience=5,
    tech_stack=["TypeScript", "React", "Node.js", "PostgreSQL", "AWS", "Docker"],
    strength_areas=["Full-stack development", "System architecture", "Mentoring", "Code quality"],
    industry_background="Technology",
    certifications=["AWS Solutions Architect Associate"],
    education=["BS Computer Science"],
)

_INDUSTRY_FUNCTIONS = {
    "Technology": "Engineering",
    "Finance": "Finance",
    "Healthcare": "Healthcare",
    "Marketing": "Marketing",
    "Sales": "Sales",
    "Operations": "Operations",
    "HR": "Human Resources",
    "Legal": "Legal",
    "Education": "Education",
    "Consulting": "Consulting",
    "Retail": "Retail",
    "Manufacturing": "Manufacturing",
}

_RELATED_ROLES: tuple[tuple[tuple[str, ...], str, list[str]], ...] = (
    (
        ("software", "developer", "engineer"),
        "Product Manager / Technical Program Manager",
        ["Product Strategy", "Technical Communication", "Project Management", "Cross-functional Leadership"],
    ),
    (
        ("product", "manager"),
        "Business Development / Strategy Manager",
        ["Business Analysis", "Strategic Planning", "Market Analysis", "Partnership Development"],
    ),
    (
        ("sales", "business"),
        "Business Operations / Account Management",
        ["Process Optimization", "Client Relations", "Data Analysis", "Negotiation"],
    ),
    (
        ("marketing", "analyst"),
        "Growth Manager / Strategic Marketer",
        ["Growth Strategy", "Data Analytics", "Product Knowledge", "Team Leadership"],
    ),
    (
        ("designer", "creative"),
        "UX Strategist / Design Lead",
        ["User Research", "Design Strategy", "Team Leadership", "Business Acumen"],
    ),
    (
        ("finance", "accountant"),
        "Financial Analyst / Controller",
        ["Financial Modeling", "Business Strategy", "Risk Analysis", "Regulatory Compliance"],
    ),
    (
        ("hr", "human"),
        "Talent Strategist / Organizational Development",
        ["Talent Management", "Organizational Design", "Change Management", "Strategic HR"],
    ),
)

_BUSINESS_IDEAS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("software", "developer"), "Software / SaaS startup"),
    (("consultant", "advisor"), "consulting firm"),
    (("product", "manager"), "product or service business"),
    (("sales", "business development"), "agency or sales-focused business"),
    (("marketing",), "marketing or growth agency"),
    (("designer",), "design or creative studio"),
    (("finance",), "fintech or financial services venture"),
)

_ESTIMATE_BY_EFFORT = {"Low": "3-4 months", "Medium": "6-9 months", "High": "9-12 months"}


def _split_tech(raw: str) -> list[str]:
    return [item.strip() for item in re.split(r"[,/|;]", raw) if item.strip()]


def mock_resume_profile(resume_text: str) -> ResumeProfile:
    """Best-effort heuristic reading; falls back to a fixed sample profile."""
    text = (resume_text or "").strip()
    segments = [segment.strip() for segment in re.split(r"[,\n;]", text) if segment.strip()]

    years_match = _YEARS_RE.search(text)
    years: int | float = _DEFAULT_PROFILE.years_of_experience
    if years_match:
        parsed = float(years_match.group(1))
        years = int(parsed) if parsed.is_integer() else parsed
        years = min(years, 80)

    role = None
    if segments:
        first = segments[0]
        if not _YEARS_RE.search(first) and "/" not in first and len(first) <= 80:
            role = first

    tech: list[str] = []
    for line in text.splitlines():
        match = _SKILLS_LINE_RE.match(line)
        if match:
            tech.extend(_split_tech(match.group(1)))
    if not tech:
        for segment in segments[1:]:
            if "/" in segment:
                tech.extend(item for item in _split_tech(segment) if len(item.split()) <= 3)

    if role is None and years_match is None and not tech:
        return _DEFAULT_PROFILE.model_copy(deep=True)

    return ResumeProfile(
        name=None,
        current_role=role or _DEFAULT_PROFILE.current_role,
        years_of_experience=years,
        tech_stack=list(dict.fromkeys(tech)) or list(_DEFAULT_PROFILE.tech_stack),
        strength_areas=list(_DEFAULT_PROFILE.strength_areas),
        industry_background=_DEFAULT_PROFILE.industry_background,
        certifications=list(_DEFAULT_PROFILE.certifications or []),
        education=list(_DEFAULT_PROFILE.education or []),
    )


def _industry_function(industry: str) -> str:
    if industry in _INDUSTRY_FUNCTIONS:
        return _INDUSTRY_FUNCTIONS[industry]
    lowered = industry.lower()
    for key, value in _INDUSTRY_FUNCTIONS.items():
        if key.lower() in lowered:
            return value
    return industry


def _related_role(current_role: str) -> tuple[str, list[str]]:
    lowered = current_role.lower()
    for keywords, title, skills in _RELATED_ROLES:
        if any(keyword in lowered for keyword in keywords):
            return title, list(skills)
    return "Strategic Advisor / Operations Manager", [
        "Strategic Planning",
        "Process Improvement",
        "Team Leadership",
        "Business Analysis",
    ]


def _business_idea(current_role: str, industry: str) -> str:
    lowered = current_role.lower()
    for keywords, idea in _BUSINESS_IDEAS:
        if any(keyword in lowered for keyword in keywords):
            return idea
    return f"business leveraging your expertise in {industry}"


def mock_career_paths(profile: ResumeProfile, number_of_paths: int = 5) -> list[CareerPath]:
    """Profession-agnostic tracks chosen by seniority and breadth of strengths."""
    years = profile.years_of_experience
    role = profile.current_role
    industry = profile.industry_background
    strengths = profile.strength_areas
    top_strength = strengths[0] if strengths else "your core strengths"
    top_two = " and ".join(strengths[:2]) or top_strength
    is_senior = years >= 5

    paths: list[CareerPath] = []
    if years >= 2:
        function = _industry_function(industry) or role
        paths.append(
            CareerPath(
                role_id="leadership-track",
                role_name=f"{'Director' if is_senior else 'Manager'} of {function}",
                description=(
                    f"Lead and manage teams in {industry or 'your industry'}. "
                    "Build organizational culture and drive strategic direction for your team."
                ),
                market_demand_score=min(100, 78 + years * 2),
                industry_alignment=92,
                effort_level="Low" if years >= 4 else "Medium",
                reward_potential="High",
                reasoning=f"Your {years:g} years as a {role} with strengths in {top_two} position you well to lead teams.",
                required_skills=["Team Leadership", "Strategic Planning", "People Management", "Decision Making"],
            )
        )

    paths.append(
        CareerPath(
            role_id="specialization-track",
            role_name=f"Senior/Lead {role}",
            description=(
                "Become the go-to expert in your field. "
                "Deepen your expertise and influence on specialized work rather than management."
            ),
            market_demand_score=85,
            industry_alignment=95,
            effort_level="Low",
            reward_potential="High",
            reasoning=f"Your strong foundation in {top_strength} and domain knowledge makes specialization a natural progression.",
            required_skills=["Deep Domain Expertise", "Problem Solving", "Innovation", "Thought Leadership"],
        )
    )

    if len(strengths) >= 2:
        title, skills = _related_role(role)
        paths.append(
            CareerPath(
                role_id="lateral-track",
                role_name=title,
                description=(
                    f"Transition to {title} leveraging your transferable skills. "
                    "Expand your professional horizons while applying existing expertise."
                ),
                market_demand_score=72,
                industry_alignment=80,
                effort_level="Medium",
                reward_potential="High",
                reasoning=f"Your experience in {top_two} translates well to {title} roles.",
                required_skills=skills,
            )
        )

    if is_senior:
        executive = "VP/C-Level" if years >= 10 else "Senior Leadership"
        paths.append(
            CareerPath(
                role_id="executive-track",
                role_name=f"{executive} in {industry or 'Your Field'}",
                description=(
                    "Shape organizational strategy and vision at the executive level. "
                    "Drive business outcomes and set strategic direction for your organization."
                ),
                market_demand_score=75,
                industry_alignment=85,
                effort_level="High",
                reward_potential="High",
                reasoning=f"With {years:g} years of experience and proven success, you're positioned to move into strategic leadership roles.",
                required_skills=[
                    "Business Strategy",
                    "Organizational Leadership",
                    "Financial Acumen",
                    "Stakeholder Management",
                ],
            )
        )

    if years >= 4:
        paths.append(
            CareerPath(
                role_id="consulting-track",
                role_name=f"Consultant / Advisor in {industry or 'Your Domain'}",
                description=(
                    "Apply your expertise to help multiple organizations solve complex problems. "
                    "Build independent practice or join consulting firms."
                ),
                market_demand_score=80,
                industry_alignment=88,
                effort_level="Medium",
                reward_potential="High",
                reasoning=f"Your {years:g} years of hands-on experience combined with {top_strength} make you a valuable consultant.",
                required_skills=[
                    "Subject Matter Expertise",
                    "Client Communication",
                    "Problem Analysis",
                    "Strategic Thinking",
                ],
            )
        )

    if years >= 3 and len(strengths) >= 2:
        paths.append(
            CareerPath(
                role_id="entrepreneurship-track",
                role_name="Entrepreneur / Business Owner",
                description=(
                    f"Start your own {_business_idea(role, industry)} "
                    "leveraging your professional expertise and industry connections."
                ),
                market_demand_score=70,
                industry_alignment=90,
                effort_level="High",
                reward_potential="High",
                reasoning=f"Your background in {industry} combined with skills in {top_strength} positions you well for entrepreneurship.",
                required_skills=[
                    "Business Development",
                    "Entrepreneurship",
                    "Financial Management",
                    "Risk Management",
                ],
            )
        )

    return paths[: max(1, min(number_of_paths, 5))]


def mock_career_paths_minimal(profile: ResumeProfile, number_of_paths: int = 5) -> list[CareerPathMinimal]:
    return [
        CareerPathMinimal.model_validate(path.model_dump(include=set(CareerPathMinimal.model_fields)))
        for path in mock_career_paths(profile, number_of_paths)
    ]


def mock_career_path_details(profile: ResumeProfile, path: PathBasic) -> CareerPathDetails:
    return CareerPathDetails(
        role_id=path.role_id,
        role_name=path.role_name,
        effort_level="Medium",
        reward_potential="High",
        reasoning="This career path aligns well with your background and offers significant growth potential.",
        detailed_description=(
            f"{path.role_name} is an excellent progression that leverages your expertise "
            "while opening new opportunities for impact and compensation growth."
        ),
    )


def mock_skill_gap_analysis(profile: ResumeProfile, career_path: CareerPath) -> SkillGapAnalysis:
    """Three gaps over the path's first skills; severity and estimate follow effort level."""
    skills = list(career_path.required_skills) + ["Domain Expertise", "Leadership", "Communication"]
    effort = career_path.effort_level
    return SkillGapAnalysis(
        career_path_id=career_path.role_id,
        career_path_name=career_path.role_name,
        skill_gaps=[
            SkillGap(
                skill_name=skills[0],
                current_level="Intermediate",
                required_level="Advanced",
                importance="High",
                learning_resources=[
                    f"Structured course on {skills[0]}",
                    "Reference book recommended by practitioners",
                    "Weekly practice problems",
                ],
            ),
            SkillGap(
                skill_name=skills[1],
                current_level="Beginner",
                required_level="Intermediate",
                importance="High",
                learning_resources=[
                    "The Manager's Path (book)",
                    "Radical Candor (book)",
                    "Leadership fundamentals course",
                ],
            ),
            SkillGap(
                skill_name=skills[2],
                current_level="Intermediate",
                required_level="Advanced",
                importance="Medium",
                learning_resources=[
                    "Presentation skills workshop",
                    "Toastmasters membership",
                    "Technical writing practice",
                ],
            ),
        ],
        overall_gap_severity=effort,
        estimated_time_to_close=_ESTIMATE_BY_EFFORT[effort],
        summary=(
            "You have a solid foundation. Focus on developing the key skills for your target role "
            "while leveraging your existing strengths."
        ),
    )


def mock_roadmap(
    profile: ResumeProfile,
    career_path: CareerPath,
    analysis: SkillGapAnalysis,
    timeline_months: int = 6,
) -> CareerRoadmap:
    skills = list(career_path.required_skills) + ["Core Skills", "Applied Practice", "Leadership", "Leadership"]
    first, second, third = phase_month_ranges(timeline_months, 3)
    return CareerRoadmap(
        career_path_id=career_path.role_id,
        career_path_name=career_path.role_name,
        timeline_months=timeline_months,
        phases=[
            RoadmapPhase(
                phase_number=1,
                duration=first,
                skills_focus=[skills[0], skills[1]],
                learning_direction="Build theoretical foundation in core skills",
                project_ideas=[
                    "Map a current workflow onto target-role practices",
                    "Document decisions on an existing project",
                    "Lead one discussion on your team's approach",
                ],
                milestones=[
                    "Complete a foundational course",
                    "Read the first chapters of a core reference",
                    "Present one piece of work to your team",
                ],
                action_items=[
                    "2-3 hours/week: structured course",
                    "1 hour/week: reading and notes",
                    "1 hour/week: practice exercises",
                    "Collect feedback from peers",
                ],
            ),
            RoadmapPhase(
                phase_number=2,
                duration=second,
                skills_focus=[skills[2]],
                learning_direction="Apply knowledge to real problems",
                project_ideas=[
                    "Lead a redesign of one part of your current work",
                    "Mentor a junior colleague",
                    "Present a vision to stakeholders",
                ],
                milestones=[
                    "Deliver one applied project",
                    "Lead one major initiative",
                    "Present to non-specialist stakeholders",
                ],
                action_items=[
                    "2 hours/week: advanced topics",
                    "Mentor one colleague",
                    "Document learnings",
                    "Practice presentations",
                ],
            ),
            RoadmapPhase(
                phase_number=3,
                duration=third,
                skills_focus=[skills[3]],
                learning_direction="Master role and develop interview skills",
                project_ideas=[
                    "Take on a larger scope of responsibility",
                    "Contribute to organization-wide strategy",
                    "Interview with target companies for role validation",
                ],
                milestones=[
                    f"Ready for {career_path.role_name} interviews",
                    "Demonstrable impact on team/company",
                    "Strong interview performance",
                ],
                action_items=[
                    "Interview practice with peers",
                    "Portfolio building",
                    "Network with industry contacts",
                    "Finalize role transition plan",
                ],
            ),
        ],
        success_metrics=[
            "Complete all required skill development",
            f"Demonstrate {career_path.role_name} competencies in current role",
            "Get positive feedback from potential hiring managers",
        ],
        risk_factors=[
            "May require work-life balance adjustments",
            "Some skills have steep learning curves",
            "Market conditions could affect timing",
        ],
        support_resources=[
            "Budget for courses and books",
            "Mentor/advisor in target role",
            "Supportive team environment",
        ],
    )
