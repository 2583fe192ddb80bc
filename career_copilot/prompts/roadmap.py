from __future__ import annotations

from career_copilot.schemas.career import CareerPath, ResumeProfile, SkillGapAnalysis
from career_copilot.services.timeline import phase_month_ranges


def build_roadmap_prompt(
    profile: ResumeProfile,
    career_path: CareerPath,
    analysis: SkillGapAnalysis,
    timeline_months: int,
    phase_count: int,
) -> str:
    critical = [gap.skill_name for gap in analysis.skill_gaps if gap.importance == "High"][:3]
    if not critical:
        critical = [gap.skill_name for gap in analysis.skill_gaps][:3] or career_path.required_skills[:3]

    phase_lines = []
    for number, duration in enumerate(phase_month_ranges(timeline_months, phase_count), start=1):
        phase_lines.append(
            "    {"
            f'"phaseNumber": {number}, "duration": "{duration}", '
            '"skillsFocus": ["skill"], "learningDirection": "one sentence", '
            '"projectIdeas": ["1-2 projects"], "milestones": ["1-2 milestones"], '
            '"actionItems": ["2-3 actions"]'
            "}"
        )

    return (
        f"Create a {phase_count}-phase {timeline_months}-month roadmap: {career_path.role_name}\n"
        f"Current: {profile.current_role} ({profile.years_of_experience:g}y)\n"
        f"Skills: {', '.join(critical)}\n"
        f"Severity: {analysis.overall_gap_severity} (EXACT: Low|Medium|High - never Very High)\n\n"
        "Return ONLY valid JSON, no markdown:\n"
        "{\n"
        f'  "careerPathId": "{career_path.role_id}",\n'
        f'  "careerPathName": "{career_path.role_name}",\n'
        f'  "timelineMonths": {timeline_months},\n'
        '  "phases": [\n'
        + ",\n".join(phase_lines)
        + "\n  ],\n"
        '  "successMetrics": ["2-3 metrics"],\n'
        '  "riskFactors": ["2-3 risks"],\n'
        '  "supportResources": ["1-3 resources"]\n'
        "}\n"
        f"Exactly {phase_count} phases numbered 1-{phase_count}."
    )
