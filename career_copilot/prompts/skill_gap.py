from __future__ import annotations

from career_copilot.core.config.generation import get_generation_value
from career_copilot.schemas.career import CareerPath, ResumeProfile


def build_skill_gap_prompt(profile: ResumeProfile, career_path: CareerPath) -> str:
    max_skills = int(get_generation_value("skill_gap.max_required_skills", 6))
    top_skills = career_path.required_skills[:max_skills]
    # skillGaps stays last; truncation then only loses gap entries
    return (
        "Analyze the skill gaps between a professional's current state and their target role.\n\n"
        f"Current Role: {profile.current_role}\n"
        f"Years of Experience: {profile.years_of_experience:g}\n"
        f"Current Tech Stack: {', '.join(profile.tech_stack) or 'not specified'}\n\n"
        f"Target Role: {career_path.role_name}\n"
        f"Required Skills: {', '.join(top_skills)}\n\n"
        "For each required skill determine the current level, the level the target role needs, "
        "and its importance. Then judge the overall gap severity and the time needed to close it.\n\n"
        "Respond with ONLY valid JSON, no markdown:\n"
        "{\n"
        f'  "careerPathId": "{career_path.role_id}",\n'
        f'  "careerPathName": "{career_path.role_name}",\n'
        '  "overallGapSeverity": "Low|Medium|High",\n'
        '  "estimatedTimeToClose": "e.g. 3-6 months",\n'
        '  "summary": "2 sentences",\n'
        '  "skillGaps": [\n'
        "    {\n"
        '      "skillName": "string",\n'
        '      "currentLevel": "None|Beginner|Intermediate|Advanced|Expert",\n'
        '      "requiredLevel": "None|Beginner|Intermediate|Advanced|Expert",\n'
        '      "importance": "Low|Medium|High",\n'
        '      "learningResources": ["1-2 resources"]\n'
        "    }\n"
        "  ]\n"
        "}\n"
        "overallGapSeverity and importance EXACT: Low|Medium|High - never Very High or Very Low.\n"
        "currentLevel and requiredLevel EXACT: None|Beginner|Intermediate|Advanced|Expert."
    )
