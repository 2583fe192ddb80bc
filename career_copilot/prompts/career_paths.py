from __future__ import annotations

from career_copilot.schemas.career import ResumeProfile
from career_copilot.schemas.requests import PathBasic

# Short keys for the fast list prompt; parsers expand them back.
MINIMAL_KEY_MAP: dict[str, str] = {
    "id": "roleId",
    "n": "roleName",
    "d": "description",
    "md": "marketDemandScore",
    "ia": "industryAlignment",
    "sk": "requiredSkills",
}


def _profile_lines(profile: ResumeProfile, *, include_certifications: bool = True) -> str:
    lines = [
        f"- Current Role: {profile.current_role}",
        f"- Years of Experience: {profile.years_of_experience:g}",
        f"- Tech Stack: {', '.join(profile.tech_stack) or 'not specified'}",
        f"- Strength Areas: {', '.join(profile.strength_areas) or 'not specified'}",
        f"- Industry Background: {profile.industry_background or 'not specified'}",
    ]
    if include_certifications and profile.certifications:
        lines.append(f"- Certifications: {', '.join(profile.certifications)}")
    return "\n".join(lines)


def build_career_paths_minimal_prompt(profile: ResumeProfile, number_of_paths: int) -> str:
    """Fast prompt for the selection list, using compressed field names."""
    return (
        f"Suggest exactly {number_of_paths} next career moves for this professional:\n"
        f"{_profile_lines(profile, include_certifications=False)}\n\n"
        "Return ONLY a raw JSON array, no prose, no code fences:\n"
        '[{"id":"path_001","n":"role name","d":"1-2 sentence description",'
        '"md":85,"ia":90,"sk":["skill1","skill2","skill3","skill4"]}]\n\n'
        "Rules:\n"
        f"- Exactly {number_of_paths} objects; ids path_001, path_002, ... (unique)\n"
        "- md = market demand 0-100, ia = industry alignment 0-100 (numbers)\n"
        "- sk = 4-6 key skills for the role"
    )


def build_career_paths_prompt(profile: ResumeProfile, number_of_paths: int) -> str:
    return (
        "Suggest potential career paths based on a professional's profile.\n\n"
        "IMPORTANT: Respond with ONLY valid JSON, no markdown formatting, no code blocks, no extra text.\n\n"
        "Professional profile:\n"
        f"{_profile_lines(profile)}\n\n"
        f"Generate exactly {number_of_paths} strategic career paths that would be ideal next moves. Consider:\n"
        "1. Natural skill progression from the current role\n"
        "2. Market demand for the suggested roles\n"
        "3. How the background aligns with each path\n"
        "4. Growth potential and career satisfaction\n\n"
        "Return a JSON array of objects with this exact structure:\n"
        "[\n"
        "  {\n"
        '    "roleId": "unique id like path_001",\n'
        '    "roleName": "clear role name",\n'
        '    "description": "2-3 sentence description of role and responsibilities",\n'
        '    "marketDemandScore": number 0-100,\n'
        '    "effortLevel": "Low|Medium|High",\n'
        '    "rewardPotential": "Low|Medium|High",\n'
        '    "reasoning": "2-3 sentences on why this path suits them",\n'
        '    "requiredSkills": ["5-8 key skills"],\n'
        '    "industryAlignment": number 0-100\n'
        "  }\n"
        "]\n\n"
        "STRICT REQUIREMENTS:\n"
        f"- Exactly {number_of_paths} career paths; roleId values path_001, path_002, ... are unique\n"
        "- marketDemandScore and industryAlignment are numbers 0-100\n"
        "- effortLevel and rewardPotential EXACT: Low|Medium|High - never Very High or Very Low"
    )


def build_career_path_details_prompt(profile: ResumeProfile, path: PathBasic) -> str:
    return (
        f"Assess this career move: {path.role_name} (id {path.role_id})\n"
        "For the professional:\n"
        f"{_profile_lines(profile, include_certifications=False)}\n\n"
        "Return ONLY valid JSON:\n"
        "{\n"
        f'  "roleId": "{path.role_id}",\n'
        f'  "roleName": "{path.role_name}",\n'
        '  "effortLevel": "Low|Medium|High",\n'
        '  "rewardPotential": "Low|Medium|High",\n'
        '  "reasoning": "2-3 sentences specific to this person",\n'
        '  "detailedDescription": "3-4 sentences on the role, day-to-day work and growth"\n'
        "}\n"
        "effortLevel and rewardPotential EXACT: Low|Medium|High - never Very High or Very Low"
    )
