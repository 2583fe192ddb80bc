from .career_paths import (
    MINIMAL_KEY_MAP,
    build_career_path_details_prompt,
    build_career_paths_minimal_prompt,
    build_career_paths_prompt,
)
from .resume import build_resume_prompt
from .roadmap import build_roadmap_prompt
from .skill_gap import build_skill_gap_prompt
from .system import get_system_message

__all__ = [
    "MINIMAL_KEY_MAP",
    "build_career_path_details_prompt",
    "build_career_paths_minimal_prompt",
    "build_career_paths_prompt",
    "build_resume_prompt",
    "build_roadmap_prompt",
    "build_skill_gap_prompt",
    "get_system_message",
]
