from __future__ import annotations

from career_copilot.schemas.requests import ResumeCheck

MIN_RESUME_CHARS = 100
MIN_RESUME_WORDS = 10
RESUME_INDICATORS = ("experience", "skills", "education", "work", "role", "years")


def check_resume_text(text: str) -> ResumeCheck:
    """Advisory check that extracted text plausibly is a resume."""
    trimmed = (text or "").strip()
    if len(trimmed) < MIN_RESUME_CHARS:
        return ResumeCheck(
            is_valid=False,
            error=f"Resume text is too short. Please provide at least {MIN_RESUME_CHARS} characters of content.",
        )

    if len(trimmed.split()) < MIN_RESUME_WORDS:
        return ResumeCheck(
            is_valid=False,
            error="Resume text is too short. Please provide more details about your experience, skills, and background.",
        )

    lowered = trimmed.lower()
    if not any(indicator in lowered for indicator in RESUME_INDICATORS):
        return ResumeCheck(
            is_valid=False,
            error="The text doesn't look like a resume. Please include information about your experience, skills, or education.",
        )

    return ResumeCheck(is_valid=True)
