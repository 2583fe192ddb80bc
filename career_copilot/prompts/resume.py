from __future__ import annotations


def build_resume_prompt(resume_text: str) -> str:
    return (
        "Extract and structure the information in the resume below.\n\n"
        "IMPORTANT: Respond with ONLY valid JSON, no markdown formatting, no code blocks, no extra text.\n\n"
        f"<resume>\n{resume_text.strip()}\n</resume>\n\n"
        "Return a JSON object with this exact structure:\n"
        "{\n"
        '  "name": "string - person\'s name, or null if not found",\n'
        '  "currentRole": "string - current or most recent job title",\n'
        '  "yearsOfExperience": number - total years of professional experience,\n'
        '  "techStack": ["technologies, programming languages, tools - in the order they appear"],\n'
        '  "strengthAreas": ["key competencies and strengths"],\n'
        '  "industryBackground": "string - industry or domain expertise",\n'
        '  "certifications": ["professional certifications, or empty if none"],\n'
        '  "education": ["educational background, or empty if none"]\n'
        "}\n\n"
        "STRICT REQUIREMENTS:\n"
        "- Return ONLY the JSON object\n"
        "- Escape all strings properly\n"
        "- yearsOfExperience is a non-negative number, not a string; estimate it from the work history if not stated\n"
        "- techStack and strengthAreas are arrays of strings; use [] when nothing is found"
    )
