"""Resume Service - rewrites structured resume sections into polished, ATS-friendly JSON"""

from typing import List, Optional

from career_coach.schemas.artifacts import ResumeArtifact
from career_coach.services.ai_providers import DualProviderGenerator, GenerationRequest
from career_coach.services.generation_pipeline import generate_artifact


SYSTEM_INSTRUCTION = "You are an expert Resume Writer and ATS Optimizer. Return only valid JSON."


def _format_bullets(bullets) -> str:
    if isinstance(bullets, list):
        return "; ".join(b for b in bullets if b)
    return bullets or ""


def format_experience(experience: List[dict]) -> str:
    return "\n".join(
        f"- {e.get('title', '')} at {e.get('company', '')} ({e.get('duration', '')})\n  {_format_bullets(e.get('bullets'))}"
        for e in experience
        if e.get("title") or e.get("company")
    )


def format_education(education: List[dict]) -> str:
    return "\n".join(
        f"- {e.get('degree', '')}, {e.get('institution', '')} ({e.get('year', '')})"
        + (f", GPA: {e['gpa']}" if e.get("gpa") else "")
        for e in education
        if e.get("degree") or e.get("institution")
    )


def format_projects(projects: List[dict]) -> str:
    return "\n".join(
        f"- {p.get('name')} [{p.get('tech', '')}]: {p.get('description', '')}"
        for p in projects
        if p.get("name")
    )


def build_request(
    personal_info: dict,
    target_role: str,
    skills: str = "",
    experience: Optional[List[dict]] = None,
    education: Optional[List[dict]] = None,
    projects: Optional[List[dict]] = None,
) -> GenerationRequest:
    name = personal_info.get("name", "")
    exp_text = format_experience(experience or [])
    edu_text = format_education(education or [])
    proj_text = format_projects(projects or [])

    prompt = f"""Rewrite and enhance the following resume information for a {target_role} role into a polished, professional, ATS-friendly format.

Candidate: {name}
Target Role: {target_role}
Skills: {skills}

Work Experience:
{exp_text or "None provided"}

Education:
{edu_text or "None provided"}

Projects:
{proj_text or "None provided"}

Rules:
1. Rewrite experience bullets to start with strong action verbs and add measurable impact where logical.
2. Generate a compelling 2-3 sentence professional summary tailored to the {target_role} role.
3. Parse skills into a clean array.
4. Keep education and project data as-is but polish descriptions.
5. Output ONLY valid JSON - no markdown, no extra text.

Return exactly this JSON structure:
{{
  "name": "{name}",
  "summary": "Professional summary here...",
  "skills": ["skill1", "skill2"],
  "experience": [
    {{
      "title": "Job Title",
      "company": "Company",
      "duration": "Jan 2023 – Present",
      "bullets": ["Strong bullet 1", "Strong bullet 2"]
    }}
  ],
  "education": [
    {{
      "degree": "Degree",
      "institution": "School",
      "year": "2019–2023",
      "gpa": "3.8"
    }}
  ],
  "projects": [
    {{
      "name": "Project Name",
      "tech": "Tech stack",
      "description": "High-impact description"
    }}
  ]
}}"""

    return GenerationRequest(system_instruction=SYSTEM_INSTRUCTION, user_prompt=prompt)


async def generate_resume(
    personal_info: dict,
    target_role: str,
    skills: str = "",
    experience: Optional[List[dict]] = None,
    education: Optional[List[dict]] = None,
    projects: Optional[List[dict]] = None,
    generator: Optional[DualProviderGenerator] = None,
) -> dict:
    request = build_request(personal_info, target_role, skills, experience, education, projects)
    resume = await generate_artifact(request, ResumeArtifact, artifact="resume", generator=generator)
    if not resume["name"]:
        resume["name"] = personal_info.get("name", "")
    return resume
