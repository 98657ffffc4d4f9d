"""Cover Letter Generation Service"""

from typing import Optional

from career_coach.schemas.artifacts import CoverLetterArtifact
from career_coach.services.ai_providers import DualProviderGenerator, GenerationRequest
from career_coach.services.generation_pipeline import generate_artifact


PARAGRAPH_COUNT = 4

SYSTEM_INSTRUCTION = (
    "You are a professional cover letter writer. You write compelling, personalized "
    "cover letters and return them ONLY as valid JSON."
)

TONE_INSTRUCTIONS = {
    "formal": "Use a formal, polished tone. Be direct and confident.",
    "enthusiastic": "Use an energetic, passionate tone. Show excitement for the role.",
    "concise": "Be brief and to the point. Every sentence must earn its place.",
    "conversational": "Use a friendly, approachable tone. Be personable and warm.",
}


def subject_line(job_title: str, applicant_name: str) -> str:
    return f"Application for {job_title} – {applicant_name}"


def build_request(
    applicant_name: str,
    company_name: str,
    job_title: str,
    tone: str = "formal",
    applicant_email: str = "",
    applicant_phone: str = "",
    job_description: Optional[str] = None,
    skills: str = "",
    experience: str = "",
    why_company: str = "",
) -> GenerationRequest:
    tone_line = TONE_INSTRUCTIONS.get((tone or "").lower(), f"Write in a {tone} tone.")

    prompt = f"""Write a compelling, personalized cover letter based on the details below.

Applicant: {applicant_name}
Email: {applicant_email}
Phone: {applicant_phone}
Target Role: {job_title} at {company_name}
Skills: {skills}
Relevant Experience: {experience}
Why this company: {why_company}
Job Description Snippet: {job_description or "Not provided"}
Tone: {tone} - {tone_line}

Rules:
1. Write exactly {PARAGRAPH_COUNT} paragraphs: opening hook, skills/experience match, why this company, closing CTA.
2. Keep the full letter under 400 words.
3. Do NOT use placeholder brackets like [Your Name] - use the actual provided values.
4. Match the requested tone.
5. Output ONLY valid JSON - no markdown, no extra text, no literal newlines inside string values.

Return exactly this JSON where each paragraph is a separate string in the array:
{{
  "subject": "{subject_line(job_title, applicant_name)}",
  "paragraphs": [
    "Opening paragraph text",
    "Skills and experience paragraph text",
    "Why this company paragraph text",
    "Closing call-to-action paragraph text"
  ]
}}"""

    return GenerationRequest(system_instruction=SYSTEM_INSTRUCTION, user_prompt=prompt)


async def generate_cover_letter(
    applicant_name: str,
    company_name: str,
    job_title: str,
    tone: str = "formal",
    generator: Optional[DualProviderGenerator] = None,
    **details,
) -> dict:
    request = build_request(applicant_name, company_name, job_title, tone=tone, **details)
    letter = await generate_artifact(request, CoverLetterArtifact, artifact="cover letter", generator=generator)
    if not letter["subject"]:
        letter["subject"] = subject_line(job_title, applicant_name)
    return letter
