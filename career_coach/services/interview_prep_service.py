"""
Service for generating multiple-choice interview practice questions from the
user's career profile.
"""
from typing import List, Optional

from career_coach.schemas.artifacts import OPTION_COUNT, QuestionSet
from career_coach.services.ai_providers import DualProviderGenerator, GenerationRequest
from career_coach.services.generation_pipeline import generate_artifact


QUESTION_COUNT = 10

DEFAULT_INDUSTRY = "Software Engineering"
DEFAULT_SKILLS = "General programming"

SYSTEM_INSTRUCTION = "You are a technical interviewer. Return only valid JSON."


def build_request(
    industry: Optional[str] = None,
    skills: Optional[List[str]] = None,
    experience: Optional[int] = None,
) -> GenerationRequest:
    industry = industry or DEFAULT_INDUSTRY
    skills_str = ", ".join(skills or []) or DEFAULT_SKILLS
    experience = experience if experience is not None else 0

    prompt = f"""Generate exactly {QUESTION_COUNT} multiple-choice interview questions for a candidate with the following profile:
- Industry/Role: {industry}
- Skills: {skills_str}
- Years of experience: {experience}

Rules:
1. Each question must have exactly {OPTION_COUNT} options labeled A, B, C, D.
2. Exactly one option must be correct.
3. Include a short explanation (1-2 sentences) for why the correct answer is right.
4. Vary difficulty: mix easy, medium, and hard questions.
5. Output ONLY valid JSON - no markdown, no extra text.

Return this exact JSON structure:
{{
  "questions": [
    {{
      "id": 1,
      "question": "Question text here?",
      "options": ["Option A text", "Option B text", "Option C text", "Option D text"],
      "correctIndex": 0,
      "explanation": "Brief explanation of the correct answer."
    }}
  ]
}}

correctIndex is 0-based (0=A, 1=B, 2=C, 3=D)."""

    return GenerationRequest(system_instruction=SYSTEM_INSTRUCTION, user_prompt=prompt)


async def generate_question_set(
    industry: Optional[str] = None,
    skills: Optional[List[str]] = None,
    experience: Optional[int] = None,
    generator: Optional[DualProviderGenerator] = None,
) -> dict:
    question_set = await generate_artifact(
        build_request(industry, skills, experience),
        QuestionSet,
        artifact="interview questions",
        generator=generator,
    )

    # Number questions the model left unnumbered
    for position, question in enumerate(question_set["questions"], start=1):
        if not question["id"]:
            question["id"] = position

    return question_set
