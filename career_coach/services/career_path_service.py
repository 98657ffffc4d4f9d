"""Career Path Service - three-milestone progression plan from current to target role"""

from typing import Optional

from career_coach.schemas.artifacts import CareerPlanArtifact
from career_coach.services.ai_providers import DualProviderGenerator, GenerationRequest
from career_coach.services.generation_pipeline import generate_artifact


MILESTONE_COUNT = 3

SYSTEM_INSTRUCTION = f"""You are an expert Career Coach.

Your task is to generate a {MILESTONE_COUNT}-step professional progression plan based on the user's current skills and target role.

Rules:
1. Provide exactly {MILESTONE_COUNT} milestones.
2. Each milestone should have a clear goal and actionable tasks.
3. Output ONLY valid JSON in this exact format:
{{
  "milestones": [
    {{
      "step": 1,
      "title": "Milestone Title",
      "description": "Brief description of the goal",
      "tasks": ["Task 1", "Task 2", "Task 3"]
    }}
  ]
}}

Do not include markdown formatting like ```json. Just the raw JSON string."""


def build_request(current_role: str, target_role: str, skills: str = "") -> GenerationRequest:
    prompt = f"Current Role: {current_role}\nTarget Role: {target_role}\nCurrent Skills: {skills}"
    return GenerationRequest(system_instruction=SYSTEM_INSTRUCTION, user_prompt=prompt)


async def generate_career_plan(
    current_role: str,
    target_role: str,
    skills: str = "",
    generator: Optional[DualProviderGenerator] = None,
) -> dict:
    plan = await generate_artifact(
        build_request(current_role, target_role, skills),
        CareerPlanArtifact,
        artifact="career path",
        generator=generator,
    )

    # Milestones are ordered; fill in missing step numbers from position
    for position, milestone in enumerate(plan["milestones"], start=1):
        if not milestone["step"]:
            milestone["step"] = position

    return plan
