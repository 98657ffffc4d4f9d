"""Industry Insights - analytical market report for one industry"""

from typing import List, Optional

from career_coach.schemas.artifacts import IndustryInsightArtifact
from career_coach.services.ai_providers import DualProviderGenerator, GenerationRequest
from career_coach.services.generation_pipeline import generate_artifact


SYSTEM_INSTRUCTION = """You are an industry analyst AI.
You ONLY return valid JSON - no markdown, no explanation, no extra text.
All numeric values must be real numbers, not 0 unless truly accurate.
All arrays must have at least 5 items.
Be specific and data-driven."""


def build_request(industry: str, skills: Optional[List[str]] = None, experience: int = 0) -> GenerationRequest:
    skills_str = ", ".join(skills or []) or "none provided"
    experience = experience or 0

    prompt = f"""You are an expert industry analyst. Analyze the "{industry}" industry and return a JSON object.

User context: experience={experience} years, current skills=[{skills_str}]

Return ONLY this JSON structure, no markdown, no extra text:
{{
  "salaryRanges": [
    {{ "role": "string", "min": 50000, "max": 150000, "median": 95000, "location": "string" }}
  ],
  "growthRate": 12.5,
  "demandLevel": "HIGH",
  "topSkills": ["skill1", "skill2", "skill3", "skill4", "skill5"],
  "marketOutlook": "POSITIVE",
  "keyTrends": ["trend1", "trend2", "trend3", "trend4", "trend5"],
  "recommendedSkills": ["skill1", "skill2", "skill3", "skill4", "skill5"],
  "demandTrends": [
    "Short description of demand trend 1",
    "Short description of demand trend 2",
    "Short description of demand trend 3"
  ],
  "futureOutlook": [
    "1-2 year outlook statement",
    "3-5 year outlook statement",
    "Long-term (5+ years) outlook statement"
  ],
  "careerRecommendations": [
    "Actionable recommendation personalized to user skills and experience",
    "Recommendation 2",
    "Recommendation 3",
    "Recommendation 4"
  ]
}}

Rules:
- growthRate must be a realistic percentage number (e.g. 12.5 not 0)
- demandLevel must be exactly one of: HIGH, MEDIUM, LOW
- marketOutlook must be exactly one of: POSITIVE, NEUTRAL, NEGATIVE
- salaryRanges must include at least 6 common roles in this industry
- All arrays must have at least 5 items (except futureOutlook=3, careerRecommendations=4)
- careerRecommendations must be personalized based on the user's {experience} years of experience and skills
"""

    return GenerationRequest(system_instruction=SYSTEM_INSTRUCTION, user_prompt=prompt)


async def generate_insights(
    industry: str,
    skills: Optional[List[str]] = None,
    experience: int = 0,
    generator: Optional[DualProviderGenerator] = None,
) -> dict:
    return await generate_artifact(
        build_request(industry, skills, experience),
        IndustryInsightArtifact,
        artifact="industry insights",
        generator=generator,
    )
