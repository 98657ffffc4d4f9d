"""Resume Builder Route - rewrites the submitted resume for a target role"""

from fastapi import APIRouter, Depends, Request

from career_coach.middleware.auth import get_current_user
from career_coach.middleware.rate_limit import limiter, GENERATION_LIMIT
from career_coach.models.user import User
from career_coach.schemas.career_tools import ResumeRequest
from career_coach.services.ai_providers import DualProviderGenerator, get_generator
from career_coach.services.resume_service import generate_resume
from career_coach.utils.logger import get_logger

router = APIRouter()
logger = get_logger()


@router.post("")
@limiter.limit(GENERATION_LIMIT)
async def build_resume(
    request: Request,
    body: ResumeRequest,
    current_user: User = Depends(get_current_user),
    generator: DualProviderGenerator = Depends(get_generator),
):
    logger.info(f"[Resume] Generating resume for user={current_user.id}, role={body.target_role}")
    return await generate_resume(
        personal_info=body.personal_info.model_dump(),
        target_role=body.target_role,
        skills=body.skills,
        experience=[e.model_dump() for e in body.experience],
        education=[e.model_dump() for e in body.education],
        projects=[p.model_dump() for p in body.projects],
        generator=generator,
    )
