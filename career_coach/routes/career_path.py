"""
Career Path API Route
Three ordered milestones from the current role to the target role
"""
from fastapi import APIRouter, Depends, Request

from career_coach.middleware.auth import get_current_user
from career_coach.middleware.rate_limit import limiter, GENERATION_LIMIT
from career_coach.models.user import User
from career_coach.schemas.career_tools import CareerPathRequest
from career_coach.services.ai_providers import DualProviderGenerator, get_generator
from career_coach.services.career_path_service import generate_career_plan
from career_coach.utils.logger import logger


router = APIRouter()


@router.post("")
@limiter.limit(GENERATION_LIMIT)
async def create_career_plan(
    request: Request,
    data: CareerPathRequest,
    current_user: User = Depends(get_current_user),
    generator: DualProviderGenerator = Depends(get_generator),
):
    logger.info(f"[CareerPath] {data.current_role} -> {data.target_role} for user={current_user.id}")
    return await generate_career_plan(
        current_role=data.current_role,
        target_role=data.target_role,
        skills=data.skills,
        generator=generator,
    )
