"""Interview Prep Routes - profile-based quiz and conversational mock interview"""

from fastapi import APIRouter, Depends, Request

from career_coach.middleware.auth import get_current_user
from career_coach.middleware.rate_limit import limiter, GENERATION_LIMIT
from career_coach.models.user import User
from career_coach.schemas.career_tools import MockInterviewRequest
from career_coach.services.ai_providers import DualProviderGenerator, get_generator
from career_coach.services.interview_prep_service import generate_question_set
from career_coach.services.mock_interview_service import generate_interview_turn
from career_coach.utils.logger import get_logger

router = APIRouter()
logger = get_logger()


@router.post("/interview-prep")
@limiter.limit(GENERATION_LIMIT)
async def create_question_set(
    request: Request,
    current_user: User = Depends(get_current_user),
    generator: DualProviderGenerator = Depends(get_generator),
):
    """Ten multiple-choice questions built from the caller's profile."""
    logger.info(f"[InterviewPrep] Generating questions for user={current_user.id}, industry={current_user.industry}")
    return await generate_question_set(
        industry=current_user.industry,
        skills=current_user.skills or [],
        experience=current_user.experience,
        generator=generator,
    )


@router.post("/interview")
@limiter.limit(GENERATION_LIMIT)
async def mock_interview_turn(
    request: Request,
    body: MockInterviewRequest,
    current_user: User = Depends(get_current_user),
    generator: DualProviderGenerator = Depends(get_generator),
):
    """Next interviewer turn given the conversation so far."""
    logger.info(
        f"[MockInterview] Turn {len(body.messages) + 1} for user={current_user.id}, role={body.target_role}"
    )
    return await generate_interview_turn(
        [m.model_dump() for m in body.messages],
        body.target_role,
        generator=generator,
    )
