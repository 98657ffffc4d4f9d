"""Cover Letter Generation Route"""

from fastapi import APIRouter, Depends, Request

from career_coach.middleware.auth import get_current_user
from career_coach.middleware.rate_limit import limiter, GENERATION_LIMIT
from career_coach.models.user import User
from career_coach.schemas.career_tools import CoverLetterRequest
from career_coach.services.ai_providers import DualProviderGenerator, get_generator
from career_coach.services.cover_letter_service import generate_cover_letter
from career_coach.utils.logger import get_logger

router = APIRouter()
logger = get_logger()


@router.post("")
@limiter.limit(GENERATION_LIMIT)
async def create_cover_letter(
    request: Request,
    data: CoverLetterRequest,
    current_user: User = Depends(get_current_user),
    generator: DualProviderGenerator = Depends(get_generator),
):
    logger.info(
        f"[CoverLetter] Generating for user={current_user.id}, "
        f"company={data.company_name}, title={data.job_title}, tone={data.tone}"
    )
    return await generate_cover_letter(
        applicant_name=data.applicant_name,
        company_name=data.company_name,
        job_title=data.job_title,
        tone=data.tone,
        applicant_email=data.applicant_email,
        applicant_phone=data.applicant_phone,
        job_description=data.job_description,
        skills=data.skills,
        experience=data.experience,
        why_company=data.why_company,
        generator=generator,
    )
