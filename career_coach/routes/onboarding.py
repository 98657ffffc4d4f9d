"""Onboarding Routes - career profile setup and status"""

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from career_coach.database import get_db
from career_coach.middleware.auth import get_current_user
from career_coach.middleware.rate_limit import limiter, GENERATION_LIMIT
from career_coach.models.user import User
from career_coach.schemas.career_tools import OnboardingRequest
from career_coach.services.ai_providers import DualProviderGenerator, get_generator
from career_coach.services.insight_cache import InsightCacheGate
from career_coach.utils.logger import get_logger

router = APIRouter()
logger = get_logger()


@router.post("")
@limiter.limit(GENERATION_LIMIT)
async def complete_onboarding(
    request: Request,
    data: OnboardingRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    generator: DualProviderGenerator = Depends(get_generator),
):
    """
    Save the career profile. The industry's insight record is created first,
    so the dashboard has data the moment onboarding finishes.
    """
    industry = data.effective_industry
    if not industry:
        raise HTTPException(status_code=400, detail="Industry is required")
    logger.info(f"[Onboarding] user={current_user.id} industry={industry}")

    await InsightCacheGate(generator).get_or_refresh(
        db, industry, skills=data.skills, experience=data.experience
    )

    current_user.industry = industry
    current_user.experience = data.experience
    current_user.skills = data.skills
    current_user.bio = data.bio
    db.add(current_user)
    await db.commit()
    await db.refresh(current_user)

    return {"success": True, "user": current_user.to_dict()}


@router.get("/status")
async def onboarding_status(current_user: User = Depends(get_current_user)):
    return {"isOnboarded": current_user.is_onboarded}
