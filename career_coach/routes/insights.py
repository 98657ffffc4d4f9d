"""Industry Insight Routes - cached per industry, regenerated weekly"""

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from career_coach.database import get_db
from career_coach.middleware.auth import get_current_user
from career_coach.middleware.rate_limit import limiter, GENERATION_LIMIT
from career_coach.models.industry_insight import IndustryInsight
from career_coach.models.user import User
from career_coach.schemas.career_tools import InsightsRequest
from career_coach.services.ai_providers import DualProviderGenerator, get_generator
from career_coach.services.insight_cache import InsightCacheGate
from career_coach.utils.logger import get_logger

router = APIRouter()
logger = get_logger()


@router.get("")
@limiter.limit(GENERATION_LIMIT)
async def get_profile_insights(
    request: Request,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    generator: DualProviderGenerator = Depends(get_generator),
):
    """Insights for the caller's onboarded industry."""
    if not current_user.industry:
        raise HTTPException(status_code=400, detail="Complete onboarding to select an industry first")

    logger.info(f"[Insights] Profile insights for user={current_user.id}, industry={current_user.industry}")
    insight = await InsightCacheGate(generator).get_or_refresh(
        db,
        current_user.industry,
        skills=current_user.skills or [],
        experience=current_user.experience or 0,
    )
    return insight.to_dict()


@router.post("")
@limiter.limit(GENERATION_LIMIT)
async def get_insights(
    request: Request,
    body: InsightsRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    generator: DualProviderGenerator = Depends(get_generator),
):
    """Insights for an explicitly requested industry."""
    industry = IndustryInsight.normalize_industry(body.industry)
    if not industry:
        raise HTTPException(status_code=400, detail="Industry is required")

    logger.info(f"[Insights] Insights for user={current_user.id}, industry={industry}")
    insight = await InsightCacheGate(generator).get_or_refresh(
        db,
        industry,
        skills=body.skills,
        experience=body.experience,
    )
    return insight.to_dict()
