"""
Cache-first industry insight lookup keyed on industry.

Lookup order:
  1. industry_insights row, next_update in the future  -> return it (no generation)
  2. row present but stale                            -> regenerate, overwrite in place
  3. no row                                           -> generate, insert

Skills and experience only shape the prompt on a miss; a fresh row is shared
by every user in that industry. Two concurrent misses for the same industry
both generate and both write, last writer wins.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from career_coach.config import get_settings
from career_coach.models.industry_insight import IndustryInsight, utcnow
from career_coach.services.ai_providers import DualProviderGenerator
from career_coach.services.insights_service import generate_insights
from career_coach.utils.logger import logger
from career_coach.utils.metrics import inc


class InsightCacheGate:

    def __init__(self, generator: Optional[DualProviderGenerator] = None, refresh_days: Optional[int] = None):
        self.generator = generator
        self.refresh_days = refresh_days or get_settings().insight_refresh_days

    async def lookup(self, db: AsyncSession, industry: str) -> Optional[IndustryInsight]:
        result = await db.execute(
            select(IndustryInsight).where(IndustryInsight.industry == industry)
        )
        return result.scalar_one_or_none()

    async def get_or_refresh(
        self,
        db: AsyncSession,
        industry: str,
        skills: Optional[List[str]] = None,
        experience: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> IndustryInsight:
        industry = IndustryInsight.normalize_industry(industry)
        if not industry:
            raise ValueError("Industry is required")

        # --- 1. Check the cache ---------------------------------------------
        cached = await self.lookup(db, industry)
        now = now or utcnow()

        if cached is not None and cached.is_fresh(now):
            inc("insights.cache_hit")
            logger.info(
                f"[InsightCache] HIT (industry={industry!r}, next_update={cached.next_update.isoformat()})",
                extra={"industry": industry},
            )
            return cached

        # --- 2. Miss or stale: generate -------------------------------------
        inc("insights.cache_miss")
        if cached is not None:
            logger.info(f"[InsightCache] STALE (industry={industry!r}) - regenerating", extra={"industry": industry})
        else:
            logger.info(f"[InsightCache] MISS (industry={industry!r}) - generating", extra={"industry": industry})

        artifact = await generate_insights(
            industry,
            skills=skills or [],
            experience=experience or 0,
            generator=self.generator,
        )

        # --- 3. Upsert: replace every field keyed by industry -----------------
        if cached is None:
            cached = IndustryInsight(industry=industry)
            db.add(cached)
        cached.apply_artifact(artifact, now, self.refresh_days)

        try:
            await db.commit()
        except IntegrityError:
            # Another request inserted this industry first; overwrite its row
            await db.rollback()
            logger.info(f"[InsightCache] Concurrent insert for {industry!r} - overwriting")
            cached = await self.lookup(db, industry)
            cached.apply_artifact(artifact, now, self.refresh_days)
            await db.commit()

        await db.refresh(cached)
        return cached


async def get_or_refresh_insights(
    db: AsyncSession,
    industry: str,
    skills: Optional[List[str]] = None,
    experience: Optional[int] = None,
    generator: Optional[DualProviderGenerator] = None,
) -> IndustryInsight:
    return await InsightCacheGate(generator).get_or_refresh(db, industry, skills, experience)
