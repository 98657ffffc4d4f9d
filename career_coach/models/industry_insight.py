"""
IndustryInsight Model - Shared per-industry market insight cache

Insights are keyed by industry alone, not by user. The first user to pick an
industry triggers one generation call; everyone else in that industry reads
the same row until it goes stale (next_update passes) and is regenerated in
place.
"""

from enum import Enum

from sqlalchemy import Column, Integer, String, DateTime, Float, JSON
from datetime import datetime, timedelta, timezone
from career_coach.database import Base


def utcnow() -> datetime:
    """Naive UTC timestamp, matching how DateTime columns are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class DemandLevel(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class MarketOutlook(str, Enum):
    POSITIVE = "POSITIVE"
    NEUTRAL = "NEUTRAL"
    NEGATIVE = "NEGATIVE"


class IndustryInsight(Base):
    """
    One row per industry (unique). Never deleted by the application.

    next_update is always last_updated + settings.insight_refresh_days at write time;
    a read after next_update regenerates and overwrites every field.
    """

    __tablename__ = "industry_insights"

    id = Column(Integer, primary_key=True, index=True)
    industry = Column(String(255), unique=True, nullable=False, index=True)

    salary_ranges = Column(JSON, nullable=False, default=list)
    growth_rate = Column(Float, nullable=False, default=0.0)
    demand_level = Column(String(20), nullable=False, default=DemandLevel.MEDIUM.value)
    top_skills = Column(JSON, nullable=False, default=list)
    market_outlook = Column(String(20), nullable=False, default=MarketOutlook.NEUTRAL.value)
    key_trends = Column(JSON, nullable=False, default=list)
    recommended_skills = Column(JSON, nullable=False, default=list)
    demand_trends = Column(JSON, nullable=False, default=list)
    future_outlook = Column(JSON, nullable=False, default=list)
    career_recommendations = Column(JSON, nullable=False, default=list)

    last_updated = Column(DateTime, nullable=False, default=utcnow)
    next_update = Column(DateTime, nullable=False)

    # Coerced artifact key -> column name
    ARTIFACT_COLUMNS = {
        "salaryRanges": "salary_ranges",
        "growthRate": "growth_rate",
        "demandLevel": "demand_level",
        "topSkills": "top_skills",
        "marketOutlook": "market_outlook",
        "keyTrends": "key_trends",
        "recommendedSkills": "recommended_skills",
        "demandTrends": "demand_trends",
        "futureOutlook": "future_outlook",
        "careerRecommendations": "career_recommendations",
    }

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def normalize_industry(industry: str) -> str:
        return (industry or "").strip()

    def is_fresh(self, now: datetime = None) -> bool:
        """True while next_update is still in the future."""
        return self.next_update > (now or utcnow())

    def apply_artifact(self, artifact: dict, now: datetime, refresh_days: int) -> None:
        """Overwrite every insight field and restart the freshness window."""
        for key, column in self.ARTIFACT_COLUMNS.items():
            setattr(self, column, artifact[key])
        self.last_updated = now
        self.next_update = now + timedelta(days=refresh_days)

    def to_dict(self) -> dict:
        data = {"id": self.id, "industry": self.industry}
        for key, column in self.ARTIFACT_COLUMNS.items():
            data[key] = getattr(self, column)
        data["lastUpdated"] = self.last_updated.isoformat() if self.last_updated else None
        data["nextUpdate"] = self.next_update.isoformat() if self.next_update else None
        return data
