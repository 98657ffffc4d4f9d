# Database models package
from career_coach.models.user import User
from career_coach.models.industry_insight import IndustryInsight, DemandLevel, MarketOutlook

__all__ = [
    "User",
    "IndustryInsight",
    "DemandLevel",
    "MarketOutlook",
]
