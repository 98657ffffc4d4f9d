from sqlalchemy import Column, Integer, String, DateTime, Text, JSON
from career_coach.database import Base
from career_coach.models.industry_insight import utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)

    # Identity provider subject ("sub" claim)
    external_id = Column(String(255), unique=True, nullable=False, index=True)
    email = Column(String(255), nullable=True, index=True)
    name = Column(String(255), nullable=True)
    image_url = Column(String(1024), nullable=True)

    # Career profile (filled during onboarding)
    industry = Column(String(255), nullable=True, index=True)
    bio = Column(Text, nullable=True)
    experience = Column(Integer, nullable=True)
    skills = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    @property
    def is_onboarded(self) -> bool:
        return bool(self.industry)

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "imageUrl": self.image_url,
            "industry": self.industry,
            "bio": self.bio,
            "experience": self.experience,
            "skills": list(self.skills or []),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
