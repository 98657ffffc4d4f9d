"""
Pydantic request schemas for the career tools.
Request bodies use camelCase keys (the frontend's convention); Python code
reads them through snake_case attributes.
"""
from typing import List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def split_skills(value) -> List[str]:
    """Accept a list or a comma-separated string; drop blanks."""
    if value is None:
        return []
    if isinstance(value, str):
        return [s.strip() for s in value.split(",") if s.strip()]
    return [str(s).strip() for s in value if str(s).strip()]


def join_skills(value) -> str:
    if isinstance(value, list):
        return ", ".join(str(s) for s in value)
    return value or ""


# ========== Industry Insights ==========
class InsightsRequest(CamelModel):
    """Explicit insight request; GET /api/insights reads these from the profile"""
    industry: str = Field(..., min_length=1, max_length=255)
    skills: List[str] = Field(default_factory=list)
    experience: int = Field(0, ge=0, le=60)

    @field_validator("skills", mode="before")
    @classmethod
    def _split_skills(cls, v):
        return split_skills(v)


# ========== Resume ==========
class PersonalInfo(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    name: str = ""
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None


class ExperienceEntry(CamelModel):
    title: str = ""
    company: str = ""
    duration: str = ""
    bullets: Union[str, List[str]] = ""


class EducationEntry(CamelModel):
    degree: str = ""
    institution: str = ""
    year: str = ""
    gpa: Optional[str] = None


class ProjectEntry(CamelModel):
    name: str = ""
    tech: str = ""
    description: str = ""


class ResumeRequest(CamelModel):
    personal_info: PersonalInfo
    target_role: str = Field(..., min_length=1, max_length=200)
    skills: str = ""
    experience: List[ExperienceEntry] = Field(default_factory=list)
    education: List[EducationEntry] = Field(default_factory=list)
    projects: List[ProjectEntry] = Field(default_factory=list)

    @field_validator("skills", mode="before")
    @classmethod
    def _join_skills(cls, v):
        return join_skills(v)


# ========== Cover Letter ==========
class CoverLetterRequest(CamelModel):
    applicant_name: str = Field(..., min_length=1, max_length=200)
    applicant_email: str = ""
    applicant_phone: str = ""
    company_name: str = Field(..., min_length=1, max_length=200)
    job_title: str = Field(..., min_length=1, max_length=200)
    job_description: Optional[str] = None
    skills: str = ""
    experience: str = ""
    why_company: str = ""
    tone: str = "formal"

    @field_validator("skills", mode="before")
    @classmethod
    def _join_skills(cls, v):
        return join_skills(v)


# ========== Mock Interview ==========
class ChatMessage(BaseModel):
    role: str
    content: str = ""


class MockInterviewRequest(CamelModel):
    messages: List[ChatMessage] = Field(default_factory=list)
    target_role: str = Field(..., min_length=1, max_length=200)


# ========== Career Path ==========
class CareerPathRequest(CamelModel):
    current_role: str = Field(..., min_length=1, max_length=200)
    target_role: str = Field(..., min_length=1, max_length=200)
    skills: str = ""

    @field_validator("skills", mode="before")
    @classmethod
    def _join_skills(cls, v):
        return join_skills(v)


# ========== Onboarding ==========
class OnboardingRequest(CamelModel):
    """Career profile captured on first sign-in"""
    industry: str = Field(..., min_length=1, max_length=255)
    sub_industry: Optional[str] = Field(None, max_length=255)
    experience: Optional[int] = Field(None, ge=0, le=50)
    skills: List[str] = Field(default_factory=list)
    bio: Optional[str] = Field(None, max_length=500)

    @field_validator("skills", mode="before")
    @classmethod
    def _split_skills(cls, v):
        return split_skills(v)

    @property
    def effective_industry(self) -> str:
        """The specialization wins over the broad industry when both are given."""
        return (self.sub_industry or self.industry).strip()
