"""
Pydantic schemas for generated artifacts.

Model output is validated leniently: every field has a default, and a missing,
null or invalid value falls back to that default instead of failing the whole
artifact. Keys are camelCase on the wire, snake_case in Python.
"""
from collections.abc import Mapping
from typing import Annotated, Any, ClassVar, List, Tuple, Union

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from career_coach.models.industry_insight import DemandLevel, MarketOutlook


OPTION_COUNT = 4


def _mapping_items(value: Any) -> Any:
    # Drop list elements that are not objects; the rest are validated as models
    if isinstance(value, list):
        return [item for item in value if isinstance(item, Mapping)]
    return value


Number = Union[StrictInt, StrictFloat]


class Artifact(BaseModel):
    """Base for model-output schemas. Validation never raises."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    # Wire keys that must be present for the output to count as this artifact
    required_fields: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="before")
    @classmethod
    def objects_only(cls, data: Any) -> Any:
        return data if isinstance(data, Mapping) else {}

    @field_validator("*", mode="wrap")
    @classmethod
    def default_on_invalid(cls, value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo) -> Any:
        default = cls.model_fields[info.field_name].get_default(call_default_factory=True)
        if value is None:
            return default
        try:
            return handler(value)
        except ValidationError:
            return default

    @classmethod
    def missing_required(cls, parsed: Mapping) -> Tuple[str, ...]:
        return tuple(key for key in cls.required_fields if parsed.get(key) is None)

    @classmethod
    def coerce(cls, parsed: Any) -> dict:
        """Validate parsed JSON and return the camelCase dict sent to callers."""
        return cls.model_validate(parsed).model_dump(mode="json", by_alias=True)


# ========== Industry Insights ==========
class SalaryRange(Artifact):
    role: str = ""
    min: Number = 0
    max: Number = 0
    median: Number = 0
    location: str = ""


class IndustryInsightArtifact(Artifact):
    salary_ranges: Annotated[List[SalaryRange], BeforeValidator(_mapping_items)] = Field(default_factory=list)
    growth_rate: Number = 0
    demand_level: DemandLevel = DemandLevel.MEDIUM
    top_skills: List[str] = Field(default_factory=list)
    market_outlook: MarketOutlook = MarketOutlook.NEUTRAL
    key_trends: List[str] = Field(default_factory=list)
    recommended_skills: List[str] = Field(default_factory=list)
    demand_trends: List[str] = Field(default_factory=list)
    future_outlook: List[str] = Field(default_factory=list)
    career_recommendations: List[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def unwrap_trends(cls, data: Any) -> Any:
        # Some models wrap the report in {"trends": {...}}
        if isinstance(data, Mapping) and data.get("salaryRanges") is None:
            nested = data.get("trends")
            if isinstance(nested, Mapping):
                return nested
        return data


# ========== Resume ==========
class ResumeExperience(Artifact):
    title: str = ""
    company: str = ""
    duration: str = ""
    bullets: List[str] = Field(default_factory=list)


class ResumeEducation(Artifact):
    degree: str = ""
    institution: str = ""
    year: str = ""
    gpa: str = ""


class ResumeProject(Artifact):
    name: str = ""
    tech: str = ""
    description: str = ""


class ResumeArtifact(Artifact):
    name: str = ""
    summary: str = ""
    skills: List[str] = Field(default_factory=list)
    experience: Annotated[List[ResumeExperience], BeforeValidator(_mapping_items)] = Field(default_factory=list)
    education: Annotated[List[ResumeEducation], BeforeValidator(_mapping_items)] = Field(default_factory=list)
    projects: Annotated[List[ResumeProject], BeforeValidator(_mapping_items)] = Field(default_factory=list)


# ========== Cover Letter ==========
class CoverLetterArtifact(Artifact):
    required_fields: ClassVar[Tuple[str, ...]] = ("paragraphs",)

    subject: str = ""
    paragraphs: List[str] = Field(default_factory=list)


# ========== Interview Prep ==========
class Question(Artifact):
    id: int = 0
    question: str = ""
    options: List[str] = Field(default_factory=list, min_length=OPTION_COUNT, max_length=OPTION_COUNT)
    correct_index: StrictInt = Field(0, ge=0, lt=OPTION_COUNT)
    explanation: str = ""


class QuestionSet(Artifact):
    required_fields: ClassVar[Tuple[str, ...]] = ("questions",)

    questions: Annotated[List[Question], BeforeValidator(_mapping_items)] = Field(default_factory=list)


# ========== Career Path ==========
class Milestone(Artifact):
    step: int = 0
    title: str = ""
    description: str = ""
    tasks: List[str] = Field(default_factory=list)


class CareerPlanArtifact(Artifact):
    required_fields: ClassVar[Tuple[str, ...]] = ("milestones",)

    milestones: Annotated[List[Milestone], BeforeValidator(_mapping_items)] = Field(default_factory=list)
