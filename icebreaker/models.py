import math
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .config import DEFAULT_QUESTION_COUNT

CareerLevel = Literal["entry", "mid", "senior", "executive"]
Tier = Literal["high", "medium", "low"]
Category = Literal["career_background", "soft_skills", "personality_motivation"]
TransitionType = Literal["promotion", "career_change", "company_change"]
OpportunityType = Literal[
    "shared_experience",
    "industry_connection",
    "skill_synergy",
    "educational_background",
    "career_advice",
]

RoleType = Literal["technical", "management", "business", "general"]
IndustryCategory = Literal["technology", "finance", "healthcare", "general"]
CareerStage = Literal["early", "mid", "senior", "executive", "unknown"]
ManagementLevel = Literal["executive", "senior", "mid", "individual_contributor"]

# Stated years beyond a working lifetime are treated as missing.
MAX_YEARS_OF_EXPERIENCE = 80.0


class CamelModel(BaseModel):
    # Scraper payloads arrive camelCased; Python callers use field names.
    model_config = ConfigDict(extra="ignore", populate_by_name=True, alias_generator=to_camel)


class FrozenModel(CamelModel):
    model_config = ConfigDict(
        extra="ignore", populate_by_name=True, alias_generator=to_camel, frozen=True
    )


def _loose_text(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    if isinstance(value, str):
        return value.strip() or None
    return None


def _loose_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [item for item in value if item is not None]
    return []


def _loose_text_list(value: Any) -> list[str]:
    items = [_loose_text(item) for item in _loose_list(value)]
    return [item for item in items if item]


# ---------------------------------------------------------------------------
# Raw profile (external input)
# ---------------------------------------------------------------------------


class Experience(CamelModel):
    title: str | None = None
    company: str | None = None
    duration: str | None = None
    is_current: bool = False
    description: str | None = None
    industry: str | None = None

    @field_validator("title", "company", "duration", "description", "industry", mode="before")
    @classmethod
    def _text(cls, value: Any) -> Any:
        return _loose_text(value)

    @field_validator("is_current", mode="before")
    @classmethod
    def _flag(cls, value: Any) -> bool:
        return bool(value) if value is not None else False


class Education(CamelModel):
    school: str | None = None
    degree: str | None = None
    field: str | None = None
    start_year: str | None = None
    end_year: str | None = None

    @field_validator("school", "degree", "field", "start_year", "end_year", mode="before")
    @classmethod
    def _text(cls, value: Any) -> Any:
        return _loose_text(value)


class VolunteerExperience(CamelModel):
    cause: str | None = None
    organization: str | None = None

    @field_validator("cause", "organization", mode="before")
    @classmethod
    def _text(cls, value: Any) -> Any:
        return _loose_text(value)


class RawProfile(CamelModel):
    """Loosely structured profile handed over by a scraper, OCR pass or manual entry.

    Every field is optional. Resolution of defaults happens in the analysis
    layer, never here.
    """

    name: str | None = None
    title: str | None = None
    headline: str | None = None
    bio: str | None = None
    current_role: str | None = None
    current_company: str | None = None
    company: str | None = None
    industry: str | None = None
    location: str | None = None
    years_of_experience: float | None = None
    skills: list[str] = Field(default_factory=list)
    experience: list[Experience] = Field(default_factory=list)
    education: list[Education] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)
    languages: list[str] = Field(default_factory=list)
    volunteer_experience: list[VolunteerExperience] = Field(default_factory=list)

    @field_validator(
        "name",
        "title",
        "headline",
        "bio",
        "current_role",
        "current_company",
        "company",
        "industry",
        "location",
        mode="before",
    )
    @classmethod
    def _text(cls, value: Any) -> Any:
        return _loose_text(value)

    @field_validator("years_of_experience", mode="before")
    @classmethod
    def _years(cls, value: Any) -> float | None:
        try:
            years = float(value) if value is not None else None
        except (TypeError, ValueError, OverflowError):
            return None
        if years is None or not math.isfinite(years):
            return None
        return years if 0 <= years <= MAX_YEARS_OF_EXPERIENCE else None

    @field_validator("skills", "certifications", "languages", mode="before")
    @classmethod
    def _texts(cls, value: Any) -> list[str]:
        return _loose_text_list(value)

    @field_validator("experience", "education", "volunteer_experience", mode="before")
    @classmethod
    def _records(cls, value: Any) -> list[Any]:
        return [item for item in _loose_list(value) if isinstance(item, (dict, BaseModel))]


# ---------------------------------------------------------------------------
# Derived profile context
# ---------------------------------------------------------------------------


class PersonalContext(FrozenModel):
    name: str
    current_role: str
    current_company: str
    location: str | None = None
    industry: str | None = None
    years_of_experience: float = Field(default=0.0, ge=0)
    career_level: CareerLevel = "entry"


class CareerStep(FrozenModel):
    title: str
    company: str
    duration: str | None = None
    is_current: bool = False
    significance: Tier = "low"


class CareerTransition(FrozenModel):
    from_: str = Field(alias="from")
    to: str
    type: TransitionType
    significance: str


class ProfessionalJourney(FrozenModel):
    career_progression: tuple[CareerStep, ...] = ()
    key_transitions: tuple[CareerTransition, ...] = ()
    industry_experience: tuple[str, ...] = ()
    company_types: tuple[str, ...] = ()
    role_types: tuple[str, ...] = ()


class ExpertiseContext(FrozenModel):
    skills: tuple[str, ...] = ()
    core_skills: tuple[str, ...] = ()
    technical_skills: tuple[str, ...] = ()
    industry_knowledge: tuple[str, ...] = ()
    certifications: tuple[str, ...] = ()
    specializations: tuple[str, ...] = ()


class InterestContext(FrozenModel):
    professional_interests: tuple[str, ...] = ()
    volunteer_causes: tuple[str, ...] = ()
    educational_background: tuple[str, ...] = ()
    languages: tuple[str, ...] = ()
    likely_topics: tuple[str, ...] = ()


class ConversationTopic(FrozenModel):
    topic: str
    relevance: Tier
    context: str
    suggested_approach: str


class NetworkingOpportunity(FrozenModel):
    type: OpportunityType
    description: str
    confidence: Tier


class ConversationProfile(FrozenModel):
    """Only the attributes actually present on the profile, used for scoring and rewriting."""

    name: str | None = None
    title: str | None = None
    company: str | None = None
    industry: str | None = None
    location: str | None = None
    skills: tuple[str, ...] = ()
    education: tuple[str, ...] = ()
    primary_education: str | None = None
    experience_count: int = 0


class UniqueExperiences(FrozenModel):
    aspects: tuple[str, ...] = ()
    notable_companies: tuple[str, ...] = ()
    diverse_industries: tuple[str, ...] = ()


class EducationSignals(FrozenModel):
    has_education: bool = False
    has_top_school: bool = False
    has_advanced_degree: bool = False
    top_schools: tuple[str, ...] = ()
    study_fields: tuple[str, ...] = ()
    level: Literal["advanced", "undergraduate", "unknown"] = "unknown"


class LeadershipSignals(FrozenModel):
    has_leadership_role: bool = False
    has_leadership_history: bool = False
    leadership_progression: bool = False
    team_size: Literal["large", "medium", "small"] = "small"
    management_level: ManagementLevel = "individual_contributor"


class TechnicalDepth(FrozenModel):
    is_technical: bool = False
    technical_skill_count: int = 0
    depth: Literal["deep", "moderate", "basic"] = "basic"
    specializations: tuple[str, ...] = ()


class ProfileSignals(FrozenModel):
    """Coarse classifications of a profile, rendered into the AI prompt."""

    role_type: RoleType = "general"
    industry_category: IndustryCategory = "general"
    career_stage: CareerStage = "unknown"
    previous_roles: tuple[str, ...] = ()
    experience_history: tuple[str, ...] = ()
    unique_experiences: UniqueExperiences = Field(default_factory=UniqueExperiences)
    education: EducationSignals = Field(default_factory=EducationSignals)
    leadership: LeadershipSignals = Field(default_factory=LeadershipSignals)
    technical_depth: TechnicalDepth = Field(default_factory=TechnicalDepth)
    domain_expertise: tuple[str, ...] = ()


class ProfileContext(FrozenModel):
    personal_info: PersonalContext
    professional_journey: ProfessionalJourney = Field(default_factory=ProfessionalJourney)
    expertise: ExpertiseContext = Field(default_factory=ExpertiseContext)
    interests: InterestContext = Field(default_factory=InterestContext)
    conversation_topics: tuple[ConversationTopic, ...] = ()
    networking_opportunities: tuple[NetworkingOpportunity, ...] = ()
    profile_data: ConversationProfile = Field(default_factory=ConversationProfile)
    signals: ProfileSignals = Field(default_factory=ProfileSignals)


# ---------------------------------------------------------------------------
# Question bank and selection output
# ---------------------------------------------------------------------------


class ConversationStarter(FrozenModel):
    id: int
    category: Category
    subcategory: str
    question: str
    tags: frozenset[str] = frozenset()


class PersonalizedQuestion(CamelModel):
    question_id: int
    original_question: str
    personalized_question: str
    category: Category
    subcategory: str
    relevance_score: float = Field(ge=0)
    reasoning: str = ""
    source: Literal["ai", "rules"] = "rules"


class AICustomization(CamelModel):
    """One entry of the structured list the completion service is asked to return."""

    question_id: int
    customized_question: str = Field(min_length=1)
    relevance_score: float = Field(ge=0)
    reasoning: str


class TargetCriteria(CamelModel):
    category: Category | None = None
    tags: list[str] | None = None
    subcategory: str | None = None

    @model_validator(mode="after")
    def _exactly_one(self) -> "TargetCriteria":
        provided = [
            self.category is not None,
            bool(self.tags),
            bool(self.subcategory),
        ]
        if sum(provided) != 1:
            raise ValueError("exactly one of category, tags or subcategory must be set")
        return self


# ---------------------------------------------------------------------------
# HTTP payloads
# ---------------------------------------------------------------------------


class IcebreakerRequest(CamelModel):
    profile: RawProfile = Field(default_factory=RawProfile)
    session_id: str | None = None
    count: int = Field(default=DEFAULT_QUESTION_COUNT, ge=0, le=50)


class SelectionRequest(CamelModel):
    context: ProfileContext
    session_id: str | None = None
    count: int = Field(default=DEFAULT_QUESTION_COUNT, ge=0, le=50)


class TargetedSelectionRequest(CamelModel):
    criteria: TargetCriteria
    context: ProfileContext
    session_id: str | None = None
    count: int = Field(default=3, ge=0, le=50)


class IcebreakerResponse(CamelModel):
    summary: str
    icebreakers: list[str] = Field(default_factory=list)
    questions: list[PersonalizedQuestion] = Field(default_factory=list)
    career_level: CareerLevel
    degraded: bool = False
