"""Coarse profile classifications that give the AI prompt more to work with.

None of these feed scoring or selection; they are descriptive only.
"""

from collections.abc import Sequence

from ...models import (
    CareerStage,
    EducationSignals,
    Experience,
    IndustryCategory,
    LeadershipSignals,
    ManagementLevel,
    ProfileSignals,
    RawProfile,
    RoleType,
    TechnicalDepth,
    UniqueExperiences,
)
from ..utils.constants import (
    ADVANCED_DEGREE_KEYWORDS,
    CAREER_STAGE_BOUNDS,
    DEFAULT_EMPLOYER,
    DEFAULT_POSITION,
    DOMAIN_EXPERTISE_KEYWORDS,
    DOMESTIC_LOCATION_KEYWORDS,
    INDUSTRY_CATEGORY_KEYWORDS,
    LEADERSHIP_TITLE_KEYWORDS,
    MANAGEMENT_LEVEL_KEYWORDS,
    NOTABLE_COMPANIES,
    ROLE_TYPE_KEYWORDS,
    TEAM_SIZE_KEYWORDS,
    TECHNICAL_DEPTH_KEYWORDS,
    TOP_SCHOOLS,
)
from ..utils.text_utils import contains_any, contains_word, unique


def _first_label(text: str | None, table, default: str) -> str:
    for label, keywords in table:
        if contains_any(text, keywords):
            return label
    return default


def determine_role_type(title: str | None) -> RoleType:
    return _first_label(title, ROLE_TYPE_KEYWORDS, "general")  # type: ignore[return-value]


def categorize_industry(industry: str | None) -> IndustryCategory:
    return _first_label(industry, INDUSTRY_CATEGORY_KEYWORDS, "general")  # type: ignore[return-value]


def determine_career_stage(years: float) -> CareerStage:
    if years <= 0:
        return "unknown"
    for bound, stage in CAREER_STAGE_BOUNDS:
        if years < bound:
            return stage  # type: ignore[return-value]
    return "executive"


def describe_experience(exp: Experience) -> str:
    role = f"{exp.title or DEFAULT_POSITION} at {exp.company or DEFAULT_EMPLOYER}"
    return f"{role} ({exp.duration})" if exp.duration else role


def previous_roles(experiences: Sequence[Experience]) -> tuple[str, ...]:
    """Titles held before the current (first-listed) one, most recent first."""
    return unique(exp.title or "" for exp in experiences[1:])


def identify_unique_experiences(profile: RawProfile) -> UniqueExperiences:
    notable = unique(
        exp.company or ""
        for exp in profile.experience
        if contains_word(exp.company, NOTABLE_COMPANIES)
    )
    aspects: list[str] = []
    if notable:
        aspects.append("notable_company_experience")
    if any(
        contains_any(exp.company, ("startup",)) or contains_any(exp.description, ("startup",))
        for exp in profile.experience
    ):
        aspects.append("startup_experience")
    if profile.location and not contains_any(profile.location, DOMESTIC_LOCATION_KEYWORDS):
        aspects.append("international_experience")
    return UniqueExperiences(
        aspects=tuple(aspects),
        notable_companies=notable,
        diverse_industries=unique(exp.industry or "" for exp in profile.experience),
    )


def analyze_education(profile: RawProfile) -> EducationSignals:
    if not profile.education:
        return EducationSignals()
    top_schools = unique(
        edu.school or "" for edu in profile.education if contains_word(edu.school, TOP_SCHOOLS)
    )
    advanced = any(contains_any(edu.degree, ADVANCED_DEGREE_KEYWORDS) for edu in profile.education)
    return EducationSignals(
        has_education=True,
        has_top_school=bool(top_schools),
        has_advanced_degree=advanced,
        top_schools=top_schools,
        study_fields=unique(edu.field or "" for edu in profile.education),
        level="advanced" if advanced else "undergraduate",
    )


def determine_management_level(title: str | None) -> ManagementLevel:
    for level, keywords in MANAGEMENT_LEVEL_KEYWORDS:
        if contains_word(title, keywords):
            return level  # type: ignore[return-value]
    return "individual_contributor"


def identify_leadership(title: str | None, earlier_roles: Sequence[str]) -> LeadershipSignals:
    has_role = contains_word(title, LEADERSHIP_TITLE_KEYWORDS)
    has_history = any(contains_word(role, LEADERSHIP_TITLE_KEYWORDS) for role in earlier_roles)
    return LeadershipSignals(
        has_leadership_role=has_role,
        has_leadership_history=has_history,
        leadership_progression=has_role and has_history,
        team_size=_first_label(title, TEAM_SIZE_KEYWORDS, "small"),  # type: ignore[arg-type]
        management_level=determine_management_level(title),
    )


def _is_technical_skill(skill: str) -> bool:
    return contains_any(skill, TECHNICAL_DEPTH_KEYWORDS) or contains_word(skill, ("ai",))


def assess_technical_depth(skills: Sequence[str]) -> TechnicalDepth:
    technical = tuple(skill for skill in skills if _is_technical_skill(skill))
    count = len(technical)
    return TechnicalDepth(
        is_technical=count > 0,
        technical_skill_count=count,
        depth="deep" if count > 5 else "moderate" if count > 2 else "basic",
        specializations=technical,
    )


def identify_domain_expertise(skills: Sequence[str]) -> tuple[str, ...]:
    found = [
        label
        for label, keywords in DOMAIN_EXPERTISE_KEYWORDS
        if any(contains_any(skill, keywords) for skill in skills)
    ]
    if "ai_ml" not in found and any(contains_word(skill, ("ai",)) for skill in skills):
        found.append("ai_ml")
    return tuple(found)


def build_signals(
    profile: RawProfile,
    current_role: str | None,
    industry: str | None,
    years: float,
    skills: Sequence[str],
) -> ProfileSignals:
    earlier_roles = previous_roles(profile.experience)
    return ProfileSignals(
        role_type=determine_role_type(current_role),
        industry_category=categorize_industry(industry),
        career_stage=determine_career_stage(years),
        previous_roles=earlier_roles,
        experience_history=tuple(describe_experience(exp) for exp in profile.experience),
        unique_experiences=identify_unique_experiences(profile),
        education=analyze_education(profile),
        leadership=identify_leadership(current_role, earlier_roles),
        technical_depth=assess_technical_depth(skills),
        domain_expertise=identify_domain_expertise(skills),
    )
