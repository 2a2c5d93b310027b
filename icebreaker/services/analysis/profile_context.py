"""Profile analysis: raw scraped profile in, structured ProfileContext out.

Every derivation falls back to a textual default, so analysis of a sparse or
half-broken profile still succeeds. The only non-deterministic input is the
clock used to close "Present" date ranges, and it is injectable.
"""

from collections.abc import Callable
from datetime import date
from typing import Any

from ...models import (
    ConversationProfile,
    PersonalContext,
    ProfessionalJourney,
    ProfileContext,
    RawProfile,
)
from ..utils.constants import DEFAULT_COMPANY, DEFAULT_NAME, DEFAULT_ROLE
from ..utils.text_utils import compact_role_title, unique
from .experience import (
    build_career_progression,
    categorize_companies,
    categorize_roles,
    determine_career_level,
    extract_industries,
    identify_career_transitions,
    resolve_years_of_experience,
)
from .expertise import build_expertise, build_interests, format_education
from .signals import build_signals
from .topics import generate_conversation_topics, identify_networking_opportunities


def coerce_profile(profile: RawProfile | dict[str, Any] | None) -> RawProfile:
    if profile is None:
        return RawProfile()
    if isinstance(profile, RawProfile):
        return profile
    return RawProfile.model_validate(profile)


def resolve_current_role(profile: RawProfile) -> str | None:
    first = profile.experience[0] if profile.experience else None
    return (
        profile.current_role
        or profile.title
        or (first.title if first else None)
        or compact_role_title(profile.headline or "")
        or None
    )


def resolve_current_company(profile: RawProfile) -> str | None:
    first = profile.experience[0] if profile.experience else None
    return profile.current_company or profile.company or (first.company if first else None)


def resolve_industry(profile: RawProfile) -> str | None:
    first = profile.experience[0] if profile.experience else None
    return profile.industry or (first.industry if first else None)


class ProfileContextAnalyzer:
    def __init__(self, today: Callable[[], date] = date.today) -> None:
        self._today = today

    def analyze(self, profile: RawProfile | dict[str, Any] | None) -> ProfileContext:
        raw = coerce_profile(profile)
        today = self._today()

        role = resolve_current_role(raw)
        company = resolve_current_company(raw)
        industry = resolve_industry(raw)
        years = resolve_years_of_experience(raw, today)
        primary_education = format_education(raw.education[0]) if raw.education else ""

        personal = PersonalContext(
            name=raw.name or DEFAULT_NAME,
            current_role=role or DEFAULT_ROLE,
            current_company=company or DEFAULT_COMPANY,
            location=raw.location,
            industry=industry,
            years_of_experience=years,
            career_level=determine_career_level(years),
        )
        journey = ProfessionalJourney(
            career_progression=build_career_progression(raw.experience),
            key_transitions=identify_career_transitions(raw.experience),
            industry_experience=extract_industries(raw.experience),
            company_types=categorize_companies(raw.experience),
            role_types=categorize_roles(raw.experience),
        )
        expertise = build_expertise(raw, industry)
        interests = build_interests(raw, role, industry)
        profile_data = ConversationProfile(
            name=raw.name,
            title=role,
            company=company,
            industry=industry,
            location=raw.location,
            skills=expertise.skills,
            education=unique(format_education(edu) for edu in raw.education),
            primary_education=primary_education or None,
            experience_count=len(raw.experience),
        )

        return ProfileContext(
            personal_info=personal,
            professional_journey=journey,
            expertise=expertise,
            interests=interests,
            conversation_topics=generate_conversation_topics(
                personal, profile_data, journey, expertise, raw.education
            ),
            networking_opportunities=identify_networking_opportunities(
                personal, expertise, raw.education
            ),
            profile_data=profile_data,
            signals=build_signals(raw, role, industry, years, expertise.skills),
        )


def analyze_profile(profile: RawProfile | dict[str, Any] | None) -> ProfileContext:
    return ProfileContextAnalyzer().analyze(profile)
