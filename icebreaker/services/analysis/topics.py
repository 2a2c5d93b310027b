from collections.abc import Sequence

from ...models import (
    ConversationProfile,
    ConversationTopic,
    Education,
    ExpertiseContext,
    NetworkingOpportunity,
    PersonalContext,
    ProfessionalJourney,
    ProfileContext,
)
from ..utils.constants import DEFAULT_FIELD, DEFAULT_ORGANIZATION, DEFAULT_SKILLS, TIER_RANK


def format_years(years: float) -> str:
    return f"{years:g}" if years > 0 else "several"


def generate_conversation_topics(
    personal: PersonalContext,
    profile_data: ConversationProfile,
    journey: ProfessionalJourney,
    expertise: ExpertiseContext,
    education: Sequence[Education],
) -> tuple[ConversationTopic, ...]:
    """At most one topic per signal, ordered high → low with ties kept in signal order."""
    topics: list[ConversationTopic] = []

    if profile_data.company:
        company = profile_data.company
        topics.append(
            ConversationTopic(
                topic=f"Current role at {company}",
                relevance="high",
                context=f"{personal.name} is currently working as {personal.current_role} at {company}",
                suggested_approach=(
                    f"Ask about their experience in their current role or recent projects at {company}"
                ),
            )
        )

    if personal.industry:
        topics.append(
            ConversationTopic(
                topic=f"{personal.industry} industry insights",
                relevance="high",
                context=(
                    f"Professional with {format_years(personal.years_of_experience)} years "
                    f"in {personal.industry}"
                ),
                suggested_approach=(
                    f"Discuss industry trends, challenges, or opportunities in {personal.industry}"
                ),
            )
        )

    for transition in journey.key_transitions:
        if not transition.significance:
            continue
        topics.append(
            ConversationTopic(
                topic=f"Career transition: {transition.from_} to {transition.to}",
                relevance="medium",
                context=transition.significance,
                suggested_approach=(
                    f"Ask about their experience transitioning from {transition.from_} to {transition.to}"
                ),
            )
        )

    if expertise.technical_skills:
        topics.append(
            ConversationTopic(
                topic=f"Technical expertise in {', '.join(expertise.technical_skills[:3])}",
                relevance="medium",
                context=f"Skilled in {', '.join(expertise.technical_skills)}",
                suggested_approach=(
                    "Discuss technical challenges, tools, or best practices in their area of expertise"
                ),
            )
        )

    primary = education[0] if education else None
    if primary is not None and primary.school:
        topics.append(
            ConversationTopic(
                topic=f"Educational background at {primary.school}",
                relevance="low",
                context=f"Studied {primary.degree or 'at'} {primary.school}",
                suggested_approach=(
                    f"Mention shared educational experiences or ask about their time at {primary.school}"
                ),
            )
        )

    return tuple(sorted(topics, key=lambda t: TIER_RANK[t.relevance], reverse=True))


def identify_networking_opportunities(
    personal: PersonalContext,
    expertise: ExpertiseContext,
    education: Sequence[Education],
) -> tuple[NetworkingOpportunity, ...]:
    opportunities: list[NetworkingOpportunity] = []

    if personal.industry:
        opportunities.append(
            NetworkingOpportunity(
                type="industry_connection",
                description=f"Connect over shared {personal.industry} industry experience",
                confidence="high",
            )
        )

    if expertise.core_skills:
        opportunities.append(
            NetworkingOpportunity(
                type="skill_synergy",
                description=f"Potential collaboration in {' and '.join(expertise.core_skills[:2])}",
                confidence="medium",
            )
        )

    if personal.career_level in ("senior", "executive"):
        opportunities.append(
            NetworkingOpportunity(
                type="career_advice",
                description=(
                    f"Seek insights from their {format_years(personal.years_of_experience)}+ "
                    "years of experience"
                ),
                confidence="high",
            )
        )

    if education:
        opportunities.append(
            NetworkingOpportunity(
                type="educational_background",
                description="Connect over shared educational experiences or alma mater",
                confidence="low",
            )
        )

    return tuple(opportunities)


def build_profile_summary(context: ProfileContext) -> str:
    personal = context.personal_info
    expertise = context.expertise
    name = context.profile_data.name or "This person"
    company = context.profile_data.company or DEFAULT_ORGANIZATION
    industry = personal.industry or DEFAULT_FIELD
    skills = ", ".join((expertise.core_skills + expertise.technical_skills)[:3]) or DEFAULT_SKILLS
    return (
        f"{name} is a {personal.current_role} at {company} with "
        f"{format_years(personal.years_of_experience)} years of experience in {industry}. "
        f"They have expertise in {skills} and would be a valuable connection for "
        "networking and professional collaboration."
    )
