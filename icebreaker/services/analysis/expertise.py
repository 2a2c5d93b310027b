from collections.abc import Sequence

from ...models import Education, ExpertiseContext, InterestContext, RawProfile
from ..utils.constants import (
    CERTIFICATION_SPECIALIZATIONS,
    CORE_SKILL_KEYWORDS,
    DESCRIPTION_KNOWLEDGE_RULES,
    INTEREST_KEYWORDS,
    TECHNICAL_SKILL_KEYWORDS,
)
from ..utils.text_utils import contains_any, lower, unique

SKILL_BUCKETS = (
    ("core", CORE_SKILL_KEYWORDS),
    ("technical", TECHNICAL_SKILL_KEYWORDS),
)


def classify_skill(skill: str) -> str:
    for bucket, keywords in SKILL_BUCKETS:
        if contains_any(skill, keywords):
            return bucket
    return ""


def classify_skills(skills: Sequence[str]) -> dict[str, tuple[str, ...]]:
    buckets: dict[str, list[str]] = {bucket: [] for bucket, _ in SKILL_BUCKETS}
    for skill in skills:
        bucket = classify_skill(skill)
        if bucket:
            buckets[bucket].append(skill)
    return {bucket: unique(items) for bucket, items in buckets.items()}


def extract_industry_knowledge(profile: RawProfile, industry: str | None) -> tuple[str, ...]:
    knowledge: list[str] = [industry] if industry else []
    for exp in profile.experience:
        for keyword, label in DESCRIPTION_KNOWLEDGE_RULES:
            if keyword in lower(exp.description):
                knowledge.append(label)
    return unique(knowledge)


def identify_specializations(certifications: Sequence[str]) -> tuple[str, ...]:
    return unique(
        label
        for cert in certifications
        for keyword, label in CERTIFICATION_SPECIALIZATIONS
        if keyword in lower(cert)
    )


def build_expertise(profile: RawProfile, industry: str | None) -> ExpertiseContext:
    skills = unique(profile.skills)
    buckets = classify_skills(skills)
    return ExpertiseContext(
        skills=skills,
        core_skills=buckets["core"],
        technical_skills=buckets["technical"],
        industry_knowledge=extract_industry_knowledge(profile, industry),
        certifications=unique(profile.certifications),
        specializations=identify_specializations(profile.certifications),
    )


def format_education(education: Education) -> str:
    """'<degree> from <school>', degrading to whichever half is known."""
    if education.degree and education.school:
        return f"{education.degree} from {education.school}"
    return education.school or education.degree or ""


def extract_professional_interests(skills: Sequence[str]) -> tuple[str, ...]:
    return unique(
        label
        for skill in skills
        for keyword, label in INTEREST_KEYWORDS
        if keyword in lower(skill)
    )


def generate_likely_topics(
    current_role: str | None,
    industry: str | None,
    skills: Sequence[str],
) -> tuple[str, ...]:
    topics: list[str] = []
    if current_role:
        topics.append(f"{current_role} best practices")
        topics.append(f"Career growth in {current_role}")
    if industry:
        topics.append(f"{industry} trends")
        topics.append(f"Future of {industry}")
    topics.extend(f"{skill} applications" for skill in skills[:3])
    return unique(topics)


def build_interests(
    profile: RawProfile,
    current_role: str | None,
    industry: str | None,
) -> InterestContext:
    skills = unique(profile.skills)
    return InterestContext(
        professional_interests=extract_professional_interests(skills),
        volunteer_causes=unique(v.cause or v.organization or "" for v in profile.volunteer_experience),
        educational_background=unique(format_education(edu) for edu in profile.education),
        languages=unique(profile.languages),
        likely_topics=generate_likely_topics(current_role, industry, skills),
    )
