from collections.abc import Sequence

from ...models import ConversationStarter, ProfileContext
from ..utils.text_utils import unique

CUSTOMIZATION_INSTRUCTIONS = (
    "You personalize professional networking conversation starters. "
    "Return strict JSON only (no markdown, no prose). "
    "Do NOT fabricate details: use only facts listed in PROFILE. "
    "Rewrite every listed question exactly once, keeping its intent. "
    "Each rewrite is one or two sentences and references at least two concrete "
    "profile details (company, exact title, school, skill or industry). "
    "Never refuse or explain constraints; always produce JSON."
)


def _line(label: str, value: str | None) -> str:
    return f"- {label}: {value or 'Not specified'}"


def _joined(values: Sequence[str], limit: int) -> str:
    return ", ".join(values[:limit])


def _flags(*pairs: tuple[str, bool]) -> str:
    return ", ".join(label for label, present in pairs if present)


def build_customization_prompt(
    context: ProfileContext,
    starters: Sequence[ConversationStarter],
) -> str:
    personal = context.personal_info
    journey = context.professional_journey
    expertise = context.expertise
    interests = context.interests
    data = context.profile_data

    progression = " -> ".join(
        f"{step.title} at {step.company}" for step in journey.career_progression[:3]
    )
    transitions = "; ".join(
        f"{t.from_} to {t.to} ({t.type})" for t in journey.key_transitions[:3]
    )
    skills = unique((*expertise.core_skills, *expertise.technical_skills, *expertise.skills))
    signals = context.signals
    education_notes = _flags(
        ("top school", signals.education.has_top_school),
        ("advanced degree", signals.education.has_advanced_degree),
    )
    leadership = signals.leadership

    topic_lines = [
        f"- {topic.topic}: {topic.suggested_approach}" for topic in context.conversation_topics[:3]
    ]
    opportunity_lines = [
        f"- {opp.type}: {opp.description}" for opp in context.networking_opportunities[:2]
    ]
    question_lines = [
        f"ID: {s.id} | Question: \"{s.question}\" | Category: {s.category} | Tags: {', '.join(sorted(s.tags))}"
        for s in starters
    ]

    return "\n".join(
        [
            "PROFILE:",
            _line("Name", data.name),
            _line("Current title", data.title),
            _line("Current company", data.company),
            _line("Industry", data.industry),
            _line("Location", data.location),
            _line("Years of experience", f"{personal.years_of_experience:g}" if personal.years_of_experience else None),
            _line("Career level", personal.career_level),
            _line("Career progression", progression),
            _line("Previous roles", _joined(signals.previous_roles, 4)),
            _line("Experience history", "; ".join(signals.experience_history[:5])),
            _line("Career transitions", transitions),
            _line("Key skills", _joined(skills, 6)),
            _line("Education", _joined(interests.educational_background, 2)),
            _line("Certifications", _joined(expertise.certifications, 3)),
            "",
            "PROFILE SIGNALS:",
            _line("Role type", signals.role_type),
            _line("Industry category", signals.industry_category),
            _line("Career stage", signals.career_stage),
            _line("Unique experiences", _joined(signals.unique_experiences.aspects, 3)),
            _line("Notable companies", _joined(signals.unique_experiences.notable_companies, 3)),
            _line("Education signals", education_notes),
            _line(
                "Leadership",
                f"{leadership.management_level}, team size {leadership.team_size}"
                + (", progressed into leadership" if leadership.leadership_progression else ""),
            ),
            _line(
                "Technical depth",
                f"{signals.technical_depth.depth} ({signals.technical_depth.technical_skill_count} technical skills)",
            ),
            _line("Domain expertise", _joined(signals.domain_expertise, 3)),
            "",
            "CONVERSATION TOPICS:",
            *(topic_lines or ["- (none)"]),
            "",
            "NETWORKING OPPORTUNITIES:",
            *(opportunity_lines or ["- (none)"]),
            "",
            "QUESTIONS TO PERSONALIZE:",
            *question_lines,
            "",
            "OUTPUT_JSON_SCHEMA (shape):",
            "{",
            "  \"questions\": [",
            "    {\"questionId\": 12, \"customizedQuestion\": \"...\", \"relevanceScore\": 90, \"reasoning\": \"...\"}",
            "  ]",
            "}",
        ]
    )
