import re
from collections.abc import Callable, Sequence
from random import Random

from ...models import ConversationProfile, ConversationStarter, PersonalizedQuestion, ProfileContext
from ..selection.scoring import RelevanceScorer
from ..utils.text_utils import join_and

Replacement = Callable[[ConversationProfile], str | None]


def _role(profile: ConversationProfile) -> str | None:
    if profile.title and profile.company:
        return f"your work as {profile.title} at {profile.company}"
    return None


def _skills(profile: ConversationProfile) -> str | None:
    if profile.skills:
        return f"your expertise in {join_and(profile.skills[:2])}"
    return None


def _background(profile: ConversationProfile) -> str | None:
    if profile.primary_education:
        return f"your background from {profile.primary_education}"
    return None


def _industry(profile: ConversationProfile) -> str | None:
    if profile.industry:
        return f"your {profile.industry} industry"
    return None


def _company(profile: ConversationProfile) -> str | None:
    return profile.company or None


SUBSTITUTIONS: tuple[tuple[re.Pattern[str], Replacement], ...] = (
    (re.compile(r"your (work|job|role|career)", re.IGNORECASE), _role),
    (re.compile(r"your skills", re.IGNORECASE), _skills),
    (re.compile(r"your background", re.IGNORECASE), _background),
    (re.compile(r"your industry", re.IGNORECASE), _industry),
    (re.compile(r"your company", re.IGNORECASE), _company),
)


def apply_substitutions(text: str, profile: ConversationProfile) -> str:
    """Rewrite each known phrase whose profile field is present; leave the rest verbatim."""
    for pattern, replacement in SUBSTITUTIONS:
        if not pattern.search(text):
            continue
        value = replacement(profile)
        if value:
            text = pattern.sub(lambda _match, value=value: value, text)
    return text


class RuleBasedPersonalizer:
    """Pattern-substitution personalization. Never fails; worst case is the bare template."""

    name = "rules"

    def __init__(self, scorer: RelevanceScorer | None = None, rng: Random | None = None) -> None:
        self.scorer = scorer or RelevanceScorer()
        self.rng = rng or Random()

    def personalize(
        self,
        starter: ConversationStarter,
        profile: ConversationProfile,
    ) -> PersonalizedQuestion:
        text = starter.question
        if profile.name and self.rng.random() > 0.5:
            text = f"Hi {profile.name}! {text}"
        text = apply_substitutions(text, profile)
        return PersonalizedQuestion(
            question_id=starter.id,
            original_question=starter.question,
            personalized_question=text,
            category=starter.category,
            subcategory=starter.subcategory,
            relevance_score=self.scorer.score(starter, profile),
            source="rules",
        )

    async def personalize_batch(
        self,
        starters: Sequence[ConversationStarter],
        context: ProfileContext,
    ) -> list[PersonalizedQuestion]:
        return [self.personalize(starter, context.profile_data) for starter in starters]
