from random import Random

from ...config import SCORE_JITTER
from ...models import ConversationProfile, ConversationStarter
from ..utils.constants import ENGINEERING_TITLE_KEYWORDS, SCORING_SKILL_KEYWORDS
from ..utils.text_utils import contains_any, lower


def base_score(question: ConversationStarter, profile: ConversationProfile) -> float:
    """Additive, independent point rules. Only meaningful for ordering within one call."""
    tags = question.tags
    title = lower(profile.title)
    industry = lower(profile.industry)
    score = 0.0

    if title:
        if "lead" in title and "leadership" in tags:
            score += 3
        if "manager" in title and "management" in tags:
            score += 3
        if contains_any(title, ENGINEERING_TITLE_KEYWORDS) and "technical" in tags:
            score += 3

    if industry:
        if "tech" in industry and "technology" in tags:
            score += 2
        if "finance" in industry and "finance" in tags:
            score += 2

    if any(contains_any(skill, SCORING_SKILL_KEYWORDS) for skill in profile.skills):
        if "skills" in tags or "technical" in tags:
            score += 2

    if profile.experience_count > 5 and "senior" in tags:
        score += 2
    if profile.experience_count < 3 and "early_career" in tags:
        score += 2

    return score


class RelevanceScorer:
    """Scores a (question, profile) pair.

    A jitter drawn from ``[0, jitter)`` is added to every score so otherwise
    identical profiles do not always surface the same questions. Pass a seeded
    ``Random`` (or ``jitter=0``) for reproducible rankings.
    """

    def __init__(self, rng: Random | None = None, jitter: float = SCORE_JITTER) -> None:
        if jitter < 0:
            raise ValueError("jitter must be >= 0")
        self.rng = rng or Random()
        self.jitter = jitter

    def score(self, question: ConversationStarter, profile: ConversationProfile) -> float:
        score = base_score(question, profile)
        if self.jitter:
            score += self.rng.random() * self.jitter
        return score

    def rank(
        self,
        questions: list[ConversationStarter] | tuple[ConversationStarter, ...],
        profile: ConversationProfile,
    ) -> list[tuple[ConversationStarter, float]]:
        scored = [(question, self.score(question, profile)) for question in questions]
        scored.sort(key=lambda item: item[1], reverse=True)
        return scored
