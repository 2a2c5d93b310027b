from random import Random
from typing import Any

from ...models import ConversationStarter, ProfileContext, TargetCriteria
from ..question_bank import CATEGORY_ORDER, DEFAULT_QUESTION_BANK, QuestionBank
from ..session_tracker import SessionTracker
from .scoring import RelevanceScorer


def calculate_category_distribution(
    total: int,
    categories: tuple[str, ...] = CATEGORY_ORDER,
) -> list[tuple[str, int]]:
    """Split ``total`` evenly, handing the remainder to the earliest categories."""
    if total < 0:
        raise ValueError("count must be >= 0")
    base, remainder = divmod(total, len(categories))
    return [
        (category, base + (1 if index < remainder else 0))
        for index, category in enumerate(categories)
    ]


def _check_count(count: int) -> None:
    if not isinstance(count, int) or isinstance(count, bool) or count < 0:
        raise ValueError(f"count must be a non-negative integer, got {count!r}")


class DiversitySelector:
    """Category-balanced, session-aware selection of conversation starters.

    Reading the session's used ids, choosing, and recording the new ids all
    happen inside the session's critical section; that record is the only
    side effect of a selection.
    """

    def __init__(
        self,
        tracker: SessionTracker,
        bank: QuestionBank = DEFAULT_QUESTION_BANK,
        scorer: RelevanceScorer | None = None,
        rng: Random | None = None,
    ) -> None:
        self.tracker = tracker
        self.bank = bank
        self.scorer = scorer or RelevanceScorer()
        self.rng = rng or Random()

    def select(
        self,
        context: ProfileContext,
        session_id: str | None = None,
        count: int = 5,
    ) -> list[ConversationStarter]:
        _check_count(count)
        profile = context.profile_data
        with self.tracker.session(session_id) as sid:
            used = self.tracker.get_used(sid)
            selected: list[ConversationStarter] = []

            for category, target in calculate_category_distribution(count):
                if target == 0:
                    continue
                available = [q for q in self.bank.by_category(category) if q.id not in used]
                ranked = self.scorer.rank(available, profile)
                selected.extend(question for question, _ in ranked[:target])

            if len(selected) < count:
                taken = used | {q.id for q in selected}
                selected.extend(self.bank.random_sample(count - len(selected), taken, self.rng))

            self.tracker.record_used(sid, [q.id for q in selected])
        return selected

    def candidates_for(self, criteria: TargetCriteria) -> tuple[ConversationStarter, ...]:
        if criteria.category is not None:
            return self.bank.by_category(criteria.category)
        if criteria.tags:
            return self.bank.by_tags(criteria.tags)
        return self.bank.by_subcategory(criteria.subcategory or "")

    def select_targeted(
        self,
        criteria: TargetCriteria | dict[str, Any],
        context: ProfileContext,
        session_id: str | None = None,
        count: int = 3,
    ) -> list[ConversationStarter]:
        _check_count(count)
        if not isinstance(criteria, TargetCriteria):
            criteria = TargetCriteria.model_validate(criteria)
        candidates = self.candidates_for(criteria)
        with self.tracker.session(session_id) as sid:
            used = self.tracker.get_used(sid)
            available = [q for q in candidates if q.id not in used]
            ranked = self.scorer.rank(available, context.profile_data)
            selected = [question for question, _ in ranked[:count]]
            self.tracker.record_used(sid, [q.id for q in selected])
        return selected
