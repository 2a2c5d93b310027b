"""Tests for relevance scoring and diversity-aware selection."""

from concurrent.futures import ThreadPoolExecutor
from random import Random

import pytest

from icebreaker.models import ConversationProfile, ConversationStarter, ProfileContext
from icebreaker.services.question_bank import DEFAULT_QUESTION_BANK, QuestionBank
from icebreaker.services.selection.diversity import (
    DiversitySelector,
    calculate_category_distribution,
)
from icebreaker.services.selection.scoring import RelevanceScorer, base_score
from icebreaker.services.session_tracker import SessionTracker


def _starter(id: int, category: str = "career_background", tags: tuple[str, ...] = ()) -> ConversationStarter:
    return ConversationStarter(
        id=id,
        category=category,
        subcategory="general",
        question=f"Question {id}?",
        tags=frozenset(tags),
    )


@pytest.fixture
def small_bank() -> QuestionBank:
    """Two starters per category."""
    return QuestionBank(
        [
            _starter(1, "career_background", ("technical",)),
            _starter(2, "career_background", ("finance",)),
            _starter(3, "soft_skills", ("leadership",)),
            _starter(4, "soft_skills", ("team",)),
            _starter(5, "personality_motivation", ("motivation",)),
            _starter(6, "personality_motivation", ("early_career",)),
        ]
    )


@pytest.fixture
def selector(tracker: SessionTracker, rng: Random) -> DiversitySelector:
    return DiversitySelector(tracker, DEFAULT_QUESTION_BANK, RelevanceScorer(rng, jitter=0), rng)


# ============================================================================
# Scoring
# ============================================================================


def test_score_rules_are_additive() -> None:
    profile = ConversationProfile(
        title="Lead Software Engineer",
        industry="Fintech and Finance",
        skills=("Python",),
        experience_count=7,
    )
    question = _starter(1, tags=("leadership", "technical", "finance", "senior"))

    # lead+leadership 3, engineer+technical 3, finance 2, skill+technical 2, senior 2
    assert base_score(question, profile) == 12


def test_score_without_signals_is_zero() -> None:
    profile = ConversationProfile(experience_count=4)
    assert base_score(_starter(1, tags=("technical", "leadership")), profile) == 0


def test_early_career_rule_applies_to_empty_history() -> None:
    assert base_score(_starter(1, tags=("early_career",)), ConversationProfile()) == 2


def test_jitter_is_bounded_and_non_negative() -> None:
    scorer = RelevanceScorer(Random(5), jitter=2.0)
    question = _starter(1, tags=("technical",))
    profile = ConversationProfile(title="Engineer")

    scores = [scorer.score(question, profile) for _ in range(50)]

    assert all(3 <= s < 5 for s in scores)
    assert len(set(scores)) > 1


def test_negative_jitter_is_rejected() -> None:
    with pytest.raises(ValueError):
        RelevanceScorer(jitter=-1)


def test_rank_orders_by_score() -> None:
    profile = ConversationProfile(title="Engineering Manager")
    questions = [_starter(1), _starter(2, tags=("management",)), _starter(3, tags=("technical", "management"))]

    ranked = RelevanceScorer(jitter=0).rank(questions, profile)

    assert [q.id for q, _ in ranked] == [3, 2, 1]


# ============================================================================
# Distribution
# ============================================================================


@pytest.mark.parametrize(
    ("total", "expected"),
    [(0, [0, 0, 0]), (1, [1, 0, 0]), (2, [1, 1, 0]), (5, [2, 2, 1]), (6, [2, 2, 2]), (7, [3, 2, 2])],
)
def test_category_distribution(total: int, expected: list[int]) -> None:
    distribution = calculate_category_distribution(total)

    assert [n for _, n in distribution] == expected
    assert [c for c, _ in distribution] == [
        "career_background",
        "soft_skills",
        "personality_motivation",
    ]


# ============================================================================
# Diverse selection
# ============================================================================


def test_select_is_balanced_and_distinct(selector: DiversitySelector, senior_context: ProfileContext) -> None:
    selected = selector.select(senior_context, "s1", 5)
    categories = [q.category for q in selected]

    assert len(selected) == 5
    assert len({q.id for q in selected}) == 5
    assert categories == [
        "career_background",
        "career_background",
        "soft_skills",
        "soft_skills",
        "personality_motivation",
    ]


def test_select_prefers_relevant_questions(
    tracker: SessionTracker, small_bank: QuestionBank, senior_context: ProfileContext
) -> None:
    selector = DiversitySelector(tracker, small_bank, RelevanceScorer(jitter=0), Random(0))

    selected = selector.select(senior_context, "s1", 3)

    # Senior Software Engineer with python: technical beats finance.
    assert [q.id for q in selected][0] == 1


def test_no_repeats_within_a_session(selector: DiversitySelector, senior_context: ProfileContext) -> None:
    first = selector.select(senior_context, "s1", 6)
    second = selector.select(senior_context, "s1", 6)

    assert not {q.id for q in first} & {q.id for q in second}
    assert selector.tracker.get_used("s1") == {q.id for q in first + second}


def test_sessions_are_isolated(selector: DiversitySelector, senior_context: ProfileContext) -> None:
    selector.select(senior_context, "a", 10)

    assert selector.tracker.get_used("b") == set()
    assert len(selector.select(senior_context, "b", 10)) == 10


def test_backfill_when_a_category_runs_dry(
    tracker: SessionTracker, small_bank: QuestionBank, senior_context: ProfileContext
) -> None:
    selector = DiversitySelector(tracker, small_bank, RelevanceScorer(jitter=0), Random(0))
    tracker.record_used("s1", [3, 4])

    selected = selector.select(senior_context, "s1", 3)

    assert len(selected) == 3
    assert {q.category for q in selected} == {"career_background", "personality_motivation"}


def test_exhausted_catalog_returns_partial_result(
    tracker: SessionTracker, small_bank: QuestionBank, senior_context: ProfileContext
) -> None:
    selector = DiversitySelector(tracker, small_bank, RelevanceScorer(jitter=0), Random(0))

    first = selector.select(senior_context, "s1", 4)
    second = selector.select(senior_context, "s1", 4)
    third = selector.select(senior_context, "s1", 4)

    assert len(first) == 4
    assert len(second) == 2
    assert third == []


def test_zero_count_selects_nothing(selector: DiversitySelector, senior_context: ProfileContext) -> None:
    assert selector.select(senior_context, "s1", 0) == []
    assert selector.tracker.get_used("s1") == set()


@pytest.mark.parametrize("count", [-1, 2.5, True])
def test_invalid_count_is_rejected(selector: DiversitySelector, senior_context: ProfileContext, count) -> None:
    with pytest.raises(ValueError):
        selector.select(senior_context, "s1", count)


def test_concurrent_selection_never_repeats(tracker: SessionTracker, senior_context: ProfileContext) -> None:
    selector = DiversitySelector(tracker, DEFAULT_QUESTION_BANK, RelevanceScorer(Random(1)), Random(2))

    with ThreadPoolExecutor(max_workers=8) as pool:
        batches = list(pool.map(lambda _: selector.select(senior_context, "shared", 3), range(20)))

    ids = [q.id for batch in batches for q in batch]
    assert len(ids) == len(set(ids))
    assert tracker.get_used("shared") == set(ids)


# ============================================================================
# Targeted selection
# ============================================================================


def test_targeted_by_category(selector: DiversitySelector, senior_context: ProfileContext) -> None:
    selected = selector.select_targeted({"category": "soft_skills"}, senior_context, "s1", 3)

    assert len(selected) == 3
    assert {q.category for q in selected} == {"soft_skills"}


def test_targeted_by_tags_and_subcategory(selector: DiversitySelector, senior_context: ProfileContext) -> None:
    by_tags = selector.select_targeted({"tags": ["finance"]}, senior_context, "s1", 10)
    by_sub = selector.select_targeted({"subcategory": "leadership"}, senior_context, "s1", 2)

    assert by_tags and all("finance" in q.tags for q in by_tags)
    assert by_sub and all(q.subcategory == "leadership" for q in by_sub)
    assert not {q.id for q in by_tags} & {q.id for q in by_sub}


def test_targeted_respects_session_history(selector: DiversitySelector, senior_context: ProfileContext) -> None:
    pool = DEFAULT_QUESTION_BANK.by_subcategory("leadership")

    first = selector.select_targeted({"subcategory": "leadership"}, senior_context, "s1", len(pool))
    again = selector.select_targeted({"subcategory": "leadership"}, senior_context, "s1", 3)

    assert len(first) == len(pool)
    assert again == []


@pytest.mark.parametrize(
    "criteria",
    [
        {},
        {"category": "soft_skills", "tags": ["finance"]},
        {"tags": []},
        {"category": "hobbies"},
    ],
)
def test_targeted_criteria_must_name_exactly_one_filter(
    selector: DiversitySelector, senior_context: ProfileContext, criteria: dict
) -> None:
    with pytest.raises(ValueError):
        selector.select_targeted(criteria, senior_context, "s1", 3)
