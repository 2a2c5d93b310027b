"""Tests for raw profile -> ProfileContext analysis."""

from datetime import date

import pytest

from icebreaker.models import Experience, ProfileSignals, RawProfile
from icebreaker.services.analysis.experience import (
    calculate_experience_years,
    determine_career_level,
    determine_transition_type,
    parse_duration_months,
    parse_duration_years,
)
from icebreaker.services.analysis.expertise import classify_skill, format_education
from icebreaker.services.analysis.profile_context import ProfileContextAnalyzer, analyze_profile
from icebreaker.services.analysis.signals import (
    categorize_industry,
    determine_career_stage,
    determine_role_type,
)
from icebreaker.services.analysis.topics import build_profile_summary

TODAY = date(2024, 6, 1)


# ============================================================================
# Duration parsing
# ============================================================================


@pytest.mark.parametrize(
    ("duration", "expected"),
    [
        ("1 yr 6 mos", 1.5),
        ("9 mos", 0.75),
        ("3 yrs", 3.0),
        ("2 years 1 month", 2 + 1 / 12),
        ("Jan 2020 – Jan 2022", 2.0),
        ("Jan 2020 - Jan 2022", 2.0),
        ("2016 - 2019", 3.0),
    ],
)
def test_parse_duration_years(duration: str, expected: float) -> None:
    assert parse_duration_years(duration, TODAY) == pytest.approx(expected, abs=0.1)


@pytest.mark.parametrize("duration", ["", None, "a while", "since forever", "Foo 2020 - Bar 2021"])
def test_unparseable_duration_contributes_nothing(duration: str | None) -> None:
    assert parse_duration_months(duration, TODAY) == 0


def test_present_range_is_closed_by_today() -> None:
    assert parse_duration_years("Jun 2022 - Present", TODAY) == pytest.approx(2.0, abs=0.1)


def test_explicit_tokens_win_over_ranges() -> None:
    """A LinkedIn line often carries both; the summarized tokens are authoritative."""
    assert parse_duration_months("Jan 2020 - Present · 1 yr 2 mos", TODAY) == 14


def test_experience_years_sums_and_rounds() -> None:
    experiences = [Experience(duration="1 yr 6 mos"), Experience(duration="9 mos"), Experience()]
    assert calculate_experience_years(experiences, TODAY) == 2.3


# ============================================================================
# Career level and transitions
# ============================================================================


@pytest.mark.parametrize(
    ("years", "level"),
    [
        (0, "entry"),
        (2.9, "entry"),
        (3, "mid"),
        (7.9, "mid"),
        (8, "senior"),
        (14.9, "senior"),
        (15, "executive"),
        (32, "executive"),
    ],
)
def test_career_level_boundaries(years: float, level: str) -> None:
    assert determine_career_level(years) == level


def test_title_keywords_do_not_override_level(analyzer: ProfileContextAnalyzer) -> None:
    context = analyzer.analyze(
        {
            "experience": [
                {"title": "Analyst", "company": "Acme", "duration": "6 mos"},
                {"title": "Intern", "company": "Acme", "duration": "3 mos"},
                {"title": "Intern", "company": "Globex", "duration": "3 mos"},
                {"title": "Director of Sales", "company": "Initech", "duration": "6 mos"},
            ]
        }
    )
    steps = context.professional_journey.career_progression

    assert context.personal_info.career_level == "entry"
    assert [s.significance for s in steps] == ["high", "medium", "medium", "high"]


@pytest.mark.parametrize(
    ("previous", "current", "expected"),
    [
        (("Engineer", "Acme"), ("Senior Engineer", "ACME"), "promotion"),
        (("Software Engineer", "Acme"), ("Engineering Manager", "Globex"), "career_change"),
        (("Analyst", "Acme"), ("Consultant", "Globex"), "company_change"),
    ],
)
def test_transition_type(previous: tuple[str, str], current: tuple[str, str], expected: str) -> None:
    prev = Experience(title=previous[0], company=previous[1])
    curr = Experience(title=current[0], company=current[1])
    assert determine_transition_type(prev, curr) == expected


# ============================================================================
# Full analysis
# ============================================================================


def test_empty_profile_resolves_defaults(analyzer: ProfileContextAnalyzer) -> None:
    context = analyzer.analyze({})

    assert context.personal_info.name == "Professional"
    assert context.personal_info.current_role == "Professional"
    assert context.personal_info.current_company == "Current Company"
    assert context.personal_info.years_of_experience == 0
    assert context.personal_info.career_level == "entry"
    assert context.conversation_topics == ()
    assert context.networking_opportunities == ()
    assert context.profile_data.name is None
    assert context.profile_data.company is None


def test_none_and_garbage_fields_are_tolerated(analyzer: ProfileContextAnalyzer) -> None:
    context = analyzer.analyze(
        {
            "name": "  ",
            "skills": ["python", None, 42, {"bad": True}],
            "experience": ["not a record", {"title": None, "company": "Acme"}],
            "yearsOfExperience": "lots",
        }
    )

    assert context.personal_info.name == "Professional"
    assert context.expertise.skills == ("python", "42")
    assert context.profile_data.experience_count == 1
    assert context.professional_journey.career_progression[0].title == "Position"


def test_analysis_is_idempotent(analyzer: ProfileContextAnalyzer, rich_profile: dict) -> None:
    assert analyzer.analyze(rich_profile) == analyzer.analyze(rich_profile)


def test_rich_profile_analysis(analyzer: ProfileContextAnalyzer, rich_profile: dict) -> None:
    context = analyzer.analyze(rich_profile)
    personal = context.personal_info
    journey = context.professional_journey

    assert personal.current_role == "Engineering Manager"
    assert personal.current_company == "Globex Tech"
    # 27 + 36 + 48 months
    assert personal.years_of_experience == 9.3
    assert personal.career_level == "senior"

    assert [t.type for t in journey.key_transitions] == ["promotion", "company_change"]
    assert journey.key_transitions[0].from_ == "Senior Software Engineer at Globex Tech"
    assert journey.industry_experience == ("Technology", "Software Development", "Finance")
    assert journey.role_types == ("Engineering", "Management")

    assert context.expertise.core_skills == ("Team Leadership",)
    assert context.expertise.technical_skills == ("Python", "AWS", "Docker")
    assert context.expertise.specializations == ("Cloud Computing",)
    assert context.interests.volunteer_causes == ("Education",)
    assert context.profile_data.education == ("MSc Computer Science from TU Munich",)


def test_topics_are_ordered_by_relevance(analyzer: ProfileContextAnalyzer, rich_profile: dict) -> None:
    topics = analyzer.analyze(rich_profile).conversation_topics

    assert [t.relevance for t in topics] == ["high", "high", "medium", "medium", "medium", "low"]
    assert topics[0].topic == "Current role at Globex Tech"
    assert topics[1].topic == "Technology industry insights"
    assert topics[-1].topic == "Educational background at TU Munich"


def test_networking_opportunities_one_per_signal(analyzer: ProfileContextAnalyzer, rich_profile: dict) -> None:
    opportunities = analyzer.analyze(rich_profile).networking_opportunities
    assert [o.type for o in opportunities] == [
        "industry_connection",
        "skill_synergy",
        "career_advice",
        "educational_background",
    ]


def test_role_topic_needs_a_known_company(analyzer: ProfileContextAnalyzer) -> None:
    context = analyzer.analyze({"title": "Designer"})
    assert all(not t.topic.startswith("Current role") for t in context.conversation_topics)


def test_stated_years_take_precedence(analyzer: ProfileContextAnalyzer) -> None:
    context = analyzer.analyze(
        RawProfile(years_of_experience=16, experience=[Experience(duration="1 yr")])
    )
    assert context.personal_info.years_of_experience == 16
    assert context.personal_info.career_level == "executive"


def test_skill_lands_in_first_matching_bucket() -> None:
    assert classify_skill("Project Management") == "core"
    assert classify_skill("Kubernetes") == "technical"
    assert classify_skill("Watercolor") == ""


def test_format_education_degrades() -> None:
    from icebreaker.models import Education

    assert format_education(Education(school="MIT")) == "MIT"
    assert format_education(Education(degree="BSc")) == "BSc"


def test_summary_mentions_role_and_experience(senior_context) -> None:
    summary = build_profile_summary(senior_context)
    assert summary.startswith("Dana Reyes is a Senior Software Engineer at Acme with 9 years")
    assert "Technology" in summary


def test_module_level_analyze_accepts_none() -> None:
    context = analyze_profile(None)
    assert context.personal_info.current_company == "Current Company"
    assert context.profile_data.experience_count == 0


# ============================================================================
# Hostile numeric input
# ============================================================================


@pytest.mark.parametrize("years", [1e308, -5, 81, "9" * 5000, float("inf")])
def test_out_of_range_stated_years_are_ignored(analyzer: ProfileContextAnalyzer, years) -> None:
    context = analyzer.analyze({"yearsOfExperience": years})

    assert context.personal_info.years_of_experience == 0
    assert context.personal_info.career_level == "entry"


@pytest.mark.parametrize(
    "duration",
    ["1" + "0" * 400 + " yrs", "9" * 5000 + " yrs", "1" + "0" * 400 + " mos", "1000 yrs"],
)
def test_oversized_duration_numbers_contribute_nothing(
    analyzer: ProfileContextAnalyzer, duration: str
) -> None:
    context = analyzer.analyze({"experience": [{"title": "Engineer", "duration": duration}]})

    assert parse_duration_months(duration, TODAY) == 0
    assert context.personal_info.years_of_experience == 0


def test_first_education_entry_drives_background_even_when_blank(
    analyzer: ProfileContextAnalyzer,
) -> None:
    blank_first = analyzer.analyze({"education": [{}, {"school": "MIT", "degree": "BSc"}]})
    named_first = analyzer.analyze({"education": [{"school": "Yale"}, {"school": "MIT"}]})

    assert blank_first.profile_data.primary_education is None
    assert blank_first.profile_data.education == ("BSc from MIT",)
    assert named_first.profile_data.primary_education == "Yale"


# ============================================================================
# Profile signals
# ============================================================================


@pytest.mark.parametrize(
    ("title", "expected"),
    [
        ("DevOps Specialist", "technical"),
        ("Engineering Manager", "technical"),
        ("Director of Operations", "management"),
        ("Marketing Coordinator", "business"),
        ("Pastry Chef", "general"),
        (None, "general"),
    ],
)
def test_role_type(title: str | None, expected: str) -> None:
    assert determine_role_type(title) == expected


@pytest.mark.parametrize(
    ("industry", "expected"),
    [("Computer Software", "technology"), ("Investment Banking", "finance"), ("Medical Devices", "healthcare"), (None, "general")],
)
def test_industry_category(industry: str | None, expected: str) -> None:
    assert categorize_industry(industry) == expected


@pytest.mark.parametrize(
    ("years", "stage"),
    [(0, "unknown"), (1.9, "early"), (2, "mid"), (4.9, "mid"), (5, "senior"), (9.9, "senior"), (10, "executive")],
)
def test_career_stage(years: float, stage: str) -> None:
    assert determine_career_stage(years) == stage


def test_rich_profile_signals(analyzer: ProfileContextAnalyzer, rich_profile: dict) -> None:
    signals = analyzer.analyze(rich_profile).signals

    assert signals.role_type == "technical"
    assert signals.industry_category == "technology"
    assert signals.career_stage == "senior"
    assert signals.previous_roles == ("Senior Software Engineer", "Software Engineer")
    assert signals.experience_history[0] == "Engineering Manager at Globex Tech (2 yrs 3 mos)"
    assert signals.unique_experiences.aspects == ("international_experience",)
    assert signals.education.level == "advanced"
    assert not signals.education.has_top_school
    assert signals.leadership.leadership_progression
    assert signals.leadership.team_size == "medium"
    assert signals.leadership.management_level == "mid"
    assert signals.technical_depth.specializations == ("Python", "AWS", "Data Analysis")
    assert signals.technical_depth.depth == "moderate"
    assert signals.domain_expertise == ()


def test_notable_company_school_and_domain_signals(analyzer: ProfileContextAnalyzer) -> None:
    signals = analyzer.analyze(
        {
            "location": "Austin, United States",
            "skills": ["AI", "Email Marketing", "Fintech"],
            "experience": [
                {"title": "Staff Engineer", "company": "Google"},
                {"title": "Engineer", "company": "Tiny Startup Inc"},
            ],
            "education": [
                {"school": "Smith College", "degree": "BA"},
                {"school": "MIT", "degree": "PhD", "field": "EECS"},
            ],
        }
    ).signals

    assert signals.unique_experiences.aspects == ("notable_company_experience", "startup_experience")
    assert signals.unique_experiences.notable_companies == ("Google",)
    assert signals.education.top_schools == ("MIT",)
    assert signals.education.study_fields == ("EECS",)
    assert signals.technical_depth.specializations == ("AI",)
    assert signals.technical_depth.depth == "basic"
    assert signals.domain_expertise == ("fintech", "ai_ml")
    assert signals.leadership.management_level == "individual_contributor"
    assert signals.career_stage == "unknown"


def test_empty_profile_has_default_signals(analyzer: ProfileContextAnalyzer) -> None:
    assert analyzer.analyze({}).signals == ProfileSignals()
