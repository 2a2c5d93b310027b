import math
import re
from collections.abc import Sequence
from datetime import date

from ...models import CareerLevel, CareerStep, CareerTransition, Experience, RawProfile, Tier
from ..utils.constants import (
    CAREER_LEVEL_THRESHOLDS,
    COMPANY_TYPE_RULES,
    DAYS_PER_MONTH,
    DEFAULT_EMPLOYER,
    DEFAULT_POSITION,
    ENGINEER_TITLE_KEYWORDS,
    INDUSTRY_RULES,
    MANAGER_TITLE_KEYWORDS,
    ROLE_TYPE_RULES,
    SENIOR_TITLE_KEYWORDS,
)
from ..utils.text_utils import contains_any, lower, normalize_key, unique

YEAR_TOKEN = re.compile(r"(?<!\d)(\d{1,3})\s*(?:yr|year)s?", re.IGNORECASE)
MONTH_TOKEN = re.compile(r"(?<!\d)(\d{1,3})\s*(?:mo|month)s?", re.IGNORECASE)
MONTH_RANGE = re.compile(
    r"([a-z]{3,9})\.?\s+(\d{4})\s*(?:-|–|—|to)\s*(?:([a-z]{3,9})\.?\s+(\d{4})|(present|current|now))",
    re.IGNORECASE,
)
YEAR_RANGE = re.compile(
    r"\b(\d{4})\s*(?:-|–|—|to)\s*(?:(\d{4})\b|(present|current|now))",
    re.IGNORECASE,
)
MONTHS = {
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}


def _month_number(token: str) -> int | None:
    return MONTHS.get((token or "")[:3].lower())


def _months_between(start: date, end: date) -> int:
    days = abs((end - start).days)
    return int(round(days / DAYS_PER_MONTH))


def _parse_month_range(text: str, today: date) -> int:
    match = MONTH_RANGE.search(text)
    if not match:
        return 0
    start_month = _month_number(match.group(1))
    if start_month is None:
        return 0
    try:
        start = date(int(match.group(2)), start_month, 1)
        if match.group(5):
            end = today
        else:
            end_month = _month_number(match.group(3))
            if end_month is None:
                return 0
            end = date(int(match.group(4)), end_month, 1)
    except ValueError:
        return 0
    return _months_between(start, end)


def _parse_year_range(text: str, today: date) -> int:
    match = YEAR_RANGE.search(text)
    if not match:
        return 0
    try:
        start = date(int(match.group(1)), 1, 1)
        end = today if match.group(3) else date(int(match.group(2)), 1, 1)
    except ValueError:
        return 0
    return _months_between(start, end)


def parse_duration_months(duration: str | None, today: date | None = None) -> int:
    """Months encoded by a LinkedIn-style duration string; 0 when nothing parses.

    Explicit "N yrs M mos" tokens win. Only when they yield nothing is the
    string read as a "Mon YYYY - Mon YYYY|Present" (or "YYYY - YYYY") range.
    """
    if not duration:
        return 0
    today = today or date.today()
    try:
        months = 0
        year_match = YEAR_TOKEN.search(duration)
        month_match = MONTH_TOKEN.search(duration)
        if year_match:
            months += int(year_match.group(1)) * 12
        if month_match:
            months += int(month_match.group(1))
        if months == 0:
            months = _parse_month_range(duration, today)
        if months == 0:
            months = _parse_year_range(duration, today)
    except (ValueError, OverflowError):
        return 0
    return max(months, 0)


def parse_duration_years(duration: str | None, today: date | None = None) -> float:
    return parse_duration_months(duration, today) / 12


def round_one_decimal(value: float) -> float:
    return math.floor(value * 10 + 0.5) / 10


def calculate_experience_years(
    experiences: Sequence[Experience],
    today: date | None = None,
) -> float:
    total_months = sum(parse_duration_months(exp.duration, today) for exp in experiences)
    return max(round_one_decimal(total_months / 12), 0.0)


def resolve_years_of_experience(profile: RawProfile, today: date | None = None) -> float:
    stated = profile.years_of_experience
    if stated is not None and stated > 0:
        return round_one_decimal(stated)
    return calculate_experience_years(profile.experience, today)


def determine_career_level(years: float) -> CareerLevel:
    for threshold, level in CAREER_LEVEL_THRESHOLDS:
        if years >= threshold:
            return level  # type: ignore[return-value]
    return "entry"


def determine_role_significance(exp: Experience, index: int) -> Tier:
    if index == 0:
        return "high"
    if contains_any(exp.title, SENIOR_TITLE_KEYWORDS):
        return "high"
    if index <= 2:
        return "medium"
    return "low"


def build_career_progression(experiences: Sequence[Experience]) -> tuple[CareerStep, ...]:
    return tuple(
        CareerStep(
            title=exp.title or DEFAULT_POSITION,
            company=exp.company or DEFAULT_EMPLOYER,
            duration=exp.duration,
            is_current=exp.is_current or index == 0,
            significance=determine_role_significance(exp, index),
        )
        for index, exp in enumerate(experiences)
    )


def determine_transition_type(previous: Experience, current: Experience) -> str:
    previous_company = normalize_key(previous.company)
    if previous_company and previous_company == normalize_key(current.company):
        return "promotion"
    if contains_any(previous.title, ENGINEER_TITLE_KEYWORDS) and contains_any(
        current.title, MANAGER_TITLE_KEYWORDS
    ):
        return "career_change"
    return "company_change"


def identify_career_transitions(experiences: Sequence[Experience]) -> tuple[CareerTransition, ...]:
    """One record per adjacent pair of a reverse-chronological experience list."""
    transitions: list[CareerTransition] = []
    for current, previous in zip(experiences, experiences[1:]):
        previous_title = previous.title or DEFAULT_POSITION
        current_title = current.title or DEFAULT_POSITION
        transitions.append(
            CareerTransition(
                from_=f"{previous_title} at {previous.company or DEFAULT_EMPLOYER}",
                to=f"{current_title} at {current.company or DEFAULT_EMPLOYER}",
                type=determine_transition_type(previous, current),
                significance=f"Transitioned from {previous_title} to {current_title}",
            )
        )
    return tuple(transitions)


def extract_industries(experiences: Sequence[Experience]) -> tuple[str, ...]:
    found: list[str] = []
    for exp in experiences:
        for field, keyword, industry in INDUSTRY_RULES:
            if keyword in lower(getattr(exp, field)):
                found.append(industry)
        if exp.industry:
            found.append(exp.industry)
    return unique(found)


def categorize_companies(experiences: Sequence[Experience]) -> tuple[str, ...]:
    found = [
        label
        for exp in experiences
        for keywords, label in COMPANY_TYPE_RULES
        if contains_any(exp.company, keywords)
    ]
    return unique(found)


def categorize_roles(experiences: Sequence[Experience]) -> tuple[str, ...]:
    found = [
        label
        for exp in experiences
        for keyword, label in ROLE_TYPE_RULES
        if keyword in lower(exp.title)
    ]
    return unique(found)
