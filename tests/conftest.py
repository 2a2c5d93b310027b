"""Shared fixtures for the icebreaker engine tests."""

from datetime import date
from pathlib import Path
from random import Random

import pytest

from icebreaker.models import ProfileContext
from icebreaker.services.analysis.profile_context import ProfileContextAnalyzer
from icebreaker.services.icebreaker_service import EngineSettings, IcebreakerService
from icebreaker.services.session_tracker import SessionTracker

FIXED_TODAY = date(2024, 6, 1)


@pytest.fixture
def analyzer() -> ProfileContextAnalyzer:
    """Analyzer with a pinned clock so "Present" ranges are reproducible."""
    return ProfileContextAnalyzer(today=lambda: FIXED_TODAY)


@pytest.fixture
def tracker() -> SessionTracker:
    return SessionTracker()


@pytest.fixture
def rng() -> Random:
    return Random(1234)


@pytest.fixture
def senior_profile() -> dict:
    """Senior engineer profile as a scraper would send it (camelCase keys)."""
    return {
        "name": "Dana Reyes",
        "title": "Senior Software Engineer",
        "company": "Acme",
        "industry": "Technology",
        "yearsOfExperience": 9,
        "skills": ["python", "leadership"],
    }


@pytest.fixture
def rich_profile() -> dict:
    return {
        "name": "Sam Patel",
        "headline": "Engineering Manager at Globex Tech | Building platform teams",
        "industry": "Technology",
        "location": "Berlin",
        "skills": ["Python", "Team Leadership", "AWS", "Docker", "Data Analysis"],
        "experience": [
            {
                "title": "Engineering Manager",
                "company": "Globex Tech",
                "duration": "2 yrs 3 mos",
                "isCurrent": True,
            },
            {
                "title": "Senior Software Engineer",
                "company": "Globex Tech",
                "duration": "3 yrs",
            },
            {
                "title": "Software Engineer",
                "company": "Initech Bank",
                "duration": "Jan 2015 - Jan 2019",
            },
        ],
        "education": [
            {"school": "TU Munich", "degree": "MSc Computer Science"},
        ],
        "certifications": ["AWS Solutions Architect"],
        "languages": ["English", "German"],
        "volunteerExperience": [{"cause": "Education", "organization": "Code Club"}],
    }


@pytest.fixture
def senior_context(analyzer: ProfileContextAnalyzer, senior_profile: dict) -> ProfileContext:
    return analyzer.analyze(senior_profile)


@pytest.fixture
def settings(tmp_path: Path) -> EngineSettings:
    """No jitter and a throwaway log file."""
    return EngineSettings(
        ai_timeout_seconds=0.5,
        score_jitter=0.0,
        log_path=tmp_path / "icebreakers.ndjson",
        debug=False,
    )


@pytest.fixture
def service(tracker: SessionTracker, settings: EngineSettings, analyzer: ProfileContextAnalyzer) -> IcebreakerService:
    return IcebreakerService(
        tracker=tracker, rng=Random(7), settings=settings, analyzer=analyzer
    )
