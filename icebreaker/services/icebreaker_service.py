import json
import time
import uuid
from dataclasses import dataclass
from pathlib import Path
from random import Random
from typing import Any

from ..config import (
    AI_TIMEOUT_SECONDS,
    DEBUG,
    DEFAULT_QUESTION_COUNT,
    LOG_PATH,
    SCORE_JITTER,
    openai_api_key,
)
from ..logging_utils import append_ndjson, utc_now_iso
from ..models import (
    ConversationStarter,
    IcebreakerResponse,
    PersonalizedQuestion,
    ProfileContext,
    RawProfile,
    TargetCriteria,
)
from .analysis.profile_context import ProfileContextAnalyzer
from .analysis.topics import build_profile_summary
from .openai_client import CompletionService, OpenAIResponsesClient
from .personalization.ai_assisted import AIAssistedPersonalizer
from .personalization.chain import PersonalizationChain, PersonalizationOutcome
from .personalization.rule_based import RuleBasedPersonalizer
from .question_bank import DEFAULT_QUESTION_BANK, QuestionBank
from .selection.diversity import DiversitySelector
from .selection.scoring import RelevanceScorer
from .session_tracker import SessionTracker, resolve_session_id
from .utils.constants import FALLBACK_ICEBREAKERS


@dataclass(frozen=True)
class EngineSettings:
    ai_timeout_seconds: float = AI_TIMEOUT_SECONDS
    score_jitter: float = SCORE_JITTER
    log_path: Path = LOG_PATH
    debug: bool = DEBUG


def default_completion_service() -> CompletionService | None:
    api_key = openai_api_key()
    if not api_key:
        return None
    return OpenAIResponsesClient(api_key=api_key)


class IcebreakerService:
    """Caller-facing operations: analyze a profile, select and personalize starters.

    Construct once per process and share it; the question bank is read-only
    and the session tracker serializes work per session id.
    """

    def __init__(
        self,
        tracker: SessionTracker | None = None,
        bank: QuestionBank = DEFAULT_QUESTION_BANK,
        completion: CompletionService | None = None,
        rng: Random | None = None,
        settings: EngineSettings = EngineSettings(),
        analyzer: ProfileContextAnalyzer | None = None,
    ) -> None:
        self.settings = settings
        self.tracker = tracker or SessionTracker()
        self.bank = bank
        self.rng = rng or Random()
        self.analyzer = analyzer or ProfileContextAnalyzer()
        self.scorer = RelevanceScorer(rng=self.rng, jitter=settings.score_jitter)
        self.selector = DiversitySelector(self.tracker, bank, self.scorer, self.rng)
        self.rule_based = RuleBasedPersonalizer(self.scorer, self.rng)

        strategies: list[Any] = []
        if completion is not None:
            strategies.append(AIAssistedPersonalizer(completion, settings.ai_timeout_seconds))
        strategies.append(self.rule_based)
        self.chain = PersonalizationChain(strategies)

    # -- operations ---------------------------------------------------------

    def analyze_profile(self, profile: RawProfile | dict[str, Any] | None) -> ProfileContext:
        return self.analyzer.analyze(profile)

    async def select_diverse(
        self,
        context: ProfileContext,
        session_id: str | None = None,
        count: int = DEFAULT_QUESTION_COUNT,
    ) -> list[PersonalizedQuestion]:
        log_record = self._start_record("select_diverse", session_id, count)
        selected = self.selector.select(context, session_id, count)
        outcome = await self.chain.personalize(selected, context)
        self._finish_record(log_record, selected, outcome)
        return outcome.questions

    async def select_targeted(
        self,
        criteria: TargetCriteria | dict[str, Any],
        context: ProfileContext,
        session_id: str | None = None,
        count: int = 3,
    ) -> list[PersonalizedQuestion]:
        log_record = self._start_record("select_targeted", session_id, count)
        selected = self.selector.select_targeted(criteria, context, session_id, count)
        outcome = await self.chain.personalize(selected, context)
        self._finish_record(log_record, selected, outcome)
        return outcome.questions

    def clear_session(self, session_id: str | None) -> None:
        self.tracker.clear(session_id)

    async def generate_icebreakers(
        self,
        profile: RawProfile | dict[str, Any] | None,
        session_id: str | None = None,
        count: int = DEFAULT_QUESTION_COUNT,
    ) -> IcebreakerResponse:
        log_record = self._start_record("generate_icebreakers", session_id, count)
        context = self.analyze_profile(profile)
        selected = self.selector.select(context, session_id, count)
        outcome = await self.chain.personalize(selected, context)

        icebreakers = [q.personalized_question for q in outcome.questions]
        degraded = outcome.degraded
        if not icebreakers and count > 0:
            icebreakers = list(FALLBACK_ICEBREAKERS[:count])
            degraded = True
            log_record["fallback_icebreakers"] = len(icebreakers)

        log_record["career_level"] = context.personal_info.career_level
        self._finish_record(log_record, selected, outcome, degraded=degraded)
        return IcebreakerResponse(
            summary=build_profile_summary(context),
            icebreakers=icebreakers,
            questions=outcome.questions,
            career_level=context.personal_info.career_level,
            degraded=degraded,
        )

    # -- request log --------------------------------------------------------

    def _start_record(self, event: str, session_id: str | None, count: int) -> dict[str, Any]:
        return {
            "ts": utc_now_iso(),
            "request_id": uuid.uuid4().hex,
            "event": event,
            "session_id": resolve_session_id(session_id),
            "count": count,
            "strategies": self.chain.names,
            "_started": time.perf_counter(),
        }

    def _finish_record(
        self,
        log_record: dict[str, Any],
        selected: list[ConversationStarter],
        outcome: PersonalizationOutcome,
        degraded: bool | None = None,
    ) -> None:
        started = log_record.pop("_started")
        degraded = outcome.degraded if degraded is None else degraded
        log_record["selection"] = [{"id": q.id, "category": q.category} for q in selected]
        log_record["strategy"] = outcome.strategy
        log_record["degradations"] = outcome.degradations
        log_record["status"] = "degraded" if degraded else "ok"
        log_record["latency_ms"] = int((time.perf_counter() - started) * 1000)
        if self.settings.debug:
            print(json.dumps(log_record, ensure_ascii=True, default=str))
        append_ndjson(self.settings.log_path, log_record)
