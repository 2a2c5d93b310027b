from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

from ...models import ConversationStarter, PersonalizedQuestion, ProfileContext
from ...logging_utils import degradation_entry


class PersonalizationStrategy(Protocol):
    name: str

    async def personalize_batch(
        self,
        starters: Sequence[ConversationStarter],
        context: ProfileContext,
    ) -> list[PersonalizedQuestion]: ...


@dataclass
class PersonalizationOutcome:
    questions: list[PersonalizedQuestion]
    strategy: str
    degradations: list[dict[str, Any]] = field(default_factory=list)

    @property
    def degraded(self) -> bool:
        return bool(self.degradations)


class PersonalizationChain:
    """Tries each strategy in order for the whole batch; the last one must never fail.

    Failures of earlier strategies are recorded as degradations for the
    request log and are never raised to the caller.
    """

    def __init__(self, strategies: Sequence[PersonalizationStrategy]) -> None:
        if not strategies:
            raise ValueError("at least one personalization strategy is required")
        self.strategies = tuple(strategies)

    @property
    def names(self) -> list[str]:
        return [strategy.name for strategy in self.strategies]

    async def personalize(
        self,
        starters: Sequence[ConversationStarter],
        context: ProfileContext,
    ) -> PersonalizationOutcome:
        final = self.strategies[-1]
        if not starters:
            return PersonalizationOutcome(questions=[], strategy=final.name)

        degradations: list[dict[str, Any]] = []
        for strategy in self.strategies[:-1]:
            try:
                questions = await strategy.personalize_batch(starters, context)
            except Exception as exc:
                degradations.append(degradation_entry("personalize", strategy.name, exc))
                continue
            return PersonalizationOutcome(
                questions=questions, strategy=strategy.name, degradations=degradations
            )

        questions = await final.personalize_batch(starters, context)
        return PersonalizationOutcome(
            questions=questions, strategy=final.name, degradations=degradations
        )
