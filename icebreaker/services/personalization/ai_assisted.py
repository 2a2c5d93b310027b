import asyncio
from collections.abc import Sequence

from ...config import AI_TIMEOUT_SECONDS
from ...models import ConversationStarter, PersonalizedQuestion, ProfileContext
from ..errors import PersonalizationError
from ..openai_client import CompletionService
from ..render.prompt_render import build_customization_prompt
from ..response_parsing import parse_customizations


class AIAssistedPersonalizer:
    """Sends the profile context and a batch of templates to a completion service.

    Raises ``PersonalizationError`` whenever the batch cannot be fully
    customized; the personalization chain turns that into a fallback.
    """

    name = "ai"

    def __init__(
        self,
        completion: CompletionService,
        timeout_seconds: float = AI_TIMEOUT_SECONDS,
    ) -> None:
        self.completion = completion
        self.timeout_seconds = timeout_seconds

    async def personalize_batch(
        self,
        starters: Sequence[ConversationStarter],
        context: ProfileContext,
    ) -> list[PersonalizedQuestion]:
        prompt = build_customization_prompt(context, starters)
        try:
            content = await asyncio.wait_for(
                self.completion.complete(prompt), timeout=self.timeout_seconds
            )
        except asyncio.TimeoutError as exc:
            raise PersonalizationError(
                f"completion timed out after {self.timeout_seconds:g}s"
            ) from exc

        if not isinstance(content, str) or not content.strip():
            raise PersonalizationError("completion returned no text")

        customizations = {
            item.question_id: item
            for item in parse_customizations(content, (s.id for s in starters))
        }
        missing = [s.id for s in starters if s.id not in customizations]
        if missing:
            raise PersonalizationError(f"no customization returned for ids {missing}")

        questions: list[PersonalizedQuestion] = []
        for starter in starters:
            item = customizations[starter.id]
            questions.append(
                PersonalizedQuestion(
                    question_id=starter.id,
                    original_question=starter.question,
                    personalized_question=item.customized_question.strip(),
                    category=starter.category,
                    subcategory=starter.subcategory,
                    relevance_score=item.relevance_score,
                    reasoning=item.reasoning,
                    source="ai",
                )
            )
        return questions
