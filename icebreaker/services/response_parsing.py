import json
import re
from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError

from ..models import AICustomization
from .errors import PersonalizationError

_DECODER = json.JSONDecoder()
_FENCE = re.compile(r"```(?:json)?\s*([\s\S]*?)```", re.IGNORECASE)


def extract_structured_block(content: str) -> Any | None:
    """Return the first well-formed JSON object or array embedded in ``content``.

    Surrounding prose and markdown fences are discarded. ``None`` when no
    bracketed or braced block decodes.
    """
    if not content:
        return None
    candidates = [match.group(1) for match in _FENCE.finditer(content)]
    candidates.append(content)
    for candidate in candidates:
        for index, char in enumerate(candidate):
            if char not in "{[":
                continue
            try:
                value, _ = _DECODER.raw_decode(candidate, index)
            except json.JSONDecodeError:
                continue
            return value
    return None


def _customization_items(raw: Any) -> list[Any]:
    if isinstance(raw, list):
        return raw
    if isinstance(raw, dict):
        items = raw.get("questions")
        if isinstance(items, list):
            return items
    raise PersonalizationError("structured block has no 'questions' list")


def parse_customizations(content: str, allowed_ids: Iterable[int]) -> list[AICustomization]:
    """Parse the completion text into validated customizations for ``allowed_ids``.

    Entries for ids outside the batch are dropped; any entry with a missing or
    malformed field fails the whole batch.
    """
    raw = extract_structured_block(content)
    if raw is None:
        raise PersonalizationError("no JSON block found in completion")

    allowed = set(allowed_ids)
    parsed: list[AICustomization] = []
    for item in _customization_items(raw):
        try:
            customization = AICustomization.model_validate(item)
        except ValidationError as exc:
            raise PersonalizationError(f"malformed customization: {exc.errors()[:1]}") from exc
        if customization.question_id in allowed:
            parsed.append(customization)
    return parsed
