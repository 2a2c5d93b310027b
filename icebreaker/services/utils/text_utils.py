import re
import unicodedata
from collections.abc import Iterable


def normalize_key(text: str | None) -> str:
    if not text:
        return ""
    normalized = unicodedata.normalize("NFKD", text)
    normalized = "".join(ch for ch in normalized if not unicodedata.combining(ch))
    normalized = re.sub(r"[^a-z0-9]+", " ", normalized.lower()).strip()
    return normalized


def lower(text: str | None) -> str:
    return (text or "").lower()


def contains_any(text: str | None, keywords: Iterable[str]) -> bool:
    lowered = lower(text)
    if not lowered:
        return False
    return any(keyword in lowered for keyword in keywords)


def unique(items: Iterable[str]) -> tuple[str, ...]:
    """Drop blanks and duplicates, keeping first-seen order."""
    return tuple(dict.fromkeys(item for item in items if item))


def compact_role_title(title: str) -> str:
    """Shorten a role title for inline mentions without inventing facts."""
    if not title:
        return ""
    text = " ".join(title.split()).strip()
    for sep in [" | ", " — ", " – ", " · "]:
        if sep in text:
            text = text.split(sep, 1)[0].strip()
    if len(text) > 60:
        text = text[:57].rstrip() + "..."
    return text


def join_and(items: Iterable[str]) -> str:
    return " and ".join(item for item in items if item)


def contains_word(text: str | None, keywords: Iterable[str]) -> bool:
    """Whole-word variant of ``contains_any`` for short tokens like "mit" or "ai"."""
    lowered = lower(text)
    if not lowered:
        return False
    return any(re.search(rf"\b{re.escape(keyword)}\b", lowered) for keyword in keywords)
