import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def append_ndjson(path: Path, record: dict[str, Any]) -> None:
    """Append one JSON object as a single line.

    Never raises: logging must not break selection or personalization.
    """

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        line = json.dumps(record, ensure_ascii=True, separators=(",", ":"), default=str)
        with path.open("a", encoding="utf-8") as f:
            f.write(line)
            f.write("\n")
    except Exception:
        return


def degradation_entry(stage: str, strategy: str, exc: BaseException | str) -> dict[str, str]:
    if isinstance(exc, BaseException):
        return {
            "stage": stage,
            "strategy": strategy,
            "type": type(exc).__name__,
            "msg": str(exc)[:500],
        }
    return {"stage": stage, "strategy": strategy, "type": "", "msg": exc[:500]}
