import os
from pathlib import Path

from dotenv import load_dotenv

# Load the repo-level `.env` (if present) before reading any setting below.
load_dotenv(dotenv_path=Path(__file__).resolve().parents[1] / ".env")

DEFAULT_MODEL_NAME = "gpt-4o-2024-08-06"
MODEL_NAME = os.getenv("OPENAI_MODEL", DEFAULT_MODEL_NAME)
OPENAI_API_URL = os.getenv("OPENAI_API_URL", "https://api.openai.com/v1/responses")

AI_TIMEOUT_SECONDS = float(os.getenv("ICEBREAKER_AI_TIMEOUT", "20"))
DEFAULT_QUESTION_COUNT = int(os.getenv("ICEBREAKER_DEFAULT_COUNT", "5"))
SCORE_JITTER = float(os.getenv("ICEBREAKER_SCORE_JITTER", "2.0"))
LOG_PATH = Path(
    os.getenv(
        "ICEBREAKER_LOG_PATH",
        str(Path(__file__).resolve().parents[1] / "logs" / "icebreakers.ndjson"),
    )
)
DEBUG = os.getenv("ICEBREAKER_DEBUG", "0") == "1"


def openai_api_key() -> str:
    return os.getenv("OPENAI_API_KEY", "")
