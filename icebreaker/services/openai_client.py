from typing import Any, Protocol

import httpx

from ..config import AI_TIMEOUT_SECONDS, MODEL_NAME, OPENAI_API_URL
from .errors import CompletionError
from .render.prompt_render import CUSTOMIZATION_INSTRUCTIONS
from .utils.constants import CUSTOMIZATION_SCHEMA


class CompletionService(Protocol):
    async def complete(self, prompt: str) -> str: ...


def extract_output_text(data: dict[str, Any]) -> tuple[str, str]:
    """(text, refusal) gathered from a Responses API payload."""
    texts: list[str] = []
    refusals: list[str] = []
    for item in data.get("output", []) or []:
        if item.get("type") == "refusal":
            refusals.append(item.get("refusal", ""))
            continue
        if item.get("type") != "message":
            continue
        for part in item.get("content", []) or []:
            if part.get("type") == "output_text":
                texts.append(part.get("text", ""))
            elif part.get("type") == "refusal":
                refusals.append(part.get("refusal", ""))
    text = "\n".join(t for t in texts if t).strip() or str(data.get("output_text", "") or "")
    return text, "\n".join(r for r in refusals if r).strip()


class OpenAIResponsesClient:
    """Text-completion collaborator backed by the OpenAI Responses API."""

    def __init__(
        self,
        api_key: str,
        api_url: str = OPENAI_API_URL,
        model_name: str = MODEL_NAME,
        timeout_seconds: float = AI_TIMEOUT_SECONDS,
        instructions: str = CUSTOMIZATION_INSTRUCTIONS,
        text_format: dict[str, Any] | None = CUSTOMIZATION_SCHEMA,
        temperature: float = 0.6,
        max_output_tokens: int = 900,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.api_url = api_url
        self.model_name = model_name
        self.timeout_seconds = timeout_seconds
        self.instructions = instructions
        self.text_format = text_format
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    async def complete(self, prompt: str) -> str:
        request_body: dict[str, Any] = {
            "model": self.model_name,
            "input": [{"role": "user", "content": prompt}],
            "instructions": self.instructions,
            "temperature": self.temperature,
            "max_output_tokens": self.max_output_tokens,
        }
        if self.text_format:
            request_body["text"] = {"format": self.text_format}

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds, transport=self._transport
            ) as client:
                response = await client.post(self.api_url, headers=self._headers(), json=request_body)

                # Older models reject json_schema; retry once with plain JSON mode.
                if response.status_code >= 400 and (
                    "response_format" in response.text or "json_schema" in response.text
                ):
                    request_body["text"] = {"format": {"type": "json_object"}}
                    response = await client.post(
                        self.api_url, headers=self._headers(), json=request_body
                    )
        except httpx.HTTPError as exc:
            raise CompletionError(f"completion request failed: {exc}") from exc

        if response.status_code >= 400:
            raise CompletionError(
                f"completion API returned {response.status_code}: {response.text[:500]}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise CompletionError("completion API returned a non-JSON body") from exc

        text, refusal = extract_output_text(data if isinstance(data, dict) else {})
        if refusal:
            raise CompletionError(f"model refused: {refusal[:200]}")
        if not text:
            raise CompletionError("empty completion")
        return text
