"""Generative-text client used for decision explanations."""

from typing import Protocol

import httpx
import structlog

from .errors import GenerativeTextError

logger = structlog.get_logger()

DEFAULT_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


class GenerativeTextClient(Protocol):
    async def generate(self, prompt: str, model: str) -> str: ...


class GeminiClient:
    """Minimal async client for the Gemini ``generateContent`` REST endpoint.

    A single attempt is made per call; failures raise GenerativeTextError and
    are never retried here.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_GEMINI_BASE_URL,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("api_key is required")
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds
        self._transport = transport

    async def generate(self, prompt: str, model: str) -> str:
        url = f"{self._base_url}/models/{model}:generateContent"
        body = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(
                    url,
                    json=body,
                    headers={"x-goog-api-key": self._api_key},
                )
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as exc:
            raise GenerativeTextError(
                f"Generative text request failed with status {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise GenerativeTextError(f"Generative text request failed: {exc}") from exc
        except ValueError as exc:
            raise GenerativeTextError("Generative text response was not valid JSON") from exc

        return _extract_text(payload)


def _extract_text(payload: dict) -> str:
    candidates = payload.get("candidates") or []
    if not candidates:
        logger.warning("generative_text_no_candidates", prompt_feedback=payload.get("promptFeedback"))
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "".join(part.get("text", "") for part in parts)
