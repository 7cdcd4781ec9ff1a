"""Unit tests for the Gemini generative-text client."""

import json

import httpx
import pytest

from src.domains.payments.errors import GenerativeTextError
from src.domains.payments.llm import GeminiClient


def _client(handler) -> GeminiClient:
    return GeminiClient(
        "secret-key",
        base_url="https://gemini.test/v1beta",
        transport=httpx.MockTransport(handler),
    )


class TestGeminiClient:
    def test_requires_api_key(self):
        with pytest.raises(ValueError):
            GeminiClient("")

    @pytest.mark.asyncio
    async def test_generate_success(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["key"] = request.headers.get("x-goog-api-key")
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json={
                    "candidates": [
                        {"content": {"parts": [{"text": "Payment "}, {"text": "approved."}]}}
                    ]
                },
            )

        text = await _client(handler).generate("Explain", "gemini-2.0-flash")

        assert text == "Payment approved."
        assert seen["url"] == "https://gemini.test/v1beta/models/gemini-2.0-flash:generateContent"
        assert seen["key"] == "secret-key"
        assert seen["body"]["contents"][0]["parts"][0]["text"] == "Explain"

    @pytest.mark.asyncio
    async def test_no_candidates_returns_empty(self):
        client = _client(lambda request: httpx.Response(200, json={"promptFeedback": {}}))
        assert await client.generate("Explain", "m") == ""

    @pytest.mark.asyncio
    async def test_http_error_raises(self):
        client = _client(lambda request: httpx.Response(500, json={"error": "internal"}))
        with pytest.raises(GenerativeTextError, match="500"):
            await client.generate("Explain", "m")

    @pytest.mark.asyncio
    async def test_transport_error_raises(self):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        with pytest.raises(GenerativeTextError):
            await _client(handler).generate("Explain", "m")

    @pytest.mark.asyncio
    async def test_invalid_json_raises(self):
        client = _client(lambda request: httpx.Response(200, content=b"not json"))
        with pytest.raises(GenerativeTextError, match="JSON"):
            await client.generate("Explain", "m")
