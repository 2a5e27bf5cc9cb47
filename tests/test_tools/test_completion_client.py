"""Tests for the remote completion endpoint client."""

from __future__ import annotations

import json

import httpx
import pytest

from orchestrator.exceptions import LLMError
from tools.completion_client import CHAT_STYLE, DOCUMENT_STYLE, HttpCompletionClient

URL = "https://justiceally.test/api/chat"


def client_for(handler, style=CHAT_STYLE) -> HttpCompletionClient:
    return HttpCompletionClient(URL, style=style, transport=httpx.MockTransport(handler))


class TestHttpCompletionClient:

    @pytest.mark.asyncio
    async def test_chat_style_round_trip(self) -> None:
        seen: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(json.loads(request.content))
            return httpx.Response(200, json={"response": "Enhanced notice"})

        text = await client_for(handler).complete("Draft a notice")

        assert text == "Enhanced notice"
        assert seen == [{"query": "Draft a notice"}]

    @pytest.mark.asyncio
    async def test_document_style_fields(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert json.loads(request.content) == {"text": "WHEREAS"}
            return httpx.Response(200, json={"simplifiedText": "In short"})

        assert await client_for(handler, DOCUMENT_STYLE).complete("WHEREAS") == "In short"

    @pytest.mark.asyncio
    async def test_non_success_status_fails(self) -> None:
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return httpx.Response(503, json={"response": "ignored"})

        with pytest.raises(LLMError) as exc_info:
            await client_for(handler).complete("x")

        assert exc_info.value.details["status_code"] == 503
        assert calls == 1

    @pytest.mark.asyncio
    async def test_missing_field_fails(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"simplifiedText": "wrong field"})

        with pytest.raises(LLMError, match="response"):
            await client_for(handler).complete("x")

    @pytest.mark.asyncio
    async def test_non_json_body_fails(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>oops</html>")

        with pytest.raises(LLMError, match="not JSON"):
            await client_for(handler).complete("x")

    @pytest.mark.asyncio
    async def test_network_error_fails(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(LLMError, match="failed"):
            await client_for(handler).complete("x")
