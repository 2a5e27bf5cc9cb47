"""HTTP client for a remote completion endpoint.

Talks to a deployed JusticeAlly completion API (see ``api/completion.py``):

* chat style:      ``POST {"query": ...}`` -> ``{"response": ...}``
* document style:  ``POST {"text": ...}``  -> ``{"simplifiedText": ...}``

A non-2xx status, an unparseable body, or a body without the expected field
is a failure; there is exactly one request per call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from orchestrator.exceptions import LLMError

logger = logging.getLogger("justiceally.completion_client")


@dataclass(frozen=True)
class EndpointStyle:
    """Request and response field names of a completion endpoint."""

    request_field: str
    response_field: str


CHAT_STYLE = EndpointStyle(request_field="query", response_field="response")
DOCUMENT_STYLE = EndpointStyle(request_field="text", response_field="simplifiedText")


class HttpCompletionClient:
    """Completion backend that POSTs prompts to a JSON endpoint.

    Usage:
        backend = HttpCompletionClient("https://justiceally.example.com/api/chat")
        text = await backend.complete("Explain a legal notice")
    """

    def __init__(
        self,
        url: str,
        style: EndpointStyle = CHAT_STYLE,
        timeout_seconds: float = 30.0,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self.style = style
        self.timeout_seconds = timeout_seconds
        self.headers = headers or {}
        self._transport = transport

    async def complete(self, prompt: str) -> str:
        payload = {self.style.request_field: prompt}
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.post(self.url, json=payload, headers=self.headers)
        except httpx.HTTPError as exc:
            raise LLMError("complete", f"request to {self.url} failed: {exc}") from exc

        if not response.is_success:
            logger.warning(f"Completion endpoint answered {response.status_code}")
            raise LLMError(
                "complete",
                f"endpoint returned HTTP {response.status_code}",
                {"status_code": response.status_code},
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise LLMError("complete", "response body is not JSON") from exc

        text = body.get(self.style.response_field) if isinstance(body, dict) else None
        if not isinstance(text, str):
            raise LLMError(
                "complete",
                f"response is missing '{self.style.response_field}'",
            )
        return text
