"""LLM client for interacting with language models (Anthropic Claude).

This is the default completion backend of the document pipeline. It makes a
single Messages API request per call: SDK-level retries are disabled because
retry policy belongs to the orchestrator, and a missing API key is reported
as an ``LLMError`` rather than papered over with canned text.
"""

from __future__ import annotations

import logging
import os
from typing import Any

from anthropic import AsyncAnthropic

from document_factory.prompts import ASSISTANT_SYSTEM_PROMPT
from orchestrator.exceptions import LLMError

logger = logging.getLogger("justiceally.llm_client")

DEFAULT_MODEL = "claude-sonnet-4-20250514"


class LLMClient:
    """Wrapper for the Anthropic Claude API returning plain text."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_MODEL,
        max_tokens: int = 2048,
        temperature: float = 0.7,
        timeout_seconds: float = 30.0,
        system_prompt: str = ASSISTANT_SYSTEM_PROMPT,
    ):
        """Initialise the client.

        Args:
            api_key: Anthropic API key. If ``None`` the environment variable
                ``ANTHROPIC_API_KEY`` is consulted.
            model: Claude model to use.
            max_tokens: Maximum tokens to generate per request.
            temperature: Sampling temperature.
            timeout_seconds: HTTP timeout for a single request.
            system_prompt: System prompt sent with every ``complete`` call.
        """
        self.api_key = api_key or os.getenv("ANTHROPIC_API_KEY")
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.system_prompt = system_prompt
        self.client = (
            AsyncAnthropic(api_key=self.api_key, max_retries=0, timeout=timeout_seconds)
            if self.api_key
            else None
        )

    @property
    def configured(self) -> bool:
        return self.client is not None

    async def generate_text(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int | None = None,
    ) -> str:
        """Generate a plain-text response from the LLM.

        Args:
            system_prompt: System prompt for the model.
            user_prompt: User prompt for the model.
            max_tokens: Maximum tokens to generate (defaults to the client setting).

        Raises:
            LLMError: If no API key is configured, the request fails, or the
                response carries no text.
        """
        if self.client is None:
            raise LLMError("generate_text", "ANTHROPIC_API_KEY is not configured")

        request_params: dict[str, Any] = {
            "model": self.model,
            "max_tokens": max_tokens or self.max_tokens,
            "temperature": self.temperature,
            "system": system_prompt,
            "messages": [{"role": "user", "content": user_prompt}],
        }

        logger.debug(
            f"Calling Anthropic API (model: {self.model}, max_tokens: {request_params['max_tokens']})"
        )
        try:
            response = await self.client.messages.create(**request_params)
        except Exception as exc:
            raise LLMError("generate_text", str(exc), {"error_type": type(exc).__name__}) from exc

        content_parts = [
            block.text for block in response.content
            if getattr(block, "type", None) == "text"
        ]
        content = "\n".join(content_parts)
        if not content.strip():
            raise LLMError("generate_text", "response contained no text")

        logger.debug(f"Received response from Anthropic API ({len(content)} chars)")
        return content

    async def complete(self, prompt: str) -> str:
        """Completion backend entry point: answer ``prompt`` as the legal assistant."""
        return await self.generate_text(self.system_prompt, prompt)


# Global singleton for easy access
_llm_client: LLMClient | None = None


def get_llm_client() -> LLMClient:
    """Get or create the global LLM client instance."""
    global _llm_client
    if _llm_client is None:
        _llm_client = LLMClient()
    return _llm_client


def set_llm_client(client: LLMClient | None) -> None:
    """Set the global LLM client instance (useful for testing)."""
    global _llm_client
    _llm_client = client
