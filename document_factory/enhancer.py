"""Enhancement Client - single-call rewriting of legal documents.

This module turns a rendered base document (or any pasted legal text) into a
more natural, expanded document by sending one instruction to a generative
text backend. It never retries and never repairs partial output: any failure
surfaces as ``EnhancementError`` and the caller decides what to do with it.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Protocol

from document_factory.prompts import build_simplification_prompt
from document_factory.registry import get_document_type
from orchestrator.exceptions import EnhancementError

logger = logging.getLogger("justiceally.document_factory")


class CompletionBackend(Protocol):
    """Anything that turns a prompt into text, e.g. an LLM or a remote endpoint."""

    async def complete(self, prompt: str) -> str: ...


class EnhancementClient:
    """Builds per-document-type instructions and sends them to a backend.

    Example:
        client = EnhancementClient(LLMClient())
        text = await client.enhance("affidavit", values, base_document)

    ``simplify_backend`` is a document-style endpoint that applies its own
    plain-language instruction; when set, ``simplify`` sends it the raw text
    instead of wrapping the text in the simplification prompt.
    """

    def __init__(
        self,
        backend: CompletionBackend,
        simplify_backend: CompletionBackend | None = None,
    ):
        self.backend = backend
        self.simplify_backend = simplify_backend

    async def enhance(
        self,
        document_type: str,
        values: Mapping[str, str],
        base_document: str,
    ) -> str:
        """Rewrite a rendered document with the backend.

        Args:
            document_type: Registry identifier of the document
            values: The form values used to render ``base_document``
            base_document: The deterministic rendering of the template

        Returns:
            The backend's text, verbatim. Unknown document types return
            ``base_document`` unchanged without contacting the backend.

        Raises:
            EnhancementError: On any backend failure
        """
        record = get_document_type(document_type)
        if record is None:
            logger.info(f"No enhancement defined for '{document_type}', returning base document")
            return base_document

        prompt = record.instruction(values, base_document)
        logger.info(f"Enhancing {record.title} ({len(prompt)} chars of instruction)")
        return await self._complete(prompt, operation="enhance")

    async def simplify(self, text: str) -> str:
        """Explain a legal document in plain language.

        Raises:
            EnhancementError: On any backend failure
        """
        logger.info(f"Simplifying document ({len(text)} chars)")
        if self.simplify_backend is not None:
            return await self._complete(text, operation="simplify", backend=self.simplify_backend)
        return await self._complete(build_simplification_prompt(text), operation="simplify")

    async def _complete(
        self,
        prompt: str,
        operation: str,
        backend: CompletionBackend | None = None,
    ) -> str:
        backend = backend or self.backend
        try:
            text = await backend.complete(prompt)
        except EnhancementError:
            raise
        except Exception as exc:
            logger.warning(f"Backend call for {operation} failed: {exc}")
            raise EnhancementError(
                operation,
                str(exc) or type(exc).__name__,
                {"error_type": type(exc).__name__},
            ) from exc

        if not isinstance(text, str) or not text.strip():
            raise EnhancementError(operation, "backend returned no text")

        logger.debug(f"Backend returned {len(text)} chars for {operation}")
        return text
