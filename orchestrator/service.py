"""Application service driving document sessions through the state machine."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Mapping
from datetime import date

from document_factory.enhancer import EnhancementClient
from document_factory.registry import get_document_type
from document_factory.renderer import render
from orchestrator.exceptions import (
    EnhancementError,
    ExtractionError,
    StateTransitionError,
    UnknownDocumentTypeError,
)
from orchestrator.retry import NO_RETRY_POLICY, RetryPolicy, retry_async
from orchestrator.sessions import Session, SessionStore
from orchestrator.state import (
    DocumentTypeSelected,
    EnhancementFailed,
    EnhancementSucceeded,
    Event,
    ExtractionFailed,
    ExtractionStarted,
    ExtractionSucceeded,
    FieldsEdited,
    Flow,
    GenerationRequested,
    Phase,
    Reset,
    SessionState,
    SimplificationRequested,
    UploadRejected,
    transition,
)
from orchestrator.validation import DEFAULT_MAX_UPLOAD_BYTES, validate_upload
from tools.pdf_extract import UNREADABLE_PDF_MESSAGE, extract_text

logger = logging.getLogger("justiceally.orchestrator")

DEFAULT_ENHANCEMENT_TIMEOUT = 30.0
DEFAULT_EXTRACTION_TIMEOUT = 60.0

EXTRACTION_TIMEOUT_MESSAGE = (
    "Reading this file took too long. Try a smaller PDF or paste the text instead."
)


class DocumentService:
    """Coordinates rendering, extraction and enhancement for user sessions.

    All state changes go through ``transition``; this class only performs the
    I/O the state machine asks for and feeds the outcomes back as events.
    Every backend call runs under a watchdog, so no session stays in
    ``enhancing`` longer than ``enhancement_timeout`` per attempt, and no
    upload stays in ``extracting`` longer than ``extraction_timeout``.
    """

    def __init__(
        self,
        enhancer: EnhancementClient,
        extractor: Callable[[bytes], str] = extract_text,
        sessions: SessionStore | None = None,
        enhancement_timeout: float = DEFAULT_ENHANCEMENT_TIMEOUT,
        extraction_timeout: float = DEFAULT_EXTRACTION_TIMEOUT,
        retry_policy: RetryPolicy | None = None,
        max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self.enhancer = enhancer
        self.extractor = extractor
        self.sessions = sessions or SessionStore()
        self.enhancement_timeout = enhancement_timeout
        self.extraction_timeout = extraction_timeout
        self.retry_policy = retry_policy or NO_RETRY_POLICY
        self.max_upload_bytes = max_upload_bytes
        self.clock = clock

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    def open_session(self) -> Session:
        session = self.sessions.create()
        logger.info(f"Opened session {session.session_id}")
        return session

    def get_session(self, session_id: str) -> Session:
        return self.sessions.get(session_id)

    def close_session(self, session_id: str) -> None:
        self.sessions.delete(session_id)
        logger.info(f"Closed session {session_id}")

    def reset(self, session_id: str) -> SessionState:
        return self._apply(self.get_session(session_id), Reset())

    def _apply(self, session: Session, event: Event) -> SessionState:
        previous = session.state.phase
        session.state = transition(session.state, event)
        logger.debug(
            f"[{session.session_id}] {type(event).__name__}: "
            f"{previous.value} -> {session.state.phase.value}"
        )
        return session.state

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    def select_document_type(self, session_id: str, document_type: str) -> SessionState:
        return self._apply(self.get_session(session_id), DocumentTypeSelected(document_type))

    def edit_fields(self, session_id: str, values: Mapping[str, str]) -> SessionState:
        return self._apply(self.get_session(session_id), FieldsEdited(dict(values)))

    def preview(self, session_id: str) -> str:
        """Live rendering of the current values, placeholders for blanks.

        Raises:
            StateTransitionError: If no document type has been selected.
            UnknownDocumentTypeError: If the selected type is not available yet.
        """
        state = self.get_session(session_id).state
        if state.flow is not Flow.GENERATION or state.document_type is None:
            raise StateTransitionError(state.phase.value, "preview")
        if get_document_type(state.document_type) is None:
            raise UnknownDocumentTypeError(state.document_type)
        return render(state.document_type, state.values, self.clock())

    async def generate(self, session_id: str) -> SessionState:
        """Validate, render and enhance the session's document.

        Ends in ``result`` (enhanced, or base with a warning) or in
        ``error(validation)``; never in an error once a base document exists.
        """
        session = self.get_session(session_id)
        state = self._apply(session, GenerationRequested(today=self.clock()))
        if state.phase is not Phase.ENHANCING:
            return state

        document_type = state.document_type
        values = dict(state.values)
        base_document = state.base_document
        return await self._enhance(
            session,
            lambda: self.enhancer.enhance(document_type, values, base_document),
            operation="enhance",
        )

    # ------------------------------------------------------------------
    # Simplification
    # ------------------------------------------------------------------

    async def simplify_text(self, session_id: str, text: str) -> SessionState:
        session = self.get_session(session_id)
        state = self._apply(session, SimplificationRequested(text))
        if state.phase is not Phase.ENHANCING:
            return state
        return await self._simplify(session)

    async def simplify_upload(
        self,
        session_id: str,
        filename: str,
        content_type: str | None,
        data: bytes,
    ) -> SessionState:
        """Extract text from an uploaded PDF and simplify it.

        The upload is checked before the extractor is touched; anything that
        is not a PDF within the size ceiling ends in ``error(extraction)``, as
        does an extractor failure or timeout.
        """
        session = self.get_session(session_id)
        try:
            validate_upload(content_type, len(data), self.max_upload_bytes)
        except ExtractionError as exc:
            logger.info(f"[{session_id}] Upload rejected: {exc.message}")
            return self._apply(session, UploadRejected(exc.message))

        self._apply(session, ExtractionStarted(filename))
        start_time = time.time()
        task = asyncio.ensure_future(
            asyncio.wait_for(
                asyncio.to_thread(self.extractor, data),
                timeout=self.extraction_timeout,
            )
        )
        session.pending = task
        try:
            text = await task
        except ExtractionError as exc:
            return self._apply(session, ExtractionFailed(exc.message))
        except asyncio.TimeoutError:
            logger.warning(
                f"[{session_id}] Extraction of {filename} exceeded {self.extraction_timeout:g}s"
            )
            return self._apply(session, ExtractionFailed(EXTRACTION_TIMEOUT_MESSAGE))
        except asyncio.CancelledError:
            state = self._apply(session, ExtractionFailed("Upload was cancelled"))
            if session.cancel_requested:
                return state
            raise
        except Exception:
            logger.exception(f"[{session_id}] Extractor failed on {filename}")
            return self._apply(session, ExtractionFailed(UNREADABLE_PDF_MESSAGE))
        finally:
            session.pending = None
            session.cancel_requested = False

        logger.info(
            f"[{session_id}] Extracted {len(text)} chars from {filename} "
            f"in {time.time() - start_time:.2f}s"
        )
        state = self._apply(session, ExtractionSucceeded(text))
        if state.phase is not Phase.ENHANCING:
            return state
        return await self._simplify(session)

    async def _simplify(self, session: Session) -> SessionState:
        source_text = session.state.source_text or ""
        return await self._enhance(
            session,
            lambda: self.enhancer.simplify(source_text),
            operation="simplify",
        )

    # ------------------------------------------------------------------
    # Enhancement
    # ------------------------------------------------------------------

    def cancel(self, session_id: str) -> SessionState:
        """Best-effort cancellation of the session's in-flight extraction or enhancement."""
        session = self.get_session(session_id)
        pending = session.pending
        if pending is not None and not pending.done():
            logger.info(f"[{session_id}] Cancelling in-flight work")
            session.cancel_requested = True
            pending.cancel()
        return session.state

    async def _enhance(
        self,
        session: Session,
        call: Callable[[], Awaitable[str]],
        operation: str,
    ) -> SessionState:
        async def attempt() -> str:
            try:
                return await asyncio.wait_for(call(), timeout=self.enhancement_timeout)
            except asyncio.TimeoutError as exc:
                raise EnhancementError(
                    operation,
                    f"no response within {self.enhancement_timeout:g}s",
                    {"timeout_seconds": self.enhancement_timeout},
                ) from exc

        start_time = time.time()
        task = asyncio.ensure_future(retry_async(attempt, self.retry_policy, operation))
        session.pending = task
        try:
            text = await task
        except EnhancementError as exc:
            logger.warning(f"[{session.session_id}] {exc.message}")
            return self._apply(session, EnhancementFailed(exc.message))
        except asyncio.CancelledError:
            state = self._apply(session, EnhancementFailed("cancelled"))
            if session.cancel_requested:
                return state
            raise
        except Exception as exc:
            logger.exception(f"[{session.session_id}] Unexpected failure during {operation}")
            return self._apply(session, EnhancementFailed(type(exc).__name__))
        finally:
            session.pending = None
            session.cancel_requested = False

        logger.info(
            f"[{session.session_id}] {operation} succeeded in {time.time() - start_time:.2f}s "
            f"({len(text)} chars)"
        )
        return self._apply(session, EnhancementSucceeded(text))
