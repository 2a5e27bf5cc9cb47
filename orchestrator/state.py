"""Session state machine for document generation and simplification.

The whole client-visible lifecycle is an immutable ``SessionState`` plus a pure
``transition(state, event)`` function. I/O (rendering is pure, but extraction
and backend calls are not) happens outside; its outcomes come back in as
events. This keeps the machine testable without a server or a backend.

Generation:     idle -> previewing -> [validating -> rendering] -> enhancing
                -> result(enhanced) | result(base, warning) | error(validation)
Simplification: idle -> [extracting] -> enhancing -> result(enhanced)
                | error(validation | extraction | enhancement)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Any

from document_factory.registry import (
    COMING_SOON_NOTICE,
    get_document_type,
    get_planned_document_type,
)
from document_factory.renderer import render
from orchestrator.exceptions import (
    EmptyDocumentError,
    RequestInFlightError,
    StateTransitionError,
    ValidationError,
)
from orchestrator.validation import validate_document_text, validate_form_values

logger = logging.getLogger("justiceally.orchestrator.state")

ENHANCEMENT_WARNING = (
    "Could not enhance the document with AI. Using basic template instead."
)


class Phase(Enum):
    """Where a session is in its lifecycle."""

    IDLE = "idle"
    PREVIEWING = "previewing"  # Template shown, values being collected
    VALIDATING = "validating"
    RENDERING = "rendering"
    EXTRACTING = "extracting"  # PDF upload being read
    ENHANCING = "enhancing"  # Backend request in flight
    RESULT = "result"
    ERROR = "error"
    UNAVAILABLE = "unavailable"  # Selected type is "coming soon"


BUSY_PHASES = frozenset({Phase.VALIDATING, Phase.RENDERING, Phase.EXTRACTING, Phase.ENHANCING})


class Flow(Enum):
    GENERATION = "generation"
    SIMPLIFICATION = "simplification"


class ResultSource(Enum):
    ENHANCED = "enhanced"
    BASE = "base"


class ErrorKind(Enum):
    VALIDATION = "validation"
    EXTRACTION = "extraction"
    ENHANCEMENT = "enhancement"


@dataclass(frozen=True, slots=True)
class PipelineResult:
    """Final text of a generation or simplification request."""

    text: str
    source: ResultSource
    warning: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "source": self.source.value, "warning": self.warning}


@dataclass(frozen=True, slots=True)
class PipelineError:
    """A recoverable error the user has to act on."""

    kind: ErrorKind
    message: str
    missing_fields: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "missing_fields": list(self.missing_fields),
        }


@dataclass(frozen=True)
class SessionState:
    """Immutable snapshot of one user's session."""

    phase: Phase = Phase.IDLE
    flow: Flow | None = None
    document_type: str | None = None
    values: Mapping[str, str] = field(default_factory=dict)
    template: str | None = None
    base_document: str | None = None
    source_text: str | None = None
    result: PipelineResult | None = None
    error: PipelineError | None = None
    notice: str | None = None

    @property
    def busy(self) -> bool:
        return self.phase in BUSY_PHASES

    @property
    def display_text(self) -> str | None:
        """What the user is looking at: result, then base document, then template."""
        if self.result is not None:
            return self.result.text
        if self.base_document is not None:
            return self.base_document
        return self.template

    def to_dict(self) -> dict[str, Any]:
        return {
            "phase": self.phase.value,
            "flow": self.flow.value if self.flow else None,
            "document_type": self.document_type,
            "values": dict(self.values),
            "template": self.template,
            "base_document": self.base_document,
            "display_text": self.display_text,
            "result": self.result.to_dict() if self.result else None,
            "error": self.error.to_dict() if self.error else None,
            "notice": self.notice,
        }


# =============================================================================
# EVENTS
# =============================================================================


@dataclass(frozen=True, slots=True)
class DocumentTypeSelected:
    document_type: str


@dataclass(frozen=True, slots=True)
class FieldsEdited:
    values: Mapping[str, str]


@dataclass(frozen=True, slots=True)
class GenerationRequested:
    today: date | None = None


@dataclass(frozen=True, slots=True)
class SimplificationRequested:
    text: str


@dataclass(frozen=True, slots=True)
class UploadRejected:
    reason: str


@dataclass(frozen=True, slots=True)
class ExtractionStarted:
    filename: str


@dataclass(frozen=True, slots=True)
class ExtractionSucceeded:
    text: str


@dataclass(frozen=True, slots=True)
class ExtractionFailed:
    reason: str


@dataclass(frozen=True, slots=True)
class EnhancementSucceeded:
    text: str


@dataclass(frozen=True, slots=True)
class EnhancementFailed:
    reason: str


@dataclass(frozen=True, slots=True)
class Reset:
    pass


Event = (
    DocumentTypeSelected
    | FieldsEdited
    | GenerationRequested
    | SimplificationRequested
    | UploadRejected
    | ExtractionStarted
    | ExtractionSucceeded
    | ExtractionFailed
    | EnhancementSucceeded
    | EnhancementFailed
    | Reset
)

# Events that report the outcome of work in flight; every other event starts
# something new and is refused while the session is busy.
_COMPLETIONS = (ExtractionSucceeded, ExtractionFailed, EnhancementSucceeded, EnhancementFailed)


def _error(state: SessionState, kind: ErrorKind, message: str, missing: tuple[str, ...] = ()) -> SessionState:
    return replace(
        state,
        phase=Phase.ERROR,
        error=PipelineError(kind=kind, message=message, missing_fields=missing),
        result=None,
    )


def _select(state: SessionState, event: DocumentTypeSelected) -> SessionState:
    record = get_document_type(event.document_type)
    if record is None:
        planned = get_planned_document_type(event.document_type)
        title = planned.title if planned else event.document_type
        logger.info(f"'{event.document_type}' selected but not available")
        return SessionState(
            phase=Phase.UNAVAILABLE,
            flow=Flow.GENERATION,
            document_type=event.document_type,
            values=state.values,
            notice=f"{title}: {COMING_SOON_NOTICE}",
        )
    return SessionState(
        phase=Phase.PREVIEWING,
        flow=Flow.GENERATION,
        document_type=record.id,
        values=state.values,
        template=record.template,
    )


def _edit(state: SessionState, event: FieldsEdited) -> SessionState:
    if state.flow is not Flow.GENERATION or state.document_type is None:
        raise StateTransitionError(state.phase.value, "FieldsEdited")
    values = {**state.values, **event.values}
    if state.phase is Phase.UNAVAILABLE:
        return replace(state, values=values)
    return replace(
        state,
        phase=Phase.PREVIEWING,
        values=values,
        base_document=None,
        result=None,
        error=None,
    )


def _generate(state: SessionState, event: GenerationRequested) -> SessionState:
    if state.flow is not Flow.GENERATION or state.document_type is None:
        raise StateTransitionError(state.phase.value, "GenerationRequested")
    if state.phase is Phase.UNAVAILABLE:
        return state

    # Validating
    try:
        validate_form_values(state.document_type, state.values)
    except ValidationError as exc:
        return _error(state, ErrorKind.VALIDATION, exc.message, tuple(exc.missing_fields))

    # Rendering -> Enhancing; the base document is shown while the backend works
    base_document = render(state.document_type, state.values, event.today)
    return replace(
        state,
        phase=Phase.ENHANCING,
        base_document=base_document,
        result=None,
        error=None,
    )


def _simplify(state: SessionState, event: SimplificationRequested) -> SessionState:
    fresh = SessionState(flow=Flow.SIMPLIFICATION)
    try:
        text = validate_document_text(event.text)
    except ValidationError as exc:
        return _error(fresh, ErrorKind.VALIDATION, exc.message)
    return replace(fresh, phase=Phase.ENHANCING, source_text=text)


def _extracted(state: SessionState, event: ExtractionSucceeded) -> SessionState:
    if not event.text.strip():
        return _error(state, ErrorKind.EXTRACTION, EmptyDocumentError().message)
    return replace(state, phase=Phase.ENHANCING, source_text=event.text)


def _enhanced(state: SessionState, event: EnhancementSucceeded) -> SessionState:
    # The enhanced text supersedes the base document entirely.
    return replace(
        state,
        phase=Phase.RESULT,
        base_document=None,
        result=PipelineResult(text=event.text, source=ResultSource.ENHANCED),
    )


def _enhancement_failed(state: SessionState, event: EnhancementFailed) -> SessionState:
    if state.flow is Flow.GENERATION and state.base_document is not None:
        logger.info(f"Falling back to base document: {event.reason}")
        return replace(
            state,
            phase=Phase.RESULT,
            result=PipelineResult(
                text=state.base_document,
                source=ResultSource.BASE,
                warning=ENHANCEMENT_WARNING,
            ),
        )
    return _error(
        state,
        ErrorKind.ENHANCEMENT,
        "There was an error simplifying your document. Please try again.",
    )


def transition(state: SessionState, event: Event) -> SessionState:
    """Apply ``event`` to ``state`` and return the next state.

    Raises:
        RequestInFlightError: If a new request arrives while one is pending.
        StateTransitionError: If the event makes no sense in the current phase.
    """
    name = type(event).__name__

    if isinstance(event, _COMPLETIONS):
        expected = Phase.EXTRACTING if isinstance(event, (ExtractionSucceeded, ExtractionFailed)) else Phase.ENHANCING
        if state.phase is not expected:
            raise StateTransitionError(state.phase.value, name)
    elif state.busy:
        raise RequestInFlightError(state.phase.value, name)

    if isinstance(event, DocumentTypeSelected):
        return _select(state, event)
    if isinstance(event, FieldsEdited):
        return _edit(state, event)
    if isinstance(event, GenerationRequested):
        return _generate(state, event)
    if isinstance(event, SimplificationRequested):
        return _simplify(state, event)
    if isinstance(event, UploadRejected):
        return _error(SessionState(flow=Flow.SIMPLIFICATION), ErrorKind.EXTRACTION, event.reason)
    if isinstance(event, ExtractionStarted):
        return SessionState(phase=Phase.EXTRACTING, flow=Flow.SIMPLIFICATION)
    if isinstance(event, ExtractionSucceeded):
        return _extracted(state, event)
    if isinstance(event, ExtractionFailed):
        return _error(state, ErrorKind.EXTRACTION, event.reason)
    if isinstance(event, EnhancementSucceeded):
        return _enhanced(state, event)
    if isinstance(event, EnhancementFailed):
        return _enhancement_failed(state, event)
    if isinstance(event, Reset):
        return SessionState()

    raise StateTransitionError(state.phase.value, name)
