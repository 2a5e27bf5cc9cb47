"""Tests for the session state machine."""

from __future__ import annotations

from dataclasses import replace

import pytest
from sample_values import COMPLETE_VALUES, TODAY

from document_factory import get_template, render
from orchestrator.exceptions import RequestInFlightError, StateTransitionError
from orchestrator.state import (
    ENHANCEMENT_WARNING,
    DocumentTypeSelected,
    EnhancementFailed,
    EnhancementSucceeded,
    ErrorKind,
    ExtractionFailed,
    ExtractionStarted,
    ExtractionSucceeded,
    FieldsEdited,
    Flow,
    GenerationRequested,
    Phase,
    Reset,
    ResultSource,
    SessionState,
    SimplificationRequested,
    UploadRejected,
    transition,
)


def run(*events, state: SessionState | None = None) -> SessionState:
    state = state or SessionState()
    for event in events:
        state = transition(state, event)
    return state


def enhancing_police_state() -> SessionState:
    return run(
        DocumentTypeSelected("police-complaint"),
        FieldsEdited(COMPLETE_VALUES["police-complaint"]),
        GenerationRequested(today=TODAY),
    )


class TestSelection:

    def test_selection_shows_raw_template(self) -> None:
        state = run(DocumentTypeSelected("legal-notice"))
        assert state.phase is Phase.PREVIEWING
        assert state.flow is Flow.GENERATION
        assert state.template == get_template("legal-notice")
        assert state.display_text == state.template
        assert state.base_document is None

    def test_planned_type_is_coming_soon(self) -> None:
        state = run(DocumentTypeSelected("rental-agreement"))
        assert state.phase is Phase.UNAVAILABLE
        assert state.notice == "Rental Agreement: This document type will be available soon."
        assert state.template is None
        assert state.error is None

    def test_generation_on_unavailable_type_is_a_no_op(self) -> None:
        state = run(DocumentTypeSelected("nda"), GenerationRequested(today=TODAY))
        assert state.phase is Phase.UNAVAILABLE

    def test_values_survive_type_change(self) -> None:
        state = run(
            DocumentTypeSelected("police-complaint"),
            FieldsEdited({"name": "Asha"}),
            DocumentTypeSelected("rti"),
        )
        assert state.values == {"name": "Asha"}


class TestGeneration:

    def test_missing_fields_end_in_validation_error(self) -> None:
        state = run(
            DocumentTypeSelected("police-complaint"),
            FieldsEdited({"name": "Asha", "address": ""}),
            GenerationRequested(today=TODAY),
        )
        assert state.phase is Phase.ERROR
        assert state.error.kind is ErrorKind.VALIDATION
        assert state.error.missing_fields[:2] == ("address", "phone")
        assert state.base_document is None

    def test_edit_after_validation_error_returns_to_previewing(self) -> None:
        state = run(
            DocumentTypeSelected("police-complaint"),
            GenerationRequested(today=TODAY),
            FieldsEdited({"name": "Asha"}),
        )
        assert state.phase is Phase.PREVIEWING
        assert state.error is None

    def test_complete_values_render_base_document_before_enhancing(self) -> None:
        state = enhancing_police_state()
        assert state.phase is Phase.ENHANCING
        assert state.busy
        assert state.base_document == render(
            "police-complaint", COMPLETE_VALUES["police-complaint"], TODAY
        )
        assert state.display_text == state.base_document

    def test_enhancement_success_supersedes_base_document(self) -> None:
        state = run(EnhancementSucceeded("ENHANCED TEXT"), state=enhancing_police_state())
        assert state.phase is Phase.RESULT
        assert state.result.text == "ENHANCED TEXT"
        assert state.result.source is ResultSource.ENHANCED
        assert state.result.warning is None
        assert state.base_document is None

    def test_enhancement_failure_falls_back_to_base_document(self) -> None:
        enhancing = enhancing_police_state()
        state = run(EnhancementFailed("HTTP 500"), state=enhancing)
        assert state.phase is Phase.RESULT
        assert state.error is None
        assert state.result.source is ResultSource.BASE
        assert state.result.text == enhancing.base_document
        assert state.result.warning == ENHANCEMENT_WARNING

    def test_new_request_produces_a_new_result(self) -> None:
        first = run(EnhancementSucceeded("one"), state=enhancing_police_state())
        second = run(GenerationRequested(today=TODAY), EnhancementSucceeded("two"), state=first)
        assert first.result.text == "one"
        assert second.result.text == "two"

    def test_edit_after_result_clears_it(self) -> None:
        done = run(EnhancementSucceeded("one"), state=enhancing_police_state())
        state = run(FieldsEdited({"phone": "9700000000"}), state=done)
        assert state.phase is Phase.PREVIEWING
        assert state.result is None
        assert state.values["phone"] == "9700000000"

    def test_editing_without_a_type_is_invalid(self) -> None:
        with pytest.raises(StateTransitionError):
            run(FieldsEdited({"name": "A"}))

    def test_generation_without_a_type_is_invalid(self) -> None:
        with pytest.raises(StateTransitionError):
            run(GenerationRequested(today=TODAY))


class TestSimplification:

    def test_pasted_text_goes_straight_to_enhancing(self) -> None:
        state = run(SimplificationRequested("WHEREAS the tenant"))
        assert state.phase is Phase.ENHANCING
        assert state.flow is Flow.SIMPLIFICATION
        assert state.source_text == "WHEREAS the tenant"

    def test_blank_text_is_a_validation_error(self) -> None:
        state = run(SimplificationRequested("   "))
        assert state.phase is Phase.ERROR
        assert state.error.kind is ErrorKind.VALIDATION

    def test_success(self) -> None:
        state = run(SimplificationRequested("WHEREAS"), EnhancementSucceeded("In short"))
        assert state.phase is Phase.RESULT
        assert state.result.text == "In short"
        assert state.result.source is ResultSource.ENHANCED

    def test_failure_is_an_enhancement_error(self) -> None:
        state = run(SimplificationRequested("WHEREAS"), EnhancementFailed("down"))
        assert state.phase is Phase.ERROR
        assert state.error.kind is ErrorKind.ENHANCEMENT
        assert state.result is None

    def test_upload_flow(self) -> None:
        state = run(ExtractionStarted("lease.pdf"))
        assert state.phase is Phase.EXTRACTING
        assert state.busy
        state = run(ExtractionSucceeded("P1\nP2\n"), state=state)
        assert state.phase is Phase.ENHANCING
        assert state.source_text == "P1\nP2\n"

    def test_empty_extraction_is_an_error(self) -> None:
        state = run(ExtractionStarted("scan.pdf"), ExtractionSucceeded("\n\n"))
        assert state.phase is Phase.ERROR
        assert state.error.kind is ErrorKind.EXTRACTION
        assert state.source_text is None

    def test_extraction_failure(self) -> None:
        state = run(ExtractionStarted("x.pdf"), ExtractionFailed("We could not read this file."))
        assert state.phase is Phase.ERROR
        assert state.error.kind is ErrorKind.EXTRACTION

    def test_rejected_upload(self) -> None:
        state = run(UploadRejected("Please upload a PDF file"))
        assert state.phase is Phase.ERROR
        assert state.error.message == "Please upload a PDF file"

    def test_simplification_replaces_generation_session(self) -> None:
        done = run(EnhancementSucceeded("doc"), state=enhancing_police_state())
        state = run(SimplificationRequested("WHEREAS"), state=done)
        assert state.flow is Flow.SIMPLIFICATION
        assert state.document_type is None


class TestConcurrencyDiscipline:

    @pytest.mark.parametrize(
        "event",
        [
            GenerationRequested(today=TODAY),
            SimplificationRequested("text"),
            FieldsEdited({"name": "B"}),
            DocumentTypeSelected("rti"),
            ExtractionStarted("x.pdf"),
            UploadRejected("no"),
            Reset(),
        ],
    )
    def test_new_requests_refused_while_enhancing(self, event) -> None:
        enhancing = enhancing_police_state()
        with pytest.raises(RequestInFlightError):
            transition(enhancing, event)

    def test_requests_refused_while_extracting(self) -> None:
        with pytest.raises(RequestInFlightError):
            run(ExtractionStarted("x.pdf"), SimplificationRequested("text"))

    def test_completion_outside_enhancing_is_invalid(self) -> None:
        with pytest.raises(StateTransitionError):
            run(EnhancementSucceeded("stray"))

    def test_extraction_result_outside_extracting_is_invalid(self) -> None:
        with pytest.raises(StateTransitionError):
            transition(enhancing_police_state(), ExtractionSucceeded("x"))


class TestSerialization:

    def test_to_dict(self) -> None:
        state = run(EnhancementFailed("down"), state=enhancing_police_state())
        data = state.to_dict()
        assert data["phase"] == "result"
        assert data["flow"] == "generation"
        assert data["result"]["source"] == "base"
        assert data["result"]["warning"] == ENHANCEMENT_WARNING
        assert data["display_text"] == state.base_document
        assert data["values"] == COMPLETE_VALUES["police-complaint"]

    def test_reset(self) -> None:
        state = run(Reset(), state=replace(SessionState(), phase=Phase.RESULT))
        assert state == SessionState()
