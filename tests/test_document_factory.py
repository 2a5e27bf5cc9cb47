"""Tests for the document registry, renderer and download helpers."""

from __future__ import annotations

from datetime import date

import pytest
from sample_values import COMPLETE_VALUES, TODAY

from document_factory import (
    CAPABILITIES,
    DOCUMENT_TYPES,
    PLANNED_DOCUMENT_TYPES,
    get_document_type,
    get_required_fields,
    get_template,
    list_document_types,
    render,
)
from document_factory import renderer
from document_factory.export import SIMPLIFIED_TITLE, download_filename, slugify
from document_factory.renderer import format_affirmation_date, format_long_date, is_filled
from document_factory.templates import AFFIDAVIT_STATEMENTS_SKELETON
from orchestrator.exceptions import UnknownDocumentTypeError


class TestRegistry:
    """Catalog and field schema lookups."""

    def test_police_complaint_required_fields_in_schema_order(self) -> None:
        assert get_required_fields("police-complaint") == [
            "name",
            "address",
            "phone",
            "email",
            "policeStation",
            "incidentDate",
            "incidentLocation",
            "complaintDetails",
        ]

    def test_optional_fields_are_not_required(self) -> None:
        assert "complaintSubject" not in get_required_fields("police-complaint")
        assert "paymentMode" not in get_required_fields("rti")
        assert "relationName" not in get_required_fields("affidavit")

    def test_unknown_type_has_empty_schema_and_no_template(self) -> None:
        assert get_required_fields("nda") == []
        assert get_template("nda") is None
        assert get_document_type("does-not-exist") is None

    @pytest.mark.parametrize("document_type", sorted(DOCUMENT_TYPES))
    def test_every_type_has_schema_and_template(self, document_type: str) -> None:
        record = DOCUMENT_TYPES[document_type]
        assert record.required_fields
        assert record.template.strip()
        keys = [f.key for f in record.fields]
        assert len(keys) == len(set(keys))

    @pytest.mark.parametrize("document_type", sorted(DOCUMENT_TYPES))
    def test_every_slot_token_appears_in_template(self, document_type: str) -> None:
        record = DOCUMENT_TYPES[document_type]
        for slot in record.slots:
            assert slot.token in record.template

    def test_list_groups_available_and_planned_types(self) -> None:
        grouped = list_document_types()
        assert set(grouped) == {"common", "complaints", "agreements"}
        common_ids = [t["id"] for t in grouped["common"]]
        assert common_ids == ["police-complaint", "legal-notice", "rti", "affidavit"]
        assert all(t["available"] is False for t in grouped["complaints"])
        assert len(grouped["complaints"]) + len(grouped["agreements"]) == len(PLANNED_DOCUMENT_TYPES)

    def test_detail_can_include_template(self) -> None:
        data = get_document_type("rti").to_dict(include_template=True)
        assert data["template"].startswith("RIGHT TO INFORMATION APPLICATION")
        assert data["fields"][6]["choices"][0] == {"value": "postal-order", "label": "Postal Order"}

    def test_voice_input_is_not_implemented(self) -> None:
        assert CAPABILITIES["voice_input"] is False
        assert CAPABILITIES["document_generation"] is True


class TestDateFormatting:

    def test_long_date(self) -> None:
        assert format_long_date(date(2026, 10, 19)) == "19 October 2026"
        assert format_long_date(date(2026, 3, 5)) == "5 March 2026"

    @pytest.mark.parametrize(
        ("day", "expected"),
        [
            (1, "1st"),
            (2, "2nd"),
            (3, "3rd"),
            (4, "4th"),
            (11, "11th"),
            (12, "12th"),
            (13, "13th"),
            (21, "21st"),
            (22, "22nd"),
            (23, "23rd"),
            (31, "31st"),
        ],
    )
    def test_affirmation_date_ordinals(self, day: int, expected: str) -> None:
        assert format_affirmation_date(date(2026, 1, day)) == f"{expected} day of January, 2026"


class TestRenderer:
    """Deterministic template rendering."""

    @pytest.mark.parametrize("document_type", sorted(DOCUMENT_TYPES))
    def test_empty_values_keep_a_placeholder_per_required_field(self, document_type: str) -> None:
        record = DOCUMENT_TYPES[document_type]
        text = render(document_type, {}, TODAY)
        assert text
        for key in record.required_fields:
            assert record.placeholder_for(key) in text

    @pytest.mark.parametrize("document_type", sorted(DOCUMENT_TYPES))
    def test_complete_values_leave_no_required_placeholder(self, document_type: str) -> None:
        record = DOCUMENT_TYPES[document_type]
        text = render(document_type, COMPLETE_VALUES[document_type], TODAY)
        for key in record.required_fields:
            assert record.placeholder_for(key) not in text

    @pytest.mark.parametrize("document_type", sorted(DOCUMENT_TYPES))
    def test_render_is_idempotent(self, document_type: str) -> None:
        values = COMPLETE_VALUES[document_type]
        assert render(document_type, values, TODAY) == render(document_type, values, TODAY)

    def test_police_complaint_substitution(self, police_values: dict[str, str]) -> None:
        text = render("police-complaint", police_values, TODAY)
        assert "Date: 19 October 2026" in text
        assert "I, Asha Rao, resident of 12 MG Road, Pune," in text
        assert "Subject: Complaint regarding incident/crime" in text
        assert "Contact: 9800000000" in text
        # Tokens without a field stay as they are.
        assert "[City, State]" in text

    def test_optional_subject_is_used_when_given(self, police_values: dict[str, str]) -> None:
        police_values["complaintSubject"] = "theft of bicycle"
        text = render("police-complaint", police_values, TODAY)
        assert "Subject: Complaint regarding theft of bicycle" in text

    def test_whitespace_only_value_counts_as_missing(self, police_values: dict[str, str]) -> None:
        police_values["name"] = "   "
        text = render("police-complaint", police_values, TODAY)
        assert "I, [Your Name], resident of" in text

    def test_values_are_trimmed(self, police_values: dict[str, str]) -> None:
        police_values["name"] = "  Asha Rao \n"
        assert "I, Asha Rao, resident" in render("police-complaint", police_values, TODAY)

    def test_user_text_is_not_substituted_again(self, police_values: dict[str, str]) -> None:
        police_values["name"] = "[Your Address]"
        text = render("police-complaint", police_values, TODAY)
        assert "I, [Your Address], resident of 12 MG Road, Pune," in text

    def test_rti_payment_mode_and_category(self) -> None:
        values = dict(COMPLETE_VALUES["rti"], paymentMode="demand-draft", category="bpl")
        text = render("rti", values, TODAY)
        assert "application fee of Rs. 10/- by Demand Draft." in text
        assert "I belong to BPL category. (Proof attached)" in text

    def test_rti_category_defaults_to_apl(self) -> None:
        text = render("rti", COMPLETE_VALUES["rti"], TODAY)
        assert "I belong to APL category." in text
        assert "[mode of payment]" in text

    def test_affidavit_statements_fall_back_to_numbered_skeleton(self) -> None:
        values = dict(COMPLETE_VALUES["affidavit"], affidavitStatements="")
        text = render("affidavit", values, TODAY)
        assert AFFIDAVIT_STATEMENTS_SKELETON in text

    def test_affidavit_dates_and_statements(self) -> None:
        text = render("affidavit", COMPLETE_VALUES["affidavit"], TODAY)
        assert AFFIDAVIT_STATEMENTS_SKELETON not in text
        assert "3. That my name was wrongly recorded as Farhan Alli." in text
        assert text.count("on this 19th day of October, 2026") == 2
        assert "[Father's/Husband's Name]" in text

    def test_render_defaults_to_current_date(self, police_values: dict[str, str]) -> None:
        text = render("police-complaint", police_values)
        assert f"Date: {format_long_date(date.today())}" in text

    def test_unknown_type_raises(self) -> None:
        with pytest.raises(UnknownDocumentTypeError):
            render("nda", {}, TODAY)

    def test_token_pattern_of_unknown_type_raises(self) -> None:
        with pytest.raises(UnknownDocumentTypeError):
            renderer._token_pattern("cheque-bounce")

    def test_is_filled(self) -> None:
        assert is_filled("x")
        assert not is_filled("")
        assert not is_filled(" \t")
        assert not is_filled(None)


class TestExport:

    def test_slugify(self) -> None:
        assert slugify("RTI Application") == "rti-application"
        assert slugify("Café Notice!") == "cafe-notice"
        assert slugify("  ") == "document"

    def test_download_filenames(self) -> None:
        assert download_filename("Police Complaint") == "police-complaint.txt"
        assert download_filename(SIMPLIFIED_TITLE) == "simplified-document.txt"
