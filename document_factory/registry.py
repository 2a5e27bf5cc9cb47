"""Document Types Registry - Defines all supported legal document types.

One ``DocumentType`` record per identifier bundles the form schema, the
legal template, the slot mapping used by the renderer, and the instruction
builder used for enhancement. Adding a document type means adding one record.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum

from document_factory import prompts, templates


class DocumentCategory(Enum):
    """Groups of documents offered by the generator."""
    COMMON = "common"
    COMPLAINTS = "complaints"
    AGREEMENTS = "agreements"


class SlotKind(Enum):
    """Where a slot gets its text from."""
    FIELD = "field"
    CURRENT_DATE = "current_date"          # 19 October 2026
    AFFIRMATION_DATE = "affirmation_date"  # 19th day of October, 2026


@dataclass(frozen=True)
class FormField:
    """A single user-facing input of a document type."""
    key: str
    label: str
    required: bool = True
    multiline: bool = False
    choices: tuple[tuple[str, str], ...] = ()  # (value, label)

    def to_dict(self) -> dict[str, object]:
        return {
            "key": self.key,
            "label": self.label,
            "required": self.required,
            "multiline": self.multiline,
            "choices": [{"value": v, "label": label} for v, label in self.choices],
        }


@dataclass(frozen=True)
class Slot:
    """A literal token of a template and the rule that fills it."""
    token: str
    field: str | None = None
    kind: SlotKind = SlotKind.FIELD
    fallback: str | None = None  # None: keep the token
    formatter: Callable[[str], str] | None = None

    @property
    def placeholder(self) -> str:
        return self.token if self.fallback is None else self.fallback


InstructionBuilder = Callable[[Mapping[str, str], str], str]


@dataclass(frozen=True)
class DocumentType:
    """Everything the pipeline knows about one document type."""
    id: str
    title: str
    description: str
    category: DocumentCategory
    template: str
    fields: tuple[FormField, ...]
    slots: tuple[Slot, ...]
    instruction: InstructionBuilder

    @property
    def required_fields(self) -> list[str]:
        return [f.key for f in self.fields if f.required]

    def placeholder_for(self, key: str) -> str | None:
        """Bracketed text shown in place of ``key`` while it is empty."""
        for slot in self.slots:
            if slot.field == key:
                return slot.placeholder
        return None

    def field_label(self, key: str) -> str:
        for f in self.fields:
            if f.key == key:
                return f.label
        return key

    def to_dict(self, include_template: bool = False) -> dict[str, object]:
        data: dict[str, object] = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category.value,
            "available": True,
            "fields": [f.to_dict() for f in self.fields],
            "required_fields": self.required_fields,
        }
        if include_template:
            data["template"] = self.template
        return data


@dataclass(frozen=True)
class PlannedDocumentType:
    """A document type that is announced but not implemented yet."""
    id: str
    title: str
    description: str
    category: DocumentCategory

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category.value,
            "available": False,
        }


PAYMENT_MODES: dict[str, str] = {
    "postal-order": "Postal Order",
    "court-fee": "Court Fee Stamp",
    "demand-draft": "Demand Draft",
    "cash": "Cash",
}


def _payment_mode(value: str) -> str:
    return PAYMENT_MODES.get(value, value)


def _income_category(value: str) -> str:
    if value.lower() == "bpl":
        return "BPL category. (Proof attached)"
    return "APL category."


# =============================================================================
# DOCUMENT TYPES REGISTRY
# =============================================================================

DOCUMENT_TYPES: dict[str, DocumentType] = {

    "police-complaint": DocumentType(
        id="police-complaint",
        title="Police Complaint",
        description="File a complaint with the police about a crime or incident",
        category=DocumentCategory.COMMON,
        template=templates.POLICE_COMPLAINT_TEMPLATE,
        fields=(
            FormField("name", "Your Full Name"),
            FormField("address", "Your Address"),
            FormField("phone", "Phone Number"),
            FormField("email", "Email Address"),
            FormField("policeStation", "Police Station"),
            FormField("incidentDate", "Date of Incident"),
            FormField("incidentLocation", "Location of Incident"),
            FormField("complaintSubject", "Subject of Complaint", required=False),
            FormField("complaintDetails", "Complaint Details", multiline=True),
        ),
        slots=(
            Slot("[Police Station Name]", "policeStation"),
            Slot("[Current Date]", kind=SlotKind.CURRENT_DATE),
            Slot("[Subject of Complaint]", "complaintSubject", fallback="incident/crime"),
            Slot("[Your Name]", "name"),
            Slot("[Your Address]", "address"),
            Slot("[Date of Incident]", "incidentDate"),
            Slot("[Location of Incident]", "incidentLocation"),
            Slot(
                "[Detailed description of the incident including what happened, "
                "who was involved, and any evidence or witnesses]",
                "complaintDetails",
            ),
            Slot("[Your Phone Number]", "phone"),
            Slot("[Your Email Address]", "email"),
        ),
        instruction=prompts.police_complaint_instruction,
    ),

    "legal-notice": DocumentType(
        id="legal-notice",
        title="Legal Notice",
        description="Send a formal notice before taking legal action",
        category=DocumentCategory.COMMON,
        template=templates.LEGAL_NOTICE_TEMPLATE,
        fields=(
            FormField("senderName", "Sender's Name"),
            FormField("senderAddress", "Sender's Address"),
            FormField("recipientName", "Recipient's Name"),
            FormField("recipientAddress", "Recipient's Address"),
            FormField("subject", "Subject of Notice"),
            FormField("noticeDetails", "Notice Details", multiline=True),
            FormField("demandDetails", "Demand Details", multiline=True),
            FormField("responseDeadline", "Response Deadline (in days)"),
        ),
        slots=(
            Slot("[Current Date]", kind=SlotKind.CURRENT_DATE),
            Slot("[Recipient Name]", "recipientName"),
            Slot("[Recipient Address]", "recipientAddress"),
            Slot("[Subject of the Notice]", "subject"),
            Slot("[Sender Name]", "senderName"),
            Slot("[Sender Address]", "senderAddress"),
            Slot(
                "[Detailed description of the issue, including relevant facts, "
                "dates, and circumstances]",
                "noticeDetails",
            ),
            Slot("[Specific demands or actions required from the recipient]", "demandDetails"),
            Slot("[number of days]", "responseDeadline"),
        ),
        instruction=prompts.legal_notice_instruction,
    ),

    "rti": DocumentType(
        id="rti",
        title="RTI Application",
        description="Request information from a public authority",
        category=DocumentCategory.COMMON,
        template=templates.RTI_APPLICATION_TEMPLATE,
        fields=(
            FormField("applicantName", "Applicant's Name"),
            FormField("applicantAddress", "Applicant's Address"),
            FormField("applicantPhone", "Phone Number"),
            FormField("publicAuthority", "Public Authority"),
            FormField("requestDetails", "Information Requested", multiline=True),
            FormField("requestPeriod", "Time Period for Information"),
            FormField(
                "paymentMode",
                "Mode of Payment",
                required=False,
                choices=tuple(PAYMENT_MODES.items()),
            ),
            FormField(
                "category",
                "Category",
                required=False,
                choices=(("apl", "Above Poverty Line (APL)"), ("bpl", "Below Poverty Line (BPL)")),
            ),
        ),
        slots=(
            Slot("[Current Date]", kind=SlotKind.CURRENT_DATE),
            Slot("[Name of the Public Authority]", "publicAuthority"),
            Slot("[Applicant Name]", "applicantName"),
            Slot("[Applicant Address]", "applicantAddress"),
            Slot("[Clearly specify the information being sought]", "requestDetails"),
            Slot("[Specify the time period for which information is sought]", "requestPeriod"),
            Slot("[mode of payment]", "paymentMode", formatter=_payment_mode),
            Slot(
                "[BPL/APL] category. (If BPL, attach proof)",
                "category",
                fallback="APL category.",
                formatter=_income_category,
            ),
            Slot("[Phone Number]", "applicantPhone"),
        ),
        instruction=prompts.rti_instruction,
    ),

    "affidavit": DocumentType(
        id="affidavit",
        title="Affidavit",
        description="Create a sworn statement for legal purposes",
        category=DocumentCategory.COMMON,
        template=templates.AFFIDAVIT_TEMPLATE,
        fields=(
            FormField("deponentName", "Deponent's Name"),
            FormField("deponentAddress", "Deponent's Address"),
            FormField("deponentAge", "Deponent's Age"),
            FormField("relationName", "Father's/Husband's Name", required=False),
            FormField("affidavitPurpose", "Purpose of Affidavit"),
            FormField("affidavitStatements", "Affidavit Statements", multiline=True),
        ),
        slots=(
            Slot("[Deponent Name]", "deponentName"),
            Slot("[Father's/Husband's Name]", "relationName"),
            Slot("[Age]", "deponentAge"),
            Slot("[Address]", "deponentAddress"),
            Slot("[Purpose of the Affidavit]", "affidavitPurpose"),
            Slot(templates.AFFIDAVIT_STATEMENTS_SKELETON, "affidavitStatements"),
            Slot("[Day] of [Month], [Year]", kind=SlotKind.AFFIRMATION_DATE),
        ),
        instruction=prompts.affidavit_instruction,
    ),
}


PLANNED_DOCUMENT_TYPES: dict[str, PlannedDocumentType] = {
    planned.id: planned
    for planned in (
        PlannedDocumentType(
            "consumer-complaint", "Consumer Complaint",
            "File a complaint against a business for defective products or services",
            DocumentCategory.COMPLAINTS,
        ),
        PlannedDocumentType(
            "workplace-harassment", "Workplace Harassment Complaint",
            "Report harassment or discrimination at your workplace",
            DocumentCategory.COMPLAINTS,
        ),
        PlannedDocumentType(
            "landlord-notice", "Notice to Landlord",
            "Send a formal notice to your landlord regarding repairs or issues",
            DocumentCategory.COMPLAINTS,
        ),
        PlannedDocumentType(
            "cheque-bounce", "Cheque Bounce Notice",
            "Send a legal notice for a dishonored cheque",
            DocumentCategory.COMPLAINTS,
        ),
        PlannedDocumentType(
            "rental-agreement", "Rental Agreement",
            "Create a rental agreement between landlord and tenant",
            DocumentCategory.AGREEMENTS,
        ),
        PlannedDocumentType(
            "employment-contract", "Employment Contract",
            "Draft an employment agreement with standard terms",
            DocumentCategory.AGREEMENTS,
        ),
        PlannedDocumentType(
            "freelance-agreement", "Freelance Agreement",
            "Create a contract for freelance or consulting work",
            DocumentCategory.AGREEMENTS,
        ),
        PlannedDocumentType(
            "nda", "Non-Disclosure Agreement",
            "Draft an NDA to protect confidential information",
            DocumentCategory.AGREEMENTS,
        ),
    )
}

COMING_SOON_NOTICE = "This document type will be available soon."

# Voice input is announced in the product but has no implementation.
CAPABILITIES: dict[str, bool] = {
    "document_generation": True,
    "document_simplification": True,
    "legal_assistant": True,
    "voice_input": False,
}


def get_document_type(document_type: str) -> DocumentType | None:
    """Get the registry record for a document type, or ``None`` if unavailable."""
    return DOCUMENT_TYPES.get(document_type)


def get_template(document_type: str) -> str | None:
    """Get the raw template of a document type, or ``None`` if unavailable."""
    record = DOCUMENT_TYPES.get(document_type)
    return record.template if record else None


def get_required_fields(document_type: str) -> list[str]:
    """Required field keys in schema order; empty for unknown types."""
    record = DOCUMENT_TYPES.get(document_type)
    return record.required_fields if record else []


def get_planned_document_type(document_type: str) -> PlannedDocumentType | None:
    return PLANNED_DOCUMENT_TYPES.get(document_type)


def list_document_types() -> dict[str, list[dict[str, object]]]:
    """List all document types grouped by category.

    Returns:
        Dict mapping category names to summaries of available and planned types
    """
    by_category: dict[str, list[dict[str, object]]] = {c.value: [] for c in DocumentCategory}
    for record in DOCUMENT_TYPES.values():
        by_category[record.category.value].append(record.to_dict())
    for planned in PLANNED_DOCUMENT_TYPES.values():
        by_category[planned.category.value].append(planned.to_dict())
    return by_category
