"""Prompts sent to the generative-text backend.

Each document type gets a fixed instruction that restates the user's answers
and asks for an expanded, formal version of the document. These are
instructions, not legal documents: the rendered base document is attached as
a reference draft.
"""

from __future__ import annotations

from collections.abc import Mapping

NOT_PROVIDED = "Not provided"

# =============================================================================
# ASSISTANT SYSTEM PROMPT
# =============================================================================

ASSISTANT_SYSTEM_PROMPT = (
    "You are JusticeAlly, an AI legal assistant. Provide helpful, accurate, and concise "
    "legal information in a clean, professional format. "
    "Do not use asterisks, bold formatting, or excessive disclaimers. Present information "
    "in a straightforward manner with proper paragraphing and minimal formatting. "
    "Include only a brief, single-line disclaimer at the end if necessary. Focus on "
    "explaining legal concepts in simple terms and providing direct, actionable information."
)

# =============================================================================
# SIMPLIFICATION
# =============================================================================

SIMPLIFICATION_PROMPT = (
    "Please simplify the following legal document into plain language that's easy to "
    "understand. Break it down into sections with clear explanations of key terms, "
    "rights, and obligations:\n\n"
)

# =============================================================================
# DOCUMENT ENHANCEMENT
# =============================================================================

ENHANCEMENT_CLOSING = (
    "Please create a formal, detailed {document_name} that includes all relevant legal "
    "terminology and follows the proper format. Expand on the details provided to make "
    "it comprehensive and legally sound."
)

REFERENCE_DRAFT = (
    "Use the following draft as the starting structure. Keep every fact it states "
    "and return only the finished document:\n\n{base_document}"
)


def _value(values: Mapping[str, str], key: str) -> str:
    value = values.get(key)
    if value is None or not str(value).strip():
        return NOT_PROVIDED
    return str(value).strip()


def _finish(body: str, document_name: str, base_document: str) -> str:
    parts = [
        body,
        "",
        ENHANCEMENT_CLOSING.format(document_name=document_name),
    ]
    if base_document.strip():
        parts.extend(["", REFERENCE_DRAFT.format(base_document=base_document.strip())])
    return "\n".join(parts)


def police_complaint_instruction(values: Mapping[str, str], base_document: str) -> str:
    body = "\n".join([
        "Generate a detailed police complaint based on the following information:",
        f"Name: {_value(values, 'name')}",
        f"Address: {_value(values, 'address')}",
        f"Police Station: {_value(values, 'policeStation')}",
        f"Incident Date: {_value(values, 'incidentDate')}",
        f"Incident Location: {_value(values, 'incidentLocation')}",
        f"Subject: {_value(values, 'complaintSubject')}",
        f"Details: {_value(values, 'complaintDetails')}",
    ])
    return _finish(body, "police complaint", base_document)


def legal_notice_instruction(values: Mapping[str, str], base_document: str) -> str:
    body = "\n".join([
        "Generate a detailed legal notice based on the following information:",
        f"Sender: {_value(values, 'senderName')} at {_value(values, 'senderAddress')}",
        f"Recipient: {_value(values, 'recipientName')} at {_value(values, 'recipientAddress')}",
        f"Subject: {_value(values, 'subject')}",
        f"Notice Details: {_value(values, 'noticeDetails')}",
        f"Demands: {_value(values, 'demandDetails')}",
        f"Response Deadline: {_value(values, 'responseDeadline')} days",
    ])
    return _finish(body, "legal notice", base_document)


def rti_instruction(values: Mapping[str, str], base_document: str) -> str:
    body = "\n".join([
        "Generate a detailed RTI application based on the following information:",
        f"Applicant: {_value(values, 'applicantName')} at {_value(values, 'applicantAddress')}",
        f"Public Authority: {_value(values, 'publicAuthority')}",
        f"Information Requested: {_value(values, 'requestDetails')}",
        f"Time Period: {_value(values, 'requestPeriod')}",
    ])
    return _finish(body, "RTI application", base_document)


def affidavit_instruction(values: Mapping[str, str], base_document: str) -> str:
    body = "\n".join([
        "Generate a detailed affidavit based on the following information:",
        f"Deponent: {_value(values, 'deponentName')}, aged {_value(values, 'deponentAge')} "
        f"at {_value(values, 'deponentAddress')}",
        f"Purpose: {_value(values, 'affidavitPurpose')}",
        f"Statements: {_value(values, 'affidavitStatements')}",
    ])
    return _finish(body, "affidavit", base_document)


def build_simplification_prompt(text: str) -> str:
    """Instruction asking the backend to explain ``text`` in plain language."""
    return SIMPLIFICATION_PROMPT + text
