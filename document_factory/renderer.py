"""Deterministic template rendering.

``render`` merges form values into a document type's template. Empty fields
keep a legible bracketed placeholder, so the same function serves the live
preview and the base document handed to enhancement.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import date
from functools import lru_cache

from document_factory.registry import Slot, SlotKind, get_document_type
from orchestrator.exceptions import UnknownDocumentTypeError


def is_filled(value: object) -> bool:
    """A value counts as present only if it has non-whitespace content."""
    return value is not None and bool(str(value).strip())


def format_long_date(day: date) -> str:
    """``19 October 2026``."""
    return f"{day.day} {day:%B} {day.year}"


def _ordinal(n: int) -> str:
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def format_affirmation_date(day: date) -> str:
    """``19th day of October, 2026``."""
    return f"{_ordinal(day.day)} day of {day:%B}, {day.year}"


@lru_cache(maxsize=None)
def _token_pattern(document_type: str) -> re.Pattern[str]:
    record = get_document_type(document_type)
    if record is None:
        raise UnknownDocumentTypeError(document_type)
    # Longest first so a token is never shadowed by a shorter one.
    tokens = sorted({slot.token for slot in record.slots}, key=len, reverse=True)
    return re.compile("|".join(re.escape(token) for token in tokens))


def _resolve(slot: Slot, values: Mapping[str, str], today: date) -> str:
    if slot.kind is SlotKind.CURRENT_DATE:
        return format_long_date(today)
    if slot.kind is SlotKind.AFFIRMATION_DATE:
        return format_affirmation_date(today)

    value = values.get(slot.field) if slot.field else None
    if not is_filled(value):
        return slot.placeholder
    text = str(value).strip()
    return slot.formatter(text) if slot.formatter else text


def render(document_type: str, values: Mapping[str, str], today: date | None = None) -> str:
    """Render a document type with the given form values.

    Args:
        document_type: Registry identifier, e.g. ``"police-complaint"``
        values: Form values keyed by field key; missing or blank values
            render as placeholders
        today: Date used for date slots (defaults to the local current date)

    Returns:
        The rendered document text

    Raises:
        UnknownDocumentTypeError: If the document type has no template
    """
    record = get_document_type(document_type)
    if record is None:
        raise UnknownDocumentTypeError(document_type)
    today = today or date.today()
    replacements = {slot.token: _resolve(slot, values, today) for slot in record.slots}
    # Single pass: substituted user text is never scanned for tokens again.
    return _token_pattern(record.id).sub(lambda m: replacements[m.group(0)], record.template)
