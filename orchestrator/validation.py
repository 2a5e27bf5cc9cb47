"""Input validation utilities for the document pipeline.

Validation functions raise custom exceptions on failure; the state machine
turns them into recoverable error states.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from document_factory.registry import get_document_type, get_required_fields
from document_factory.renderer import is_filled
from orchestrator.exceptions import (
    UnsupportedMediaTypeError,
    UploadTooLargeError,
    ValidationError,
)

logger = logging.getLogger("justiceally.orchestrator.validation")

PDF_MEDIA_TYPE = "application/pdf"
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10MB


def missing_required_fields(document_type: str, values: Mapping[str, str]) -> list[str]:
    """Required field keys without a non-blank value, in schema order."""
    return [key for key in get_required_fields(document_type) if not is_filled(values.get(key))]


def validate_form_values(document_type: str, values: Mapping[str, str]) -> None:
    """Ensure every required field of a document type is filled.

    Raises:
        ValidationError: Listing the missing field keys in schema order.
    """
    missing = missing_required_fields(document_type, values)
    if not missing:
        return

    record = get_document_type(document_type)
    labels = [record.field_label(key) if record else key for key in missing]
    logger.info(f"{document_type}: {len(missing)} required fields missing")
    raise ValidationError(
        f"Please fill in all required fields: {', '.join(labels)}",
        missing_fields=missing,
        details={"labels": labels},
    )


def validate_document_text(text: str | None) -> str:
    """Ensure pasted text has content.

    Raises:
        ValidationError: If the text is missing or blank.
    """
    if text is None or not text.strip():
        raise ValidationError("Please enter some text to simplify", field="text")
    return text


def validate_upload(
    content_type: str | None,
    size: int,
    max_size: int = DEFAULT_MAX_UPLOAD_BYTES,
) -> None:
    """Check an upload at the boundary, before any parsing.

    Raises:
        UnsupportedMediaTypeError: If the upload is not ``application/pdf``.
        UploadTooLargeError: If the upload exceeds ``max_size`` bytes.
    """
    media_type = (content_type or "").split(";", 1)[0].strip().lower()
    if media_type != PDF_MEDIA_TYPE:
        raise UnsupportedMediaTypeError(content_type)
    if size > max_size:
        raise UploadTooLargeError(size, max_size)
